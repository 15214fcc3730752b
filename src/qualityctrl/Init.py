from qualityctrl.MetricSampler import MetricSampler
from qualityctrl.PerformanceMonitor import PerformanceMonitor
from qualityctrl.QualityController import QualityController
from qualityctrl.SettingsApplier import QualityChangeCallback, SettingsApplier
from qualityctrl.Settings import Settings
from qualityctrl.dataclasses import TransitionPolicy


class Init:
    """
    Factory to help with initialization of core components
    """

    @classmethod
    def settings(cls, path: str = "quality.toml") -> Settings:
        """
        Initialize settings from a file. Create settings file in case it does
        not exist.
        """
        settings = Settings(path)
        settings.save()

        return settings

    @classmethod
    def policy(cls, settings: Settings) -> TransitionPolicy:
        return TransitionPolicy(**settings.section("policy"))

    @classmethod
    def sampler(cls, settings: Settings) -> MetricSampler:
        sampler = settings.section("sampler")
        return MetricSampler(
            window_ms=sampler.get("window_ms", 1000),
            capacity=sampler.get("capacity", 10),
            default_rate=sampler.get("default_rate", 60),
        )

    @classmethod
    def controller(
        cls,
        settings: Settings,
        applier: SettingsApplier | QualityChangeCallback | None = None
    ) -> QualityController:
        return QualityController(
            tier_settings=settings.get("tiers"),
            applier=applier,
            policy=cls.policy(settings),
            sampler=cls.sampler(settings),
        )

    @classmethod
    def monitor(
        cls,
        settings: Settings,
        applier: SettingsApplier | QualityChangeCallback | None = None
    ) -> PerformanceMonitor:
        monitor = settings.section("monitor")
        return PerformanceMonitor(
            controller=cls.controller(settings, applier),
            evaluation_interval_ms=monitor.get("evaluation_interval_ms", 2000),
        )
