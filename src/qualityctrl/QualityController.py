"""
Tier state machine that keeps throughput within a target band.

Readings come from a MetricSampler. On every evaluation the mean of the
reading history is compared against the thresholds of a TransitionPolicy
and the tier moves at most one step. Downgrade thresholds sit strictly
below the upgrade threshold, and every committed transition starts a
cooldown during which no further automatic transition is considered.
"""
import copy
import logging
import math
from typing import Dict, Mapping, Optional, Tuple

from qualityctrl.MetricSampler import MetricSampler
from qualityctrl.QualityTier import QualityTier
from qualityctrl.SettingsApplier import (
    CallbackSettingsApplier,
    QualityChangeCallback,
    SettingsApplier,
    TierSettings,
)
from qualityctrl.dataclasses import ControllerState, TransitionPolicy


DEFAULT_TIER_SETTINGS: Dict[QualityTier, TierSettings] = {
    QualityTier.HIGH: {
        "shadows": True,
        "particles": 2000,
        "bloom_strength": 2.0,
        "shadow_map_size": 2048,
        "shadow_camera_size": 50,
        "max_lights": 10,
        "lod_enabled": False,
    },
    QualityTier.MEDIUM: {
        "shadows": True,
        "particles": 1000,
        "bloom_strength": 1.5,
        "shadow_map_size": 1024,
        "shadow_camera_size": 40,
        "max_lights": 6,
        "lod_enabled": True,
    },
    QualityTier.LOW: {
        "shadows": False,
        "particles": 500,
        "bloom_strength": 1.0,
        "shadow_map_size": 512,
        "shadow_camera_size": 30,
        "max_lights": 3,
        "lod_enabled": True,
    },
}


class QualityController:
    def __init__(
        self,
        tier_settings: Optional[Mapping[QualityTier | str, TierSettings]] = None,
        applier: SettingsApplier | QualityChangeCallback | None = None,
        policy: Optional[TransitionPolicy] = None,
        sampler: Optional[MetricSampler] = None
    ) -> None:
        self.policy = policy if policy is not None else TransitionPolicy()
        self.sampler = sampler if sampler is not None else MetricSampler()
        self.tier_settings = self._normalize_tier_settings(
            tier_settings if tier_settings is not None else DEFAULT_TIER_SETTINGS
        )

        self.applier: Optional[SettingsApplier] = None
        self.set_applier(applier)

        self.state = ControllerState(history=self.sampler.history)

    def set_applier(self, applier: SettingsApplier | QualityChangeCallback | None) -> None:
        if applier is None or isinstance(applier, SettingsApplier):
            self.applier = applier
        elif callable(applier):
            self.applier = CallbackSettingsApplier(applier)
        else:
            raise TypeError(f"Expected SettingsApplier or callable, got {type(applier).__name__}")

    @property
    def cooldown_remaining(self) -> float:
        return self.state.cooldown_remaining

    @property
    def history(self) -> Tuple[int, ...]:
        return tuple(self.state.history)

    def record_frame(self, delta_ms: float) -> Optional[int]:
        return self.sampler.record_frame(delta_ms)

    def tick(self, delta_ms: float) -> None:
        """Let ``delta_ms`` milliseconds of cooldown elapse."""
        if not math.isfinite(delta_ms) or delta_ms <= 0:
            return

        self.state.cooldown_remaining = max(self.state.cooldown_remaining - delta_ms, 0.0)

    def evaluate(self) -> Optional[QualityTier]:
        """
        Check the reading history and step one tier up or down if needed.

        Returns:
            The new tier if a transition was committed, otherwise None
        """
        readings = list(self.state.history)
        if len(readings) < self.policy.min_readings:
            return None

        if self.state.cooldown_remaining > 0:
            return None

        # A committed transition needs at least one new reading before the next
        if self.sampler.readings_total == self.state.committed_at_reading:
            return None

        mean = sum(readings) / len(readings)
        target = self._target_tier(mean, readings)
        if target is None:
            return None

        direction = "downgrading" if target < self.state.current_tier else "upgrading"
        logging.info(
            "Quality: %s to %s (mean %.1f FPS over %d readings)",
            direction, target.value, mean, len(readings)
        )
        self._commit(target)

        return target

    def set_tier(self, tier: QualityTier | str) -> None:
        """Switch to ``tier`` regardless of readings; restarts the cooldown."""
        tier = QualityTier.parse(tier)
        if tier is self.state.current_tier:
            return

        logging.info("Quality: manually set to %s", tier.value)
        self._commit(tier)

    def reset(self) -> None:
        self.sampler.reset()
        self.state.current_tier = QualityTier.HIGH
        self.state.cooldown_remaining = 0.0
        self.state.committed_at_reading = None

    def current_fps(self) -> int:
        return self.sampler.current_rate()

    def quality_level(self) -> QualityTier:
        return self.state.current_tier

    def current_settings(self) -> TierSettings:
        return copy.deepcopy(self.tier_settings[self.state.current_tier])

    def _target_tier(self, mean: float, readings: list[int]) -> Optional[QualityTier]:
        policy = self.policy
        tier = self.state.current_tier

        if tier is QualityTier.HIGH and mean < policy.downgrade_high:
            return tier.lower()

        elif tier is QualityTier.MEDIUM and mean < policy.downgrade_medium:
            return tier.lower()

        elif tier is not QualityTier.HIGH and mean > policy.upgrade:
            if all(reading > policy.upgrade_floor for reading in readings):
                return tier.higher()

        return None

    def _commit(self, tier: QualityTier) -> None:
        self.state.current_tier = tier
        self.state.cooldown_remaining = self.policy.cooldown_ms
        self.state.committed_at_reading = self.sampler.readings_total
        self._apply(tier)

    def _apply(self, tier: QualityTier) -> None:
        if self.applier is None:
            logging.debug("No settings applier registered, %s settings not applied", tier.value)
            return

        try:
            self.applier.apply(tier, self.current_settings())
        except Exception as e:
            logging.error("Failed to apply %s quality settings: %s", tier.value, e)

    def _normalize_tier_settings(
        self,
        tier_settings: Mapping[QualityTier | str, TierSettings]
    ) -> Dict[QualityTier, TierSettings]:
        normalized = {
            QualityTier.parse(tier): dict(values)
            for tier, values in tier_settings.items()
        }

        missing = [tier.value for tier in QualityTier if tier not in normalized]
        if missing:
            raise ValueError(f"Missing settings for tiers: {missing}")

        return normalized
