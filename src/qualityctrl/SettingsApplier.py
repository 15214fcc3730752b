"""Hand-off point between the controller and whatever applies tier settings."""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from qualityctrl.QualityTier import QualityTier


TierSettings = Dict[str, Any]
QualityChangeCallback = Callable[[QualityTier, TierSettings], None]


class SettingsApplier(ABC):
    """Applies the settings of a newly committed tier to the host.

    Called synchronously, at most once per committed transition, with the
    full settings mapping of the new tier. Implementations decide what the
    settings mean, be it render parameters or batch sizes.
    """

    @abstractmethod
    def apply(self, tier: QualityTier, settings: TierSettings) -> None:
        pass


class CallbackSettingsApplier(SettingsApplier):
    def __init__(self, callback: QualityChangeCallback) -> None:
        self.callback = callback

    def apply(self, tier: QualityTier, settings: TierSettings) -> None:
        self.callback(tier, settings)


@dataclass
class AppliedSettings:
    tier: QualityTier
    settings: TierSettings


class RecordingSettingsApplier(SettingsApplier):
    """Keeps every call in ``calls``, for tests and dry runs."""

    def __init__(self) -> None:
        self.calls: List[AppliedSettings] = []

    def apply(self, tier: QualityTier, settings: TierSettings) -> None:
        self.calls.append(AppliedSettings(tier, dict(settings)))

    @property
    def last(self) -> AppliedSettings | None:
        return self.calls[-1] if self.calls else None
