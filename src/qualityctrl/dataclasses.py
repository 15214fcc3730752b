"""Core dataclasses for qualityctrl."""
from dataclasses import dataclass
from collections import deque
from typing import Optional

from qualityctrl.QualityTier import QualityTier
from qualityctrl.exceptions import InvalidPolicyError


@dataclass(frozen=True)
class TransitionPolicy:
    """Thresholds the controller compares the mean reading against.

    Downgrades fire when the mean drops below a tier's downgrade threshold.
    Upgrades need the mean above ``upgrade`` and every reading in the
    history above ``upgrade_floor``.
    """
    downgrade_high: float = 50
    downgrade_medium: float = 35
    upgrade: float = 58
    upgrade_floor: float = 55
    min_readings: int = 3
    cooldown_ms: float = 5000

    def __post_init__(self) -> None:
        if self.downgrade_medium > self.downgrade_high:
            raise InvalidPolicyError(
                f"downgrade_medium ({self.downgrade_medium}) must not exceed "
                f"downgrade_high ({self.downgrade_high})"
            )

        if self.downgrade_high >= self.upgrade:
            raise InvalidPolicyError(
                f"downgrade_high ({self.downgrade_high}) must be below "
                f"upgrade ({self.upgrade})"
            )

        if self.min_readings < 1:
            raise InvalidPolicyError("min_readings must be at least 1")

        if self.cooldown_ms < 0:
            raise InvalidPolicyError("cooldown_ms must not be negative")


@dataclass
class ControllerState:
    """Mutable controller state, owned by a single QualityController."""
    history: deque[int]
    current_tier: QualityTier = QualityTier.HIGH
    cooldown_remaining: float = 0.0
    # Sampler reading count at the last committed transition
    committed_at_reading: Optional[int] = None
