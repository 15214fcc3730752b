"""Host-side driver for a QualityController."""
import logging
import math
import threading
from typing import Optional, Tuple

from qualityctrl.QualityController import QualityController
from qualityctrl.QualityTier import QualityTier
from qualityctrl.SettingsApplier import TierSettings


class PerformanceMonitor:
    """Feeds frame timings to a controller and runs periodic evaluations.

    The evaluation timer advances with the ``delta_ms`` passed to update(),
    so nothing here reads a wall clock or spawns a thread. All public
    methods hold one reentrant lock, which keeps the controller
    single-writer even when frames are reported from more than one thread.
    Appliers may call back into the monitor from apply().
    """

    def __init__(
        self,
        controller: Optional[QualityController] = None,
        evaluation_interval_ms: float = 2000
    ) -> None:
        """
        Args:
            controller: Controller to drive, a default one is created if omitted
            evaluation_interval_ms: Time between two evaluations while monitoring
        """
        if not math.isfinite(evaluation_interval_ms) or evaluation_interval_ms <= 0:
            raise ValueError(
                f"evaluation_interval_ms must be positive, got {evaluation_interval_ms}"
            )

        self.controller = controller if controller is not None else QualityController()
        self.evaluation_interval_ms = evaluation_interval_ms

        self._lock = threading.RLock()
        self._monitoring = False
        self._since_evaluation_ms = 0.0

    @property
    def is_monitoring(self) -> bool:
        return self._monitoring

    def start_monitoring(self) -> None:
        with self._lock:
            if self._monitoring:
                return

            self._monitoring = True
            self._since_evaluation_ms = 0.0
            logging.debug("Quality monitoring started")

    def stop_monitoring(self) -> None:
        """Stop periodic evaluation. Tier, cooldown and history are kept."""
        with self._lock:
            if not self._monitoring:
                return

            self._monitoring = False
            logging.debug("Quality monitoring stopped")

    def update(self, delta_ms: float) -> Tuple[QualityTier, ...]:
        """
        Advance the host by one frame.

        Args:
            delta_ms: Time since the previous frame in milliseconds

        Returns:
            Tiers committed by evaluations that ran during this update
        """
        if not math.isfinite(delta_ms) or delta_ms <= 0:
            return ()

        with self._lock:
            self.controller.record_frame(delta_ms)
            self.controller.tick(delta_ms)

            if not self._monitoring:
                return ()

            transitions = []
            self._since_evaluation_ms += delta_ms
            while self._since_evaluation_ms >= self.evaluation_interval_ms:
                self._since_evaluation_ms -= self.evaluation_interval_ms
                tier = self.controller.evaluate()
                if tier is not None:
                    transitions.append(tier)

            return tuple(transitions)

    def evaluate(self) -> Optional[QualityTier]:
        with self._lock:
            return self.controller.evaluate()

    def set_tier(self, tier: QualityTier | str) -> None:
        with self._lock:
            self.controller.set_tier(tier)

    def reset(self) -> None:
        with self._lock:
            self.controller.reset()
            self._since_evaluation_ms = 0.0

    def current_fps(self) -> int:
        with self._lock:
            return self.controller.current_fps()

    def quality_level(self) -> QualityTier:
        with self._lock:
            return self.controller.quality_level()

    def current_settings(self) -> TierSettings:
        with self._lock:
            return self.controller.current_settings()
