"""
Runs a synthetic workload whose per-frame cost scales with the particle
count of the active tier, and lets the monitor pick the tier.

Usage: python -m qualityctrl.examples.simulate --duration 30 --cost 0.02
"""
import argparse
import logging

import pygame

from qualityctrl import QualityTier
from qualityctrl.Init import Init
from qualityctrl.Settings import Settings

parser = argparse.ArgumentParser(description="Adaptive quality simulation")
parser.add_argument(
    "--log",
    default="INFO",
    help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Default is INFO."
)
parser.add_argument(
    "--settings",
    default=None,
    help="Optional TOML file overriding the default tiers and thresholds."
)
parser.add_argument(
    "--duration",
    type=float,
    default=30.0,
    help="Seconds to run. Default is 30."
)
parser.add_argument(
    "--cost",
    type=float,
    default=0.02,
    help="Milliseconds of work per particle each frame. Default is 0.02."
)
parser.add_argument(
    "--fps-cap",
    type=int,
    default=60,
    help="Frame rate cap of the host loop. Default is 60."
)

args = parser.parse_args()

level = getattr(logging, args.log.upper(), None)
if not isinstance(level, int):
    raise ValueError(f"Invalid log level: {args.log}")

logging.basicConfig(
    level=level,
    format="%(asctime)s - %(levelname)s - %(message)s"
)

workload = {"particles": 0}


def on_quality_change(tier: QualityTier, settings: dict) -> None:
    workload["particles"] = settings.get("particles", 0)
    logging.info("Applied %s settings: %s", tier.value, settings)


settings = Settings(args.settings) if args.settings else Init.settings()
monitor = Init.monitor(settings, on_quality_change)
workload["particles"] = monitor.current_settings().get("particles", 0)

pygame.init()
clock = pygame.time.Clock()
monitor.start_monitoring()

elapsed_ms = 0.0
try:
    while elapsed_ms < args.duration * 1000:
        pygame.time.delay(int(workload["particles"] * args.cost))

        delta_ms = clock.tick(args.fps_cap)
        elapsed_ms += delta_ms
        monitor.update(delta_ms)

except KeyboardInterrupt:
    pass

finally:
    monitor.stop_monitoring()
    pygame.quit()

print(f"Final tier: {monitor.quality_level().value} at {monitor.current_fps()} FPS")
