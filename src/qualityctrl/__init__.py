from qualityctrl.QualityTier import QualityTier
from qualityctrl.MetricSampler import MetricSampler
from qualityctrl.QualityController import QualityController, DEFAULT_TIER_SETTINGS
from qualityctrl.PerformanceMonitor import PerformanceMonitor
from qualityctrl.SettingsApplier import (
    SettingsApplier,
    CallbackSettingsApplier,
    RecordingSettingsApplier,
    AppliedSettings,
)
from qualityctrl.dataclasses import ControllerState, TransitionPolicy
from qualityctrl.exceptions import UnknownTierError, InvalidPolicyError

__all__ = [
  'QualityTier',
  'MetricSampler',
  'QualityController',
  'DEFAULT_TIER_SETTINGS',
  'PerformanceMonitor',
  'SettingsApplier',
  'CallbackSettingsApplier',
  'RecordingSettingsApplier',
  'AppliedSettings',
  'ControllerState',
  'TransitionPolicy',
  'UnknownTierError',
  'InvalidPolicyError',
]
