import unittest
import tempfile
from pathlib import Path
from unittest.mock import Mock, patch

from qualityctrl.Init import Init
from qualityctrl.PerformanceMonitor import PerformanceMonitor
from qualityctrl.QualityTier import QualityTier
from qualityctrl.Settings import Settings


class TestInit(unittest.TestCase):
    def setUp(self):
        tmp = tempfile.NamedTemporaryFile(delete=False, suffix=".toml")
        tmp.close()
        self.path = tmp.name
        Path(self.path).unlink()

    def tearDown(self):
        Path(self.path).unlink(missing_ok=True)

    @patch('qualityctrl.Init.Settings')
    def test_settings_creates_and_saves_settings(self, mock_settings_class):
        mock_settings_instance = Mock()
        mock_settings_class.return_value = mock_settings_instance

        result = Init.settings("test_path.toml")

        mock_settings_class.assert_called_once_with("test_path.toml")
        mock_settings_instance.save.assert_called_once()
        self.assertEqual(result, mock_settings_instance)

    @patch('qualityctrl.Init.Settings')
    def test_settings_with_default_path(self, mock_settings_class):
        Init.settings()

        mock_settings_class.assert_called_once_with("quality.toml")

    def test_policy_from_settings(self):
        settings = Settings(self.path)
        settings.settings["policy"]["cooldown_ms"] = 2500

        policy = Init.policy(settings)

        self.assertEqual(policy.cooldown_ms, 2500)
        self.assertEqual(policy.downgrade_high, 50)

    def test_sampler_from_settings(self):
        settings = Settings(self.path)
        settings.set("sampler", {"window_ms": 500, "capacity": 4})

        sampler = Init.sampler(settings)

        self.assertEqual(sampler.window_ms, 500)
        self.assertEqual(sampler.capacity, 4)
        self.assertEqual(sampler.default_rate, 60)

    def test_controller_uses_configured_tiers(self):
        settings = Settings(self.path)
        settings.settings["tiers"]["medium"]["particles"] = 750
        callback = Mock()

        controller = Init.controller(settings, callback)
        controller.set_tier("medium")

        self.assertEqual(controller.current_settings()["particles"], 750)
        callback.assert_called_once()
        self.assertIs(callback.call_args[0][0], QualityTier.MEDIUM)

    def test_monitor_from_settings(self):
        settings = Settings(self.path)
        settings.set("monitor", {"evaluation_interval_ms": 1000})

        monitor = Init.monitor(settings)

        self.assertIsInstance(monitor, PerformanceMonitor)
        self.assertEqual(monitor.evaluation_interval_ms, 1000)
        self.assertIsNone(monitor.controller.applier)


if __name__ == "__main__":
    unittest.main()
