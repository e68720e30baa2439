import pathlib
import sys
import tempfile
import unittest

# Ensure src/ is on path for direct test execution
ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from tremorsense.config import TremorConfig, config_from_mapping, load_config


class TremorConfigTest(unittest.TestCase):
    def test_defaults(self):
        cfg = TremorConfig()
        self.assertEqual(cfg.buffer_capacity, 300)
        self.assertEqual(cfg.min_samples, 10)
        self.assertEqual(cfg.auto_stop_seconds, 10.0)
        self.assertEqual(cfg.parkinsonian_band, (4.0, 6.0))
        self.assertEqual(cfg.essential_band, (6.0, 12.0))
        self.assertEqual(cfg.test_interval_ms, 100)

    def test_mapping_prefers_tremor_block(self):
        payload = {"tremor": {"auto_stop_seconds": 5, "min_samples": 20}, "buffer_capacity": 64}
        cfg = config_from_mapping(payload)
        self.assertEqual(cfg.auto_stop_seconds, 5.0)
        self.assertEqual(cfg.min_samples, 20)
        self.assertEqual(cfg.buffer_capacity, 64)

    def test_mapping_ignores_unknown_keys(self):
        cfg = config_from_mapping({"gui": {"theme": "dark"}, "test_target_hz": 7})
        self.assertEqual(cfg.test_target_hz, 7.0)

    def test_mapping_defaults_when_empty(self):
        self.assertEqual(config_from_mapping(None), TremorConfig())

    def test_sanitized_clamps_limits(self):
        cfg = TremorConfig(
            buffer_capacity=0,
            min_samples=1,
            auto_stop_seconds=-1,
            test_noise_amplitude=-0.5,
            parkinsonian_band=(6, 4),
        ).sanitized()
        self.assertEqual(cfg.buffer_capacity, 1)
        self.assertEqual(cfg.min_samples, 3)
        self.assertGreater(cfg.auto_stop_seconds, 0.0)
        self.assertEqual(cfg.test_noise_amplitude, 0.0)
        self.assertEqual(cfg.parkinsonian_band, (4.0, 6.0))

    def test_load_config_missing_file_uses_defaults(self):
        self.assertEqual(load_config(None), TremorConfig())
        self.assertEqual(load_config("/nonexistent/tremorsense.yaml"), TremorConfig())

    def test_load_config_reads_yaml(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = pathlib.Path(tmp) / "tremor.yaml"
            path.write_text("tremor:\n  auto_stop_seconds: 3.5\n  essential_band: [6, 10]\n", encoding="utf-8")
            cfg = load_config(path)
        self.assertEqual(cfg.auto_stop_seconds, 3.5)
        self.assertEqual(cfg.essential_band, (6.0, 10.0))

    def test_load_config_rejects_non_mapping(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = pathlib.Path(tmp) / "tremor.yaml"
            path.write_text("- 1\n- 2\n", encoding="utf-8")
            with self.assertRaises(ValueError):
                load_config(path)


if __name__ == "__main__":
    unittest.main()
