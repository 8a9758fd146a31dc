from django.test import SimpleTestCase

from calculator.services.configuration import Configuration
from calculator.services.performance import PerformanceScores, ram_score, score, storage_score
from calculator.testing import make_part


class PerformanceScoreTests(SimpleTestCase):
    def test_empty_configuration_scores_zero(self):
        self.assertEqual(
            score(Configuration()).as_dict(),
            {"gaming": 0, "productivity": 0, "streaming": 0, "overall": 0},
        )

    def test_gpu_and_cpu_weights(self):
        config = Configuration.from_parts(
            {
                "gpu": make_part("gpu", benchmarks={"gaming": 50, "compute": 40}),
                "cpu": make_part("cpu", benchmarks={"single_thread": 60, "multi_thread": 80}),
            }
        )
        result = score(config)
        # gaming 0.6*50 + 0.3*60; productivity 0.5*80 + 0.1*40; streaming 0.4*80 + 0.3*40
        self.assertEqual(result.gaming, 48)
        self.assertEqual(result.productivity, 44)
        self.assertEqual(result.streaming, 44)
        self.assertEqual(result.overall, 45)

    def test_ram_and_storage_signals(self):
        ram = make_part("ram", specs={"capacityGB": 32, "speedMHz": 3600})
        storage = make_part("storage", specs={"type": "NVME", "readSpeedMBps": 7000})
        self.assertEqual(ram_score(ram), 100)
        self.assertEqual(storage_score(storage), 100)

        result = score(Configuration.from_parts({"ram": ram, "storage": storage}))
        self.assertEqual(result, PerformanceScores(gaming=10, productivity=50, streaming=30, overall=30))

    def test_missing_ram_attributes_count_as_zero(self):
        ram = make_part("ram", specs={"capacityGB": 16})
        self.assertEqual(ram_score(ram), 25)
        self.assertEqual(score(Configuration.from_parts({"ram": ram})).productivity, 5)

    def test_scores_are_clamped(self):
        config = Configuration.from_parts(
            {
                "gpu": make_part("gpu", benchmarks={"gaming": 100, "compute": 100}),
                "cpu": make_part("cpu", benchmarks={"single_thread": 100, "multi_thread": 100}),
                "ram": make_part("ram", specs={"capacityGB": 128, "speedMHz": 7200}),
                "storage": make_part("storage", specs={"readSpeedMBps": 12000}),
            }
        )
        result = score(config)
        # gaming 90 + 0.1*300 = 120 before the clamp
        self.assertEqual(result.gaming, 100)
        self.assertEqual(result.productivity, 100)
        self.assertEqual(result.streaming, 100)
        self.assertEqual(result.overall, 100)

    def test_scores_stay_in_range(self):
        config = Configuration.from_parts(
            {"gpu": make_part("gpu", benchmarks={"gaming": 100}), "cpu": make_part("cpu", benchmarks={"single_thread": 100})}
        )
        result = score(config)
        self.assertEqual(result.gaming, 90)
        for value in result.as_dict().values():
            self.assertGreaterEqual(value, 0)
            self.assertLessEqual(value, 100)

    def test_score_is_repeatable(self):
        config = Configuration.from_parts(
            {"cpu": make_part("cpu", benchmarks={"multi_thread": 73})}
        )
        self.assertEqual(score(config), score(config))
