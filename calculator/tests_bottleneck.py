from django.test import SimpleTestCase

from calculator.services.bottleneck import analyze, round_half_up
from calculator.testing import make_part


class BottleneckTests(SimpleTestCase):
    def pair(self, cpu_score, gpu_score):
        return (
            make_part("cpu", benchmarks={"single_thread": cpu_score}),
            make_part("gpu", benchmarks={"gaming": gpu_score}),
        )

    def test_cpu_bound(self):
        result = analyze(*self.pair(50, 100))
        self.assertEqual(result.component, "cpu")
        self.assertEqual(result.percentage, 50)
        self.assertIn("CPU upgrade", result.explanation)

    def test_gpu_bound(self):
        result = analyze(*self.pair(100, 50))
        self.assertEqual(result.component, "gpu")
        self.assertEqual(result.percentage, 50)
        self.assertIn("GPU upgrade", result.explanation)

    def test_balanced(self):
        result = analyze(*self.pair(80, 80))
        self.assertEqual(result.component, "balanced")
        self.assertEqual(result.percentage, 0)

    def test_thresholds_are_exclusive(self):
        self.assertEqual(analyze(*self.pair(75, 100)).component, "balanced")
        self.assertEqual(analyze(*self.pair(125, 100)).component, "balanced")
        self.assertEqual(analyze(*self.pair(74, 100)).component, "cpu")
        self.assertEqual(analyze(*self.pair(126, 100)).percentage, 13)

    def test_gpu_percentage_is_capped(self):
        result = analyze(*self.pair(100, 10))
        self.assertEqual(result.component, "gpu")
        self.assertEqual(result.percentage, 100)

    def test_missing_part(self):
        cpu, gpu = self.pair(50, 100)
        for args in ((cpu, None), (None, gpu), (None, None)):
            result = analyze(*args)
            self.assertEqual(result.percentage, 0)
            self.assertEqual(result.component, "balanced")
            self.assertTrue(result.explanation)

    def test_missing_scores_are_balanced(self):
        cpu = make_part("cpu")
        gpu = make_part("gpu")
        result = analyze(cpu, gpu)
        self.assertEqual(result.component, "balanced")
        self.assertEqual(result.percentage, 0)
        self.assertIn("unavailable", result.explanation)

        result = analyze(cpu, make_part("gpu", benchmarks={"gaming": 90}))
        self.assertEqual(result.component, "balanced")

    def test_as_dict(self):
        self.assertEqual(
            analyze(*self.pair(50, 100)).as_dict()["bottleneckComponent"], "cpu"
        )

    def test_round_half_up(self):
        self.assertEqual(round_half_up(12.5), 13)
        self.assertEqual(round_half_up(0.5), 1)
        self.assertEqual(round_half_up(49.4), 49)
