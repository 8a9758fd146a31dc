from unittest import mock

from django.test import SimpleTestCase, override_settings

from calculator.services.bottleneck import BottleneckResult
from calculator.services.compatibility import check
from calculator.services.configuration import Configuration
from calculator.testing import make_part


def build(**parts):
    return Configuration.from_parts(parts)


class CompatibilityRuleTests(SimpleTestCase):
    def setUp(self):
        self.cpu = make_part(
            "cpu",
            specs={"socket": "AM5"},
            benchmarks={"single_thread": 80},
            wattage=120,
        )
        self.mobo = make_part(
            "motherboard",
            specs={
                "socket": "AM5",
                "memoryType": "DDR5",
                "maxMemoryGB": 128,
                "formFactor": "ATX",
            },
        )
        self.ram = make_part(
            "ram", specs={"type": "DDR5", "capacityGB": 32, "speedMHz": 6000}
        )
        self.gpu = make_part(
            "gpu", specs={"lengthMm": 300}, benchmarks={"gaming": 80}, wattage=250
        )
        self.case = make_part(
            "case", specs={"formFactor": ["ATX", "Micro-ATX"], "maxGPULengthMm": 340}
        )
        self.cooler = make_part("cooler", specs={"socketSupport": ["AM4", "AM5"]})
        self.psu = make_part("psu", specs={"wattage": 850})

    def test_complete_matching_build_is_compatible(self):
        report = check(
            build(
                cpu=self.cpu,
                motherboard=self.mobo,
                ram=self.ram,
                gpu=self.gpu,
                case=self.case,
                cooler=self.cooler,
                psu=self.psu,
            )
        )
        self.assertTrue(report.is_compatible)
        self.assertEqual(report.issues, [])
        self.assertEqual(report.warnings, [])
        self.assertEqual(report.suggestions, [])

    def test_empty_build(self):
        report = check(Configuration())
        self.assertEqual(
            report.as_dict(),
            {"isCompatible": True, "issues": [], "warnings": [], "suggestions": []},
        )

    def test_socket_mismatch_is_an_issue(self):
        cpu = make_part("cpu", specs={"socket": "LGA1700"})
        report = check(build(cpu=cpu, motherboard=self.mobo))
        self.assertFalse(report.is_compatible)
        self.assertEqual(len(report.issues), 1)
        self.assertIn("LGA1700", report.issues[0])
        self.assertIn("AM5", report.issues[0])

    def test_socket_rule_needs_both_parts(self):
        cpu = make_part("cpu", specs={"socket": "LGA1700"})
        self.assertTrue(check(build(cpu=cpu)).is_compatible)
        self.assertTrue(check(build(motherboard=self.mobo)).is_compatible)

    def test_missing_attribute_skips_rule(self):
        cpu = make_part("cpu", specs={})
        report = check(build(cpu=cpu, motherboard=self.mobo, cooler=self.cooler))
        self.assertEqual(report.issues, [])

    def test_ram_type_mismatch(self):
        ram = make_part("ram", specs={"type": "DDR4", "capacityGB": 16})
        report = check(build(ram=ram, motherboard=self.mobo))
        self.assertEqual(len(report.issues), 1)
        self.assertIn("DDR4", report.issues[0])

    def test_ram_over_capacity_is_a_warning(self):
        ram = make_part("ram", specs={"type": "DDR5", "capacityGB": 192})
        report = check(build(ram=ram, motherboard=self.mobo))
        self.assertTrue(report.is_compatible)
        self.assertEqual(len(report.warnings), 1)
        self.assertIn("192GB", report.warnings[0])

    def test_psu_headroom_boundary(self):
        psu = make_part("psu", specs={"wattage": 1000})
        over = make_part("gpu", wattage=801)
        at_limit = make_part("gpu", wattage=800)

        report = check(build(psu=psu, gpu=over))
        self.assertEqual(len(report.warnings), 1)
        self.assertIn("1000W", report.warnings[0])

        report = check(build(psu=psu, gpu=at_limit))
        self.assertEqual(report.warnings, [])

    @override_settings(BUILD_ENGINE={"PSU_HEADROOM_RATIO": 0.5})
    def test_psu_headroom_ratio_is_configurable(self):
        psu = make_part("psu", specs={"wattage": 1000})
        report = check(build(psu=psu, gpu=make_part("gpu", wattage=600)))
        self.assertEqual(len(report.warnings), 1)

    def test_case_form_factor(self):
        mobo = make_part("motherboard", specs={"formFactor": "E-ATX"})
        report = check(build(motherboard=mobo, case=self.case))
        self.assertEqual(len(report.issues), 1)
        self.assertIn("E-ATX", report.issues[0])
        self.assertIn("ATX, Micro-ATX", report.issues[0])

    def test_gpu_clearance(self):
        long_gpu = make_part("gpu", specs={"lengthMm": 360})
        report = check(build(gpu=long_gpu, case=self.case))
        self.assertEqual(len(report.issues), 1)
        self.assertIn("360mm", report.issues[0])

    def test_gpu_without_length_fits(self):
        gpu = make_part("gpu", specs={})
        self.assertTrue(check(build(gpu=gpu, case=self.case)).is_compatible)

    def test_cooler_socket(self):
        cooler = make_part("cooler", specs={"socketSupport": ["LGA1700"]})
        report = check(build(cpu=self.cpu, cooler=cooler))
        self.assertEqual(len(report.issues), 1)
        self.assertIn("LGA1700", report.issues[0])

    def test_hdd_only_storage_gets_suggestion(self):
        hdd = make_part("storage", specs={"type": "HDD", "capacityGB": 2000})
        report = check(build(storage=hdd))
        self.assertTrue(report.is_compatible)
        self.assertEqual(len(report.suggestions), 1)
        self.assertIn("SSD", report.suggestions[0])

        ssd = make_part("storage", specs={"type": "NVME"})
        self.assertEqual(check(build(storage=ssd)).suggestions, [])

    def test_bottleneck_over_threshold_is_a_warning(self):
        cpu = make_part("cpu", benchmarks={"single_thread": 50})
        gpu = make_part("gpu", benchmarks={"gaming": 100})
        report = check(build(cpu=cpu, gpu=gpu))
        self.assertTrue(report.is_compatible)
        self.assertEqual(len(report.warnings), 1)
        self.assertIn("CPU bottleneck detected (50%)", report.warnings[0])

    def test_gpu_bottleneck_is_labelled_gpu(self):
        cpu = make_part("cpu", benchmarks={"single_thread": 100})
        gpu = make_part("gpu", benchmarks={"gaming": 50})
        (warning,) = check(build(cpu=cpu, gpu=gpu)).warnings
        self.assertTrue(warning.startswith("GPU bottleneck detected (50%)"))

    def test_balanced_result_never_warns(self):
        balanced = BottleneckResult(40, "balanced", "Well matched.")
        with mock.patch("calculator.services.compatibility.analyze", return_value=balanced):
            report = check(build(cpu=self.cpu, gpu=self.gpu))
        self.assertEqual(report.warnings, [])

    def test_small_bottleneck_is_ignored(self):
        # ratio 1.3 -> 15% would warn, ratio 1.2 is balanced
        cpu = make_part("cpu", benchmarks={"single_thread": 60})
        gpu = make_part("gpu", benchmarks={"gaming": 50})
        self.assertEqual(check(build(cpu=cpu, gpu=gpu)).warnings, [])

    def test_issues_drive_is_compatible(self):
        cases = [
            build(cpu=self.cpu, motherboard=self.mobo),
            build(cpu=make_part("cpu", specs={"socket": "AM4"}), motherboard=self.mobo),
            build(ram=make_part("ram", specs={"type": "DDR5", "capacityGB": 256}), motherboard=self.mobo),
        ]
        for config in cases:
            report = check(config)
            self.assertEqual(report.is_compatible, not report.issues)

    def test_check_is_repeatable(self):
        config = build(cpu=make_part("cpu", specs={"socket": "AM4"}), motherboard=self.mobo)
        self.assertEqual(check(config).as_dict(), check(config).as_dict())
