import json
import os
import tempfile
from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import SimpleTestCase, override_settings

from calculator.testing import StaticCatalog, make_part


class CheckBuildCommandTests(SimpleTestCase):
    def write_build(self, payload):
        fd, path = tempfile.mkstemp(suffix=".json")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            if isinstance(payload, str):
                f.write(payload)
            else:
                json.dump(payload, f)
        self.addCleanup(os.remove, path)
        return path

    def build_file(self):
        return self.write_build(
            {
                "build": {
                    "components": {
                        "cpu": make_part(
                            "cpu",
                            specs={"socket": "AM4"},
                            benchmarks={"single_thread": 50},
                            price=[("Store A", 150)],
                        ).as_dict(),
                        "gpu": make_part("gpu", benchmarks={"gaming": 100}, price=400).as_dict(),
                        "motherboard": make_part("motherboard", specs={"socket": "AM5"}).as_dict(),
                    }
                }
            }
        )

    def test_report(self):
        out = StringIO()
        call_command("check_build", self.build_file(), stdout=out)
        text = out.getvalue()
        self.assertIn("Total price: 550.00", text)
        self.assertIn("Not compatible", text)
        self.assertIn("CPU bottleneck detected (50%)", text)
        self.assertIn("Cheapest store: Store A (550.00)", text)

    def test_json_output(self):
        out = StringIO()
        call_command("check_build", self.build_file(), "--json", stdout=out)
        data = json.loads(out.getvalue())
        self.assertFalse(data["compatibility"]["isCompatible"])
        self.assertEqual(data["bottleneck"]["bottleneckComponent"], "cpu")
        self.assertNotIn("recommendations", data)

    @override_settings(BUILD_ENGINE={"CATALOG_BACKEND": StaticCatalog})
    def test_budget_adds_recommendations(self):
        out = StringIO()
        call_command(
            "check_build",
            self.build_file(),
            "--json",
            "--budget",
            "900",
            "--purpose",
            "gaming",
            stdout=out,
        )
        data = json.loads(out.getvalue())
        self.assertIn("storage", data["recommendations"])
        # the selected GPU is upgraded for gaming
        self.assertIn("gpu", data["recommendations"])

    def test_unreadable_file(self):
        with self.assertRaises(CommandError):
            call_command("check_build", self.write_build("{broken"))

    def test_bad_build(self):
        path = self.write_build({"components": {"gpu": {"id": "x", "type": "cpu"}}})
        with self.assertRaises(CommandError):
            call_command("check_build", path)
