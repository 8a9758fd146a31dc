import datetime
import os
import tempfile
from io import StringIO
from typing import Optional, Tuple

import pandas as pd
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import SimpleTestCase, TestCase
from django.urls import reverse

from .categories import Category, parse_category
from .models import Benchmark, Component, Price
from .parts import InvalidPartError, Part
from .specs import CaseSpecs, CPUSpecs, _field_kind, parse_specs, specs_as_dict
from .utils.benchmarks import build_cpu_slug, build_gpu_slug, normalize_scores


class CategoryTests(SimpleTestCase):
    def test_parse_category(self):
        self.assertEqual(parse_category("CPU"), Category.CPU)
        self.assertEqual(parse_category("PowerSupply"), Category.PSU)
        self.assertIs(parse_category(Category.RAM), Category.RAM)
        with self.assertRaises(ValueError):
            parse_category("floppy")


class SpecParsingTests(SimpleTestCase):
    def test_wire_keys(self):
        specs = parse_specs(
            "case",
            {"formFactor": ["ATX", "Micro-ATX"], "maxGPULengthMm": "340 mm", "colour": "black"},
        )
        self.assertEqual(specs, CaseSpecs(form_factor=("ATX", "Micro-ATX"), max_gpu_length_mm=340.0))

    def test_casts_and_unreadable_values(self):
        specs = parse_specs("cpu", {"socket": "AM5", "cores": "8", "tdpW": "n/a", "baseClockGHz": "4.2GHz"})
        self.assertEqual(specs.cores, 8)
        self.assertIsNone(specs.tdp_w)
        self.assertEqual(specs.base_clock_ghz, 4.2)

    def test_comma_separated_list(self):
        specs = parse_specs("cooler", {"socketSupport": "AM4, AM5,LGA1700"})
        self.assertEqual(specs.socket_support, ("AM4", "AM5", "LGA1700"))

    def test_field_kinds_follow_annotations(self):
        class Interval:
            pass

        self.assertEqual(_field_kind(Optional[int]), "int")
        self.assertEqual(_field_kind(Optional[bool]), "bool")
        self.assertEqual(_field_kind(Optional[float]), "float")
        self.assertEqual(_field_kind(Tuple[str, ...]), "list")
        self.assertEqual(_field_kind(Optional[str]), "str")
        self.assertEqual(_field_kind(Optional[Interval]), "str")

    def test_as_dict_restores_wire_keys(self):
        specs = parse_specs("gpu", {"lengthMm": 300, "memoryGB": 16, "rayTracingSupport": True})
        self.assertEqual(specs_as_dict(specs), {"lengthMm": 300.0, "memoryGB": 16, "rayTracingSupport": True})


class PartTests(SimpleTestCase):
    doc = {
        "id": "42",
        "type": "cpu",
        "brand": "AMD",
        "model": "7800X3D",
        "specs": {"socket": "AM5"},
        "prices": [
            {"amount": 449, "store": "Store A"},
            {"amount": "399.99", "store": "Store B", "url": "https://b.example/7800x3d"},
        ],
        "benchmarks": [{"score": 88, "category": "gaming"}],
        "wattage": "120",
        "releaseDate": "2023-04-06T00:00:00Z",
        "purposes": ["gaming"],
    }

    def test_from_dict(self):
        part = Part.from_dict(self.doc)
        self.assertEqual(part.category, Category.CPU)
        self.assertIsInstance(part.specs, CPUSpecs)
        self.assertEqual(part.lowest_price(), 399.99)
        self.assertEqual(part.benchmark("gaming"), 88.0)
        self.assertIsNone(part.benchmark("compute"))
        self.assertEqual(part.wattage, 120)
        self.assertEqual(part.release_date, datetime.date(2023, 4, 6))
        self.assertEqual(part.display_name, "AMD 7800X3D")

    def test_as_dict_is_accepted_back(self):
        part = Part.from_dict(self.doc)
        self.assertEqual(Part.from_dict(part.as_dict()), part)

    def test_rejects_bad_documents(self):
        for doc in (
            "cpu",
            {"id": "1", "type": "floppy"},
            {"id": "1", "type": "cpu", "specs": ["AM5"]},
            {"id": "1", "type": "cpu", "prices": [{"store": "A"}]},
            {"id": "1", "type": "cpu", "benchmarks": [{"score": "fast", "category": "gaming"}]},
        ):
            with self.assertRaises(InvalidPartError):
                Part.from_dict(doc)

    def test_rejects_wrong_spec_variant(self):
        with self.assertRaises(InvalidPartError):
            Part(id="1", category="gpu", specs=CPUSpecs(socket="AM5"))

    def test_parts_are_immutable(self):
        part = Part.from_dict(self.doc)
        with self.assertRaises(AttributeError):
            part.wattage = 1


class CatalogDataMixin:
    @classmethod
    def setUpTestData(cls):
        cls.gpu = Component.objects.create(
            category="gpu",
            brand="NVIDIA",
            name="GeForce RTX 4070",
            slug="gpu-rtx-4070",
            specs={"lengthMm": 244},
            wattage=200,
            popularity=80,
            purposes=["gaming"],
        )
        Price.objects.create(component=cls.gpu, amount="599.00", store="Store A")
        Price.objects.create(component=cls.gpu, amount="579.00", store="Store B")
        Benchmark.objects.create(component=cls.gpu, category="gaming", score="71.50")

        cls.cheap = Component.objects.create(category="gpu", name="RX 7600", slug="gpu-rx-7600", popularity=60)
        Price.objects.create(component=cls.cheap, amount="269.00", store="Store A")
        Benchmark.objects.create(component=cls.cheap, category="gaming", score="45")


class ComponentModelTests(CatalogDataMixin, TestCase):
    def test_to_part(self):
        part = self.gpu.to_part()
        self.assertEqual(part.id, str(self.gpu.pk))
        self.assertEqual(part.category, Category.GPU)
        self.assertEqual(part.specs.length_mm, 244.0)
        self.assertEqual(part.lowest_price(), 579.0)
        self.assertEqual(part.benchmark("gaming"), 71.5)
        self.assertEqual(part.purposes, ("gaming",))

    def test_lowest_price(self):
        self.assertEqual(str(self.gpu.lowest_price()), "579.00")
        self.assertIsNone(Component.objects.create(category="cpu", slug="cpu-x").lowest_price())


class ComponentViewTests(CatalogDataMixin, TestCase):
    def test_list(self):
        resp = self.client.get(reverse("component_list", args=["gpu"]))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([c["name"] for c in resp.json()], ["GeForce RTX 4070", "RX 7600"])

    def test_list_filters(self):
        url = reverse("component_list", args=["GPU"])
        self.assertEqual(len(self.client.get(url, {"budget": "300"}).json()), 1)
        self.assertEqual(len(self.client.get(url, {"minBenchmark": "50"}).json()), 1)
        self.assertEqual(len(self.client.get(url, {"purpose": "streaming"}).json()), 1)
        self.assertEqual(len(self.client.get(url, {"limit": "1"}).json()), 1)

    def test_bad_requests(self):
        self.assertEqual(self.client.get(reverse("component_list", args=["floppy"])).status_code, 400)
        url = reverse("component_list", args=["gpu"])
        self.assertEqual(self.client.get(url, {"limit": "many"}).status_code, 400)

    def test_detail(self):
        resp = self.client.get(reverse("component_detail", args=["gpu", self.gpu.pk]))
        self.assertEqual(resp.json()["specs"], {"lengthMm": 244.0})
        missing = reverse("component_detail", args=["cpu", self.gpu.pk])
        self.assertEqual(self.client.get(missing).status_code, 404)


def write_csv(testcase, text):
    fd, path = tempfile.mkstemp(suffix=".csv")
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write(text)
    testcase.addCleanup(os.remove, path)
    return path


class ImportHardwareTests(TestCase):
    CSV = (
        "Category,Brand,Name,Price,Store,TDP,Purposes,spec_socket,spec_formFactor,bench_single_thread\n"
        "CPU,AMD,Ryzen 5 7600,$229.99,Store A,65,gaming|productivity,AM5,,61.2\n"
        "Case,Fractal,North,139,Store B,,,,ATX|Micro-ATX,\n"
        "Floppy,Sony,Drive,10,Store A,,,,,\n"
        "RAM,Corsair,Vengeance,,Store A,,,,,\n"
    )

    def test_import(self):
        out = StringIO()
        call_command("import_hardware", csv=write_csv(self, self.CSV), verbosity=0, stdout=out)
        self.assertIn("Processed 3 rows: 3 created, 0 updated, 1 skipped", out.getvalue())

        cpu = Component.objects.get(category="cpu")
        self.assertEqual(cpu.slug, "cpu-ryzen-5-7600")
        self.assertEqual(cpu.wattage, 65)
        self.assertEqual(cpu.purposes, ["gaming", "productivity"])
        self.assertEqual(cpu.specs, {"socket": "AM5"})
        self.assertEqual(float(cpu.prices.get().amount), 229.99)
        self.assertEqual(float(cpu.benchmarks.get(category="single_thread").score), 61.2)

        case = Component.objects.get(category="case")
        self.assertEqual(case.to_part().specs.form_factor, ("ATX", "Micro-ATX"))

    def test_reimport_updates(self):
        path = write_csv(self, self.CSV)
        call_command("import_hardware", csv=path, verbosity=0, stdout=StringIO())
        out = StringIO()
        call_command("import_hardware", csv=path, verbosity=0, stdout=out)
        self.assertIn("0 created, 3 updated", out.getvalue())
        self.assertEqual(Component.objects.count(), 3)
        self.assertEqual(Price.objects.count(), 2)

    def test_require_price_and_dry_run(self):
        out = StringIO()
        call_command(
            "import_hardware",
            csv=write_csv(self, self.CSV),
            require_price=True,
            dry_run=True,
            verbosity=0,
            stdout=out,
        )
        self.assertIn("Processed 2 rows", out.getvalue())
        self.assertEqual(Component.objects.count(), 0)

    def test_benchmark_table(self):
        gpu = Component.objects.create(category="gpu", name="GeForce RTX 4070", slug="gpu-4070")
        path = write_csv(
            self,
            "Model,Benchmark\nNVIDIA GeForce RTX 4090,40000\nGeForce RTX 4070,20000\nRX 7600,10000\n",
        )
        out = StringIO()
        call_command(
            "import_hardware", csv=path, benchmark_kind="gaming", verbosity=0, stdout=out
        )
        self.assertIn("Matched 1 gpu components", out.getvalue())
        self.assertEqual(float(gpu.benchmarks.get(category="gaming").score), 50.0)

    def test_missing_file(self):
        with self.assertRaises(CommandError):
            call_command("import_hardware", csv="/nonexistent/parts.csv", verbosity=0)


class BenchmarkUtilsTests(SimpleTestCase):
    def test_normalize_scores(self):
        scores = normalize_scores(pd.Series(["200", "100", "n/a", "-5"]))
        self.assertEqual(scores.iloc[0], 100.0)
        self.assertEqual(scores.iloc[1], 50.0)
        self.assertTrue(pd.isna(scores.iloc[2]))
        self.assertEqual(scores.iloc[3], 0.0)

    def test_normalize_scores_with_ceiling(self):
        scores = normalize_scores(pd.Series([50, 150]), ceiling=100)
        self.assertEqual(list(scores), [50.0, 100.0])

    def test_slugs(self):
        self.assertEqual(build_gpu_slug("NVIDIA GeForce RTX 4070 Ti SUPER"), "rtx-4070-ti-super")
        self.assertEqual(build_cpu_slug("AMD Ryzen 7 7800X3D"), "7800x3d")
        self.assertEqual(build_cpu_slug("Intel Core i5-13600K"), "13600k")
