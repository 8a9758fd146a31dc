import threading
import time

from django.test import SimpleTestCase, override_settings

from hardware.categories import Category

from calculator.services.catalog import CatalogError, CatalogService
from calculator.services.configuration import Configuration
from calculator.services.recommendations import recommend
from calculator.testing import make_part


class RecordingCatalog(CatalogService):
    """Returns ``per_category`` fake parts for every lookup and records calls.

    Categories in ``failing`` raise CatalogError, those in ``errors`` raise
    the mapped exception and those in ``hanging`` block until ``release``.
    """

    def __init__(self, per_category=5, failing=(), errors=None, hanging=()):
        self.per_category = per_category
        self.failing = set(failing)
        self.errors = dict(errors or {})
        self.hanging = set(hanging)
        self.release = threading.Event()
        self.calls = []
        self._lock = threading.Lock()

    def get_components(self, category, filters=None):
        with self._lock:
            self.calls.append((category, dict(filters or {})))
        if category in self.hanging:
            self.release.wait(10)
        if category in self.failing:
            raise CatalogError("catalog unreachable")
        if category in self.errors:
            raise self.errors[category]
        return [
            make_part(category.value, id=f"{category.value}-{i}", price=10 * i)
            for i in range(1, self.per_category + 1)
        ]


def full_build(skip=()):
    parts = {}
    for category in Category:
        if category in skip:
            continue
        benchmarks = {"gaming": 60} if category == Category.GPU else None
        parts[category] = make_part(category.value, benchmarks=benchmarks)
    return Configuration.from_parts(parts)


class RecommendationTests(SimpleTestCase):
    def test_only_missing_storage(self):
        catalog = RecordingCatalog()
        config = full_build(skip={Category.STORAGE})
        result = recommend(config, 1000, ["productivity"], catalog=catalog)

        self.assertEqual(list(result.recommendations), [Category.STORAGE])
        self.assertLessEqual(len(result.recommendations[Category.STORAGE]), 3)
        self.assertTrue(result.reasoning[Category.STORAGE])
        self.assertEqual(
            catalog.calls,
            [(Category.STORAGE, {"budget": 1000.0, "purpose": "productivity"})],
        )

    def test_budget_split_across_missing(self):
        catalog = RecordingCatalog()
        config = full_build(skip={Category.CPU, Category.GPU, Category.RAM, Category.CASE})
        result = recommend(config, 1200, ["gaming", "streaming"], catalog=catalog)

        self.assertEqual(
            set(result.recommendations),
            {Category.CPU, Category.GPU, Category.RAM, Category.CASE},
        )
        for category, filters in catalog.calls:
            self.assertEqual(filters["budget"], 300.0)
            self.assertEqual(filters["purpose"], "gaming,streaming")
        for parts in result.recommendations.values():
            self.assertEqual([p.id.split("-")[1] for p in parts], ["1", "2", "3"])

    def test_failed_lookup_is_omitted(self):
        catalog = RecordingCatalog(failing={Category.RAM})
        config = full_build(skip={Category.RAM, Category.CASE})
        with self.assertLogs("calculator.services.recommendations", level="WARNING"):
            result = recommend(config, 500, [], catalog=catalog)
        self.assertNotIn(Category.RAM, result.recommendations)
        self.assertNotIn(Category.RAM, result.reasoning)
        self.assertIn(Category.CASE, result.recommendations)

    def test_unexpected_error_only_drops_its_category(self):
        catalog = RecordingCatalog(errors={Category.RAM: ConnectionError("socket reset")})
        config = Configuration.from_parts({"cpu": make_part("cpu")})
        with self.assertLogs("calculator.services.recommendations", level="ERROR"):
            result = recommend(config, 500, [], catalog=catalog)
        self.assertNotIn(Category.RAM, result.recommendations)
        self.assertIn(Category.GPU, result.recommendations)
        self.assertEqual(len(result.recommendations), len(Category) - 2)

    @override_settings(BUILD_ENGINE={"CATALOG_TIMEOUT": 0.5})
    def test_hung_lookups_share_one_deadline(self):
        hung = {Category.CPU, Category.GPU, Category.MOTHERBOARD, Category.RAM}
        catalog = RecordingCatalog(hanging=hung)
        self.addCleanup(catalog.release.set)

        started = time.monotonic()
        with self.assertLogs("calculator.services.recommendations", level="WARNING") as logs:
            result = recommend(Configuration(), 1200, [], catalog=catalog)
        elapsed = time.monotonic() - started

        self.assertLess(elapsed, 3)
        self.assertEqual(set(result.recommendations), set(Category) - hung)
        self.assertIn(Category.STORAGE, result.reasoning)
        self.assertEqual(len(logs.records), len(hung))

    def test_empty_lookup_keeps_reasoning(self):
        catalog = RecordingCatalog(per_category=0)
        result = recommend(full_build(skip={Category.STORAGE}), 100, [], catalog=catalog)
        self.assertEqual(result.recommendations, {Category.STORAGE: []})
        self.assertTrue(result.reasoning[Category.STORAGE])

    def test_empty_gaming_upgrade_is_dropped(self):
        catalog = RecordingCatalog(per_category=0)
        result = recommend(full_build(), 2000, ["gaming"], catalog=catalog)
        self.assertEqual(result.as_dict(), {"recommendations": {}, "reasoning": {}})

    def test_gaming_gpu_upgrade(self):
        catalog = RecordingCatalog()
        config = full_build()
        result = recommend(config, 2000, ["gaming"], catalog=catalog)

        self.assertEqual(list(result.recommendations), [Category.GPU])
        self.assertEqual(len(result.recommendations[Category.GPU]), 3)
        self.assertIn("GPU", result.reasoning[Category.GPU])
        self.assertEqual(
            catalog.calls,
            [
                (
                    Category.GPU,
                    {"minBenchmark": 60, "benchmark": "gaming", "budget": 800.0},
                )
            ],
        )

    def test_gaming_upgrade_needs_selected_gpu(self):
        catalog = RecordingCatalog()
        config = full_build(skip={Category.GPU})
        result = recommend(config, 2000, ["gaming"], catalog=catalog)
        self.assertEqual(len(catalog.calls), 1)
        self.assertEqual(
            result.reasoning[Category.GPU],
            "GPU is missing. These are the best options for your purposes and budget.",
        )

    def test_no_gaming_no_upgrade(self):
        catalog = RecordingCatalog()
        result = recommend(full_build(), 2000, ["streaming"], catalog=catalog)
        self.assertEqual(catalog.calls, [])
        self.assertEqual(result.as_dict(), {"recommendations": {}, "reasoning": {}})

    @override_settings(BUILD_ENGINE={"RECOMMENDATIONS_PER_CATEGORY": 1})
    def test_limit_is_configurable(self):
        result = recommend(
            full_build(skip={Category.CPU}), 500, [], catalog=RecordingCatalog()
        )
        self.assertEqual(len(result.recommendations[Category.CPU]), 1)

    def test_uses_configured_catalog(self):
        with override_settings(BUILD_ENGINE={"CATALOG_BACKEND": RecordingCatalog}):
            result = recommend(full_build(skip={Category.HEADSET}), 300, [])
        self.assertIn(Category.HEADSET, result.recommendations)

    def test_as_dict_uses_wire_names(self):
        result = recommend(
            full_build(skip={Category.PSU}), 300, [], catalog=RecordingCatalog()
        )
        data = result.as_dict()
        self.assertEqual(list(data["recommendations"]), ["psu"])
        self.assertEqual(data["recommendations"]["psu"][0]["type"], "psu")
