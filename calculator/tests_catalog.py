import datetime
from unittest import mock

import requests
from django.db import DatabaseError
from django.test import SimpleTestCase, TestCase, override_settings

from hardware.categories import Category
from hardware.models import Benchmark, Component, Price

from calculator.services.catalog import (
    CatalogError,
    DatabaseCatalog,
    HttpCatalog,
    get_catalog,
)


def add_component(category, name, price=None, popularity=0, released=None, purposes=(), **bench):
    comp = Component.objects.create(
        category=category,
        name=name,
        popularity=popularity,
        release_date=released,
        purposes=list(purposes),
        specs={"socket": "AM5"} if category == "cpu" else {},
    )
    if price is not None:
        Price.objects.create(component=comp, amount=price, store="Store A")
    for kind, score in bench.items():
        Benchmark.objects.create(component=comp, category=kind, score=score)
    return comp


class DatabaseCatalogTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        add_component("cpu", "Old favourite", 150, popularity=90, released=datetime.date(2021, 1, 1), single_thread=55)
        add_component("cpu", "New favourite", 400, popularity=90, released=datetime.date(2023, 1, 1), single_thread=85)
        add_component("cpu", "Niche", 250, popularity=10, purposes=["workstation"], single_thread=70)
        add_component("cpu", "Unpriced", None, popularity=50)
        add_component("gpu", "Some GPU", 500, popularity=100, gaming=80)

    def test_catalog_order(self):
        parts = DatabaseCatalog().get_components("cpu")
        self.assertEqual(
            [p.name for p in parts],
            ["New favourite", "Old favourite", "Unpriced", "Niche"],
        )
        self.assertEqual(parts[0].specs.socket, "AM5")
        self.assertEqual(parts[0].lowest_price(), 400.0)
        self.assertEqual(parts[0].benchmark("single_thread"), 85.0)

    def test_budget_filter_drops_unpriced(self):
        parts = DatabaseCatalog().get_components(Category.CPU, {"budget": 300})
        self.assertEqual([p.name for p in parts], ["Old favourite", "Niche"])

    def test_purpose_filter_keeps_untagged(self):
        parts = DatabaseCatalog().get_components("cpu", {"purpose": "gaming"})
        self.assertNotIn("Niche", [p.name for p in parts])
        parts = DatabaseCatalog().get_components("cpu", {"purpose": "gaming,workstation"})
        self.assertIn("Niche", [p.name for p in parts])

    def test_min_benchmark_uses_category_default(self):
        parts = DatabaseCatalog().get_components("cpu", {"minBenchmark": 60})
        self.assertEqual([p.name for p in parts], ["New favourite", "Niche"])

    def test_unknown_category(self):
        with self.assertRaises(ValueError):
            DatabaseCatalog().get_components("floppy")

    def test_database_errors_become_catalog_errors(self):
        with mock.patch(
            "calculator.services.catalog.catalog_parts",
            side_effect=DatabaseError("no such table"),
        ):
            with self.assertRaises(CatalogError):
                DatabaseCatalog().get_components("cpu")


class HttpCatalogTests(SimpleTestCase):
    def session(self, payload=None, exc=None, status_exc=None):
        resp = mock.Mock()
        if status_exc:
            resp.raise_for_status.side_effect = status_exc
        if isinstance(payload, Exception):
            resp.json.side_effect = payload
        else:
            resp.json.return_value = payload
        session = mock.Mock()
        session.get.side_effect = exc
        if exc is None:
            session.get.return_value = resp
        return session

    def test_success(self):
        session = self.session(
            [
                {
                    "id": "g1",
                    "name": "Big GPU",
                    "specs": {"lengthMm": 320},
                    "prices": [{"amount": 899, "store": "Store B"}],
                    "benchmarks": [{"score": 92, "category": "gaming"}],
                }
            ]
        )
        catalog = HttpCatalog("https://catalog.example/api/", api_key="k", timeout=3, session=session)
        parts = catalog.get_components(Category.GPU, {"budget": 900.0, "purpose": "gaming", "minBenchmark": None})

        self.assertEqual(len(parts), 1)
        self.assertEqual(parts[0].category, Category.GPU)
        self.assertEqual(parts[0].specs.length_mm, 320)
        session.get.assert_called_once_with(
            "https://catalog.example/api/components/gpu/",
            params={"budget": "900.0", "purpose": "gaming"},
            headers={"Content-Type": "application/json", "Authorization": "Bearer k"},
            timeout=3,
        )

    def test_results_envelope(self):
        session = self.session({"results": [{"id": "r1", "specs": {"type": "DDR5"}}]})
        parts = HttpCatalog("http://c", session=session).get_components("ram")
        self.assertEqual(parts[0].specs.type, "DDR5")

    def test_request_failure(self):
        session = self.session(exc=requests.ConnectionError("refused"))
        with self.assertRaises(CatalogError):
            HttpCatalog("http://c", session=session).get_components("cpu")

    def test_http_error_status(self):
        session = self.session([], status_exc=requests.HTTPError("503"))
        with self.assertRaises(CatalogError):
            HttpCatalog("http://c", session=session).get_components("cpu")

    def test_invalid_json(self):
        session = self.session(ValueError("Expecting value"))
        with self.assertRaises(CatalogError):
            HttpCatalog("http://c", session=session).get_components("cpu")

    def test_malformed_entry(self):
        session = self.session([{"id": "x", "prices": [{"store": "no amount"}]}])
        with self.assertRaises(CatalogError):
            HttpCatalog("http://c", session=session).get_components("cpu")

    @override_settings(BUILD_ENGINE={"CATALOG_API_URL": ""})
    def test_requires_base_url(self):
        with self.assertRaises(CatalogError):
            HttpCatalog(session=mock.Mock()).get_components("cpu")


class GetCatalogTests(SimpleTestCase):
    def test_default_backend(self):
        self.assertIsInstance(get_catalog(), DatabaseCatalog)

    @override_settings(BUILD_ENGINE={"CATALOG_BACKEND": "calculator.services.catalog.HttpCatalog", "CATALOG_API_URL": "http://c"})
    def test_dotted_path(self):
        catalog = get_catalog()
        self.assertIsInstance(catalog, HttpCatalog)
        self.assertEqual(catalog.base_url, "http://c")

    def test_instance(self):
        catalog = DatabaseCatalog()
        with override_settings(BUILD_ENGINE={"CATALOG_BACKEND": catalog}):
            self.assertIs(get_catalog(), catalog)
