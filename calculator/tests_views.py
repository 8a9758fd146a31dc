import json

from django.test import SimpleTestCase, override_settings
from django.urls import reverse

from hardware.parts import Part

from calculator.testing import StaticCatalog, make_part


def component(category, **kwargs):
    return make_part(category, **kwargs).as_dict()


class EngineViewTests(SimpleTestCase):
    def post(self, name, payload):
        return self.client.post(
            reverse(name), data=json.dumps(payload), content_type="application/json"
        )

    def build(self, **components):
        return {"build": {"components": components}}

    def test_compatibility_check(self):
        resp = self.post(
            "compatibility_check",
            self.build(
                cpu=component("cpu", specs={"socket": "LGA1700"}),
                motherboard=component("motherboard", specs={"socket": "AM5"}),
            ),
        )
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertFalse(data["isCompatible"])
        self.assertEqual(len(data["issues"]), 1)

    def test_performance(self):
        resp = self.post(
            "performance",
            self.build(gpu=component("gpu", benchmarks={"gaming": 50})),
        )
        self.assertEqual(resp.json(), {"gaming": 30, "productivity": 0, "streaming": 0, "overall": 10})

    def test_bottleneck(self):
        resp = self.post(
            "bottleneck",
            self.build(
                cpu=component("cpu", benchmarks={"single_thread": 50}),
                gpu=component("gpu", benchmarks={"gaming": 100}),
            ),
        )
        data = resp.json()
        self.assertEqual(data["bottleneckComponent"], "cpu")
        self.assertEqual(data["bottleneckPercentage"], 50)

    def test_evaluate_build(self):
        resp = self.post(
            "evaluate_build",
            self.build(cpu=component("cpu", price=199.5, wattage=65)),
        )
        data = resp.json()
        self.assertEqual(
            set(data),
            {"compatibility", "performance", "bottleneck", "totalPrice", "totalWattage"},
        )
        self.assertEqual(data["totalPrice"], 199.5)
        self.assertEqual(data["totalWattage"], 65)

    def test_prices(self):
        resp = self.post(
            "prices",
            {
                **self.build(
                    cpu=component("cpu", price=[("A", 100), ("B", 90)]),
                    mouse=component("mouse", price=[("A", 20)]),
                ),
                "includePeripherals": False,
            },
        )
        data = resp.json()
        self.assertEqual(data["totalPrice"], 110)
        self.assertEqual([s["store"] for s in data["stores"]], ["B", "A"])

    @override_settings(BUILD_ENGINE={"CATALOG_BACKEND": StaticCatalog})
    def test_recommendations(self):
        components = {c: component(c) for c in ("cpu", "gpu", "motherboard", "ram", "psu", "case", "cooler", "monitor", "keyboard", "mouse", "headset")}
        resp = self.post(
            "recommendations",
            {**self.build(**components), "budget": 200, "purposes": ["productivity"]},
        )
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(list(data["recommendations"]), ["storage"])
        self.assertEqual(len(data["recommendations"]["storage"]), 3)
        Part.from_dict(data["recommendations"]["storage"][0])
        self.assertIn("storage", data["reasoning"])

    def test_recommendations_rejects_bad_budget(self):
        resp = self.post("recommendations", {"build": {}, "budget": -5})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("budget", resp.json()["fields"])

    def test_recommendations_rejects_unknown_purpose(self):
        resp = self.post("recommendations", {"budget": 100, "purposes": ["mining"]})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("purposes", resp.json()["fields"])

    def test_invalid_json(self):
        resp = self.client.post(
            reverse("compatibility_check"), data="{nope", content_type="application/json"
        )
        self.assertEqual(resp.status_code, 400)
        self.assertIn("error", resp.json())

    def test_unknown_slot(self):
        resp = self.post("performance", self.build(floppy={"id": "f"}))
        self.assertEqual(resp.status_code, 400)

    def test_get_not_allowed(self):
        self.assertEqual(self.client.get(reverse("compatibility_check")).status_code, 405)
