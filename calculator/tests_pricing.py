from django.test import SimpleTestCase

from calculator.services.configuration import Configuration
from calculator.services.pricing import cheapest_store, store_totals
from calculator.testing import make_part


class StoreTotalsTests(SimpleTestCase):
    def setUp(self):
        self.config = Configuration.from_parts(
            {
                "cpu": make_part("cpu", price=[("Alpha", 300), ("Beta", 280), ("Gamma", 310)]),
                "gpu": make_part("gpu", price=[("Alpha", 500), ("Beta", 540), ("Gamma", 480)]),
                "ram": make_part("ram", price=[("Alpha", 90), ("Beta", 80), ("Gamma", 85)]),
                "psu": make_part("psu", price=[("Alpha", 110)]),
                "mouse": make_part("mouse", price=[("Beta", 40), ("Delta", 35)]),
            }
        )

    def test_sorted_by_total(self):
        totals = store_totals(self.config)
        self.assertEqual([t.store for t in totals], ["Gamma", "Beta", "Alpha"])
        self.assertEqual(totals[0].total_price, 875)
        self.assertEqual(totals[1].total_price, 940)
        self.assertEqual(totals[2].total_price, 1000)

    def test_store_missing_too_many_parts_is_dropped(self):
        # Delta only stocks the mouse
        self.assertNotIn("Delta", [t.store for t in store_totals(self.config)])

    def test_exclude_peripherals(self):
        totals = store_totals(self.config, include_peripherals=False)
        beta = next(t for t in totals if t.store == "Beta")
        self.assertEqual(beta.total_price, 900)
        self.assertNotIn("mouse", beta.components)

    def test_duplicate_quotes_keep_cheapest(self):
        config = Configuration.from_parts(
            {"cpu": make_part("cpu", price=[("Alpha", 300), ("Alpha", 250)])}
        )
        (alpha,) = store_totals(config)
        self.assertEqual(alpha.total_price, 250)
        self.assertEqual(alpha.components["cpu"]["price"], 250)

    def test_cheapest_store(self):
        best = cheapest_store(self.config)
        self.assertEqual(best.store, "Gamma")
        self.assertEqual(best.as_dict()["totalPrice"], 875)
        self.assertTrue(best.as_dict()["available"])

    def test_no_prices(self):
        config = Configuration.from_parts({"cpu": make_part("cpu")})
        self.assertEqual(store_totals(config), [])
        self.assertIsNone(cheapest_store(config))
