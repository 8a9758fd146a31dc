from django.test import SimpleTestCase

from hardware.categories import Category

from calculator.services import evaluate
from calculator.services.configuration import Configuration, ConfigurationError
from calculator.services.performance import PerformanceScores
from calculator.testing import make_part


class TestConfiguration(SimpleTestCase):
    def setUp(self):
        self.cpu = make_part(
            "cpu",
            specs={"socket": "AM5"},
            benchmarks={"single_thread": 80, "multi_thread": 70},
            price=[("Store A", 320), ("Store B", 299.99)],
            wattage=120,
        )
        self.gpu = make_part(
            "gpu",
            benchmarks={"gaming": 80, "compute": 60},
            price=500,
            wattage=250,
        )

    def test_empty_configuration(self):
        config = Configuration()
        self.assertEqual(config.total_price, 0)
        self.assertEqual(config.total_wattage, 0)
        self.assertEqual(config.missing(), list(Category))
        self.assertEqual(config.selected(), {})

    def test_totals_use_lowest_price_and_wattage(self):
        config = Configuration()
        config.select(self.cpu)
        config.select(self.gpu)
        self.assertEqual(config.total_price, 799.99)
        self.assertEqual(config.total_wattage, 370)

        config.remove("gpu")
        self.assertEqual(config.total_price, 299.99)
        self.assertEqual(config.total_wattage, 120)
        self.assertNotIn(Category.GPU, config)

    def test_select_replaces_slot(self):
        config = Configuration()
        config.select(self.cpu)
        other = make_part("cpu", id="cpu-2", price=100)
        config.select(other)
        self.assertIs(config.get(Category.CPU), other)
        self.assertEqual(len(config.selected()), 1)
        self.assertEqual(config.total_price, 100)

    def test_part_in_wrong_slot_is_rejected(self):
        with self.assertRaises(ConfigurationError):
            Configuration.from_parts({"gpu": self.cpu})

    def test_unknown_slot_is_rejected(self):
        with self.assertRaises(ConfigurationError):
            Configuration.from_parts({"floppy": self.cpu})

    def test_from_payload(self):
        config = Configuration.from_payload(
            {
                "components": {
                    "cpu": {
                        "id": "c1",
                        "name": "Ryzen 7 7700X",
                        "specs": {"socket": "AM5"},
                        "prices": [{"amount": 330, "currency": "USD", "store": "A"}],
                        "wattage": 105,
                    },
                    "gpu": None,
                }
            }
        )
        self.assertEqual(config.get("cpu").specs.socket, "AM5")
        self.assertIsNone(config.get("gpu"))
        self.assertEqual(config.total_price, 330)

    def test_from_payload_rejects_mismatched_type(self):
        with self.assertRaises(ConfigurationError):
            Configuration.from_payload(
                {"components": {"gpu": {"id": "c1", "type": "cpu"}}}
            )

    def test_edit_drops_cached_performance(self):
        config = Configuration.from_parts({"cpu": self.cpu, "gpu": self.gpu})
        evaluate(config)
        self.assertIsInstance(config.performance, PerformanceScores)
        config.remove(Category.GPU)
        self.assertIsNone(config.performance)


class TestEvaluate(SimpleTestCase):
    def test_evaluate_combines_engine_results(self):
        config = Configuration.from_parts(
            {
                "cpu": make_part("cpu", specs={"socket": "AM4"}, benchmarks={"single_thread": 50}),
                "gpu": make_part("gpu", benchmarks={"gaming": 100}),
                "motherboard": make_part("motherboard", specs={"socket": "AM5"}),
            }
        )
        result = evaluate(config)
        self.assertFalse(result.compatibility.is_compatible)
        self.assertEqual(result.bottleneck.component, "cpu")
        self.assertEqual(result.bottleneck.percentage, 50)
        self.assertEqual(config.performance, result.performance)
        data = result.as_dict()
        self.assertEqual(
            set(data), {"compatibility", "performance", "bottleneck"}
        )
