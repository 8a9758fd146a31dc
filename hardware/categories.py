from django.db import models


class Category(models.TextChoices):
    CPU = "cpu", "CPU"
    GPU = "gpu", "GPU"
    MOTHERBOARD = "motherboard", "Motherboard"
    RAM = "ram", "RAM"
    STORAGE = "storage", "Storage"
    PSU = "psu", "Power Supply"
    CASE = "case", "Case"
    COOLER = "cooler", "CPU Cooler"
    MONITOR = "monitor", "Monitor"
    KEYBOARD = "keyboard", "Keyboard"
    MOUSE = "mouse", "Mouse"
    HEADSET = "headset", "Headset"


PERIPHERALS = frozenset(
    {Category.MONITOR, Category.KEYBOARD, Category.MOUSE, Category.HEADSET}
)

# Benchmark kind a catalog filters on when only minBenchmark is given.
DEFAULT_BENCHMARK = {
    Category.CPU: "single_thread",
    Category.GPU: "gaming",
}


def parse_category(value) -> Category:
    """Resolve a wire name ('cpu', 'CPU', 'PowerSupply') to a Category.

    Raises ValueError for anything outside the closed set.
    """
    if isinstance(value, Category):
        return value
    key = str(value or "").strip().lower()
    key = {"powersupply": "psu", "power_supply": "psu"}.get(key, key)
    return Category(key)
