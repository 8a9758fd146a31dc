from typing import Dict, List, Optional

from hardware.categories import Category, parse_category
from hardware.parts import InvalidPartError, Part


class ConfigurationError(ValueError):
    """The build does not have the shape of a Configuration."""


class Configuration:
    """A user's in-progress build: one slot per category, each optional.

    Totals are recomputed after every edit; ``performance`` caches the last
    PerformanceScores and is dropped whenever the selection changes.
    """

    def __init__(self, name: str = ""):
        self.name = name
        self._slots: Dict[Category, Optional[Part]] = {c: None for c in Category}
        self.total_price = 0.0
        self.total_wattage = 0
        self.performance = None

    @classmethod
    def from_parts(cls, parts, name: str = "") -> "Configuration":
        """Build from a category -> Part mapping, rejecting misfiled parts."""
        config = cls(name=name)
        for key, part in dict(parts).items():
            if part is None:
                continue
            try:
                category = parse_category(key)
            except ValueError:
                raise ConfigurationError(f"Unknown category key {key!r}")
            if not isinstance(part, Part):
                raise ConfigurationError(f"Slot {category.value} does not hold a Part")
            if part.category != category:
                raise ConfigurationError(
                    f"{part.display_name} is a {part.category.label} "
                    f"but was placed in the {category.label} slot"
                )
            config._slots[category] = part
        config._recompute()
        return config

    @classmethod
    def from_payload(cls, data) -> "Configuration":
        """Build from the JSON form ``{"components": {"cpu": {...}}}``."""
        if not isinstance(data, dict):
            raise ConfigurationError("Build must be a JSON object")
        components = data.get("components") or {}
        if not isinstance(components, dict):
            raise ConfigurationError("Build components must be an object")
        parts = {}
        for key, doc in components.items():
            if doc is None:
                continue
            if isinstance(doc, dict) and not (doc.get("category") or doc.get("type")):
                doc = dict(doc, type=key)
            try:
                parts[key] = Part.from_dict(doc)
            except InvalidPartError as exc:
                raise ConfigurationError(f"Invalid {key} component: {exc}")
        return cls.from_parts(parts, name=data.get("name") or "")

    def _recompute(self):
        total_price = 0.0
        total_wattage = 0
        for part in self.selected().values():
            price = part.lowest_price()
            if price is not None:
                total_price += price
            if part.wattage:
                total_wattage += part.wattage
        self.total_price = round(total_price, 2)
        self.total_wattage = total_wattage
        self.performance = None

    def select(self, part: Part) -> None:
        if not isinstance(part, Part):
            raise ConfigurationError("Only Part instances can be selected")
        self._slots[part.category] = part
        self._recompute()

    def remove(self, category) -> Optional[Part]:
        category = parse_category(category)
        part = self._slots[category]
        self._slots[category] = None
        self._recompute()
        return part

    def get(self, category) -> Optional[Part]:
        return self._slots[parse_category(category)]

    def __getitem__(self, category) -> Optional[Part]:
        return self.get(category)

    def __contains__(self, category) -> bool:
        return self.get(category) is not None

    def selected(self) -> Dict[Category, Part]:
        return {c: p for c, p in self._slots.items() if p is not None}

    def missing(self) -> List[Category]:
        return [c for c, p in self._slots.items() if p is None]

    def as_dict(self) -> dict:
        return {
            "name": self.name,
            "components": {c.value: p.as_dict() for c, p in self.selected().items()},
            "totalPrice": self.total_price,
            "totalWattage": self.total_wattage,
        }

    def __repr__(self):
        filled = ", ".join(c.value for c in self.selected())
        return f"<Configuration [{filled}] ${self.total_price}>"
