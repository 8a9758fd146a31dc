from dataclasses import dataclass, field
from typing import Dict, List, Optional

from hardware.categories import PERIPHERALS

# a store stays listed while it lacks at most this many selected parts
MAX_MISSING_AT_STORE = 2


@dataclass
class StoreTotal:
    store: str
    total_price: float = 0.0
    available: bool = True
    components: Dict[str, dict] = field(default_factory=dict)

    def as_dict(self) -> dict:
        return {
            "store": self.store,
            "totalPrice": round(self.total_price, 2),
            "available": self.available,
            "components": self.components,
        }


def store_totals(config, include_peripherals=True) -> List[StoreTotal]:
    """Per-store totals for the selected parts, cheapest first."""
    parts = {
        c: p
        for c, p in config.selected().items()
        if include_peripherals or c not in PERIPHERALS
    }

    stores: Dict[str, StoreTotal] = {}
    for category, part in parts.items():
        for quote in part.prices:
            entry = stores.setdefault(quote.store, StoreTotal(store=quote.store))
            # keep the cheapest listing when a store quotes a part twice
            previous = entry.components.get(category.value)
            if previous is not None:
                if previous["price"] <= quote.amount:
                    continue
                entry.total_price -= previous["price"]
            entry.components[category.value] = {"price": quote.amount, "url": quote.url}
            entry.total_price += quote.amount

    for entry in stores.values():
        missing = sum(1 for c in parts if c.value not in entry.components)
        entry.available = missing <= MAX_MISSING_AT_STORE

    return sorted(
        (s for s in stores.values() if s.available),
        key=lambda s: (s.total_price, s.store),
    )


def cheapest_store(config, include_peripherals=True) -> Optional[StoreTotal]:
    totals = store_totals(config, include_peripherals=include_peripherals)
    return totals[0] if totals else None
