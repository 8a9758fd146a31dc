"""Immutable snapshots of catalog components.

``Part`` is what the calculator services reason about. It is built either
from a ``hardware.models.Component`` row (``Component.to_part``) or from a
catalog JSON document (``Part.from_dict``).
"""
import datetime
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .categories import Category, parse_category
from .specs import SPEC_TYPES, cast_value, parse_specs, specs_as_dict


class InvalidPartError(ValueError):
    """A component document does not describe a valid part."""


@dataclass(frozen=True)
class PriceQuote:
    amount: float
    currency: str = "USD"
    store: str = ""
    url: Optional[str] = None


@dataclass(frozen=True)
class BenchmarkScore:
    score: float
    category: str
    compared_to: Optional[str] = None


@dataclass(frozen=True)
class Part:
    id: str
    category: Category
    brand: str = ""
    model: str = ""
    name: str = ""
    specs: object = None
    prices: Tuple[PriceQuote, ...] = ()
    benchmarks: Tuple[BenchmarkScore, ...] = ()
    wattage: Optional[int] = None
    popularity: int = 0
    release_date: Optional[datetime.date] = None
    purposes: Tuple[str, ...] = field(default=())

    def __post_init__(self):
        try:
            category = parse_category(self.category)
        except ValueError:
            raise InvalidPartError(f"Unknown category {self.category!r}")
        object.__setattr__(self, "category", category)

        spec_cls = SPEC_TYPES[category]
        if self.specs is None:
            object.__setattr__(self, "specs", spec_cls())
        elif isinstance(self.specs, dict):
            object.__setattr__(self, "specs", parse_specs(category, self.specs))
        elif not isinstance(self.specs, spec_cls):
            raise InvalidPartError(
                f"{type(self.specs).__name__} is not a spec variant for "
                f"{category.label} (expected {spec_cls.__name__})"
            )
        object.__setattr__(self, "prices", tuple(self.prices))
        object.__setattr__(self, "benchmarks", tuple(self.benchmarks))
        object.__setattr__(self, "purposes", tuple(self.purposes))

    @property
    def display_name(self) -> str:
        return self.name or " ".join(p for p in (self.brand, self.model) if p) or self.id

    def lowest_price(self) -> Optional[float]:
        amounts = [q.amount for q in self.prices if q.amount is not None]
        return min(amounts) if amounts else None

    def benchmark(self, kind: str) -> Optional[float]:
        for b in self.benchmarks:
            if b.category == kind:
                return b.score
        return None

    @classmethod
    def from_dict(cls, data: dict) -> "Part":
        if not isinstance(data, dict):
            raise InvalidPartError("Component document must be an object")
        raw_category = data.get("category") or data.get("type")
        try:
            category = parse_category(raw_category)
        except ValueError:
            raise InvalidPartError(f"Unknown category {raw_category!r}")
        specs = data.get("specs") or {}
        if not isinstance(specs, dict):
            raise InvalidPartError("Component specs must be an object")

        try:
            prices = tuple(
                PriceQuote(
                    amount=float(p["amount"]),
                    currency=p.get("currency") or "USD",
                    store=p.get("store") or "",
                    url=p.get("url"),
                )
                for p in data.get("prices") or ()
            )
            benchmarks = tuple(
                BenchmarkScore(
                    score=float(b["score"]),
                    category=str(b["category"]),
                    compared_to=b.get("comparedTo"),
                )
                for b in data.get("benchmarks") or ()
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidPartError(f"Malformed price or benchmark entry: {exc}")

        release = data.get("releaseDate")
        if release and not isinstance(release, datetime.date):
            try:
                release = datetime.date.fromisoformat(str(release)[:10])
            except ValueError:
                release = None

        return cls(
            id=str(data.get("id") or ""),
            category=category,
            brand=data.get("brand") or "",
            model=data.get("model") or "",
            name=data.get("name") or "",
            specs=parse_specs(category, specs),
            prices=prices,
            benchmarks=benchmarks,
            wattage=cast_value("int", data.get("wattage")),
            popularity=cast_value("int", data.get("popularity")) or 0,
            release_date=release or None,
            purposes=tuple(data.get("purposes") or ()),
        )

    def as_dict(self) -> dict:
        out = {
            "id": self.id,
            "type": self.category.value,
            "brand": self.brand,
            "model": self.model,
            "name": self.name,
            "specs": specs_as_dict(self.specs),
            "prices": [
                {
                    "amount": q.amount,
                    "currency": q.currency,
                    "store": q.store,
                    **({"url": q.url} if q.url else {}),
                }
                for q in self.prices
            ],
            "benchmarks": [
                {"score": b.score, "category": b.category} for b in self.benchmarks
            ],
            "popularity": self.popularity,
        }
        if self.wattage is not None:
            out["wattage"] = self.wattage
        if self.release_date:
            out["releaseDate"] = self.release_date.isoformat()
        if self.purposes:
            out["purposes"] = list(self.purposes)
        return out
