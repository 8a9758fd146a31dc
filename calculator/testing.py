from hardware.parts import BenchmarkScore, Part, PriceQuote

from calculator.services.catalog import CatalogService


def make_part(category, specs=None, benchmarks=None, price=None, wattage=None, **kwargs):
    """Shorthand Part for tests: ``benchmarks`` is a {kind: score} dict and
    ``price`` a single amount (or a list of (store, amount) pairs)."""
    if isinstance(price, (list, tuple)):
        prices = [PriceQuote(amount=a, store=s) for s, a in price]
    elif price is not None:
        prices = [PriceQuote(amount=price, store="Store A")]
    else:
        prices = []
    return Part(
        id=kwargs.pop("id", f"{category}-1"),
        category=category,
        name=kwargs.pop("name", f"Test {category}"),
        specs=specs or {},
        prices=prices,
        benchmarks=[
            BenchmarkScore(score=s, category=k) for k, s in (benchmarks or {}).items()
        ],
        wattage=wattage,
        **kwargs,
    )


class StaticCatalog(CatalogService):
    """Five priced parts for any lookup, ignoring filters."""

    def get_components(self, category, filters=None):
        return [
            make_part(category.value, id=f"{category.value}-{i}", price=50)
            for i in range(5)
        ]
