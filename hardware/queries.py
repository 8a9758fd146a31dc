"""Catalog lookups shared by the HTTP listing and the database catalog.

Recognized filters: ``budget`` (max lowest price), ``purpose`` (comma-joined
usage tags), ``minBenchmark`` and ``benchmark`` (the benchmark kind that
``minBenchmark`` applies to, defaulting per category).
"""
from typing import List, Optional

from .categories import DEFAULT_BENCHMARK, parse_category
from .models import Component
from .parts import Part


def split_purposes(value) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [p.strip().lower() for p in value if p and p.strip()]


def _float_or_none(value) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def filter_parts(parts, category, filters=None) -> List[Part]:
    """Apply the catalog filters to parts that are already in catalog order."""
    filters = filters or {}
    budget = _float_or_none(filters.get("budget"))
    purposes = split_purposes(filters.get("purpose"))
    min_bench = _float_or_none(filters.get("minBenchmark"))
    bench_kind = filters.get("benchmark") or DEFAULT_BENCHMARK.get(category)

    out = []
    for part in parts:
        if budget is not None:
            price = part.lowest_price()
            if price is None or price > budget:
                continue
        # untagged parts are treated as general purpose
        if purposes and part.purposes:
            tags = {t.lower() for t in part.purposes}
            if not tags.intersection(purposes):
                continue
        if min_bench is not None and bench_kind:
            score = part.benchmark(bench_kind)
            if score is None or score < min_bench:
                continue
        out.append(part)
    return out


def catalog_parts(category, filters=None) -> List[Part]:
    """Parts of one category, most popular and newest first, filtered."""
    category = parse_category(category)
    rows = (
        Component.objects.filter(category=category.value)
        .prefetch_related("prices", "benchmarks")
        .order_by("-popularity", "-release_date", "id")
    )
    return filter_parts([row.to_part() for row in rows], category, filters)
