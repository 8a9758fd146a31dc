"""Budget-constrained suggestions for missing or weak slots.

Catalog lookups fan out over a thread pool under one shared deadline. A
lookup that raises or misses the deadline only drops its own category; a
lookup that succeeds with no parts still reports its category.
"""
import logging
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import Dict, List

from django.db import connection

from hardware.categories import Category
from hardware.parts import Part

from ..conf import engine_setting
from .catalog import CatalogError, get_catalog

logger = logging.getLogger(__name__)


@dataclass
class RecommendationResult:
    recommendations: Dict[Category, List[Part]] = field(default_factory=dict)
    reasoning: Dict[Category, str] = field(default_factory=dict)

    def as_dict(self) -> dict:
        return {
            "recommendations": {
                c.value: [p.as_dict() for p in parts]
                for c, parts in self.recommendations.items()
            },
            "reasoning": {c.value: text for c, text in self.reasoning.items()},
        }


def missing_reason(category: Category) -> str:
    return (
        f"{category.label} is missing. These are the best options for your "
        f"purposes and budget."
    )


GAMING_GPU_REASON = (
    "A more powerful GPU is recommended to improve your gaming performance."
)


def _lookups(config, budget, purposes):
    """Yield (key, category, filters) for every catalog query to issue."""
    missing = config.missing()
    if missing:
        share = budget / len(missing)
        purpose = ",".join(purposes)
        for category in missing:
            yield category, category, {"budget": share, "purpose": purpose}

    gpu = config.get(Category.GPU)
    if "gaming" in purposes and gpu is not None:
        yield "gaming_gpu", Category.GPU, {
            "minBenchmark": gpu.benchmark("gaming"),
            "benchmark": "gaming",
            "budget": budget * engine_setting("GPU_BUDGET_SHARE"),
        }


def _lookup(catalog, category, filters):
    try:
        return catalog.get_components(category, filters)
    finally:
        # worker threads get their own DB connection
        connection.close()


def recommend(config, budget, purposes=(), catalog=None) -> RecommendationResult:
    catalog = catalog or get_catalog()
    purposes = [p.strip().lower() for p in purposes or () if p and p.strip()]
    budget = float(budget or 0)
    limit = engine_setting("RECOMMENDATIONS_PER_CATEGORY")
    timeout = engine_setting("CATALOG_TIMEOUT")

    lookups = list(_lookups(config, budget, purposes))
    found = {}
    if lookups:
        # one worker per lookup: every lookup runs under the same deadline
        pool = ThreadPoolExecutor(max_workers=len(lookups))
        try:
            futures = {
                pool.submit(_lookup, catalog, category, filters): (key, category)
                for key, category, filters in lookups
            }
            _, pending = wait(futures, timeout=timeout)
            for future, (key, category) in futures.items():
                if future in pending:
                    logger.warning(
                        "No %s recommendations: catalog timed out after %ss",
                        category.value,
                        timeout,
                    )
                    continue
                try:
                    found[key] = future.result()
                except CatalogError as exc:
                    logger.warning("No %s recommendations: %s", category.value, exc)
                except Exception:
                    logger.exception("No %s recommendations: lookup failed", category.value)
        finally:
            # a hung lookup must not hold the caller
            pool.shutdown(wait=False, cancel_futures=True)

    result = RecommendationResult()
    for category in config.missing():
        if category in found:
            result.recommendations[category] = list(found[category][:limit])
            result.reasoning[category] = missing_reason(category)

    better_gpus = found.get("gaming_gpu")
    if better_gpus:
        result.recommendations[Category.GPU] = list(better_gpus[:limit])
        result.reasoning[Category.GPU] = GAMING_GPU_REASON
    return result
