from django.conf import settings

DEFAULTS = {
    "PSU_HEADROOM_RATIO": 0.8,
    "BOTTLENECK_WARNING_PCT": 10,
    "GPU_BUDGET_SHARE": 0.4,
    "RECOMMENDATIONS_PER_CATEGORY": 3,
    "CATALOG_BACKEND": "calculator.services.catalog.DatabaseCatalog",
    "CATALOG_API_URL": "",
    "CATALOG_API_KEY": "",
    "CATALOG_TIMEOUT": 10,
}


def engine_setting(name):
    """Read a BUILD_ENGINE override from settings, else the default."""
    overrides = getattr(settings, "BUILD_ENGINE", {}) or {}
    if name in overrides:
        return overrides[name]
    return DEFAULTS[name]
