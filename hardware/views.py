from django.http import HttpResponseBadRequest, JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_GET

from .categories import parse_category
from .models import Component
from .queries import catalog_parts

FILTER_KEYS = ("budget", "purpose", "minBenchmark", "benchmark")


def _category_or_none(value):
    try:
        return parse_category(value)
    except ValueError:
        return None


@require_GET
def component_list(request, category):
    """Catalog listing for one category, most relevant first.

    Query parameters are the catalog filters (budget, purpose, minBenchmark,
    benchmark); ``limit`` caps the number of results.
    """
    cat = _category_or_none(category)
    if cat is None:
        return HttpResponseBadRequest("Unknown component type")

    filters = {k: request.GET.get(k) for k in FILTER_KEYS if request.GET.get(k)}
    parts = catalog_parts(cat, filters)

    limit = request.GET.get("limit")
    if limit:
        try:
            parts = parts[: max(0, int(limit))]
        except ValueError:
            return HttpResponseBadRequest("limit must be an integer")
    return JsonResponse([p.as_dict() for p in parts], safe=False)


@require_GET
def component_detail(request, category, pk):
    cat = _category_or_none(category)
    if cat is None:
        return HttpResponseBadRequest("Unknown component type")
    obj = get_object_or_404(Component, pk=pk, category=cat.value)
    return JsonResponse(obj.to_part().as_dict())
