import json
import logging
from functools import wraps

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from hardware.categories import Category

from .forms import RecommendationForm
from .services import ConfigurationError, analyze, check, evaluate, score
from .services.configuration import Configuration
from .services.pricing import store_totals
from .services.recommendations import recommend

logger = logging.getLogger(__name__)


class BadRequest(Exception):
    pass


def _read_body(request) -> dict:
    try:
        body = json.loads(request.body or b"{}")
    except (ValueError, UnicodeDecodeError):
        raise BadRequest("Request body must be valid JSON")
    if not isinstance(body, dict):
        raise BadRequest("Request body must be a JSON object")
    return body


def _read_build(body) -> Configuration:
    try:
        return Configuration.from_payload(body.get("build") or {})
    except ConfigurationError as exc:
        raise BadRequest(str(exc))


def json_endpoint(view):
    """POST-only JSON view; BadRequest becomes a 400 with an error message."""

    @csrf_exempt
    @require_POST
    @wraps(view)
    def wrapper(request, *args, **kwargs):
        try:
            return view(request, *args, **kwargs)
        except BadRequest as exc:
            logger.info("Rejected %s: %s", request.path, exc)
            return JsonResponse({"error": str(exc)}, status=400)

    return wrapper


@json_endpoint
def compatibility_check(request):
    """Compatibility findings for the posted build."""
    config = _read_build(_read_body(request))
    return JsonResponse(check(config).as_dict())


@json_endpoint
def performance(request):
    """Usage-profile scores for the posted build."""
    config = _read_build(_read_body(request))
    return JsonResponse(score(config).as_dict())


@json_endpoint
def bottleneck(request):
    config = _read_build(_read_body(request))
    result = analyze(config.get(Category.CPU), config.get(Category.GPU))
    return JsonResponse(result.as_dict())


@json_endpoint
def evaluate_build(request):
    """Everything the builder page refreshes after an edit."""
    config = _read_build(_read_body(request))
    data = evaluate(config).as_dict()
    data["totalPrice"] = config.total_price
    data["totalWattage"] = config.total_wattage
    return JsonResponse(data)


@json_endpoint
def recommendations(request):
    body = _read_body(request)
    config = _read_build(body)
    purposes = body.get("purposes") or []
    if isinstance(purposes, str):
        purposes = [p for p in purposes.split(",") if p]
    form = RecommendationForm({"budget": body.get("budget"), "purposes": purposes})
    if not form.is_valid():
        return JsonResponse({"error": "Invalid request", "fields": form.errors.get_json_data()}, status=400)

    result = recommend(
        config,
        budget=float(form.cleaned_data["budget"]),
        purposes=form.cleaned_data["purposes"],
    )
    return JsonResponse(result.as_dict())


@json_endpoint
def prices(request):
    """Per-store totals; peripherals are included unless switched off."""
    body = _read_body(request)
    config = _read_build(body)
    include = body.get("includePeripherals", True)
    totals = store_totals(config, include_peripherals=bool(include))
    return JsonResponse(
        {
            "totalPrice": config.total_price,
            "stores": [t.as_dict() for t in totals],
        }
    )
