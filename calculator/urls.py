from django.urls import path

from . import views

urlpatterns = [
    # Engine endpoints, all POST {"build": {"components": {...}}}
    path(
        "api/compatibility-check/",
        views.compatibility_check,
        name="compatibility_check",
    ),
    path("api/performance/", views.performance, name="performance"),
    path("api/bottleneck/", views.bottleneck, name="bottleneck"),
    # Compatibility, scores and bottleneck in one round trip
    path("api/evaluate/", views.evaluate_build, name="evaluate_build"),
    path(
        "api/recommendations/",
        views.recommendations,
        name="recommendations",
    ),
    path("api/prices/", views.prices, name="prices"),
]
