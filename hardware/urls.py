from django.urls import path

from . import views

urlpatterns = [
    path(
        "components/<str:category>/",
        views.component_list,
        name="component_list",
    ),
    path(
        "components/<str:category>/<int:pk>/",
        views.component_detail,
        name="component_detail",
    ),
]
