from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("", include("hardware.urls")),
    path("", include("calculator.urls")),
]
