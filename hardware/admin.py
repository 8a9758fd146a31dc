from django.contrib import admin
from .models import Benchmark, Component, Price


class PriceInline(admin.TabularInline):
    model = Price
    extra = 0


class BenchmarkInline(admin.TabularInline):
    model = Benchmark
    extra = 0


@admin.register(Component)
class ComponentAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "brand", "model", "wattage", "popularity", "release_date", "slug")
    list_filter = ("category", "brand")
    search_fields = ("name", "brand", "model", "slug")
    inlines = (PriceInline, BenchmarkInline)
