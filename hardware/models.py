from django.db import models

from .categories import Category
from .parts import BenchmarkScore, Part, PriceQuote


class Component(models.Model):
    category = models.CharField(max_length=20, choices=Category.choices)
    brand = models.CharField(max_length=100, blank=True, default="")
    model = models.CharField(max_length=100, blank=True, default="")
    name = models.CharField(max_length=200, blank=True, default="")
    slug = models.SlugField(max_length=200, unique=True, blank=True, null=True)
    # category-specific attributes, camelCase keys as served by the catalog
    specs = models.JSONField(default=dict, blank=True)
    wattage = models.IntegerField(blank=True, null=True)
    popularity = models.IntegerField(default=0)
    release_date = models.DateField(blank=True, null=True)
    # usage tags such as "gaming" or "streaming"
    purposes = models.JSONField(default=list, blank=True)

    class Meta:
        ordering = ("-popularity", "-release_date", "id")

    def __str__(self):
        return self.name or f"{self.brand} {self.model}".strip() or f"Component #{self.pk}"

    def lowest_price(self):
        amounts = [p.amount for p in self.prices.all()]
        return min(amounts) if amounts else None

    def to_part(self) -> Part:
        """Snapshot this row (with its prices and benchmarks) as a Part."""
        return Part(
            id=str(self.pk),
            category=self.category,
            brand=self.brand,
            model=self.model,
            name=self.name,
            specs=dict(self.specs or {}),
            prices=[
                PriceQuote(
                    amount=float(p.amount),
                    currency=p.currency,
                    store=p.store,
                    url=p.url or None,
                )
                for p in self.prices.all()
            ],
            benchmarks=[
                BenchmarkScore(score=float(b.score), category=b.category)
                for b in self.benchmarks.all()
            ],
            wattage=self.wattage,
            popularity=self.popularity,
            release_date=self.release_date,
            purposes=list(self.purposes or ()),
        )


class Price(models.Model):
    component = models.ForeignKey(
        Component, related_name="prices", on_delete=models.CASCADE
    )
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    currency = models.CharField(max_length=3, default="USD")
    store = models.CharField(max_length=100)
    url = models.URLField(blank=True, default="")

    def __str__(self):
        return f"{self.store}: {self.amount} {self.currency}"


class Benchmark(models.Model):
    KIND_CHOICES = [
        ("single_thread", "Single thread"),
        ("multi_thread", "Multi thread"),
        ("gaming", "Gaming"),
        ("compute", "Compute"),
    ]

    component = models.ForeignKey(
        Component, related_name="benchmarks", on_delete=models.CASCADE
    )
    # normalized 0-100, higher is better
    score = models.DecimalField(max_digits=6, decimal_places=2)
    category = models.CharField(max_length=30, choices=KIND_CHOICES)

    class Meta:
        unique_together = ("component", "category")

    def __str__(self):
        return f"{self.get_category_display()}: {self.score}"
