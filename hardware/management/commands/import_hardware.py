import datetime
import re

import pandas as pd
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.utils.text import slugify
from tqdm import tqdm

from hardware.categories import parse_category
from hardware.models import Benchmark, Component, Price
from hardware.specs import clean_number
from hardware.utils.benchmarks import (
    BENCHMARK_KINDS,
    build_cpu_slug,
    build_gpu_slug,
    load_benchmark_table,
)

# CSV column -> Component field
COLUMN_ALIASES = {
    "Category": "category",
    "Type": "category",
    "Brand": "brand",
    "Model": "model",
    "Name": "name",
    "Slug": "slug",
    "Wattage": "wattage",
    "TDP": "wattage",
    "Popularity": "popularity",
    "ReleaseDate": "release_date",
    "Purposes": "purposes",
    "Price": "price",
    "Currency": "currency",
    "Store": "store",
    "URL": "url",
}

NUMERIC_FIELDS = {"wattage": int, "popularity": int, "price": float}
SPEC_PREFIX = "spec_"
BENCH_PREFIX = "bench_"


def cast_number(field: str, value):
    raw = clean_number(value)
    if raw == "":
        return None
    caster = NUMERIC_FIELDS[field]
    return caster(float(raw)) if caster is int else caster(raw)


def parse_date(value):
    for fmt in ("%Y-%m-%d", "%d/%m/%Y", "%m/%d/%Y", "%b %Y", "%B %Y"):
        try:
            return datetime.datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    return None


def spec_value(value):
    """Spec cells are strings; keep numbers numeric and lists as lists."""
    if "|" in value:
        return [v.strip() for v in value.split("|") if v.strip()]
    if re.fullmatch(r"[-+]?\d+", value):
        return int(value)
    if re.fullmatch(r"[-+]?\d*\.\d+", value):
        return float(value)
    if value.lower() in ("true", "false", "yes", "no"):
        return value.lower() in ("true", "yes")
    return value


def normalize_row(row: dict) -> dict:
    """Split one CSV row into component fields, specs, benchmarks and price."""
    data = {"specs": {}, "benchmarks": {}}
    for column, raw in row.items():
        value = str(raw).strip()
        if value in ("", "N/A", "nan"):
            continue
        if column.startswith(SPEC_PREFIX):
            data["specs"][column[len(SPEC_PREFIX):]] = spec_value(value)
            continue
        if column.startswith(BENCH_PREFIX):
            kind = column[len(BENCH_PREFIX):]
            if kind in BENCHMARK_KINDS:
                score = clean_number(value)
                if score:
                    data["benchmarks"][kind] = min(100.0, max(0.0, round(float(score), 2)))
            continue
        field = COLUMN_ALIASES.get(column, column).lower()
        if field in NUMERIC_FIELDS:
            number = cast_number(field, value)
            if number is not None:
                data[field] = number
        elif field == "release_date":
            data[field] = parse_date(value)
        elif field == "purposes":
            data[field] = [p.strip().lower() for p in re.split(r"[|,]", value) if p.strip()]
        elif field in ("category", "brand", "model", "name", "slug", "currency", "store", "url"):
            data[field] = value
    return data


def ensure_slug(data: dict) -> None:
    if data.get("slug"):
        return
    base = data.get("name") or " ".join(
        p for p in (data.get("brand"), data.get("model")) if p
    )
    if base:
        data["slug"] = slugify(f"{data.get('category', '')} {base}")


class Command(BaseCommand):
    help = "Import catalog components from CSV, or attach a benchmark table"

    def add_arguments(self, parser):
        parser.add_argument("--csv", required=True)
        parser.add_argument("--dry-run", action="store_true")
        parser.add_argument("--require-price", action="store_true")
        parser.add_argument(
            "--benchmark-kind",
            choices=BENCHMARK_KINDS,
            help="Treat --csv as a raw benchmark table of this kind",
        )
        parser.add_argument("--category", default="gpu", help="Category the benchmark table covers")
        parser.add_argument("--name-column", default="Model")
        parser.add_argument("--score-column", default="Benchmark")

    def handle(self, *args, **options):
        if options["benchmark_kind"]:
            return self.import_benchmarks(options)

        try:
            df = pd.read_csv(options["csv"], dtype=str, keep_default_na=False)
        except (OSError, pd.errors.ParserError) as exc:
            raise CommandError(f"Cannot read {options['csv']}: {exc}")

        count = created = updated = skipped = 0
        rows = df.to_dict(orient="records")
        for row_idx, row in enumerate(tqdm(rows, desc="components", disable=options["verbosity"] < 1), start=1):
            data = normalize_row(row)
            try:
                category = parse_category(data.get("category"))
            except ValueError:
                skipped += 1
                self.stdout.write(f"Row {row_idx} skipped: unknown category {data.get('category')!r}")
                continue
            data["category"] = category.value
            ensure_slug(data)

            price = data.pop("price", None)
            if options["require_price"] and not price:
                skipped += 1
                self.stdout.write(f"Row {row_idx} skipped: missing/zero price")
                continue
            if not data.get("slug"):
                skipped += 1
                self.stdout.write(f"Row {row_idx} skipped: missing lookup field")
                continue

            if options["dry_run"]:
                self.stdout.write(f"[DRY-RUN] Row {row_idx} normalized: {data}")
                count += 1
                continue

            created_flag = self.save_row(data, price)
            if created_flag:
                created += 1
            else:
                updated += 1
            count += 1

        summary = "Processed {} rows: {} created, {} updated, {} skipped".format(
            count, created, updated, skipped
        )
        if options["dry_run"]:
            self.stdout.write(self.style.WARNING("[DRY-RUN] " + summary))
        else:
            self.stdout.write(self.style.SUCCESS(summary))

    @transaction.atomic
    def save_row(self, data, price) -> bool:
        benchmarks = data.pop("benchmarks")
        store = data.pop("store", "")
        currency = data.pop("currency", "USD")
        url = data.pop("url", "")
        slug = data.pop("slug")
        obj, created = Component.objects.update_or_create(slug=slug, defaults=data)
        if price:
            Price.objects.update_or_create(
                component=obj,
                store=store or "default",
                defaults={"amount": price, "currency": currency, "url": url},
            )
        for kind, score in benchmarks.items():
            Benchmark.objects.update_or_create(
                component=obj, category=kind, defaults={"score": score}
            )
        return created

    def import_benchmarks(self, options):
        try:
            category = parse_category(options["category"])
            table = load_benchmark_table(
                options["csv"],
                options["benchmark_kind"],
                name_col=options["name_column"],
                score_col=options["score_column"],
                category=category.value,
            )
        except (OSError, ValueError) as exc:
            raise CommandError(str(exc))

        scores = dict(zip(table["slug"], table["score"]))
        slugger = build_cpu_slug if category.value == "cpu" else build_gpu_slug
        matched = 0
        for component in tqdm(
            Component.objects.filter(category=category.value),
            desc="benchmarks",
            disable=options["verbosity"] < 1,
        ):
            key = slugger(component.name or component.model)
            if key not in scores:
                continue
            matched += 1
            if not options["dry_run"]:
                Benchmark.objects.update_or_create(
                    component=component,
                    category=options["benchmark_kind"],
                    defaults={"score": round(float(scores[key]), 2)},
                )
        self.stdout.write(
            self.style.SUCCESS(
                f"Matched {matched} {category.value} components against {len(scores)} benchmark rows"
            )
        )
