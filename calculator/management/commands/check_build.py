import json

from django.core.management.base import BaseCommand, CommandError

from calculator.services import ConfigurationError, evaluate
from calculator.services.configuration import Configuration
from calculator.services.pricing import cheapest_store
from calculator.services.recommendations import recommend


class Command(BaseCommand):
    help = (
        "Evaluate a build JSON file ({\"components\": {...}}): compatibility, "
        "scores and bottleneck. Pass --budget to also list recommendations."
    )

    def add_arguments(self, parser):
        parser.add_argument("build_file")
        parser.add_argument("--budget", type=float, help="Budget for recommendations")
        parser.add_argument(
            "--purpose",
            action="append",
            dest="purposes",
            default=[],
            help="Usage purpose (repeatable), e.g. --purpose gaming",
        )
        parser.add_argument("--json", action="store_true", help="Print raw JSON")

    def handle(self, *args, **options):
        try:
            with open(options["build_file"], encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, ValueError) as exc:
            raise CommandError(f"Cannot read {options['build_file']}: {exc}")
        if isinstance(payload, dict) and "build" in payload:
            payload = payload["build"]

        try:
            config = Configuration.from_payload(payload)
        except ConfigurationError as exc:
            raise CommandError(str(exc))

        result = evaluate(config).as_dict()
        result["totalPrice"] = config.total_price
        result["totalWattage"] = config.total_wattage
        store = cheapest_store(config)
        result["cheapestStore"] = store.as_dict() if store else None
        if options["budget"] is not None:
            result.update(
                recommend(config, options["budget"], options["purposes"]).as_dict()
            )

        if options["json"]:
            self.stdout.write(json.dumps(result, indent=2))
            return
        self.write_report(result)

    def write_report(self, result):
        compat = result["compatibility"]
        perf = result["performance"]
        neck = result["bottleneck"]

        self.stdout.write(f"Total price: {result['totalPrice']:.2f}")
        self.stdout.write(f"Total wattage: {result['totalWattage']}W")
        if compat["isCompatible"]:
            self.stdout.write(self.style.SUCCESS("Compatible"))
        else:
            self.stdout.write(self.style.ERROR("Not compatible"))
        for issue in compat["issues"]:
            self.stdout.write(self.style.ERROR(f"  issue: {issue}"))
        for warning in compat["warnings"]:
            self.stdout.write(self.style.WARNING(f"  warning: {warning}"))
        for suggestion in compat["suggestions"]:
            self.stdout.write(f"  suggestion: {suggestion}")

        self.stdout.write(
            "Scores: gaming {gaming}, productivity {productivity}, "
            "streaming {streaming}, overall {overall}".format(**perf)
        )
        self.stdout.write(
            f"Bottleneck: {neck['bottleneckComponent']} "
            f"({neck['bottleneckPercentage']}%) {neck['explanation']}"
        )
        if result.get("cheapestStore"):
            store = result["cheapestStore"]
            self.stdout.write(f"Cheapest store: {store['store']} ({store['totalPrice']:.2f})")

        for category, parts in result.get("recommendations", {}).items():
            self.stdout.write(f"{category}: {result['reasoning'][category]}")
            for part in parts:
                self.stdout.write(f"  - {part['name'] or part['model']}")
