"""Compatibility rules over a Configuration.

Each rule declares the slots it needs and runs only when all of them are
filled. A rule whose attributes are missing returns nothing. Findings are
plain strings grouped by severity; they are never raised.
"""
import logging
from dataclasses import dataclass, field
from typing import List

from hardware.categories import Category

from ..conf import engine_setting
from .bottleneck import analyze

logger = logging.getLogger(__name__)

ISSUE = "issue"
WARNING = "warning"
SUGGESTION = "suggestion"

RULES = []


@dataclass
class CompatibilityReport:
    issues: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)

    @property
    def is_compatible(self) -> bool:
        return not self.issues

    def add(self, severity: str, message: str) -> None:
        {
            ISSUE: self.issues,
            WARNING: self.warnings,
            SUGGESTION: self.suggestions,
        }[severity].append(message)

    def as_dict(self) -> dict:
        return {
            "isCompatible": self.is_compatible,
            "issues": list(self.issues),
            "warnings": list(self.warnings),
            "suggestions": list(self.suggestions),
        }


def rule(*categories):
    """Register a rule that needs every slot in ``categories`` filled."""

    def decorator(func):
        RULES.append((func, categories))
        return func

    return decorator


def _skip(name, attribute):
    logger.debug("Skipping %s: %s not available", name, attribute)


# --- Rules ---
@rule(Category.CPU, Category.MOTHERBOARD)
def socket_match(config, cpu, mobo):
    cpu_socket = cpu.specs.socket
    mobo_socket = mobo.specs.socket
    if cpu_socket is None or mobo_socket is None:
        _skip("socket_match", "socket")
        return
    if cpu_socket != mobo_socket:
        yield ISSUE, (
            f"CPU socket ({cpu_socket}) is not compatible with the "
            f"motherboard socket ({mobo_socket})."
        )


@rule(Category.RAM, Category.MOTHERBOARD)
def ram_type_match(config, ram, mobo):
    ram_type = ram.specs.type
    mobo_type = mobo.specs.memory_type
    if ram_type is None or mobo_type is None:
        _skip("ram_type_match", "memory type")
        return
    if ram_type != mobo_type:
        yield ISSUE, (
            f"RAM type ({ram_type}) is not compatible with the motherboard "
            f"memory type ({mobo_type})."
        )


@rule(Category.RAM, Category.MOTHERBOARD)
def ram_capacity(config, ram, mobo):
    capacity = ram.specs.capacity_gb
    max_memory = mobo.specs.max_memory_gb
    if capacity is None or max_memory is None:
        _skip("ram_capacity", "memory capacity")
        return
    if capacity > max_memory:
        yield WARNING, (
            f"The selected RAM capacity ({capacity}GB) exceeds the maximum "
            f"the motherboard supports ({max_memory}GB)."
        )


@rule(Category.PSU)
def psu_headroom(config, psu):
    wattage = psu.specs.wattage
    if wattage is None or not config.total_wattage:
        _skip("psu_headroom", "wattage")
        return
    ratio = engine_setting("PSU_HEADROOM_RATIO")
    if config.total_wattage > wattage * ratio:
        yield WARNING, (
            f"Your power supply ({wattage}W) may be borderline for the "
            f"system's requirements ({config.total_wattage}W). Consider a "
            f"higher wattage power supply."
        )


@rule(Category.CASE, Category.MOTHERBOARD)
def case_form_factor(config, case, mobo):
    supported = case.specs.form_factor
    form_factor = mobo.specs.form_factor
    if not supported or form_factor is None:
        _skip("case_form_factor", "form factor")
        return
    if form_factor not in supported:
        yield ISSUE, (
            f"The motherboard form factor ({form_factor}) is not supported by "
            f"the case. Supported form factors: {', '.join(supported)}."
        )


@rule(Category.CASE, Category.GPU)
def gpu_clearance(config, case, gpu):
    max_length = case.specs.max_gpu_length_mm
    if max_length is None:
        _skip("gpu_clearance", "max GPU length")
        return
    length = gpu.specs.length_mm or 0
    if length > max_length:
        yield ISSUE, (
            f"GPU length ({length:g}mm) exceeds the maximum GPU length the "
            f"case supports ({max_length:g}mm)."
        )


@rule(Category.COOLER, Category.CPU)
def cooler_socket(config, cooler, cpu):
    supported = cooler.specs.socket_support
    cpu_socket = cpu.specs.socket
    if not supported or cpu_socket is None:
        _skip("cooler_socket", "socket support")
        return
    if cpu_socket not in supported:
        yield ISSUE, (
            f"The CPU cooler is not compatible with the CPU socket "
            f"({cpu_socket}). Supported sockets: {', '.join(supported)}."
        )


@rule(Category.STORAGE)
def storage_suggestion(config, storage):
    # only one storage slot, so an HDD there means the build has no SSD
    if storage.specs.is_hdd:
        yield SUGGESTION, (
            "Add an SSD for the operating system to improve overall system "
            "responsiveness."
        )


@rule(Category.CPU, Category.GPU)
def bottleneck_escalation(config, cpu, gpu):
    result = analyze(cpu, gpu)
    if result.component not in ("cpu", "gpu"):
        return
    if result.percentage > engine_setting("BOTTLENECK_WARNING_PCT"):
        yield WARNING, (
            f"{result.component.upper()} bottleneck detected "
            f"({result.percentage}%). {result.explanation}"
        )


def check(config) -> CompatibilityReport:
    report = CompatibilityReport()
    for func, categories in RULES:
        parts = [config.get(c) for c in categories]
        if any(p is None for p in parts):
            continue
        for severity, message in func(config, *parts):
            report.add(severity, message)
    return report
