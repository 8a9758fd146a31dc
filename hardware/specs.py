"""Category-specific hardware attribute variants.

Catalog documents carry specs as a loose camelCase mapping. Each category
gets its own frozen dataclass here; ``parse_specs`` maps the wire keys onto
the matching variant. Every attribute is optional so that rules which need
a missing attribute can simply skip.
"""
import re
from dataclasses import dataclass, fields
from typing import Optional, Tuple, get_args, get_origin

from .categories import Category


@dataclass(frozen=True)
class CPUSpecs:
    socket: Optional[str] = None
    cores: Optional[int] = None
    threads: Optional[int] = None
    base_clock_ghz: Optional[float] = None
    boost_clock_ghz: Optional[float] = None
    tdp_w: Optional[int] = None
    architecture: Optional[str] = None
    cache_l3_mb: Optional[float] = None
    integrated_graphics: Optional[str] = None


@dataclass(frozen=True)
class GPUSpecs:
    length_mm: Optional[float] = None
    memory_gb: Optional[int] = None
    memory_type: Optional[str] = None
    core_clock: Optional[float] = None
    boost_clock: Optional[float] = None
    tdp_w: Optional[int] = None
    architecture: Optional[str] = None
    ray_tracing: Optional[bool] = None
    ports: Tuple[str, ...] = ()


@dataclass(frozen=True)
class MotherboardSpecs:
    socket: Optional[str] = None
    chipset: Optional[str] = None
    form_factor: Optional[str] = None
    memory_slots: Optional[int] = None
    max_memory_gb: Optional[int] = None
    memory_type: Optional[str] = None
    sata_ports: Optional[int] = None
    m2_slots: Optional[int] = None
    wifi: Optional[bool] = None


@dataclass(frozen=True)
class RAMSpecs:
    type: Optional[str] = None
    capacity_gb: Optional[int] = None
    speed_mhz: Optional[int] = None
    cas_latency: Optional[int] = None
    modules: Optional[int] = None
    voltage: Optional[float] = None


@dataclass(frozen=True)
class StorageSpecs:
    type: Optional[str] = None
    capacity_gb: Optional[int] = None
    interface: Optional[str] = None
    cache_mb: Optional[int] = None
    read_speed_mbps: Optional[int] = None
    write_speed_mbps: Optional[int] = None
    tbw: Optional[int] = None

    @property
    def is_hdd(self) -> bool:
        return (self.type or "").upper() == "HDD"

    @property
    def is_ssd(self) -> bool:
        return (self.type or "").upper() in ("SSD", "NVME")


@dataclass(frozen=True)
class PSUSpecs:
    wattage: Optional[int] = None
    efficiency: Optional[str] = None
    modular: Optional[str] = None
    form_factor: Optional[str] = None


@dataclass(frozen=True)
class CaseSpecs:
    form_factor: Tuple[str, ...] = ()
    max_gpu_length_mm: Optional[float] = None
    max_cooler_height_mm: Optional[float] = None
    windowed_side: Optional[bool] = None


@dataclass(frozen=True)
class CoolerSpecs:
    type: Optional[str] = None
    socket_support: Tuple[str, ...] = ()
    radiator_size_mm: Optional[int] = None
    fans: Optional[int] = None
    height_mm: Optional[float] = None


@dataclass(frozen=True)
class MonitorSpecs:
    size_inch: Optional[float] = None
    resolution: Optional[str] = None
    panel_type: Optional[str] = None
    refresh_rate_hz: Optional[int] = None
    response_time_ms: Optional[float] = None
    adaptive_sync: Optional[str] = None


@dataclass(frozen=True)
class PeripheralSpecs:
    connection: Optional[str] = None
    wireless: Optional[bool] = None


SPEC_TYPES = {
    Category.CPU: CPUSpecs,
    Category.GPU: GPUSpecs,
    Category.MOTHERBOARD: MotherboardSpecs,
    Category.RAM: RAMSpecs,
    Category.STORAGE: StorageSpecs,
    Category.PSU: PSUSpecs,
    Category.CASE: CaseSpecs,
    Category.COOLER: CoolerSpecs,
    Category.MONITOR: MonitorSpecs,
    Category.KEYBOARD: PeripheralSpecs,
    Category.MOUSE: PeripheralSpecs,
    Category.HEADSET: PeripheralSpecs,
}

# Wire key -> dataclass field, per category. Keys not listed fall back to
# a snake_case conversion of the wire key.
SPEC_ALIASES = {
    Category.CPU: {
        "baseClockGHz": "base_clock_ghz",
        "boostClockGHz": "boost_clock_ghz",
        "tdpW": "tdp_w",
        "cacheL3MB": "cache_l3_mb",
    },
    Category.GPU: {
        "lengthMm": "length_mm",
        "memoryGB": "memory_gb",
        "tdpW": "tdp_w",
        "rayTracingSupport": "ray_tracing",
    },
    Category.MOTHERBOARD: {
        "maxMemoryGB": "max_memory_gb",
        "sataPortsCount": "sata_ports",
        "m2Slots": "m2_slots",
        "wifiBuiltIn": "wifi",
    },
    Category.RAM: {
        "capacityGB": "capacity_gb",
        "speedMHz": "speed_mhz",
    },
    Category.STORAGE: {
        "capacityGB": "capacity_gb",
        "cacheSize": "cache_mb",
        "readSpeedMBps": "read_speed_mbps",
        "writeSpeedMBps": "write_speed_mbps",
    },
    Category.CASE: {
        "maxGPULengthMm": "max_gpu_length_mm",
        "maxCPUCoolerHeightMm": "max_cooler_height_mm",
    },
    Category.COOLER: {
        "radiatorSizeMm": "radiator_size_mm",
        "height": "height_mm",
    },
    Category.MONITOR: {
        "sizeInch": "size_inch",
        "refreshRateHz": "refresh_rate_hz",
        "responseTimeMs": "response_time_ms",
    },
}


def snake_case(key: str) -> str:
    s = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", str(key))
    return s.lower()


FIELD_KINDS = {bool: "bool", int: "int", float: "float"}


def _field_kind(annotation) -> str:
    """Coercion kind for a spec field annotation such as ``Optional[int]``."""
    if get_origin(annotation) is tuple:
        return "list"
    # Optional[X] -> X
    args = [a for a in get_args(annotation) if a is not type(None)]
    if len(args) == 1:
        annotation = args[0]
    return FIELD_KINDS.get(annotation, "str")


def clean_number(value) -> str:
    s = str(value).strip().replace(",", "")
    m = re.search(r"[-+]?\d*\.?\d+", s)
    return m.group(0) if m else ""


def cast_value(kind: str, value):
    """Coerce a raw spec value; returns None when it cannot be read."""
    if value is None or value == "":
        return None
    if kind == "list":
        if isinstance(value, (list, tuple)):
            return tuple(str(v) for v in value)
        return tuple(v.strip() for v in str(value).split(",") if v.strip())
    if kind == "bool":
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in {"true", "1", "yes", "y"}
    if kind in ("int", "float"):
        if isinstance(value, bool):
            return None
        raw = clean_number(value)
        if raw == "":
            return None
        return int(float(raw)) if kind == "int" else float(raw)
    return str(value)


def parse_specs(category, raw=None):
    """Build the spec variant for ``category`` from a wire mapping."""
    category = Category(category)
    spec_cls = SPEC_TYPES[category]
    if isinstance(raw, spec_cls):
        return raw
    aliases = SPEC_ALIASES.get(category, {})
    kinds = {f.name: _field_kind(f.type) for f in fields(spec_cls)}

    data = {}
    for key, value in (raw or {}).items():
        name = aliases.get(key) or snake_case(key)
        if name not in kinds:
            continue
        cast = cast_value(kinds[name], value)
        if cast is not None:
            data[name] = cast
    return spec_cls(**data)


def specs_as_dict(specs) -> dict:
    """Inverse of ``parse_specs``: camelCase keys, absent values dropped."""
    category = next(c for c, cls in SPEC_TYPES.items() if isinstance(specs, cls))
    reverse = {v: k for k, v in SPEC_ALIASES.get(category, {}).items()}
    out = {}
    for f in fields(specs):
        value = getattr(specs, f.name)
        if value is None or value == ():
            continue
        if f.name in reverse:
            key = reverse[f.name]
        else:
            head, *rest = f.name.split("_")
            key = head + "".join(p.capitalize() for p in rest)
        out[key] = list(value) if isinstance(value, tuple) else value
    return out
