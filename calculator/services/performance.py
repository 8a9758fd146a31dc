from dataclasses import dataclass

from hardware.categories import Category

from .bottleneck import round_half_up

# signal -> (gaming, productivity, streaming) weights
WEIGHTS = {
    "gpu_gaming": (0.6, 0.0, 0.0),
    "gpu_compute": (0.0, 0.1, 0.3),
    "cpu_single": (0.3, 0.0, 0.0),
    "cpu_multi": (0.0, 0.5, 0.4),
    "ram": (0.1, 0.2, 0.3),
    "storage": (0.0, 0.3, 0.0),
}

# 32GB at 3600MHz scores 100
RAM_REFERENCE_GB = 32
RAM_REFERENCE_MHZ = 3600
# 3500MB/s reads score 100
STORAGE_READ_DIVISOR = 35


@dataclass(frozen=True)
class PerformanceScores:
    gaming: int = 0
    productivity: int = 0
    streaming: int = 0
    overall: int = 0

    def as_dict(self) -> dict:
        return {
            "gaming": self.gaming,
            "productivity": self.productivity,
            "streaming": self.streaming,
            "overall": self.overall,
        }


def ram_score(ram) -> float:
    specs = ram.specs
    capacity = specs.capacity_gb or 0
    speed = specs.speed_mhz or 0
    return (capacity / RAM_REFERENCE_GB) * 50 + (speed / RAM_REFERENCE_MHZ) * 50


def storage_score(storage) -> float:
    return min(100, (storage.specs.read_speed_mbps or 0) / STORAGE_READ_DIVISOR)


def signals(config) -> dict:
    """Raw 0-100ish signal per weighted input; absent parts contribute 0."""
    cpu = config.get(Category.CPU)
    gpu = config.get(Category.GPU)
    ram = config.get(Category.RAM)
    storage = config.get(Category.STORAGE)
    return {
        "gpu_gaming": (gpu.benchmark("gaming") or 0) if gpu else 0,
        "gpu_compute": (gpu.benchmark("compute") or 0) if gpu else 0,
        "cpu_single": (cpu.benchmark("single_thread") or 0) if cpu else 0,
        "cpu_multi": (cpu.benchmark("multi_thread") or 0) if cpu else 0,
        "ram": ram_score(ram) if ram else 0,
        "storage": storage_score(storage) if storage else 0,
    }


def clamp(value: float, low: float = 0, high: float = 100) -> float:
    return max(low, min(high, value))


def score(config) -> PerformanceScores:
    totals = [0.0, 0.0, 0.0]
    for name, value in signals(config).items():
        for i, weight in enumerate(WEIGHTS[name]):
            totals[i] += value * weight
    gaming, productivity, streaming = (clamp(t) for t in totals)
    overall = (gaming + productivity + streaming) / 3
    return PerformanceScores(
        gaming=round_half_up(gaming),
        productivity=round_half_up(productivity),
        streaming=round_half_up(streaming),
        overall=round_half_up(overall),
    )
