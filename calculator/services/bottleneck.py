"""CPU/GPU bottleneck estimate.

A ratio heuristic over normalized benchmark scores, not a simulation: the
CPU's single-thread score against the GPU's gaming score.
"""
import math
from dataclasses import dataclass

CPU_BOUND_RATIO = 0.75
GPU_BOUND_RATIO = 1.25

EXPLANATIONS = {
    "missing": "Select both a CPU and a GPU to measure a bottleneck.",
    "no_data": (
        "Benchmark scores for the CPU or GPU are unavailable, so no "
        "bottleneck can be estimated."
    ),
    "cpu": (
        "The CPU is holding back the GPU from reaching its full performance. "
        "A CPU upgrade is recommended."
    ),
    "gpu": (
        "The GPU is holding back the CPU from reaching its full performance. "
        "A GPU upgrade is recommended."
    ),
    "balanced": (
        "The CPU and GPU are well matched; there is no significant bottleneck."
    ),
}


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class BottleneckResult:
    percentage: int
    component: str  # "cpu", "gpu" or "balanced"
    explanation: str

    def as_dict(self) -> dict:
        return {
            "bottleneckPercentage": self.percentage,
            "bottleneckComponent": self.component,
            "explanation": self.explanation,
        }


def analyze(cpu, gpu) -> BottleneckResult:
    if cpu is None or gpu is None:
        return BottleneckResult(0, "balanced", EXPLANATIONS["missing"])

    cpu_score = cpu.benchmark("single_thread") or 0
    gpu_score = gpu.benchmark("gaming") or 0
    # the ratio is undefined without both scores; report a balanced pair
    if cpu_score <= 0 or gpu_score <= 0:
        return BottleneckResult(0, "balanced", EXPLANATIONS["no_data"])

    ratio = cpu_score / gpu_score
    if ratio < CPU_BOUND_RATIO:
        pct = min(100, round_half_up((1 - ratio) * 100))
        return BottleneckResult(pct, "cpu", EXPLANATIONS["cpu"])
    if ratio > GPU_BOUND_RATIO:
        pct = min(100, round_half_up((ratio - 1) * 50))
        return BottleneckResult(pct, "gpu", EXPLANATIONS["gpu"])
    return BottleneckResult(0, "balanced", EXPLANATIONS["balanced"])
