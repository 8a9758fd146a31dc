from dataclasses import dataclass

from hardware.categories import Category

from .bottleneck import BottleneckResult, analyze
from .compatibility import CompatibilityReport, check
from .configuration import Configuration, ConfigurationError
from .performance import PerformanceScores, score


@dataclass(frozen=True)
class BuildEvaluation:
    compatibility: CompatibilityReport
    performance: PerformanceScores
    bottleneck: BottleneckResult

    def as_dict(self) -> dict:
        return {
            "compatibility": self.compatibility.as_dict(),
            "performance": self.performance.as_dict(),
            "bottleneck": self.bottleneck.as_dict(),
        }


def evaluate(config: Configuration) -> BuildEvaluation:
    """Run after every edit: compatibility, scores and the bottleneck estimate.

    The scores are cached on ``config.performance`` until the next edit.
    """
    performance = score(config)
    config.performance = performance
    return BuildEvaluation(
        compatibility=check(config),
        performance=performance,
        bottleneck=analyze(config.get(Category.CPU), config.get(Category.GPU)),
    )


__all__ = [
    "BuildEvaluation",
    "Configuration",
    "ConfigurationError",
    "analyze",
    "check",
    "evaluate",
    "score",
]
