"""Metric and severity vocabularies used by the comparison engine.

Polarity is fixed per metric rather than inferred from the data. A metric
key outside the known set classifies as ``UnknownMetric`` whose polarity is
``Polarity.NONE``: a change in it is never reported as an improvement.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class Polarity(Enum):
    """Which direction of change counts as an improvement."""

    HIGHER_IS_BETTER = "higher_is_better"
    LOWER_IS_BETTER = "lower_is_better"
    NONE = "none"

    def is_improvement(self, diff: float) -> bool:
        if self is Polarity.HIGHER_IS_BETTER:
            return diff > 0
        if self is Polarity.LOWER_IS_BETTER:
            return diff < 0
        return False


class KnownMetric(Enum):
    """SonarCloud metrics the engine knows the polarity of."""

    COVERAGE = "coverage"
    BUGS = "bugs"
    VULNERABILITIES = "vulnerabilities"
    CODE_SMELLS = "code_smells"
    DUPLICATED_LINES_DENSITY = "duplicated_lines_density"

    @property
    def key(self) -> str:
        return self.value

    @property
    def polarity(self) -> Polarity:
        if self is KnownMetric.COVERAGE:
            return Polarity.HIGHER_IS_BETTER
        return Polarity.LOWER_IS_BETTER

    def is_improvement(self, diff: float) -> bool:
        return self.polarity.is_improvement(diff)


@dataclass(frozen=True)
class UnknownMetric:
    """Any metric key without a polarity rule (ncloc, security_hotspots, ...)."""

    name: str

    @property
    def key(self) -> str:
        return self.name

    @property
    def polarity(self) -> Polarity:
        return Polarity.NONE

    def is_improvement(self, diff: float) -> bool:
        return False


MetricKind = Union[KnownMetric, UnknownMetric]

_BY_KEY = {m.value: m for m in KnownMetric}


def classify_metric(name: str) -> MetricKind:
    """Map a metric key to its known variant or ``UnknownMetric(name)``."""
    return _BY_KEY.get(name, UnknownMetric(name))


class Severity(Enum):
    """Issue severities, declared in priority order."""

    BLOCKER = "BLOCKER"
    CRITICAL = "CRITICAL"
    MAJOR = "MAJOR"
    MINOR = "MINOR"
    INFO = "INFO"


SEVERITY_ORDER = tuple(s.value for s in Severity)
