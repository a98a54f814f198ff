from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet

DESIRED_RUNNERS_METRIC = "desired_runners"


@dataclass(frozen=True)
class Runner:
    id: int


@dataclass(frozen=True)
class Job:
    id: int
    status: str
    tags: FrozenSet[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class MetricSample:
    """A single metric value in the shape expected by the external scaler."""
    value: int
    name: str = DESIRED_RUNNERS_METRIC

    def to_dict(self) -> Dict[str, Any]:
        return {"metricName": self.name, "metricValue": self.value}
