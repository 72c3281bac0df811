"""Per-epoch metrics computed from a network and its training set."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Mapping, Sequence

from ..core.network import error, set_error
from ..core.types import Network, Vector

MetricFn = Callable[[Sequence[Vector], Sequence[Vector], Network], float]


@dataclass(frozen=True)
class MetricResult:
    name: str
    value: float


def _errors(inputs: Sequence[Vector], expecteds: Sequence[Vector], network: Network) -> List[float]:
    return [error(x, y, network) for x, y in zip(inputs, expecteds)]


def _mean_error(inputs, expecteds, network) -> float:
    errors = _errors(inputs, expecteds, network)
    return sum(errors) / len(errors) if errors else 0.0


def _max_error(inputs, expecteds, network) -> float:
    return max(_errors(inputs, expecteds, network), default=0.0)


_METRICS: Dict[str, MetricFn] = {
    "set_error": set_error,
    "mean_error": _mean_error,
    "max_error": _max_error,
}


def default_metrics() -> List[str]:
    return ["set_error", "mean_error", "max_error"]


def available_metrics() -> List[str]:
    return sorted(_METRICS)


def compute_metric(
    name: str,
    inputs: Sequence[Vector],
    expecteds: Sequence[Vector],
    network: Network,
) -> MetricResult:
    key = name.lower()
    try:
        fn = _METRICS[key]
    except KeyError as exc:
        available = ", ".join(available_metrics())
        raise KeyError(f"Unknown metric {name!r}. Available metrics: {available}") from exc
    return MetricResult(name=key, value=float(fn(inputs, expecteds, network)))


def compute_metrics(
    names: Iterable[str],
    inputs: Sequence[Vector],
    expecteds: Sequence[Vector],
    network: Network,
) -> Mapping[str, float]:
    results: Dict[str, float] = {}
    for name in names:
        metric = compute_metric(name, inputs, expecteds, network)
        results[metric.name] = metric.value
    return results


__all__ = ["MetricResult", "available_metrics", "compute_metrics", "default_metrics"]
