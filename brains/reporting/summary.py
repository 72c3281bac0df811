"""End-of-run summary of a training trace."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping, Sequence

from ..core.types import TrainingResult


def parameter_count(layer_sizes: Sequence[int]) -> int:
    """Number of weights, bias weights included, in a network of these sizes."""

    return sum((n_src + 1) * n_dst for n_src, n_dst in zip(layer_sizes[:-1], layer_sizes[1:]))


def summarize(
    result: TrainingResult,
    *,
    dataset: str,
    layer_sizes: Sequence[int],
    learning_rate: float,
    seed: int | None = None,
) -> Mapping[str, object]:
    """Collapse a :class:`TrainingResult` into the numbers worth keeping."""

    errors = [entry["set_error"] for entry in result.history]
    initial, final = errors[0], errors[-1]
    return {
        "dataset": dataset,
        "layer_sizes": [int(size) for size in layer_sizes],
        "parameters": parameter_count(layer_sizes),
        "learning_rate": float(learning_rate),
        "seed": seed,
        "epochs": result.epochs,
        "initial_error": initial,
        "final_error": final,
        "best_epoch": result.best_epoch,
        "best_error": errors[result.best_epoch],
        # 0.0 for an untrained network that was already exact.
        "error_ratio": final / initial if initial else 0.0,
    }


def write_summary(path: str | Path, summary: Mapping[str, object]) -> str:
    """Write ``summary`` as sorted, indented JSON and return the path."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(summary, sort_keys=True, indent=2))
    return str(path)


__all__ = ["parameter_count", "summarize", "write_summary"]
