"""Core typing contracts for brains."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

import numpy as np

Array = np.ndarray

# One read-only ``(n_dst, n_src + 1)`` matrix per layer transition, column 0
# holding the bias weight.
Network = Tuple[Array, ...]

Vector = Sequence[float]


@dataclass(frozen=True)
class LayerState:
    """One entry of a forward trace.

    ``ins`` holds the weighted sums of the layer's real nodes (empty for the
    input layer) and ``acts`` the activations as seen by the next layer, i.e.
    with the bias unit prepended everywhere except the output layer.
    """

    ins: Array
    acts: Array


@dataclass(frozen=True)
class TrainingResult:
    """Summary returned by :meth:`brains.training.trainer.Trainer.run`."""

    network: Network
    best_network: Network
    best_epoch: int
    epochs: int
    history: List[Dict[str, float]] = field(default_factory=list)


@dataclass(frozen=True)
class RunResult:
    """Paths and headline numbers produced by a pipeline run."""

    epochs: int
    initial_error: float
    final_error: float
    metrics_path: str
    summary_path: str
