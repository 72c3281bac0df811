"""Epoch-by-epoch training driver built on the lazy training trace."""

from __future__ import annotations

from itertools import islice
from typing import Dict, List, Mapping, Sequence

from ..core.backprop import DEFAULT_LEARNING_RATE, train
from ..core.network import _check_pairs
from ..core.types import Network, TrainingResult, Vector
from .metrics import compute_metrics, default_metrics


class Trainer:
    """Walk the training trace of one training set and report on every epoch.

    Epoch 0 is the untrained network, so a run of ``epochs`` epochs reports
    ``epochs + 1`` times. Callbacks receive ``on_epoch(epoch, metrics)``, or
    are called directly when they only implement ``__call__``.
    """

    def __init__(
        self,
        inputs: Sequence[Vector],
        expecteds: Sequence[Vector],
        learning_rate: float = DEFAULT_LEARNING_RATE,
        callbacks: Sequence[object] | None = None,
    ) -> None:
        _check_pairs(inputs, expecteds)
        self.inputs = [tuple(x) for x in inputs]
        self.expecteds = [tuple(y) for y in expecteds]
        self.learning_rate = float(learning_rate)
        self.callbacks = list(callbacks or [])

    def run(
        self,
        network: Network,
        epochs: int,
        *,
        metric_names: Sequence[str] | str = "default",
        early_stopping_patience: int | None = None,
    ) -> TrainingResult:
        if epochs < 0:
            raise ValueError(f"epochs must be non-negative, got {epochs}")

        if isinstance(metric_names, str):
            if metric_names == "default" or metric_names.strip() == "":
                metric_names = default_metrics()
            else:
                metric_names = [m.strip() for m in metric_names.split(",") if m.strip()]
        metric_names = list(metric_names) or default_metrics()
        if "set_error" not in metric_names:
            metric_names.insert(0, "set_error")

        trace = train(self.inputs, self.expecteds, network, self.learning_rate)
        history: List[Dict[str, float]] = []
        best_error = float("inf")
        best_network = network
        best_epoch = 0
        epochs_no_improve = 0
        current = network
        epoch = 0

        for epoch, current in enumerate(islice(trace, epochs + 1)):
            metrics = dict(
                compute_metrics(metric_names, self.inputs, self.expecteds, current)
            )
            history.append({"epoch": float(epoch), **metrics})
            self._emit_epoch(epoch, metrics)

            if metrics["set_error"] < best_error - 1e-12:
                best_error = metrics["set_error"]
                best_network = current
                best_epoch = epoch
                epochs_no_improve = 0
            else:
                epochs_no_improve += 1
                if (
                    early_stopping_patience
                    and epochs_no_improve >= early_stopping_patience
                ):
                    break

        return TrainingResult(
            network=current,
            best_network=best_network,
            best_epoch=best_epoch,
            epochs=epoch,
            history=history,
        )

    def _emit_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        for callback in self.callbacks:
            if hasattr(callback, "on_epoch"):
                callback.on_epoch(epoch, metrics)  # type: ignore[attr-defined]
            elif callable(callback):
                callback(epoch, metrics)


__all__ = ["Trainer"]
