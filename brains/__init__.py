"""brains public API."""

from .core import activations  # noqa: F401
from .core import types  # noqa: F401
from .core.backprop import (
    DEFAULT_LEARNING_RATE,
    backpropagate,
    backpropagate_set,
    train,
    trained,
)
from .core.network import classify, error, initialize, run, run_forward, set_error
from .training.pipelines import load_preset, presets, run_pipeline
from .training.trainer import Trainer

__all__ = [
    "DEFAULT_LEARNING_RATE",
    "Trainer",
    "activations",
    "backpropagate",
    "backpropagate_set",
    "classify",
    "error",
    "initialize",
    "load_preset",
    "presets",
    "run",
    "run_forward",
    "run_pipeline",
    "set_error",
    "train",
    "trained",
    "types",
]
