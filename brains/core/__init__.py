"""Core numerical primitives and the backpropagation engine."""

from . import activations, backprop, linalg, network, types
from .backprop import (
    DEFAULT_LEARNING_RATE,
    backpropagate,
    backpropagate_set,
    backpropagate_single_hidden,
    train,
    trained,
)
from .network import (
    classify,
    error,
    initialize,
    layer_sizes,
    run,
    run_forward,
    set_error,
    validate_network,
)

__all__ = [
    "activations",
    "backprop",
    "linalg",
    "network",
    "types",
    "DEFAULT_LEARNING_RATE",
    "backpropagate",
    "backpropagate_set",
    "backpropagate_single_hidden",
    "classify",
    "error",
    "initialize",
    "layer_sizes",
    "run",
    "run_forward",
    "set_error",
    "train",
    "trained",
    "validate_network",
]
