"""Network construction and forward evaluation."""

from __future__ import annotations

from numbers import Integral
from typing import List, Sequence, Tuple

import numpy as np

from .activations import activate
from .linalg import build_matrix, dot, freeze
from .types import Array, LayerState, Network, Vector


def _flatten_sizes(sizes: Sequence) -> List[int]:
    if len(sizes) == 1 and not isinstance(sizes[0], Integral):
        sizes = tuple(sizes[0])
    out: List[int] = []
    for size in sizes:
        if isinstance(size, bool) or not isinstance(size, Integral):
            raise ValueError(f"Layer sizes must be integers, got {size!r}")
        if size <= 0:
            raise ValueError(f"Layer sizes must be positive, got {size}")
        out.append(int(size))
    if len(out) < 2:
        raise ValueError(
            f"A network needs at least an input and an output layer, got sizes {out}"
        )
    return out


def initialize(
    *layer_sizes,
    seed: int | None = None,
    rng: np.random.Generator | None = None,
) -> Network:
    """Randomly initialise a network with layers of the given sizes.

    ``initialize(2, 3, 4)`` and ``initialize([2, 3, 4])`` are equivalent.
    Each matrix has one row per node of the next layer and one column per
    node of the current layer plus its bias unit; every weight is drawn
    uniformly from ``[0, 1)``.
    """

    sizes = _flatten_sizes(layer_sizes)
    rng = rng if rng is not None else np.random.default_rng(seed)
    return tuple(
        build_matrix(n_src + 1, n_dst, rng.random)
        for n_src, n_dst in zip(sizes[:-1], sizes[1:])
    )


def validate_network(network: Network) -> None:
    """Raise ``ValueError`` unless ``network`` is a well-formed chain of matrices."""

    if len(network) == 0:
        raise ValueError("A network needs at least one weight matrix")
    for idx, weights in enumerate(network):
        if np.ndim(weights) != 2 or 0 in np.shape(weights):
            raise ValueError(
                f"Layer {idx} must be a non-empty 2-d matrix, got shape {np.shape(weights)}"
            )
    for idx in range(len(network) - 1):
        n_dst = np.shape(network[idx])[0]
        width = np.shape(network[idx + 1])[1]
        if width != n_dst + 1:
            raise ValueError(
                f"Layer {idx} feeds {n_dst} nodes but layer {idx + 1} expects "
                f"{width - 1} inputs plus bias"
            )


def layer_sizes(network: Network) -> List[int]:
    """Recover the per-layer node counts ``network`` was built from."""

    validate_network(network)
    sizes = [np.shape(network[0])[1] - 1]
    sizes.extend(np.shape(weights)[0] for weights in network)
    return sizes


def _execute_layer(previous: LayerState, weights: Array) -> LayerState:
    ins = freeze([dot(previous.acts, node) for node in weights])
    acts = freeze(np.concatenate(([1.0], activate(ins))))
    return LayerState(ins=ins, acts=acts)


def run_forward(input_vector: Vector, network: Network) -> Tuple[LayerState, ...]:
    """Run ``network`` on ``input_vector`` and keep every layer's state.

    The first entry belongs to the input layer and has no weighted sums.
    The last entry belongs to the output layer and carries no bias unit, so
    its activations are the network's answer.
    """

    validate_network(network)
    inputs = np.asarray(input_vector, dtype=np.float64)
    n_in = np.shape(network[0])[1] - 1
    if inputs.ndim != 1 or inputs.shape[0] != n_in:
        raise ValueError(
            f"Network expects {n_in} inputs, got an input of shape {inputs.shape}"
        )
    if not np.all(np.isfinite(inputs)):
        raise ValueError(f"Inputs must be finite, got {inputs.tolist()}")

    states = [LayerState(ins=freeze([]), acts=freeze(np.concatenate(([1.0], inputs))))]
    for weights in network:
        states.append(_execute_layer(states[-1], weights))
    output = states[-1]
    states[-1] = LayerState(ins=output.ins, acts=output.acts[1:])
    return tuple(states)


def run(input_vector: Vector, network: Network) -> Array:
    """Return the output layer's activations for ``input_vector``."""

    return run_forward(input_vector, network)[-1].acts


def classify(input_vector: Vector, network: Network) -> List[int]:
    """Threshold the network's response at 0.5.

    Responses above 0.5 map to 0 and everything else to 1.
    """

    return [0 if value > 0.5 else 1 for value in run(input_vector, network)]


def _check_expected(expected: Vector, width: int) -> Array:
    expected = np.asarray(expected, dtype=np.float64)
    if expected.ndim != 1 or expected.shape[0] != width:
        raise ValueError(
            f"Network produces {width} outputs, got an expected vector of shape "
            f"{expected.shape}"
        )
    if not np.all(np.isfinite(expected)):
        raise ValueError(f"Expected vector must be finite, got {expected.tolist()}")
    return expected


def error(input_vector: Vector, expected: Vector, network: Network) -> float:
    """Half the squared distance between the network's answer and ``expected``."""

    output = run(input_vector, network)
    expected = _check_expected(expected, output.shape[0])
    return float(np.sum(0.5 * (expected - output) ** 2))


def _check_pairs(inputs: Sequence, expecteds: Sequence) -> None:
    if len(inputs) != len(expecteds):
        raise ValueError(
            f"Got {len(inputs)} inputs but {len(expecteds)} expected vectors"
        )


def set_error(inputs: Sequence[Vector], expecteds: Sequence[Vector], network: Network) -> float:
    """Total (not mean) error of ``network`` over a training set."""

    _check_pairs(inputs, expecteds)
    return float(sum(error(x, y, network) for x, y in zip(inputs, expecteds)))


__all__ = [
    "classify",
    "error",
    "initialize",
    "layer_sizes",
    "run",
    "run_forward",
    "set_error",
    "validate_network",
]
