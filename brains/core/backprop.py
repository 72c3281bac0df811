"""Backpropagation and the lazy training trace.

Every function here returns a new network; the weights passed in are never
written to.
"""

from __future__ import annotations

from itertools import islice
from typing import Iterator, List, Sequence

import numpy as np

from .activations import activate, activate_derivative
from .linalg import dot, freeze, transpose
from .network import _check_expected, _check_pairs, run_forward
from .types import Array, Network, Vector

DEFAULT_LEARNING_RATE = 0.2


def _hidden_deltas(deltas: Array, weights: Array, ins: Array) -> Array:
    weighted_errors = [dot(deltas, column) for column in transpose(weights)]
    # Row 0 of the transpose belongs to the bias unit, which has no upstream error.
    return freeze(activate_derivative(ins) * np.asarray(weighted_errors[1:]))


def _updated_layer(weights: Array, acts: Array, deltas: Array, learning_rate: float) -> Array:
    return freeze(
        [
            [weight + learning_rate * a * delta for weight, a in zip(node, acts)]
            for node, delta in zip(weights, deltas)
        ]
    )


def backpropagate(
    input_vector: Vector,
    expected: Vector,
    network: Network,
    learning_rate: float = DEFAULT_LEARNING_RATE,
) -> Network:
    """Return the network obtained by one online update on a single example."""

    states = run_forward(input_vector, network)
    output = states[-1]
    expected = _check_expected(expected, output.acts.shape[0])

    output_deltas = freeze(activate_derivative(output.ins) * (expected - output.acts))

    # Walk from the output layer back towards the input, collecting one delta
    # vector per weight matrix (back-to-front).
    r_deltas: List[Array] = [output_deltas]
    for idx in range(len(network) - 1, 0, -1):
        r_deltas.append(_hidden_deltas(r_deltas[-1], network[idx], states[idx].ins))

    new_layers = [
        _updated_layer(network[idx], states[idx].acts, deltas, learning_rate)
        for idx, deltas in zip(range(len(network) - 1, -1, -1), r_deltas)
    ]
    return tuple(reversed(new_layers))


def backpropagate_set(
    inputs: Sequence[Vector],
    expecteds: Sequence[Vector],
    network: Network,
    learning_rate: float = DEFAULT_LEARNING_RATE,
) -> Network:
    """Run :func:`backpropagate` over every example in order (one epoch)."""

    _check_pairs(inputs, expecteds)
    for input_vector, expected in zip(inputs, expecteds):
        network = backpropagate(input_vector, expected, network, learning_rate)
    return network


def train(
    inputs: Sequence[Vector],
    expecteds: Sequence[Vector],
    network: Network,
    learning_rate: float = DEFAULT_LEARNING_RATE,
) -> Iterator[Network]:
    """Return an endless iterator of networks, each trained one epoch more.

    The first element is ``network`` itself.  Nothing is computed until the
    iterator is advanced.
    """

    _check_pairs(inputs, expecteds)
    inputs = list(inputs)
    expecteds = list(expecteds)

    def _trace() -> Iterator[Network]:
        current = network
        while True:
            yield current
            current = backpropagate_set(inputs, expecteds, current, learning_rate)

    return _trace()


def trained(
    inputs: Sequence[Vector],
    expecteds: Sequence[Vector],
    network: Network,
    epochs: int,
    learning_rate: float = DEFAULT_LEARNING_RATE,
) -> Network:
    """Return the network after ``epochs`` passes over the training set."""

    if epochs < 0:
        raise ValueError(f"epochs must be non-negative, got {epochs}")
    trace = train(inputs, expecteds, network, learning_rate)
    return next(islice(trace, epochs, None))


def backpropagate_single_hidden(
    input_vector: Vector,
    expected: Vector,
    network: Network,
    learning_rate: float = DEFAULT_LEARNING_RATE,
) -> Network:
    """Single-hidden-layer backpropagation with every step spelled out.

    Produces the same weights as :func:`backpropagate` for a network with
    exactly one hidden layer; it exists for readability.
    """

    if len(network) != 2:
        raise ValueError(
            f"Expected a network with one hidden layer (2 matrices), got {len(network)}"
        )
    input_to_hidden, hidden_to_output = network
    n_in = np.shape(input_to_hidden)[1] - 1
    inputs = np.asarray(input_vector, dtype=np.float64)
    if inputs.shape != (n_in,):
        raise ValueError(f"Network expects {n_in} inputs, got shape {inputs.shape}")
    if not np.all(np.isfinite(inputs)):
        raise ValueError(f"Inputs must be finite, got {inputs.tolist()}")

    input_as = np.concatenate(([1.0], inputs))
    hidden_in = np.array([dot(input_as, node) for node in input_to_hidden])
    hidden_as = np.concatenate(([1.0], activate(hidden_in)))
    output_in = np.array([dot(hidden_as, node) for node in hidden_to_output])
    output_as = activate(output_in)
    expected = _check_expected(expected, output_as.shape[0])

    output_deltas = activate_derivative(output_in) * (expected - output_as)
    inter_output_sums = [dot(output_deltas, col) for col in transpose(hidden_to_output)]
    hidden_deltas = activate_derivative(hidden_in) * np.asarray(inter_output_sums[1:])

    new_h_o = _updated_layer(hidden_to_output, hidden_as, output_deltas, learning_rate)
    new_i_h = _updated_layer(input_to_hidden, input_as, hidden_deltas, learning_rate)
    return (new_i_h, new_h_o)


__all__ = [
    "DEFAULT_LEARNING_RATE",
    "backpropagate",
    "backpropagate_set",
    "backpropagate_single_hidden",
    "train",
    "trained",
]
