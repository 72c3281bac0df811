from __future__ import annotations

import math
from itertools import islice

import numpy as np
import pytest

from brains.core import backprop
from brains.core.backprop import (
    backpropagate,
    backpropagate_set,
    backpropagate_single_hidden,
    train,
    trained,
)
from brains.core.linalg import freeze
from brains.core.network import error, initialize, run, set_error

GATE_INPUTS = [[1, 1], [1, 0], [0, 1], [0, 0]]
# AND, OR, XOR, NOR
GATE_EXPECTEDS = [[1, 1, 0, 0], [0, 1, 1, 0], [0, 1, 1, 0], [0, 0, 0, 1]]


def _perturbed(network, layer, row, col, eps):
    weights = np.array(network[layer])
    weights[row, col] += eps
    return network[:layer] + (freeze(weights),) + network[layer + 1 :]


def _numeric_gradient(x, y, network, eps=1e-6):
    grads = []
    for layer, weights in enumerate(network):
        grad = np.zeros_like(weights)
        for row in range(weights.shape[0]):
            for col in range(weights.shape[1]):
                plus = error(x, y, _perturbed(network, layer, row, col, eps))
                minus = error(x, y, _perturbed(network, layer, row, col, -eps))
                grad[row, col] = (plus - minus) / (2 * eps)
        grads.append(grad)
    return grads


def test_direct_network_update_by_hand():
    network = (freeze([[0.5, 0.25]]),)
    updated = backpropagate([2.0], [0.0], network, learning_rate=0.2)

    out = math.tanh(1.0)
    delta = (1.0 - out**2) * (0.0 - out)
    assert len(updated) == 1
    assert np.allclose(updated[0], [[0.5 + 0.2 * delta, 0.25 + 0.2 * 2.0 * delta]])


@pytest.mark.parametrize("sizes", [[2, 2], [2, 3, 1], [3, 4, 3, 2]])
def test_update_follows_negative_error_gradient(sizes):
    network = initialize(sizes, seed=11)
    x = np.linspace(-0.5, 1.0, sizes[0])
    y = np.linspace(0.5, -0.5, sizes[-1])
    lr = 0.1

    updated = backpropagate(x, y, network, learning_rate=lr)
    for old, new, grad in zip(network, updated, _numeric_gradient(x, y, network)):
        np.testing.assert_allclose(new - old, -lr * grad, rtol=1e-5, atol=1e-8)


def test_backpropagate_leaves_original_network_untouched():
    network = initialize(2, 3, 4, seed=0)
    snapshot = [np.array(w) for w in network]
    updated = backpropagate([1, 0], [0, 1, 1, 0], network)
    assert updated is not network
    for before, after in zip(snapshot, network):
        assert np.array_equal(before, after)
    assert all(not w.flags.writeable for w in updated)
    assert [w.shape for w in updated] == [w.shape for w in network]


def test_backpropagate_rejects_wrong_expected_width():
    network = initialize(2, 3, 4, seed=0)
    with pytest.raises(ValueError, match="4 outputs"):
        backpropagate([1, 0], [1, 0], network)


def test_single_hidden_reference_matches_general_form():
    network = initialize(2, 3, 4, seed=9)
    for x, y in zip(GATE_INPUTS, GATE_EXPECTEDS):
        general = backpropagate(x, y, network, learning_rate=0.3)
        spelled_out = backpropagate_single_hidden(x, y, network, learning_rate=0.3)
        for a, b in zip(general, spelled_out):
            np.testing.assert_allclose(a, b, rtol=1e-12, atol=1e-12)
        network = general


def test_single_hidden_reference_rejects_other_depths():
    with pytest.raises(ValueError):
        backpropagate_single_hidden([1, 0], [1], initialize(2, 3, 2, 1, seed=0))


def test_backpropagation_refuses_non_finite_examples():
    network = initialize(2, 3, 1, seed=0)
    with pytest.raises(ValueError, match="finite"):
        backpropagate([math.nan, 0.0], [1.0], network)
    with pytest.raises(ValueError, match="finite"):
        backpropagate([1.0, 0.0], [math.inf], network)
    with pytest.raises(ValueError, match="finite"):
        backpropagate_single_hidden([0.0, math.inf], [1.0], network)


def test_repeated_updates_reduce_example_error():
    network = initialize(2, 3, 1, seed=0)
    x, y = [1.0, 0.0], [0.0]
    errors = [error(x, y, network)]
    for _ in range(30):
        network = backpropagate(x, y, network, learning_rate=0.05)
        errors.append(error(x, y, network))
    assert all(later < earlier for earlier, later in zip(errors, errors[1:]))


def test_logic_gate_training_reduces_set_error():
    untrained = initialize(2, 3, 4, seed=0)
    trace = train(GATE_INPUTS, GATE_EXPECTEDS, untrained)
    network_100 = next(islice(trace, 100, None))
    assert set_error(GATE_INPUTS, GATE_EXPECTEDS, network_100) < set_error(
        GATE_INPUTS, GATE_EXPECTEDS, untrained
    )


def test_train_starts_with_initial_network_and_is_deterministic():
    network = initialize(2, 3, 4, seed=4)
    first = train(GATE_INPUTS, GATE_EXPECTEDS, network)
    assert next(first) is network

    fifth_a = trained(GATE_INPUTS, GATE_EXPECTEDS, network, 5)
    fifth_b = next(islice(train(GATE_INPUTS, GATE_EXPECTEDS, network), 5, None))
    for a, b in zip(fifth_a, fifth_b):
        assert np.array_equal(a, b)

    fifth_c = trained(GATE_INPUTS, GATE_EXPECTEDS, initialize(2, 3, 4, seed=4), 5)
    for a, c in zip(fifth_a, fifth_c):
        assert np.array_equal(a, c)


def test_train_is_one_epoch_per_element():
    network = initialize(2, 3, 4, seed=6)
    trace = list(islice(train(GATE_INPUTS, GATE_EXPECTEDS, network, 0.1), 3))
    stepped = backpropagate_set(GATE_INPUTS, GATE_EXPECTEDS, network, 0.1)
    for a, b in zip(trace[1], stepped):
        assert np.array_equal(a, b)

    manual = network
    for x, y in zip(GATE_INPUTS, GATE_EXPECTEDS):
        manual = backpropagate(x, y, manual, 0.1)
    for a, b in zip(stepped, manual):
        assert np.array_equal(a, b)


def test_train_is_lazy(monkeypatch):
    calls = []
    real_step = backprop.backpropagate_set

    def counting_step(*args, **kwargs):
        calls.append(1)
        return real_step(*args, **kwargs)

    monkeypatch.setattr(backprop, "backpropagate_set", counting_step)
    trace = train(GATE_INPUTS, GATE_EXPECTEDS, initialize(2, 3, 4, seed=0))
    assert calls == []
    next(trace)
    assert calls == []
    list(islice(trace, 3))
    assert len(calls) == 3


def test_train_rejects_mismatched_training_set():
    with pytest.raises(ValueError):
        train(GATE_INPUTS, GATE_EXPECTEDS[:3], initialize(2, 3, 4, seed=0))


def test_trained_zero_epochs_is_initial_network():
    network = initialize(2, 3, 4, seed=0)
    assert trained(GATE_INPUTS, GATE_EXPECTEDS, network, 0) is network
    with pytest.raises(ValueError):
        trained(GATE_INPUTS, GATE_EXPECTEDS, network, -1)


def test_zero_hidden_layer_network_trains():
    expecteds = [row[:2] for row in GATE_EXPECTEDS]  # AND, OR
    network = initialize(2, 2, seed=1)
    later = trained(GATE_INPUTS, expecteds, network, 30)
    assert len(later) == 1
    assert later[0].shape == (2, 3)
    assert run([1, 0], later).shape == (2,)
    assert set_error(GATE_INPUTS, expecteds, later) < set_error(GATE_INPUTS, expecteds, network)
