from itertools import islice

import brains


def test_gate_training_through_public_api():
    inputs = [[1, 1], [1, 0], [0, 1], [0, 0]]
    expecteds = [[1, 1, 0, 0], [0, 1, 1, 0], [0, 1, 1, 0], [0, 0, 0, 1]]

    untrained = brains.initialize(2, 3, 4, seed=0)
    network = next(islice(brains.train(inputs, expecteds, untrained), 100, None))

    assert brains.DEFAULT_LEARNING_RATE == 0.2
    assert brains.set_error(inputs, expecteds, network) < brains.set_error(
        inputs, expecteds, untrained
    )
    for x, y in zip(inputs, expecteds):
        assert len(brains.run(x, network)) == 4
        assert set(brains.classify(x, network)) <= {0, 1}
        assert brains.error(x, y, network) >= 0.0
