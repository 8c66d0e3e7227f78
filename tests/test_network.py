import random

import pytest

from backprop import (
    DimensionMismatch,
    Layer,
    Network,
    NetworkConfig,
    NetworkNotActivated,
    logic_gate_dataset,
    mean_squared_error,
    new_network,
    sigmoid,
)


def make_network(seed: int = 3) -> Network:
    return new_network(2, 3, 2, rng=random.Random(seed))


def test_activate_outputs_lie_in_unit_interval_and_are_deterministic() -> None:
    net = make_network()
    for inputs in ([0.0, 0.0], [1.0, -1.0], [5.0, 3.0]):
        first = net.activate(inputs)
        second = net.activate(inputs)
        assert first == second
        assert len(first) == 2
        assert all(0.0 < value < 1.0 for value in first)


def test_activate_returns_a_copy() -> None:
    net = make_network()
    result = net.activate([0.2, 0.4])
    result[0] = 42.0
    assert net.output.activation[0] != 42.0


def test_activate_rejects_wrong_width() -> None:
    net = make_network()
    with pytest.raises(DimensionMismatch):
        net.activate([1.0, 2.0, 3.0])
    assert not net.is_activated


def test_same_seed_gives_same_weights() -> None:
    assert make_network(11).parameters() == make_network(11).parameters()
    assert make_network(11).parameters() != make_network(12).parameters()


def test_from_config_uses_seed() -> None:
    config = NetworkConfig(input_dim=2, hidden_dim=4, output_dim=1, seed=5)
    net = Network.from_config(config)
    assert (net.num_inputs, net.num_hidden, net.num_outputs) == (2, 4, 1)
    assert net.parameters() == Network.from_config(config).parameters()


@pytest.mark.parametrize("dims", [(0, 2, 1), (2, 0, 1), (2, 2, -1)])
def test_new_network_requires_positive_dimensions(dims) -> None:
    with pytest.raises(ValueError):
        new_network(*dims)


def test_train_changes_both_layers() -> None:
    net = make_network()
    before = net.parameters()
    net.activate([1.0, 0.5])
    net.train([1.0, 0.5], [1.0, 0.0], 0.5, 0.0)
    after = net.parameters()
    assert after["hidden_weights"] != before["hidden_weights"] or after["hidden_bias"] != before["hidden_bias"]
    assert after["output_weights"] != before["output_weights"] or after["output_bias"] != before["output_bias"]


def test_train_requires_matching_activation() -> None:
    net = make_network()
    with pytest.raises(NetworkNotActivated):
        net.train([1.0, 0.5], [1.0, 0.0], 0.1, 0.0)

    net.activate([0.0, 0.5])
    with pytest.raises(NetworkNotActivated):
        net.train([1.0, 0.5], [1.0, 0.0], 0.1, 0.0)


def test_train_invalidates_activation() -> None:
    net = make_network()
    net.activate([1.0, 0.5])
    net.train([1.0, 0.5], [1.0, 0.0], 0.1, 0.0)
    assert not net.is_activated
    with pytest.raises(NetworkNotActivated):
        net.train([1.0, 0.5], [1.0, 0.0], 0.1, 0.0)


def test_train_rejects_wrong_expected_length() -> None:
    net = make_network()
    net.activate([1.0, 0.5])
    with pytest.raises(DimensionMismatch):
        net.train([1.0, 0.5], [1.0], 0.1, 0.0)


def test_weight_decay_without_gradient_step() -> None:
    net = make_network()
    before = net.parameters()
    net.activate([1.0, 0.5])
    net.train([1.0, 0.5], [1.0, 0.0], 0.0, 0.4)
    after = net.parameters()

    factor = 1.0 - 0.4 / 2
    for key in ("hidden_weights", "output_weights"):
        for row_before, row_after in zip(before[key], after[key]):
            assert row_after == pytest.approx([value * factor for value in row_before])
    assert after["hidden_bias"] == before["hidden_bias"]
    assert after["output_bias"] == before["output_bias"]


def test_weight_decay_is_measured_before_backpropagation() -> None:
    w_hidden, b_hidden, w_output, b_output = 0.5, 0.0, -0.3, 0.1
    rate, lam, x, target = 0.5, 0.2, 1.0, 1.0
    net = Network(Layer([[w_hidden]], [b_hidden]), Layer([[w_output]], [b_output]))

    net.activate([x])
    net.train([x], [target], rate, lam)

    h = sigmoid(w_hidden * x + b_hidden)
    o = sigmoid(w_output * h + b_output)
    cost_out = (target - o) * o * (1.0 - o)
    cost_hidden = cost_out * w_output * h * (1.0 - h)
    expected_output_weight = w_output + rate * cost_out * h - w_output * lam
    expected_hidden_weight = w_hidden + rate * cost_hidden * x - w_hidden * lam

    assert net.output.weights[0][0] == pytest.approx(expected_output_weight)
    assert net.hidden.weights[0][0] == pytest.approx(expected_hidden_weight)
    assert net.output.bias[0] == pytest.approx(b_output + rate * cost_out)
    assert net.hidden.bias[0] == pytest.approx(b_hidden + rate * cost_hidden)


def test_mean_squared_error_properties() -> None:
    a = [0.1, 0.7, 0.3]
    b = [0.4, 0.2, 0.9]
    assert mean_squared_error(a, a) == 0.0
    assert mean_squared_error(a, b) == pytest.approx(mean_squared_error(b, a))
    assert mean_squared_error(a, b) == pytest.approx((0.09 + 0.25 + 0.36) / 3)


def test_mean_squared_error_rejects_bad_input() -> None:
    with pytest.raises(DimensionMismatch):
        mean_squared_error([0.1, 0.2], [0.1])
    with pytest.raises(ValueError):
        mean_squared_error([], [])


def test_regularized_cost() -> None:
    net = Network(Layer([[0.5, -1.0]], [0.0]), Layer([[2.0]], [0.0]))
    result, expected = [0.25], [0.75]
    assert net.regularized_cost(result, expected, 0.0) == mean_squared_error(result, expected)
    assert net.regularized_cost(result, expected, 0.4) == pytest.approx(0.25 + 0.4 / 2 * (0.25 + 1.0 + 4.0))


def test_network_learns_and_gate() -> None:
    inputs, targets = logic_gate_dataset("and")
    net = new_network(2, 3, 1, rng=random.Random(42))
    for _ in range(10000):
        for x, y in zip(inputs, targets):
            net.activate(x)
            net.train(x, y, 0.1, 0.0)

    error = sum(mean_squared_error(net.activate(x), y) for x, y in zip(inputs, targets)) / len(inputs)
    assert error < 0.05


def test_string_representations() -> None:
    net = Network(Layer([[0.5]], [0.25]), Layer([[1.0]], [-0.5]))
    assert str(net) == "Hidden=[Weights=[[0.5]], Bias=[0.25]]\nOutput=[Weights=[[1.0]], Bias=[-0.5]]"
    assert repr(net) == "<Network inputs=1 hidden=1 outputs=1>"


def test_network_rejects_unchained_layers() -> None:
    with pytest.raises(DimensionMismatch):
        Network(Layer([[0.5], [0.1]], [0.0, 0.0]), Layer([[1.0]], [0.0]))
