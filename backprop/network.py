"""Single hidden layer network trained by per-example backpropagation."""
from __future__ import annotations

import logging
import random
from typing import IO, Sequence

from .config import NetworkConfig
from .errors import DimensionMismatch, NetworkNotActivated
from .layer import Layer, Matrix, Vector

logger = logging.getLogger(__name__)


def mean_squared_error(result: Sequence[float], expected: Sequence[float]) -> float:
    """Average of the squared differences between ``result`` and ``expected``."""

    if len(result) != len(expected):
        raise DimensionMismatch("expected", len(result), len(expected))
    if not result:
        raise ValueError("mean squared error of empty vectors is undefined")
    total = 0.0
    for got, want in zip(result, expected):
        total += (want - got) ** 2
    return total / len(result)


def _scaled_copy(matrix: Matrix, scalar: float) -> Matrix:
    return [[value * scalar for value in row] for row in matrix]


def _subtract_in_place(matrix: Matrix, delta: Matrix) -> None:
    for row, delta_row in zip(matrix, delta):
        for j, value in enumerate(delta_row):
            row[j] -= value


class Network:
    """Input, one sigmoid hidden layer, and a sigmoid output layer.

    Training is coupled to activation: :meth:`train` reuses the activations
    left behind by :meth:`activate`, so it must follow an :meth:`activate`
    call on the same input. Activations are only valid until the next
    :meth:`activate` or :meth:`train` call.
    """

    def __init__(self, hidden: Layer, output: Layer):
        if output.num_inputs != hidden.num_nodes:
            raise DimensionMismatch("output layer input", hidden.num_nodes, output.num_inputs)
        self.hidden = hidden
        self.output = output
        self._activated_input: tuple[float, ...] | None = None

    @classmethod
    def from_config(cls, config: NetworkConfig) -> "Network":
        return new_network(
            config.input_dim,
            config.hidden_dim,
            config.output_dim,
            rng=random.Random(config.seed),
        )

    @property
    def num_inputs(self) -> int:
        return self.hidden.num_inputs

    @property
    def num_hidden(self) -> int:
        return self.hidden.num_nodes

    @property
    def num_outputs(self) -> int:
        return self.output.num_nodes

    @property
    def is_activated(self) -> bool:
        return self._activated_input is not None

    def activate(self, input: Sequence[float]) -> Vector:
        """Run ``input`` through both layers and return a copy of the output."""

        try:
            hidden = self.hidden.feedforward(input)
            result = self.output.feedforward(hidden)
        except DimensionMismatch:
            self._activated_input = None
            raise
        self._activated_input = tuple(input)
        return list(result)

    def train(self, input: Sequence[float], expected: Sequence[float], learning_rate: float, lam: float) -> None:
        """Backpropagate the error of the last activation and apply weight decay.

        Parameters
        ----------
        input:
            The vector most recently passed to :meth:`activate`.
        expected:
            Target output, one value per output node.
        learning_rate:
            Step size of the gradient update.
        lam:
            L2 regularisation strength. The decay subtracted from each weight
            is ``weight * lam / len(input)``, measured before the gradient
            update.
        """

        if len(expected) != self.num_outputs:
            raise DimensionMismatch("expected", self.num_outputs, len(expected))
        if self._activated_input is None or self._activated_input != tuple(input):
            raise NetworkNotActivated("train() must follow activate() with the same input")

        scale = lam / len(input)
        hidden_decay = _scaled_copy(self.hidden.weights, scale)
        output_decay = _scaled_copy(self.output.weights, scale)

        error = [want - got for want, got in zip(expected, self.output.activation)]
        residual = self.output.backpropagate(self.hidden.activation, error, learning_rate)
        self.hidden.backpropagate(input, residual, learning_rate)

        _subtract_in_place(self.hidden.weights, hidden_decay)
        _subtract_in_place(self.output.weights, output_decay)
        self._activated_input = None

    def regularized_cost(self, result: Sequence[float], expected: Sequence[float], lam: float) -> float:
        """Mean squared error plus the L2 penalty over both weight matrices."""

        penalty = self.hidden.squared_weight_sum() + self.output.squared_weight_sum()
        return mean_squared_error(result, expected) + lam / (2 * len(result)) * penalty

    def parameters(self) -> dict[str, Matrix | Vector]:
        return {
            "hidden_weights": [row.copy() for row in self.hidden.weights],
            "hidden_bias": self.hidden.bias.copy(),
            "output_weights": [row.copy() for row in self.output.weights],
            "output_bias": self.output.bias.copy(),
        }

    def save(self, stream: IO) -> None:
        from .persistence import save

        save(self, stream)

    @classmethod
    def load(cls, stream: IO) -> "Network":
        from .persistence import load

        return load(stream)

    def __repr__(self) -> str:
        return f"<Network inputs={self.num_inputs} hidden={self.num_hidden} outputs={self.num_outputs}>"

    def __str__(self) -> str:
        return (
            f"Hidden=[Weights={self.hidden.weights}, Bias={self.hidden.bias}]\n"
            f"Output=[Weights={self.output.weights}, Bias={self.output.bias}]"
        )


def new_network(
    num_inputs: int,
    num_hidden: int,
    num_outputs: int,
    rng: random.Random | None = None,
) -> Network:
    """Build a network with weights and biases drawn uniformly from ``[-1, 1)``.

    Pass a seeded ``random.Random`` as ``rng`` for reproducible weights.
    """

    for name, value in (("num_inputs", num_inputs), ("num_hidden", num_hidden), ("num_outputs", num_outputs)):
        if value <= 0:
            raise ValueError(f"{name} must be positive")
    rng = rng if rng is not None else random.Random()
    hidden = Layer.random(num_inputs, num_hidden, rng)
    output = Layer.random(num_hidden, num_outputs, rng)
    logger.debug("Created network with %d inputs, %d hidden, %d outputs", num_inputs, num_hidden, num_outputs)
    return Network(hidden, output)
