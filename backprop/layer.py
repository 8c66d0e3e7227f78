"""Dense sigmoid layer with in-place backpropagation."""
from __future__ import annotations

import math
import random
from typing import List, Sequence

from .errors import DimensionMismatch

Matrix = List[List[float]]
Vector = List[float]


def sigmoid(value: float) -> float:
    """Logistic function, evaluated without overflow for large ``|value|``."""

    if value >= 0.0:
        return 1.0 / (1.0 + math.exp(-value))
    exp_value = math.exp(value)
    return exp_value / (1.0 + exp_value)


def random_weight(rng: random.Random) -> float:
    """Draw a uniform value in ``[-1, 1)``."""

    return rng.random() * 2.0 - 1.0


class Layer:
    """Affine transform followed by a sigmoid, one row of weights per node.

    ``activation`` holds the output of the most recent :meth:`feedforward`
    call. :meth:`backpropagate` reads it, so the two must be called with the
    same input and nothing in between.
    """

    def __init__(self, weights: Matrix, bias: Vector):
        if not weights or not weights[0]:
            raise ValueError("a layer needs at least one node and one input")
        width = len(weights[0])
        for row in weights:
            if len(row) != width:
                raise DimensionMismatch("weight row", width, len(row))
        if len(weights) != len(bias):
            raise DimensionMismatch("bias", len(weights), len(bias))
        self.weights = weights
        self.bias = bias
        self.activation: Vector = [0.0] * len(weights)

    @classmethod
    def random(cls, num_inputs: int, num_nodes: int, rng: random.Random) -> "Layer":
        weights = [[random_weight(rng) for _ in range(num_inputs)] for _ in range(num_nodes)]
        bias = [random_weight(rng) for _ in range(num_nodes)]
        return cls(weights, bias)

    @property
    def num_nodes(self) -> int:
        return len(self.weights)

    @property
    def num_inputs(self) -> int:
        return len(self.weights[0])

    def feedforward(self, input: Sequence[float]) -> Vector:
        """Compute and store the activation for ``input``.

        The returned list is the layer's own buffer; it is overwritten by the
        next call.
        """

        if len(input) != self.num_inputs:
            raise DimensionMismatch("input", self.num_inputs, len(input))
        for i, row in enumerate(self.weights):
            total = self.bias[i]
            for weight, value in zip(row, input):
                total += weight * value
            self.activation[i] = sigmoid(total)
        return self.activation

    def backpropagate(self, input: Sequence[float], error: Sequence[float], learning_rate: float) -> Vector:
        """Apply one gradient step and return the error for the previous layer.

        Each residual entry accumulates a node's weight before that node's row
        is updated.
        """

        if len(input) != self.num_inputs:
            raise DimensionMismatch("input", self.num_inputs, len(input))
        if len(error) != self.num_nodes:
            raise DimensionMismatch("error", self.num_nodes, len(error))

        residual = [0.0] * self.num_inputs
        for i, row in enumerate(self.weights):
            value = self.activation[i]
            cost = error[i] * value * (1.0 - value)
            for j in range(len(row)):
                residual[j] += cost * row[j]
                row[j] += learning_rate * cost * input[j]
            self.bias[i] += learning_rate * cost
        return residual

    def squared_weight_sum(self) -> float:
        return sum(weight * weight for row in self.weights for weight in row)
