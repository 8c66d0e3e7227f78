"""Epoch loop around :meth:`Network.activate` and :meth:`Network.train`."""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
import random
from typing import Sequence

import numpy as np
from tqdm.auto import tqdm

from .config import EarlyStoppingConfig, TrainingConfig
from .network import Network, mean_squared_error

logger = logging.getLogger(__name__)


@dataclass
class TrainingHistory:
    """Per-epoch mean squared error collected during :meth:`Trainer.fit`."""

    losses: list[float] = field(default_factory=list)
    stopped_early: bool = False

    @property
    def epochs(self) -> int:
        return len(self.losses)


def _check_dataset(inputs: Sequence[Sequence[float]], targets: Sequence[Sequence[float]]) -> None:
    if len(inputs) != len(targets):
        raise ValueError(f"got {len(inputs)} inputs but {len(targets)} targets")
    if not inputs:
        raise ValueError("dataset must contain at least one example")


class Trainer:
    """Stochastic gradient descent over a dataset, one example at a time."""

    def __init__(self, network: Network, config: TrainingConfig | None = None):
        self.network = network
        self.config = config if config is not None else TrainingConfig()
        self.rng = random.Random(self.config.seed)

    def train_step(self, input: Sequence[float], target: Sequence[float]) -> float:
        """Train on a single example and return its error before the update."""

        result = self.network.activate(input)
        loss = mean_squared_error(result, target)
        self.network.train(input, target, self.config.learning_rate, self.config.l2_lambda)
        return loss

    def evaluate(self, inputs: Sequence[Sequence[float]], targets: Sequence[Sequence[float]]) -> float:
        """Mean squared error over the dataset, leaving the weights untouched."""

        _check_dataset(inputs, targets)
        errors = [mean_squared_error(self.network.activate(x), y) for x, y in zip(inputs, targets)]
        return float(np.mean(errors))

    def fit(
        self,
        inputs: Sequence[Sequence[float]],
        targets: Sequence[Sequence[float]],
        *,
        early_stopping: EarlyStoppingConfig | None = None,
    ) -> TrainingHistory:
        """Train for up to ``config.epochs`` passes over the dataset."""

        _check_dataset(inputs, targets)
        history = TrainingHistory()
        best_loss = float("inf")
        epochs_without_improvement = 0
        order = list(range(len(inputs)))

        epochs = range(1, self.config.epochs + 1)
        if self.config.show_progress:
            epochs = tqdm(epochs, desc="Training", unit="epoch")

        for epoch in epochs:
            if self.config.shuffle:
                self.rng.shuffle(order)
            losses = [self.train_step(inputs[index], targets[index]) for index in order]
            loss = float(np.mean(losses))
            history.losses.append(loss)

            if self.config.log_every and epoch % self.config.log_every == 0:
                logger.debug("epoch %d: mse=%.6f", epoch, loss)

            if early_stopping is not None:
                if loss + early_stopping.min_delta < best_loss:
                    best_loss = loss
                    epochs_without_improvement = 0
                else:
                    epochs_without_improvement += 1
                    if epochs_without_improvement >= early_stopping.patience:
                        history.stopped_early = True
                        logger.info("Stopping early after %d epochs (mse=%.6f)", epoch, loss)
                        break

        return history
