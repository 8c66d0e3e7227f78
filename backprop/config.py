"""Configuration dataclasses for network construction and training."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class NetworkConfig:
    """Topology of a single hidden layer network.

    Parameters
    ----------
    input_dim:
        Number of features in the input vector.
    hidden_dim:
        Number of sigmoid nodes in the hidden layer.
    output_dim:
        Number of sigmoid nodes in the output layer.
    seed:
        Optional seed for the random source used to initialise weights and
        biases. Leaving it unset draws a fresh, unseeded source.
    """

    input_dim: int
    hidden_dim: int
    output_dim: int
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.input_dim <= 0:
            raise ValueError("input_dim must be positive")
        if self.hidden_dim <= 0:
            raise ValueError("hidden_dim must be positive")
        if self.output_dim <= 0:
            raise ValueError("output_dim must be positive")


@dataclass(slots=True)
class TrainingConfig:
    """Settings for :class:`backprop.training.Trainer`.

    Parameters
    ----------
    learning_rate:
        Step size applied to every backpropagated update.
    l2_lambda:
        Strength of the L2 weight decay applied after each example. Zero
        disables decay.
    epochs:
        Maximum number of passes over the dataset.
    shuffle:
        Visit the examples in a new random order every epoch.
    seed:
        Seed for the shuffling order, for reproducible runs.
    show_progress:
        Display a ``tqdm`` progress bar over epochs.
    log_every:
        Emit a debug log record every ``log_every`` epochs. Zero disables
        periodic logging.
    """

    learning_rate: float = 0.1
    l2_lambda: float = 0.0
    epochs: int = 1000
    shuffle: bool = True
    seed: int | None = None
    show_progress: bool = False
    log_every: int = 0

    def __post_init__(self) -> None:
        if self.learning_rate <= 0.0:
            raise ValueError("learning_rate must be positive")
        if self.l2_lambda < 0.0:
            raise ValueError("l2_lambda must be non-negative")
        if self.epochs <= 0:
            raise ValueError("epochs must be positive")
        if self.log_every < 0:
            raise ValueError("log_every must be non-negative")


@dataclass(slots=True)
class EarlyStoppingConfig:
    """Configuration for optional early stopping during training."""

    patience: int = 20
    min_delta: float = 1e-4

    def __post_init__(self) -> None:
        if self.patience <= 0:
            raise ValueError("patience must be positive")
        if self.min_delta < 0.0:
            raise ValueError("min_delta must be non-negative")
