"""Single hidden layer neural network trained by backpropagation."""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING

from .config import EarlyStoppingConfig, NetworkConfig, TrainingConfig
from .datasets import logic_gate_dataset
from .errors import DimensionMismatch, MalformedState, NetworkNotActivated
from .layer import Layer, sigmoid
from .network import Network, mean_squared_error, new_network
from .persistence import from_record, load, save, to_record
from .training import Trainer, TrainingHistory

if TYPE_CHECKING:  # pragma: no cover - import-time hinting only
    from .visualization import plot_loss_history

__all__ = [
    "DimensionMismatch",
    "EarlyStoppingConfig",
    "Layer",
    "MalformedState",
    "Network",
    "NetworkConfig",
    "NetworkNotActivated",
    "Trainer",
    "TrainingConfig",
    "TrainingHistory",
    "from_record",
    "load",
    "logic_gate_dataset",
    "mean_squared_error",
    "new_network",
    "plot_loss_history",
    "save",
    "sigmoid",
    "to_record",
]


def __getattr__(name: str):  # pragma: no cover - small wrapper
    if name == "plot_loss_history":
        return getattr(import_module("backprop.visualization"), name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
