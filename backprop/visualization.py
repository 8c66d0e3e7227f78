"""Plotting utilities for training curves."""

from __future__ import annotations

from typing import Sequence

import matplotlib.pyplot as plt


def plot_loss_history(losses: Sequence[float], *, log_scale: bool = False):
    """Plot mean squared error across training epochs and return the figure."""

    figure = plt.figure()
    plt.plot(range(1, len(losses) + 1), losses)
    if log_scale:
        plt.yscale("log")
    plt.xlabel("Epoch")
    plt.ylabel("Mean squared error")
    plt.title("Training Loss")
    plt.tight_layout()
    return figure
