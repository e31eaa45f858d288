from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np

from .network import Network


def plot_history(history: list[dict[str, float]], path: Path) -> None:
    if not history:
        return

    g = np.array([h["generation"] for h in history], dtype=float)
    best = np.array([h["best_score"] for h in history], dtype=float)
    mean = np.array([h["mean_score"] for h in history], dtype=float)
    worst = np.array([h["worst_score"] for h in history], dtype=float)

    fig, ax = plt.subplots(figsize=(10, 4.5))
    ax.plot(g, best, label="best score", linewidth=2)
    ax.plot(g, mean, label="mean score", linewidth=1.6)
    ax.fill_between(g, worst, best, alpha=0.15, label="score range")
    ax.set_xlabel("generation")
    ax.set_ylabel("score")
    ax.grid(True, alpha=0.3)
    ax.legend()

    path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(path, dpi=180)
    plt.close(fig)


def _layer_positions(sizes: list[int]) -> list[np.ndarray]:
    positions = []
    for size in sizes:
        if size == 1:
            positions.append(np.array([0.5]))
        else:
            positions.append(np.linspace(0.1, 0.9, size))
    return positions


def plot_network(network: Network, path: Path, title: str = "Network Topology") -> None:
    sizes = network.layer_sizes
    ys = _layer_positions(sizes)

    fig, ax = plt.subplots(figsize=(11, 6))

    # Draw connections.
    for x in range(1, len(network.layers)):
        for j, neuron in enumerate(network.layers[x].neurons):
            for k, weight in enumerate(neuron.weights):
                color = "#1f77b4" if weight >= 0 else "#d62728"
                lw = 0.7 + min(2.5, abs(weight))
                ax.plot([x - 1, x], [ys[x - 1][k], ys[x][j]], color=color, alpha=0.65, linewidth=lw)

    # Draw neurons.
    last = len(sizes) - 1
    for x, layer_ys in enumerate(ys):
        if x == 0:
            color = "#2ca02c"
        elif x == last:
            color = "#ff7f0e"
        else:
            color = "#9467bd"
        ax.scatter([x] * len(layer_ys), layer_ys, s=160, color=color, edgecolors="black", zorder=3)

    ax.set_title(title)
    ax.set_xlabel("layer")
    ax.set_ylabel("neuron position")
    ax.set_xticks(range(len(sizes)))
    ax.set_xlim(-0.5, len(sizes) - 0.5)
    ax.set_ylim(0.0, 1.0)
    ax.grid(True, alpha=0.2)

    path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(path, dpi=180)
    plt.close(fig)
