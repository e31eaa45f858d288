from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np

from .network import Network

FitnessFn = Callable[[Network], float]

TASKS = ("xor", "circle")


@dataclass
class TaskData:
    name: str
    x: np.ndarray
    y: np.ndarray


def _generate_xor(n: int, noise: float, rng: np.random.Generator) -> tuple[np.ndarray, np.ndarray]:
    x = rng.uniform(-1.0, 1.0, size=(n, 2)) + rng.normal(0.0, noise, size=(n, 2))
    y = ((x[:, 0] > 0) & (x[:, 1] > 0)) | ((x[:, 0] < 0) & (x[:, 1] < 0))
    return x, y.astype(float)


def _generate_circle(n: int, noise: float, rng: np.random.Generator) -> tuple[np.ndarray, np.ndarray]:
    half = n // 2
    radius = 1.0

    r_in = rng.uniform(0.0, radius * 0.5, size=(half,))
    a_in = rng.uniform(0.0, 2 * np.pi, size=(half,))
    r_out = rng.uniform(radius * 0.75, radius, size=(n - half,))
    a_out = rng.uniform(0.0, 2 * np.pi, size=(n - half,))

    r = np.concatenate([r_in, r_out])
    a = np.concatenate([a_in, a_out])
    x = np.stack([r * np.sin(a), r * np.cos(a)], axis=1)
    x += rng.uniform(-radius, radius, size=x.shape) * (noise / 3.0)
    y = (np.sum(x * x, axis=1) < (radius * 0.5) ** 2).astype(float)
    return x, y


def make_task(name: str, size: int = 100, noise: float = 0.1, seed: int = 0) -> TaskData:
    rng = np.random.default_rng(seed)

    if name == "xor":
        x, y = _generate_xor(size, noise, rng)
    elif name == "circle":
        x, y = _generate_circle(size, noise, rng)
    else:
        raise ValueError(f"Unknown task: {name}")

    idx = np.arange(x.shape[0])
    rng.shuffle(idx)
    return TaskData(name=name, x=x[idx], y=y[idx])


def accuracy_fitness(task: TaskData) -> FitnessFn:
    """Score a network by how often its first output lands on the right side of 0.5."""

    def _fitness(network: Network) -> float:
        hits = 0
        for point, label in zip(task.x, task.y):
            out = network.compute(point)
            predicted = 1.0 if out and out[0] > 0.5 else 0.0
            hits += int(predicted == label)
        return hits / max(len(task.y), 1)

    return _fitness
