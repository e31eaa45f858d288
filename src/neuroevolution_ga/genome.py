from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .activations import uniform_perturbation
from .network import Network


@dataclass
class Genome:
    score: float = 0.0
    # None once the owning generation has been thinned by low_historic.
    network: Network | None = None


def _check_same_topology(parent_a: Network, parent_b: Network) -> None:
    if parent_a.layer_sizes != parent_b.layer_sizes:
        raise ValueError(
            f"Cannot cross networks with different layouts: {parent_a.layer_sizes} vs {parent_b.layer_sizes}"
        )


def crossover(
    rng: np.random.Generator,
    parent_a: Network,
    parent_b: Network,
    cross_over_factor: float,
) -> Network:
    """Clone ``parent_a`` and take each weight from ``parent_b`` with probability ``cross_over_factor``."""
    _check_same_topology(parent_a, parent_b)
    child = parent_a.clone()
    for child_layer, other_layer in zip(child.layers, parent_b.layers):
        for child_neuron, other_neuron in zip(child_layer.neurons, other_layer.neurons):
            for k, weight in enumerate(other_neuron.weights):
                if rng.random() < cross_over_factor:
                    child_neuron.weights[k] = weight
    return child


def mutate(
    rng: np.random.Generator,
    network: Network,
    mutation_rate: float,
    mutation_range: float,
) -> None:
    for layer in network.layers:
        for neuron in layer.neurons:
            for k in range(len(neuron.weights)):
                if rng.random() < mutation_rate:
                    neuron.weights[k] += uniform_perturbation(rng, mutation_range)
