from __future__ import annotations

import itertools

import numpy as np
import pytest

from neuroevolution_ga.activations import clamped_sampler, identity
from neuroevolution_ga.config import (
    MutationConfig,
    NeuroevolutionConfig,
    ReproductionConfig,
    TopologyConfig,
)
from neuroevolution_ga.evolution import Neuroevolution
from neuroevolution_ga.network import Network


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def sampler(rng):
    return clamped_sampler(rng)


@pytest.fixture
def counting_source():
    """Deterministic weight source: 0.01, 0.02, 0.03, ..."""
    counter = itertools.count(1)
    return lambda: next(counter) / 100.0


def make_network(sampler, sizes=(2, 3, 1), activation=identity) -> Network:
    return Network.perceptron(sizes[0], list(sizes[1:-1]), sizes[-1], sampler, activation)


def make_config(
    population: int = 10,
    elitism: float = 0.2,
    random_behaviour: float = 0.2,
    cross_over_factor: float = 0.5,
    nb_child: int = 1,
    mutation_rate: float = 0.1,
    mutation_range: float = 0.5,
    score_sort: int = -1,
    network: tuple = (2, (3,), 1),
) -> NeuroevolutionConfig:
    return NeuroevolutionConfig(
        population=population,
        score_sort=score_sort,
        seed=7,
        network=TopologyConfig(input_size=network[0], hidden_sizes=tuple(network[1]), output_size=network[2]),
        mutation=MutationConfig(mutation_rate=mutation_rate, mutation_range=mutation_range),
        reproduction=ReproductionConfig(
            elitism=elitism,
            random_behaviour=random_behaviour,
            cross_over_factor=cross_over_factor,
            nb_child=nb_child,
        ),
    )


def score_all(engine: Neuroevolution, networks, scores=None) -> None:
    if scores is None:
        scores = range(len(networks))
    for network, score in zip(networks, scores):
        engine.network_score(network, score)
