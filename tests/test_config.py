from __future__ import annotations

import dataclasses
import math

import pytest

from neuroevolution_ga.activations import ACTIVATIONS, resolve_activation
from neuroevolution_ga.config import NeuroevolutionConfig, TopologyConfig


def test_defaults():
    cfg = NeuroevolutionConfig()
    assert cfg.population == 50
    assert cfg.score_sort == -1
    assert cfg.network.as_layer_sizes() == [1, 1, 1]
    assert cfg.reproduction.elitism == 0.2
    assert cfg.reproduction.random_behaviour == 0.2
    assert cfg.reproduction.cross_over_factor == 0.5
    assert cfg.reproduction.nb_child == 1
    assert cfg.mutation.mutation_rate == 0.1
    assert cfg.mutation.mutation_range == 0.5
    assert cfg.history.historic == 0
    assert cfg.history.low_historic is False
    cfg.validate()


def test_from_options_accepts_both_spellings_and_ignores_unknown():
    cfg = NeuroevolutionConfig.from_options(
        {
            "population": 12,
            "network": [3, [5, 4], 2],
            "mutationRate": 0.3,
            "mutation_range": 0.7,
            "randomBehaviour": 0.0,
            "crossOverFactor": 0.9,
            "nbChild": 2,
            "lowHistoric": True,
            "historic": -1,
            "scoreSort": 1,
            "frameRate": 60,
            "bogus": object(),
        }
    )
    assert cfg.population == 12
    assert cfg.network == TopologyConfig(input_size=3, hidden_sizes=(5, 4), output_size=2)
    assert cfg.mutation.mutation_rate == 0.3
    assert cfg.mutation.mutation_range == 0.7
    assert cfg.reproduction.random_behaviour == 0.0
    assert cfg.reproduction.cross_over_factor == 0.9
    assert cfg.reproduction.nb_child == 2
    assert cfg.history.low_historic is True
    assert cfg.history.historic == -1
    assert cfg.descending is False
    # Untouched keys keep their defaults.
    assert cfg.reproduction.elitism == 0.2


def test_network_option_must_be_a_triple():
    with pytest.raises(ValueError, match="network"):
        NeuroevolutionConfig.from_options({"network": [2, 1]})


def test_config_is_frozen():
    cfg = NeuroevolutionConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.population = 3


@pytest.mark.parametrize(
    "options,message",
    [
        ({"population": 0}, "population"),
        ({"elitism": 1.5}, "elitism"),
        ({"randomBehaviour": -0.1}, "random_behaviour"),
        ({"crossOverFactor": 2}, "cross_over_factor"),
        ({"mutationRate": 1.1}, "mutation_rate"),
        ({"mutationRange": -1}, "mutation_range"),
        ({"historic": -2}, "historic"),
        ({"scoreSort": 0}, "score_sort"),
        ({"activation": "softmax"}, "activation"),
        ({"network": [0, [1], 1]}, "neuron"),
        ({"randomClamped": 0.5}, "random_clamped"),
    ],
)
def test_validate_rejects_bad_values(options, message):
    cfg = NeuroevolutionConfig.from_options(options)
    with pytest.raises(ValueError, match=message):
        cfg.validate()


def test_resolve_activation():
    assert resolve_activation("tanh") is ACTIVATIONS["tanh"]
    custom = lambda x: 2 * x  # noqa: E731
    assert resolve_activation(custom) is custom
    with pytest.raises(ValueError):
        resolve_activation("nope")


@pytest.mark.parametrize(
    "name,x,expected",
    [("sigmoid", 0.0, 0.5), ("tanh", 0.0, 0.0), ("relu", -2.0, 0.0), ("relu", 1.5, 1.5), ("identity", -3.0, -3.0)],
)
def test_named_activations(name, x, expected):
    assert ACTIVATIONS[name](x) == pytest.approx(expected)


@pytest.mark.parametrize("network", [[2, 3, 1], [2, "3", 1], [2, [3], "one"], [2, [None], 1]])
def test_network_option_with_bad_sizes(network):
    with pytest.raises(ValueError, match="network"):
        NeuroevolutionConfig.from_options({"network": network})


@pytest.mark.parametrize("x", [-30.0, -5.0, 0.3, 17.0, 20.0, 35.0])
def test_sigmoid_runs_in_double_precision(x):
    assert ACTIVATIONS["sigmoid"](x) == pytest.approx(1.0 / (1.0 + math.exp(-x)), rel=0, abs=1e-12)


def test_sigmoid_saturates_only_in_double_precision():
    assert ACTIVATIONS["sigmoid"](20.0) < 1.0
    assert ACTIVATIONS["sigmoid"](17.0) != ACTIVATIONS["sigmoid"](18.0)
    assert ACTIVATIONS["tanh"](0.1) == pytest.approx(math.tanh(0.1), rel=0, abs=1e-15)
