from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Union

from loguru import logger

from .activations import ACTIVATIONS, Activation, RandomSource

ActivationSpec = Union[str, Activation]


@dataclass(frozen=True)
class TopologyConfig:
    input_size: int = 1
    hidden_sizes: tuple[int, ...] = (1,)
    output_size: int = 1

    def as_layer_sizes(self) -> list[int]:
        return [self.input_size, *self.hidden_sizes, self.output_size]

    @classmethod
    def from_value(cls, value: Any) -> "TopologyConfig":
        """Accept a TopologyConfig or the ``[inputs, [hiddens...], outputs]`` triple."""
        if isinstance(value, TopologyConfig):
            return value
        if not isinstance(value, Sequence) or len(value) != 3:
            raise ValueError(f"network must be [inputs, [hiddens...], outputs], got {value!r}")
        inputs, hiddens, outputs = value
        if isinstance(hiddens, str) or not isinstance(hiddens, Sequence):
            raise ValueError(f"network hidden sizes must be a list such as [3] or [], got {hiddens!r}")
        try:
            return cls(
                input_size=int(inputs),
                hidden_sizes=tuple(int(h) for h in hiddens),
                output_size=int(outputs),
            )
        except (TypeError, ValueError) as exc:
            raise ValueError(f"network layer sizes must be integers, got {value!r}") from exc


@dataclass(frozen=True)
class MutationConfig:
    mutation_rate: float = 0.1
    mutation_range: float = 0.5


@dataclass(frozen=True)
class ReproductionConfig:
    elitism: float = 0.2
    random_behaviour: float = 0.2
    cross_over_factor: float = 0.5
    nb_child: int = 1


@dataclass(frozen=True)
class HistoryConfig:
    historic: int = 0
    low_historic: bool = False


@dataclass(frozen=True)
class NeuroevolutionConfig:
    population: int = 50
    score_sort: int = -1
    seed: int | None = None
    activation: ActivationSpec = "sigmoid"
    random_clamped: RandomSource | None = None
    network: TopologyConfig = field(default_factory=TopologyConfig)
    mutation: MutationConfig = field(default_factory=MutationConfig)
    reproduction: ReproductionConfig = field(default_factory=ReproductionConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)

    @property
    def descending(self) -> bool:
        return self.score_sort < 0

    def validate(self) -> None:
        if self.population < 1:
            raise ValueError(f"population must be >= 1, got {self.population}")
        sizes = self.network.as_layer_sizes()
        if any(s < 1 for s in sizes):
            raise ValueError(f"every layer needs at least one neuron, got {sizes}")
        for name, value in (
            ("elitism", self.reproduction.elitism),
            ("random_behaviour", self.reproduction.random_behaviour),
            ("cross_over_factor", self.reproduction.cross_over_factor),
            ("mutation_rate", self.mutation.mutation_rate),
        ):
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")
        if self.mutation.mutation_range < 0:
            raise ValueError(f"mutation_range must be >= 0, got {self.mutation.mutation_range}")
        if self.history.historic < -1:
            raise ValueError(f"historic must be -1 (unlimited) or >= 0, got {self.history.historic}")
        if self.score_sort == 0:
            raise ValueError("score_sort must be negative (descending) or positive (ascending)")
        if isinstance(self.activation, str) and self.activation not in ACTIVATIONS:
            raise ValueError(
                f"Unknown activation: {self.activation!r} (choose from {sorted(ACTIVATIONS)})"
            )
        if self.random_clamped is not None and not callable(self.random_clamped):
            raise ValueError("random_clamped must be callable or None")

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "NeuroevolutionConfig":
        """Build a config from flat options, ignoring keys that are not recognised."""
        grouped: dict[str, dict[str, Any]] = {
            "root": {},
            "mutation": {},
            "reproduction": {},
            "history": {},
        }
        for key, value in options.items():
            target = _OPTION_KEYS.get(key)
            if target is None:
                logger.debug("Ignoring unknown option {!r}", key)
                continue
            section, name = target
            grouped[section][name] = value

        root = grouped["root"]
        if "network" in root:
            root["network"] = TopologyConfig.from_value(root["network"])
        return cls(
            **root,
            mutation=MutationConfig(**grouped["mutation"]),
            reproduction=ReproductionConfig(**grouped["reproduction"]),
            history=HistoryConfig(**grouped["history"]),
        )


def _keys(section: str, name: str, *aliases: str) -> dict[str, tuple[str, str]]:
    return {key: (section, name) for key in (name, *aliases)}


_OPTION_KEYS: dict[str, tuple[str, str]] = {
    **_keys("root", "activation"),
    **_keys("root", "random_clamped", "randomClamped"),
    **_keys("root", "network"),
    **_keys("root", "population"),
    **_keys("root", "score_sort", "scoreSort"),
    **_keys("root", "seed"),
    **_keys("mutation", "mutation_rate", "mutationRate"),
    **_keys("mutation", "mutation_range", "mutationRange"),
    **_keys("reproduction", "elitism"),
    **_keys("reproduction", "random_behaviour", "randomBehaviour"),
    **_keys("reproduction", "cross_over_factor", "crossOverFactor"),
    **_keys("reproduction", "nb_child", "nbChild"),
    **_keys("history", "historic"),
    **_keys("history", "low_historic", "lowHistoric"),
}

OPTION_NAMES: tuple[str, ...] = tuple(sorted(_OPTION_KEYS))
