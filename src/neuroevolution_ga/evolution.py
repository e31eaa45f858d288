from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import numpy as np
from loguru import logger

from .activations import clamped_sampler, resolve_activation
from .config import NeuroevolutionConfig
from .generation import Generation, Generations
from .network import Network


class Neuroevolution:
    """Entry point for callers: hands out populations and collects their scores.

    Each cycle the caller takes ``next_generation()``, drives every returned
    network through ``compute()``, and reports one ``network_score()`` per
    network once its trial ends. Calls are expected from a single thread; the
    next generation must not be requested while scores for the current one
    are still being reported.
    """

    def __init__(
        self,
        config: NeuroevolutionConfig | Mapping[str, Any] | None = None,
        **options: Any,
    ):
        if config is None or isinstance(config, Mapping):
            config = NeuroevolutionConfig.from_options({**(config or {}), **options})
        elif not isinstance(config, NeuroevolutionConfig):
            raise TypeError(
                f"config must be a NeuroevolutionConfig or a mapping of options, got {type(config).__name__}"
            )
        elif options:
            raise ValueError("Pass either a NeuroevolutionConfig or keyword options, not both")
        config.validate()

        self.cfg = config
        self.rng = np.random.default_rng(config.seed)
        self.activation = resolve_activation(config.activation)
        self.random_clamped = (
            config.random_clamped if config.random_clamped is not None else clamped_sampler(self.rng)
        )
        self.generations = self._new_generations()

    def _new_generations(self) -> Generations:
        return Generations(self.cfg, self.rng, self.random_clamped, self.activation)

    def restart(self) -> None:
        self.generations = self._new_generations()
        logger.debug("History cleared")

    def next_generation(self) -> list[Network]:
        networks = self.generations.create_generation()
        self.generations.apply_retention()
        return networks

    def network_score(self, network: Network, score: float | None) -> None:
        if not self.generations.add_genome(score if score is not None else 0.0, network):
            logger.debug("Score {} ignored: no generation has been created yet", score)

    @property
    def generation_count(self) -> int:
        return len(self.generations)

    @property
    def history(self) -> tuple[Generation, ...]:
        return tuple(self.generations.generations)

    @property
    def current_generation(self) -> Generation | None:
        return self.generations.current
