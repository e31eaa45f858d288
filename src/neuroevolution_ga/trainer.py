from __future__ import annotations

import numpy as np

from .evolution import Neuroevolution
from .network import Network
from .tasks import FitnessFn


class EvolutionRunner:
    """Drives an engine for a fixed number of generations against a fitness function."""

    def __init__(self, engine: Neuroevolution, fitness_fn: FitnessFn, generations: int, verbose: bool = True):
        if generations < 1:
            raise ValueError(f"generations must be >= 1, got {generations}")
        self.engine = engine
        self.fitness_fn = fitness_fn
        self.generations = generations
        self.verbose = verbose
        self.history: list[dict[str, float]] = []

    def run(self) -> tuple[Network, float]:
        for gen in range(self.generations):
            networks = self.engine.next_generation()
            scores = [float(self.fitness_fn(network)) for network in networks]
            for network, score in zip(networks, scores):
                self.engine.network_score(network, score)

            best_network, best_score = self._ranked_best(networks, scores)
            self._record_generation(gen, scores)

        return best_network, best_score

    def _ranked_best(self, networks: list[Network], scores: list[float]) -> tuple[Network, float]:
        pick = np.argmax if self.engine.cfg.descending else np.argmin
        idx = int(pick(scores))
        return networks[idx], scores[idx]

    def _record_generation(self, gen: int, scores: list[float]) -> None:
        values = np.asarray(scores, dtype=float)
        if self.engine.cfg.descending:
            best, worst = float(np.max(values)), float(np.min(values))
        else:
            best, worst = float(np.min(values)), float(np.max(values))

        record = {
            "generation": float(gen),
            "best_score": best,
            "mean_score": float(np.mean(values)),
            "worst_score": worst,
        }
        self.history.append(record)
        if self.verbose:
            print(
                f"[gen {gen + 1:03d}/{self.generations:03d}] "
                f"best={record['best_score']:.3f} "
                f"mean={record['mean_score']:.3f} "
                f"worst={record['worst_score']:.3f}"
            )
