from __future__ import annotations

import math

import numpy as np
from loguru import logger

from .activations import Activation, RandomSource
from .config import NeuroevolutionConfig
from .genome import Genome, crossover, mutate
from .network import Network


class EmptyGenerationError(RuntimeError):
    """Raised when a generation has nothing to derive the next population from."""


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


class Generation:
    """Genomes scored during one cycle, kept ranked by score."""

    def __init__(self, cfg: NeuroevolutionConfig, rng: np.random.Generator, random_clamped: RandomSource):
        self.cfg = cfg
        self.rng = rng
        self.random_clamped = random_clamped
        self.genomes: list[Genome] = []

    def __len__(self) -> int:
        return len(self.genomes)

    def add_genome(self, genome: Genome) -> None:
        # Ties land after genomes already holding the same score.
        index = len(self.genomes)
        for i, other in enumerate(self.genomes):
            if self.cfg.descending:
                if genome.score > other.score:
                    index = i
                    break
            elif genome.score < other.score:
                index = i
                break
        self.genomes.insert(index, genome)

    def best(self) -> Genome | None:
        return self.genomes[0] if self.genomes else None

    def scores(self) -> list[float]:
        return [g.score for g in self.genomes]

    def breed(self, parent_a: Genome, parent_b: Genome, nb_children: int) -> list[Network]:
        net_a = self._network_of(parent_a)
        net_b = self._network_of(parent_b)
        repro = self.cfg.reproduction
        mcfg = self.cfg.mutation

        children: list[Network] = []
        for _ in range(nb_children):
            child = crossover(self.rng, net_a, net_b, repro.cross_over_factor)
            mutate(self.rng, child, mcfg.mutation_rate, mcfg.mutation_range)
            children.append(child)
        return children

    def generate_next_generation(self) -> list[Network]:
        """Build the next population: elites, then random injections, then bred children.

        Breeding pairs ``genomes[i]`` with ``genomes[cursor]`` for every ``i < cursor``;
        the cursor advances after each pass and wraps back to 0 once it reaches
        ``len(genomes) - 1``.
        """
        if not self.genomes:
            raise EmptyGenerationError(
                "No genome has been scored in the current generation; "
                "call network_score() for the population before requesting the next one"
            )

        population = self.cfg.population
        repro = self.cfg.reproduction
        networks: list[Network] = []

        elite_n = min(round_half_up(repro.elitism * population), len(self.genomes), population)
        for genome in self.genomes[:elite_n]:
            networks.append(self._network_of(genome).clone())

        best = self._network_of(self.genomes[0])
        random_n = round_half_up(repro.random_behaviour * population)
        for _ in range(random_n):
            if len(networks) >= population:
                break
            networks.append(self._randomized_clone(best))

        if len(networks) >= population:
            return networks

        count = len(self.genomes)
        if count < 2:
            logger.warning(
                "Only one genome was scored; filling {} slot(s) with randomized networks instead of breeding",
                population - len(networks),
            )
            while len(networks) < population:
                networks.append(self._randomized_clone(best))
            return networks

        nb_child = repro.nb_child if repro.nb_child > 0 else 1
        # With two genomes the plain wrap bound (count - 1) would reset before any pairing.
        wrap = max(count - 1, 2)
        cursor = 0
        while True:
            for i in range(cursor):
                for child in self.breed(self.genomes[i], self.genomes[cursor], nb_child):
                    networks.append(child)
                    if len(networks) >= population:
                        return networks
            cursor += 1
            if cursor >= wrap:
                cursor = 0

    def _randomized_clone(self, network: Network) -> Network:
        clone = network.clone()
        clone.randomize(self.random_clamped)
        return clone

    @staticmethod
    def _network_of(genome: Genome) -> Network:
        if genome.network is None:
            raise EmptyGenerationError(
                f"Genome with score {genome.score} no longer holds a network (dropped by low_historic)"
            )
        return genome.network


class Generations:
    """History of generations; the last one is open and receives new scores."""

    def __init__(
        self,
        cfg: NeuroevolutionConfig,
        rng: np.random.Generator,
        random_clamped: RandomSource,
        activation: Activation,
    ):
        self.cfg = cfg
        self.rng = rng
        self.random_clamped = random_clamped
        self.activation = activation
        self.generations: list[Generation] = []

    def __len__(self) -> int:
        return len(self.generations)

    @property
    def current(self) -> Generation | None:
        return self.generations[-1] if self.generations else None

    def first_generation(self) -> list[Network]:
        topo = self.cfg.network
        return [
            Network.perceptron(
                topo.input_size,
                topo.hidden_sizes,
                topo.output_size,
                self.random_clamped,
                self.activation,
            )
            for _ in range(self.cfg.population)
        ]

    def create_generation(self) -> list[Network]:
        current = self.current
        if current is None:
            networks = self.first_generation()
            logger.debug("Bootstrapped {} random network(s)", len(networks))
        else:
            networks = current.generate_next_generation()
            logger.debug(
                "Derived {} network(s) from generation {} ({} scored genome(s))",
                len(networks),
                len(self.generations) - 1,
                len(current),
            )

        self.generations.append(Generation(self.cfg, self.rng, self.random_clamped))
        return networks

    def add_genome(self, score: float, network: Network) -> bool:
        """Record a score and a copy of the network in the open generation.

        Returns False when no generation exists yet.
        """
        current = self.current
        if current is None:
            return False
        # Stored copy stays fixed whatever the caller later does to its handle.
        current.add_genome(Genome(score=score, network=network.clone()))
        return True

    def apply_retention(self) -> None:
        history = self.cfg.history
        if history.low_historic and len(self.generations) >= 2:
            for genome in self.generations[-2].genomes:
                genome.network = None

        if history.historic != -1 and len(self.generations) > history.historic + 1:
            excess = len(self.generations) - (history.historic + 1)
            del self.generations[:excess]
            logger.debug("Dropped {} old generation(s) from history", excess)
