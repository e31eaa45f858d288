from __future__ import annotations

import argparse
import datetime as dt
from pathlib import Path

from .config import (
    HistoryConfig,
    MutationConfig,
    NeuroevolutionConfig,
    ReproductionConfig,
    TopologyConfig,
)
from .evolution import Neuroevolution
from .tasks import TASKS, accuracy_fitness, make_task
from .trainer import EvolutionRunner
from .visualization import plot_history, plot_network


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Evolve perceptrons with a genetic algorithm on a toy task")
    p.add_argument("--task", choices=TASKS, default="xor")
    p.add_argument("--task-size", type=int, default=100)
    p.add_argument("--noise", type=float, default=0.1)
    p.add_argument("--population", type=int, default=50)
    p.add_argument("--generations", type=int, default=30)
    p.add_argument("--hidden", type=int, action="append", default=None, help="hidden layer size, repeatable")
    p.add_argument("--activation", type=str, default="sigmoid")
    p.add_argument("--elitism", type=float, default=0.2)
    p.add_argument("--random-behaviour", type=float, default=0.2)
    p.add_argument("--mutation-rate", type=float, default=0.1)
    p.add_argument("--mutation-range", type=float, default=0.5)
    p.add_argument("--nb-child", type=int, default=1)
    p.add_argument("--cross-over-factor", type=float, default=0.5)
    p.add_argument("--historic", type=int, default=0)
    p.add_argument("--low-historic", action="store_true")
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--out-root", type=str, default="artifacts")
    p.add_argument("--no-plots", action="store_true")
    return p.parse_args(argv)


def build_config(args: argparse.Namespace) -> NeuroevolutionConfig:
    hidden = tuple(args.hidden) if args.hidden else (4,)
    return NeuroevolutionConfig(
        population=args.population,
        seed=args.seed,
        activation=args.activation,
        network=TopologyConfig(input_size=2, hidden_sizes=hidden, output_size=1),
        mutation=MutationConfig(
            mutation_rate=args.mutation_rate,
            mutation_range=args.mutation_range,
        ),
        reproduction=ReproductionConfig(
            elitism=args.elitism,
            random_behaviour=args.random_behaviour,
            cross_over_factor=args.cross_over_factor,
            nb_child=args.nb_child,
        ),
        history=HistoryConfig(historic=args.historic, low_historic=args.low_historic),
    )


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    cfg = build_config(args)
    task = make_task(args.task, size=args.task_size, noise=args.noise, seed=args.seed)
    engine = Neuroevolution(cfg)
    runner = EvolutionRunner(engine, accuracy_fitness(task), generations=args.generations)
    champion, score = runner.run()

    print(f"Best {args.task} accuracy: {score:.3f} ({champion!r})")
    if args.no_plots:
        return

    ts = dt.datetime.now().strftime("%Y%m%d_%H%M%S")
    out_dir = Path(args.out_root).resolve() / f"{args.task}_{ts}"
    plots_dir = out_dir / "plots"
    plot_history(runner.history, plots_dir / "scores.png")
    plot_network(champion, plots_dir / "champion_network.png", title="Champion Network")
    print(f"Run complete: {out_dir}")


if __name__ == "__main__":
    main()
