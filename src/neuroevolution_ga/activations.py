from __future__ import annotations

from typing import Callable, Union

import jax
import jax.numpy as jnp
import numpy as np

# Activations evaluate in float64, the precision of network values.
jax.config.update("jax_enable_x64", True)

Activation = Callable[[float], float]
RandomSource = Callable[[], float]


def _scalar(x: float) -> jnp.ndarray:
    return jnp.asarray(x, dtype=jnp.float64)


def jax_sigmoid(x: jnp.ndarray) -> jnp.ndarray:
    return 1.0 / (1.0 + jnp.exp(-x))


def sigmoid(x: float) -> float:
    return float(jax_sigmoid(_scalar(x)))


def tanh(x: float) -> float:
    return float(jnp.tanh(_scalar(x)))


def relu(x: float) -> float:
    return float(jnp.maximum(0.0, _scalar(x)))


def identity(x: float) -> float:
    return float(x)


def gauss(x: float) -> float:
    v = _scalar(x)
    return float(jnp.exp(-(v * v) / 2.0))


def sin(x: float) -> float:
    return float(jnp.sin(jnp.pi * _scalar(x)))


ACTIVATIONS: dict[str, Activation] = {
    "sigmoid": sigmoid,
    "tanh": tanh,
    "relu": relu,
    "identity": identity,
    "gauss": gauss,
    "sin": sin,
}


def resolve_activation(spec: Union[str, Activation]) -> Activation:
    if callable(spec):
        return spec
    try:
        return ACTIVATIONS[spec]
    except KeyError:
        raise ValueError(f"Unknown activation: {spec!r}") from None


def clamped_sampler(rng: np.random.Generator) -> RandomSource:
    """Uniform draws in [-1, 1], used for initial weights and random injection."""

    def _sample() -> float:
        return float(rng.uniform(-1.0, 1.0))

    return _sample


def uniform_perturbation(rng: np.random.Generator, magnitude: float) -> float:
    return float(rng.uniform(-magnitude, magnitude))
