"""Genetic-algorithm neuroevolution of feedforward perceptrons."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import NeuroevolutionConfig

if TYPE_CHECKING:
    from .evolution import Neuroevolution
    from .network import Network

__all__ = ["Network", "Neuroevolution", "NeuroevolutionConfig"]


def __getattr__(name: str):
    if name == "Neuroevolution":
        from .evolution import Neuroevolution as _Neuroevolution

        return _Neuroevolution
    if name == "Network":
        from .network import Network as _Network

        return _Network
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
