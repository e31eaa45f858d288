from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field

import numpy as np

from .activations import Activation, RandomSource, sigmoid


@dataclass
class Neuron:
    # Scratch output of the last compute() call; not part of the network's identity.
    value: float = 0.0
    weights: list[float] = field(default_factory=list)

    def populate(self, nb_inputs: int, random_clamped: RandomSource) -> None:
        self.weights = [random_clamped() for _ in range(nb_inputs)]


@dataclass
class Layer:
    neurons: list[Neuron] = field(default_factory=list)

    def populate(self, nb_neurons: int, nb_inputs: int, random_clamped: RandomSource) -> None:
        self.neurons = []
        for _ in range(nb_neurons):
            neuron = Neuron()
            neuron.populate(nb_inputs, random_clamped)
            self.neurons.append(neuron)

    def __len__(self) -> int:
        return len(self.neurons)


@dataclass
class NetworkSave:
    """Flat in-memory snapshot: neuron count per layer and every weight in traversal order."""

    neurons: list[int]
    weights: list[float]


class Network:
    """Fully connected feedforward perceptron.

    Layer 0 is the input layer and carries no weights; every neuron of layer
    ``i > 0`` holds one weight per neuron of layer ``i - 1``.
    """

    def __init__(self, layers: list[Layer] | None = None, activation: Activation = sigmoid):
        self.layers: list[Layer] = layers if layers is not None else []
        self.activation = activation

    @classmethod
    def perceptron(
        cls,
        input_size: int,
        hidden_sizes: Sequence[int],
        output_size: int,
        random_clamped: RandomSource,
        activation: Activation = sigmoid,
    ) -> "Network":
        network = cls(activation=activation)
        previous = network.add_layer(input_size, 0, random_clamped)
        for size in hidden_sizes:
            previous = network.add_layer(size, previous, random_clamped)
        network.add_layer(output_size, previous, random_clamped)
        return network

    def add_layer(self, nb_neurons: int, nb_inputs: int, random_clamped: RandomSource) -> int:
        layer = Layer()
        layer.populate(nb_neurons, nb_inputs, random_clamped)
        self.layers.append(layer)
        return nb_neurons

    @property
    def layer_sizes(self) -> list[int]:
        return [len(layer) for layer in self.layers]

    @property
    def weight_count(self) -> int:
        return sum(len(n.weights) for layer in self.layers for n in layer.neurons)

    def iter_weights(self) -> Iterator[float]:
        for layer in self.layers:
            for neuron in layer.neurons:
                yield from neuron.weights

    def flat_weights(self) -> np.ndarray:
        return np.fromiter(self.iter_weights(), dtype=float, count=self.weight_count)

    def compute(self, inputs: Iterable[float]) -> list[float] | None:
        if not self.layers:
            return None

        input_layer = self.layers[0]
        # Extra inputs are ignored; missing ones keep the neuron's previous value.
        for neuron, value in zip(input_layer.neurons, inputs):
            neuron.value = float(value)

        prev_layer = input_layer
        for layer in self.layers[1:]:
            for neuron in layer.neurons:
                total = 0.0
                for src, weight in zip(prev_layer.neurons, neuron.weights):
                    total += src.value * weight
                neuron.value = self.activation(total)
            prev_layer = layer

        return [neuron.value for neuron in self.layers[-1].neurons]

    def clone(self) -> "Network":
        layers = [
            Layer(neurons=[Neuron(weights=list(n.weights)) for n in layer.neurons])
            for layer in self.layers
        ]
        return Network(layers=layers, activation=self.activation)

    def randomize(self, random_clamped: RandomSource) -> None:
        for layer in self.layers:
            for neuron in layer.neurons:
                neuron.weights = [random_clamped() for _ in neuron.weights]

    def to_save(self) -> NetworkSave:
        return NetworkSave(neurons=self.layer_sizes, weights=list(self.iter_weights()))

    @classmethod
    def from_save(cls, save: NetworkSave, activation: Activation = sigmoid) -> "Network":
        expected = sum(a * b for a, b in zip(save.neurons[:-1], save.neurons[1:]))
        if len(save.weights) != expected:
            raise ValueError(
                f"Save holds {len(save.weights)} weights, layer sizes {save.neurons} need {expected}"
            )

        weights = iter(save.weights)
        layers: list[Layer] = []
        previous = 0
        for size in save.neurons:
            layers.append(
                Layer(neurons=[Neuron(weights=[next(weights) for _ in range(previous)]) for _ in range(size)])
            )
            previous = size
        return cls(layers=layers, activation=activation)

    def __repr__(self) -> str:
        return f"Network(layer_sizes={self.layer_sizes})"
