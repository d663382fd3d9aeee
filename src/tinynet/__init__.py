"""
tinynet - A minimal from-scratch neural network library.

This package provides a dense matrix engine and a three-layer feed-forward
neural network (input -> hidden -> output) trained by backpropagation, with
a mutation hook for perturbation-based (evolutionary) tuning.

Main components:
- linalg: Dense matrix algebra
- activations: Activation functions and their derivatives
- network: The neural network (predict, train, mutate, copy)
- evolution: Perturbation rules and population-based evolution
- run: Configuration, trials and experiments

Example:
    >>> from tinynet import NeuralNetwork
    >>> network = NeuralNetwork(2, 4, 1)
    >>> for _ in range(10000):
    ...     for x, t in [([0, 0], [0]), ([0, 1], [1]), ([1, 0], [1]), ([1, 1], [0])]:
    ...         network.train(x, t)
    >>> network.predict([1, 0])
"""

__version__ = "0.1.0"

# Import main classes for convenient access
from tinynet.errors      import (TinynetError, InvalidShapeError,
                                 ShapeMismatchError, DimensionMismatchError)
from tinynet.linalg      import Matrix
from tinynet.activations import ActivationFunction
from tinynet.network     import NeuralNetwork
from tinynet.evolution   import Perturbation, Individual, Population
from tinynet.run         import Config, TrialBackprop, TrialEvolution, Experiment

__all__ = [
    "TinynetError",
    "InvalidShapeError",
    "ShapeMismatchError",
    "DimensionMismatchError",
    "Matrix",
    "ActivationFunction",
    "NeuralNetwork",
    "Perturbation",
    "Individual",
    "Population",
    "Config",
    "TrialBackprop",
    "TrialEvolution",
    "Experiment",
]
