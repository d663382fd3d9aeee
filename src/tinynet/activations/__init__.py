"""
Activations Package

This package provides activation functions for tinynet neural networks.

Exported:
    activations:        Dictionary mapping activation function names to functions
    derivatives:        Dictionary mapping activation function names to derivatives
                        (expressed in terms of the activated output)
    ActivationFunction: Immutable (activate, derivative) pair used by networks
    Individual functions: sigmoid_activation, tanh_activation, identity_activation,
                          relu_activation and their *_derivative counterparts
"""

from tinynet.activations.basic_activations import (
    activations,
    derivatives,
    sigmoid_activation,
    sigmoid_derivative,
    tanh_activation,
    tanh_derivative,
    identity_activation,
    identity_derivative,
    relu_activation,
    relu_derivative
)
from tinynet.activations.activation_function import ActivationFunction

__all__ = [
    'activations',
    'derivatives',
    'sigmoid_activation',
    'sigmoid_derivative',
    'tanh_activation',
    'tanh_derivative',
    'identity_activation',
    'identity_derivative',
    'relu_activation',
    'relu_derivative',
    'ActivationFunction'
]
