"""
Network Package

This package implements the three-layer feed-forward neural network:
inference (predict), backpropagation training (train), the evolutionary
mutation hook (mutate) and deep copying (copy).

Exported Classes:
    NeuralNetwork: Feed-forward network with one hidden layer
"""

from tinynet.network.neural_network import NeuralNetwork, DEFAULT_LEARNING_RATE

__all__ = ['NeuralNetwork', 'DEFAULT_LEARNING_RATE']
