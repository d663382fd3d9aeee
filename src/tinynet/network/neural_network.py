"""
Neural Network Module

This module implements NeuralNetwork, a fully connected feed-forward network
with exactly one hidden layer (input -> hidden -> output). The network can be:
 + queried, with 'predict'
 + trained one example at a time by backpropagation, with 'train'
 + perturbed in place by an evolutionary caller, with 'mutate'
 + deep-copied to produce an independent offspring, with 'copy'

All computation is expressed through Matrix operations; the network never
reads global random state, weights and biases are drawn at construction time
from an injected uniform generator.

Classes:
    NeuralNetwork: Three-layer feed-forward network trained by backpropagation
"""

import numpy as np
import warnings
import graphviz  # type: ignore
from typing import Callable, Sequence, TYPE_CHECKING

from tinynet.activations import ActivationFunction
from tinynet.errors      import DimensionMismatchError
from tinynet.linalg      import Matrix

if TYPE_CHECKING:
    from tinynet.run.config import Config

DEFAULT_LEARNING_RATE = 0.1

class NeuralNetwork:
    """
    A feed-forward neural network with one hidden layer.

    The network computes:
        hidden = activation(weights_input_hidden  * input  + bias_hidden)
        output = activation(weights_hidden_output * hidden + bias_output)

    Each network owns its matrices exclusively, so independent networks can be
    trained concurrently as long as each one is touched by a single thread.

    Public Attributes:
        input_nodes:           Number of input nodes
        hidden_nodes:          Number of hidden nodes
        output_nodes:          Number of output nodes
        weights_input_hidden:  Matrix of shape (hidden_nodes, input_nodes)
        weights_hidden_output: Matrix of shape (output_nodes, hidden_nodes)
        bias_hidden:           Matrix of shape (hidden_nodes, 1)
        bias_output:           Matrix of shape (output_nodes, 1)

    Public Properties:
        activation:    The ActivationFunction used by both layers
        learning_rate: Step size of the gradient descent updates

    Public Methods:
        set_activation_function(activation): Select the activation (None resets to sigmoid)
        set_learning_rate(learning_rate):    Select the learning rate (None resets to 0.1)
        predict(inputs):                     Compute the network output
        train(inputs, targets):              Single backpropagation step on one example
        mutate(perturb):                     Apply a perturbation to every weight and bias
        copy():                              Independent deep copy
        visualize(view):                     Draw the network using Graphviz
    """

    def __init__(self,
                 input_nodes : int,
                 hidden_nodes: int,
                 output_nodes: int,
                 uniform     : Callable[[float, float], float] | None = None,
                 init_range  : tuple[float, float] = (-1.0, 1.0)):
        """
        Initialize a network with random weights and biases.

        Parameters:
            input_nodes:  Number of input nodes
            hidden_nodes: Number of hidden nodes
            output_nodes: Number of output nodes
            uniform:      Generator called as uniform(low, high) to draw each initial
                          weight and bias; defaults to a fresh numpy Generator
            init_range:   The (low, high) range weights and biases are drawn from
        """
        if uniform is None:
            uniform = np.random.default_rng().uniform
        low, high = init_range

        self.input_nodes : int = input_nodes
        self.hidden_nodes: int = hidden_nodes
        self.output_nodes: int = output_nodes

        self.weights_input_hidden : Matrix = Matrix(hidden_nodes, input_nodes).randomize(uniform, low, high)
        self.weights_hidden_output: Matrix = Matrix(output_nodes, hidden_nodes).randomize(uniform, low, high)
        self.bias_hidden          : Matrix = Matrix(hidden_nodes, 1).randomize(uniform, low, high)
        self.bias_output          : Matrix = Matrix(output_nodes, 1).randomize(uniform, low, high)

        self._activation   : ActivationFunction = ActivationFunction.sigmoid()
        self._learning_rate: float              = DEFAULT_LEARNING_RATE

    @classmethod
    def from_config(cls,
                    config : 'Config',
                    uniform: Callable[[float, float], float] | None = None) -> 'NeuralNetwork':
        """
        Create a network whose shape, initialization range, activation
        function and learning rate are taken from the configuration.
        """
        network = cls(config.input_nodes,
                      config.hidden_nodes,
                      config.output_nodes,
                      uniform,
                      (config.init_min_value, config.init_max_value))
        network.set_activation_function(ActivationFunction.from_name(config.activation))
        network.set_learning_rate(config.learning_rate)
        return network

    @property
    def activation(self) -> ActivationFunction:
        return self._activation

    @property
    def learning_rate(self) -> float:
        return self._learning_rate

    def set_activation_function(self, activation: ActivationFunction | None):
        """
        Select the activation function used by both layers.
        Passing None restores the default (sigmoid).
        """
        self._activation = ActivationFunction.sigmoid() if activation is None else activation

    def set_learning_rate(self, learning_rate: float | None):
        """
        Select the learning rate used by 'train'.
        Passing None restores the default (0.1).
        """
        if learning_rate is None:
            learning_rate = DEFAULT_LEARNING_RATE
        elif learning_rate <= 0:
            warnings.warn(f"Non-positive learning rate {learning_rate}: training will not descend the error")
        self._learning_rate = learning_rate

    def predict(self, inputs: Sequence[float]) -> list[float]:
        """
        Perform a forward pass through the network.

        Parameters:
            inputs: Input values, one per input node

        Returns:
            Output values, one per output node
        """
        self._check_length(inputs, self.input_nodes, "input")
        _, output = self._forward(Matrix.from_sequence(inputs))
        return output.to_sequence()

    def train(self, inputs: Sequence[float], targets: Sequence[float]):
        """
        Perform one step of stochastic gradient descent on a single example.

        The output error is propagated back to the hidden layer through the
        hidden->output weights as they were during the forward pass, i.e.
        before this step updates them.

        Parameters:
            inputs:  Input values, one per input node
            targets: Expected output values, one per output node
        """
        self._check_length(inputs, self.input_nodes, "input")
        self._check_length(targets, self.output_nodes, "target")

        activation = self._activation
        input_matrix   = Matrix.from_sequence(inputs)
        hidden, output = self._forward(input_matrix)

        output_error    = Matrix.from_sequence(targets).subtract_elementwise(output)
        output_gradient = output_error.hadamard(output.map(activation.derivative)).scale(self._learning_rate)

        # hidden layer error, from the pre-update weights
        hidden_error = Matrix.product(self.weights_hidden_output.transpose(), output_error)

        self.weights_hidden_output = \
            self.weights_hidden_output.add_elementwise(Matrix.product(output_gradient, hidden.transpose()))
        self.bias_output = self.bias_output.add_elementwise(output_gradient)

        hidden_gradient = hidden_error.hadamard(hidden.map(activation.derivative)).scale(self._learning_rate)

        self.weights_input_hidden = \
            self.weights_input_hidden.add_elementwise(Matrix.product(hidden_gradient, input_matrix.transpose()))
        self.bias_hidden = self.bias_hidden.add_elementwise(hidden_gradient)

    def mutate(self, perturb: Callable[[float], float]):
        """
        Apply 'perturb' to every weight and bias, replacing each parameter
        matrix with the mapped result. Nothing else on the network changes.

        Parameters:
            perturb: Callable mapping a parameter value to its new value
        """
        # compute all four before assigning any, so a failing
        # 'perturb' leaves the network untouched
        weights_input_hidden  = self.weights_input_hidden.map(perturb)
        weights_hidden_output = self.weights_hidden_output.map(perturb)
        bias_hidden           = self.bias_hidden.map(perturb)
        bias_output           = self.bias_output.map(perturb)

        self.weights_input_hidden  = weights_input_hidden
        self.weights_hidden_output = weights_hidden_output
        self.bias_hidden           = bias_hidden
        self.bias_output           = bias_output

    def copy(self) -> 'NeuralNetwork':
        """
        Create an independent deep copy of this network.
        Training or mutating the copy does not affect the original.
        """
        clone = NeuralNetwork.__new__(NeuralNetwork)
        clone.input_nodes           = self.input_nodes
        clone.hidden_nodes          = self.hidden_nodes
        clone.output_nodes          = self.output_nodes
        clone.weights_input_hidden  = self.weights_input_hidden.copy()
        clone.weights_hidden_output = self.weights_hidden_output.copy()
        clone.bias_hidden           = self.bias_hidden.copy()
        clone.bias_output           = self.bias_output.copy()
        clone._activation           = self._activation
        clone._learning_rate        = self._learning_rate
        return clone

    def _forward(self, input_matrix: Matrix) -> tuple[Matrix, Matrix]:
        """
        Forward pass returning both the activated hidden layer and the activated output.
        """
        activate = self._activation.activate
        hidden = Matrix.product(self.weights_input_hidden, input_matrix) \
                       .add_elementwise(self.bias_hidden) \
                       .map(activate)
        output = Matrix.product(self.weights_hidden_output, hidden) \
                       .add_elementwise(self.bias_output) \
                       .map(activate)
        return hidden, output

    @staticmethod
    def _check_length(values: Sequence[float], expected: int, kind: str):
        if len(values) != expected:
            raise DimensionMismatchError(f"Expected {expected} {kind} values, got {len(values)}")

    def visualize(self, view: bool = False) -> graphviz.Digraph:
        """
        Visualize the network using Graphviz.

        Parameters:
            view: If True, automatically open the visualization after rendering

        Returns:
            graphviz.Digraph object representing the network
        """
        dot = graphviz.Digraph()
        dot.attr(rankdir='LR')  # Left to right layout
        dot.attr('graph', labelloc='t', label=f"activation={self._activation.name}")

        # Define node colors per layer
        base_attrs = {'color': 'black', 'style': 'filled', 'shape': 'circle', 'penwidth': '0.5',
                      'fontsize': '5', 'width': '0.5', 'height': '0.5', 'fixedsize': 'true'}
        fill_colors = {'input': 'lightgrey', 'hidden': 'lightblue', 'output': 'white'}

        layers = [('input' , self.input_nodes , None),
                  ('hidden', self.hidden_nodes, self.bias_hidden),
                  ('output', self.output_nodes, self.bias_output)]

        # Create one subgraph per layer for better layout
        for layer, num_nodes, bias in layers:
            with dot.subgraph(name=f'cluster_{layer}') as cluster:
                cluster.attr(label=layer.capitalize(), style='invisible')
                for i in range(num_nodes):
                    attrs = dict(base_attrs, fillcolor=fill_colors[layer])
                    attrs['label'] = f"{layer[0]}{i}" if bias is None else f"{layer[0]}{i}\\nbias={bias[i, 0]:.2f}"
                    cluster.node(f"{layer[0]}{i}", **attrs)

        # Add edges with weights
        edges = [('i', 'h', self.weights_input_hidden),
                 ('h', 'o', self.weights_hidden_output)]
        for src, dst, weights in edges:
            for row in range(weights.rows):
                for col in range(weights.cols):
                    weight = weights[row, col]
                    dot.edge(f"{src}{col}", f"{dst}{row}",
                             label=f"w={weight:.2f}",
                             color='black' if weight >= 0 else 'red',
                             fontsize='5', penwidth='0.5', arrowsize='0.5')

        if view:
            dot.view(cleanup=True)

        return dot

    def __repr__(self):
        return (f"NeuralNetwork(input_nodes={self.input_nodes}, hidden_nodes={self.hidden_nodes}, "
                f"output_nodes={self.output_nodes}, activation={self._activation.name!r}, "
                f"learning_rate={self._learning_rate})")
