"""
Backpropagation Trial Module

This module defines an abstract base class for trials that train a single
network by backpropagation, one example at a time, over a labeled dataset.

Classes:
    TrialBackprop: Abstract base class driving epochs of stochastic gradient descent
"""

import numpy as np
from abc    import abstractmethod
from typing import Sequence

from tinynet.network    import NeuralNetwork
from tinynet.run.config import Config
from tinynet.run.trial  import Trial, mean_squared_error

class TrialBackprop(Trial):
    """
    Abstract base class for trials training a network by backpropagation.

    Each iteration is one epoch: NeuralNetwork.train() is called once for every
    training example, in random order if the configuration says 'shuffle'. After
    each epoch the mean squared error over the whole dataset is recorded.

    Training stops after 'num_epochs' epochs, or as soon as the error falls to
    'error_threshold' (if set), which counts as success.

    Subclasses must implement (in addition to the reporting hooks):
    - _get_training_data(): Return the (inputs, targets) pair of the dataset

    Public Attributes (available after run()):
        network:       The trained network
        error_history: Mean squared error before training, then after each epoch
    """

    def __init__(self, config: Config, suppress_output: bool = False, seed: int | None = None):
        super().__init__(config, suppress_output, seed)
        self.network      : NeuralNetwork | None = None
        self.error_history: list[float]          = []
        self._inputs : Sequence[Sequence[float]] = []
        self._targets: Sequence[Sequence[float]] = []

    @abstractmethod
    def _get_training_data(self) -> tuple[Sequence[Sequence[float]], Sequence[Sequence[float]]]:
        """
        Provide the training data.

        Returns:
            Tuple (inputs, targets): one input sequence and one target
            sequence per training example
        """
        pass

    def _reset(self):
        super()._reset()
        self.network       = None
        self.error_history = []

    def _initialize(self, num_jobs: int):
        self._inputs, self._targets = self._get_training_data()
        if len(self._inputs) == 0:
            raise ValueError("The training data must contain at least one example")
        if len(self._inputs) != len(self._targets):
            raise ValueError("The training data must have as many targets as inputs")

        uniform = np.random.default_rng(self._rng.getrandbits(32)).uniform
        self.network = NeuralNetwork.from_config(self._config, uniform)
        self.error_history.append(self.error)

    def _step(self, num_jobs: int):
        order = list(range(len(self._inputs)))
        if self._config.shuffle:
            self._rng.shuffle(order)

        for n in order:
            self.network.train(self._inputs[n], self._targets[n])

        self.error_history.append(self.error)

    @property
    def error(self) -> float:
        """Mean squared error of the network over the training data."""
        return mean_squared_error(self.network, self._inputs, self._targets)

    @property
    def score(self) -> float | None:
        """Training error after the latest epoch."""
        return self.error_history[-1] if self.error_history else None

    def _solved(self) -> bool:
        if self._config.error_threshold is None:
            return False
        return self.error_history[-1] <= self._config.error_threshold

    def _max_iterations(self) -> int:
        return self._config.num_epochs

    def _report_progress(self):
        """
        Print the epoch number and the training error every 'report_interval' epochs.
        """
        interval = self._config.report_interval
        if interval and self._iteration_counter % interval == 0:
            print(f"epoch {self._iteration_counter:06d}: mse = {self.error_history[-1]:.6f}")
