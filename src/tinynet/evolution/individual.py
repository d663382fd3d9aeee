"""
Individual Module

This module implements the Individual class, representing one member of an
evolving population of neural networks.

Classes:
    Individual: A neural network together with a unique ID and a fitness
"""

from itertools import count
from typing    import Callable, Optional

from tinynet.network import NeuralNetwork

class Individual:
    """
    An individual organism in an evolving population.

    You can regard an individual as a thin wrapper around the network that
    powers it, to which it adds a unique ID and a fitness. Evolution operates
    on Individual(s): they are evaluated, compared, and reproduced to create
    offspring through copying and mutation.

    Public Attributes:
        ID:      Globally unique identifier for this individual
        fitness: Fitness score (None until evaluated)
        network: The NeuralNetwork powering this individual

    Public Methods:
        clone():            Create an identical copy of this individual (with a new ID)
        offspring(perturb): Create a mutated copy of this individual
    """

    _id_generator = count(0)

    def __init__(self, network: NeuralNetwork):
        """
        Parameters:
            network: The NeuralNetwork that powers this Individual
        """
        self.ID     : int             = next(Individual._id_generator)  # unique ID
        self.fitness: Optional[float] = None                            # fitness used when reproducing
        self.network: NeuralNetwork   = network

    def clone(self) -> 'Individual':
        """
        Create a new, unevaluated Individual powered by a deep copy of this one's network.
        """
        return Individual(self.network.copy())

    def offspring(self, perturb: Callable[[float], float]) -> 'Individual':
        """
        Create a new Individual by copying this one and mutating the copy.

        Parameters:
            perturb: The perturbation rule applied to every weight and bias of the copy

        Returns:
            the offspring
        """
        child = self.clone()
        child.network.mutate(perturb)
        return child

    def __repr__(self):
        return f"Individual(ID={self.ID}, fitness={self.fitness})"
