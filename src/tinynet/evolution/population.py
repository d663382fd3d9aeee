"""
Population Module

This module implements the Population class, which evolves a set of
fixed-topology networks by elitism, truncation selection and mutation.

Classes:
    Population: Evolutionary coordinator managing individuals and generations
"""

import numpy as np
import random
from typing import Callable, TYPE_CHECKING

from tinynet.evolution.individual import Individual
from tinynet.network              import NeuralNetwork

if TYPE_CHECKING:
    from tinynet.run.config import Config

class Population:
    """
    A population of evolving individuals.

    All individuals share the network shape given in the configuration; they
    differ only in their weights and biases. Each new generation is made of:
     - the fittest 'elitism' individuals, transferred unchanged
     - mutated copies of parents drawn at random from the top
       'survival_threshold' fraction of the current generation

    Public Attributes:
        individuals: List of all Individual objects in the current generation

    Public Methods:
        get_fittest_individual(): Return the individual with highest fitness
        spawn_next_generation():  Create the next generation through evolution
    """

    def __init__(self,
                 config : 'Config',
                 uniform: Callable[[float, float], float] | None = None,
                 rng    : random.Random | None = None):
        """
        Initialize the population with freshly initialized networks.

        Parameters:
            config:  Stores configuration parameters
            uniform: Generator used to initialize network parameters, called as uniform(low, high)
            rng:     Random generator used to select parents
        """
        self._config = config
        self._rng    = rng if rng is not None else random.Random()

        if uniform is None:
            uniform = np.random.default_rng(self._rng.getrandbits(32)).uniform

        self.individuals: list[Individual] = [Individual(NeuralNetwork.from_config(config, uniform))
                                              for _ in range(config.population_size)]

    def get_fittest_individual(self) -> Individual:
        """
        Return the individual with the highest fitness.
        Use ID as tie-breaker, so the older individual wins.
        """
        self._check_evaluated()
        return max(self.individuals, key=lambda ind: (ind.fitness, -ind.ID))

    def spawn_next_generation(self, perturb: Callable[[float], float]):
        """
        Replace the current generation with the next one.

        As a precondition for running this method, all individuals must have their
        fitness already evaluated (fitness != None), so they can be sorted when
        selected for elitism and/or parenting.

        Parameters:
            perturb: The perturbation rule used to mutate offspring
        """
        self._check_evaluated()

        # Use ID as tie-breaker to ensure deterministic ordering when fitnesses are equal
        sorted_individuals = sorted(self.individuals, key=lambda ind: (ind.fitness, -ind.ID), reverse=True)
        population_size    = len(sorted_individuals)

        # Apply elitism: the top individuals are transferred
        # to the next generation unchanged.
        elite_number = min(self._config.elitism, population_size)
        offspring    = sorted_individuals[:elite_number]

        # Select the parent pool - this is the top fraction of individuals
        num_parents = max(1, int(population_size * self._config.survival_threshold))
        parent_pool = sorted_individuals[:num_parents]

        # Spawn new offspring, until we get the requested number
        while len(offspring) < population_size:
            parent = self._rng.choice(parent_pool)
            offspring.append(parent.offspring(perturb))

        self.individuals = offspring

    def _check_evaluated(self):
        if any(individual.fitness is None for individual in self.individuals):
            raise RuntimeError("All individuals must be evaluated before selection")
