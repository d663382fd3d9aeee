"""
Evolution Package

This package implements perturbation-based (evolutionary) tuning of
networks: perturbation rules handed to NeuralNetwork.mutate(), and a
population that evolves networks by elitism, selection and mutation.

Modules:
    perturbation: Perturbation rules
    individual:   Network with a unique ID and a fitness
    population:   Evolving collection of individuals

Exported:
    Perturbation:          Stochastic Gaussian-nudge / replacement rule
    identity_perturbation: Rule leaving every value unchanged
    Individual:            An evolved agent (network + fitness)
    Population:            Evolutionary coordinator
"""

from tinynet.evolution.perturbation import Perturbation, identity_perturbation
from tinynet.evolution.individual   import Individual
from tinynet.evolution.population   import Population

__all__ = ['Perturbation',
           'identity_perturbation',
           'Individual',
           'Population']
