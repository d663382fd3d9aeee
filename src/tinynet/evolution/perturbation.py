"""
Perturbation Module

This module implements the perturbation rules handed to
NeuralNetwork.mutate() by evolutionary callers.

Classes:
    Perturbation: Stochastic value -> value rule (Gaussian nudge or replacement)

Functions:
    identity_perturbation: Leaves every value unchanged
"""

import random
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tinynet.run.config import Config

def identity_perturbation(value: float) -> float:
    return value

class Perturbation:
    """
    A stochastic rule mapping a parameter value to its mutated value.

    Both whether a mutation occurs and its nature & magnitude are stochastic.
    A value can be mutated in two ways:
     + modifying the current value additively by a small, normally distributed amount
     + replacing the current value by a new one, drawn uniformly from a range
    The result is optionally clipped to an allowed range.

    Public Methods:
        from_config(config, rng): Build the rule from the [MUTATION] section (class method)
        __call__(value):          Return the (possibly) mutated value
    """

    def __init__(self,
                 perturb_prob    : float,
                 perturb_strength: float,
                 replace_prob    : float = 0.0,
                 replace_range   : tuple[float, float] = (-1.0, 1.0),
                 clip_range      : tuple[float | None, float | None] | None = None,
                 rng             : random.Random | None = None):
        """
        Parameters:
            perturb_prob:     Probability of adding Gaussian noise to a value
            perturb_strength: Standard deviation of the zero-centered Gaussian noise
            replace_prob:     Probability of replacing a value by a uniform draw
            replace_range:    The (low, high) range replacement values are drawn from
            clip_range:       The (min, max) range results are clipped to; either
                              bound may be None, and None disables clipping
            rng:              Random generator; defaults to a fresh random.Random
        """
        if not 0.0 <= perturb_prob <= 1.0 or not 0.0 <= replace_prob <= 1.0:
            raise ValueError("Mutation probabilities must be within [0, 1]")
        if perturb_prob + replace_prob > 1.0:
            raise ValueError("'perturb_prob' and 'replace_prob' must not add up to more than 1")
        if perturb_strength < 0:
            raise ValueError("'perturb_strength' must be non-negative")

        self.perturb_prob    : float = perturb_prob
        self.perturb_strength: float = perturb_strength
        self.replace_prob    : float = replace_prob
        self.replace_range           = replace_range
        self.clip_range              = clip_range
        self._rng: random.Random     = rng if rng is not None else random.Random()

    @classmethod
    def from_config(cls, config: 'Config', rng: random.Random | None = None) -> 'Perturbation':
        clip_range = None
        if config.min_value is not None or config.max_value is not None:
            clip_range = (config.min_value, config.max_value)

        return cls(config.perturb_prob,
                   config.perturb_strength,
                   config.replace_prob,
                   (config.init_min_value, config.init_max_value),
                   clip_range,
                   rng)

    def __call__(self, value: float) -> float:
        r = self._rng.random()
        if r < self.perturb_prob:
            value = value + self._rng.gauss(0, self.perturb_strength)
        elif r < self.perturb_prob + self.replace_prob:
            value = self._rng.uniform(*self.replace_range)

        if self.clip_range is not None:
            low, high = self.clip_range
            if low is not None:
                value = max(low, value)
            if high is not None:
                value = min(high, value)

        return value

    def __repr__(self):
        return (f"Perturbation(perturb_prob={self.perturb_prob}, perturb_strength={self.perturb_strength}, "
                f"replace_prob={self.replace_prob})")
