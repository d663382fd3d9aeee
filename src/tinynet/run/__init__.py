"""
Run Package

This package implements the layer driving training: configuration,
single trials (backpropagation or evolution) and multi-trial experiments.

Modules:
    config:         INI configuration
    trial:          Trial base class, evolutionary trials, error metric
    trial_backprop: Trials training a network by backpropagation
    experiment:     Multiple independent trials, optionally in parallel

Exported:
    Config, Trial, TrialEvolution, TrialBackprop, Experiment, mean_squared_error
"""

from tinynet.run.config         import Config
from tinynet.run.trial          import Trial, TrialEvolution, mean_squared_error
from tinynet.run.trial_backprop import TrialBackprop
from tinynet.run.experiment     import Experiment

__all__ = ['Config',
           'Trial',
           'TrialEvolution',
           'TrialBackprop',
           'Experiment',
           'mean_squared_error']
