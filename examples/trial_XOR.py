"""
XOR Problem Implementation for tinynet

This module trains the three-layer network on the classic XOR (exclusive OR)
problem, either by backpropagation or by evolution.

The XOR Problem:
    XOR is a two-input, one-output boolean function where the output is True
    only when the inputs differ:
        Input (0, 0) → Output 0
        Input (0, 1) → Output 1
        Input (1, 0) → Output 1
        Input (1, 1) → Output 0

    XOR is not linearly separable, so it requires the hidden layer.

Classes:
    Trial_XOR_Backprop: trains one network by stochastic gradient descent
    Trial_XOR_Evolve:   evolves a population of networks
    Experiment_XOR:     multi-trial experiment with statistical analysis

Usage:
    python trial_XOR.py backprop
    python trial_XOR.py evolve
    python trial_XOR.py experiment --trials 20 --jobs -1
"""

import argparse
from pathlib    import Path

from tinynet.evolution import Individual
from tinynet.run       import Config, Experiment, TrialBackprop, TrialEvolution

XOR_INPUTS  = [[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]]
XOR_OUTPUTS = [[0.0],      [1.0],      [1.0],      [0.0]]

def xor_table(network) -> str:
    """Truth table of the network's outputs on the 4 XOR cases."""
    s  = "input         output   target  error\n"
    s += "------------------------------------\n"
    for inputs, target in zip(XOR_INPUTS, XOR_OUTPUTS):
        output = network.predict(inputs)[0]
        s += f"{inputs} -> {output:.4f}    {target[0]}   {abs(output - target[0]):.4f}\n"
    return s

class Trial_XOR_Backprop(TrialBackprop):

    def _reset(self):
        super()._reset()

    def _get_training_data(self):
        return XOR_INPUTS, XOR_OUTPUTS

    def _final_report(self):
        print(f"\n{'SOLVED' if not self.failed else 'NOT SOLVED'} after {self._iteration_counter} epochs\n")
        print(xor_table(self.network))

class Trial_XOR_Evolve(TrialEvolution):
    """
    Fitness = 4.0 - Σ(output - target)², so a perfect network scores 4.0.
    """

    def _reset(self):
        super()._reset()

    def _evaluate_fitness(self, individual: Individual) -> float:
        fitness = 4.0
        for inputs, target in zip(XOR_INPUTS, XOR_OUTPUTS):
            output   = individual.network.predict(inputs)
            fitness -= (output[0] - target[0]) ** 2
        return fitness

    def _report_progress(self):
        fittest = self.fittest_individual
        print(f"generation {self._iteration_counter:04d}: max fitness = {fittest.fitness:.4f}")

    def _final_report(self):
        fittest = self.fittest_individual
        print(f"\n{'SOLVED' if not self.failed else 'NOT SOLVED'} after {self._iteration_counter} generations\n")
        print(xor_table(fittest.network))

class Experiment_XOR(Experiment):
    """
    Repeated backpropagation trials on XOR; prints one line per trial, then the summary.
    """

    def __init__(self, num_trials: int, config: Config):
        super().__init__(Trial_XOR_Backprop, num_trials, config)

    def _analyze_trial_results(self, results: dict):
        s  = f"Trial {results['trial_number']:03d}: "
        s += f"mse={results['score']:.5f}, "
        s += f"epochs={results['number_iterations']:5} "
        s += "[SUCCESS]" if results['success'] else "[FAILED]"
        print(s)

if __name__ == '__main__':
    parser = argparse.ArgumentParser(description="Train a 2-4-1 network on XOR")
    parser.add_argument('mode', choices=['backprop', 'evolve', 'experiment'])
    parser.add_argument('--config', default=str(Path(__file__).parent / 'config_xor.ini'))
    parser.add_argument('--seed',   type=int, default=None)
    parser.add_argument('--trials', type=int, default=10)
    parser.add_argument('--jobs',   type=int, default=1)
    args = parser.parse_args()

    config = Config(args.config)
    if args.mode == 'backprop':
        Trial_XOR_Backprop(config, seed=args.seed).run()
    elif args.mode == 'evolve':
        Trial_XOR_Evolve(config, seed=args.seed).run(num_jobs=args.jobs)
    else:
        Experiment_XOR(args.trials, config).run(num_jobs_trials=args.jobs)
