"""
End-to-end tests: XOR solved (or at least approached) by evolving
a population of 2-4-1 networks, and by the Trial / Experiment layer.
"""

import pytest

from tinynet.evolution import Individual
from tinynet.run       import Config, Experiment, TrialBackprop, TrialEvolution


class XORTrialEvolution(TrialEvolution):

    def _reset(self):
        super()._reset()
        self.max_fitness_history = []

    def _evaluate_fitness(self, individual: Individual) -> float:
        fitness = 4.0
        for inputs, target in zip(self.xor_inputs, self.xor_outputs):
            fitness -= (individual.network.predict(inputs)[0] - target[0]) ** 2
        return fitness

    def _report_progress(self):
        self.max_fitness_history.append(self.fittest_individual.fitness)

    def _final_report(self):
        pass

    xor_inputs  = [[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]]
    xor_outputs = [[0.0], [1.0], [1.0], [0.0]]


class XORTrialBackprop(TrialBackprop):

    def _get_training_data(self):
        return XORTrialEvolution.xor_inputs, XORTrialEvolution.xor_outputs

    def _final_report(self):
        pass


@pytest.fixture
def config():
    config = Config()
    config.population_size        = 40
    config.elitism                = 2
    config.survival_threshold     = 0.25
    config.max_number_generations = 40
    config.perturb_prob           = 0.3
    config.perturb_strength       = 0.4
    config.replace_prob           = 0.02
    return config


class TestXOREvolution:

    def test_fitness_improves(self, config):
        trial = XORTrialEvolution(config, seed=0)
        trial.run()
        history = trial.max_fitness_history
        assert history[-1] > history[0]
        assert all(later >= earlier for earlier, later in zip(history, history[1:]))

    def test_fittest_network_beats_constant_guess(self, config):
        """Test the evolved network does better than always answering 0.5 (fitness 3.0)."""
        config.max_number_generations = 100
        trial = XORTrialEvolution(config, seed=1)
        trial.run()
        assert trial.fittest_individual.fitness > 3.0


class TestXORExperiment:

    def test_backprop_experiment(self, config, capfd):
        config.num_epochs      = 300
        config.learning_rate   = 0.5
        config.error_threshold = 0.24
        experiment = Experiment(XORTrialBackprop, 2, config)
        experiment.run()
        out = capfd.readouterr().out
        assert "Starting trial 002 of 2" in out
        assert "SUMMARY:" in out

        assert [r["trial_number"] for r in experiment.results] == [1, 2]
        for r in experiment.results:
            assert r["number_iterations"] <= 300
            assert r["success"] == (r["score"] <= 0.24)
        assert experiment.summary()["num_trials"] == 2
