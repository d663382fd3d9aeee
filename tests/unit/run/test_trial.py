"""
Unit tests for the Trial classes: the common run loop, backpropagation
trials and evolutionary trials.
"""

import pytest
from joblib        import parallel_backend
from unittest.mock import patch

from tinynet.evolution  import Individual
from tinynet.network    import NeuralNetwork
from tinynet.run        import Trial, TrialBackprop, TrialEvolution, mean_squared_error
from tinynet.run.config import Config


# ============================================================================
# Concrete trials used by the tests
# ============================================================================

class LineTrial(TrialBackprop):
    """Learn to map 0 -> 0.2 and 1 -> 0.8."""

    def _reset(self):
        super()._reset()
        self.final_reports = 0

    def _get_training_data(self):
        return [[0.0], [1.0]], [[0.2], [0.8]]

    def _final_report(self):
        self.final_reports += 1


class HalfTrial(TrialEvolution):
    """Evolve a network whose output is 0.5 for input 1."""

    def _reset(self):
        super()._reset()
        self.max_fitness_history = []

    def _evaluate_fitness(self, individual: Individual) -> float:
        output = individual.network.predict([1.0])[0]
        return 1.0 - (output - 0.5) ** 2

    def _report_progress(self):
        self.max_fitness_history.append(self.fittest_individual.fitness)

    def _final_report(self):
        pass


@pytest.fixture
def config():
    config = Config()
    config.input_nodes, config.hidden_nodes, config.output_nodes = 1, 3, 1
    config.learning_rate          = 0.5
    config.num_epochs             = 40
    config.report_interval        = 10
    config.population_size        = 12
    config.max_number_generations = 8
    return config


# ============================================================================
# Test Classes
# ============================================================================

class TestMeanSquaredError:

    def test_perfect_network(self):
        network = NeuralNetwork(1, 1, 1, lambda low, high: 0.0)
        # every output is sigmoid(0 * hidden + 0) = 0.5
        assert mean_squared_error(network, [[0.0], [1.0]], [[0.5], [0.5]]) == 0.0

    def test_averages_over_outputs(self):
        network = NeuralNetwork(1, 1, 2, lambda low, high: 0.0)
        assert mean_squared_error(network, [[0.0]], [[1.5, 0.5]]) == pytest.approx(0.5)


class TestTrialIsAbstract:

    def test_cannot_instantiate(self, config):
        with pytest.raises(TypeError):
            Trial(config)

    def test_backprop_requires_training_data(self, config):
        class Incomplete(TrialBackprop):
            def _reset(self):
                super()._reset()
            def _final_report(self):
                pass
        with pytest.raises(TypeError):
            Incomplete(config)


class TestTrialBackprop:

    def test_runs_all_epochs(self, config):
        trial = LineTrial(config, suppress_output=True, seed=0)
        trial.run()
        assert trial._iteration_counter == 40
        assert len(trial.error_history) == 41
        assert trial.failed

    def test_error_decreases(self, config):
        trial = LineTrial(config, suppress_output=True, seed=0)
        trial.run()
        assert trial.error_history[-1] < trial.error_history[0]
        assert trial.error == trial.error_history[-1]

    def test_stops_at_error_threshold(self, config):
        config.error_threshold = 1.0
        trial = LineTrial(config, suppress_output=True, seed=0)
        trial.run()
        assert trial._iteration_counter == 0
        assert not trial.failed

    def test_network_follows_config(self, config):
        trial = LineTrial(config, suppress_output=True, seed=0)
        trial.run()
        assert trial.network.hidden_nodes == 3
        assert trial.network.learning_rate == 0.5

    def test_same_seed_same_run(self, config):
        first  = LineTrial(config, suppress_output=True, seed=11)
        second = LineTrial(config, suppress_output=True, seed=11)
        first.run()
        second.run()
        assert first.error_history == second.error_history

    def test_rerun_is_reproducible(self, config):
        trial = LineTrial(config, suppress_output=True, seed=4)
        trial.run()
        history = list(trial.error_history)
        trial.run()
        assert trial.error_history == history

    def test_unshuffled_order(self, config):
        config.shuffle    = False
        config.num_epochs = 2
        trial = LineTrial(config, suppress_output=True, seed=0)
        with patch.object(NeuralNetwork, 'train', autospec=True) as train:
            trial.run()
        inputs = [call.args[1] for call in train.call_args_list]
        assert inputs == [[0.0], [1.0], [0.0], [1.0]]

    def test_mismatched_data(self, config):
        class Broken(LineTrial):
            def _get_training_data(self):
                return [[0.0], [1.0]], [[0.5]]
        with pytest.raises(ValueError, match="as many targets as inputs"):
            Broken(config, suppress_output=True).run()

    def test_empty_data(self, config):
        class Empty(LineTrial):
            def _get_training_data(self):
                return [], []
        with pytest.raises(ValueError, match="at least one example"):
            Empty(config, suppress_output=True).run()

    def test_score_is_latest_error(self, config):
        trial = LineTrial(config, suppress_output=True, seed=0)
        assert trial.score is None
        trial.run()
        assert trial.score == trial.error_history[-1]

    def test_progress_report(self, config, capsys):
        trial = LineTrial(config, seed=0)
        trial.run()
        lines = capsys.readouterr().out.splitlines()
        # epochs 0, 10, 20, 30, 40
        assert len(lines) == 5
        assert lines[-1].startswith("epoch 000040: mse = ")
        assert trial.final_reports == 1

    def test_suppressed_output(self, config, capsys):
        trial = LineTrial(config, suppress_output=True, seed=0)
        trial.run()
        assert capsys.readouterr().out == ""
        assert trial.final_reports == 0


class TestTrialEvolution:

    def test_runs_all_generations(self, config):
        trial = HalfTrial(config, seed=0)
        trial.run()
        assert trial._iteration_counter == 8
        assert len(trial.max_fitness_history) == 9
        assert trial.failed

    def test_best_fitness_never_decreases(self, config):
        trial = HalfTrial(config, seed=1)
        trial.run()
        history = trial.max_fitness_history
        assert all(later >= earlier for earlier, later in zip(history, history[1:]))

    def test_stops_at_fitness_threshold(self, config):
        config.fitness_threshold = 0.0
        trial = HalfTrial(config, seed=0)
        trial.run()
        assert trial._iteration_counter == 0
        assert not trial.failed

    def test_population_size(self, config):
        trial = HalfTrial(config, seed=0)
        trial.run()
        assert len(trial._population.individuals) == 12
        assert all(ind.fitness is not None for ind in trial._population.individuals)

    def test_same_seed_same_run(self, config):
        first  = HalfTrial(config, seed=5)
        second = HalfTrial(config, seed=5)
        first.run()
        second.run()
        assert first.max_fitness_history == second.max_fitness_history

    def test_parallel_evaluation_matches_serial(self, config):
        serial = HalfTrial(config, seed=2)
        serial.run(num_jobs=1)
        parallel = HalfTrial(config, seed=2)
        with parallel_backend('threading'):
            parallel.run(num_jobs=2)
        assert parallel.max_fitness_history == serial.max_fitness_history

    def test_score_is_best_fitness(self, config):
        trial = HalfTrial(config, seed=3)
        assert trial.score is None
        trial.run()
        assert trial.score == trial.max_fitness_history[-1]
