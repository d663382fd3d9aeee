"""
Trial Module

This module defines the abstract base classes for trials. A trial represents
one independent run of a training procedure, iterating (epochs for
backpropagation, generations for evolution) until a solution is found or a
maximum number of iterations is reached.

Classes:
    Trial:          Abstract base class for all trials
    TrialEvolution: Abstract base class for trials evolving a population of networks
"""

import random
from abc    import ABC, abstractmethod
from joblib import Parallel, delayed
from typing import Sequence, TYPE_CHECKING

from tinynet.evolution  import Perturbation, Population
from tinynet.run.config import Config

if TYPE_CHECKING:
    from tinynet.evolution import Individual
    from tinynet.network   import NeuralNetwork

def mean_squared_error(network : 'NeuralNetwork',
                       inputs  : Sequence[Sequence[float]],
                       targets : Sequence[Sequence[float]]) -> float:
    """
    Mean squared prediction error of a network over a labeled dataset,
    averaged over every output of every example.
    """
    total, count = 0.0, 0
    for x, t in zip(inputs, targets):
        for y, target in zip(network.predict(x), t):
            total += (target - y) ** 2
            count += 1
    return total / count

class Trial(ABC):
    """
    Abstract base class for implementing a trial.

    Subclasses must implement:
    - _reset(): Reset trial-specific state and call super()._reset()
    - _initialize(): Create the trained object(s) and evaluate them once
    - _step(num_jobs): Perform one iteration (an epoch, a generation...)
    - _solved(): Whether an acceptable solution has been found
    - _max_iterations(): The number of iterations after which to stop
    - _report_progress(): Display progress after each iteration
    - _final_report(): Display final results

    Subclasses can override:
    - _terminate(): Custom termination logic (default: max iterations + solution found)

    Public Attributes:
        failed: Whether the trial ended without finding an acceptable solution

    Public Methods:
        run(): Execute a complete trial
    """

    def __init__(self, config: Config, suppress_output: bool = False, seed: int | None = None):
        """
        Initialize the trial.

        Parameters:
            config:          Configuration parameters
            suppress_output: If True, suppress progress and final reports
                             (useful when running multiple trials in experiments)
            seed:            Seed for the trial's random generator (None: unseeded)
        """
        self._config           : Config        = config
        self._iteration_counter: int           = 0
        self._suppress_output  : bool          = suppress_output
        self._seed             : int | None    = seed
        self._rng              : random.Random = random.Random(seed)
        self.failed            : bool          = True

    def run(self, num_jobs: int = 1):
        """
        Run the trial.

        Resets the trial state and iterates until the terminate condition is met.

        Parameters:
            num_jobs: Number of parallel processes, where the trial can use them
                      1 = serial (no parallelization)
                     -1 = use all available CPU cores
                     >1 = use specified number of processes
        """
        # Reset the trial state before starting a new run
        self._reset()

        # Create (and evaluate) whatever is being trained
        self._initialize(num_jobs)

        # Display progress for the initial state
        if not self._suppress_output:
            self._report_progress()

        # Main loop
        while not self._terminate():
            self._iteration_counter += 1
            self._step(num_jobs)

            if not self._suppress_output:
                self._report_progress()

        # Produce final report
        if not self._suppress_output:
            self._final_report()

    @abstractmethod
    def _reset(self):
        """
        Reset the trial state before starting a new run.

        Subclasses should call super()._reset() and then
        initialize their problem-specific data.
        """
        self._rng = random.Random(self._seed)
        self._iteration_counter = 0
        self.failed = True

    @abstractmethod
    def _initialize(self, num_jobs: int):
        pass

    @abstractmethod
    def _step(self, num_jobs: int):
        pass

    @abstractmethod
    def _solved(self) -> bool:
        pass

    @abstractmethod
    def _max_iterations(self) -> int:
        pass

    @abstractmethod
    def _report_progress(self):
        """
        Report trial progress after each iteration.

        This method is suppressed by setting 'self._suppress_output' to 'True',
        which we might do when running many trials, as part of an experiment.
        """
        pass

    @abstractmethod
    def _final_report(self):
        """
        Produce final report at the end of the trial.

        This method is suppressed by setting 'self._suppress_output' to 'True',
        which we might do when running many trials, as part of an experiment.
        """
        pass

    @property
    def score(self) -> float | None:
        """
        The figure of merit of the trained object at the current iteration,
        reported per trial by Experiment. None where a trial defines none.
        """
        return None

    def _terminate(self) -> bool:
        """
        Determine whether the trial should terminate.

        This default implementation stops the trial after a maximum number
        of iterations, or as soon as an acceptable solution has been found.

        Returns:
            bool: True if the trial should stop, False otherwise
        """
        success   = self._solved()
        terminate = success or self._iteration_counter >= self._max_iterations()
        if terminate:
            self.failed = not success
        return terminate

class TrialEvolution(Trial):
    """
    Abstract base class for trials evolving a population of networks.

    The population is evolved generation by generation, using the mutation
    parameters of the configuration, until the fittest individual reaches
    'fitness_threshold' or 'max_number_generations' generations have passed.

    Subclasses must implement (in addition to the reporting hooks):
    - _evaluate_fitness(individual): Evaluate fitness for a single individual

    Parallelization of fitness evaluation for individuals:
        num_jobs=1:  Serial evaluation (no parallelization)
        num_jobs>1:  Use specified number of parallel processes
        num_jobs=-1: Use all available CPU cores
    """

    def __init__(self, config: Config, suppress_output: bool = False, seed: int | None = None):
        super().__init__(config, suppress_output, seed)
        self._population: Population   | None = None
        self._perturb   : Perturbation | None = None

    def _reset(self):
        super()._reset()
        self._population = None
        self._perturb    = None

    def _initialize(self, num_jobs: int):
        self._perturb    = Perturbation.from_config(self._config, self._rng)
        self._population = Population(self._config, rng=self._rng)
        self._evaluate_fitness_all(num_jobs)

    def _step(self, num_jobs: int):
        # The members of the population reproduce
        self._population.spawn_next_generation(self._perturb)

        # Evaluate the fitness of each individual in the new generation
        self._evaluate_fitness_all(num_jobs)

    @abstractmethod
    def _evaluate_fitness(self, individual: 'Individual') -> float:
        """
        Evaluate and return the fitness of an individual.
        Higher fitness values indicate better performance
        and higher probability of procreating.

        Parameters:
            individual: The Individual (neural network) to evaluate

        Returns:
            float: Fitness score for the individual
        """
        pass

    def _evaluate_fitness_all(self, num_jobs: int):
        """
        Evaluate fitness for all individuals in the population.

        Parameters:
            num_jobs: Number of parallel processes for fitness evaluation
        """
        individuals = self._population.individuals
        serialize   = num_jobs == 1

        if serialize:
            for individual in individuals:
                individual.fitness = self._evaluate_fitness(individual)
        else:
            fitness_all = Parallel(num_jobs)(delayed(self._evaluate_fitness)(i) for i in individuals)
            for individual, fitness in zip(individuals, fitness_all):
                individual.fitness = fitness

    def _solved(self) -> bool:
        if self._config.fitness_threshold is None:
            return False
        return self._population.get_fittest_individual().fitness >= self._config.fitness_threshold

    def _max_iterations(self) -> int:
        return self._config.max_number_generations

    @property
    def score(self) -> float | None:
        """Fitness of the fittest individual."""
        if self._population is None:
            return None
        return self.fittest_individual.fitness

    @property
    def fittest_individual(self) -> 'Individual':
        return self._population.get_fittest_individual()
