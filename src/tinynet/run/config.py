import configparser
import os
from tinynet.activations import activations

class Config:

    @staticmethod
    def _check_activation(name):
        """
        Validate the name of an activation function.

        Parameters:
            name: Name of the activation function (see 'basic_activations.py')

        Returns:
            The name, unchanged
        """
        if name not in activations:
            raise ValueError(f"Invalid activation function '{name}' in configuration")
        return name

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or create a Config with default values.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, creates a default Config for manual attribute setting.
        """

        # Default config for testing/manual setup
        if config_file is None:
            self.input_nodes    = 2
            self.hidden_nodes   = 4
            self.output_nodes   = 1
            self.activation     = 'sigmoid'
            self.init_min_value = -1.0
            self.init_max_value =  1.0

            # Set defaults for training
            self.learning_rate   = 0.1
            self.num_epochs      = 10000
            self.shuffle         = True
            self.error_threshold = None
            self.report_interval = 1000

            # Set defaults for mutation
            self.perturb_prob     = 0.8
            self.perturb_strength = 0.5
            self.replace_prob     = 0.1
            self.min_value        = None
            self.max_value        = None

            # Set defaults for evolution
            self.population_size        = 50
            self.elitism                = 2
            self.survival_threshold     = 0.2
            self.max_number_generations = 200
            self.fitness_threshold      = None

            return

        if not os.path.exists(config_file):
            raise FileNotFoundError(f"Configuration file '{config_file}' not found")

        parser = configparser.ConfigParser()
        parser.read(config_file)

        # Sentinel for missing default values
        _NO_DEFAULT = object()

        # Helper function to safely parse values
        def get_value(section, key, value_type, default=_NO_DEFAULT):
            try:
                raw_value = parser.get(section, key)
                if raw_value.lower() == 'none':
                    return None
                if value_type == int:
                    return parser.getint(section, key)
                elif value_type == float:
                    return parser.getfloat(section, key)
                elif value_type == bool:
                    return parser.getboolean(section, key)
                elif value_type == str:
                    return raw_value
            except (configparser.NoSectionError, configparser.NoOptionError):
                if default is not _NO_DEFAULT:
                    return default
                raise

        # [NETWORK]

        # The number of nodes in the input, hidden and output layers.
        self.input_nodes  = get_value('NETWORK', 'input_nodes' , int)
        self.hidden_nodes = get_value('NETWORK', 'hidden_nodes', int)
        self.output_nodes = get_value('NETWORK', 'output_nodes', int)

        # Activation function used by both layers.
        # Options: sigmoid, tanh, identity, relu (see 'basic_activations.py').
        self.activation = self._check_activation(get_value('NETWORK', 'activation', str, default='sigmoid'))

        # The range of the uniform distribution used
        # to initialize weights and biases of new networks.
        self.init_min_value = get_value('NETWORK', 'init_min_value', float, default=-1.0)
        self.init_max_value = get_value('NETWORK', 'init_max_value', float, default= 1.0)

        # [TRAINING]

        # The step size of each gradient descent update.
        self.learning_rate = get_value('TRAINING', 'learning_rate', float, default=0.1)

        # The number of passes over the training data after which to stop.
        self.num_epochs = get_value('TRAINING', 'num_epochs', int, default=10000)

        # Whether to visit the training examples in a random order on each epoch.
        self.shuffle = get_value('TRAINING', 'shuffle', bool, default=True)

        # The mean squared error which when met or undercut causes training to end.
        # Use "None" to always train for 'num_epochs' epochs.
        self.error_threshold = get_value('TRAINING', 'error_threshold', float, default=None)

        # Report progress every this many epochs.
        self.report_interval = get_value('TRAINING', 'report_interval', int, default=1000)

        # [MUTATION]

        # The probability that mutation will change a parameter by adding a random value.
        self.perturb_prob = get_value('MUTATION', 'perturb_prob', float, default=0.8)

        # The standard deviation of the zero-centered normal distribution
        # from which a perturbation value is drawn.
        self.perturb_strength = get_value('MUTATION', 'perturb_strength', float, default=0.5)

        # The probability that mutation will replace a parameter with a newly chosen
        # random value, drawn as when initializing a new network.
        self.replace_prob = get_value('MUTATION', 'replace_prob', float, default=0.1)

        # The minimum and maximum allowed parameter values after mutation.
        # Use "None" for no bound.
        self.min_value = get_value('MUTATION', 'min_value', float, default=None)
        self.max_value = get_value('MUTATION', 'max_value', float, default=None)

        # [EVOLUTION]

        # The number of individuals in each generation.
        self.population_size = get_value('EVOLUTION', 'population_size', int, default=50)

        # The number of most-fit individuals that will be preserved
        # as-is from one generation to the next.
        self.elitism = get_value('EVOLUTION', 'elitism', int, default=2)

        # The fraction of individuals allowed to reproduce.
        self.survival_threshold = get_value('EVOLUTION', 'survival_threshold', float, default=0.2)

        # The number of generations after which to stop the run.
        self.max_number_generations = get_value('EVOLUTION', 'max_number_generations', int, default=200)

        # The fitness value which when met or exceeded by the fittest
        # individual causes the run to end. Use "None" to disable.
        self.fitness_threshold = get_value('EVOLUTION', 'fitness_threshold', float, default=None)

    def __setattr__(self, name, value):
        """
        Override 'setattr' to validate the activation function name when set.
        """
        if name == 'activation':
            value = self._check_activation(value)
        super().__setattr__(name, value)
