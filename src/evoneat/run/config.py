import configparser
import os

class Config:

    @staticmethod
    def _parse_output_names(raw_names):
        """
        Parse output_names from string to list.

        Parameters:
            raw_names: Either a comma-separated list of names, or already a list

        Returns:
            List of output names
        """
        if raw_names is None:
            raise ValueError("output_names must contain at least one non-empty name")
        if isinstance(raw_names, str):
            names = [name.strip() for name in raw_names.split(',')]
        else:
            names = list(raw_names)

        if not names or any(not name for name in names):
            raise ValueError("output_names must contain at least one non-empty name")
        if len(set(names)) != len(names):
            raise ValueError(f"output_names must be unique, got {names}")
        return names

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or create a default Config.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, creates a Config holding the default value of
                         every parameter, suitable for manual attribute setting.
        """

        # Default config for testing/manual setup
        if config_file is None:
            self.population_size    = 150
            self.num_inputs         = 2
            self.output_names       = ['output']
            self.initial_cxn_policy = 'dense'

            self.speciating_threshold    = 3.0
            self.distance_excess_coeff   = 1.0
            self.distance_disjoint_coeff = 1.0
            self.distance_weight_coeff   = 0.4

            self.kill_rate                = 0.9
            self.min_species_size         = 3
            self.elitism                  = 5
            self.selection_breed_fraction = 0.75
            self.disable_inherited_prob   = 0.75

            self.min_weight            = -2.0
            self.max_weight            =  2.0
            self.weight_shift_prob     = 0.9
            self.weight_replace_prob   = 0.1
            self.weight_shift_strength = 1.0

            self.weight_mutation_prob = 0.8
            self.link_mutation_prob   = 0.1
            self.neuron_mutation_prob = 0.06
            self.link_search_budget   = 0.01

            self.sigmoid_steepness = 4.9

            self.max_number_generations    = 100
            self.fitness_termination_check = False
            self.fitness_criterion         = 'max'
            self.fitness_threshold         = None

            self._validate()
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

        # [POPULATION INIT]

        # The number of genomes in each generation.
        self.population_size = get_value('POPULATION_INIT', 'population_size', int, default=150)

        # The number of input nodes, through which the network receives inputs.
        # The bias node is not counted.
        self.num_inputs = get_value('POPULATION_INIT', 'num_inputs', int, default=2)

        # Comma-separated names of the output nodes. Their number
        # defines the number of outputs; their order, the output order.
        self.output_names = get_value('POPULATION_INIT', 'output_names', str, default='output')

        # Specifies the initial connectivity of newly-created networks.
        # Allowed values:
        #   "dense"  - connect all sensor nodes (bias included) to all output nodes
        #   "sparse" - apply the link mutation a random number of times,
        #              between 1 and the number of inputs
        self.initial_cxn_policy = get_value('POPULATION_INIT', 'initial_cxn_policy', str, default='dense')

        # [SPECIATION]

        # Genomes whose distance from a species representative is
        # less than this threshold join that species.
        self.speciating_threshold = get_value('SPECIATION', 'speciating_threshold', float, default=3.0)

        # The coefficients for the excess and disjoint gene counts'
        # contribution to the genomic distance (both normalized by
        # the size of the larger genome).
        self.distance_excess_coeff   = get_value('SPECIATION', 'distance_excess_coeff'  , float, default=1.0)
        self.distance_disjoint_coeff = get_value('SPECIATION', 'distance_disjoint_coeff', float, default=1.0)

        # The coefficient for the average weight difference of
        # matching connections' contribution to the genomic distance.
        self.distance_weight_coeff = get_value('SPECIATION', 'distance_weight_coeff', float, default=0.4)

        # [REPRODUCTION]

        # The fraction of each species (worst first) removed before breeding.
        self.kill_rate = get_value('REPRODUCTION', 'kill_rate', float, default=0.9)

        # Species smaller than this after culling do not breed.
        self.min_species_size = get_value('REPRODUCTION', 'min_species_size', int, default=3)

        # The number of most-fit genomes of the population that
        # will be preserved as-is from one generation to the next.
        self.elitism = get_value('REPRODUCTION', 'elitism', int, default=5)

        # The fraction of the population bred by the top third of the
        # species, proportionally to their shared fitness.
        self.selection_breed_fraction = get_value('REPRODUCTION', 'selection_breed_fraction', float, default=0.75)

        # The probability that a connection inherited disabled by
        # either parent is disabled in the child.
        self.disable_inherited_prob = get_value('REPRODUCTION', 'disable_inherited_prob', float, default=0.75)

        # [CONNECTION]

        # The range from which new (and replaced) connection weights are drawn uniformly.
        self.min_weight = get_value('CONNECTION', 'min_weight', float, default=-2.0)
        self.max_weight = get_value('CONNECTION', 'max_weight', float, default= 2.0)

        # The probability that mutation will change the 'weight'
        # of a connection by adding a random value.
        self.weight_shift_prob = get_value('CONNECTION', 'weight_shift_prob', float, default=0.9)

        # The probability that mutation will replace the 'weight' of a connection
        # with a newly chosen random value (as if it were a new connection).
        self.weight_replace_prob = get_value('CONNECTION', 'weight_replace_prob', float, default=0.1)

        # The half-width of the zero-centered uniform distribution
        # from which a 'weight' shift is drawn.
        self.weight_shift_strength = get_value('CONNECTION', 'weight_shift_strength', float, default=1.0)

        # [STRUCTURAL MUTATIONS]

        # The probability that the weights of all connections are mutated.
        self.weight_mutation_prob = get_value('STRUCTURAL_MUTATIONS', 'weight_mutation_prob', float, default=0.8)

        # The probability that mutation will add a connection between existing nodes.
        self.link_mutation_prob = get_value('STRUCTURAL_MUTATIONS', 'link_mutation_prob', float, default=0.1)

        # The probability that mutation will add a new node (essentially replacing
        # an existing connection, the enabled status of which will be set to False).
        self.neuron_mutation_prob = get_value('STRUCTURAL_MUTATIONS', 'neuron_mutation_prob', float, default=0.06)

        # Seconds spent looking for a legal new connection before the
        # link mutation gives up (leaving the genome unchanged).
        self.link_search_budget = get_value('STRUCTURAL_MUTATIONS', 'link_search_budget', float, default=0.01)

        # [NODE]

        # Steepness of the sigmoid applied by hidden and output nodes.
        self.sigmoid_steepness = get_value('NODE', 'sigmoid_steepness', float, default=4.9)

        # [TERMINATION]

        # Whether to use the fitness of the most recent
        # generation as a criterion for stopping the run.
        self.fitness_termination_check = get_value('TERMINATION', 'fitness_termination_check', bool, default=False)

        # The function used to compute the termination criterion.
        # Only applicable if 'fitness_termination_check' is 'True'.
        # Allowed values:
        #   "mean" the average fitness across the entire population
        #   "max"  the fitness of the fittest genome in the population
        self.fitness_criterion = get_value('TERMINATION', 'fitness_criterion', str, default='max')

        # The fitness value which when met or exceeded causes the run to end.
        # Only applicable if 'fitness_termination_check' is 'True'.
        self.fitness_threshold = get_value('TERMINATION', 'fitness_threshold', float, default=None)

        # The number of generations after which to stop the run.
        # If 'fitness_termination_check' is 'True', the run may stop sooner.
        self.max_number_generations = get_value('TERMINATION', 'max_number_generations', int, default=100)

        self._validate()

    def _validate(self):
        if self.population_size is None or self.population_size < 1:
            raise ValueError(f"population_size must be at least 1, got {self.population_size}")
        if self.num_inputs is None or self.num_inputs < 1:
            raise ValueError(f"num_inputs must be at least 1, got {self.num_inputs}")
        if self.kill_rate is None or not 0.0 <= self.kill_rate < 1.0:
            raise ValueError(f"kill_rate must lie in [0, 1), got {self.kill_rate}")
        if self.min_species_size is None or self.min_species_size < 0:
            raise ValueError(f"min_species_size must not be negative, got {self.min_species_size}")
        if self.elitism is None or self.elitism < 0:
            raise ValueError(f"elitism must not be negative, got {self.elitism}")
        if self.min_weight > self.max_weight:
            raise ValueError(f"min_weight ({self.min_weight}) exceeds max_weight ({self.max_weight})")

    def __setattr__(self, name, value):
        """
        Override 'setattr' to automatically parse output_names when set.
        This allows users to write config.output_names = "x, y" and have it
        automatically converted (and validated) to the list ['x', 'y'].
        """
        if name == 'output_names':
            value = self._parse_output_names(value)
        super().__setattr__(name, value)
