"""
NEAT Trial Module

This module defines the abstract base class for NEAT trials, with built-in
support for thread-based parallel fitness evaluation.

A trial represents one independent run of the NEAT algorithm, evolving a
population through generations until a solution is found or the maximum
number of generations is reached.
"""

from abc    import ABC, abstractmethod
from typing import TYPE_CHECKING

from evoneat.pool import Population
if TYPE_CHECKING:
    from evoneat.genotype   import Genome
    from evoneat.run.config import Config

class Trial(ABC):
    """
    Abstract base class for implementing a NEAT trial.

    Subclasses must implement:
    - _evaluate_fitness(genome): Evaluate fitness for a single genome
    - _report_progress(): Display progress after each generation
    - _final_report(): Display final results

    Subclasses can override:
    - _reset(): Reset trial-specific state (calling super()._reset())
    - _terminate(): Custom termination logic (default: max generations + fitness threshold)

    Public Attributes:
        failed: Whether the last run ended without meeting the fitness threshold

    Public Methods:
        run(num_jobs): Execute a complete NEAT trial

    Parallelization of fitness evaluation:
        num_jobs=1:  Serial evaluation (no parallelization)
        num_jobs>1:  Use specified number of worker threads
        num_jobs=-1: Use one worker thread per available CPU core
    """

    def __init__(self, config: 'Config', suppress_output: bool = False):
        """
        Initialize the trial.

        Parameters:
            config:          Configuration parameters
            suppress_output: If True, suppress progress and final reports
        """
        self._config            : 'Config'          = config
        self._generation_counter: int               = 0
        self._population        : Population | None = None
        self._suppress_output   : bool              = suppress_output
        self.failed             : bool              = True

    @property
    def population(self) -> Population | None:
        return self._population

    def run(self, num_jobs: int = 1):
        """
        Run the trial.

        Resets the trial state and runs the evolutionary
        algorithm until the terminate condition is met.

        Parameters:
            num_jobs: Number of parallel workers for fitness evaluation
                      1 = serial (no parallelization)
                     -1 = use all available CPU cores
                     >1 = use specified number of workers
        """
        # Reset the trial state before starting a new run
        self._reset()

        # Create and evaluate the initial population
        self._population = Population(self._config, self._evaluate_fitness)
        self._population.run(num_jobs)

        if not self._suppress_output:
            self._report_progress()

        # Evolution loop
        while not self._terminate():
            self._generation_counter += 1

            # Breed the next generation, then evaluate it
            self._population.select()
            self._population.run(num_jobs)

            if not self._suppress_output:
                self._report_progress()

        if not self._suppress_output:
            self._final_report()

    def _reset(self):
        """
        Reset the trial state before starting a new run.
        """
        self._generation_counter = 0
        self._population         = None
        self.failed              = True

    @abstractmethod
    def _evaluate_fitness(self, genome: 'Genome') -> float:
        """
        Evaluate and return the fitness of a genome.

        This method should test the genome's network on the problem
        domain and compute a fitness score. Higher fitness values
        indicate better performance and higher probability of procreating.

        IMPORTANT: The fitness should be a positive number (or zero), and
        the genome must not be modified. With num_jobs != 1 this method
        is called concurrently from several threads.

        Parameters:
            genome: The Genome to evaluate

        Returns:
            float: Fitness score for the genome
        """
        pass

    @abstractmethod
    def _report_progress(self):
        """
        Report trial progress after each generation.

        This method is suppressed by setting 'self._suppress_output' to 'True'.
        """
        pass

    @abstractmethod
    def _final_report(self):
        """
        Produce final report at the end of the trial.

        This method is suppressed by setting 'self._suppress_output' to 'True'.
        """
        pass

    def _terminate(self) -> bool:
        """
        Determine whether the trial should terminate.

        This default implementation stops the trial after a maximum number
        of generations and (optionally) also stops it if a given measure of
        population fitness has reached a given threshold.

        Returns:
            bool: True if the trial should stop, False otherwise
        """
        # Has this trial run for too long?
        terminate = self._generation_counter >= self._config.max_number_generations

        # Check whether the fitness has reached a target threshold
        if self._config.fitness_termination_check:
            if self._config.fitness_criterion == "max":
                overall_fitness = self._population.best_genome.fitness
            elif self._config.fitness_criterion == "mean":
                overall_fitness = self._population.average_fitness
            else:
                raise RuntimeError("bad 'fitness_criterion' in configuration file")

            success   = overall_fitness >= self._config.fitness_threshold
            terminate = terminate or success

            if terminate:
                self.failed = not success

        return terminate
