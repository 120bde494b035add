"""
NEAT Population Module

This module implements the Population class, the top-level orchestrator for the NEAT
evolutionary algorithm. The population manages the complete lifecycle of a generation,
from fitness evaluation through speciation, culling and breeding.

Classes:
    GenerationStage: Stages a generation goes through
    Population:      Top-level evolutionary coordinator managing genomes and generations
"""

import logging
import math
import random
from enum   import Enum
from typing import Callable, TYPE_CHECKING

import numpy as np
from joblib import Parallel, delayed, effective_n_jobs

from evoneat.genotype             import Genome, InnovationTracker
from evoneat.pool.species         import Species
from evoneat.pool.species_manager import SpeciesManager

if TYPE_CHECKING:
    from evoneat.run.config import Config

logger = logging.getLogger(__name__)

class GenerationStage(Enum):
    """
    A generation moves through: IDLE -> EVALUATED -> SPECIATED -> CULLED -> BRED.
    IDLE is the stage of the initial generation; BRED is the stage of every later
    generation until run() evaluates it.
    """
    IDLE      = "idle"
    EVALUATED = "evaluated"
    SPECIATED = "speciated"
    CULLED    = "culled"
    BRED      = "bred"

class Population:
    """
    A population of evolving genomes in the NEAT algorithm.

    The Population class represents the top-level container for the evolutionary
    process, managing the genomes of the current generation and coordinating their
    evolution. It owns the innovation tracker shared by all its genomes.

    A generation is processed in two calls:
        run():    evaluate the fitness of every genome (optionally in parallel)
        select(): speciate, cull and breed the next generation

    Public Attributes:
        genomes: List of all Genome objects in the current generation

    Public Properties:
        tracker:         The innovation tracker shared by all genomes
        generation:      Number of generations bred so far
        stage:           Current GenerationStage
        species:         Species computed by the last selection
        average_fitness: Average fitness of the last evaluated generation
        best_genome:     Fittest genome of the last evaluated generation

    Public Methods:
        run(num_jobs):        Evaluate the fitness of the current generation
        select():             Breed the next generation
        get_fittest_genome(): Return the genome with highest fitness
        is_consistent():      Check the invariants of every genome
    """

    def __init__(self,
                 config          : 'Config',
                 fitness_function: Callable[[Genome], float],
                 tracker         : InnovationTracker | None = None):
        """
        Initialize the population with a given number of Genomes.

        Every genome starts with the bias, input and output nodes only, and is
        then connected according to the initial connection policy.

        Parameters:
            config:           Stores configuration parameters
            fitness_function: Returns the fitness of a genome; must not modify it
            tracker:          Innovation tracker to use (a new one by default)
        """
        if config.population_size < 1:
            raise ValueError(f"population_size must be at least 1, got {config.population_size}")

        self._config           = config
        self._fitness_function = fitness_function
        self._tracker          = tracker if tracker is not None else InnovationTracker()

        self.genomes: list[Genome] = []
        for _ in range(config.population_size):
            genome = Genome(config, self._tracker)
            genome.initialize(config.initial_cxn_policy)
            self.genomes.append(genome)

        self._species_manager = SpeciesManager(config)
        self._generation      = 0
        self._stage           = GenerationStage.IDLE
        self._average_fitness: float | None  = None
        self._best_genome    : Genome | None = None

    @property
    def tracker(self) -> InnovationTracker:
        return self._tracker

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def stage(self) -> GenerationStage:
        return self._stage

    @property
    def species(self) -> list[Species]:
        return list(self._species_manager.species)

    @property
    def average_fitness(self) -> float | None:
        return self._average_fitness

    @property
    def best_genome(self) -> Genome | None:
        return self._best_genome

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def _evaluate_range(self, genomes: list[Genome]) -> tuple[list[float], float]:
        """
        Evaluate a contiguous slice of the population.

        Returns:
            the fitness of each genome, and their sum
        """
        fitnesses = []
        total     = 0.0
        for genome in genomes:
            fitness = float(self._fitness_function(genome))
            if math.isnan(fitness):
                logger.warning("Fitness function returned NaN; recording 0.0 instead")
                fitness = 0.0
            fitnesses.append(fitness)
            total += fitness
        return fitnesses, total

    def run(self, num_jobs: int = 1) -> None:
        """
        Evaluate the fitness of every genome of the current generation.

        The population is split into contiguous, near-equal ranges, one per
        worker. Workers are threads, so the fitness function runs on the
        genomes themselves; each worker accumulates its own fitness sum and
        the sums are reduced once all workers are done.

        Parameters:
            num_jobs: Number of parallel workers for fitness evaluation
                      1 = serial (no parallelization)
                     -1 = one worker per available CPU core
                     >1 = use specified number of workers
        """
        # Re-evaluating a generation replaces its fitness values
        for genome in self.genomes:
            genome.fitness = None

        num_workers = min(effective_n_jobs(num_jobs), len(self.genomes))

        if num_workers <= 1:
            results = [self._evaluate_range(self.genomes)]
        else:
            ranges  = [r for r in np.array_split(np.arange(len(self.genomes)), num_workers) if len(r)]
            results = Parallel(n_jobs=num_workers, prefer="threads")(
                delayed(self._evaluate_range)(self.genomes[r[0]:r[-1] + 1]) for r in ranges)

        fitnesses = [fitness for range_fitnesses, _ in results for fitness in range_fitnesses]
        total     = sum(range_total for _, range_total in results)

        for genome, fitness in zip(self.genomes, fitnesses):
            genome.fitness = fitness

        self._average_fitness = total / len(self.genomes) if self.genomes else None
        self._best_genome     = self.get_fittest_genome()
        self._stage           = GenerationStage.EVALUATED

        logger.debug("Generation %d evaluated: average fitness %s, best fitness %s",
                     self._generation, self._average_fitness,
                     None if self._best_genome is None else self._best_genome.fitness)

    def get_fittest_genome(self) -> Genome | None:
        """
        Find and return the genome with the highest fitness in the population.

        Returns:
            The genome with the highest fitness value (the first one, on ties),
            or None if the population is empty or has not been evaluated yet
        """
        if not self.genomes or any(genome.fitness is None for genome in self.genomes):
            return None
        return max(self.genomes, key=lambda genome: genome.fitness)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select(self) -> None:
        """
        Create the next generation through speciation, culling and breeding.

        Step 1: Speciation
        - Greedily partition the evaluated genomes into species

        Step 2: Culling
        - Remove the worst 'kill_rate' fraction of every species
        - Compute the shared (adjusted) fitness of every species
        - Drop species smaller than 'min_species_size'

        Step 3: Selection breeding
        - The top third of the species (by shared fitness) breed
          'selection_breed_fraction' of the population, in proportion
          to their shared fitness

        Step 4: Elitism
        - The 'elitism' fittest genomes are carried over unmutated

        Step 5: Random breeding
        - The remaining slots are filled by breeding within random species

        The new generation replaces the current one wholesale.
        """
        if self._stage != GenerationStage.EVALUATED:
            raise RuntimeError("select() requires the current generation to be evaluated by run()")

        size = self._config.population_size

        self._species_manager.speciate(self.genomes)
        self._stage = GenerationStage.SPECIATED

        survivors = self._species_manager.cull()
        if not survivors:
            logger.warning("No species survived culling; breeding from the fittest genomes of the whole population")
            survivors = self._pooled_species()
        self._stage = GenerationStage.CULLED

        budget      = int(self._config.selection_breed_fraction * size)
        allocations = self._species_manager.calculate_offspring_allocations(budget)

        children = []
        for spec, num_offspring in allocations:
            children.extend(spec.spawn(num_offspring))
        children = children[:max(0, size - self._config.elitism)]

        ranked = sorted(self.genomes, key=lambda genome: genome.fitness, reverse=True)
        children.extend(genome.clone() for genome in ranked[:min(self._config.elitism, size)])

        while len(children) < size:
            spec = random.choice(survivors)
            children.extend(spec.spawn(1))

        self.genomes     = children
        self._generation += 1
        self._stage      = GenerationStage.BRED

    def _pooled_species(self) -> list[Species]:
        """
        Gather the whole population into a single culled species.
        """
        pooled = Species(self.genomes[0])
        for genome in self.genomes[1:]:
            pooled.add(genome)
        pooled.cull(self._config.kill_rate)
        self._species_manager.species = [pooled]
        return self._species_manager.species

    def is_consistent(self) -> bool:
        """
        Check that every genome is consistent and uses the population's tracker.
        """
        return all(genome.tracker is self._tracker and genome.is_consistent() for genome in self.genomes)

    def __str__(self):
        return '\n\n'.join(str(genome) for genome in self.genomes)
