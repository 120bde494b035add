"""
NEAT (NeuroEvolution of Augmenting Topologies) - A Python implementation.

This package evolves variable-topology feed-forward networks with a genetic
algorithm that tracks the history of every structural mutation, so genomes of
different shapes can be aligned for crossover and clustered into species.

Main components:
- genotype: Genetic encoding (genomes, genes, innovation tracking, crossover, distance)
- phenotype: Feed-forward network expressed from a genome
- pool: Population, speciation and selection
- run: Configuration and the generational trial driver
- activations: The steepened sigmoid used by the network nodes

Example:
    >>> from evoneat import Config, Trial
    >>> config = Config("config.ini")
    >>> class MyTrial(Trial):
    ...     def _evaluate_fitness(self, genome):
    ...         # Implement fitness evaluation
    ...         pass
    >>> trial = MyTrial(config)
    >>> trial.run()
"""

__version__ = "0.1.0"

# Import main classes for convenient access
from evoneat.genotype import ConnectionGene, FitnessNotAssignedError, Genome, InnovationTracker, NodeGene, NodeType
from evoneat.genotype import crossover, distance
from evoneat.phenotype import FeedForwardNetwork
from evoneat.pool import Population, Species
from evoneat.run import Config, Trial

__all__ = [
    "Config",
    "ConnectionGene",
    "FeedForwardNetwork",
    "FitnessNotAssignedError",
    "Genome",
    "InnovationTracker",
    "NodeGene",
    "NodeType",
    "Population",
    "Species",
    "Trial",
    "crossover",
    "distance",
]
