"""
NEAT Species Module

This module implements the Species class for the NEAT algorithm.
A species represents a cluster of genetically similar genomes
that compete primarily within their own niche.

Classes:
    Species: Represents a single species with members and shared fitness
"""

import math
import random

from evoneat.genotype           import Genome
from evoneat.genotype.operators import crossover, distance

class Species:
    """
    A species representing a cluster of genetically similar genomes in NEAT.

    In NEAT, the population is divided into species based on genetic similarity,
    allowing different evolutionary niches to develop independently. This protects
    innovative structures from being eliminated by competition with more mature
    solutions, as genomes only compete for resources within their own species.

    The representative of a species is the first genome added to it; a genome
    joins the species if its compatibility distance to the representative is
    below the speciating threshold. Species are rebuilt from scratch every
    generation, so they carry no identity across generations.

    Public Attributes:
        representative:       Genome used for distance calculations during speciation
        members:              The genomes that are part of this species
        adjusted_fitness_sum: Sum of member fitness divided by species size (set by 'cull')

    Public Methods:
        add(genome):          Add a genome to the species
        distance_to(genome):  Calculate genetic distance to a genome
        cull(kill_rate):      Remove the worst members and compute the shared fitness
        spawn(num_offspring): Breed offspring from the members
    """

    def __init__(self, representative: Genome):
        """
        Initialize a new species.

        Parameters:
            representative: the Genome that represents this species in the speciation process
        """
        self.representative      : Genome       = representative
        self.members             : list[Genome] = [representative]
        self.adjusted_fitness_sum: float        = 0.0

    def __len__(self):
        return len(self.members)

    @property
    def best(self) -> Genome:
        """The member with the highest fitness (members must be evaluated)."""
        return max(self.members, key=lambda genome: genome.fitness)

    def add(self, genome: Genome) -> None:
        self.members.append(genome)

    def distance_to(self, genome: Genome) -> float:
        """
        Calculate the genetic distance between this species and a given genome.
        Uses the species representative for comparison.
        """
        return distance(self.representative, genome)

    def cull(self, kill_rate: float) -> int:
        """
        Remove the worst members of the species and compute its shared fitness.

        Members are sorted by decreasing fitness and the worst
        ceil(kill_rate * size) are removed; at least one member always
        survives. The adjusted fitness sum of the survivors is then
        sum(fitness / size), which penalizes large species.

        Parameters:
            kill_rate: fraction of members to remove

        Returns:
            the number of members removed
        """
        self.members.sort(key=lambda genome: genome.fitness, reverse=True)

        num_kill     = min(math.ceil(len(self.members) * kill_rate), len(self.members) - 1)
        self.members = self.members[:len(self.members) - num_kill]

        size = len(self.members)
        self.adjusted_fitness_sum = sum(genome.fitness / size for genome in self.members)
        return num_kill

    def spawn(self, num_offspring: int) -> list[Genome]:
        """
        Breed offspring from the members of this species.

        For each offspring two parents are picked uniformly at random among the
        members (with replacement; identical parents yield a structural clone),
        crossed over, and the child is randomly mutated.

        As a precondition, all members must have their fitness evaluated.

        Parameters:
            num_offspring: Number of genomes this species should produce

        Returns:
            List of offspring genomes
        """
        offspring = []
        for _ in range(num_offspring):
            parent1 = random.choice(self.members)
            parent2 = random.choice(self.members)

            child = crossover(parent1, parent2)
            child.random_mutation()
            offspring.append(child)

        return offspring

    def __repr__(self):
        return f"Species(size={len(self.members)}, adjusted_fitness_sum={self.adjusted_fitness_sum:.4f})"
