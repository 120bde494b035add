"""
NEAT Species Manager Module

This module implements the SpeciesManager class for the NEAT algorithm.
The manager partitions a generation into species, culls them, and decides
how the reproduction budget is shared among them.

Speciation in NEAT:
In traditional genetic algorithms, new structural innovations often have lower
initial fitness and are quickly eliminated. NEAT addresses this by organizing
the population into species - groups of genetically similar genomes that
compete primarily within their own niche. This allows novel structures time to
optimize before facing global competition.

Key Concepts:
- Species: A cluster of genetically similar genomes
- Representative: The first genome of a species, defining its membership
- Speciating Threshold: Maximum genetic distance for same-species membership
- Explicit Fitness Sharing: Each member's fitness is divided by the species size

Classes:
    SpeciesManager: Manages all species, handles speciation, culling and offspring allocation
"""

import logging
from typing import TYPE_CHECKING

from evoneat.genotype     import Genome
from evoneat.pool.species import Species

if TYPE_CHECKING:
    from evoneat.run.config import Config

logger = logging.getLogger(__name__)

class SpeciesManager:
    """
    Manages the collection of species of one generation.

    Species are recomputed from scratch every generation: the manager keeps
    no species identity across generations.

    Public Attributes:
        species: The current species, in creation order (or by decreasing
                 shared fitness once offspring have been allocated)

    Public Methods:
        speciate(genomes):                       Partition genomes into species
        cull():                                  Remove the worst genomes and the small species
        calculate_offspring_allocations(budget): Determine offspring count per species
    """

    def __init__(self, config: 'Config'):
        """
        Initialize the Species Manager.

        Parameters:
            config: Stores configuration parameters
        """
        self._config : 'Config'      = config
        self.species : list[Species] = []

    def speciate(self, genomes: list[Genome]) -> list[Species]:
        """
        Assign all genomes to species based on genetic similarity.

        The species list is reset; each genome, in order, joins the first
        existing species (in creation order) whose representative is within
        'speciating_threshold' distance. If none is close enough, the genome
        founds a new species as its representative. The partition is greedy
        and depends on the order of the genomes.

        Parameters:
            genomes: The genomes of the current generation

        Returns:
            the new list of species
        """
        threshold    = self._config.speciating_threshold
        self.species = []

        for genome in genomes:
            for spec in self.species:
                if spec.distance_to(genome) < threshold:
                    spec.add(genome)
                    break
            else:
                self.species.append(Species(genome))

        logger.debug("Speciated %d genomes into %d species", len(genomes), len(self.species))
        return self.species

    def cull(self) -> list[Species]:
        """
        Cull every species, then drop the species left too small to breed.

        Each species loses its worst 'kill_rate' fraction of members and
        computes its adjusted fitness sum. Species whose surviving size is
        below 'min_species_size' are removed entirely.

        Returns:
            the surviving species
        """
        for spec in self.species:
            spec.cull(self._config.kill_rate)

        num_before   = len(self.species)
        self.species = [spec for spec in self.species if len(spec) >= self._config.min_species_size]

        logger.debug("Culling kept %d of %d species", len(self.species), num_before)
        return self.species

    def calculate_offspring_allocations(self, budget: int) -> list[tuple[Species, int]]:
        """
        Calculate how many offspring each species should produce.

        Species are sorted by decreasing adjusted fitness sum. Only the top
        third of them takes part: each receives a share of 'budget'
        proportional to its adjusted fitness sum relative to the total of the
        top third (rounded down).

        If the top third is empty or its total shared fitness is not
        positive, no proportional allocation is possible and an empty list is
        returned; the caller then fills the population by uniform random
        breeding across all surviving species.

        Parameters:
            budget: total number of offspring to distribute

        Returns:
            list of (species, number of offspring) pairs
        """
        self.species.sort(key=lambda spec: spec.adjusted_fitness_sum, reverse=True)

        top_species = self.species[:len(self.species) // 3]
        total       = sum(spec.adjusted_fitness_sum for spec in top_species)

        if not top_species:
            logger.debug("Too few species (%d) for selection breeding", len(self.species))
            return []
        if total <= 0:
            logger.warning("Shared fitness of the top species is not positive (%s); "
                           "falling back to uniform random breeding", total)
            return []

        return [(spec, int(budget * spec.adjusted_fitness_sum / total)) for spec in top_species]
