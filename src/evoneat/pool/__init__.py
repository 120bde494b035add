"""
NEAT Pool Package

This package manages the population of genomes and its partition into species.

Modules:
    species:         Species class
    species_manager: SpeciesManager class (speciation, culling, offspring allocation)
    population:      Population class and GenerationStage enumeration

Exported Classes:
    GenerationStage: Stages a generation goes through
    Population:      Top-level evolutionary coordinator
    Species:         A cluster of genetically similar genomes
    SpeciesManager:  Partitions a generation into species
"""

from evoneat.pool.species         import Species
from evoneat.pool.species_manager import SpeciesManager
from evoneat.pool.population      import GenerationStage, Population

__all__ = ['GenerationStage',
           'Population',
           'Species',
           'SpeciesManager']
