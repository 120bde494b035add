"""
NEAT Genotype Package

This package implements the genotype representation for the NEAT (NeuroEvolution of
Augmenting Topologies) algorithm. It provides classes for encoding neural network
structures and parameters at the genetic level, and the operators combining them.

The NEAT genotype consists of two types of genes:
- Node genes:       Encode individual neurons (bias, input, output or hidden)
- Connection genes: Encode weighted connections between neurons with innovation numbers

Modules:
    node_gene:          NodeType enumeration and NodeGene class
    connection_gene:    ConnectionGene class
    innovation_tracker: InnovationTracker class
    genome:             Genome class
    operators:          crossover and compatibility distance

Exported Classes:
    NodeType:                Enumeration for node types (BIAS, INPUT, HIDDEN, OUTPUT)
    NodeGene:                Gene encoding a single network node
    ConnectionGene:          Gene encoding a weighted connection between nodes
    Genome:                  Complete genome representing a neural network
    InnovationTracker:       Population-wide tracker for innovation numbers
    FitnessNotAssignedError: Raised when crossing over a genome with no fitness
"""

from evoneat.genotype.node_gene          import NodeType, NodeGene
from evoneat.genotype.connection_gene    import ConnectionGene
from evoneat.genotype.innovation_tracker import InnovationTracker
from evoneat.genotype.genome             import Genome
from evoneat.genotype.operators          import FitnessNotAssignedError, crossover, distance

__all__ = ['ConnectionGene',
           'FitnessNotAssignedError',
           'Genome',
           'InnovationTracker',
           'NodeGene',
           'NodeType',
           'crossover',
           'distance']
