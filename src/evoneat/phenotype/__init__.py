"""
NEAT Phenotype Package

This package implements the phenotype representation for the NEAT (NeuroEvolution
of Augmenting Topologies) algorithm: the executable network expressed from a genome.

Modules:
    network: Feed-forward network evaluated in topological order

Exported Classes:
    FeedForwardNetwork: Feed-forward neural network expressed from a genome
"""

from evoneat.phenotype.network import FeedForwardNetwork

__all__ = ['FeedForwardNetwork']
