"""
NEAT Connection Gene Module

This module implements the ConnectionGene class for the
NEAT (NeuroEvolution of Augmenting Topologies) algorithm.

Classes:
    ConnectionGene: Gene encoding a weighted connection between nodes
"""

import random
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from evoneat.run.config import Config

class ConnectionGene:
    """
    A gene describing a weighted connection between two nodes in a Neural Network.

    Each connection gene represents a directed edge in the neural network graph,
    connecting a source node to a destination node with an associated weight.
    The edge only stores node IDs; the nodes themselves are owned by the genome.
    Connection genes are identified by their innovation number, which is shared
    by every gene (in any genome) connecting the same pair of node IDs. This
    historical marker is what aligns genes during crossover.

    A connection superseded by a node split is disabled rather than removed,
    so that its lineage is still available for alignment in later crossovers.

    Public Attributes:
        node_in:    ID of the source node
        node_out:   ID of the destination node
        weight:     Weight of the connection
        enabled:    Whether this connection is active in the network
        innovation: Innovation number identifying the (node_in, node_out) pair

    Public Properties:
        pair: The (node_in, node_out) structural pair

    Public Methods:
        mutate(): Stochastically mutate the connection weight
    """

    def __init__(self,
                 node_in   : int,
                 node_out  : int,
                 weight    : float,
                 innovation: int,
                 config    : 'Config',
                 enabled   : bool = True):
        """
        Initialize a connection gene.

        Parameters:
            node_in:    ID of the source node
            node_out:   ID of the destination node
            weight:     Weight of the connection
            innovation: Innovation number of the (node_in, node_out) pair
            config:     Stores configuration parameters
            enabled:    Whether this connection is active in the network
        """
        self.node_in   : int    = node_in
        self.node_out  : int    = node_out
        self.weight    : float  = weight
        self.enabled   : bool   = enabled
        self.innovation: int    = innovation
        self._config   : 'Config' = config

    @property
    def pair(self) -> tuple[int, int]:
        return (self.node_in, self.node_out)

    def mutate(self) -> None:
        """
        Stochastically mutate the (gene describing the) connection.

        Two independent draws decide what happens to the weight:
         + with probability 'weight_replace_prob' it is replaced by a fresh
           uniform draw from [min_weight, max_weight]
         + with probability 'weight_shift_prob' it is shifted by a uniform
           draw from [-weight_shift_strength, +weight_shift_strength]
        Both may happen, in this order.
        """
        replace_draw = random.random()
        shift_draw   = random.random()

        if replace_draw < self._config.weight_replace_prob:
            self.weight = random.uniform(self._config.min_weight, self._config.max_weight)

        if shift_draw < self._config.weight_shift_prob:
            strength     = self._config.weight_shift_strength
            self.weight += random.uniform(-strength, strength)

    def copy(self) -> 'ConnectionGene':
        """Return an independently owned copy of this gene."""
        return ConnectionGene(self.node_in, self.node_out, self.weight,
                              self.innovation, self._config, self.enabled)

    def __repr__(self):
        return (f"ConnectionGene(node_in={self.node_in:03d}, node_out={self.node_out:03d},"
                f"weight={self.weight:+.6f}, enabled={self.enabled}, innovation={self.innovation:03d})")

    def __str__(self):
        status = "enabled" if self.enabled else "disabled"
        return f"({self.node_in} -> {self.node_out}, w={self.weight}, inno={self.innovation} {status})"
