"""
NEAT Node Gene Module.

This module implements the NodeGene class and NodeType enumeration
for the NEAT (NeuroEvolution of Augmenting Topologies) algorithm.

Classes:
    NodeType: Enumeration for node types (BIAS, INPUT, HIDDEN, OUTPUT)
    NodeGene: Gene encoding a single network node
"""

from enum import Enum

# Constant value emitted by the bias node
BIAS_VALUE = 1.0

class NodeType(Enum):
    """
    Nodes come in four types: bias, input, hidden, output.
    """
    BIAS   = "B"
    INPUT  = "I"
    HIDDEN = "H"
    OUTPUT = "O"

    @classmethod
    def of(cls, node_id: int, num_inputs: int, num_outputs: int) -> 'NodeType':
        """
        Derive the type of a node from its ID.

        Node numbering convention:
            - Bias node:    0
            - Input nodes:  [1, num_inputs]
            - Output nodes: [num_inputs + 1, num_inputs + num_outputs]
            - Hidden nodes: [num_inputs + num_outputs + 1, ...)

        Parameters:
            node_id:     the node ID
            num_inputs:  number of input nodes (bias excluded)
            num_outputs: number of output nodes

        Returns:
            the node type
        """
        if node_id < 0:
            raise ValueError(f"Node IDs are non-negative, got {node_id}")
        if node_id == 0:
            return cls.BIAS
        if node_id <= num_inputs:
            return cls.INPUT
        if node_id <= num_inputs + num_outputs:
            return cls.OUTPUT
        return cls.HIDDEN

class NodeGene:
    """
    A gene describing a node in a Neural Network.

    A node is identified by a small non-negative integer, unique within its
    genome. Its role (bias, input, output, hidden) follows from the ID range.
    The node holds a scalar value: input nodes receive the network inputs
    through it, and the bias node always holds the constant 1.

    Public Attributes:
        id:   Identifier of this node inside its genome
        type: Type of node (BIAS, INPUT, HIDDEN or OUTPUT)

    Public Properties:
        value: The value currently held by the node (read-only for the bias node)
    """

    def __init__(self, node_id: int, node_type: NodeType, value: float = 0.0):
        """
        Initialize a node gene.

        Parameters:
            node_id:   Identifier of this node inside its genome
            node_type: Type of node
            value:     Initial value (ignored for the bias node)
        """
        self.id  : int      = node_id
        self.type: NodeType = node_type
        self._value: float  = BIAS_VALUE if node_type == NodeType.BIAS else value

    @property
    def value(self) -> float:
        return self._value

    @value.setter
    def value(self, value: float) -> None:
        if self.type == NodeType.BIAS:
            raise ValueError("The value of the bias node is fixed")
        self._value = value

    @property
    def is_sensor(self) -> bool:
        """Whether the node feeds the network (bias or input)."""
        return self.type in (NodeType.BIAS, NodeType.INPUT)

    def __repr__(self):
        return f"NodeGene(node_id={self.id:03d}, node_type=NodeType.{self.type.name:6s}, value={self._value})"

    def __str__(self):
        return f"[{self.type.value}{self.id}]"
