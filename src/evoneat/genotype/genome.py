"""
NEAT Genome Module

This module implements the Genome class for the NEAT
(NeuroEvolution of Augmenting Topologies) algorithm.

Classes:
    Genome: Complete genome representing a neural network structure
"""

import logging
import random
import time
from collections import defaultdict
from typing      import TYPE_CHECKING

from evoneat.genotype.connection_gene    import ConnectionGene
from evoneat.genotype.innovation_tracker import InnovationTracker
from evoneat.genotype.node_gene          import NodeType, NodeGene
from evoneat.phenotype.network           import FeedForwardNetwork

if TYPE_CHECKING:
    from evoneat.run.config import Config

logger = logging.getLogger(__name__)

class Genome:
    """
    A NEAT genome representing a neural network as a collection of node and connection genes.

    In the NEAT (NeuroEvolution of Augmenting Topologies) algorithm, a genome encodes
    the structure and parameters of a neural network at the genotype level. It consists of:
    - Node genes: the network nodes (bias, input, output, hidden), keyed by node ID
    - Connection genes: weighted connections between nodes, keyed by their
      (node_in, node_out) structural pair; each carries the innovation number the
      shared InnovationTracker assigned to that pair

    A new genome contains only the bias, input and output nodes and no connections.
    Via mutation, genomes grow by adding nodes and connections, forming increasingly
    complex network topologies while remaining a DAG.

    Node numbering convention:
        - Bias node:    0
        - Input nodes:  [1, num_inputs]
        - Output nodes: [num_inputs + 1, num_inputs + num_outputs]
        - Hidden nodes: [num_inputs + num_outputs + 1, ...)

    The connection genes are kept in insertion (= mutation) order, which makes
    the structure of the genome, and anything derived from it, deterministic.

    Attributes:
        node_genes: Dictionary mapping node IDs to NodeGene objects
        conn_genes: Dictionary mapping (node_in, node_out) pairs to ConnectionGene objects
        fitness:    Fitness assigned by the fitness function (None until evaluated);
                    once assigned it can only be cleared (set to None), not overwritten

    Public Properties:
        config, tracker, num_inputs, num_outputs, output_names
        connections:  The structural pairs of all connection genes, in mutation order
        input_nodes, output_nodes, hidden_nodes, sensor_nodes
        network:      The executable network expressed from this genome

    Public Methods:
        initialize(policy):         Seed the connections of a new genome
        add_connection(...):        Add a connection gene for a pair of existing nodes
        evaluate(inputs):           Compute the named outputs of the network
        mutate_link():              Add a connection between two unconnected nodes
        mutate_neuron():            Split a connection by inserting a hidden node
        mutate_connections(node):   Mutate the weights of all connections feeding a node
        random_mutation():          Apply weight, link and neuron mutations stochastically
        size():                     Number of nodes plus number of connections
        clone():                    Structural copy without fitness
        is_consistent():            Check the genome invariants
        to_dot():                   Graphviz DOT description of the network
    """

    def __init__(self, config: 'Config', tracker: InnovationTracker):
        """
        Initialize a minimal Genome.

        A minimal genome has the bias node, the input nodes and the output nodes
        (whose number never changes and is retrieved from the configuration)
        and no connections.

        Parameters:
            config:  Stores configuration parameters
            tracker: The innovation tracker shared by the whole population
        """
        self._config : 'Config'          = config
        self._tracker: InnovationTracker = tracker

        self._num_inputs  : int       = config.num_inputs
        self._output_names: list[str] = list(config.output_names)

        self.node_genes: dict[int, NodeGene]                   = {}  # node ID => node gene
        self.conn_genes: dict[tuple[int, int], ConnectionGene] = {}  # (node_in, node_out) => connection gene
        self._fitness  : float | None                          = None

        self._network: FeedForwardNetwork | None = None

        for node_id in range(self._num_inputs + self.num_outputs + 1):
            self.node_genes[node_id] = NodeGene(node_id, self._node_type(node_id))

    @property
    def fitness(self) -> float | None:
        return self._fitness

    @fitness.setter
    def fitness(self, value: float | None):
        if value is not None and self._fitness is not None:
            raise RuntimeError(f"Fitness already assigned ({self._fitness}); clear it before assigning {value}")
        self._fitness = value

    @property
    def config(self) -> 'Config':
        return self._config

    @property
    def tracker(self) -> InnovationTracker:
        return self._tracker

    @property
    def num_inputs(self) -> int:
        return self._num_inputs

    @property
    def num_outputs(self) -> int:
        return len(self._output_names)

    @property
    def output_names(self) -> list[str]:
        return list(self._output_names)

    @property
    def connections(self) -> list[tuple[int, int]]:
        return list(self.conn_genes.keys())

    @property
    def sensor_nodes(self) -> list[NodeGene]:
        """The bias node followed by the input nodes."""
        return [self.node_genes[i] for i in range(self._num_inputs + 1)]

    @property
    def input_nodes(self) -> list[NodeGene]:
        return [self.node_genes[i] for i in range(1, self._num_inputs + 1)]

    @property
    def output_nodes(self) -> list[NodeGene]:
        first = self._num_inputs + 1
        return [self.node_genes[i] for i in range(first, first + self.num_outputs)]

    @property
    def hidden_nodes(self) -> list[NodeGene]:
        return [node for node in self.node_genes.values() if node.type == NodeType.HIDDEN]

    @property
    def node_count(self) -> int:
        return len(self.node_genes)

    @property
    def connection_count(self) -> int:
        return len(self.conn_genes)

    @property
    def enabled_connection_count(self) -> int:
        return sum(1 for gene in self.conn_genes.values() if gene.enabled)

    @property
    def network(self) -> FeedForwardNetwork:
        """The network expressed from this genome, rebuilt after structural changes."""
        if self._network is None:
            self._network = FeedForwardNetwork(self)
        return self._network

    def size(self) -> int:
        return self.node_count + self.connection_count

    def _node_type(self, node_id: int) -> NodeType:
        return NodeType.of(node_id, self._num_inputs, self.num_outputs)

    def _ensure_node(self, node_id: int) -> NodeGene:
        """Return the node with the given ID, creating a bare node if absent."""
        node = self.node_genes.get(node_id)
        if node is None:
            node = NodeGene(node_id, self._node_type(node_id))
            self.node_genes[node_id] = node
            self._network = None
        return node

    def _insert_gene(self, gene: ConnectionGene) -> None:
        self.conn_genes[gene.pair] = gene
        self._network = None

    # ------------------------------------------------------------------
    # Initialization
    # ------------------------------------------------------------------

    def initialize(self, policy: str) -> None:
        """
        Seed the connections of a newly created genome.

        Allowed policies:
            "dense":  connect every sensor (bias included) to every output
            "sparse": apply the link mutation a random number of times,
                      between 1 and the number of inputs

        Parameters:
            policy: the initial connection policy
        """
        if policy == "dense":
            self._connect_dense()
        elif policy == "sparse":
            self._connect_sparse()
        else:
            raise RuntimeError("bad initial connection policy")

    def _connect_dense(self) -> None:
        for output_node in self.output_nodes:
            for sensor_node in self.sensor_nodes:
                weight = random.uniform(self._config.min_weight, self._config.max_weight)
                self.add_connection(sensor_node.id, output_node.id, weight)

    def _connect_sparse(self) -> None:
        for _ in range(random.randint(1, self._num_inputs)):
            self.mutate_link()

    def add_connection(self, node_in: int, node_out: int, weight: float, enabled: bool = True) -> ConnectionGene:
        """
        Add a connection gene between two nodes of this genome.

        The innovation number of the pair is obtained from the shared tracker.
        The caller is responsible for the legality of the connection; use
        'mutate_link()' to add a random legal connection.

        Parameters:
            node_in:  ID of the source node
            node_out: ID of the destination node
            weight:   Weight of the connection
            enabled:  Whether the connection is active

        Returns:
            the new connection gene
        """
        if node_in not in self.node_genes or node_out not in self.node_genes:
            raise ValueError(f"Connection {node_in} -> {node_out} references a node absent from the genome")
        if (node_in, node_out) in self.conn_genes:
            raise ValueError(f"Nodes {node_in} and {node_out} are already connected")

        innovation = self._tracker.get_innovation_number(node_in, node_out)
        gene       = ConnectionGene(node_in, node_out, weight, innovation, self._config, enabled)
        self._insert_gene(gene)
        return gene

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def evaluate(self, inputs) -> dict[str, float]:
        """
        Evaluate the network on one set of inputs.

        Parameters:
            inputs: ordered sequence of input values, one per input node

        Returns:
            dictionary mapping each output name to its value
        """
        if len(inputs) != self._num_inputs:
            raise ValueError(f"Expected {self._num_inputs} inputs, got {len(inputs)}")
        outputs = self.network.forward_pass(inputs)
        return dict(zip(self._output_names, outputs))

    # ------------------------------------------------------------------
    # Structural mutations
    # ------------------------------------------------------------------

    def mutate_link(self) -> ConnectionGene | None:
        """
        Add a new connection between two existing nodes.

        The ends of the new connection are sampled at random, however we cannot
        add a connection:
         + starting at an OUTPUT node
         + ending   at a BIAS or INPUT node
         + from a node to itself
         + between two nodes already connected by a direct connection
         + which would create a cycle in the DAG network graph

        Sampling is repeated until a legal pair is found or the time budget
        ('link_search_budget' seconds) runs out; in the latter case the
        genome is left unchanged.

        Returns:
            the new connection gene, or None if no legal pair was found in time
        """
        sources = [node.id for node in self.node_genes.values() if node.type != NodeType.OUTPUT]
        targets = [node.id for node in self.node_genes.values() if not node.is_sensor]

        outgoing = defaultdict(list)
        for gene in self.conn_genes.values():
            outgoing[gene.node_in].append(gene.node_out)

        deadline = time.perf_counter() + self._config.link_search_budget
        while True:
            node_in  = random.choice(sources)
            node_out = random.choice(targets)

            if node_in != node_out and \
               (node_in, node_out) not in self.conn_genes and \
               not self._would_create_cycle(node_in, node_out, outgoing):
                weight = random.uniform(self._config.min_weight, self._config.max_weight)
                return self.add_connection(node_in, node_out, weight)

            if time.perf_counter() >= deadline:
                logger.debug("Link mutation abandoned: no legal pair found within %.3fs",
                             self._config.link_search_budget)
                return None

    @staticmethod
    def _would_create_cycle(from_node: int, to_node: int, outgoing: dict[int, list[int]]) -> bool:
        """
        Check if adding a connection from_node -> to_node would create a cycle.
        Uses DFS to check if there's already a path from 'to_node' back to 'from_node'.
        Considers ALL connections (both enabled and disabled) so that re-enabling
        a connection can never close a cycle either.

        Parameters:
            from_node: proposed start of the new connection
            to_node:   proposed end   of the new connection
            outgoing:  for each node, the destinations of its outgoing connections

        Returns:
            whether adding the new connection would create a cycle in the network
        """
        if from_node == to_node:
            return True

        visited = set()
        stack   = [to_node]
        while stack:
            current = stack.pop()
            if current == from_node:
                return True
            if current in visited:
                continue
            visited.add(current)
            stack.extend(outgoing.get(current, ()))

        return False

    def mutate_neuron(self) -> int | None:
        """
        Split an existing connection by adding a new hidden node.

        The connection to split is selected at random among the enabled
        connections from which an output node can be reached. It is disabled
        (not removed, to preserve its lineage) and replaced by two new connections:
            source   -> new node  (weight 1.0)
            new node -> destination (weight of the split connection)
        This is the only operation that adds nodes to a genome.

        Returns:
            the ID of the new node, or None if there is no connection to split
        """
        candidates = self._output_reachable_genes()
        if not candidates:
            return None

        split_gene         = random.choice(candidates)
        split_gene.enabled = False

        new_node_id = max(self.node_genes) + 1
        self._ensure_node(new_node_id)

        self.add_connection(split_gene.node_in, new_node_id, 1.0)
        self.add_connection(new_node_id, split_gene.node_out, split_gene.weight)
        return new_node_id

    def _output_reachable_genes(self) -> list[ConnectionGene]:
        """
        Return the enabled connection genes on a path to some output node,
        in mutation order.
        """
        incoming = defaultdict(list)
        for gene in self.conn_genes.values():
            if gene.enabled:
                incoming[gene.node_out].append(gene)

        reachable = set()
        stack     = [node.id for node in self.output_nodes]
        while stack:
            node_id = stack.pop()
            if node_id in reachable:
                continue
            reachable.add(node_id)
            stack.extend(gene.node_in for gene in incoming[node_id])

        return [gene for gene in self.conn_genes.values() if gene.enabled and gene.node_out in reachable]

    # ------------------------------------------------------------------
    # Weight mutations
    # ------------------------------------------------------------------

    def mutate_connections(self, node_id: int, visited: set[int] | None = None) -> None:
        """
        Mutate the weights of every connection feeding a node, walking
        backwards through the network.

        Each connection gene reached is mutated once (see 'ConnectionGene.mutate()'),
        then the walk continues into its source node. Nodes already in 'visited'
        are not walked again, so shared sub-networks are mutated only once.

        Parameters:
            node_id: the node where the backward walk starts
            visited: nodes already walked (updated in place)
        """
        if visited is None:
            visited = set()

        incoming = defaultdict(list)
        for gene in self.conn_genes.values():
            incoming[gene.node_out].append(gene)

        stack = [node_id]
        while stack:
            current = stack.pop()
            if current in visited:
                continue
            visited.add(current)
            for gene in incoming[current]:
                gene.mutate()
                stack.append(gene.node_in)

    def random_mutation(self) -> None:
        """
        Apply to the current genome the three kinds of mutation.

        Each mutation is gated by its own independent random draw:
          + with probability 'weight_mutation_prob' mutate the weights of
            all the connections from which an output can be reached
          + with probability 'link_mutation_prob' add a connection
          + with probability 'neuron_mutation_prob' add a node
        """
        do_mutate_weights = random.random() < self._config.weight_mutation_prob
        do_mutate_link    = random.random() < self._config.link_mutation_prob
        do_mutate_neuron  = random.random() < self._config.neuron_mutation_prob

        if do_mutate_weights:
            visited = set()
            for output_node in self.output_nodes:
                self.mutate_connections(output_node.id, visited)
        if do_mutate_link:
            self.mutate_link()
        if do_mutate_neuron:
            self.mutate_neuron()

    # ------------------------------------------------------------------
    # Utilities
    # ------------------------------------------------------------------

    def clone(self) -> 'Genome':
        """
        Create a structural copy of this genome.

        The copy owns its own node and connection genes, shares the config
        and the innovation tracker, and has no fitness assigned.
        """
        copy = Genome(self._config, self._tracker)
        for node_id in self.node_genes:
            copy._ensure_node(node_id)
        for gene in self.conn_genes.values():
            copy._insert_gene(gene.copy())
        return copy

    def is_consistent(self) -> bool:
        """
        Check that every connection gene is keyed by its own pair, carries
        the innovation number the tracker holds for that pair, and that both
        of its endpoints are nodes of this genome.
        """
        for pair, gene in self.conn_genes.items():
            if gene.pair != pair:
                return False
            if gene.node_in not in self.node_genes or gene.node_out not in self.node_genes:
                return False
            if self._tracker.lookup(*pair) != gene.innovation:
                return False
        return True

    def to_dot(self) -> str:
        """Return a Graphviz DOT description of the network."""
        return self.network.to_digraph().source

    def __str__(self):
        return '\n'.join(str(gene) for gene in self.conn_genes.values())

    def __repr__(self):
        return (f"Genome(nodes={self.node_count}, connections={self.connection_count}, "
                f"fitness={self.fitness})")
