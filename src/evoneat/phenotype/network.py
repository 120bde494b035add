"""
NEAT Feed-Forward Network Module

This module implements the phenotype of a genome: the executable
feed-forward network evaluated by the fitness function.

Classes:
    FeedForwardNetwork: A feedforward neural network expressed from a genome
"""

from collections import deque, defaultdict
from typing      import TYPE_CHECKING
import graphviz  # type: ignore

from evoneat.activations        import steepened_sigmoid
from evoneat.genotype.node_gene import NodeType

if TYPE_CHECKING:
    from evoneat.genotype import ConnectionGene, Genome

class FeedForwardNetwork:
    """
    Executable feed-forward network expressed from a Genome.

    The network does not copy any weights: it keeps references to the
    genome's connection genes, so weight mutations and enabled/disabled
    toggles are seen by the next forward pass without rebuilding. Only a
    structural change (new node or new connection gene) requires a new
    network, which the genome takes care of.

    The evaluation order is a topological order of the nodes from which
    an output node can be reached, computed once at construction. Since
    the order is built over all connection genes (enabled and disabled),
    toggling a gene never invalidates it. A forward pass visits every
    relevant node exactly once, keeping the computed values in a table
    local to the call, so evaluation is linear in the size of the network
    and no state survives between calls.

    Public Properties:
        number_nodes:               Total number of nodes in the network
        number_nodes_hidden:        Number of hidden nodes in the network
        number_connections:         Total number of connections in the network
        number_connections_enabled: Number of enabled connections in the network

    Public Methods:
        forward_pass(inputs): Process inputs through the network and return outputs
        to_digraph():         Build a graphviz description of the network
        visualize(view):      Render the network with graphviz
    """

    def __init__(self, genome: 'Genome'):
        """
        Parameters:
            genome: the Genome encoding the network
        """
        self._genome     = genome
        self._steepness  = genome.config.sigmoid_steepness
        self._input_ids  = [node.id for node in genome.input_nodes]
        self._output_ids = [node.id for node in genome.output_nodes]

        # For each node, the genes of its incoming connections (both enabled and disabled)
        self._incoming: dict[int, list['ConnectionGene']] = defaultdict(list)
        for gene in genome.conn_genes.values():
            self._incoming[gene.node_out].append(gene)

        self._sorted_nodes = self._topological_sort()

    @property
    def number_nodes(self) -> int:
        """Total number of nodes in the network."""
        return len(self._genome.node_genes)

    @property
    def number_nodes_hidden(self) -> int:
        """Number of hidden nodes in the network."""
        return len(self._genome.hidden_nodes)

    @property
    def number_connections(self) -> int:
        """Total number of connections in the network."""
        return len(self._genome.conn_genes)

    @property
    def number_connections_enabled(self) -> int:
        """Number of enabled connections in the network."""
        return sum(1 for gene in self._genome.conn_genes.values() if gene.enabled)

    def _topological_sort(self) -> list[int]:
        """
        Sort the nodes feeding the outputs using Kahn's algorithm.

        Only nodes from which an output node can be reached are kept: the
        others can never influence the network outputs. Assumes the graph
        is a DAG, which structural mutations guarantee.

        Returns:
            List of node IDs in topological order
        """
        # Backward search from the outputs to find the relevant nodes
        relevant = set()
        stack    = list(self._output_ids)
        while stack:
            node_id = stack.pop()
            if node_id in relevant:
                continue
            relevant.add(node_id)
            stack.extend(gene.node_in for gene in self._incoming[node_id])

        # Build adjacency restricted to the relevant nodes
        adjacency = defaultdict(list)
        in_degree = {node_id: 0 for node_id in relevant}
        for node_id in relevant:
            for gene in self._incoming[node_id]:
                adjacency[gene.node_in].append(node_id)
                in_degree[node_id] += 1

        # Start with nodes that have no incoming edges (sorted, for a deterministic order)
        queue  = deque(sorted(node_id for node_id, degree in in_degree.items() if degree == 0))
        result = []
        while queue:
            node_id = queue.popleft()
            result.append(node_id)
            for neighbor in adjacency[node_id]:
                in_degree[neighbor] -= 1
                if in_degree[neighbor] == 0:
                    queue.append(neighbor)

        return result

    def forward_pass(self, inputs) -> list[float]:
        """
        Perform a complete forward pass through the network.

        Input values are loaded into the input nodes (IDs 1..num_inputs); the
        bias node keeps its constant value. Every other node outputs
        squash(sum of weight * source value over its enabled incoming connections).

        Parameters:
            inputs: the network inputs (as many as input nodes, bias excluded)

        Returns:
            the values of the output nodes, in output order
        """
        if len(inputs) != len(self._input_ids):
            raise ValueError(f"Expected {len(self._input_ids)} inputs, got {len(inputs)}")

        node_genes = self._genome.node_genes
        for node_id, value in zip(self._input_ids, inputs):
            node_genes[node_id].value = value

        values: dict[int, float] = {}
        for node_id in self._sorted_nodes:
            node = node_genes[node_id]
            if node.is_sensor:
                values[node_id] = node.value
            else:
                total = sum(gene.weight * values[gene.node_in]
                            for gene in self._incoming[node_id] if gene.enabled)
                values[node_id] = steepened_sigmoid(total, self._steepness)

        return [values[node_id] for node_id in self._output_ids]

    def to_digraph(self) -> graphviz.Digraph:
        """
        Build a graphviz description of the network.

        Nodes are grouped into Inputs / Hidden / Outputs clusters; output
        nodes are labelled with their names. Disabled connections are dotted.

        Returns:
            graphviz.Digraph object representing the network
        """
        genome = self._genome
        dot    = graphviz.Digraph(name='NeuralNetwork')
        dot.attr(rankdir='LR')

        with dot.subgraph(name='cluster_inputs') as inputs_cluster:
            inputs_cluster.attr(label='Inputs')
            for node in genome.sensor_nodes:
                label = 'bias' if node.type == NodeType.BIAS else str(node.id)
                inputs_cluster.node(str(node.id), label=label)

        with dot.subgraph(name='cluster_hidden') as hidden_cluster:
            hidden_cluster.attr(label='Hidden Layers')
            for node in sorted(genome.hidden_nodes, key=lambda n: n.id):
                hidden_cluster.node(str(node.id))

        with dot.subgraph(name='cluster_outputs') as outputs_cluster:
            outputs_cluster.attr(label='Outputs')
            for node, name in zip(genome.output_nodes, genome.output_names):
                outputs_cluster.node(str(node.id), label=name)

        for gene in genome.conn_genes.values():
            edge_attrs = {'label': f"{gene.weight:.3f}"}
            if not gene.enabled:
                edge_attrs['style'] = 'dotted'
            dot.edge(str(gene.node_in), str(gene.node_out), **edge_attrs)

        return dot

    def visualize(self, view: bool = True) -> graphviz.Digraph:
        """
        Visualize the network using Graphviz.

        Parameters:
            view: If True, render the graph and open the result

        Returns:
            graphviz.Digraph object representing the network
        """
        dot = self.to_digraph()
        if view:
            dot.view(cleanup=True)
        return dot

    def __str__(self):
        return str(self._genome)
