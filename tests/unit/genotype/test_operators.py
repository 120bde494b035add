"""
Unit tests for the genetic operators: crossover and compatibility distance.
"""

import pytest

from evoneat.genotype.genome import Genome
from evoneat.genotype.innovation_tracker import InnovationTracker
from evoneat.genotype.operators import FitnessNotAssignedError, crossover, distance


# ============================================================================
# Test Fixtures
# ============================================================================

@pytest.fixture
def parent(config, tracker):
    genome = Genome(config, tracker)
    genome.initialize("dense")
    genome.fitness = 2.0
    return genome


@pytest.fixture
def grown_parent(parent):
    """A clone of 'parent' with two extra genes from a neuron split."""
    genome = parent.clone()
    genome.mutate_neuron()
    genome.fitness = 1.0
    return genome


def reassign_fitness(genome, fitness):
    genome.fitness = None
    genome.fitness = fitness


def signature(genome):
    return [(pair, gene.weight, gene.enabled) for pair, gene in genome.conn_genes.items()]


# ============================================================================
# Test: Crossover
# ============================================================================

class TestCrossover:

    def test_requires_fitness(self, parent, grown_parent):
        grown_parent.fitness = None

        with pytest.raises(FitnessNotAssignedError):
            crossover(parent, grown_parent)
        with pytest.raises(FitnessNotAssignedError):
            crossover(grown_parent, parent)

    def test_fitness_error_is_runtime_error(self):
        assert issubclass(FitnessNotAssignedError, RuntimeError)

    def test_different_trackers_rejected(self, config, parent):
        stranger = Genome(config, InnovationTracker())
        stranger.initialize("dense")
        stranger.fitness = 1.0

        with pytest.raises(ValueError):
            crossover(parent, stranger)

    def test_tracker_argument_must_match(self, parent, grown_parent, tracker):
        crossover(parent, grown_parent, tracker)
        with pytest.raises(ValueError):
            crossover(parent, grown_parent, InnovationTracker())

    def test_child_takes_structure_of_fit_parent(self, parent, grown_parent):
        reassign_fitness(grown_parent, 5.0)

        child = crossover(parent, grown_parent)

        assert child.connections == grown_parent.connections
        assert sorted(child.node_genes) == sorted(grown_parent.node_genes)

    def test_genes_of_less_fit_parent_dropped(self, parent, grown_parent):
        child = crossover(parent, grown_parent)

        assert child.connections == parent.connections
        assert 4 not in child.node_genes

    def test_tie_favors_first_parent(self, parent, grown_parent):
        reassign_fitness(grown_parent, parent.fitness)

        assert crossover(parent, grown_parent).connections == parent.connections
        assert crossover(grown_parent, parent).connections == grown_parent.connections

    def test_child_is_fresh(self, parent, grown_parent):
        reassign_fitness(parent, 0.5)
        child = crossover(parent, grown_parent)

        assert child.fitness is None
        assert child.tracker is parent.tracker
        assert child.is_consistent()
        for pair, gene in child.conn_genes.items():
            assert gene is not grown_parent.conn_genes[pair]
            assert gene is not parent.conn_genes.get(pair)

    def test_no_dangling_edges(self, config, tracker):
        config.link_search_budget = 0.001
        genomes = []
        for fitness in (1.0, 2.0):
            genome = Genome(config, tracker)
            genome.initialize("dense")
            for _ in range(10):
                genome.mutate_neuron()
                genome.mutate_link()
            genome.fitness = fitness
            genomes.append(genome)

        child = crossover(*genomes)

        for gene in child.conn_genes.values():
            assert gene.node_in in child.node_genes
            assert gene.node_out in child.node_genes

    def test_matching_weights_come_from_either_parent(self, parent):
        other = parent.clone()
        other.fitness = 1.0
        for gene in other.conn_genes.values():
            gene.weight += 10.0

        seen = set()
        for _ in range(50):
            child = crossover(parent, other)
            for pair, gene in child.conn_genes.items():
                assert gene.weight in (parent.conn_genes[pair].weight, other.conn_genes[pair].weight)
                seen.add(gene.weight == other.conn_genes[pair].weight)

        assert seen == {True, False}

    def test_disabled_matching_gene_always_disabled(self, config, parent, grown_parent):
        config.disable_inherited_prob = 1.0
        disabled_pairs = [pair for pair, gene in grown_parent.conn_genes.items() if not gene.enabled]
        reassign_fitness(grown_parent, 5.0)

        for _ in range(10):
            child = crossover(parent, grown_parent)
            for pair in disabled_pairs:
                assert not child.conn_genes[pair].enabled

    def test_disabled_matching_gene_reenabled(self, config, parent, grown_parent):
        config.disable_inherited_prob = 0.0
        disabled_pairs = [pair for pair, gene in grown_parent.conn_genes.items() if not gene.enabled]
        reassign_fitness(grown_parent, 5.0)

        for _ in range(10):
            child = crossover(parent, grown_parent)
            for pair in disabled_pairs:
                assert child.conn_genes[pair].enabled

    def test_disabled_gene_only_in_fit_parent_kept_disabled(self, config, parent, grown_parent):
        config.disable_inherited_prob = 0.0
        reassign_fitness(grown_parent, 5.0)
        lone_pairs = [pair for pair in grown_parent.conn_genes if pair not in parent.conn_genes]
        for pair in lone_pairs:
            grown_parent.conn_genes[pair].enabled = False

        for _ in range(10):
            child = crossover(grown_parent, parent)
            for pair in lone_pairs:
                assert not child.conn_genes[pair].enabled

    def test_self_crossover_clones(self, parent):
        child = crossover(parent, parent)
        assert signature(child) == signature(parent)


# ============================================================================
# Test: Distance
# ============================================================================

class TestDistance:

    def test_self_distance_is_zero(self, parent, grown_parent):
        assert distance(parent, parent) == 0.0
        assert distance(grown_parent, grown_parent) == 0.0

    def test_symmetric(self, parent, grown_parent):
        for gene in grown_parent.conn_genes.values():
            gene.weight += 0.3
        assert distance(parent, grown_parent) == pytest.approx(distance(grown_parent, parent))

    def test_no_matching_genes(self, config, tracker, parent):
        empty = Genome(config, tracker)

        # excess 3 over N = max(4 + 3, 4), no weight term
        assert distance(parent, empty) == pytest.approx(3.0 / 7.0)

    def test_weight_term(self, parent):
        other = parent.clone()
        other.conn_genes[(1, 3)].weight += 1.0

        assert distance(parent, other) == pytest.approx(0.4 * 1.0 / 3.0)

    def test_extra_genes(self, parent, grown_parent):
        # two unmatched genes over N = 5 nodes + 5 connections
        assert distance(parent, grown_parent) == pytest.approx(2.0 / 10.0)

    def test_coefficients(self, config, parent, grown_parent):
        config.distance_excess_coeff = 2.0
        config.distance_weight_coeff = 0.0
        grown_parent.conn_genes[(1, 3)].weight += 5.0

        assert distance(parent, grown_parent) == pytest.approx(2.0 * 2.0 / 10.0)

    def test_disjoint_genes(self, config, tracker, parent):
        config.distance_excess_coeff   = 1.0
        config.distance_disjoint_coeff = 0.5

        genome1 = parent.clone()
        genome2 = parent.clone()
        genome1.mutate_neuron()      # +2 genes unique to genome1
        genome2.mutate_neuron()
        genome2.mutate_neuron()      # +4 genes unique to genome2

        unique1 = len(genome1.conn_genes.keys() - genome2.conn_genes.keys())
        unique2 = len(genome2.conn_genes.keys() - genome1.conn_genes.keys())
        matching = genome1.conn_genes.keys() & genome2.conn_genes.keys()
        excess   = abs(unique1 - unique2)
        disjoint = unique1 + unique2 - excess
        N        = max(genome1.size(), genome2.size())
        weights  = sum(abs(genome1.conn_genes[p].weight - genome2.conn_genes[p].weight) for p in matching) / len(matching)

        expected = excess / N + 0.5 * disjoint / N + 0.4 * weights
        assert distance(genome1, genome2) == pytest.approx(expected)

    def test_different_trackers_rejected(self, config, parent):
        stranger = Genome(config, InnovationTracker())
        with pytest.raises(ValueError):
            distance(parent, stranger)
