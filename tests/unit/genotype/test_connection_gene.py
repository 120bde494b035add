"""
Unit tests for ConnectionGene class.
"""

import pytest
from unittest.mock import Mock

from evoneat.genotype.connection_gene import ConnectionGene
from evoneat.run.config import Config


# ============================================================================
# Test Fixtures
# ============================================================================

@pytest.fixture
def gene_config():
    config = Mock(spec=Config)
    config.min_weight = -2.0
    config.max_weight = 2.0
    config.weight_shift_prob = 0.9
    config.weight_replace_prob = 0.1
    config.weight_shift_strength = 1.0
    return config


# ============================================================================
# Test: Initialization and utilities
# ============================================================================

class TestConnectionGeneBasics:

    def test_attributes(self, gene_config):
        gene = ConnectionGene(1, 3, 0.5, 7, gene_config)

        assert gene.node_in == 1
        assert gene.node_out == 3
        assert gene.weight == 0.5
        assert gene.innovation == 7
        assert gene.enabled is True
        assert gene.pair == (1, 3)

    def test_disabled_construction(self, gene_config):
        gene = ConnectionGene(1, 3, 0.5, 0, gene_config, enabled=False)
        assert gene.enabled is False

    def test_copy_is_independent(self, gene_config):
        gene = ConnectionGene(1, 3, 0.5, 2, gene_config)
        copy = gene.copy()

        assert copy is not gene
        assert (copy.pair, copy.weight, copy.innovation, copy.enabled) == (gene.pair, gene.weight, gene.innovation, gene.enabled)

        copy.weight  = -1.0
        copy.enabled = False
        assert gene.weight == 0.5
        assert gene.enabled is True

    def test_str(self, gene_config):
        gene = ConnectionGene(1, 3, 0.5, 0, gene_config)
        assert str(gene) == "(1 -> 3, w=0.5, inno=0 enabled)"

        gene.enabled = False
        assert str(gene) == "(1 -> 3, w=0.5, inno=0 disabled)"


# ============================================================================
# Test: Mutation
# ============================================================================

class TestConnectionGeneMutate:

    def test_no_mutation(self, gene_config):
        gene_config.weight_shift_prob   = 0.0
        gene_config.weight_replace_prob = 0.0
        gene = ConnectionGene(1, 3, 0.5, 0, gene_config)

        for _ in range(50):
            gene.mutate()
        assert gene.weight == 0.5

    def test_replace_only(self, gene_config):
        gene_config.weight_shift_prob   = 0.0
        gene_config.weight_replace_prob = 1.0
        gene = ConnectionGene(1, 3, 100.0, 0, gene_config)

        for _ in range(50):
            gene.mutate()
            assert -2.0 <= gene.weight <= 2.0

    def test_shift_only_is_bounded(self, gene_config):
        gene_config.weight_shift_prob     = 1.0
        gene_config.weight_replace_prob   = 0.0
        gene_config.weight_shift_strength = 0.25
        gene = ConnectionGene(1, 3, 0.0, 0, gene_config)

        for _ in range(50):
            before = gene.weight
            gene.mutate()
            assert abs(gene.weight - before) <= 0.25
            assert gene.weight != before

    def test_mutation_does_not_touch_structure(self, gene_config):
        gene = ConnectionGene(1, 3, 0.5, 4, gene_config, enabled=False)
        for _ in range(20):
            gene.mutate()

        assert gene.pair == (1, 3)
        assert gene.innovation == 4
        assert gene.enabled is False
