"""
NEAT Genetic Operators Module

This module implements the binary operators acting on pairs of genomes:
crossover (producing a child) and compatibility distance (used for speciation).

Classes:
    FitnessNotAssignedError: Raised when crossing over a genome with no fitness

Functions:
    crossover: Produce a child genome from two parents
    distance:  Compatibility distance between two genomes
"""

import random

from evoneat.genotype.genome             import Genome
from evoneat.genotype.innovation_tracker import InnovationTracker

class FitnessNotAssignedError(RuntimeError):
    """A genome taking part in crossover has not been assigned a fitness."""

def _shared_tracker(genome1: Genome, genome2: Genome, tracker: InnovationTracker | None) -> InnovationTracker:
    """
    Return the innovation tracker both genomes share.

    Innovation numbers are only comparable within one tracker, so genomes
    from different populations cannot be combined.
    """
    if genome1.tracker is not genome2.tracker:
        raise ValueError("Genomes use different innovation trackers")
    if tracker is not None and tracker is not genome1.tracker:
        raise ValueError("Tracker differs from the one used by the genomes")
    return genome1.tracker

def crossover(parent1: Genome, parent2: Genome, tracker: InnovationTracker | None = None) -> Genome:
    """
    Produce a child genome by crossing over two parents.

    The parent with the higher fitness is the "fit" parent (ties favor
    'parent1'). Genes are aligned by their (node_in, node_out) pair:
     + matching genes (present in both parents) are inherited from a parent
       chosen with equal probability; if the gene is disabled in either parent
       the inherited copy is disabled with probability 'disable_inherited_prob'
       and enabled otherwise
     + genes present only in the fit parent are inherited as they are
     + genes present only in the less fit parent are dropped

    The child has the structure of the fit parent (its nodes and the order of
    its genes), owns copies of all inherited genes, and has no fitness.

    Parameters:
        parent1: the first parent
        parent2: the second parent
        tracker: the innovation tracker of the parents (optional)

    Returns:
        the child genome
    """
    if parent1.fitness is None or parent2.fitness is None:
        raise FitnessNotAssignedError("Both parents need a fitness to be crossed over")
    tracker = _shared_tracker(parent1, parent2, tracker)

    if parent2.fitness > parent1.fitness:
        fit, less_fit = parent2, parent1
    else:
        fit, less_fit = parent1, parent2

    disable_prob = fit.config.disable_inherited_prob
    child        = Genome(fit.config, tracker)

    for pair, fit_gene in fit.conn_genes.items():
        child._ensure_node(fit_gene.node_in)
        child._ensure_node(fit_gene.node_out)

        other_gene = less_fit.conn_genes.get(pair)
        if other_gene is None:
            gene = fit_gene.copy()
        else:
            gene = fit_gene.copy() if random.random() < 0.5 else other_gene.copy()
            if not (fit_gene.enabled and other_gene.enabled):
                gene.enabled = random.random() >= disable_prob

        child._insert_gene(gene)

    return child

def distance(genome1: Genome, genome2: Genome, tracker: InnovationTracker | None = None) -> float:
    """
    Compatibility distance between two genomes.

    Genes are aligned by their (node_in, node_out) pair. With
        N        = size of the larger genome (nodes + connections)
        d1, d2   = number of genes unique to each genome
        excess   = |d1 - d2|
        disjoint = d1 + d2 - excess
        W        = mean absolute weight difference of matching genes (0 if none)
    the distance is
        c_excess * excess / N + c_disjoint * disjoint / N + c_weight * W

    The distance is symmetric and the distance of a genome from itself is 0.

    Parameters:
        genome1: the first genome
        genome2: the second genome
        tracker: the innovation tracker of the genomes (optional)

    Returns:
        the compatibility distance
    """
    _shared_tracker(genome1, genome2, tracker)

    genes1   = genome1.conn_genes
    genes2   = genome2.conn_genes
    matching = genes1.keys() & genes2.keys()

    if matching:
        avg_weight_diff = sum(abs(genes1[pair].weight - genes2[pair].weight) for pair in matching) / len(matching)
    else:
        avg_weight_diff = 0.0

    unique1  = len(genes1) - len(matching)
    unique2  = len(genes2) - len(matching)
    excess   = abs(unique1 - unique2)
    disjoint = unique1 + unique2 - excess

    N      = max(genome1.size(), genome2.size())
    config = genome1.config
    return (config.distance_excess_coeff   * excess   / N +
            config.distance_disjoint_coeff * disjoint / N +
            config.distance_weight_coeff   * avg_weight_diff)
