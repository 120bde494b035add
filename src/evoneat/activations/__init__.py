"""
Activations Package

This package provides the squashing function applied by hidden and output
nodes of an evolved network.

Exported:
    steepened_sigmoid: Logistic function with configurable steepness
"""

from evoneat.activations.basic_activations import steepened_sigmoid

__all__ = ['steepened_sigmoid']
