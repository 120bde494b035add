"""
NEAT Innovation Tracker Module

This module implements the InnovationTracker class for the
NEAT (NeuroEvolution of Augmenting Topologies) algorithm.

Classes:
    InnovationTracker: Shared registry of innovation numbers
"""

import threading
from itertools import count

class InnovationTracker:
    """
    Tracks structural changes across all genomes of a population.
    Ensures the same structural change gets the same innovation number.

    A single tracker is created per population and handed by reference to
    every genome; genomes never own a copy. The tracker only grows: numbers
    are valid for as long as the tracker lives and are never removed.

    The lookup-or-assign operation is one critical section, so concurrent
    callers asking for the same (node_in, node_out) pair all observe the
    same number, and exactly one of them creates it.
    """

    def __init__(self):
        self._lock                   = threading.Lock()
        self._next_innovation_number = count(0)
        self._innovation_numbers: dict[tuple[int, int], int] = {}  # (node_in, node_out) -> innovation number

    def get_innovation_number(self, node_in: int, node_out: int) -> int:
        """
        Get innovation number for a connection, identified by its endpoints.
        Returns existing innovation number if this connection was created
        before, otherwise assigns a new innovation number.

        Parameters:
            node_in:  node ID for the 'from' end of the connection
            node_out: node ID for the 'to'   end of the connection

        Returns:
            connection ID (a.k.a. innovation number)
        """
        key = (node_in, node_out)

        with self._lock:
            innovation = self._innovation_numbers.get(key)
            if innovation is None:
                innovation = next(self._next_innovation_number)
                self._innovation_numbers[key] = innovation
            return innovation

    def lookup(self, node_in: int, node_out: int) -> int | None:
        """
        Return the innovation number of a pair without assigning one.
        """
        with self._lock:
            return self._innovation_numbers.get((node_in, node_out))

    def __len__(self):
        with self._lock:
            return len(self._innovation_numbers)

    def __contains__(self, pair):
        with self._lock:
            return pair in self._innovation_numbers

    def __repr__(self):
        return f"InnovationTracker(innovations={len(self)})"
