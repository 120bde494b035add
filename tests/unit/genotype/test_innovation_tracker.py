"""
Unit tests for InnovationTracker class.

Tests cover innovation number assignment, lookups, and concurrent access.
"""

import random

from joblib import Parallel, delayed

from evoneat.genotype.innovation_tracker import InnovationTracker


class TestInnovationNumbers:

    def test_numbers_start_at_zero_and_increase(self):
        tracker = InnovationTracker()

        assert tracker.get_innovation_number(0, 3) == 0
        assert tracker.get_innovation_number(1, 3) == 1
        assert tracker.get_innovation_number(2, 3) == 2

    def test_same_pair_same_number(self):
        tracker = InnovationTracker()

        first = tracker.get_innovation_number(1, 4)
        tracker.get_innovation_number(2, 4)
        assert tracker.get_innovation_number(1, 4) == first
        assert len(tracker) == 2

    def test_direction_matters(self):
        tracker = InnovationTracker()
        assert tracker.get_innovation_number(4, 5) != tracker.get_innovation_number(5, 4)

    def test_lookup_does_not_assign(self):
        tracker = InnovationTracker()

        assert tracker.lookup(1, 3) is None
        assert len(tracker) == 0

        number = tracker.get_innovation_number(1, 3)
        assert tracker.lookup(1, 3) == number

    def test_contains(self):
        tracker = InnovationTracker()
        tracker.get_innovation_number(1, 3)

        assert (1, 3) in tracker
        assert (3, 1) not in tracker

    def test_trackers_are_independent(self):
        tracker1 = InnovationTracker()
        tracker2 = InnovationTracker()

        tracker1.get_innovation_number(1, 3)
        tracker1.get_innovation_number(2, 3)

        assert tracker2.get_innovation_number(2, 3) == 0
        assert len(tracker1) == 2
        assert len(tracker2) == 1


class TestConcurrentAccess:

    def test_concurrent_requests_agree(self):
        """Threads asking for the same pairs in different orders all see the same numbers."""
        tracker = InnovationTracker()
        pairs   = [(i, j) for i in range(10) for j in range(10, 15)]

        def request_all(seed):
            order = list(pairs)
            random.Random(seed).shuffle(order)
            return {pair: tracker.get_innovation_number(*pair) for pair in order}

        results = Parallel(n_jobs=8, prefer="threads")(delayed(request_all)(seed) for seed in range(16))

        assert all(result == results[0] for result in results)
        assert sorted(results[0].values()) == list(range(len(pairs)))
        assert len(tracker) == len(pairs)
