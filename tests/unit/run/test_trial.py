"""
Unit tests for Trial class.
"""

import pytest
from unittest.mock import Mock

from evoneat.pool import Population
from evoneat.run.trial import Trial


# ============================================================================
# Test Fixtures
# ============================================================================

class ConstantTrial(Trial):
    """Trial giving every genome the same fitness and recording reports."""

    def __init__(self, config, fitness=1.0, suppress_output=False):
        super().__init__(config, suppress_output)
        self.fitness         = fitness
        self.progress_report = Mock()
        self.final_report    = Mock()

    def _evaluate_fitness(self, genome):
        return self.fitness

    def _report_progress(self):
        self.progress_report(self._generation_counter)

    def _final_report(self):
        self.final_report()


@pytest.fixture
def trial_config(config):
    config.population_size        = 10
    config.max_number_generations = 3
    config.link_search_budget     = 0.001
    return config


# ============================================================================
# Test: Trial lifecycle
# ============================================================================

class TestTrialRun:

    def test_runs_max_generations(self, trial_config):
        trial = ConstantTrial(trial_config)
        trial.run()

        assert trial._generation_counter == 3
        assert trial.population.generation == 3
        assert [c.args[0] for c in trial.progress_report.call_args_list] == [0, 1, 2, 3]
        trial.final_report.assert_called_once()

    def test_final_generation_is_evaluated(self, trial_config):
        trial = ConstantTrial(trial_config)
        trial.run()

        assert isinstance(trial.population, Population)
        assert all(genome.fitness == 1.0 for genome in trial.population.genomes)

    def test_suppress_output(self, trial_config):
        trial = ConstantTrial(trial_config, suppress_output=True)
        trial.run()

        trial.progress_report.assert_not_called()
        trial.final_report.assert_not_called()

    def test_parallel_run(self, trial_config):
        trial = ConstantTrial(trial_config)
        trial.run(num_jobs=2)

        assert trial.population.generation == 3
        assert trial.population.is_consistent()

    def test_rerun_resets_state(self, trial_config):
        trial = ConstantTrial(trial_config, suppress_output=True)
        trial.run()
        first_population = trial.population

        trial.run()

        assert trial.population is not first_population
        assert trial._generation_counter == 3


# ============================================================================
# Test: Termination
# ============================================================================

class TestTrialTerminate:

    @pytest.mark.parametrize("criterion", ["max", "mean"])
    def test_threshold_reached(self, trial_config, criterion):
        trial_config.fitness_termination_check = True
        trial_config.fitness_criterion         = criterion
        trial_config.fitness_threshold         = 0.5

        trial = ConstantTrial(trial_config, fitness=1.0)
        trial.run()

        assert trial._generation_counter == 0
        assert trial.failed is False

    def test_threshold_not_reached(self, trial_config):
        trial_config.fitness_termination_check = True
        trial_config.fitness_criterion         = "max"
        trial_config.fitness_threshold         = 2.0

        trial = ConstantTrial(trial_config, fitness=1.0)
        trial.run()

        assert trial._generation_counter == 3
        assert trial.failed is True

    def test_bad_criterion(self, trial_config):
        trial_config.fitness_termination_check = True
        trial_config.fitness_criterion         = "median"
        trial_config.fitness_threshold         = 0.5

        with pytest.raises(RuntimeError):
            ConstantTrial(trial_config).run()

    def test_abstract(self, trial_config):
        with pytest.raises(TypeError):
            Trial(trial_config)
