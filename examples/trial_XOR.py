"""
XOR Problem Implementation for NEAT

This module implements the classic XOR (exclusive OR) problem as a benchmark
for the NEAT algorithm. The XOR problem is a fundamental test case in neural
network research, demonstrating the necessity of hidden layers for solving
non-linearly separable problems.

The XOR Problem:
    XOR is a two-input, one-output boolean function where the output is True
    only when the inputs differ:
        Input (0, 0) → Output 0
        Input (0, 1) → Output 1
        Input (1, 0) → Output 1
        Input (1, 1) → Output 0

    This problem cannot be solved by a network without hidden nodes, making it
    an ideal minimal test case for topology-evolving algorithms like NEAT.

Fitness Function:
    Fitness = 4.0 - Σ(output - target)²

    Maximum fitness of 4.0 is achieved when all four XOR cases produce exact outputs.

Classes:
    Trial_XOR: NEAT trial for solving XOR

Usage:
    python examples/trial_XOR.py [num_jobs]
"""

import logging
import sys
from pathlib import Path

from evoneat            import Genome
from evoneat.run        import Trial
from evoneat.run.config import Config

class Trial_XOR(Trial):
    """
    NEAT trial for solving the XOR (exclusive OR) problem.

    Problem Definition:
        Inputs: 2 binary values (0 or 1)
        Output: 1 binary value (XOR of inputs), named "xor"
        Training cases: All 4 possible input combinations

    Implemented Methods:
        _evaluate_fitness(genome): Test network on all 4 XOR cases
        _report_progress(): Display generation statistics and XOR truth table
        _final_report(): Print and visualize the evolved network structure
    """

    def __init__(self, config: Config, suppress_output: bool = False):
        super().__init__(config, suppress_output)

        self.xor_inputs  = [[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]]
        self.xor_outputs = [0.0, 1.0, 1.0, 0.0]

    def _evaluate_fitness(self, genome: Genome) -> float:
        """
        Evaluate genome fitness by testing on XOR inputs.

        Parameters:
            genome: The genome to evaluate

        Returns:
            Fitness score (maximum 4.0 for perfect XOR solution)
        """
        fitness = 4.0  # max possible fitness
        for inputs, expected_output in zip(self.xor_inputs, self.xor_outputs):
            output   = genome.evaluate(inputs)["xor"]
            fitness -= (output - expected_output) ** 2
        return fitness

    def _report_progress(self):
        """
        Print a report describing the current generation.
        """
        fittest = self._population.best_genome

        s  = f"===============\n"
        s += f"GENERATION {self._generation_counter:04d}\n"
        s += f"population size = {len(self._population.genomes)}\n"
        s += f"number species  = {len(self._population.species)}\n"
        s += f"average fitness = {self._population.average_fitness:.4f}\n"
        s += f"maximum fitness = {fittest.fitness:.4f}\n"
        s += '\n'

        s += "input         output   target  error\n"
        s += "------------------------------------\n"
        for inputs, target in zip(self.xor_inputs, self.xor_outputs):
            output = fittest.evaluate(inputs)["xor"]
            s += f"{inputs} -> {output:.4f}    {target}   {abs(output - target):.4f}\n"

        print(s)

    def _final_report(self):
        """
        Display the fittest network at the end of the trial.
        """
        fittest = self._population.best_genome

        print("SUCCESS" if not self.failed else "FAILED")
        print(fittest)

        try:
            fittest.network.visualize()
        except Exception as e:
            print(f"Could not visualize network: {e}")

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    num_jobs = int(sys.argv[1]) if len(sys.argv) > 1 else 1
    config   = Config(str(Path(__file__).parent / "config_xor.ini"))
    trial    = Trial_XOR(config)
    trial.run(num_jobs=num_jobs)
