"""
Infection Manager
=================
Local infection pressure on the torus and the stochastic S -> E decision
"""

import numpy as np

from .grid import ToroidalGrid
from ..core.population import Population, Individual, Compartment
from ..core.random_source import RandomSource


class InfectionManager:
    """
    Computes neighborhood force of infection and exposes susceptibles

    Infection pressure comes from the 3x3 block of cells centred on the
    individual's location, center included.
    """

    def __init__(self,
                 grid: ToroidalGrid,
                 population: Population,
                 rng: RandomSource,
                 force_of_infection: float = 0.5):
        """
        Args:
            grid: Occupancy grid (holds population indices)
            population: Registry used to resolve indices to individuals
            rng: The run's random source
            force_of_infection: Hazard per infected neighbor per day
        """
        self.grid = grid
        self.population = population
        self.rng = rng
        self.force_of_infection = force_of_infection

    def infected_neighbor_count(self, x: int, y: int) -> int:
        """
        Count infected individuals in the 3x3 block around (x, y)

        On grids narrower than 3 cells the wrap makes the scan visit the
        same cell more than once; each visit is counted.
        """
        total = 0
        for i in range(x - 1, x + 2):
            for j in range(y - 1, y + 2):
                for index in self.grid.individuals_at(i, j):
                    if self.population.is_infected(index):
                        total += 1
        return total

    def exposure_probability(self, n_infected: int) -> float:
        """P(exposure) = 1 - exp(-force_of_infection * k)"""
        if n_infected == 0:
            return 0.0
        return 1.0 - np.exp(-self.force_of_infection * n_infected)

    def try_to_infect(self, individual: Individual) -> bool:
        """
        Stochastic S -> E decision at the individual's current location

        One uniform is consumed on every call, including when no infected
        neighbor is present.

        Returns:
            True if the individual became exposed
        """
        if individual.compartment != Compartment.SUSCEPTIBLE:
            raise ValueError(
                f"Individual {individual.index} is {individual.compartment.name}, not SUSCEPTIBLE"
            )

        k = self.infected_neighbor_count(individual.x, individual.y)
        probability = self.exposure_probability(k)

        if self.rng.next_uniform() < probability:
            individual.set_compartment(Compartment.EXPOSED)
            return True
        return False

    def infection_map(self) -> np.ndarray:
        """Get 2D array of infected counts per cell, indexed [x, y]"""
        infection_map = np.zeros((self.grid.width, self.grid.height), dtype=int)
        for person in self.population:
            if person.compartment == Compartment.INFECTED:
                infection_map[person.x, person.y] += 1
        return infection_map
