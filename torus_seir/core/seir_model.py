"""
SEIR Grid Simulation Engine
===========================
Individual-level stochastic SEIR dynamics on a toroidal grid
Every agent relocates uniformly at random each day and is then exposed
to the infected individuals in its 3x3 neighborhood
"""

import numpy as np
import pandas as pd
from dataclasses import dataclass
from typing import Dict, List, Optional

from .disease_params import DiseaseParameters, DwellTimes, DEFAULT_PARAMS
from .population import Population, Individual, Compartment
from .random_source import RandomSource
from ..spatial.grid import ToroidalGrid
from ..spatial.infection import InfectionManager


RESULT_COLUMNS = ['Iteration', 'S', 'E', 'I', 'R']


@dataclass
class SimulationConfig:
    """Configuration for a single simulation run"""
    width: int = 300
    height: int = 300
    n_susceptible: int = 19_980
    n_infected: int = 20
    total_days: int = 730  # Two simulated years
    seed: Optional[int] = None

    def __post_init__(self):
        if self.n_susceptible < 0 or self.n_infected < 0:
            raise ValueError("Initial compartment sizes must be non-negative")
        if self.total_days < 0:
            raise ValueError(f"total_days must be non-negative, got {self.total_days}")

    @property
    def population_size(self) -> int:
        return self.n_susceptible + self.n_infected


class SimulationManager:
    """
    Owns the grid and the population of one run and advances them day by day
    """

    def __init__(self,
                 config: SimulationConfig,
                 disease_params: DiseaseParameters = DEFAULT_PARAMS,
                 rng: Optional[RandomSource] = None):
        """
        Initialize simulator and its population

        Args:
            config: Simulation configuration
            disease_params: Disease parameter object
            rng: Random source for the run (created from config.seed if None)
        """
        self.config = config
        self.params = disease_params
        self.rng = rng if rng is not None else RandomSource(config.seed)

        self.grid = ToroidalGrid(config.width, config.height)
        self.population = Population()
        self.infection = InfectionManager(
            self.grid,
            self.population,
            self.rng,
            force_of_infection=disease_params.force_of_infection
        )

        self._day = 0
        self.history: List[Dict[str, int]] = []

        self.initialize_population()

        # Visitation order, reshuffled in place every day
        self._order: List[Individual] = list(self.population.people)

    def initialize_population(self):
        """Create all individuals at uniformly random locations"""
        # Susceptibles first, then the seed infections
        for _ in range(self.config.n_susceptible):
            self._add_individual(Compartment.SUSCEPTIBLE)
        for _ in range(self.config.n_infected):
            self._add_individual(Compartment.INFECTED)

        if len(self.population) != self.config.population_size:
            raise ValueError(
                f"Population size mismatch: {len(self.population)} != {self.config.population_size}"
            )

    def _add_individual(self, compartment: Compartment) -> Individual:
        x = self.rng.next_int(self.grid.width)
        y = self.rng.next_int(self.grid.height)
        dwell = DwellTimes.sample(self.rng, self.params)

        person = self.population.add(compartment, dwell)
        self.grid.place(person, x, y)
        return person

    @property
    def day(self) -> int:
        return self._day

    @day.setter
    def day(self, value: int):
        self._day = value

    def simulate_one_step(self):
        """
        Execute one simulated day

        The grid is updated in place while the population is visited, so an
        individual's neighborhood reflects whoever has already moved today.
        Shuffling the visitation order daily keeps that from favoring any
        fixed subset of individuals.
        """
        # 1. Randomize visitation order
        self.rng.shuffle(self._order)

        # 2. Move, then update state at the new location
        for person in self._order:
            new_x = self.rng.next_int(self.grid.width)
            new_y = self.rng.next_int(self.grid.height)

            self.grid.move_individual(person, person.x, person.y, new_x, new_y)

            self.update_state(person)

        # 3. Increment day
        self._day += 1

    def update_state(self, person: Individual):
        """Advance one individual's compartment for today"""
        person.time_in_state += 1

        if person.compartment == Compartment.SUSCEPTIBLE:
            self.infection.try_to_infect(person)
        else:
            person.advance()

    def get_state_count(self, compartment: Compartment) -> int:
        """Number of individuals currently in a compartment"""
        return self.population.get_state_count(compartment)

    def get_state_counts(self) -> Dict[Compartment, int]:
        return self.population.get_state_counts()

    def _record_state(self, iteration: int):
        """Record current compartment counts for history"""
        counts = self.get_state_counts()

        record = {'Iteration': iteration}
        for compartment in Compartment:
            record[compartment.label] = counts[compartment]

        self.history.append(record)

    def run(self, verbose: bool = False) -> pd.DataFrame:
        """
        Run the full horizon

        Args:
            verbose: Print progress

        Returns:
            DataFrame with columns Iteration, S, E, I, R; row i holds the
            counts after i + 1 simulated days
        """
        self.history = []

        if verbose:
            print(f"Starting simulation...")
            print(f"Grid: {self.grid.width} x {self.grid.height}")
            print(f"Population: {len(self.population):,}")
            print(f"Initial infections: {self.config.n_infected}")
            print(f"Duration: {self.config.total_days} days")
            print(f"Seed: {self.rng.seed}")
            print()

        for iteration in range(self.config.total_days):
            self.simulate_one_step()
            self._record_state(iteration)

            if verbose and iteration % 30 == 0:
                rec = self.history[-1]
                print(f"Day {iteration:3d}: S={rec['S']:6d}, E={rec['E']:5d}, "
                      f"I={rec['I']:5d}, R={rec['R']:6d}")

        if verbose and self.history:
            peak = max(self.history, key=lambda rec: rec['I'])
            print(f"\nSimulation complete!")
            print(f"Peak infections: {peak['I']:,} on day {peak['Iteration']}")

        return self.get_results()

    def run_simulation(self, run_number: int, writer) -> pd.DataFrame:
        """
        Run the full horizon and hand the table to an output writer

        Args:
            run_number: Identifier of this run in the batch
            writer: Object with prepare() and write(run_number, df); raises
                OutputError on I/O failure, which aborts the run

        Returns:
            The results DataFrame that was written
        """
        writer.prepare()
        results = self.run(verbose=False)
        writer.write(run_number, results)
        return results

    def get_results(self) -> pd.DataFrame:
        """Get results as DataFrame"""
        return pd.DataFrame(self.history, columns=RESULT_COLUMNS)

    def summary(self) -> str:
        """Return current simulation state"""
        counts = self.get_state_counts()
        infected_cells = int(np.count_nonzero(self.infection.infection_map()))

        summary = f"Simulation State (day {self._day})\n"
        summary += f"=" * 50 + "\n"
        summary += f"Population: {len(self.population):,}\n"
        for compartment, count in counts.items():
            pct = 100 * count / max(len(self.population), 1)
            summary += f"  {compartment.name:12s}: {count:6d} ({pct:5.1f}%)\n"
        summary += f"Cells with infections: {infected_cells:,}\n"
        return summary


if __name__ == "__main__":
    print("Grid SEIR Test Run")
    print("=" * 60)

    config = SimulationConfig(total_days=120, seed=42)
    simulator = SimulationManager(config)
    results = simulator.run(verbose=True)

    print()
    print(simulator.summary())
