"""
Population Management
=====================
Individual agents, their compartment cycle and the population registry
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Tuple

from .disease_params import DwellTimes


class Compartment(IntEnum):
    """Enumeration of disease compartments (cyclic S -> E -> I -> R -> S)"""
    SUSCEPTIBLE = 0
    EXPOSED = 1
    INFECTED = 2
    RECOVERED = 3

    @property
    def label(self) -> str:
        return self.name[0]


def next_compartment(compartment: Compartment,
                     time_in_state: int,
                     dwell: DwellTimes) -> Tuple[Compartment, int]:
    """
    Apply the dwell-time transition rule

    Args:
        compartment: Current compartment
        time_in_state: Days in compartment, already incremented for today
        dwell: Individual's dwell thresholds

    Returns:
        (compartment, time_in_state) after the rule; the counter is reset
        to 0 on a transition. Susceptible is returned unchanged since
        infection is decided from the neighborhood, not from a timer.
    """
    if compartment == Compartment.EXPOSED:
        if time_in_state > dwell.exposed:
            return Compartment.INFECTED, 0
    elif compartment == Compartment.INFECTED:
        if time_in_state > dwell.infected:
            return Compartment.RECOVERED, 0
    elif compartment == Compartment.RECOVERED:
        if time_in_state > dwell.recovered:
            return Compartment.SUSCEPTIBLE, 0  # Immunity wanes
    return compartment, time_in_state


@dataclass
class Individual:
    """Individual agent in the simulation"""
    index: int
    compartment: Compartment
    dwell: DwellTimes

    time_in_state: int = 0

    # Location on the grid, maintained by ToroidalGrid
    x: int = 0
    y: int = 0
    cell: int = -1

    def set_compartment(self, compartment: Compartment):
        """Change compartment and reset the time-in-state counter"""
        self.compartment = compartment
        self.time_in_state = 0

    def advance(self):
        """Apply the timer-driven transition rule to the current counter"""
        self.compartment, self.time_in_state = next_compartment(
            self.compartment, self.time_in_state, self.dwell
        )


class Population:
    """
    Ordered registry of every individual in a run

    Individuals are stored by index; the grid only keeps indices, so this
    is the sole owner of the agents.
    """

    def __init__(self):
        self.people: List[Individual] = []

    def __len__(self) -> int:
        return len(self.people)

    def __iter__(self):
        return iter(self.people)

    def __getitem__(self, index: int) -> Individual:
        return self.people[index]

    @property
    def size(self) -> int:
        return len(self.people)

    def add(self, compartment: Compartment, dwell: DwellTimes) -> Individual:
        """Create the next individual and register it"""
        person = Individual(index=len(self.people), compartment=compartment, dwell=dwell)
        self.people.append(person)
        return person

    def get_state_count(self, compartment: Compartment) -> int:
        """Count people in one compartment"""
        return sum(1 for person in self.people if person.compartment == compartment)

    def get_state_counts(self) -> Dict[Compartment, int]:
        """Count people in each compartment"""
        counts = {compartment: 0 for compartment in Compartment}
        for person in self.people:
            counts[person.compartment] += 1
        return counts

    def is_infected(self, index: int) -> bool:
        return self.people[index].compartment == Compartment.INFECTED
