"""
Disease Parameters and Dwell Times
==================================
Epidemiological constants and per-individual dwell-time sampling
"""

from dataclasses import dataclass

from .random_source import RandomSource


@dataclass(frozen=True)
class DiseaseParameters:
    """Core disease parameters for the grid SEIR model"""

    # Transmission: exposure probability is 1 - exp(-force_of_infection * k)
    # where k counts infected individuals in the 3x3 neighborhood
    force_of_infection: float = 0.5

    # Mean dwell times (days), negative-exponential
    exposed_mean: float = 3.0
    infected_mean: float = 7.0
    recovered_mean: float = 365.0  # Duration of immunity before waning

    def __post_init__(self):
        if self.force_of_infection < 0:
            raise ValueError(f"force_of_infection must be non-negative, got {self.force_of_infection}")
        for name in ('exposed_mean', 'infected_mean', 'recovered_mean'):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")


@dataclass(frozen=True)
class DwellTimes:
    """
    Per-individual dwell thresholds (days) for E, I and R

    Sampled once when the individual is created and reused on every
    later pass through the cycle.
    """
    exposed: int
    infected: int
    recovered: int

    def __post_init__(self):
        if min(self.exposed, self.infected, self.recovered) < 0:
            raise ValueError(f"Dwell times must be non-negative: {self}")

    @classmethod
    def sample(cls, rng: RandomSource, params: DiseaseParameters) -> 'DwellTimes':
        """Draw E, I then R thresholds from the shared random source"""
        return cls(
            exposed=rng.sample_neg_exp(params.exposed_mean),
            infected=rng.sample_neg_exp(params.infected_mean),
            recovered=rng.sample_neg_exp(params.recovered_mean),
        )


# Default parameters instance
DEFAULT_PARAMS = DiseaseParameters()
