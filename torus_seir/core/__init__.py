"""Core epidemic modeling components"""

from .random_source import RandomSource
from .disease_params import DiseaseParameters, DwellTimes, DEFAULT_PARAMS
from .population import Population, Individual, Compartment, next_compartment
from .seir_model import SimulationManager, SimulationConfig, RESULT_COLUMNS

__all__ = [
    'RandomSource',
    'DiseaseParameters',
    'DwellTimes',
    'DEFAULT_PARAMS',
    'Population',
    'Individual',
    'Compartment',
    'next_compartment',
    'SimulationManager',
    'SimulationConfig',
    'RESULT_COLUMNS'
]
