"""Stochastic SEIR epidemic simulation on a toroidal grid"""

from . import core
from . import spatial
from .output import CsvResultWriter, OutputError
from .driver import BatchConfig, run_batch

__all__ = ['core', 'spatial', 'CsvResultWriter', 'OutputError', 'BatchConfig', 'run_batch']
