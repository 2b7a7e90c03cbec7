"""Spatial structure and local transmission"""

from .grid import ToroidalGrid
from .infection import InfectionManager

__all__ = ['ToroidalGrid', 'InfectionManager']
