"""
Roof builder module for archsolids.
Contains the shed, gable and hip roof builders.
"""

from .specs import AxisRoofSpecs, RoofSpecs, get_basic_roof_specs
from .shed import ShedRoofBuilder, build_shed_roof
from .gable import GableRoofBuilder, build_gable_roof
from .hip import HipRoofBuilder, build_hip_roof
from .roofs import RoofBuilder

__all__ = [
    'AxisRoofSpecs',
    'RoofSpecs',
    'get_basic_roof_specs',
    'ShedRoofBuilder',
    'build_shed_roof',
    'GableRoofBuilder',
    'build_gable_roof',
    'HipRoofBuilder',
    'build_hip_roof',
    'RoofBuilder'
]
