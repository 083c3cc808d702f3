"""
archsolids: parametric arch and roof solids.
"""

from .builders import (
    Builders,
    init,
    ArchBuilder,
    one_pt_arch,
    two_pt_arch,
    three_pt_arch,
    four_pt_arch,
    RoofBuilder,
    build_shed_roof,
    build_gable_roof,
    build_hip_roof,
    get_basic_roof_specs,
    Unsupported,
    is_supported
)
from .families import TrimFamilyProvider
from .geometry import GeometryKernel
from .schemas import ArchParams, RoofParams, RoofAxis, RoofOption

__version__ = "0.1.0"

__all__ = [
    'Builders',
    'init',
    'ArchBuilder',
    'one_pt_arch',
    'two_pt_arch',
    'three_pt_arch',
    'four_pt_arch',
    'RoofBuilder',
    'build_shed_roof',
    'build_gable_roof',
    'build_hip_roof',
    'get_basic_roof_specs',
    'Unsupported',
    'is_supported',
    'TrimFamilyProvider',
    'GeometryKernel',
    'ArchParams',
    'RoofParams',
    'RoofAxis',
    'RoofOption',
    '__version__'
]
