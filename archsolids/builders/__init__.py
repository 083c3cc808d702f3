"""
Builders module for archsolids.
Wires the arch and roof builders from one geometry kernel and trim family
provider.
"""

from dataclasses import dataclass
from typing import Optional

from ..families import TrimFamilyProvider
from ..geometry import GeometryKernel
from .arches import ArchBuilder, one_pt_arch, two_pt_arch, three_pt_arch, four_pt_arch
from .results import Unsupported, is_supported
from .roof_builder import (
    RoofBuilder,
    ShedRoofBuilder, build_shed_roof,
    GableRoofBuilder, build_gable_roof,
    HipRoofBuilder, build_hip_roof,
    RoofSpecs, AxisRoofSpecs, get_basic_roof_specs
)


@dataclass(frozen=True)
class Builders:
    """Arch and roof builders sharing one capability set."""
    kernel: GeometryKernel
    families: TrimFamilyProvider
    arches: ArchBuilder
    roofs: RoofBuilder


def init(kernel: Optional[GeometryKernel] = None,
         families: Optional[TrimFamilyProvider] = None) -> Builders:
    """
    Build every builder from the same kernel and trim family provider.

    Args:
        kernel: Geometry kernel, defaults to the provider's kernel or a new one
        families: Trim family provider, defaults to the bundled families

    Returns:
        Builders bundle
    """
    if kernel is None:
        kernel = families.kernel if families is not None else GeometryKernel()
    families = families or TrimFamilyProvider(kernel)
    return Builders(
        kernel=kernel,
        families=families,
        arches=ArchBuilder(kernel),
        roofs=RoofBuilder(kernel, families)
    )


__all__ = [
    'Builders',
    'init',
    'ArchBuilder',
    'one_pt_arch',
    'two_pt_arch',
    'three_pt_arch',
    'four_pt_arch',
    'Unsupported',
    'is_supported',
    'RoofBuilder',
    'ShedRoofBuilder',
    'build_shed_roof',
    'GableRoofBuilder',
    'build_gable_roof',
    'HipRoofBuilder',
    'build_hip_roof',
    'RoofSpecs',
    'AxisRoofSpecs',
    'get_basic_roof_specs'
]
