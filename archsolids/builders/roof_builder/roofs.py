"""
Roof builder combining the shed, gable and hip builders over one set of
geometry and trim family capabilities.
"""

from typing import Optional, Sequence

import trimesh

from ...families import TrimFamilyProvider
from ...geometry import GeometryKernel
from ..results import Unsupported
from .gable import GableRoofBuilder
from .hip import HipRoofBuilder
from .shed import RoofInput, ShedRoofBuilder
from .specs import RoofSpecs, get_basic_roof_specs


class RoofBuilder:
    """Builds shed and gable roofs; hip roofs are reserved."""

    def __init__(self,
                 kernel: Optional[GeometryKernel] = None,
                 families: Optional[TrimFamilyProvider] = None):
        """
        Initialize the roof builder.

        Args:
            kernel: Geometry kernel shared by every roof type
            families: Trim family provider shared by every roof type
        """
        if kernel is None:
            kernel = families.kernel if families is not None else GeometryKernel()
        self.kernel = kernel
        self.families = families or TrimFamilyProvider(kernel)

        self.shed = ShedRoofBuilder(self.kernel, self.families)
        self.gable = GableRoofBuilder(shed_builder=self.shed)
        self.hip = HipRoofBuilder(self.kernel, self.families)

    @staticmethod
    def get_basic_roof_specs(roof_span_size: Sequence[float], roof_pitch: float) -> RoofSpecs:
        return get_basic_roof_specs(roof_span_size, roof_pitch)

    def build_shed_roof(self, params: RoofInput) -> trimesh.Trimesh:
        return self.shed.build_shed_roof(params)

    def build_gable_roof(self, params: RoofInput) -> trimesh.Trimesh:
        return self.gable.build_gable_roof(params)

    def build_hip_roof(self, params: RoofInput) -> Unsupported:
        return self.hip.build_hip_roof(params)
