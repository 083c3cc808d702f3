"""
Hip roof builder.
Reserved for four-slope roofs; no construction is available yet.
"""

from typing import Optional

from ...families import TrimFamilyProvider
from ...geometry import GeometryKernel
from ..results import Unsupported
from .shed import RoofInput


class HipRoofBuilder:
    """Placeholder builder for hip roofs."""

    def __init__(self,
                 kernel: Optional[GeometryKernel] = None,
                 families: Optional[TrimFamilyProvider] = None):
        self.kernel = kernel
        self.families = families

    def build_hip_roof(self, params: RoofInput) -> Unsupported:
        """Hip roofs are not available; always returns ``Unsupported``."""
        return Unsupported('build_hip_roof')


def build_hip_roof(params: RoofInput, **kwargs) -> Unsupported:
    """Convenience function for the reserved hip roof."""
    return HipRoofBuilder(**kwargs).build_hip_roof(params)
