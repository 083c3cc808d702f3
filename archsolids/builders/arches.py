"""
Arch builder for circle-based arches.
Builds 2D arch outlines or, given a cross-section profile centred on the
origin, 3D arch solids.
"""

import logging
import math
from typing import Any, Dict, Optional, Union

import trimesh
from shapely.geometry import Polygon

from ..schemas import ArchParams
from ..geometry import GeometryKernel, Shape
from ..utils.error_handling import ArchGeometryError, ErrorCategory, error_handler
from .results import Unsupported

logger = logging.getLogger(__name__)

ArchInput = Union[ArchParams, Dict[str, Any]]

# Angular slices across the half turn of every arch
ARCH_SEGMENTS = 48
# Cutaway box height relative to the profile height
CUTAWAY_HEIGHT_FACTOR = 1.25


class ArchBuilder:
    """Builds one- and two-centre arches."""

    def __init__(self, kernel: Optional[GeometryKernel] = None):
        """
        Initialize the arch builder.

        Args:
            kernel: Geometry kernel used for every construction step
        """
        self.kernel = kernel or GeometryKernel()

    @error_handler(category=ErrorCategory.GEOMETRY_PROCESSING)
    def one_pt_arch(self, params: ArchInput, profile: Optional[Polygon] = None) -> Shape:
        """
        Build a one-centre (semicircular) arch.

        Args:
            params: Arch parameters, ``arc_radius`` is used
            profile: Optional 2D cross-section centred on the origin

        Returns:
            A filled semicircular region without a profile, otherwise a
            solid centred in X and Y with its base on Z = 0
        """
        params = ArchParams.coerce(params)
        arc_radius = params.arc_radius

        if profile is None:
            return self._semicircle(arc_radius)

        logger.debug(f"Revolving one-centre arch, radius {arc_radius}")
        offset_profile = self.kernel.translate(profile, [arc_radius, 0])
        base_arch = self.kernel.extrude_rotate(offset_profile, math.pi, ARCH_SEGMENTS)
        return self._stand_up(base_arch)

    @error_handler(category=ErrorCategory.GEOMETRY_PROCESSING)
    def two_pt_arch(self, params: ArchInput, profile: Optional[Polygon] = None) -> Shape:
        """
        Build a two-centre pointed arch from two mirrored semicircular arches.

        Args:
            params: Arch parameters; ``arch_width`` defaults to twice the radius
            profile: Optional 2D cross-section centred on the origin

        Returns:
            The lens-shaped overlap of the two arcs without a profile,
            otherwise the pointed arch solid

        Raises:
            ArchGeometryError: If ``arch_width`` exceeds twice ``arc_radius``
        """
        params = ArchParams.coerce(params)
        arc_radius = params.arc_radius
        mirror_axis = self._mirror_axis(params)

        if profile is None:
            base_arch = self._semicircle(arc_radius)
            reflected_arch = self.kernel.mirror(base_arch, [1, 0, 0], [mirror_axis, 0, 0])
            return self.kernel.align(
                self.kernel.intersect(base_arch, reflected_arch),
                ['center', 'min', 'min']
            )

        cut_arch = self.two_pt_arch_half(params, profile)
        reflected_arch = self.kernel.mirror(cut_arch, [1, 0, 0], [mirror_axis, 0, 0])
        return self._stand_up(self.kernel.union(cut_arch, reflected_arch))

    def two_pt_arch_half(self, params: ArchInput, profile: Polygon) -> trimesh.Trimesh:
        """
        Build one side of a two-centre arch solid, lying flat.

        The revolved arch is trimmed at ``x = arc_radius - arch_width / 2``
        so that only the part from the meeting point outwards remains.
        """
        params = ArchParams.coerce(params)
        arc_radius = params.arc_radius
        arch_width = self._arch_width(params)
        mirror_axis = self._mirror_axis(params)

        profile_width, profile_height = self.kernel.measure_dimensions(profile)[:2]
        offset_profile = self.kernel.translate(profile, [profile_width / 2 + arc_radius, 0])
        base_arch = self.kernel.extrude_rotate(offset_profile, math.pi, ARCH_SEGMENTS)

        # The box must reach past the far side of the ring at -(arc_radius + profile_width)
        cutaway_size = 2 * max(arch_width, arc_radius, mirror_axis + arc_radius + profile_width)
        cutaway = self.kernel.box(
            [cutaway_size, 2 * cutaway_size, profile_height * CUTAWAY_HEIGHT_FACTOR],
            center=[mirror_axis - cutaway_size / 2, 0, 0]
        )
        return self.kernel.subtract(base_arch, cutaway)

    def three_pt_arch(self, params: ArchInput, profile: Optional[Polygon] = None) -> Unsupported:
        """Reserved: three-centre arches are not available."""
        return Unsupported('three_pt_arch')

    def four_pt_arch(self, params: ArchInput, profile: Optional[Polygon] = None) -> Unsupported:
        """Reserved: four-centre arches are not available."""
        return Unsupported('four_pt_arch')

    @staticmethod
    def _arch_width(params: ArchParams) -> float:
        arch_width = 2 * params.arc_radius if params.arch_width is None else params.arch_width
        if arch_width > 2 * params.arc_radius:
            raise ArchGeometryError(
                f"Arch width {arch_width} exceeds the arc diameter {2 * params.arc_radius}"
            )
        return arch_width

    def _mirror_axis(self, params: ArchParams) -> float:
        arch_width = self._arch_width(params)
        mirror_axis = params.arc_radius - arch_width / 2
        logger.debug(f"Two-centre arch: radius {params.arc_radius}, width {arch_width}, mirror axis {mirror_axis}")
        return mirror_axis

    def _semicircle(self, arc_radius: float) -> Polygon:
        path = self.kernel.close_path(self.kernel.arc(arc_radius, math.pi, segments=ARCH_SEGMENTS))
        return self.kernel.region_from_points(path)

    def _stand_up(self, arch):
        """Turn a flat revolved arch upright and put its base on the ground."""
        upright = self.kernel.rotate(arch, [math.pi / 2, 0, 0])
        return self.kernel.align(upright, ['center', 'center', 'min'])


def one_pt_arch(params: ArchInput, profile: Optional[Polygon] = None, **kwargs) -> Shape:
    """
    Convenience function to build a one-centre arch.

    Args:
        params: Arch parameters
        profile: Optional cross-section profile
        **kwargs: Additional arguments for ArchBuilder

    Returns:
        Arch region or solid
    """
    return ArchBuilder(**kwargs).one_pt_arch(params, profile)


def two_pt_arch(params: ArchInput, profile: Optional[Polygon] = None, **kwargs) -> Shape:
    """Convenience function to build a two-centre arch."""
    return ArchBuilder(**kwargs).two_pt_arch(params, profile)


def three_pt_arch(params: ArchInput, profile: Optional[Polygon] = None, **kwargs) -> Unsupported:
    """Convenience function for the reserved three-centre arch."""
    return ArchBuilder(**kwargs).three_pt_arch(params, profile)


def four_pt_arch(params: ArchInput, profile: Optional[Polygon] = None, **kwargs) -> Unsupported:
    """Convenience function for the reserved four-centre arch."""
    return ArchBuilder(**kwargs).four_pt_arch(params, profile)
