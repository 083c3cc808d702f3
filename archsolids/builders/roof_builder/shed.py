"""
Shed roof builder for creating single-slope roof solids.
Composes a structural support wedge with a layered trim, sheathing and
shingle covering laid flush on its slope.
"""

import logging
import math
from typing import Any, Dict, Optional, Tuple, Union

import trimesh

from ...families import TrimFamilyProvider
from ...geometry import GeometryKernel
from ...schemas import RoofAxis, RoofOption, RoofParams
from ...utils.error_handling import ErrorCategory, error_handler
from .specs import get_basic_roof_specs

logger = logging.getLogger(__name__)

RoofInput = Union[RoofParams, Dict[str, Any]]

# Default sheathing and shingle thickness relative to the bottom trim height
LAYER_THICKNESS_RATIO = 0.6667
# Shingle footprint growth beyond the sheathing, in trim unit depths
SHINGLE_OVERHANG_UNITS = 3


class ShedRoofBuilder:
    """Builds 3D shed roof geometry."""

    def __init__(self,
                 kernel: Optional[GeometryKernel] = None,
                 families: Optional[TrimFamilyProvider] = None):
        """
        Initialize the shed roof builder.

        Args:
            kernel: Geometry kernel used for every construction step
            families: Trim family provider for the bottom trim profile
        """
        if kernel is None:
            kernel = families.kernel if families is not None else GeometryKernel()
        self.kernel = kernel
        self.families = families or TrimFamilyProvider(kernel)

    @error_handler(category=ErrorCategory.GEOMETRY_PROCESSING)
    def build_shed_roof(self, params: RoofInput) -> trimesh.Trimesh:
        """
        Build a shed roof.

        Args:
            params: Roof parameters

        Returns:
            Support wedge and covering assembly as one solid, turned a
            quarter turn about Z when the roof runs along Y
        """
        params = RoofParams.coerce(params)
        roof = self.kernel.union(self.build_roof_support(params), self.build_roof_assembly(params))
        return self.orient_to_axis(roof, params.roof_axis)

    def orient_to_axis(self, solid: trimesh.Trimesh, roof_axis: RoofAxis) -> trimesh.Trimesh:
        """Turn a roof part built along X a quarter turn about Z when the roof runs along Y."""
        if RoofAxis(roof_axis) is RoofAxis.Y:
            return self.kernel.rotate(solid, [0, 0, math.pi / 2])
        return solid

    def build_roof_support(self, params: RoofInput) -> trimesh.Trimesh:
        """
        Build the structural wedge under the roof covering.

        The wedge runs along X for the main-axis span and rises across Y,
        with its low edge on Y = 0 and its minimum corner on the origin.
        Unless the roof is solid, the inside is carved out down to the walls.
        """
        params = RoofParams.coerce(params)
        axis_span, roof_span, roof_height, _ = self._dimensions(params)
        wall_thickness = params.wall_thickness

        base_triangle = self.kernel.triangle_sas(roof_span, math.pi / 2, roof_height)
        base_prism = self.kernel.align(
            self.kernel.rotate(
                self.kernel.extrude_linear(base_triangle, axis_span),
                [math.pi / 2, 0, math.pi / 2]
            ),
            ['center', 'center', 'min']
        )

        if RoofOption.SOLID in params.roof_opts:
            return self.kernel.align(base_prism, ['min', 'min', 'min'])

        gable_mode = RoofOption.GABLE_MODE in params.roof_opts
        # A gable half only keeps the eave wall
        wall_count = 1 if gable_mode else 2
        room_size = [
            axis_span - 2 * wall_thickness,
            roof_span - wall_count * wall_thickness,
            roof_height
        ]
        room_cutaway = self.kernel.align(self.kernel.box(room_size), ['center', 'center', 'min'])
        if gable_mode:
            room_cutaway = self.kernel.translate(room_cutaway, [0, wall_thickness / 2, 0])

        return self.kernel.align(
            self.kernel.subtract(base_prism, room_cutaway),
            ['min', 'min', 'min']
        )

    def build_roof_assembly(self, params: RoofInput) -> trimesh.Trimesh:
        """
        Build the bottom trim, sheathing and shingle layers.

        The layers are stacked flat, centred over the slope of the support
        wedge and then tilted by the roof pitch so they lie on it.
        """
        params = RoofParams.coerce(params)
        axis_span, _, _, roof_hypot = self._dimensions(params)
        main_idx = params.main_axis.axis_index
        other_idx = params.other_axis.axis_index
        trim_depth, trim_height_unit = params.trim_unit_size
        overhang = params.roof_overhang_size

        family = self.families.build_trim_family(
            params.trim_family,
            unit_height=trim_height_unit,
            unit_depth=trim_depth
        )
        trim_profile = family.crown.extra_small
        trim_height = self.kernel.measure_dimensions(trim_profile)[1]

        rafter_size = [2 * trim_depth + axis_span, 2 * trim_depth + roof_hypot]
        bottom_trim = self.kernel.align(
            family.cuboid_moulding(rafter_size, trim_profile),
            ['center', 'center', 'min']
        )

        sheathing_thickness = params.shingle_sheathing_thickness
        if sheathing_thickness is None:
            sheathing_thickness = trim_height * LAYER_THICKNESS_RATIO
        sheathing_size = [
            2 * overhang[main_idx] + rafter_size[0],
            2 * overhang[other_idx] + rafter_size[1],
            sheathing_thickness
        ]
        sheathing = self.kernel.box(
            sheathing_size,
            center=[0, 0, trim_height + sheathing_thickness / 2]
        )

        shingle_thickness = params.shingle_layer_thickness
        if shingle_thickness is None:
            shingle_thickness = trim_height * LAYER_THICKNESS_RATIO
        shingles_size = [
            SHINGLE_OVERHANG_UNITS * trim_depth + sheathing_size[0],
            SHINGLE_OVERHANG_UNITS * trim_depth + sheathing_size[1],
            shingle_thickness
        ]
        shingles = self.kernel.box(
            shingles_size,
            center=[0, 0, trim_height + sheathing_thickness + shingle_thickness / 2]
        )

        logger.debug(
            f"Roof assembly: rafter {rafter_size}, sheathing {sheathing_size}, shingles {shingles_size}"
        )

        roof_assembly = self.kernel.union(bottom_trim, sheathing, shingles)
        centred_assembly = self.kernel.translate(
            self.kernel.align(roof_assembly, ['min', 'min', 'min']),
            [
                (shingles_size[0] - axis_span) / -2,
                (shingles_size[1] - roof_hypot) / -2,
                0
            ]
        )
        return self.kernel.rotate(centred_assembly, [params.roof_pitch, 0, 0])

    @staticmethod
    def _dimensions(params: RoofParams) -> Tuple[float, float, float, float]:
        """Main-axis span, sloped span, rise and slope length of the roof."""
        specs = get_basic_roof_specs(params.roof_span_size, params.roof_pitch)[params.roof_axis]
        axis_span = params.roof_span_size[params.main_axis.axis_index]
        roof_span = params.roof_span_size[params.other_axis.axis_index]
        logger.debug(
            f"Shed roof along {params.roof_axis.value}: span {roof_span}, "
            f"height {specs.shed_roof_height:.4f}, hypot {specs.shed_roof_hypot:.4f}"
        )
        return axis_span, roof_span, specs.shed_roof_height, specs.shed_roof_hypot


def build_shed_roof(params: RoofInput, **kwargs) -> trimesh.Trimesh:
    """
    Convenience function to build shed roof.

    Args:
        params: Roof parameters
        **kwargs: Additional arguments for ShedRoofBuilder

    Returns:
        Shed roof solid
    """
    builder = ShedRoofBuilder(**kwargs)
    return builder.build_shed_roof(params)
