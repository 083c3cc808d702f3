"""
Gable roof builder for creating two-slope ridge roof solids.
Builds one half as a shed roof over half the span, trims it at the ridge
plane and mirrors it across that plane.
"""

import logging
from typing import Optional

import trimesh

from ...families import TrimFamilyProvider
from ...geometry import GeometryKernel
from ...schemas import RoofAxis, RoofOption, RoofParams
from ...utils.error_handling import ErrorCategory, error_handler
from .shed import RoofInput, ShedRoofBuilder
from .specs import get_basic_roof_specs

logger = logging.getLogger(__name__)

# Clearance of the ridge cut box beyond the half roof on every side
RIDGE_CUT_MARGIN = 50


class GableRoofBuilder:
    """Builds 3D gable roof geometry from two shed roof halves."""

    def __init__(self,
                 kernel: Optional[GeometryKernel] = None,
                 families: Optional[TrimFamilyProvider] = None,
                 shed_builder: Optional[ShedRoofBuilder] = None):
        """
        Initialize the gable roof builder.

        Args:
            kernel: Geometry kernel used for every construction step
            families: Trim family provider for the roof covering
            shed_builder: Shed roof builder used for each half
        """
        self.shed_builder = shed_builder or ShedRoofBuilder(kernel, families)
        self.kernel = self.shed_builder.kernel

    @error_handler(category=ErrorCategory.GEOMETRY_PROCESSING)
    def build_gable_roof(self, params: RoofInput) -> trimesh.Trimesh:
        """
        Build a gable roof.

        The covering overhangs the eaves and sits on top of the support, so
        the solid is taller than the gable rise. Only the structural part
        from ``build_ridge_support`` measures exactly the rise.

        Args:
            params: Roof parameters for the whole roof

        Returns:
            Ridge roof solid, symmetric about the ridge plane through the origin
        """
        params = RoofParams.coerce(params)
        return self._mirror_halves(self.build_half_roof(params), params.roof_axis)

    def build_ridge_support(self, params: RoofInput) -> trimesh.Trimesh:
        """
        Build the structural part of a gable roof without its covering.

        Placed exactly like the full roof, it runs from ``-gable_roof_height / 2``
        to ``+gable_roof_height / 2`` in Z.
        """
        params = RoofParams.coerce(params)
        half_params = self._half_params(params)
        half_support = self.shed_builder.orient_to_axis(
            self.shed_builder.build_roof_support(half_params),
            params.roof_axis
        )
        return self._mirror_halves(self._place_half(half_support, params), params.roof_axis)

    def build_half_roof(self, params: RoofInput) -> trimesh.Trimesh:
        """
        Build one side of the gable, trimmed flush with the ridge plane.

        For roofs along X the half sits on the negative Y side of the ridge
        plane; for roofs along Y it sits on the positive X side. Either way
        it is centred along the ridge.
        """
        params = RoofParams.coerce(params)
        half_roof = self.shed_builder.build_shed_roof(self._half_params(params))
        return self._place_half(half_roof, params)

    @staticmethod
    def _half_params(params: RoofParams) -> RoofParams:
        span_x, span_y = params.roof_span_size
        if params.roof_axis is RoofAxis.X:
            half_span = (span_x, span_y / 2)
        else:
            half_span = (span_x / 2, span_y)
        return params.model_copy(update={
            'roof_span_size': half_span,
            'roof_opts': params.roof_opts | RoofOption.GABLE_MODE,
        })

    def _place_half(self, half: trimesh.Trimesh, params: RoofParams) -> trimesh.Trimesh:
        """Move a half built on the half span onto the ridge and cut it there."""
        gable_height = get_basic_roof_specs(
            params.roof_span_size, params.roof_pitch
        )[params.roof_axis].gable_roof_height
        half_span = self._half_params(params).roof_span_size

        if params.roof_axis is RoofAxis.X:
            half_offset = [-half_span[0] / 2, -half_span[1], -gable_height / 2]
        else:
            half_offset = [half_span[0], -half_span[1] / 2, -gable_height / 2]

        logger.debug(f"Gable half span {half_span}, rise {gable_height:.4f}")

        cut_box = self.kernel.box([
            half_span[0] + RIDGE_CUT_MARGIN,
            half_span[1] + RIDGE_CUT_MARGIN,
            gable_height + RIDGE_CUT_MARGIN
        ])
        if params.roof_axis is RoofAxis.X:
            cut_box = self.kernel.align(cut_box, ['center', 'min', 'center'])
        else:
            cut_box = self.kernel.align(cut_box, ['max', 'center', 'center'])

        return self.kernel.subtract(self.kernel.translate(half, half_offset), cut_box)

    def _mirror_halves(self, half: trimesh.Trimesh, roof_axis: RoofAxis) -> trimesh.Trimesh:
        mirror_normal = [0, 1, 0] if roof_axis is RoofAxis.X else [1, 0, 0]
        return self.kernel.union(half, self.kernel.mirror(half, mirror_normal))


def build_gable_roof(params: RoofInput, **kwargs) -> trimesh.Trimesh:
    """
    Convenience function to build gable roof.

    Args:
        params: Roof parameters
        **kwargs: Additional arguments for GableRoofBuilder

    Returns:
        Gable roof solid
    """
    builder = GableRoofBuilder(**kwargs)
    return builder.build_gable_roof(params)
