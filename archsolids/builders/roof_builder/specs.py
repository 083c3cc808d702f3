"""
Derived roof dimensions.
"""

import math
from dataclasses import dataclass
from typing import Sequence, Union

from ...schemas import RoofAxis


@dataclass(frozen=True)
class AxisRoofSpecs:
    """Rise and slope length of shed and gable roofs along one main axis."""
    shed_roof_height: float
    shed_roof_hypot: float
    gable_roof_height: float
    gable_roof_hypot: float


@dataclass(frozen=True)
class RoofSpecs:
    """Per-axis roof dimensions, indexable by ``'x'``, ``'y'`` or ``RoofAxis``."""
    x: AxisRoofSpecs
    y: AxisRoofSpecs

    def __getitem__(self, axis: Union[str, RoofAxis]) -> AxisRoofSpecs:
        return self.x if RoofAxis(axis) is RoofAxis.X else self.y


def _axis_specs(span: float, roof_pitch: float) -> AxisRoofSpecs:
    shed_height = math.tan(roof_pitch) * span
    gable_height = math.tan(roof_pitch) * span / 2
    return AxisRoofSpecs(
        shed_roof_height=shed_height,
        shed_roof_hypot=math.hypot(span, shed_height),
        gable_roof_height=gable_height,
        gable_roof_hypot=math.hypot(span, gable_height)
    )


def get_basic_roof_specs(roof_span_size: Sequence[float], roof_pitch: float) -> RoofSpecs:
    """
    Derive roof heights and slope lengths from span and pitch.

    A roof running along one axis slopes across the other, so the X specs
    are driven by the Y span and the Y specs by the X span.

    Args:
        roof_span_size: [x, y] spans
        roof_pitch: Pitch in radians

    Returns:
        Roof specs for both main axes
    """
    return RoofSpecs(
        x=_axis_specs(roof_span_size[1], roof_pitch),
        y=_axis_specs(roof_span_size[0], roof_pitch)
    )
