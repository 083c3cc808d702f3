"""
Pydantic schemas for archsolids builders.
Defines the parameter records accepted by the arch and roof builders.
"""

from enum import Enum, Flag
from typing import Annotated, Any, Dict, Iterable, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, PlainValidator
from pydantic.alias_generators import to_camel


class RoofAxis(str, Enum):
    """Main (ridge) axis of a roof."""
    X = "x"
    Y = "y"

    @property
    def axis_index(self) -> int:
        return 0 if self is RoofAxis.X else 1

    @property
    def other(self) -> 'RoofAxis':
        return RoofAxis.Y if self is RoofAxis.X else RoofAxis.X


class RoofOption(Flag):
    """Construction flags for roof builders."""
    NONE = 0
    SOLID = 1
    NO_WALL = 2
    GABLE_MODE = 4

    @classmethod
    def parse(cls, value: Union['RoofOption', str, Iterable[Any], None]) -> 'RoofOption':
        """
        Parse roof options from flags, names or an iterable of names.

        Accepts ``"solid"``, ``"noWall"``/``"no_wall"`` and
        ``"gableMode"``/``"gable_mode"`` as well as member names.
        """
        if value is None:
            return cls.NONE
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            value = [value]
        if isinstance(value, dict):
            raise ValueError(f"Invalid roof options: {value!r}")

        parsed = cls.NONE
        for item in value:
            if isinstance(item, cls):
                parsed |= item
                continue
            key = str(item).strip()
            if key not in _ROOF_OPTION_NAMES:
                raise ValueError(f"Unknown roof option: {item!r}")
            parsed |= _ROOF_OPTION_NAMES[key]
        return parsed


_ROOF_OPTION_NAMES: Dict[str, RoofOption] = {
    'solid': RoofOption.SOLID,
    'SOLID': RoofOption.SOLID,
    'noWall': RoofOption.NO_WALL,
    'no_wall': RoofOption.NO_WALL,
    'NO_WALL': RoofOption.NO_WALL,
    'gableMode': RoofOption.GABLE_MODE,
    'gable_mode': RoofOption.GABLE_MODE,
    'GABLE_MODE': RoofOption.GABLE_MODE,
}


class _BuilderParams(BaseModel):
    """Shared model configuration for builder parameters."""
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra='forbid'
    )

    @classmethod
    def coerce(cls, params: Union['_BuilderParams', Dict[str, Any]]):
        """Return ``params`` as an instance of this model."""
        if isinstance(params, cls):
            return params
        return cls.model_validate(params)


class ArchParams(_BuilderParams):
    """Parameters for arch builders."""
    arc_radius: float = Field(..., description="Arc radius")
    arch_width: Optional[float] = Field(
        None, description="Span between springing points of a two-centre arch"
    )


class RoofParams(_BuilderParams):
    """Parameters for roof builders."""
    roof_span_size: Tuple[float, float] = Field(..., description="[x, y] size of the area to be spanned")
    roof_overhang_size: Tuple[float, float] = Field(default=(1.0, 1.0), description="[x, y] overhang sizes")
    roof_pitch: float = Field(..., description="Roof pitch angle in radians")
    roof_axis: RoofAxis = Field(default=RoofAxis.X, description="Main axis of the roof")
    roof_opts: Annotated[RoofOption, PlainValidator(RoofOption.parse)] = Field(
        default=RoofOption.NONE, description="Construction flags"
    )
    wall_thickness: float = Field(..., description="Wall thickness")
    trim_family: str = Field(default="aranea", description="Trim family id")
    trim_unit_size: Tuple[float, float] = Field(..., description="[depth, height] of a trim unit")
    shingle_layer_thickness: Optional[float] = Field(None, description="Shingle layer thickness")
    shingle_sheathing_thickness: Optional[float] = Field(None, description="Sheathing thickness")

    @property
    def main_axis(self) -> RoofAxis:
        return self.roof_axis

    @property
    def other_axis(self) -> RoofAxis:
        return self.roof_axis.other
