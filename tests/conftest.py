import math

import pytest

from archsolids.builders import init
from archsolids.families import TrimFamilyProvider
from archsolids.geometry import GeometryKernel


@pytest.fixture
def kernel():
    return GeometryKernel()


@pytest.fixture
def families(kernel):
    return TrimFamilyProvider(kernel)


@pytest.fixture
def builders(kernel, families):
    return init(kernel, families)


@pytest.fixture
def rect_profile(kernel):
    """0.5 wide, 0.4 high cross-section centred on the origin."""
    return kernel.rectangle([0.5, 0.4])


@pytest.fixture
def roof_params():
    # 10 x 6 footprint with a 1:2 pitch gives a shed rise of 3 along X
    return {
        'roofSpanSize': [10, 6],
        'roofPitch': math.atan(0.5),
        'wallThickness': 0.5,
        'trimUnitSize': [0.2, 0.2],
    }
