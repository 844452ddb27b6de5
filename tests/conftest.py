import pytest

# Unit square on the ground plane.  Seen from +Y (right-handed, Y-up) the
# first ordering turns anticlockwise, the second clockwise.
CCW_SQUARE = [(0.0, 0.0, 0.0), (0.0, 0.0, 1.0), (1.0, 0.0, 1.0), (1.0, 0.0, 0.0)]
CW_SQUARE = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 0.0, 1.0), (0.0, 0.0, 1.0)]


@pytest.fixture
def ccw_square():
    return list(CCW_SQUARE)


@pytest.fixture
def cw_square():
    return list(CW_SQUARE)
