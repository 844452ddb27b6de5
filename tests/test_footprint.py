import json

import numpy as np
import pytest

from floorplan.errors import InvalidPolygon
from floorplan.footprint import (
    as_points, ensure_ccw, is_ccw, load_footprint, plane_basis,
    project_to_plane, regular_polygon, signed_area, validity_issues,
)


def test_as_points_shapes():
    assert as_points([]).shape == (0, 3)
    assert as_points([(1, 2, 3)]).dtype == np.float64
    with pytest.raises(InvalidPolygon):
        as_points([(1, 2)])
    with pytest.raises(InvalidPolygon):
        as_points([(0, 0, float('inf'))])
    with pytest.raises(InvalidPolygon):
        as_points([("a", "b", "c")])


def test_plane_basis_default_is_z_then_x():
    forward, right = plane_basis()
    assert np.allclose(forward, [0, 0, 1])
    assert np.allclose(right, [1, 0, 0])
    assert np.allclose(np.cross(forward, right), [0, 1, 0])


def test_plane_basis_z_up_falls_back_to_x():
    forward, right = plane_basis((0, 0, 5))
    assert np.allclose(forward, [1, 0, 0])
    assert np.allclose(np.cross(forward, right), [0, 0, 1])


def test_plane_basis_rejects_zero_up():
    with pytest.raises(ValueError):
        plane_basis((0, 0, 0))


def test_project_to_plane():
    coords = project_to_plane([(3, 7, 5)])
    assert coords.tolist() == [[5.0, 3.0]]


def test_signed_area_sign_follows_winding(ccw_square, cw_square):
    assert signed_area(ccw_square) == pytest.approx(1.0)
    assert signed_area(cw_square) == pytest.approx(-1.0)
    assert is_ccw(ccw_square)
    assert not is_ccw(cw_square)


def test_signed_area_flips_with_up(ccw_square):
    assert signed_area(ccw_square, up=(0, -1, 0)) == pytest.approx(-1.0)


def test_signed_area_short_footprint_is_zero():
    assert signed_area([(0, 0, 0), (1, 0, 0)]) == 0.0


def test_ensure_ccw_reverses_and_keeps_first(ccw_square, cw_square):
    fixed = ensure_ccw(cw_square)
    assert fixed.tolist() == [list(p) for p in ccw_square]
    assert ensure_ccw(ccw_square).tolist() == [list(p) for p in ccw_square]


def test_regular_polygon_four_corners():
    pts = regular_polygon(4, 10.0)
    assert np.allclose(pts, [(0, 0, 10), (10, 0, 0), (0, 0, -10), (-10, 0, 0)])
    assert is_ccw(pts)


@pytest.mark.parametrize("count", [3, 5, 7, 30])
def test_regular_polygon_on_circle(count):
    center = np.array([2.0, 1.0, -3.0])
    pts = regular_polygon(count, 4.0, center=center)
    assert pts.shape == (count, 3)
    assert np.allclose(np.linalg.norm(pts - center, axis=1), 4.0)
    assert np.allclose(pts[:, 1], 1.0)
    assert is_ccw(pts)


def test_regular_polygon_other_up_axis():
    pts = regular_polygon(6, 2.0, up=(1, 0, 0))
    assert np.allclose(pts[:, 0], 0.0)
    assert is_ccw(pts, up=(1, 0, 0))


def test_regular_polygon_rejects_bad_input():
    with pytest.raises(InvalidPolygon):
        regular_polygon(2, 10.0)
    with pytest.raises(ValueError):
        regular_polygon(4, 0.0)


def test_validity_issues_clean_square(ccw_square):
    assert validity_issues(ccw_square) == []


def test_validity_issues_reports_problems():
    bowtie = [(0, 0, 0), (1, 0, 1), (1, 0, 0), (0, 0, 1)]
    assert any("not simple" in issue for issue in validity_issues(bowtie))

    duplicate = [(0, 0, 0), (0, 0, 0), (1, 0, 1), (1, 0, 0)]
    assert any("coincide" in issue for issue in validity_issues(duplicate))

    line = [(0, 0, 0), (1, 0, 0), (2, 0, 0)]
    assert any("zero area" in issue for issue in validity_issues(line))

    assert validity_issues([(0, 0)]) != []
    assert "at least 3" in validity_issues([(0, 0, 0)])[0]


def test_load_footprint(tmp_path, ccw_square):
    path = tmp_path / "plan.json"
    path.write_text(json.dumps({"corners": ccw_square, "height": 12.5, "name": "Shed"}))
    data = load_footprint(path)
    assert data.corners == [tuple(p) for p in ccw_square]
    assert data.height == 12.5
    assert data.up == (0.0, 1.0, 0.0)
    assert data.name == "Shed"


def test_load_footprint_defaults(tmp_path):
    path = tmp_path / "plan.json"
    path.write_text(json.dumps({"corners": [[0, 0, 0], [1, 0, 0], [1, 0, 1]]}))
    data = load_footprint(path)
    assert data.height is None
    assert data.name == "Building"


@pytest.mark.parametrize("text", [
    "not json",
    json.dumps({"height": 3}),
    json.dumps({"corners": [[0, 0], [1, 0], [1, 1]]}),
])
def test_load_footprint_rejects_malformed(tmp_path, text):
    path = tmp_path / "plan.json"
    path.write_text(text)
    with pytest.raises(InvalidPolygon):
        load_footprint(path)


def test_load_footprint_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_footprint(tmp_path / "missing.json")
