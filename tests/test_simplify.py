import math

import geopandas as gpd
import pytest
from shapely.geometry import Polygon

from paavomap import simplify
from paavomap.config import SimplifyConfig
from paavomap.simplify import estimate_size, maybe_simplify


def _circle(n_points, radius=1.0):
    return Polygon(
        [
            (radius * math.cos(2 * math.pi * i / n_points), radius * math.sin(2 * math.pi * i / n_points))
            for i in range(n_points)
        ]
    )


@pytest.fixture
def detailed():
    return gpd.GeoDataFrame({"NAME_0": ["Round"]}, geometry=[_circle(2000)])


def test_estimate_size_counts_geometry_bytes(detailed):
    coarse = gpd.GeoDataFrame({"NAME_0": ["Round"]}, geometry=[_circle(10)])
    # 16 bytes per 2D coordinate in WKB
    assert estimate_size(detailed) - estimate_size(coarse) >= 16 * (2000 - 10)


def test_small_shape_is_untouched(monkeypatch, detailed):
    calls = []
    monkeypatch.setattr(simplify, "simplify_shape", lambda shape, tol: calls.append(tol))

    result = maybe_simplify(detailed, SimplifyConfig())

    assert result is detailed
    assert calls == []


def test_shape_exactly_at_threshold_is_untouched(monkeypatch, detailed):
    calls = []
    monkeypatch.setattr(simplify, "simplify_shape", lambda shape, tol: calls.append(tol))

    result = maybe_simplify(detailed, SimplifyConfig(max_size=estimate_size(detailed)))

    assert result is detailed
    assert calls == []


def test_oversized_shape_is_simplified_once(monkeypatch, detailed, caplog):
    calls = []
    real = simplify.simplify_shape

    def counting(shape, tol):
        calls.append(tol)
        return real(shape, tol)

    monkeypatch.setattr(simplify, "simplify_shape", counting)

    with caplog.at_level("WARNING", logger="paavomap.simplify"):
        result = maybe_simplify(detailed, SimplifyConfig(max_size=1000, tolerance=0.05))

    assert calls == [0.05]
    assert "large object size of map" in caplog.text
    assert len(result.geometry.iloc[0].exterior.coords) < len(detailed.geometry.iloc[0].exterior.coords)
    assert list(result["NAME_0"]) == ["Round"]
    # input frame is left alone
    assert len(detailed.geometry.iloc[0].exterior.coords) == 2001
