import io
import zipfile
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import geopandas as gpd
import matplotlib.pyplot as plt
import numpy as np
import pytest
from PIL import Image
from shapely.geometry import Polygon


class FakeResponse:
    def __init__(self, url, payload, status_code=200):
        self.url = url
        self.payload = payload
        self.status_code = status_code
        self.closed = False

    def raise_for_status(self):
        if self.status_code >= 400:
            import requests

            raise requests.HTTPError(f"{self.status_code} for {self.url}", response=None)

    def iter_content(self, chunk_size=1):
        for start in range(0, len(self.payload), chunk_size):
            yield self.payload[start : start + chunk_size]

    def close(self):
        self.closed = True


class FakeSession:
    """Stands in for requests.Session; serves payloads keyed by URL."""

    def __init__(self, payloads=None, status_code=200):
        self.payloads = dict(payloads or {})
        self.status_code = status_code
        self.calls = []

    def get(self, url, stream=False, timeout=None):
        self.calls.append({"url": url, "stream": stream, "timeout": timeout})
        payload = self.payloads.get(url, b"")
        return FakeResponse(url, payload, status_code=self.status_code)


@pytest.fixture
def make_session():
    def _make_session(payloads=None, status_code=200):
        return FakeSession(payloads, status_code=status_code)

    return _make_session


@pytest.fixture
def regions():
    return gpd.GeoDataFrame(
        {
            "NAME_0": ["Sweden", "Sweden"],
            "NAME_1": ["Norrbotten", "Skane"],
        },
        geometry=[
            Polygon([(18, 65), (24, 65), (24, 69), (18, 69)]),
            Polygon([(12, 55), (14.5, 55), (14.5, 56.5), (12, 56.5)]),
        ],
        crs="EPSG:4326",
    )


def png_bytes(mode="RGBA", size=(4, 3), colour=(255, 0, 0, 255)):
    buffer = io.BytesIO()
    Image.new(mode, size, colour).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def overlay_png(tmp_path):
    path = tmp_path / "overlay.png"
    path.write_bytes(png_bytes())
    return path


def shapefile_zip_bytes(gdf, tmp_dir: Path, stem: str) -> bytes:
    """Write `gdf` as a shapefile and return it zipped, files at archive root."""
    out_dir = tmp_dir / stem
    out_dir.mkdir()
    gdf.to_file(out_dir / f"{stem}.shp")
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for part in sorted(out_dir.iterdir()):
            zf.write(part, arcname=part.name)
    return buffer.getvalue()


@pytest.fixture
def overlay_array():
    return np.ones((3, 4, 4))


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")
