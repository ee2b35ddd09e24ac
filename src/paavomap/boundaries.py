"""Administrative boundary loading: GADM downloads or caller-supplied geometry."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import requests

from .config import AppConfig
from .download import build_session, fetch_to_tempfile
from .models import BoundarySource, CountryLookupError, LookupMethod, ResolvedShape
from .util import first_existing_column


_LOGGER = logging.getLogger("paavomap.boundaries")

# GADM 2.8 level-0 layers carry the country name in NAME_ENGLI instead of NAME_0.
NAME_COLUMNS = ("NAME_0", "NAME_ENGLI", "COUNTRY")


def resolve_shape(
    identifier: str | None,
    method: LookupMethod,
    level: int,
    *,
    cfg: AppConfig,
    supplied: Any = None,
    name: str | None = None,
    session: requests.Session | None = None,
) -> ResolvedShape:
    """Resolve the boundary geometry for one country.

    Remote methods download the GADM archive for `identifier` at `level`.
    `LookupMethod.SUPPLIED` uses `supplied` directly and never touches the
    network. When `name` is None it is derived from the shape's country-name
    column.
    """
    source: BoundarySource | None = None
    if method.is_remote:
        if not identifier:
            raise CountryLookupError("No ISO3 code to build a boundary download URL from")
        source = BoundarySource.for_method(method, identifier, level, cfg.sources)
        shape = download_boundaries(source, cfg=cfg, session=session)
    else:
        if supplied is None:
            raise ValueError("Lookup method SUPPLIED needs a geometry object")
        _LOGGER.info("using caller-supplied geometry")
        shape = coerce_shape(supplied)

    if name is None:
        name = derive_display_name(shape)
    return ResolvedShape(shape=shape, name=name, source=source)


def download_boundaries(
    source: BoundarySource,
    *,
    cfg: AppConfig,
    session: requests.Session | None = None,
) -> Any:
    """Fetch one GADM archive and read the requested layer from it."""
    http = session if session is not None else build_session(cfg.http)
    with fetch_to_tempfile(source.url, session=http, timeout_s=cfg.http.request_timeout_s) as archive:
        return read_layer(archive, source.member)


def read_layer(archive: Path, member: str) -> Any:
    gpd = _require_geopandas()
    shape = gpd.read_file(f"zip://{archive.as_posix()}!{member}")
    _LOGGER.info("Loaded %d boundary records from %s", len(shape), member)
    return shape


def coerce_shape(value: Any) -> Any:
    """Turn a geometry-like value into a GeoDataFrame.

    Accepts GeoDataFrames (returned as-is), GeoSeries, shapely geometries or
    sequences of them, DataFrames with a `geometry` column and anything
    exposing `__geo_interface__`. Raises TypeError for everything else.
    """
    gpd = _require_geopandas()
    if isinstance(value, gpd.GeoDataFrame):
        return value

    _LOGGER.info("coercing %s to GeoDataFrame", type(value).__name__)
    import pandas as pd
    from shapely.geometry import shape as geometry_from_mapping
    from shapely.geometry.base import BaseGeometry

    if isinstance(value, gpd.GeoSeries):
        return gpd.GeoDataFrame(geometry=value)
    if isinstance(value, BaseGeometry):
        return gpd.GeoDataFrame(geometry=[value])
    if isinstance(value, pd.DataFrame):
        if "geometry" not in value.columns:
            raise TypeError("Cannot coerce a DataFrame without a 'geometry' column")
        return gpd.GeoDataFrame(value, geometry="geometry")
    if isinstance(value, (list, tuple)) and value and all(isinstance(item, BaseGeometry) for item in value):
        return gpd.GeoDataFrame(geometry=list(value))

    geo_interface = getattr(value, "__geo_interface__", None)
    if geo_interface is None and isinstance(value, dict) and "type" in value:
        geo_interface = value
    if isinstance(geo_interface, dict):
        kind = geo_interface.get("type")
        if kind == "FeatureCollection":
            return gpd.GeoDataFrame.from_features(geo_interface)
        if kind == "Feature":
            return gpd.GeoDataFrame.from_features([geo_interface])
        return gpd.GeoDataFrame(geometry=[geometry_from_mapping(geo_interface)])

    raise TypeError(f"Cannot coerce object of type {type(value).__name__} to a GeoDataFrame")


def derive_display_name(shape: Any) -> str | None:
    """First unique value of the country-name column, or None."""
    col = first_existing_column(shape.columns, NAME_COLUMNS)
    if col is None:
        return None
    for value in shape[col].dropna().unique():
        text = str(value).strip()
        if text:
            return text
    return None


def _require_geopandas() -> Any:
    try:
        import geopandas as gpd
    except ImportError as exc:  # pragma: no cover
        raise RuntimeError("geopandas is required for boundary loading") from exc
    return gpd
