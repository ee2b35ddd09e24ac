"""Size check and vertex reduction for oversized boundary layers."""

from __future__ import annotations

import logging
from typing import Any

from .config import SimplifyConfig


_LOGGER = logging.getLogger("paavomap.simplify")


def estimate_size(shape: Any) -> int:
    """Approximate in-memory footprint in bytes.

    Attribute columns are measured with pandas' deep memory usage, geometries
    by the length of their WKB encoding.
    """
    attributes = shape.drop(columns=shape.geometry.name)
    attribute_bytes = int(attributes.memory_usage(deep=True).sum())
    geometry_bytes = int(sum(len(wkb) for wkb in shape.geometry.to_wkb() if wkb is not None))
    return attribute_bytes + geometry_bytes


def simplify_shape(shape: Any, tolerance: float) -> Any:
    simplified = shape.copy()
    simplified[shape.geometry.name] = shape.geometry.simplify(tolerance, preserve_topology=True)
    return simplified


def maybe_simplify(shape: Any, cfg: SimplifyConfig) -> Any:
    """Simplify `shape` once when it is larger than `cfg.max_size`."""
    size = estimate_size(shape)
    if size <= cfg.max_size:
        _LOGGER.debug("Boundary size %d within limit %d", size, cfg.max_size)
        return shape
    _LOGGER.warning(
        "large object size of map (%d > %d) - attempting to simplify with tolerance %s",
        size,
        cfg.max_size,
        cfg.tolerance,
    )
    return simplify_shape(shape, cfg.tolerance)
