"""Election victory map with a meme overlay, in one call."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import requests

from .boundaries import resolve_shape
from .config import AppConfig
from .countries import normalize_country
from .models import LookupMethod
from .overlay import DEFAULT_IMAGE, load_overlay
from .render import render_map
from .simplify import maybe_simplify


_LOGGER = logging.getLogger("paavomap.paavo")


def paavo(
    image: str | Path = DEFAULT_IMAGE,
    lookup: LookupMethod | str = LookupMethod.GADM3,
    country: Any = "USA",
    level: int = 1,
    bg_col: str = "green4",
    name: str | None = None,
    *,
    shape: Any = None,
    config: AppConfig | None = None,
    session: requests.Session | None = None,
) -> Any:
    """Produce an election map overlaid with a picture and return the figure.

    With a GADM lookup `country` is a country name or ISO3 code and `level` the
    GADM subdivision depth. With any other lookup token the boundaries come
    from `shape`, or from `country` itself when it is not a string. The title
    reads "<name> Election Results"; `name` defaults to the country name found
    in the boundary data.

    Example:
        fig = paavo(lookup="GADM3", country="Sweden", level=2, name="Swedish Federal")
        fig.savefig("sweden.png")
    """
    cfg = config if config is not None else AppConfig.default()
    method = LookupMethod.parse(lookup)

    identifier: str | None = None
    supplied = None
    if method.is_remote:
        if not isinstance(country, str):
            raise TypeError("country must be a name or ISO3 code for GADM lookups")
        identifier = normalize_country(country)
    else:
        supplied = shape if shape is not None else country
        if isinstance(supplied, str):
            raise ValueError(
                f"Lookup '{lookup}' uses a caller-supplied geometry; pass it as `shape`"
            )

    resolved = resolve_shape(
        identifier,
        method,
        level,
        cfg=cfg,
        supplied=supplied,
        name=name,
        session=session,
    )
    admin_shape = maybe_simplify(resolved.shape, cfg.simplify)
    overlay = load_overlay(image, cfg=cfg, session=session)
    _LOGGER.info("Rendering map for %s", resolved.name or identifier or "supplied geometry")
    return render_map(admin_shape, overlay, bg_col=bg_col, name=resolved.name, cfg=cfg.render)
