"""Overlay raster loading."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import requests
from PIL import Image

from .config import AppConfig
from .download import build_session, fetch_to_tempfile


DEFAULT_IMAGE = "default"

_LOGGER = logging.getLogger("paavomap.overlay")


def load_overlay(
    image: str | Path,
    *,
    cfg: AppConfig,
    session: requests.Session | None = None,
) -> np.ndarray:
    """Decode the overlay image into a float array with values in [0, 1].

    `"default"` downloads the stock Paavo picture; anything else is a local
    file path.
    """
    if str(image) == DEFAULT_IMAGE:
        http = session if session is not None else build_session(cfg.http)
        with fetch_to_tempfile(
            cfg.sources.default_overlay_url,
            session=http,
            timeout_s=cfg.http.request_timeout_s,
        ) as path:
            return decode_image(path)

    _LOGGER.info("finding overlay image %s", image)
    return decode_image(Path(image))


def decode_image(path: Path) -> np.ndarray:
    """Pixels as floats in [0, 1]: (H, W) for greyscale, (H, W, 3|4) otherwise.

    Greyscale with alpha is expanded to RGBA since matplotlib cannot draw
    two-channel images.
    """
    if not path.exists():
        raise FileNotFoundError(f"Overlay image not found: {path}")
    with Image.open(path) as img:
        img.load()
        if img.mode == "LA":
            grey_alpha = np.asarray(img)
            grey, alpha = grey_alpha[..., 0], grey_alpha[..., 1]
            pixels = np.dstack((grey, grey, grey, alpha))
            scale = 255.0
        elif img.mode in {"L", "RGB", "RGBA"}:
            pixels = np.asarray(img)
            scale = 255.0
        elif img.mode in {"I;16", "I;16B", "I;16L", "I"}:
            pixels = np.asarray(img)
            scale = 65535.0
        else:
            pixels = np.asarray(img.convert("RGBA"))
            scale = 255.0
    return pixels.astype(np.float64) / scale
