"""Figure composition: filled boundaries, title, legend and the overlay raster."""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from .config import RenderConfig


FILL_COLUMN = "fill"
BBOX_SCALE = np.array([0.995, 0.995, 1.005, 1.005])

# Numbered X11 variants that matplotlib does not know by name.
_X11_NUMBERED_COLOURS = {
    "green1": "#00FF00",
    "green2": "#00EE00",
    "green3": "#00CD00",
    "green4": "#008B00",
    "red1": "#FF0000",
    "red2": "#EE0000",
    "red3": "#CD0000",
    "red4": "#8B0000",
    "blue1": "#0000FF",
    "blue2": "#0000EE",
    "blue3": "#0000CD",
    "blue4": "#00008B",
    "orange1": "#FFA500",
    "orange2": "#EE9A00",
    "orange3": "#CD8500",
    "orange4": "#8B5A00",
    "gold1": "#FFD700",
    "gold2": "#EEC900",
    "gold3": "#CDAD00",
    "gold4": "#8B7500",
}

# legend position -> (loc, bbox_to_anchor), legend placed outside the map axes
_LEGEND_PLACEMENT = {
    "right": ("center left", (1.0, 0.5)),
    "left": ("center right", (0.0, 0.5)),
    "top": ("lower center", (0.5, 1.0)),
    "bottom": ("upper center", (0.5, 0.0)),
}

_LOGGER = logging.getLogger("paavomap.render")


def expanded_bbox(shape: Any) -> np.ndarray:
    """Bounds as (xmin, ymin, xmax, ymax), scaled componentwise by BBOX_SCALE."""
    return np.asarray(shape.total_bounds, dtype=float) * BBOX_SCALE


def tag_fill(shape: Any, label: str) -> Any:
    tagged = shape.copy()
    tagged[FILL_COLUMN] = label
    return tagged


def title_text(name: str | None, suffix: str) -> str:
    if name is None or not str(name).strip():
        return suffix
    return f"{name} {suffix}"


def resolve_colour(colour: str) -> str:
    """Map numbered X11 names to hex; validate everything else with matplotlib."""
    from matplotlib.colors import to_hex

    key = colour.strip().casefold()
    resolved = _X11_NUMBERED_COLOURS.get(key, colour.strip())
    return to_hex(resolved, keep_alpha=True)


def render_map(
    shape: Any,
    overlay: np.ndarray,
    *,
    bg_col: str,
    name: str | None,
    cfg: RenderConfig,
) -> Any:
    """Compose the election map figure and return it without showing or saving."""
    plt, colors = _require_matplotlib()
    fill_colour = resolve_colour(bg_col)
    outline_colour = resolve_colour(cfg.outline_color)
    bbox = expanded_bbox(shape)
    tagged = tag_fill(shape, cfg.legend_label)
    loc, anchor = _LEGEND_PLACEMENT[cfg.legend_position]

    fig, ax = plt.subplots(figsize=(cfg.figure_width_in, cfg.figure_height_in), dpi=cfg.dpi)
    tagged.plot(
        ax=ax,
        column=FILL_COLUMN,
        categorical=True,
        cmap=colors.ListedColormap([fill_colour]),
        edgecolor=outline_colour,
        legend=True,
        legend_kwds={
            "loc": loc,
            "bbox_to_anchor": anchor,
            "fontsize": cfg.legend_size,
            "frameon": False,
        },
    )
    _apply_map_theme(fig=fig, ax=ax)
    ax.set_title(title_text(name, cfg.title_suffix), fontsize=cfg.title_size)

    aspect = ax.get_aspect()
    # 2-D overlays are greyscale pixels, not data to colour-map
    greyscale = {"cmap": "gray", "vmin": 0.0, "vmax": 1.0} if overlay.ndim == 2 else {}
    ax.imshow(
        overlay,
        extent=(bbox[0], bbox[2], bbox[1], bbox[3]),
        aspect=aspect,
        interpolation="bilinear",
        zorder=3,
        **greyscale,
    )
    _LOGGER.debug("Overlay %s drawn at extent %s", overlay.shape, bbox.tolist())
    return fig


def _apply_map_theme(*, fig: Any, ax: Any) -> None:
    fig.patch.set_facecolor("white")
    ax.set_facecolor("white")
    ax.grid(False)
    ax.set_axis_off()


def _require_matplotlib() -> tuple[Any, Any]:
    try:
        import matplotlib.colors as colors
        import matplotlib.pyplot as plt
    except ImportError as exc:  # pragma: no cover
        raise RuntimeError("matplotlib is required for map rendering") from exc
    return (plt, colors)
