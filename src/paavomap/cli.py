"""CLI entrypoint for paavomap."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Sequence

from .config import AppConfig, load_config
from .models import LookupMethod
from .overlay import DEFAULT_IMAGE
from .util import setup_logging

LOGGER = logging.getLogger("paavomap.cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="paavomap",
        description="Render an election victory map with a meme overlay.",
    )
    parser.add_argument("--config", default=None, help="Path to YAML config.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logs.")
    parser.add_argument("--log-file", default=None, help="Also write logs to this file.")
    parser.add_argument(
        "--image",
        default=DEFAULT_IMAGE,
        help="Overlay image path, or 'default' for the stock picture.",
    )
    parser.add_argument(
        "--lookup",
        default=LookupMethod.GADM3.value,
        help="GADM2 or GADM3. Implied 'supplied' when --shape-file is given.",
    )
    parser.add_argument("--country", default="USA", help="Country name or ISO3 code.")
    parser.add_argument("--level", type=int, default=1, help="GADM administrative level.")
    parser.add_argument("--bg-col", default="green4", help="Fill colour for the regions.")
    parser.add_argument("--name", default=None, help="Name used in the plot title.")
    parser.add_argument(
        "--shape-file",
        default=None,
        help="Local vector file (shapefile, GeoJSON, GeoPackage) to use instead of GADM.",
    )
    parser.add_argument("--output", default="paavo.png", help="Where to save the figure.")
    parser.add_argument("--dpi", type=int, default=None, help="Override the configured DPI.")
    return parser


def _load_and_setup(args: argparse.Namespace) -> AppConfig:
    setup_logging(Path(args.log_file) if args.log_file else None, verbose=args.verbose)
    if args.config is None:
        return AppConfig.default()
    return load_config(args.config)


def _read_shape_file(path: str) -> Any:
    import geopandas as gpd

    LOGGER.info("Reading boundaries from %s", path)
    return gpd.read_file(path)


def _run(args: argparse.Namespace, cfg: AppConfig) -> int:
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    from .paavo import paavo

    shape = None
    lookup: LookupMethod | str = args.lookup
    if args.shape_file:
        shape = _read_shape_file(args.shape_file)
        lookup = LookupMethod.SUPPLIED

    fig = paavo(
        image=args.image,
        lookup=lookup,
        country=args.country,
        level=args.level,
        bg_col=args.bg_col,
        name=args.name,
        shape=shape,
        config=cfg,
    )
    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    try:
        fig.savefig(output, dpi=args.dpi or cfg.render.dpi, bbox_inches="tight")
    finally:
        plt.close(fig)
    LOGGER.info("Map written to %s", output)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        cfg = _load_and_setup(args)
        return _run(args, cfg)
    except Exception as exc:
        LOGGER.error("Map rendering failed: %s", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
