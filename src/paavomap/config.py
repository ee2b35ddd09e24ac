"""Typed configuration loader for `paavomap.yaml`."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, cast

import yaml


_EMPTY: Mapping[str, Any] = {}


def _mapping(value: Any, field_name: str) -> Mapping[str, Any]:
    if value is None:
        return _EMPTY
    if not isinstance(value, Mapping):
        raise ValueError(f"Expected mapping for '{field_name}'")
    return cast(Mapping[str, Any], value)


def _str(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Expected non-empty string for '{field_name}'")
    return value.strip()


def _int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Expected integer for '{field_name}'")
    return value


def _float(value: Any, field_name: str) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    raise ValueError(f"Expected float for '{field_name}'")


def _template(value: Any, field_name: str, placeholders: tuple[str, ...]) -> str:
    template = _str(value, field_name)
    for placeholder in placeholders:
        if "{" + placeholder + "}" not in template:
            raise ValueError(f"'{field_name}' must contain the {{{placeholder}}} placeholder")
    return template


@dataclass(frozen=True, slots=True)
class SourcesConfig:
    gadm2_url: str = "https://biogeo.ucdavis.edu/data/gadm2.8/shp/{iso3}_adm_shp.zip"
    gadm2_member: str = "{iso3}_adm{level}.shp"
    gadm3_url: str = "https://biogeo.ucdavis.edu/data/gadm3.6/shp/gadm36_{iso3}_shp.zip"
    gadm3_member: str = "gadm36_{iso3}_{level}.shp"
    default_overlay_url: str = "https://image.ibb.co/nmsNfA/vayrynen.png"

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> SourcesConfig:
        defaults = cls()
        return cls(
            gadm2_url=_template(raw.get("gadm2_url", defaults.gadm2_url), "sources.gadm2_url", ("iso3",)),
            gadm2_member=_template(
                raw.get("gadm2_member", defaults.gadm2_member), "sources.gadm2_member", ("level",)
            ),
            gadm3_url=_template(raw.get("gadm3_url", defaults.gadm3_url), "sources.gadm3_url", ("iso3",)),
            gadm3_member=_template(
                raw.get("gadm3_member", defaults.gadm3_member), "sources.gadm3_member", ("level",)
            ),
            default_overlay_url=_str(
                raw.get("default_overlay_url", defaults.default_overlay_url),
                "sources.default_overlay_url",
            ),
        )


@dataclass(frozen=True, slots=True)
class HttpConfig:
    request_timeout_s: float = 120.0
    user_agent: str = "paavomap/0.1"

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> HttpConfig:
        defaults = cls()
        timeout = _float(raw.get("request_timeout_s", defaults.request_timeout_s), "http.request_timeout_s")
        if timeout <= 0:
            raise ValueError("http.request_timeout_s must be > 0")
        return cls(
            request_timeout_s=timeout,
            user_agent=_str(raw.get("user_agent", defaults.user_agent), "http.user_agent"),
        )


@dataclass(frozen=True, slots=True)
class SimplifyConfig:
    max_size: int = 150_000_000
    tolerance: float = 0.01

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> SimplifyConfig:
        defaults = cls()
        max_size = _int(raw.get("max_size", defaults.max_size), "simplify.max_size")
        tolerance = _float(raw.get("tolerance", defaults.tolerance), "simplify.tolerance")
        if max_size < 0:
            raise ValueError("simplify.max_size must be >= 0")
        if tolerance <= 0:
            raise ValueError("simplify.tolerance must be > 0")
        return cls(max_size=max_size, tolerance=tolerance)


@dataclass(frozen=True, slots=True)
class RenderConfig:
    figure_width_in: float = 10.0
    figure_height_in: float = 10.0
    dpi: int = 100
    outline_color: str = "white"
    legend_label: str = "Paavo!"
    title_suffix: str = "Election Results"
    title_size: float = 35.0
    legend_size: float = 15.0
    legend_position: str = "right"

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> RenderConfig:
        defaults = cls()
        position = _str(raw.get("legend_position", defaults.legend_position), "render.legend_position")
        position = position.casefold()
        allowed = {"right", "left", "top", "bottom"}
        if position not in allowed:
            raise ValueError("render.legend_position must be one of: " + ", ".join(sorted(allowed)))
        dpi = _int(raw.get("dpi", defaults.dpi), "render.dpi")
        if dpi <= 0:
            raise ValueError("render.dpi must be > 0")
        return cls(
            figure_width_in=_float(raw.get("figure_width_in", defaults.figure_width_in), "render.figure_width_in"),
            figure_height_in=_float(
                raw.get("figure_height_in", defaults.figure_height_in), "render.figure_height_in"
            ),
            dpi=dpi,
            outline_color=_str(raw.get("outline_color", defaults.outline_color), "render.outline_color"),
            legend_label=_str(raw.get("legend_label", defaults.legend_label), "render.legend_label"),
            title_suffix=_str(raw.get("title_suffix", defaults.title_suffix), "render.title_suffix"),
            title_size=_float(raw.get("title_size", defaults.title_size), "render.title_size"),
            legend_size=_float(raw.get("legend_size", defaults.legend_size), "render.legend_size"),
            legend_position=position,
        )


@dataclass(frozen=True, slots=True)
class AppConfig:
    source_path: Path | None = None
    sources: SourcesConfig = field(default_factory=SourcesConfig)
    http: HttpConfig = field(default_factory=HttpConfig)
    simplify: SimplifyConfig = field(default_factory=SimplifyConfig)
    render: RenderConfig = field(default_factory=RenderConfig)

    @classmethod
    def default(cls) -> AppConfig:
        return cls()

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any], source_path: Path | None = None) -> AppConfig:
        return cls(
            source_path=source_path.resolve() if source_path is not None else None,
            sources=SourcesConfig.from_mapping(_mapping(raw.get("sources"), "sources")),
            http=HttpConfig.from_mapping(_mapping(raw.get("http"), "http")),
            simplify=SimplifyConfig.from_mapping(_mapping(raw.get("simplify"), "simplify")),
            render=RenderConfig.from_mapping(_mapping(raw.get("render"), "render")),
        )


def load_config(path: str | Path) -> AppConfig:
    """Load and validate the YAML config file into typed settings."""
    cfg_path = Path(path).resolve()
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config file not found: {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh)
    if raw is None:
        return AppConfig(source_path=cfg_path)
    if not isinstance(raw, Mapping):
        raise ValueError("Top-level config must be a YAML mapping")
    return AppConfig.from_mapping(cast(Mapping[str, Any], raw), cfg_path)
