import pytest

from paavomap.config import AppConfig, load_config


def test_defaults():
    cfg = AppConfig.default()
    assert cfg.simplify.max_size == 150_000_000
    assert cfg.render.legend_label == "Paavo!"
    assert cfg.render.title_suffix == "Election Results"
    assert cfg.sources.default_overlay_url == "https://image.ibb.co/nmsNfA/vayrynen.png"
    assert cfg.source_path is None


def test_load_partial_config_keeps_defaults(tmp_path):
    path = tmp_path / "paavomap.yaml"
    path.write_text(
        "simplify:\n  max_size: 1000\nrender:\n  legend_position: Left\n  title_size: 20\n",
        encoding="utf-8",
    )
    cfg = load_config(path)
    assert cfg.simplify.max_size == 1000
    assert cfg.simplify.tolerance == 0.01
    assert cfg.render.legend_position == "left"
    assert cfg.render.title_size == 20.0
    assert cfg.http.request_timeout_s == 120.0
    assert cfg.source_path == path.resolve()


def test_empty_config_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    cfg = load_config(path)
    assert cfg.render == AppConfig.default().render


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


@pytest.mark.parametrize(
    ("raw", "message"),
    (
        ({"simplify": {"max_size": "big"}}, "simplify.max_size"),
        ({"simplify": {"tolerance": 0}}, "simplify.tolerance"),
        ({"http": {"request_timeout_s": -1}}, "http.request_timeout_s"),
        ({"render": {"legend_position": "middle"}}, "render.legend_position"),
        ({"render": {"dpi": True}}, "render.dpi"),
        ({"sources": {"gadm3_url": "https://example.com/static.zip"}}, "iso3"),
        ({"sources": {"gadm2_member": "layer.shp"}}, "level"),
        ({"render": ["not", "a", "mapping"]}, "render"),
    ),
)
def test_invalid_values_are_rejected(raw, message):
    with pytest.raises(ValueError, match=message):
        AppConfig.from_mapping(raw)


def test_top_level_must_be_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Top-level config"):
        load_config(path)
