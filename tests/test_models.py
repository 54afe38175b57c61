from pathlib import Path

import pytest
from pydantic import ValidationError

from uitree.models import DEFAULT_CONFIG, RenderConfig, load_config


def test_missing_config_uses_defaults(tmp_path: Path):
    assert load_config(tmp_path / "missing.yaml") is DEFAULT_CONFIG


def test_empty_config_file_uses_defaults(tmp_path: Path):
    path = tmp_path / "uitree.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == DEFAULT_CONFIG


def test_load_config_reads_yaml(tmp_path: Path):
    path = tmp_path / "uitree.yaml"
    path.write_text(
        "maxDepth: 5\n"
        "approvedDomains:\n"
        "  - cdn.example.com\n"
        "imagePlaceholder: /blank.gif\n"
        "features: []\n",
        encoding="utf-8",
    )
    config = load_config(path)

    assert config.max_depth == 5
    assert config.image_placeholder == "/blank.gif"
    assert config.domain_approved("img.cdn.example.com")
    assert not config.domain_approved("example.com")
    assert not config.feature_enabled("lazy_images")


def test_defaults():
    assert DEFAULT_CONFIG.max_depth == 50
    assert DEFAULT_CONFIG.action_controller == "ui-component"
    assert DEFAULT_CONFIG.feature_enabled("lazy_images")
    assert DEFAULT_CONFIG.domain_approved("Images.Unsplash.com")
    assert not DEFAULT_CONFIG.domain_approved(None)


def test_invalid_values_are_rejected(tmp_path: Path):
    path = tmp_path / "uitree.yaml"
    path.write_text("maxDepth: 0\n", encoding="utf-8")
    with pytest.raises(ValidationError):
        load_config(path)
    with pytest.raises(ValidationError):
        RenderConfig(action_controller="Bad Name")


def test_config_is_frozen():
    config = RenderConfig(max_depth=3)
    with pytest.raises(ValidationError):
        config.max_depth = 4
