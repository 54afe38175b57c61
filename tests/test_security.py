import logging

import pytest

from uitree.models import RenderConfig
from uitree.security import (
    DefaultSecurityPolicy,
    SecurityPolicy,
    safe_grid_cols_class,
    sanitize_action_descriptor,
    sanitize_data_attributes,
    validate_css_token,
    validate_style,
    validate_url,
)


@pytest.mark.parametrize(
    "raw",
    [
        "background:url(javascript:alert(1))",
        "width: expression(alert(1))",
        "@import url(evil.css)",
        "behavior: url(x.htc)",
        "-moz-binding: url(x.xml)",
        "background: url(data:text/html;base64,AAAA)",
        "color: red; onload=alert(1)",
    ],
)
def test_dangerous_styles_are_rejected(raw: str, caplog):
    with caplog.at_level(logging.WARNING):
        assert validate_style(raw) is None
    assert "[security]" in caplog.text


def test_safe_styles_are_stripped():
    assert validate_style("  color: red;  ") == "color: red"
    assert validate_style("background: url(data:image/png;base64,AAAA)") is not None
    assert validate_style("") is None
    assert validate_style(None) is None


def test_urls():
    assert validate_url("https://example.com/a") == "https://example.com/a"
    assert validate_url("/images/a.png") == "/images/a.png"
    assert validate_url("/images/a.png", allow_relative=False) is None
    assert validate_url("javascript:alert(1)") is None
    assert validate_url("ftp://example.com/file") is None
    assert validate_url("   ") is None


def test_image_sources_follow_approved_domains():
    policy = DefaultSecurityPolicy()
    assert policy.validate_image_src("https://images.unsplash.com/p.jpg") == "https://images.unsplash.com/p.jpg"
    assert policy.validate_image_src("https://cdn.images.unsplash.com/p.jpg") == "https://cdn.images.unsplash.com/p.jpg"
    assert policy.validate_image_src("https://evil.example/cat.png") == "/images/placeholder.png"
    assert policy.validate_image_src("javascript:alert(1)") is None


def test_image_domains_come_from_config():
    config = RenderConfig(approved_domains={"cdn.example.com"}, image_placeholder="/blank.gif")
    policy = DefaultSecurityPolicy(config)
    assert policy.validate_image_src("https://cdn.example.com/a.png") == "https://cdn.example.com/a.png"
    assert policy.validate_image_src("https://images.unsplash.com/a.png") == "/blank.gif"

    relaxed = DefaultSecurityPolicy(RenderConfig(require_approved_image_domains=False))
    assert relaxed.validate_image_src("https://evil.example/cat.png") == "https://evil.example/cat.png"


def test_link_hrefs():
    policy = DefaultSecurityPolicy()
    assert isinstance(policy, SecurityPolicy)
    assert policy.validate_link_href("https://anywhere.example/") == "https://anywhere.example/"
    assert policy.validate_link_href("vbscript:msgbox(1)") is None


def test_data_attributes():
    sanitized = sanitize_data_attributes(
        {
            "user_id": 7,
            "data-role": "admin",
            "1st": "x",
            "payload": "<script>x</script>",
            "items": [1, 2],
            "open": True,
            "action": "hover->menu#open",
        }
    )
    assert sanitized == {
        "data-user-id": "7",
        "data-role": "admin",
        "data-x-1st": "x",
        "data-payload": "",
        "data-items": "[1, 2]",
        "data-open": "true",
        "data-action": "",
    }
    assert sanitize_data_attributes("not a mapping") == {}


def test_action_descriptors():
    assert sanitize_action_descriptor("click->menu#toggle") == "click->menu#toggle"
    assert sanitize_action_descriptor("click->menu") == ""
    assert sanitize_action_descriptor("click") == ""
    assert sanitize_action_descriptor(None) == ""


@pytest.mark.parametrize(
    "token, expected",
    [
        ("sm:grid-cols-2", True),
        ("w-1/2", True),
        ("auto-rows-[200px]", True),
        ("a;b", False),
        ("<x>", False),
        ("bg-[url(javascript:alert(1))]", False),
        ("", False),
    ],
)
def test_css_tokens(token: str, expected: bool):
    assert validate_css_token(token) is expected


def test_grid_cols_class():
    assert safe_grid_cols_class(12) == "grid-cols-12"
    assert safe_grid_cols_class("subgrid") == "grid-cols-subgrid"
    assert safe_grid_cols_class(13) == "grid-cols-1"
    assert safe_grid_cols_class(None) == "grid-cols-1"
