import pytest
from markupsafe import Markup

from uitree.dom_model import render_attrs, safe_join, valid_tag, wrap_tag


def test_render_attrs_escapes_and_handles_booleans():
    assert render_attrs({"a": 'x"y', "b": True, "c": False, "d": None}) == ' a="x&#34;y" b'
    assert render_attrs({}) == ""


def test_render_attrs_rejects_bad_names():
    with pytest.raises(ValueError):
        render_attrs({"bad name": "x"})


def test_wrap_tag():
    assert wrap_tag("br", "", {}) == "<br/>"
    assert wrap_tag("p", "<i>", {}) == "<p>&lt;i&gt;</p>"
    assert wrap_tag("p", Markup("<i>x</i>"), {"id": "a"}) == '<p id="a"><i>x</i></p>'


def test_tag_names():
    assert valid_tag("my-element")
    assert not valid_tag("scr ipt")
    assert not valid_tag("")
    with pytest.raises(ValueError):
        wrap_tag("<div>", "", {})


def test_safe_join_escapes_plain_strings():
    joined = safe_join(["<a>", Markup("<b>")])
    assert joined == "&lt;a&gt;<b>"
    assert isinstance(joined, Markup)
