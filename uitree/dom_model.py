"""Markup primitives for attribute rendering and tag wrapping."""

from __future__ import annotations

import re
from typing import Iterable, Mapping

from markupsafe import Markup, escape

from .tokens import VOID_ELEMENTS

AttrValue = str | bool | int | float | None

TAG_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9-]*$")
ATTRIBUTE_NAME = re.compile(r"^[A-Za-z_:][A-Za-z0-9_.:-]*$")


def valid_tag(tag: str) -> bool:
    return bool(TAG_NAME.match(tag or ""))


def valid_attribute_name(name: str) -> bool:
    return bool(ATTRIBUTE_NAME.match(name or ""))


def render_attrs(attrs: Mapping[str, AttrValue]) -> Markup:
    """Render attributes in insertion order.

    ``True`` renders a bare boolean attribute; ``False`` and ``None`` drop it.
    """

    parts = []
    for name, value in attrs.items():
        if value is None or value is False:
            continue
        if not valid_attribute_name(name):
            raise ValueError(f"Invalid attribute name: {name!r}")
        if value is True:
            parts.append(Markup(name))
        else:
            parts.append(Markup('{}="{}"').format(Markup(name), value))
    if not parts:
        return Markup("")
    return Markup(" ") + Markup(" ").join(parts)


def wrap_tag(tag: str, inner: str, attrs: Mapping[str, AttrValue]) -> Markup:
    """Wrap ``inner`` in ``tag``; plain strings are escaped, Markup is kept as is."""

    if not valid_tag(tag):
        raise ValueError(f"Invalid tag name: {tag!r}")
    rendered_attrs = render_attrs(attrs)
    if tag.lower() in VOID_ELEMENTS:
        return Markup(f"<{tag}{rendered_attrs}/>")
    return Markup(f"<{tag}{rendered_attrs}>{escape(inner)}</{tag}>")


def safe_join(parts: Iterable[str]) -> Markup:
    """Join fragments, escaping any that are not already Markup."""

    return Markup("").join(escape(part) for part in parts)


__all__ = [
    "AttrValue",
    "render_attrs",
    "safe_join",
    "valid_attribute_name",
    "valid_tag",
    "wrap_tag",
]
