"""Element factories for common tags, built on :func:`uitree.node.create`."""

from __future__ import annotations

import logging
from typing import Any, Callable

from .context import current_context
from .node import Block, Node, attribute_kwargs, create

logger = logging.getLogger(__name__)

OVERRIDABLE_METHODS = frozenset({"PUT", "PATCH", "DELETE"})
CSRF_PARAM = "authenticity_token"


def text(content: Any, **attributes: Any) -> Node:
    return create("span", content, attribute_kwargs(attributes))


def label(
    content: Any = None,
    *,
    for_input: str | None = None,
    block: Block | None = None,
    **attributes: Any,
) -> Node:
    attrs = attribute_kwargs(attributes)
    if for_input:
        attrs["for"] = for_input
    return create("label", content, attrs, block)


def button(title: Any = None, *, block: Block | None = None, **attributes: Any) -> Node:
    attrs = attribute_kwargs(attributes)
    return create("button", title, attrs, block)


def link(
    title: Any = None,
    *,
    destination: str = "#",
    block: Block | None = None,
    **attributes: Any,
) -> Node:
    return create("a", title, attribute_kwargs(attributes), block).href(destination)


def image(src: str | None, alt: str = "", **attributes: Any) -> Node:
    """Create an ``img``.

    The src is validated when the image renders; a rejected one is replaced by
    the configured placeholder.
    """

    if not src:
        raise ValueError("image requires a src")
    attrs = attribute_kwargs(attributes)
    attrs["alt"] = alt
    return create("img", attributes=attrs).src(src)


def input_element(**attributes: Any) -> Node:
    return create("input", attributes=attribute_kwargs(attributes))


def textfield(placeholder: str = "", value: str = "", **attributes: Any) -> Node:
    attrs = attribute_kwargs(attributes)
    attrs.setdefault("type", "text")
    attrs["placeholder"] = placeholder
    attrs["value"] = value
    return create("input", attributes=attrs)


def textarea(content: Any = None, *, block: Block | None = None, **attributes: Any) -> Node:
    return create("textarea", content, attribute_kwargs(attributes), block)


def toggle(label_text: str, is_on: bool = False, **attributes: Any) -> Node:
    def contents() -> None:
        create("input", attributes={"type": "checkbox", "checked": bool(is_on)})
        create("span", label_text)

    return create("label", attributes=attribute_kwargs(attributes), block=contents)


def slider(
    value: float = 50,
    minimum: float = 0,
    maximum: float = 100,
    step: float = 1,
    **attributes: Any,
) -> Node:
    attrs = attribute_kwargs(attributes)
    attrs.update({"type": "range", "value": value, "min": minimum, "max": maximum, "step": step})
    return create("input", attributes=attrs)


def select(name: str | None = None, *, block: Block | None = None, **attributes: Any) -> Node:
    attrs = attribute_kwargs(attributes)
    if name:
        attrs["name"] = name
    return create("select", attributes=attrs, block=block)


def option(value: Any, label: Any = None, selected: bool = False, **attributes: Any) -> Node:
    attrs = attribute_kwargs(attributes)
    attrs["value"] = value
    if selected:
        attrs["selected"] = True
    return create("option", value if label is None else label, attrs)


def form(*, block: Block | None = None, **attributes: Any) -> Node:
    return create("form", attributes=attribute_kwargs(attributes), block=block)


def secure_form(
    action: str,
    method: str = "POST",
    *,
    block: Block | None = None,
    **attributes: Any,
) -> Node:
    """Create a form with CSRF, method-override and utf8 hidden fields.

    The CSRF token comes from the host of the context rendering the form, so
    it is looked up at render time rather than at construction.
    """

    verb = str(method).upper()
    attrs = {"method": "GET" if verb == "GET" else "POST"}
    attrs.update(attribute_kwargs(attributes))

    def fields() -> Any:
        ctx = current_context()
        if verb != "GET" and ctx is not None:
            token = ctx.csrf_token()
            if token:
                _hidden(CSRF_PARAM, token)
            else:
                logger.debug("No CSRF token available for form %r", action)
        if verb in OVERRIDABLE_METHODS:
            _hidden("_method", verb.lower())
        _hidden("utf8", "✓")
        return block() if block is not None else None

    return create("form", attributes=attrs, block=fields).set_url("action", action)


def list_view(items: Any = None, *, block: Block | None = None, **attributes: Any) -> Node:
    """Create a ``ul``; plain ``items`` become one ``li`` each."""

    if items is not None and block is None:
        values = list(items)

        def block() -> list:
            return [list_item(value) for value in values]

    return create("ul", attributes=attribute_kwargs(attributes), block=block)


def list_item(content: Any = None, *, block: Block | None = None, **attributes: Any) -> Node:
    return create("li", content, attribute_kwargs(attributes), block)


def scroll_view(*, block: Block | None = None, **attributes: Any) -> Node:
    attrs = attribute_kwargs(attributes)
    extra = attrs.pop("class", None)
    return create("div", attributes=attrs, block=block).add_class("overflow-auto", extra)


def br(**attributes: Any) -> Node:
    return create("br", attributes=attribute_kwargs(attributes))


def _hidden(name: str, value: str) -> Node:
    return create(
        "input",
        attributes={"type": "hidden", "name": name, "value": value, "autocomplete": "off"},
    )


def _container(tag: str) -> Callable[..., Node]:
    def factory(content: Any = None, *, block: Block | None = None, **attributes: Any) -> Node:
        return create(tag, content, attribute_kwargs(attributes), block)

    factory.__name__ = factory.__qualname__ = tag
    factory.__doc__ = f"Create a <{tag}> element from content or a deferred block."
    return factory


div = _container("div")
span = _container("span")
p = _container("p")
section = _container("section")
article = _container("article")
header = _container("header")
footer = _container("footer")
main = _container("main")
nav = _container("nav")
h1 = _container("h1")
h2 = _container("h2")
h3 = _container("h3")
h4 = _container("h4")
h5 = _container("h5")
h6 = _container("h6")


__all__ = [
    "article",
    "br",
    "button",
    "div",
    "footer",
    "form",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "header",
    "image",
    "input_element",
    "label",
    "link",
    "list_item",
    "list_view",
    "main",
    "nav",
    "option",
    "p",
    "scroll_view",
    "secure_form",
    "section",
    "select",
    "slider",
    "span",
    "text",
    "textarea",
    "textfield",
    "toggle",
]
