"""The Node builder unit, its chain methods and its serializer."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Tuple

from markupsafe import Markup

from .context import BuildContext, current_context
from .dom_model import AttrValue, valid_attribute_name, valid_tag
from .errors import BlockAlreadyAttached
from .host import ActionCallback
from .security import (
    ALLOWED_EVENTS,
    DEFAULT_SECURITY,
    SecurityPolicy,
    sanitize_action_descriptor,
)
from .slots import Renderable, Thunk, collect

logger = logging.getLogger(__name__)

Block = Callable[[], Any]

HANDLER_ID = re.compile(r"^[A-Za-z0-9_-]+$")

URL_KINDS = ("link", "image")

# Set on an exception once a render failure has been logged.
_LOGGED_MARKER = "_uitree_logged"


@dataclass(frozen=True)
class ActionBinding:
    event: str
    handler_id: str
    callback: ActionCallback = None


class Node(Renderable):
    """One markup element with mutable, chainable state.

    Chain methods mutate the node in place and return it, so identity is
    stable for the whole build. None of them accept a block: a block is given
    at construction time or through :func:`with_children`.

    Class tokens, styles and data attributes are validated when they are set.
    URLs and action bindings depend on the render configuration, so they are
    stored raw and resolved against the context that renders the node.
    """

    def __init__(
        self,
        tag: str,
        content: Any = None,
        attributes: Mapping[str, Any] | None = None,
        block: Block | None = None,
        *,
        security: SecurityPolicy | None = None,
    ) -> None:
        if not valid_tag(tag):
            raise ValueError(f"Invalid tag name: {tag!r}")
        super().__init__()
        if content is not None and block is not None:
            logger.debug("<%s> given both content and a block; the block wins", tag)
            content = None
        if isinstance(content, Renderable):
            # Rendered inside this node only.
            content.detach()
        self.tag = tag
        self.content = content
        self.block = block
        self.attributes: Dict[str, AttrValue] = {}
        self.actions: List[ActionBinding] = []
        self._classes: Dict[str, None] = {}
        self._urls: Dict[str, Tuple[str, str]] = {}
        self._action_counter = 0

        if security is None:
            ctx = current_context()
            security = ctx.security if ctx is not None else DEFAULT_SECURITY
        self._security = security

        if attributes:
            self.merge_attributes(attributes)

    def __repr__(self) -> str:
        return f"<Node {self.tag} #{self.index}>"

    def __html__(self) -> Markup:
        return self.render()

    def __str__(self) -> str:
        return str(self.render())

    @property
    def classes(self) -> tuple[str, ...]:
        return tuple(self._classes)

    @property
    def urls(self) -> Dict[str, str]:
        """Raw, not yet validated URL attributes."""

        return {name: raw for name, (_, raw) in self._urls.items()}

    # Chain methods

    def add_class(self, *names: str | Iterable[str] | None) -> "Node":
        for name in names:
            if name is None:
                continue
            if isinstance(name, str):
                tokens = name.split()
            else:
                tokens = [token for item in name if item for token in str(item).split()]
            for token in tokens:
                if not self._security.validate_css_token(token):
                    logger.warning("[security] Rejected CSS class %r on <%s>", token, self.tag)
                    continue
                self._classes.setdefault(token, None)
        return self

    def set_attribute(self, name: str, value: Any) -> "Node":
        if not valid_attribute_name(name):
            raise ValueError(f"Invalid attribute name: {name!r}")
        if name == "class":
            return self.add_class(value)
        if name == "style":
            return self.set_style(value) if value else self
        if name == "data" and isinstance(value, Mapping):
            return self.data(value)
        if name == "href":
            return self.href(value)
        if name == "src":
            return self.src(value)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            value = str(value)
        self.attributes[name] = value
        return self

    def merge_attributes(self, attributes: Mapping[str, Any]) -> "Node":
        for name, value in attributes.items():
            self.set_attribute(name, value)
        return self

    def set_style(self, raw: str) -> "Node":
        style = self._security.validate_style(raw)
        if style is None:
            logger.warning("[security] Dropped style on <%s>: %r", self.tag, raw)
            return self
        existing = self.attributes.get("style")
        self.attributes["style"] = f"{existing}; {style}" if existing else style
        return self

    def set_url(self, name: str, url: Any, *, kind: str = "link") -> "Node":
        """Store a URL attribute; it is validated when the node renders.

        ``kind="image"`` validates through the image rules (approved domains,
        placeholder fallback); ``"link"`` falls back to ``#``.
        """

        if kind not in URL_KINDS:
            raise ValueError(f"Unknown URL kind: {kind!r}")
        if not valid_attribute_name(name):
            raise ValueError(f"Invalid attribute name: {name!r}")
        self.attributes.pop(name, None)
        if url is None or url is False:
            self._urls.pop(name, None)
        else:
            self._urls[name] = (kind, str(url))
        return self

    def href(self, url: Any) -> "Node":
        return self.set_url("href", url)

    def src(self, url: Any) -> "Node":
        return self.set_url("src", url, kind="image" if self.tag.lower() == "img" else "link")

    def data(self, attributes: Mapping[str, Any] | str) -> "Node":
        if isinstance(attributes, str):
            if ":" not in attributes:
                return self
            key, value = attributes.split(":", 1)
            attributes = {key: value}
        for key, value in self._security.sanitize_data_attributes(attributes).items():
            self.attributes[key] = value
        return self

    def set_id(self, value: str) -> "Node":
        return self.set_attribute("id", value)

    def title(self, text: str) -> "Node":
        return self.set_attribute("title", text)

    def aria_label(self, text: str) -> "Node":
        return self.set_attribute("aria-label", text)

    def aria_hidden(self, hidden: bool = True) -> "Node":
        return self.set_attribute("aria-hidden", "true" if hidden else "false")

    def role(self, name: str) -> "Node":
        return self.set_attribute("role", name)

    def disabled(self, value: bool = True) -> "Node":
        if value:
            self.attributes["disabled"] = True
        else:
            self.attributes.pop("disabled", None)
        return self

    def controller(self, name: str) -> "Node":
        """Add ``name`` to ``data-controller`` unless it is already listed."""

        existing = str(self.attributes.get("data-controller") or "").split()
        if name not in existing:
            existing.append(name)
        self.attributes["data-controller"] = " ".join(existing)
        return self

    def action(self, descriptor: str) -> "Node":
        """Append an ``event->controller#method`` descriptor to ``data-action``."""

        safe = sanitize_action_descriptor(descriptor)
        if not safe:
            return self
        existing = str(self.attributes.get("data-action") or "").split()
        if safe not in existing:
            existing.append(safe)
        self.attributes["data-action"] = " ".join(existing)
        return self

    def bind_action(
        self,
        event: str,
        handler_id: str | None = None,
        callback: ActionCallback = None,
    ) -> "Node":
        """Bind a DOM event to a server-side handler; the core only emits its id.

        The ``data-*`` attributes use the action controller of the rendering
        context's configuration.
        """

        if event not in ALLOWED_EVENTS:
            logger.warning("[security] Unknown event %r on <%s>; binding dropped", event, self.tag)
            return self
        self._action_counter += 1
        handler_id = handler_id or f"action_{self.tag}_{self._action_counter}_{event}"
        if not HANDLER_ID.match(handler_id):
            logger.warning("[security] Invalid handler id %r on <%s>", handler_id, self.tag)
            return self
        self.actions.append(ActionBinding(event, handler_id, callback))
        return self

    # Serialization

    def _resolve_url(self, context: BuildContext, kind: str, raw: str) -> str:
        if kind == "image":
            safe = context.security.validate_image_src(raw)
            if not safe:
                logger.warning("[security] Invalid image source blocked on <%s>: %r", self.tag, raw)
                safe = context.config.image_placeholder
            return safe
        return context.security.validate_link_href(raw) or "#"

    def _merge_actions(self, merged: Dict[str, AttrValue], controller: str) -> None:
        controllers = str(merged.get("data-controller") or "").split()
        if controller not in controllers:
            controllers.append(controller)
        descriptors = str(merged.get("data-action") or "").split()
        for binding in self.actions:
            descriptor = f"{binding.event}->{controller}#handleAction"
            if descriptor not in descriptors:
                descriptors.append(descriptor)
        merged["data-controller"] = " ".join(controllers)
        merged["data-action"] = " ".join(descriptors)
        for binding in self.actions:
            merged[f"data-{controller}-action-{binding.handler_id}"] = binding.handler_id

    def _merged_attributes(self, context: BuildContext) -> Dict[str, AttrValue]:
        merged: Dict[str, AttrValue] = {}
        if self._classes:
            merged["class"] = " ".join(self._classes)
        for name, (kind, raw) in self._urls.items():
            merged[name] = self._resolve_url(context, kind, raw)
        merged.update(self.attributes)
        if self.actions:
            self._merge_actions(merged, context.config.action_controller)
        has_image = any(kind == "image" for kind, _ in self._urls.values())
        if has_image and context.config.feature_enabled("lazy_images"):
            merged.setdefault("loading", "lazy")
        return merged

    def _render_nested(self, parent: BuildContext, produce: Block) -> Markup:
        child = parent.child()
        with child.activate():
            collect(produce(), child)
        return child.flush()

    def render(self, context: BuildContext | None = None) -> Markup:
        """Serialize this node and its deferred children into trusted markup."""

        logger.debug(
            "Rendering <%s> block=%s content=%s",
            self.tag,
            self.block is not None,
            type(self.content).__name__,
        )
        try:
            parent = context if context is not None else current_context()
            if parent is None:
                parent = BuildContext()
            attributes = self._merged_attributes(parent)
            for binding in self.actions:
                parent.register_action(binding.handler_id, binding.callback)

            if self.block is not None:
                inner = self._render_nested(parent, self.block)
            elif isinstance(self.content, (Renderable, Thunk)):
                content = self.content
                inner = self._render_nested(parent, lambda: content)
            elif self.content is not None:
                inner = parent.escape(self.content)
            else:
                inner = Markup("")
            return parent.wrap_tag(self.tag, inner, attributes)
        except Exception as exc:
            if not getattr(exc, _LOGGED_MARKER, False):
                logger.error("Render failed for tag %r", self.tag, exc_info=True)
                setattr(exc, _LOGGED_MARKER, True)
            raise


def attribute_kwargs(attributes: Mapping[str, Any]) -> Dict[str, Any]:
    """Turn Python keyword names into attribute names (``class_`` -> ``class``, ``aria_label`` -> ``aria-label``)."""

    return {name.rstrip("_").replace("_", "-"): value for name, value in attributes.items()}


def create(
    tag: str,
    content: Any = None,
    attributes: Mapping[str, Any] | None = None,
    block: Block | None = None,
) -> Node:
    """Create a node and register it with the active build context, if any."""

    node = Node(tag, content, attributes, block)
    ctx = current_context()
    if ctx is not None:
        ctx.register(node)
    return node


def with_children(node: Node, children: Any) -> Node:
    """Attach deferred children to an existing node.

    ``children`` is either a callable block or the children themselves. Nodes
    passed directly are detached from whatever context registered them, so
    they render once, inside ``node``.
    """

    if node.block is not None:
        raise BlockAlreadyAttached(f"{node!r} already has a deferred block")
    if callable(children) and not isinstance(children, Renderable):
        block = children
    else:
        if isinstance(children, (str, Renderable)) or not isinstance(children, Iterable):
            items = [children]
        else:
            items = list(children)
        for item in items:
            if isinstance(item, Renderable):
                item.detach()

        def block() -> list:
            return items

    node.content = None
    node.block = block
    return node


__all__ = ["ActionBinding", "Block", "Node", "attribute_kwargs", "create", "with_children"]
