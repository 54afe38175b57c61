"""Build contexts collect the renderables produced while a deferred block runs."""

from __future__ import annotations

import logging
import weakref
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Iterable, Iterator, Mapping

from markupsafe import Markup

from .errors import DepthLimitExceeded
from .host import ActionCallback, DefaultHost, HostCapabilities
from .models import DEFAULT_CONFIG, RenderConfig
from .security import DefaultSecurityPolicy, SecurityPolicy
from .slots import Renderable

logger = logging.getLogger(__name__)

_active: ContextVar["BuildContext | None"] = ContextVar("uitree_active_context", default=None)


def current_context() -> "BuildContext | None":
    """Return the context whose block is currently executing, if any."""

    return _active.get()


class BuildContext:
    """Per-block scope that registers renderables and drains them into markup.

    A root context (depth 0) is created per top-level render call; each nested
    deferred block gets a child one level deeper. Configuration, host and
    security policy are inherited from the parent unless given explicitly.
    """

    def __init__(
        self,
        *,
        config: RenderConfig | None = None,
        host: HostCapabilities | None = None,
        security: SecurityPolicy | None = None,
        parent: "BuildContext | None" = None,
    ) -> None:
        self.parent = parent
        self.depth = parent.depth + 1 if parent is not None else 0
        if config is None:
            config = parent.config if parent is not None else DEFAULT_CONFIG
        if host is None:
            host = parent.host if parent is not None else DefaultHost()
        if security is None:
            security = parent.security if parent is not None else DefaultSecurityPolicy(config)
        self.config = config
        self.host: HostCapabilities = host
        self.security: SecurityPolicy = security
        self._pending: Dict[int, Renderable] = {}

    def __len__(self) -> int:
        return len(self._pending)

    def __contains__(self, item: object) -> bool:
        return isinstance(item, Renderable) and self._pending.get(item.index) is item

    def __repr__(self) -> str:
        return f"BuildContext(depth={self.depth}, pending={len(self._pending)})"

    def child(self) -> "BuildContext":
        """Create the context for a nested deferred block, enforcing ``max_depth``."""

        depth = self.depth + 1
        if depth > self.config.max_depth:
            logger.error(
                "[security] Maximum nesting depth (%d) exceeded at depth %d",
                self.config.max_depth,
                depth,
            )
            raise DepthLimitExceeded(depth, self.config.max_depth)
        return BuildContext(parent=self)

    @contextmanager
    def activate(self) -> Iterator["BuildContext"]:
        """Make this the active context for nodes created inside the ``with`` body."""

        token = _active.set(self)
        try:
            yield self
        finally:
            _active.reset(token)

    def register(self, item: Renderable) -> None:
        if item.index in self._pending:
            logger.debug("Skipping duplicate registration of %r", item)
            return
        owner = item.owner
        if owner is not None and owner is not self:
            owner.release(item)
        logger.debug("Registering %r at depth %d", item, self.depth)
        self._pending[item.index] = item
        item._owner = weakref.ref(self)

    def release(self, item: Renderable) -> None:
        """Drop ``item`` without rendering it."""

        if self._pending.pop(item.index, None) is not None:
            item._owner = None

    def flush(self) -> Markup:
        """Render pending items in registration order and clear them."""

        logger.debug("Flushing %d items at depth %d", len(self._pending), self.depth)
        parts = []
        while self._pending:
            index = next(iter(self._pending))
            item = self._pending.pop(index)
            item._owner = None
            parts.append(item.render(self))
        return self.host.safe_join(parts)

    # Host forwarding. The surface is explicit: nothing else is delegated.

    def escape(self, text: object) -> Markup:
        return self.host.escape(text)

    def safe_join(self, parts: Iterable[str]) -> Markup:
        return self.host.safe_join(parts)

    def wrap_tag(self, tag: str, inner: str, attributes: Mapping[str, Any]) -> Markup:
        return self.host.wrap_tag(tag, inner, attributes)

    def register_action(self, handler_id: str, callback: ActionCallback) -> None:
        self.host.resolve_action_registry(handler_id, callback)

    def csrf_token(self) -> str | None:
        return self.host.csrf_token()


def render(
    node: Renderable,
    *,
    config: RenderConfig | None = None,
    host: HostCapabilities | None = None,
    security: SecurityPolicy | None = None,
) -> Markup:
    """Render ``node`` through a fresh root context and return trusted markup."""

    root = BuildContext(config=config, host=host, security=security)
    return node.render(root)


__all__ = ["BuildContext", "current_context", "render"]
