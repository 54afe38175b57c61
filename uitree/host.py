"""Host capabilities a build context may forward to."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Protocol, runtime_checkable

from markupsafe import Markup, escape

from . import dom_model

logger = logging.getLogger(__name__)

ActionCallback = Optional[Callable[..., Any]]


@runtime_checkable
class HostCapabilities(Protocol):
    """The complete set of operations a build context forwards to its environment."""

    def escape(self, text: object) -> Markup: ...

    def safe_join(self, parts: Iterable[str]) -> Markup: ...

    def wrap_tag(self, tag: str, inner: str, attributes: Mapping[str, Any]) -> Markup: ...

    def resolve_action_registry(self, handler_id: str, callback: ActionCallback) -> None: ...

    def csrf_token(self) -> str | None: ...


class DefaultHost:
    """Stand-alone host: MarkupSafe escaping and an in-memory action registry."""

    def __init__(self, *, csrf_token: str | None = None) -> None:
        self._csrf_token = csrf_token
        self.actions: Dict[str, ActionCallback] = {}

    def escape(self, text: object) -> Markup:
        return escape(text)

    def safe_join(self, parts: Iterable[str]) -> Markup:
        return dom_model.safe_join(parts)

    def wrap_tag(self, tag: str, inner: str, attributes: Mapping[str, Any]) -> Markup:
        return dom_model.wrap_tag(tag, inner, attributes)

    def resolve_action_registry(self, handler_id: str, callback: ActionCallback) -> None:
        logger.debug("Registering action handler %s", handler_id)
        self.actions[handler_id] = callback

    def csrf_token(self) -> str | None:
        return self._csrf_token


__all__ = ["ActionCallback", "DefaultHost", "HostCapabilities"]
