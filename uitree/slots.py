"""Slot content variants and the dispatch that collects them into a context."""

from __future__ import annotations

import itertools
import weakref
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from functools import singledispatch
from typing import TYPE_CHECKING, Any, Callable

from markupsafe import Markup, escape

if TYPE_CHECKING:  # pragma: no cover
    from .context import BuildContext

_arena = itertools.count(1)


class Renderable(ABC):
    """Anything a build context can hold: carries an arena index and an owner."""

    def __init__(self) -> None:
        self.index = next(_arena)
        self._owner: weakref.ReferenceType[BuildContext] | None = None

    @property
    def owner(self) -> "BuildContext | None":
        return self._owner() if self._owner is not None else None

    def detach(self) -> None:
        """Release this item from the context it is registered in, if any."""

        owner = self.owner
        if owner is not None:
            owner.release(self)

    @abstractmethod
    def render(self, context: "BuildContext | None" = None) -> Markup:
        """Serialize into trusted markup using ``context`` for host operations."""


class Text(Renderable):
    """Literal text; escaped unless it is already Markup."""

    def __init__(self, value: str) -> None:
        super().__init__()
        self.value = value

    def render(self, context: "BuildContext | None" = None) -> Markup:
        if context is not None:
            return context.escape(self.value)
        return escape(self.value)

    def __repr__(self) -> str:
        return f"Text({self.value!r})"


@dataclass(frozen=True)
class Thunk:
    """Deferred slot content, resolved when its context collects it."""

    func: Callable[[], Any]

    def __call__(self) -> Any:
        return self.func()


@singledispatch
def collect(value: Any, context: "BuildContext") -> None:
    """Register whatever a block produced into ``context``."""

    if callable(value):
        collect(value(), context)
    elif isinstance(value, Iterable):
        for item in value:
            collect(item, context)
    else:
        context.register(Text(str(value)))


@collect.register(type(None))
def _collect_none(value: None, context: "BuildContext") -> None:
    return None


@collect.register(str)
def _collect_text(value: str, context: "BuildContext") -> None:
    if value:
        context.register(Text(value))


@collect.register(Renderable)
def _collect_renderable(value: Renderable, context: "BuildContext") -> None:
    context.register(value)


@collect.register(Thunk)
def _collect_thunk(value: Thunk, context: "BuildContext") -> None:
    collect(value(), context)


__all__ = ["Renderable", "Text", "Thunk", "collect"]
