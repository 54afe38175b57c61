"""Jinja2 integration: render nodes from templates with a template-aware host."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

from jinja2 import BaseLoader, Environment, StrictUndefined, select_autoescape
from markupsafe import Markup

from . import elements, layout
from .context import render
from .host import DefaultHost
from .models import DEFAULT_CONFIG, RenderConfig
from .node import create, with_children
from .security import SecurityPolicy

LAYOUT_FACTORIES = (
    "vstack",
    "hstack",
    "zstack",
    "stack",
    "grid",
    "spacer",
    "divider",
    "vstack_collection",
    "hstack_collection",
    "grid_collection",
)

UI_FACTORIES = {
    "create": create,
    "with_children": with_children,
    **{name: getattr(elements, name) for name in elements.__all__},
    **{name: getattr(layout, name) for name in LAYOUT_FACTORIES},
}


class EnvironmentHost(DefaultHost):
    """Host that reads the CSRF token from the environment's globals."""

    def __init__(self, env: Environment) -> None:
        super().__init__()
        self.env = env

    def csrf_token(self) -> str | None:
        token = self.env.globals.get("csrf_token")
        if callable(token):
            token = token()
        return str(token) if token else None


def ui_environment(
    loader: BaseLoader | None = None,
    *,
    config: RenderConfig | None = None,
    security: SecurityPolicy | None = None,
    **options: Any,
) -> Environment:
    """Create an autoescaping Jinja environment exposing the builders as ``ui``.

    ``{{ node }}`` renders through the default host; ``{{ node | render }}``
    renders through the environment host, so forms pick up ``csrf_token``.
    """

    options.setdefault("autoescape", select_autoescape(["html", "jinja"], default_for_string=True))
    options.setdefault("undefined", StrictUndefined)
    options.setdefault("trim_blocks", True)
    options.setdefault("lstrip_blocks", True)
    env = Environment(loader=loader, **options)
    host = EnvironmentHost(env)
    settings = config or DEFAULT_CONFIG

    def render_filter(node: Any) -> Markup:
        return render(node, config=settings, host=host, security=security)

    env.globals["ui"] = SimpleNamespace(**UI_FACTORIES)
    env.globals["ui_host"] = host
    env.filters["render"] = render_filter
    return env


__all__ = ["EnvironmentHost", "UI_FACTORIES", "ui_environment"]
