"""Declarative UI-tree builder that renders safe HTML markup."""

from .context import BuildContext, current_context, render
from .errors import BlockAlreadyAttached, DepthLimitExceeded, UITreeError
from .host import DefaultHost, HostCapabilities
from .layout import (
    AutoFit,
    divider,
    grid,
    grid_collection,
    hstack,
    hstack_collection,
    spacer,
    stack,
    vstack,
    vstack_collection,
    zstack,
)
from .models import DEFAULT_CONFIG, RenderConfig, load_config
from .node import ActionBinding, Node, create, with_children
from .security import DefaultSecurityPolicy, SecurityPolicy
from .slots import Text, Thunk

__all__ = [
    "ActionBinding",
    "AutoFit",
    "BlockAlreadyAttached",
    "BuildContext",
    "DEFAULT_CONFIG",
    "DefaultHost",
    "DefaultSecurityPolicy",
    "DepthLimitExceeded",
    "HostCapabilities",
    "Node",
    "RenderConfig",
    "SecurityPolicy",
    "Text",
    "Thunk",
    "UITreeError",
    "create",
    "current_context",
    "divider",
    "grid",
    "grid_collection",
    "hstack",
    "hstack_collection",
    "load_config",
    "render",
    "spacer",
    "stack",
    "vstack",
    "vstack_collection",
    "with_children",
    "zstack",
]
