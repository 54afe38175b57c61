"""Exceptions raised by the builder and serializer."""

from __future__ import annotations


class UITreeError(Exception):
    """Base class for structural errors raised while building or rendering."""


class DepthLimitExceeded(UITreeError):
    """Raised before creating a build context deeper than the configured ceiling."""

    def __init__(self, depth: int, max_depth: int) -> None:
        super().__init__(
            f"Maximum nesting depth ({max_depth}) exceeded at depth {depth}. "
            "This may indicate runaway recursion or hostile input."
        )
        self.depth = depth
        self.max_depth = max_depth


class BlockAlreadyAttached(UITreeError):
    """Raised when a second deferred block is attached to the same node."""


__all__ = ["BlockAlreadyAttached", "DepthLimitExceeded", "UITreeError"]
