"""Pydantic models for render configuration."""

from __future__ import annotations

from pathlib import Path
from typing import FrozenSet

import yaml
from pydantic import BaseModel, ConfigDict, Field

APPROVED_DOMAINS = frozenset(
    {
        "picsum.photos",
        "via.placeholder.com",
        "placehold.co",
        "placeholder.com",
        "cdn.jsdelivr.net",
        "unpkg.com",
        "cdnjs.cloudflare.com",
        "images.unsplash.com",
        "i.imgur.com",
        "gravatar.com",
        "tailwindui.com",
        "tailwindcss.com",
    }
)


class RenderConfig(BaseModel):
    """Boot-time settings shared read-only by every render call."""

    max_depth: int = Field(
        50,
        ge=1,
        alias="maxDepth",
        description="Ceiling on nested build contexts (one per deferred block).",
    )
    approved_domains: FrozenSet[str] = Field(
        default=APPROVED_DOMAINS,
        alias="approvedDomains",
        description="Hosts allowed for external images; subdomains match too.",
    )
    require_approved_image_domains: bool = Field(
        True,
        alias="requireApprovedImageDomains",
        description="Reject absolute image URLs whose host is not approved.",
    )
    image_placeholder: str = Field(
        "/images/placeholder.png",
        alias="imagePlaceholder",
        description="Image src used when the requested one is rejected.",
    )
    action_controller: str = Field(
        "ui-component",
        alias="actionController",
        pattern=r"^[a-z][a-z0-9-]*$",
        description="Controller name emitted in data-controller for bound actions.",
    )
    features: FrozenSet[str] = Field(
        default=frozenset({"lazy_images"}),
        description="Enabled feature toggles (e.g., lazy_images).",
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def domain_approved(self, host: str | None) -> bool:
        """Return True for an approved host or any subdomain of one."""

        if not host:
            return False
        host = host.lower()
        return any(
            host == domain or host.endswith(f".{domain}")
            for domain in self.approved_domains
        )

    def feature_enabled(self, name: str) -> bool:
        return name in self.features


DEFAULT_CONFIG = RenderConfig()


def load_config(path: Path) -> RenderConfig:
    """Load a RenderConfig from YAML, falling back to defaults for a missing file."""

    if not path.exists():
        return DEFAULT_CONFIG
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return RenderConfig.model_validate(data)


__all__ = ["APPROVED_DOMAINS", "DEFAULT_CONFIG", "RenderConfig", "load_config"]
