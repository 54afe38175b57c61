"""Validators for style, URL, data-attribute and class-token input.

Each check is a pure function of its input and the render configuration.
Rejections are logged here at WARNING and reported to the caller as ``None``
(or ``False``/``""``), so the builder can drop the offending fragment and keep
rendering.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, Mapping, Protocol, runtime_checkable
from urllib.parse import urlsplit

from .models import DEFAULT_CONFIG, RenderConfig

logger = logging.getLogger(__name__)

_IMAGE_DATA = r"data:(?!image/(?:png|jpg|jpeg|gif|webp|svg\+xml))"

STYLE_BLOCKLIST = re.compile(
    r"javascript:|expression\(|@import|<script|behavior:|binding:|"
    r"include-source:|moz-binding:|vbscript:",
    re.IGNORECASE,
)
STYLE_XSS = re.compile(rf"{_IMAGE_DATA}|javascript:|vbscript:|on\w+\s*=", re.IGNORECASE)

URL_DANGEROUS = re.compile(
    rf"javascript:|{_IMAGE_DATA}|vbscript:|file:|about:|chrome:|chrome-extension:",
    re.IGNORECASE,
)
ALLOWED_SCHEMES = frozenset({"http", "https"})

DATA_VALUE_DANGEROUS = re.compile(
    r"javascript:|data:text/html|vbscript:|onload=|onerror=|onclick=|onmouse|"
    r"<script|<iframe|<object|<embed|document\.|window\.|eval\(|setTimeout|setInterval",
    re.IGNORECASE,
)

ALLOWED_EVENTS = frozenset(
    {
        "click", "dblclick", "mousedown", "mouseup", "mouseover", "mouseout", "mousemove",
        "keydown", "keyup", "keypress",
        "submit", "change", "input", "focus", "blur",
        "load", "unload", "resize", "scroll",
        "touchstart", "touchend", "touchmove",
        "dragstart", "dragend", "drop",
    }
)

CSS_TOKEN = re.compile(r"^[A-Za-z0-9_:/.\-\[\](),%#!]+$")
CSS_TOKEN_FORBIDDEN = re.compile(r"[;{}<>\"'`]|javascript:|data:|expression\(", re.IGNORECASE)
STIMULUS_METHOD = re.compile(r"^[a-zA-Z][a-zA-Z0-9\-_]*#[a-zA-Z][a-zA-Z0-9_]*$")

VALID_GRID_COLS = frozenset({str(n) for n in range(1, 13)} | {"none", "subgrid"})


@runtime_checkable
class SecurityPolicy(Protocol):
    """Contract the builder relies on for untrusted input."""

    def validate_style(self, raw: str) -> str | None: ...

    def sanitize_data_attributes(self, attributes: Mapping[str, Any]) -> Dict[str, str]: ...

    def validate_image_src(self, url: str, **options: Any) -> str | None: ...

    def validate_link_href(self, url: str, **options: Any) -> str | None: ...

    def validate_css_token(self, token: str) -> bool: ...


def validate_style(raw: str) -> str | None:
    """Return the stripped style string, or None when it carries a script vector."""

    if raw is None:
        return None
    style = str(raw).strip().rstrip(";").strip()
    if not style:
        return None
    if STYLE_BLOCKLIST.search(style):
        logger.warning("[security] Potentially dangerous style blocked: %r", style)
        return None
    if STYLE_XSS.search(style):
        logger.warning("[security] XSS pattern detected in style: %r", style)
        return None
    return style


def validate_css_token(token: str) -> bool:
    if not token or CSS_TOKEN_FORBIDDEN.search(token):
        return False
    return bool(CSS_TOKEN.match(token))


def safe_grid_cols_class(cols: object) -> str:
    """Return ``grid-cols-<cols>`` for 1..12, none or subgrid, else ``grid-cols-1``."""

    if cols is None:
        return "grid-cols-1"
    value = str(cols)
    if value in VALID_GRID_COLS:
        return f"grid-cols-{value}"
    logger.debug("Unsupported grid column count %r; using grid-cols-1", cols)
    return "grid-cols-1"


def validate_url(
    url: str | None,
    config: RenderConfig = DEFAULT_CONFIG,
    *,
    allow_relative: bool = True,
    require_approved_domains: bool = False,
    fallback: str | None = None,
) -> str | None:
    if not url or not str(url).strip():
        return None
    url = str(url).strip()
    if URL_DANGEROUS.search(url):
        logger.warning("[security] Blocked dangerous URL pattern: %r", url)
        return None

    try:
        parts = urlsplit(url)
    except ValueError:
        logger.warning("[security] Invalid URL format: %r", url)
        return None

    if not parts.scheme and not parts.netloc:
        if allow_relative:
            return url
        logger.warning("[security] Relative URLs not allowed: %r", url)
        return None

    if parts.scheme.lower() not in ALLOWED_SCHEMES:
        logger.warning("[security] Disallowed URL scheme %r in %r", parts.scheme, url)
        return None

    if require_approved_domains and not config.domain_approved(parts.hostname):
        logger.warning("[security] Unapproved external domain: %r", parts.hostname)
        return fallback
    return url


def _dasherize(key: object) -> str:
    return str(key).replace("_", "-")


def sanitize_data_key(key: object) -> str:
    name = _dasherize(key)
    if name.startswith("data-"):
        name = name[len("data-"):]
    name = re.sub(r"[^a-zA-Z0-9\-_]", "", name)
    if not re.match(r"^[a-zA-Z]", name):
        name = f"x-{name}"
    return f"data-{name}"


def sanitize_data_value(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (list, tuple, dict)):
        return json.dumps(value, ensure_ascii=False, sort_keys=isinstance(value, dict))
    text = str(value)
    if DATA_VALUE_DANGEROUS.search(text):
        logger.warning("[security] Potential XSS blocked in data attribute: %r", text)
        return ""
    return text


def sanitize_action_descriptor(action: object) -> str:
    """Keep ``event->controller#method`` descriptors with an allowed event."""

    if not action:
        return ""
    parts = str(action).split("->")
    if len(parts) != 2:
        return ""
    event, target = parts[0].strip(), parts[1].strip()
    if event not in ALLOWED_EVENTS or not STIMULUS_METHOD.match(target):
        logger.warning("[security] Rejected action descriptor: %r", action)
        return ""
    return f"{event}->{target}"


def sanitize_data_attributes(attributes: Mapping[str, Any]) -> Dict[str, str]:
    if not isinstance(attributes, Mapping):
        return {}
    sanitized: Dict[str, str] = {}
    for key, value in attributes.items():
        safe_key = sanitize_data_key(key)
        if str(key) == "action" or safe_key == "data-action":
            sanitized[safe_key] = sanitize_action_descriptor(value)
        else:
            sanitized[safe_key] = sanitize_data_value(value)
    return sanitized


class DefaultSecurityPolicy:
    """Policy backed by the module validators and a RenderConfig."""

    def __init__(self, config: RenderConfig = DEFAULT_CONFIG) -> None:
        self.config = config

    def validate_style(self, raw: str) -> str | None:
        return validate_style(raw)

    def sanitize_data_attributes(self, attributes: Mapping[str, Any]) -> Dict[str, str]:
        return sanitize_data_attributes(attributes)

    def validate_image_src(self, url: str, **options: Any) -> str | None:
        settings = {
            "allow_relative": True,
            "require_approved_domains": self.config.require_approved_image_domains,
            "fallback": self.config.image_placeholder,
        }
        settings.update(options)
        return validate_url(url, self.config, **settings)

    def validate_link_href(self, url: str, **options: Any) -> str | None:
        settings = {"allow_relative": True, "require_approved_domains": False, "fallback": "#"}
        settings.update(options)
        return validate_url(url, self.config, **settings)

    def validate_css_token(self, token: str) -> bool:
        return validate_css_token(token)


DEFAULT_SECURITY = DefaultSecurityPolicy(DEFAULT_CONFIG)


__all__ = [
    "ALLOWED_EVENTS",
    "DEFAULT_SECURITY",
    "DefaultSecurityPolicy",
    "SecurityPolicy",
    "safe_grid_cols_class",
    "sanitize_action_descriptor",
    "sanitize_data_attributes",
    "sanitize_data_key",
    "sanitize_data_value",
    "validate_css_token",
    "validate_style",
    "validate_url",
]
