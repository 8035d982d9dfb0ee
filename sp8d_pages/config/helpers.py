"""Utility helpers shared by the SP8D configuration loader."""

from __future__ import annotations

import typing as typ
from urllib.parse import urlsplit

from ..sanitizer import ReplacementRule
from .models import SanitizerConfig, SiteConfigError, SitemapConfig

SITEMAP_CHANGEFREQS = frozenset(
    {"always", "hourly", "daily", "weekly", "monthly", "yearly", "never"}
)


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _require_bool(value: object, *, field: str) -> bool:
    if not isinstance(value, bool):
        msg = f"'{field}' must be true or false, got {value!r}."
        raise SiteConfigError(msg)
    return value


def _normalize_site_url(value: object) -> str:
    """Validate an absolute site URL and drop any trailing slash."""
    text = _optional_str(value)
    if not text:
        msg = "'site_url' must be a non-empty URL."
        raise SiteConfigError(msg)
    parts = urlsplit(text)
    if parts.scheme not in {"http", "https"} or not parts.netloc:
        msg = f"'site_url' must be an absolute http(s) URL, got {text!r}."
        raise SiteConfigError(msg)
    return text.rstrip("/")


def _build_sitemap_config(payload: typ.Mapping[str, typ.Any] | None) -> SitemapConfig:
    """Build a SitemapConfig from the ``sitemap`` mapping, applying defaults."""
    base = SitemapConfig()
    if not payload:
        return base
    changefreq = str(payload.get("changefreq", base.changefreq)).lower()
    if changefreq not in SITEMAP_CHANGEFREQS:
        msg = f"Unsupported sitemap changefreq {changefreq!r}."
        raise SiteConfigError(msg)
    try:
        priority = float(payload.get("priority", base.priority))
    except (TypeError, ValueError) as exc:
        msg = f"Sitemap priority must be a number, got {payload.get('priority')!r}."
        raise SiteConfigError(msg) from exc
    if not 0.0 <= priority <= 1.0:
        msg = f"Sitemap priority must be between 0.0 and 1.0, got {priority}."
        raise SiteConfigError(msg)
    return SitemapConfig(
        changefreq=changefreq,
        priority=priority,
        generate_robots_txt=_require_bool(
            payload.get("generate_robots_txt", base.generate_robots_txt),
            field="sitemap.generate_robots_txt",
        ),
    )


def _build_rule(payload: object, index: int) -> ReplacementRule:
    match payload:
        case str():
            pattern, replacement, regex = payload, "", False
        case dict():
            pattern = payload.get("pattern")
            replacement = payload.get("replacement", "") or ""
            regex = payload.get("regex", False)
        case _:
            msg = f"Sanitizer rule #{index} must be a string or a mapping."
            raise SiteConfigError(msg)
    if not isinstance(pattern, str) or not pattern:
        msg = f"Sanitizer rule #{index} needs a non-empty 'pattern'."
        raise SiteConfigError(msg)
    try:
        return ReplacementRule(
            pattern=pattern,
            replacement=str(replacement),
            regex=_require_bool(regex, field=f"sanitizer.rules[{index}].regex"),
        )
    except ValueError as exc:
        msg = f"Sanitizer rule #{index} is invalid: {exc}"
        raise SiteConfigError(msg) from exc


def _build_sanitizer_config(
    payload: typ.Mapping[str, typ.Any] | None,
) -> SanitizerConfig:
    """Build a SanitizerConfig, keeping the default rule when none are listed."""
    base = SanitizerConfig()
    if not payload:
        return base
    suffix = _optional_str(payload.get("suffix")) or base.suffix
    if not suffix.startswith("."):
        msg = f"Sanitizer suffix must start with '.', got {suffix!r}."
        raise SiteConfigError(msg)
    rules_raw = payload.get("rules")
    if rules_raw is None:
        rules = base.rules
    elif isinstance(rules_raw, list):
        rules = tuple(_build_rule(item, index) for index, item in enumerate(rules_raw))
    else:
        msg = "Sanitizer 'rules' must be a list."
        raise SiteConfigError(msg)
    return SanitizerConfig(suffix=suffix, rules=rules)


__all__ = [
    "SITEMAP_CHANGEFREQS",
    "_build_sanitizer_config",
    "_build_sitemap_config",
    "_normalize_site_url",
    "_optional_str",
    "_require_bool",
]
