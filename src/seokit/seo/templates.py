"""
SEO template loading, resolution and rendering.

Templates are user-authored strings with {{variable}} placeholders, keyed by
content type, with optional per-language overrides:

    templates:
      default: {title: "{{title}} | {{siteName}}", description: "{{excerpt}}"}
      blog: {...}
    language_overrides:
      zh:
        blog: {title: "..."}
        default: {...}
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from seokit.domain.errors import ConfigError
from seokit.domain.schema import CJK_LANGUAGES
from seokit.utils.text import ELLIPSIS, collapse_whitespace, truncate_at_word

DATA_DIR = Path(__file__).resolve().parents[1] / "data"

_PLACEHOLDER_RE = re.compile(r"\{\{\s*([A-Za-z0-9_.-]+)\s*\}\}")
_LEFTOVER_RE = re.compile(r"\{\{[^}]*\}\}")

# Hangul syllables, hiragana, katakana, CJK unified ideographs
_CJK_CHAR_RE = re.compile(r"[\u4e00-\u9fa5\u3040-\u309f\u30a0-\u30ff\uac00-\ud7af]")


class TemplateSet(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    title: Optional[str] = None
    description: Optional[str] = None
    og_title: Optional[str] = None
    og_description: Optional[str] = None
    twitter_title: Optional[str] = None
    twitter_description: Optional[str] = None


class SeoTemplates(BaseModel):
    model_config = ConfigDict(frozen=True)

    templates: dict[str, TemplateSet] = Field(default_factory=dict)
    language_overrides: dict[str, dict[str, TemplateSet]] = Field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class CharacterLimits:
    title_max: int
    description_max: int


@dataclass(frozen=True, slots=True)
class ResolvedTemplate:
    title: str
    description: str
    og_title: str
    og_description: str
    twitter_title: str
    twitter_description: str
    limits: CharacterLimits


def load_templates(path: str | Path | None = None) -> SeoTemplates:
    """Load SEO templates from YAML (the bundled set when path is None)."""
    path = Path(path) if path is not None else DATA_DIR / "seo-templates.yaml"
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except OSError as e:
        raise ConfigError(f"Cannot read SEO templates: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    try:
        templates = SeoTemplates.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid SEO templates in {path}: {e}") from e

    if "default" not in templates.templates:
        raise ConfigError(f"SEO templates in {path} need a 'default' entry")
    return templates


def is_cjk_language(language: Optional[str]) -> bool:
    return (language or "").lower() in CJK_LANGUAGES


def character_limits(language: Optional[str]) -> CharacterLimits:
    if is_cjk_language(language):
        return CharacterLimits(title_max=30, description_max=80)
    return CharacterLimits(title_max=60, description_max=160)


def resolve_template(templates: SeoTemplates, content_type: str, language: str) -> ResolvedTemplate:
    """
    Base template for the content type (else 'default'), with the language's
    override for that type (else the language's 'default' override) laid on
    top key by key.
    """
    base = templates.templates.get(content_type) or templates.templates.get("default") or TemplateSet()

    lang_overrides = templates.language_overrides.get(language) or templates.language_overrides.get(language.lower(), {})
    override = lang_overrides.get(content_type) or lang_overrides.get("default") or TemplateSet()

    merged: dict[str, Any] = {**base.model_dump(exclude_none=True), **override.model_dump(exclude_none=True)}

    title = merged.get("title", "")
    description = merged.get("description", "")
    return ResolvedTemplate(
        title=title,
        description=description,
        og_title=merged.get("og_title") or title,
        og_description=merged.get("og_description") or description,
        twitter_title=merged.get("twitter_title") or title,
        twitter_description=merged.get("twitter_description") or description,
        limits=character_limits(language),
    )


def apply_template(template: Optional[str], variables: Mapping[str, Any]) -> str:
    """
    Fill {{key}} placeholders from variables.

    Missing or empty values become ''. Placeholders left over after
    substitution are removed, then whitespace is collapsed.
    """
    if not template:
        return ""

    def repl(m: re.Match[str]) -> str:
        value = variables.get(m.group(1))
        if value is None or value is False:
            return ""
        return str(value)

    result = _PLACEHOLDER_RE.sub(repl, template)
    result = _LEFTOVER_RE.sub("", result)
    return collapse_whitespace(result)


def cjk_weight(char: str) -> int:
    return 2 if _CJK_CHAR_RE.match(char) else 1


def truncate(text: Optional[str], max_length: int, language: Optional[str]) -> str:
    """
    Shorten text to the language's budget, appending '...' only when cut.

    CJK languages count CJK glyphs as 2 units each and cut on characters;
    everything else cuts at the last whitespace at or before max_length.
    """
    if not text:
        return ""

    if not is_cjk_language(language):
        return truncate_at_word(text, max_length)

    used = 0
    kept: list[str] = []
    for char in text:
        weight = cjk_weight(char)
        if used + weight > max_length:
            break
        kept.append(char)
        used += weight

    out = "".join(kept)
    if len(out) < len(text):
        return out + ELLIPSIS
    return out
