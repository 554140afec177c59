"""Language lookup table: ISO codes <-> hreflang tags, OG locales, display names."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

import yaml
from pydantic import TypeAdapter, ValidationError

from seokit.domain.errors import ConfigError
from seokit.domain.models import LanguageRecord
from seokit.domain.schema import DEFAULT_LANGUAGE

logger = logging.getLogger(__name__)

_LANGUAGE_LIST = TypeAdapter(list[LanguageRecord])

UNKNOWN_PRIORITY = 999

DATA_DIR = Path(__file__).resolve().parents[1] / "data"


def load_languages(path: str | Path | None = None) -> list[LanguageRecord]:
    """
    Load the language table from YAML.

    With no path, the table bundled with the package is used.
    """
    try:
        if path is None:
            raw_text = (DATA_DIR / "languages.yaml").read_text(encoding="utf-8")
            origin = "bundled languages.yaml"
        else:
            path = Path(path)
            raw_text = path.read_text(encoding="utf-8")
            origin = str(path)
    except OSError as e:
        raise ConfigError(f"Cannot read language table: {e}") from e

    try:
        raw = yaml.safe_load(raw_text) or []
        records = _LANGUAGE_LIST.validate_python(raw)
    except (yaml.YAMLError, ValidationError) as e:
        raise ConfigError(f"Invalid language table in {origin}: {e}") from e

    seen: set[str] = set()
    for rec in records:
        key = rec.iso_code.lower()
        if key in seen:
            raise ConfigError(f"Duplicate iso_code {rec.iso_code!r} in {origin}")
        seen.add(key)

    logger.debug("Loaded %d languages from %s", len(records), origin)
    return records


class LanguageMapper:
    """
    Case-insensitive lookups over a fixed table of LanguageRecords.

    Unknown codes never raise: each accessor has a documented fallback.
    """

    def __init__(self, languages: Optional[Sequence[LanguageRecord]] = None):
        self.languages: list[LanguageRecord] = list(languages) if languages is not None else load_languages()
        self._by_iso = {lang.iso_code.lower(): lang for lang in self.languages}
        self._by_hreflang = {lang.hreflang.lower(): lang for lang in self.languages if lang.hreflang}

    def get_by_iso(self, code: Optional[str]) -> Optional[LanguageRecord]:
        if not code:
            return None
        return self._by_iso.get(code.lower())

    def get_hreflang(self, code: str) -> str:
        lang = self.get_by_iso(code)
        return lang.hreflang if lang else code

    def get_og_locale(self, code: str) -> str:
        lang = self.get_by_iso(code)
        return lang.og_locale if lang else code.replace("-", "_", 1)

    def get_display_name(self, code: str, native: bool = False) -> str:
        lang = self.get_by_iso(code)
        if lang is None:
            return code
        return lang.native_name if native else lang.name

    def is_rtl(self, code: str) -> bool:
        lang = self.get_by_iso(code)
        return lang.rtl if lang else False

    def get_all_enabled(self) -> list[LanguageRecord]:
        # sorted() is stable: equal priorities keep table order
        return sorted((lang for lang in self.languages if lang.enabled), key=lambda lang: lang.priority)

    def normalize(self, code: Optional[str]) -> str:
        """
        Resolve any spelling of a language to its iso_code.

        exact ISO match -> hreflang match -> base language (before the
        first '-') -> DEFAULT_LANGUAGE.
        """
        if not code:
            return DEFAULT_LANGUAGE

        lang = self.get_by_iso(code)
        if lang:
            return lang.iso_code

        lang = self._by_hreflang.get(code.lower())
        if lang:
            return lang.iso_code

        lang = self.get_by_iso(code.split("-", 1)[0])
        if lang:
            return lang.iso_code

        return DEFAULT_LANGUAGE

    def get_by_url_segment(self, segment: str) -> str:
        # /zh/, /zh-cn/ ... resolve like any other code
        return self.normalize(segment)

    def get_iso639_3(self, code: str) -> Optional[str]:
        lang = self.get_by_iso(code)
        return lang.iso639_3 if lang else None

    def get_region(self, code: str) -> Optional[str]:
        lang = self.get_by_iso(code)
        return lang.region if lang else None

    def is_enabled(self, code: str) -> bool:
        lang = self.get_by_iso(code)
        return lang.enabled if lang else False

    def get_priority(self, code: str) -> int:
        lang = self.get_by_iso(code)
        return lang.priority if lang else UNKNOWN_PRIORITY
