from __future__ import annotations

import hashlib
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from seokit.adapters.parsing.frontmatter import split_frontmatter
from seokit.domain.errors import ContentParseError
from seokit.domain.models import AlternateLanguage, Author, ContentRecord, ImageRef, Pricing
from seokit.domain.schema import (
    CONTENT_BLOG,
    CONTENT_DOCS,
    CONTENT_LANDING,
    CONTENT_PAGE,
    CONTENT_PRODUCT,
    DEFAULT_LANGUAGE,
    STATUS_DRAFT,
    STATUS_PUBLISHED,
)
from seokit.utils.dates import coerce_datetime
from seokit.utils.text import make_excerpt

logger = logging.getLogger(__name__)

_MARKDOWN_EXTS = {".md", ".mdx"}

_LANG_DIR_RE = re.compile(r"^[a-z]{2}(-[a-z]{2})?$", re.IGNORECASE)
_LANG_PREFIX_RE = re.compile(r"^[a-z]{2}(-[a-z]{2})?/", re.IGNORECASE)
_LANG_SUFFIX_RE = re.compile(r"\.([a-z]{2})\.mdx?$", re.IGNORECASE)
_EXT_RE = re.compile(r"\.mdx?$", re.IGNORECASE)
_SLUG_UNSAFE_RE = re.compile(r"[^a-z0-9/-]+")
_HYPHENS_RE = re.compile(r"-+")
_H1_RE = re.compile(r"^#\s+(.+)$", re.MULTILINE)
_IMAGE_RE = re.compile(r"!\[([^\]]*)\]\(([^)]+)\)")

# Checked in order against the relative path
_CONTENT_TYPE_MARKERS = (CONTENT_BLOG, CONTENT_PRODUCT, CONTENT_DOCS, CONTENT_LANDING)


def _is_hidden(path: Path) -> bool:
    return path.name.startswith(".")


def _is_markdown(path: Path) -> bool:
    return path.suffix.lower() in _MARKDOWN_EXTS


def _first(frontmatter: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = frontmatter.get(key)
        if value not in (None, ""):
            return value
    return None


def _opt_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _normalize_tags(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        # Allow "a, b" or "a"
        return tuple(p.strip() for p in value.split(",") if p.strip())
    if isinstance(value, list):
        return tuple(str(x).strip() for x in value if str(x).strip())
    return ()


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"true", "yes", "1"}


def extract_title(body: str) -> str:
    m = _H1_RE.search(body)
    return m.group(1).strip() if m else "Untitled"


def extract_images(body: str) -> tuple[ImageRef, ...]:
    images: list[ImageRef] = []
    for m in _IMAGE_RE.finditer(body):
        alt = m.group(1)
        # ![alt](url "title") -> url
        target = m.group(2).strip()
        url = target.split()[0] if target else target
        images.append(ImageRef(url=url, title=alt, caption=alt))
    return tuple(images)


@dataclass(frozen=True, slots=True)
class MarkdownParser:
    """
    Turns Markdown files under base_dir into ContentRecords.

    Frontmatter wins; anything it leaves out is derived from the file's
    location and body:
      - content/<lang>/<...>/<name>.md  -> language, slug, alternates
      - blog/ product/ docs/ landing/   -> content type
      - first '# heading'               -> title
      - first paragraph                 -> excerpt
    """
    base_dir: Path
    default_language: str = DEFAULT_LANGUAGE
    default_author: str = ""
    excerpt_length: int = 160

    def parse_file(self, path: str | Path) -> ContentRecord:
        path = Path(path)
        try:
            raw = path.read_text(encoding="utf-8")
            stat = path.stat()
        except (OSError, UnicodeDecodeError) as e:
            raise ContentParseError(f"Cannot read {path}: {e}") from e

        frontmatter, body = split_frontmatter(raw)

        created = datetime.fromtimestamp(getattr(stat, "st_birthtime", stat.st_ctime), tz=timezone.utc)
        modified = datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc)

        pricing = None
        amount = _first(frontmatter, "price", "priceAmount")
        if amount is not None:
            pricing = Pricing(amount=str(amount), currency=str(_first(frontmatter, "currency", "priceCurrency") or "USD"))

        return ContentRecord(
            id=str(_first(frontmatter, "id") or self.generate_id(path)),
            slug=str(_first(frontmatter, "slug") or self.generate_slug(path)),
            language=str(_first(frontmatter, "language", "lang") or self.detect_language(path)).lower(),
            content_type=str(_first(frontmatter, "contentType", "type") or self.detect_content_type(path)),
            title=str(_first(frontmatter, "title") or extract_title(body)),
            excerpt=str(_first(frontmatter, "excerpt", "description") or make_excerpt(body, self.excerpt_length)),
            body=body,
            category=_opt_str(_first(frontmatter, "category")),
            tags=_normalize_tags(frontmatter.get("tags")),
            author=Author(name=str(_first(frontmatter, "author") or self.default_author)),
            featured_image=_opt_str(_first(frontmatter, "featuredImage", "image")),
            published_at=coerce_datetime(_first(frontmatter, "publishedAt", "date")) or created,
            updated_at=coerce_datetime(_first(frontmatter, "updatedAt")) or modified,
            status=self.detect_status(frontmatter),
            alternate_languages=self.find_alternate_languages(path),
            images=extract_images(body),
            pricing=pricing,
            seo_title=_opt_str(_first(frontmatter, "seoTitle")),
            seo_description=_opt_str(_first(frontmatter, "seoDescription")),
            noindex=_as_bool(frontmatter.get("noindex", False)),
            source_path=path,
        )

    def parse_directory(self, directory: str | Path | None = None) -> list[ContentRecord]:
        """
        Parse every Markdown file below directory (default: base_dir).

        Depth-first in sorted order. A file that fails to parse is logged
        and skipped; the rest of the batch still comes back.
        """
        root = Path(directory) if directory is not None else self.base_dir
        if not root.is_dir():
            raise FileNotFoundError(f"Content directory not found: {root}")

        results: list[ContentRecord] = []
        self._scan(root, results)
        logger.debug("Parsed %d markdown files under %s", len(results), root)
        return results

    def _scan(self, directory: Path, results: list[ContentRecord]) -> None:
        for entry in sorted(directory.iterdir(), key=lambda p: p.name):
            if _is_hidden(entry):
                continue
            if entry.is_dir():
                self._scan(entry, results)
            elif entry.is_file() and _is_markdown(entry):
                try:
                    results.append(self.parse_file(entry))
                except ContentParseError as e:
                    logger.warning("Skipping %s: %s", entry, e)

    # -------------------------
    # Derivations
    # -------------------------

    def _relative(self, path: Path) -> str:
        try:
            return path.resolve().relative_to(self.base_dir.resolve()).as_posix()
        except ValueError:
            return path.as_posix()

    def generate_id(self, path: Path) -> str:
        # Stable across runs and checkouts: hash of the content-relative path
        rel = self._relative(path)
        return hashlib.md5(rel.encode("utf-8")).hexdigest()[:12]

    def generate_slug(self, path: Path) -> str:
        slug = self._relative(path)
        slug = _LANG_PREFIX_RE.sub("", slug)
        slug = _EXT_RE.sub("", slug)
        slug = slug.lower()
        slug = _SLUG_UNSAFE_RE.sub("-", slug)
        slug = _HYPHENS_RE.sub("-", slug)
        return slug.strip("-")

    def detect_language(self, path: Path) -> str:
        parts = self._relative(path).split("/")
        if len(parts) > 1 and _LANG_DIR_RE.match(parts[0]):
            return parts[0].lower()

        m = _LANG_SUFFIX_RE.search(path.name)
        if m:
            return m.group(1).lower()

        return self.default_language

    def detect_content_type(self, path: Path) -> str:
        rel = self._relative(path)
        for marker in _CONTENT_TYPE_MARKERS:
            if marker in rel:
                return marker
        return CONTENT_PAGE

    def detect_status(self, frontmatter: dict[str, Any]) -> str:
        status = str(frontmatter.get("status", "")).strip().lower()
        if status == STATUS_DRAFT or _as_bool(frontmatter.get("draft", False)):
            return STATUS_DRAFT
        return STATUS_PUBLISHED

    def find_alternate_languages(self, path: Path) -> tuple[AlternateLanguage, ...]:
        """
        Translations live at the same relative location under sibling
        language directories: content/en/blog/x.md <-> content/zh/blog/x.md.
        """
        parts = self._relative(path).split("/")
        if len(parts) < 2 or not _LANG_DIR_RE.match(parts[0]):
            return ()

        current = parts[0].lower()
        remainder = Path(*parts[1:])
        base = self.base_dir

        alternates: list[AlternateLanguage] = []
        try:
            siblings = sorted(base.iterdir(), key=lambda p: p.name.lower())
        except OSError:
            return ()

        for lang_dir in siblings:
            if not lang_dir.is_dir() or not _LANG_DIR_RE.match(lang_dir.name):
                continue
            lang = lang_dir.name.lower()
            if lang == current:
                continue
            alt_path = lang_dir / remainder
            if alt_path.is_file():
                alternates.append(AlternateLanguage(language=lang, slug=self.generate_slug(alt_path)))

        return tuple(alternates)
