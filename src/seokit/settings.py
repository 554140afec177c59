from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from seokit.domain.errors import ConfigError
from seokit.domain.schema import DEFAULT_LANGUAGE, MAX_URLS_PER_SITEMAP

DEFAULT_SETTINGS_FILE = "settings.toml"

ENV_BASE_URL = "SEOKIT_BASE_URL"
ENV_CONTENT_DIR = "SEOKIT_CONTENT_DIR"
ENV_OUTPUT_DIR = "SEOKIT_OUTPUT_DIR"


@dataclass(frozen=True)
class Site:
    base_url: str = "https://example.com"
    site_name: str = "Example"
    default_image: Optional[str] = None
    default_language: str = DEFAULT_LANGUAGE


@dataclass(frozen=True)
class Content:
    content_dir: Path = Path("content")
    default_author: str = ""
    excerpt_length: int = 160
    cache_ttl_seconds: float = 300.0


@dataclass(frozen=True)
class Sitemap:
    output_dir: Path = Path("public")
    max_urls_per_sitemap: int = MAX_URLS_PER_SITEMAP
    notify: bool = True


@dataclass(frozen=True)
class Seo:
    # None -> bundled data files
    languages_file: Optional[Path] = None
    templates_file: Optional[Path] = None


@dataclass(frozen=True)
class Settings:
    site: Site = Site()
    content: Content = Content()
    sitemap: Sitemap = Sitemap()
    seo: Seo = Seo()


def _expand(p: str | Path) -> Path:
    return Path(os.path.expandvars(os.path.expanduser(str(p)))).resolve()


def _opt_path(value: Any) -> Optional[Path]:
    return _expand(value) if value else None


def _bool(value: Any, name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"{name} must be true or false, got {value!r}")
    return value


def _section(raw: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = raw.get(name, {})
    if not isinstance(section, Mapping):
        raise ConfigError(f"[{name}] must be a table")
    return section


def load_settings(path: str | Path | None = None, *, env_file: str | Path | None = None) -> Settings:
    """
    Read settings.toml and apply environment overrides.

    With no path, ./settings.toml is used when present and defaults
    otherwise. An explicit path that does not exist is an error.
    SEOKIT_BASE_URL, SEOKIT_CONTENT_DIR and SEOKIT_OUTPUT_DIR (from the
    environment or a .env file) win over the file. Without env_file the
    .env lookup starts in the current directory.
    """
    load_dotenv(env_file if env_file is not None else find_dotenv(usecwd=True))

    if path is None:
        candidate = Path(DEFAULT_SETTINGS_FILE)
        raw: Mapping[str, Any] = _read_toml(candidate) if candidate.exists() else {}
    else:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Missing config file: {path}")
        raw = _read_toml(path)

    site_raw = _section(raw, "site")
    content_raw = _section(raw, "content")
    sitemap_raw = _section(raw, "sitemap")
    seo_raw = _section(raw, "seo")

    defaults = Settings()
    try:
        site = Site(
            base_url=str(os.getenv(ENV_BASE_URL) or site_raw.get("base_url", defaults.site.base_url)).rstrip("/"),
            site_name=str(site_raw.get("site_name", defaults.site.site_name)),
            default_image=site_raw.get("default_image") or None,
            default_language=str(site_raw.get("default_language", defaults.site.default_language)),
        )
        content = Content(
            content_dir=_expand(os.getenv(ENV_CONTENT_DIR) or content_raw.get("content_dir", defaults.content.content_dir)),
            default_author=str(content_raw.get("default_author", defaults.content.default_author)),
            excerpt_length=int(content_raw.get("excerpt_length", defaults.content.excerpt_length)),
            cache_ttl_seconds=float(content_raw.get("cache_ttl_seconds", defaults.content.cache_ttl_seconds)),
        )
        sitemap = Sitemap(
            output_dir=_expand(os.getenv(ENV_OUTPUT_DIR) or sitemap_raw.get("output_dir", defaults.sitemap.output_dir)),
            max_urls_per_sitemap=int(sitemap_raw.get("max_urls_per_sitemap", defaults.sitemap.max_urls_per_sitemap)),
            notify=_bool(sitemap_raw.get("notify", defaults.sitemap.notify), "sitemap.notify"),
        )
        seo = Seo(
            languages_file=_opt_path(seo_raw.get("languages_file")),
            templates_file=_opt_path(seo_raw.get("templates_file")),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid config value: {e}") from e

    if sitemap.max_urls_per_sitemap <= 0:
        raise ConfigError("sitemap.max_urls_per_sitemap must be positive")

    return Settings(site=site, content=content, sitemap=sitemap, seo=seo)


def _read_toml(path: Path) -> Mapping[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
