from __future__ import annotations

import argparse
import asyncio
import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from seokit.app.container import SOURCE_MARKDOWN, SOURCES, Container, build_container
from seokit.app.pipeline import generate_sitemaps, validate_content
from seokit.domain.errors import SeoAppError
from seokit.domain.models import GenerationResult, ValidationReport
from seokit.settings import Settings, load_settings
from seokit.utils.json_sanitize import json_sanitize

logger = logging.getLogger("seokit")

console = Console()


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="seokit", description="SEO meta tags and multilingual sitemaps for a content site.")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", default=None, help="Path to settings.toml (default: ./settings.toml if present)")
    common.add_argument("--source", choices=SOURCES, default=SOURCE_MARKDOWN, help="Content source (default: markdown)")
    common.add_argument("--content-dir", default=None, help="Override [content].content_dir")
    common.add_argument("--base-url", default=None, help="Override [site].base_url")

    sub = ap.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", parents=[common], help="Write per-language sitemaps and the sitemap index")
    gen.add_argument("--output-dir", default=None, help="Override [sitemap].output_dir")
    gen.add_argument("--monitored", action="store_true", help="Report generation metrics")

    sub.add_parser("validate", parents=[common], help="Check generated SEO fields for every published item")

    parse = sub.add_parser("parse", parents=[common], help="Preview parsed Markdown content")
    parse.add_argument("--limit", type=int, default=20, help="Rows to show (0 = all)")

    meta = sub.add_parser("meta", parents=[common], help="Print the meta tags for one page as JSON")
    meta.add_argument("slug")
    meta.add_argument("--language", default=None, help="Language code (default: site default language)")
    meta.add_argument("--record", action="store_true", help="Print the parsed content record instead of the tags")

    return ap


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=verbose)],
        force=True,
    )


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Command-line flags win over settings.toml and the environment."""
    if args.base_url:
        settings = replace(settings, site=replace(settings.site, base_url=args.base_url.rstrip("/")))
    if args.content_dir:
        settings = replace(settings, content=replace(settings.content, content_dir=Path(args.content_dir).resolve()))
    if getattr(args, "output_dir", None):
        settings = replace(settings, sitemap=replace(settings.sitemap, output_dir=Path(args.output_dir).resolve()))
    return settings


def print_generation(result: GenerationResult) -> None:
    if not result.sitemaps:
        console.print("[yellow]No published content; nothing written.[/yellow]")
        return

    table = Table(title="Sitemaps")
    table.add_column("Language")
    table.add_column("File")
    table.add_column("URL")
    for s in result.sitemaps:
        table.add_row(s.language, str(s.path), s.url)
    console.print(table)
    console.print(f"[bold]Index:[/bold] {result.index}")


def print_report(report: ValidationReport) -> None:
    console.print(f"Checked {report.checked} items")
    if not report.errors and not report.warnings:
        console.print("[green]All SEO checks passed.[/green]")
        return
    if report.errors:
        console.print(f"[bold red]Errors ({len(report.errors)}):[/bold red]")
        for e in report.errors:
            console.print(f"  - {e}", markup=False, highlight=False)
    if report.warnings:
        console.print(f"[bold yellow]Warnings ({len(report.warnings)}):[/bold yellow]")
        for w in report.warnings:
            console.print(f"  - {w}", markup=False, highlight=False)


def cmd_generate(c: Container) -> int:
    result = asyncio.run(generate_sitemaps(c.sitemap_generator))
    print_generation(result)
    return 0 if result.success else 1


def cmd_validate(c: Container) -> int:
    records = asyncio.run(c.content_source.get_all_published())
    report = validate_content(records, c.meta_engine)
    print_report(report)
    return 0 if report.ok else 1


def cmd_parse(c: Container, limit: int) -> int:
    records = c.parser.parse_directory()

    table = Table(title=f"Parsed {len(records)} files from {c.parser.base_dir}")
    for col in ("Language", "Type", "Status", "Slug", "Title", "Alternates"):
        table.add_column(col)
    shown = records if limit <= 0 else records[:limit]
    for r in shown:
        table.add_row(
            r.language,
            r.content_type,
            r.status,
            r.slug,
            r.title,
            ", ".join(a.language for a in r.alternate_languages),
        )
    console.print(table)

    if records:
        meta = c.meta_engine.generate(records[0])
        console.print(f"[bold]SEO preview:[/bold] {records[0].slug}")
        console.print_json(json.dumps(json_sanitize(meta.to_dict()), ensure_ascii=False))
    return 0


def cmd_meta(c: Container, slug: str, language: Optional[str], show_record: bool = False) -> int:
    lang = language or c.settings.site.default_language
    record = asyncio.run(c.content_source.get_by_slug(slug, lang))
    if record is None:
        console.print(f"[red]No published content for {slug!r} ({lang})[/red]")
        return 1
    if show_record:
        console.print_json(json.dumps(json_sanitize(record), ensure_ascii=False))
        return 0
    meta = c.meta_engine.generate(record)
    console.print_json(json.dumps(json_sanitize(meta.to_dict()), ensure_ascii=False))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_argparser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        settings = apply_overrides(load_settings(args.config), args)
        c = build_container(settings, source=args.source, monitored=getattr(args, "monitored", False))

        if args.command == "generate":
            return cmd_generate(c)
        if args.command == "validate":
            return cmd_validate(c)
        if args.command == "parse":
            return cmd_parse(c, args.limit)
        if args.command == "meta":
            return cmd_meta(c, args.slug, args.language, args.record)
    except (SeoAppError, FileNotFoundError) as e:
        logger.error("%s", e)
        return 2

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
