"""Sitemap XML serialization (protocol 0.9 plus xhtml:link and image extensions)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence
from xml.etree.ElementTree import Element, SubElement, indent, tostring

from seokit.domain.models import HreflangLink, ImageRef

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
XHTML_NS = "http://www.w3.org/1999/xhtml"
IMAGE_NS = "http://www.google.com/schemas/sitemap-image/1.1"

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


@dataclass(frozen=True, slots=True)
class UrlEntry:
    loc: str
    lastmod: str
    changefreq: str
    priority: float
    alternates: Sequence[HreflangLink] = field(default_factory=tuple)
    images: Sequence[ImageRef] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class IndexEntry:
    loc: str
    lastmod: str


def _text(parent: Element, tag: str, text: str) -> Element:
    el = SubElement(parent, tag)
    el.text = text
    return el


def _serialize(root: Element) -> str:
    indent(root, space="  ")
    return XML_DECLARATION + tostring(root, encoding="unicode") + "\n"


def build_urlset_xml(entries: Sequence[UrlEntry]) -> str:
    urlset = Element("urlset")
    # Prefixed names are written literally; the prefixes are declared here.
    urlset.set("xmlns", SITEMAP_NS)
    urlset.set("xmlns:xhtml", XHTML_NS)
    urlset.set("xmlns:image", IMAGE_NS)

    for entry in entries:
        url_el = SubElement(urlset, "url")
        _text(url_el, "loc", entry.loc)
        _text(url_el, "lastmod", entry.lastmod)
        _text(url_el, "changefreq", entry.changefreq)
        _text(url_el, "priority", f"{entry.priority:.1f}")

        for link in entry.alternates:
            SubElement(url_el, "xhtml:link", {"rel": "alternate", "hreflang": link.lang, "href": link.url})

        for img in entry.images:
            image_el = SubElement(url_el, "image:image")
            _text(image_el, "image:loc", img.url)
            if img.title:
                _text(image_el, "image:title", img.title)
            if img.caption:
                _text(image_el, "image:caption", img.caption)

    return _serialize(urlset)


def build_index_xml(entries: Sequence[IndexEntry]) -> str:
    sitemapindex = Element("sitemapindex")
    sitemapindex.set("xmlns", SITEMAP_NS)

    for entry in entries:
        sitemap_el = SubElement(sitemapindex, "sitemap")
        _text(sitemap_el, "loc", entry.loc)
        _text(sitemap_el, "lastmod", entry.lastmod)

    return _serialize(sitemapindex)
