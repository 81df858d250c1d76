"""The six GEO checks.

Every check takes a parsed document and returns a :class:`Verdict`. Checks
only read the tree; none of them mutates it or depends on another check.
Branches are tested in a fixed order: full pass, partial, then failing.
"""

from __future__ import annotations

import json
import re
from typing import Any, Callable

from bs4 import BeautifulSoup, Tag

from .evidence import body_excerpt, head_excerpt, markup_of, script_excerpt
from .models import ALARM, INFO, OK, Verdict, make_verdict

JSONLD_TYPE_RE = re.compile(r"application/ld\+json", re.IGNORECASE)
DESCRIPTION_RE = re.compile(r"^description$", re.IGNORECASE)
MICRODATA_ATTRS = ("itemscope", "itemtype", "itemprop")


def rel_tokens(tag: Tag) -> list[str]:
    rel = tag.get("rel") or []
    if isinstance(rel, str):
        rel = rel.split()
    return [str(x).strip().lower() for x in rel]


def find_link(soup: BeautifulSoup, rel: str) -> Tag | None:
    return soup.find(lambda t: t.name == "link" and rel in rel_tokens(t))


def has_alt(img: Tag) -> bool:
    return bool(str(img.get("alt") or "").strip())


def check_semantic_html(soup: BeautifulSoup) -> Verdict:
    header = soup.find("header")
    main = soup.find("main")
    footer = soup.find("footer")
    if header and main and footer:
        return make_verdict(OK, "Good use of semantic HTML elements. Header, main and footer are all present.")
    if main:
        missing = ", ".join(name for name, node in (("header", header), ("footer", footer)) if not node)
        return make_verdict(
            INFO,
            f"Some semantic HTML elements present, but structure could be improved. Missing: {missing}.",
            body_excerpt(soup),
        )
    return make_verdict(ALARM, "Poor semantic structure. Missing essential HTML5 elements such as <main>.", body_excerpt(soup))


def check_metadata(soup: BeautifulSoup) -> Verdict:
    title = soup.find("title")
    description = soup.find("meta", attrs={"name": DESCRIPTION_RE})
    canonical = find_link(soup, "canonical")
    if title and description and canonical:
        return make_verdict(OK, "All required meta tags present including title, description, and canonical.")
    if title or description:
        missing = ", ".join(
            name
            for name, node in (("title", title), ("meta description", description), ("canonical link", canonical))
            if not node
        )
        return make_verdict(INFO, f"Essential meta tags present, but incomplete. Missing: {missing}.", head_excerpt(soup))
    return make_verdict(ALARM, "Missing critical meta tags. Title and description are both absent.", head_excerpt(soup))


def jsonld_nodes(payload: Any) -> list[dict[str, Any]]:
    if isinstance(payload, dict):
        return [payload]
    if isinstance(payload, list):
        return [x for x in payload if isinstance(x, dict)]
    return []


def check_structured_data(soup: BeautifulSoup) -> Verdict:
    scripts = soup.find_all("script", attrs={"type": JSONLD_TYPE_RE})
    if not scripts:
        return make_verdict(ALARM, "No structured data found. Add a JSON-LD block with @context and @type.")

    parsed: list[Any] = []
    invalid: list[Tag] = []
    for script in scripts:
        raw = (script.string or script.get_text() or "").strip()
        try:
            parsed.append(json.loads(raw))
        except (ValueError, RecursionError):
            invalid.append(script)

    evidence = script_excerpt(invalid[0] if invalid else scripts[0])
    complete = any("@context" in n and "@type" in n for p in parsed for n in jsonld_nodes(p))
    if complete:
        return make_verdict(OK, "Valid JSON-LD found with @context and @type declared.")
    if parsed:
        return make_verdict(
            INFO,
            f"Structured data present in {len(parsed)} JSON-LD block(s), but none declares both @context and @type.",
            evidence,
        )
    return make_verdict(
        ALARM,
        f"Invalid JSON-LD implementation. {len(invalid)} block(s) could not be parsed as JSON.",
        evidence,
    )


def check_ai_readiness(soup: BeautifulSoup) -> Verdict:
    section = soup.find("section")
    microdata = soup.find(lambda t: any(attr in t.attrs for attr in MICRODATA_ATTRS))
    if section and microdata:
        return make_verdict(OK, "Content well-structured for AI consumption with sections and microdata annotations.")
    if section or microdata:
        missing = "microdata attributes (itemscope/itemtype/itemprop)" if section else "<section> elements"
        return make_verdict(INFO, f"Basic AI readiness present, but missing {missing}.", body_excerpt(soup))
    return make_verdict(
        ALARM,
        "Poor AI readiness. No <section> elements and no microdata; content is not modular or easily parseable.",
        body_excerpt(soup),
    )


def check_accessibility(soup: BeautifulSoup) -> Verdict:
    imgs = soup.find_all("img")
    missing = [img for img in imgs if not has_alt(img)]
    with_alt = len(imgs) - len(missing)
    evidence = markup_of(missing[0]) if missing else None
    if imgs and not missing:
        return make_verdict(OK, f"All {len(imgs)} images have alt text.")
    if 0 < with_alt < len(imgs):
        return make_verdict(INFO, f"{len(missing)} of {len(imgs)} images are missing alt text.", evidence)
    if not imgs:
        # A page without images is graded like a page with no alt text at all.
        return make_verdict(ALARM, "No images with alt text found. The page contains no images.")
    return make_verdict(ALARM, f"Poor accessibility. None of the {len(imgs)} images have alt text.", evidence)


def check_crawlability(soup: BeautifulSoup) -> Verdict:
    nav = soup.find("nav")
    preload = find_link(soup, "preload")
    if nav and preload:
        return make_verdict(OK, "Excellent crawl structure with <nav> navigation and preloaded critical assets.")
    if nav:
        return make_verdict(INFO, "Adequate crawlability, but missing <link rel=\"preload\"> directives.", head_excerpt(soup))
    return make_verdict(
        ALARM,
        "Poor crawlability. No <nav> element found; navigation may depend on JavaScript.",
        head_excerpt(soup),
    )


CHECKS: dict[str, Callable[[BeautifulSoup], Verdict]] = {
    "semantic_html": check_semantic_html,
    "metadata": check_metadata,
    "structured_data": check_structured_data,
    "ai_readiness": check_ai_readiness,
    "accessibility": check_accessibility,
    "crawlability": check_crawlability,
}
