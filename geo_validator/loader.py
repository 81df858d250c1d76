"""Page retrieval and parsing.

This sits outside the analysis engine: it turns a URL or a local file into
HTML and a soup, and reports every failure as a :class:`LoadError` so the
caller can fall back to a degraded report.
"""

from __future__ import annotations

import ipaddress
import socket
from pathlib import Path
from urllib.parse import urljoin, urlparse, urlunparse

import requests
from bs4 import BeautifulSoup

HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; GeoValidator/1.0)",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.8",
}
MAX_REDIRECT_HOPS = 10
DEFAULT_TIMEOUT = 20


class LoadError(ValueError):
    """The page could not be retrieved or read."""


def normalize_url(raw: str) -> str:
    value = raw.strip()
    parsed = urlparse(value)
    if not parsed.scheme:
        value = f"https://{value}"
        parsed = urlparse(value)
    if parsed.scheme not in ("http", "https"):
        raise ValueError(f"Unsupported URL scheme: {parsed.scheme}")
    netloc = parsed.netloc or (parsed.hostname or "")
    path = parsed.path or "/"
    return urlunparse((parsed.scheme, netloc, path, "", parsed.query, ""))


def is_public_target(url: str) -> bool:
    host = urlparse(url).hostname
    if not host:
        return False
    try:
        info = socket.getaddrinfo(host, None)
    except (socket.gaierror, UnicodeError):
        return False
    for _, _, _, _, sockaddr in info:
        try:
            ip = ipaddress.ip_address(sockaddr[0])
        except ValueError:
            continue
        if ip.is_private or ip.is_loopback or ip.is_reserved or ip.is_link_local or ip.is_multicast:
            continue
        return True
    return False


def fetch_html(url: str, timeout: int = DEFAULT_TIMEOUT) -> tuple[str, str]:
    current_url = url
    redirects = 0
    try:
        while True:
            if not is_public_target(current_url):
                raise LoadError("target URL resolves to non-public or invalid host")
            res = requests.get(current_url, headers=HEADERS, timeout=timeout, allow_redirects=False)
            if 300 <= res.status_code < 400:
                location = (res.headers.get("Location") or "").strip()
                if not location:
                    res.raise_for_status()
                    return res.text, current_url
                if redirects >= MAX_REDIRECT_HOPS:
                    raise LoadError(f"Too many redirects (>{MAX_REDIRECT_HOPS})")
                try:
                    current_url = normalize_url(urljoin(current_url, location))
                except ValueError as exc:
                    raise LoadError(f"Invalid redirect URL: {exc}") from exc
                redirects += 1
                continue
            res.raise_for_status()
            return res.text, current_url
    except requests.exceptions.RequestException as exc:
        raise LoadError(f"failed to fetch target: {exc}") from exc


def read_html_file(path: str) -> str:
    p = Path(path).resolve()
    if not p.is_file():
        raise LoadError(f"File not found: {p}")
    try:
        return p.read_text(encoding="utf-8", errors="ignore")
    except OSError as exc:
        raise LoadError(f"Could not read {p}: {exc}") from exc


def load_page(url: str = "", html_file: str = "", page_url: str = "", timeout: int = DEFAULT_TIMEOUT) -> tuple[str, str]:
    """Return ``(html, page_url)`` for exactly one of ``url`` or ``html_file``."""
    if bool(url) == bool(html_file):
        raise ValueError("Provide exactly one of url or html_file.")
    if url:
        try:
            target = normalize_url(url)
        except ValueError as exc:
            raise LoadError(str(exc)) from exc
        return fetch_html(target, timeout)
    html = read_html_file(html_file)
    if page_url:
        return html, normalize_url(page_url)
    return html, Path(html_file).resolve().as_uri()


def soup_of(html: str) -> BeautifulSoup:
    try:
        return BeautifulSoup(html, "lxml")
    except Exception:
        return BeautifulSoup(html, "html.parser")
