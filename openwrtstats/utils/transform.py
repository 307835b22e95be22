"""Utilities for serving the dashboard page.

This module provides utilities for:
- Reading bundled static files
- Injecting JavaScript into HTML content
"""
import os
from typing import Optional

from bs4 import BeautifulSoup

STATIC_ROOT = os.path.join(os.path.dirname(os.path.dirname(__file__)), "static")


def read_static(fpath: str, web_root: str = STATIC_ROOT) -> Optional[str]:
    """Return the text of a bundled static file, or None if missing.

    Paths that try to leave web_root are treated as missing.

    Example:
        html = read_static("index.html")
    """
    if fpath.split("?")[0] in ("", "/"):
        fpath = "index.html"
    fpath = fpath.lstrip("/")

    root = os.path.realpath(web_root)
    freq = os.path.realpath(os.path.join(root, fpath))
    if not freq.startswith(root + os.sep) or not os.path.isfile(freq):
        return None

    with open(freq, "r", encoding="utf-8") as f:
        return f.read()


def inject_js(htmlsrc: str, *args: str) -> str:
    """Inject JavaScript files into HTML content.

    Appends <script> tags to the HTML body for each provided JavaScript path.

    Args:
        htmlsrc: HTML source content as string
        *args: JavaScript file paths to inject (e.g., "/static/dashboard.js")

    Returns:
        Modified HTML with script tags appended to body
    """
    soup = BeautifulSoup(htmlsrc, "html.parser")
    body = soup.body or soup

    for fpath in args:
        script = soup.new_tag("script")
        script["type"] = "text/javascript"
        script["src"] = fpath
        body.append(script)

    return str(soup)
