# -*- coding: utf-8 -*-
"""Splice edited body content and stylesheet links into a stored page.

Pages are free-form and possibly malformed HTML, so nothing is parsed: the
engine only locates the ``<body>`` and ``</head>`` landmarks with regular
expressions and leaves every other byte of the document alone.
"""
from __future__ import annotations

import re
from typing import Sequence

BODY_RE = re.compile(r"(<body(?:\s[^>]*)?>)(.*?)</body>", re.IGNORECASE | re.DOTALL)
BODY_CLOSE_RE = re.compile(r"</body>", re.IGNORECASE)
HTML_CLOSE_RE = re.compile(r"</html>", re.IGNORECASE)
HEAD_CLOSE_RE = re.compile(r"</head>", re.IGNORECASE)
STYLESHEET_LINK_RE = re.compile(r"""<link[^>]*rel=['"]\s*stylesheet\s*['"][^>]*>""", re.IGNORECASE)


def stylesheet_links(stylesheets: Sequence[str]) -> str:
    return "\n".join(f'    <link rel="stylesheet" href="{href}">' for href in stylesheets)


def _insert_before(pattern: re.Pattern, html: str, text: str) -> str:
    m = pattern.search(html)
    return html[: m.start()] + text + html[m.start():]


def replace_body(html: str, new_body_inner: str) -> str:
    block = f"<body>\n{new_body_inner}\n</body>"

    m = BODY_RE.search(html)
    if m:
        # keep the original opening tag so attributes survive
        return html[: m.start()] + m.group(1) + f"\n{new_body_inner}\n</body>" + html[m.end():]

    if BODY_CLOSE_RE.search(html):
        return _insert_before(BODY_CLOSE_RE, html, block + "\n")
    if HTML_CLOSE_RE.search(html):
        return _insert_before(HTML_CLOSE_RE, html, block + "\n")
    return html + block


def apply_stylesheets(html: str, stylesheets: Sequence[str]) -> str:
    if not stylesheets:
        return html

    links = stylesheet_links(stylesheets)
    html = STYLESHEET_LINK_RE.sub("", html)
    if HEAD_CLOSE_RE.search(html):
        return _insert_before(HEAD_CLOSE_RE, html, links + "\n")
    return links + "\n" + html


def merge_page(original_html: str, new_body_inner: str, stylesheets: Sequence[str] = ()) -> str:
    """Return ``original_html`` with its first body replaced and its stylesheets set.

    With no ``<body>`` region the new body goes before ``</body>``, then
    ``</html>``, then at the end. An empty ``stylesheets`` leaves the head
    untouched, existing links included.
    """
    merged = replace_body(original_html, new_body_inner)
    return apply_stylesheets(merged, stylesheets)


def extract_body(html: str) -> str:
    m = BODY_RE.search(html or "")
    return m.group(2).strip() if m else ""
