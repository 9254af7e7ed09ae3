# -*- coding: utf-8 -*-
from __future__ import annotations

import json
import re

from .errors import DefaultCaseNotFound

DEFAULT_CASE_RE = re.compile(r"default:\s*fullArticleContent = `<p>Article content not found\.</p>`;")

CASE_INDENT = " " * 16
BODY_INDENT = " " * 20
NEWLINE_RE = re.compile(r"\r?\n")


def escape_template_literal(text: str, *, escape_dollar: bool = False) -> str:
    out = text.replace("\\", "\\\\").replace("`", "\\`")
    if escape_dollar:
        out = out.replace("$", "\\$")
    return NEWLINE_RE.sub(lambda _m: "\\n", out)


def article_case(article_id: str, title: str, body: str) -> str:
    t = escape_template_literal(title)
    b = escape_template_literal(body, escape_dollar=True)
    return (
        f"{CASE_INDENT}case {json.dumps(article_id, ensure_ascii=False)}:\n"
        f"{BODY_INDENT}fullArticleContent = `<h2>{t}</h2>\n"
        f"{BODY_INDENT}<p>{b}</p>`;\n"
        f"{BODY_INDENT}break;"
    )


def insert_article_case(source: str, article_id: str, title: str, body: str) -> str:
    """Insert a ``case`` for the article right before the switch's default case.

    Existing cases keep their order. Ids are not deduplicated: inserting the
    same id twice yields two cases and the first one wins at runtime.
    """
    m = DEFAULT_CASE_RE.search(source)
    if not m:
        raise DefaultCaseNotFound()

    fragment = article_case(article_id, title, body)
    return source[: m.start()] + fragment + "\n" + CASE_INDENT + source[m.start():]
