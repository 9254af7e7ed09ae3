# -*- coding: utf-8 -*-
from __future__ import annotations

import os

# ============================================================
# CONFIG
# ============================================================
CPANEL_BASE_URL = os.getenv("CPANEL_BASE_URL", "https://localhost:2083").strip().rstrip("/")
CPANEL_USERNAME = os.getenv("CPANEL_USERNAME", "").strip()
CPANEL_PASSWORD = os.getenv("CPANEL_PASSWORD", "")
CPANEL_BASE_DIR = os.getenv("CPANEL_BASE_DIR", "public_html").strip()

# Outbound calls fail instead of hanging past this
CPANEL_TIMEOUT = float(os.getenv("CPANEL_TIMEOUT", "15"))
CPANEL_VERIFY_TLS = os.getenv("CPANEL_VERIFY_TLS", "1").strip().lower() not in {"0", "false", "no", "off"}

# File read by /test-cpanel
CPANEL_PROBE_FILE = os.getenv("CPANEL_PROBE_FILE", "about.html").strip()

BLOG_SCRIPT_PATH = os.getenv("BLOG_SCRIPT_PATH", "assets/js/blog.js").strip()

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper()


def default_config() -> dict:
    return {
        "CPANEL_BASE_URL": CPANEL_BASE_URL,
        "CPANEL_USERNAME": CPANEL_USERNAME,
        "CPANEL_PASSWORD": CPANEL_PASSWORD,
        "CPANEL_BASE_DIR": CPANEL_BASE_DIR,
        "CPANEL_TIMEOUT": CPANEL_TIMEOUT,
        "CPANEL_VERIFY_TLS": CPANEL_VERIFY_TLS,
        "CPANEL_PROBE_FILE": CPANEL_PROBE_FILE,
        "BLOG_SCRIPT_PATH": BLOG_SCRIPT_PATH,
    }


def masked(secret: str) -> str:
    if not secret:
        return "<unset>"
    return "***" + secret[-4:] if len(secret) > 8 else "***"
