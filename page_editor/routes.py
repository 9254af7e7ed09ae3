# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify, request

from .blog import insert_article_case
from .config import masked
from .cpanel import CpanelClient
from .errors import EditorError, NotFoundError, RemoteApiError, ValidationError
from .merge import extract_body, merge_page
from .pages import require_valid_filename, slug_from_filename, stylesheets_for

log = logging.getLogger(__name__)

bp = Blueprint("editor", __name__)


# ============================================================
# UTIL
# ============================================================
def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def get_client() -> CpanelClient:
    return current_app.extensions["cpanel"]


def request_data() -> dict:
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def _error_response(err: EditorError, message: str | None = None):
    body = {"success": False, "message": message or err.message, "error_code": err.error_code}
    if err.status_code >= 500:
        body["error"] = err.message
    return jsonify(body), err.status_code


def _internal_error(where: str, err: Exception):
    log.exception("Error in %s endpoint", where)
    return jsonify({"success": False, "message": f"Internal server error: {err}", "error": str(err)}), 500


# ============================================================
# ROUTES
# ============================================================
@bp.get("/healthz")
def healthz():
    return jsonify({"ok": True}), 200


@bp.post("/save")
def save_page():
    try:
        data = request_data()

        if data.get("test"):
            log.info("Test request received")
            return jsonify({"success": True, "message": "Server is working", "timestamp": _timestamp()})

        file = data.get("file")
        content = data.get("content")
        if not file or content is None:
            raise ValidationError("Missing file or content parameter")
        if not isinstance(content, str):
            raise ValidationError("content must be a string")

        filename = require_valid_filename(file)
        slug = slug_from_filename(filename)
        css_files = stylesheets_for(slug)
        log.info("Saving %s (slug %s, %d chars, %d stylesheets)", filename, slug, len(content), len(css_files))

        client = get_client()
        try:
            original = client.read_file(filename)
        except NotFoundError as e:
            return _error_response(e, "Original file not found or could not be read from cPanel")

        merged = merge_page(original, content, css_files)

        try:
            client.write_file(filename, merged)
        except RemoteApiError as e:
            log.error("Failed to save %s to cPanel", filename)
            return _error_response(e, "Failed to save file to cPanel")

        log.info("File saved to cPanel: %s", filename)
        return jsonify(
            {
                "success": True,
                "message": "File saved successfully!",
                "slug": slug,
                "cssFiles": css_files,
                "timestamp": _timestamp(),
            }
        )
    except EditorError as e:
        return _error_response(e)
    except Exception as e:
        return _internal_error("save", e)


@bp.get("/edit/<filename>")
def edit_page(filename):
    try:
        require_valid_filename(filename)

        try:
            html = get_client().read_file(filename)
        except NotFoundError as e:
            return _error_response(e, "File not found in cPanel")

        slug = slug_from_filename(filename)
        return jsonify(
            {
                "success": True,
                "filename": filename,
                "slug": slug,
                "bodyContent": extract_body(html),
                "cssFiles": stylesheets_for(slug),
            }
        )
    except EditorError as e:
        return _error_response(e)
    except Exception as e:
        return _internal_error("edit", e)


@bp.post("/save-blog-article")
def save_blog_article():
    try:
        data = request_data()
        article_id = data.get("articleId")
        title = data.get("title")
        content = data.get("content")

        if not article_id or not title or not content:
            raise ValidationError("Missing required fields: articleId, title, or content")
        if not all(isinstance(v, str) for v in (article_id, title, content)):
            raise ValidationError("articleId, title and content must be strings")

        log.info("Adding article %r (id %s)", title, article_id)

        blog_path = current_app.config["BLOG_SCRIPT_PATH"]
        client = get_client()
        try:
            source = client.read_file(blog_path)
        except NotFoundError as e:
            return _error_response(e, "blog.js not found in cPanel")

        updated = insert_article_case(source, article_id, title, content)

        try:
            client.write_file(blog_path, updated)
        except RemoteApiError as e:
            return _error_response(e, "Failed to save updated blog.js to cPanel")

        log.info("Article %s added to %s", article_id, blog_path)
        return jsonify({"success": True, "message": "Article added to blog.js successfully", "articleId": article_id})
    except EditorError as e:
        return _error_response(e)
    except Exception as e:
        return _internal_error("save-blog-article", e)


@bp.get("/test-cpanel")
def cpanel_diagnostic():
    cfg = current_app.config
    client = get_client()
    log.info(
        "cPanel connection test: user=%s password=%s base_url=%s",
        cfg["CPANEL_USERNAME"] or "<unset>",
        masked(cfg["CPANEL_PASSWORD"]),
        client.base_url,
    )

    try:
        log.info("1/3 Version")
        version = client.version()

        log.info("2/3 Fileman/list_files")
        listing = client.list_files()

        log.info("3/3 Fileman/get_file_content (%s)", cfg["CPANEL_PROBE_FILE"])
        probe = client.call("Fileman/get_file_content", {"dir": client.base_dir, "file": cfg["CPANEL_PROBE_FILE"]}, "GET")
    except RemoteApiError as e:
        log.error("cPanel connection test failed at %s: [%s] %s", e.stage, e.error_code, e.message)
        return (
            jsonify(
                {
                    "success": False,
                    "message": "cPanel connection test failed",
                    "error": e.message,
                    "error_code": e.error_code,
                    "stage": e.stage,
                    "suggestion": "Check cPanel credentials, URL, and API permissions",
                }
            ),
            500,
        )
    except Exception as e:
        return _internal_error("test-cpanel", e)

    files = listing.get("data")
    log.info("cPanel connection test passed")
    return jsonify(
        {
            "success": True,
            "message": "cPanel connection test completed successfully",
            "tests": {
                "version": {"status": version.get("status"), "data": "Version check passed"},
                "list_files": {"status": listing.get("status"), "file_count": len(files) if isinstance(files, list) else 0},
                "file_content": {"status": probe.get("status"), "has_content": bool(probe.get("data"))},
            },
        }
    )
