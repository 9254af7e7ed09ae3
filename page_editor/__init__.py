# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
from typing import Mapping

from flask import Flask, jsonify, request

from .config import default_config
from .cpanel import CpanelClient

log = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization, Accept",
}


def _describe_body() -> str:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = request.form.to_dict()
    parts = []
    for k, v in data.items():
        parts.append(f"{k}({len(v)} chars)" if isinstance(v, str) and len(v) > 80 else f"{k}={v!r}")
    return ", ".join(parts) or "<empty>"


def create_app(overrides: Mapping | None = None, client: CpanelClient | None = None) -> Flask:
    app = Flask(__name__)
    app.config.update(default_config())
    if overrides:
        app.config.update(overrides)

    app.extensions["cpanel"] = client or CpanelClient.from_config(app.config)

    @app.before_request
    def _preflight_and_log():
        if request.method == "OPTIONS":
            return "", 200
        log.info("%s %s", request.method, request.full_path.rstrip("?"))
        if request.method == "POST":
            log.info("Request body: %s", _describe_body())
        return None

    @app.after_request
    def _cors(resp):
        for k, v in CORS_HEADERS.items():
            resp.headers[k] = v
        return resp

    @app.errorhandler(404)
    def _json_404(err):
        return jsonify(success=False, message="Not found", error_code="NOT_FOUND"), 404

    @app.errorhandler(405)
    def _json_405(err):
        resp = jsonify(success=False, message="Method not allowed", error_code="METHOD_NOT_ALLOWED")
        allow = getattr(err, "valid_methods", None)
        if allow:
            resp.headers["Allow"] = ", ".join(allow)
        return resp, 405

    from .routes import bp

    app.register_blueprint(bp)
    return app
