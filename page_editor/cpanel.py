# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any

import requests

from .errors import NotFoundError, RemoteApiError

log = logging.getLogger(__name__)

UPSTREAM_UNREACHABLE_MSG = "Cannot connect to cPanel (network/DNS)."

# Where a successful Fileman/get_file_content puts the text
SHAPE_DATA_CONTENT = "data.content"
SHAPE_FILE_CONTENT = "data.file.content"


@dataclass(frozen=True)
class FileContent:
    content: str
    shape: str


# ============================================================
# ERROR CLASSIFICATION
# ============================================================
def _classify_request_exception(err: Exception) -> tuple[str, str]:
    if isinstance(err, requests.exceptions.SSLError):
        return "TLS_FAIL", "Cannot establish a secure connection to cPanel (TLS)."
    if isinstance(err, requests.exceptions.Timeout):
        return "OUTBOUND_TIMEOUT", "cPanel did not answer in time."
    if isinstance(err, requests.exceptions.ConnectionError):
        low = str(err).lower()
        dns_markers = [
            "name resolution",
            "name or service not known",
            "temporary failure in name resolution",
            "nodename nor servname",
            "getaddrinfo",
            "failed to resolve",
        ]
        if any(m in low for m in dns_markers):
            return "DNS_FAIL", UPSTREAM_UNREACHABLE_MSG
        return "OUTBOUND_CONNECT_FAIL", UPSTREAM_UNREACHABLE_MSG
    return "OUTBOUND_REQUEST_FAIL", "cPanel request failed."


def _http_error_code(status_code: int) -> str:
    if status_code == 403:
        return "HTTP_403"
    if 500 <= status_code <= 599:
        return "HTTP_5XX"
    return f"HTTP_{status_code}"


def _api_error_message(payload: dict, default: str) -> str:
    errors = payload.get("errors")
    if isinstance(errors, list) and errors:
        return str(errors[0])
    return str(payload.get("message") or default)


def parse_file_content(payload: dict) -> FileContent:
    """Decode a get_file_content response.

    cPanel answers in one of two layouts depending on version:
    ``{"status": 1, "data": {"content": ...}}`` or
    ``{"status": 1, "data": {"file": {"content": ...}}}``.
    """
    if payload.get("status") != 1:
        raise RemoteApiError("API_STATUS", _api_error_message(payload, "Failed to read file from cPanel"))

    data = payload.get("data")
    if isinstance(data, dict):
        if isinstance(data.get("content"), str):
            return FileContent(data["content"], SHAPE_DATA_CONTENT)
        nested = data.get("file")
        if isinstance(nested, dict) and isinstance(nested.get("content"), str):
            return FileContent(nested["content"], SHAPE_FILE_CONTENT)

    raise RemoteApiError("UNKNOWN_SHAPE", "cPanel response carried no file content")


# ============================================================
# CLIENT
# ============================================================
class CpanelClient:
    """Authenticated client for the cPanel UAPI file manager.

    One attempt per call, no retries. Every failure is surfaced as a
    :class:`RemoteApiError` (or :class:`NotFoundError` for reads).
    """

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        base_dir: str = "public_html",
        *,
        timeout: float = 15.0,
        verify: bool = True,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.base_dir = base_dir
        self.timeout = timeout

        s = session or requests.Session()
        s.trust_env = False
        s.auth = (username, password)
        s.verify = verify
        s.headers.update({"Accept": "application/json"})
        self.session = s

    @classmethod
    def from_config(cls, cfg) -> "CpanelClient":
        return cls(
            cfg["CPANEL_BASE_URL"],
            cfg["CPANEL_USERNAME"],
            cfg["CPANEL_PASSWORD"],
            cfg["CPANEL_BASE_DIR"],
            timeout=float(cfg["CPANEL_TIMEOUT"]),
            verify=bool(cfg["CPANEL_VERIFY_TLS"]),
        )

    def call(self, endpoint: str, params: dict[str, Any] | None = None, method: str = "GET") -> dict:
        url = f"{self.base_url}/execute/{endpoint}"
        stage = f"{method} {endpoint}"
        log.info("cPanel request: %s (params: %s)", stage, sorted((params or {}).keys()))

        start = time.monotonic()
        try:
            if method == "POST":
                r = self.session.post(url, data=params or {}, timeout=self.timeout)
            else:
                r = self.session.get(url, params=params or {}, timeout=self.timeout)
        except requests.RequestException as e:
            code, msg = _classify_request_exception(e)
            log.error("cPanel request failed: %s after %dms [%s] %s", stage, _ms_since(start), code, e)
            raise RemoteApiError(code, msg, stage=stage) from e

        elapsed = _ms_since(start)
        log.info("cPanel response: %s -> HTTP %s in %dms (%d chars)", stage, r.status_code, elapsed, len(r.text))

        try:
            payload = r.json()
        except ValueError as e:
            log.error("cPanel returned non-JSON for %s: %r", stage, r.text[:200])
            raise RemoteApiError(
                "INVALID_JSON", f"Invalid JSON response: {r.text[:200]}", stage=stage, http_status=r.status_code
            ) from e

        if not isinstance(payload, dict):
            raise RemoteApiError("INVALID_JSON", "Unexpected JSON response from cPanel", stage=stage, http_status=r.status_code)

        if r.status_code >= 400:
            log.error("cPanel HTTP error for %s: %s", stage, r.status_code)
            raise RemoteApiError(
                _http_error_code(r.status_code),
                f"HTTP error! status: {r.status_code}, message: {payload.get('message') or 'Unknown error'}",
                stage=stage,
                http_status=r.status_code,
            )

        return payload

    # ------------------------------------------------------------
    # File operations
    # ------------------------------------------------------------
    def read_file(self, filename: str) -> str:
        stage = "GET Fileman/get_file_content"
        try:
            payload = self.call("Fileman/get_file_content", {"dir": self.base_dir, "file": filename}, "GET")
            result = parse_file_content(payload)
        except RemoteApiError as e:
            log.error("Error reading %s/%s from cPanel: [%s] %s", self.base_dir, filename, e.error_code, e.message)
            raise NotFoundError(f"Could not read {filename}: {e.message}", stage=e.stage or stage) from e

        if not result.content:
            log.error("cPanel returned an empty file for %s/%s", self.base_dir, filename)
            raise NotFoundError(f"Could not read {filename}: file is empty", stage=stage)

        log.info("Read %s (%d chars, shape %s)", filename, len(result.content), result.shape)
        return result.content

    def write_file(self, filename: str, content: str) -> None:
        stage = "POST Fileman/save_file_content"
        try:
            payload = self.call(
                "Fileman/save_file_content",
                {"dir": self.base_dir, "file": filename, "content": content},
                "POST",
            )
        except RemoteApiError as e:
            log.error("Error writing %s/%s to cPanel: [%s] %s", self.base_dir, filename, e.error_code, e.message)
            raise

        if payload.get("status") != 1:
            msg = _api_error_message(payload, "Failed to write file to cPanel")
            log.error("File write failed for %s/%s: %s", self.base_dir, filename, msg)
            raise RemoteApiError("API_STATUS", msg, stage=stage)

        log.info("Wrote %s (%d chars)", filename, len(content))

    # ------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------
    def version(self) -> dict:
        return self.call("Version", {}, "GET")

    def list_files(self, directory: str | None = None) -> dict:
        return self.call("Fileman/list_files", {"dir": directory or self.base_dir, "show_hidden": 0}, "GET")


def _ms_since(start: float) -> int:
    return int((time.monotonic() - start) * 1000)
