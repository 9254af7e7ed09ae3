# -*- coding: utf-8 -*-
from __future__ import annotations


class EditorError(Exception):
    """Base for every failure a handler turns into a JSON error envelope."""

    status_code = 500
    default_code = "INTERNAL"

    def __init__(self, message: str, error_code: str | None = None, stage: str = ""):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_code
        self.stage = stage


class ValidationError(EditorError):
    """Bad filename or a missing/ill-typed request field."""

    status_code = 400
    default_code = "VALIDATION"


class NotFoundError(EditorError):
    """Remote file could not be read."""

    status_code = 404
    default_code = "NOT_FOUND"


class RemoteApiError(EditorError):
    """Transport failure, non-JSON body or non-OK status from the file API.

    Takes ``error_code`` before ``message``, the reverse of :class:`EditorError`.
    """

    status_code = 500
    default_code = "REMOTE_API"

    def __init__(self, error_code: str, message: str, stage: str = "", *, http_status: int | None = None):
        super().__init__(message, error_code=error_code, stage=stage)
        self.http_status = http_status


class PatchMarkerNotFound(EditorError):
    status_code = 500
    default_code = "PATCH_MARKER_NOT_FOUND"


class DefaultCaseNotFound(PatchMarkerNotFound):
    """The blog script has no recognisable `default:` branch to insert before."""

    def __init__(self, message: str = "Could not find default case in blog.js switch statement"):
        super().__init__(message)
