from __future__ import annotations

import pytest

from page_editor import create_app
from page_editor.errors import NotFoundError, RemoteApiError


class FakeCpanel:
    """In-memory stand-in for CpanelClient keyed by filename."""

    base_url = "https://cpanel.test:2083"
    base_dir = "public_html"

    def __init__(self, files: dict[str, str] | None = None):
        self.files = dict(files or {})
        self.writes: list[tuple[str, str]] = []
        self.fail_write: RemoteApiError | None = None

    def read_file(self, filename: str) -> str:
        content = self.files.get(filename)
        if not content:
            raise NotFoundError(f"Could not read {filename}: missing")
        return content

    def write_file(self, filename: str, content: str) -> None:
        if self.fail_write is not None:
            raise self.fail_write
        self.writes.append((filename, content))
        self.files[filename] = content


@pytest.fixture
def cpanel() -> FakeCpanel:
    return FakeCpanel()


@pytest.fixture
def app(cpanel: FakeCpanel):
    app = create_app({"TESTING": True, "BLOG_SCRIPT_PATH": "assets/js/blog.js"}, client=cpanel)
    return app


@pytest.fixture
def client(app):
    return app.test_client()
