"""
Pytest fixtures for plainweb tests.
"""

from pathlib import Path

import pytest

from plainweb.compiler import CompilerConfig
from plainweb.site_model import ToolCall
from plainweb.tests.stubs import SOURCE_MTIME_NS, StubModelClient, set_mtime


@pytest.fixture
def sample_calls() -> list[ToolCall]:
    """A small but complete plan."""
    return [
        ToolCall("set_layout", {"header_html": "<header>Site</header>", "footer_html": "<footer>End</footer>"}),
        ToolCall("create_page", {"path": "/", "content": "<p>Now: {{CURRENT_TIME}}</p>"}),
        ToolCall("add_dynamic_content", {"path": "/", "placeholder": "{{CURRENT_TIME}}", "type": "CURRENT_TIME"}),
        ToolCall("create_page", {"path": "/about", "content": "<h1>About</h1>{{HERO}}"}),
        ToolCall(
            "add_asset",
            '{"path": "/about", "asset": "test.png", "alt": "Hero", '
            '"placement": "replace_placeholder", "placeholder": "{{HERO}}"}',
        ),
    ]


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A project with app.txt and one image asset."""
    source = tmp_path / "app.txt"
    source.write_text(
        "A home page showing the current time and an about page with the test image.",
        encoding="utf-8",
    )
    set_mtime(source, SOURCE_MTIME_NS)

    images = tmp_path / "assets" / "images"
    images.mkdir(parents=True)
    (images / "test.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    return tmp_path


@pytest.fixture
def config(project_dir: Path) -> CompilerConfig:
    """Config for project_dir with a dummy API key."""
    return CompilerConfig.for_project(project_dir, api_key="test-key")


@pytest.fixture
def stub_client(sample_calls) -> StubModelClient:
    return StubModelClient(sample_calls)
