"""
Pytest configuration and fixtures for Cynthia tests
"""

import os
import sys
from pathlib import Path

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH120

from cynthia.config import Settings  # noqa: E402
from cynthia.plugins.dispatcher import HookDispatcher  # noqa: E402
from cynthia.schemas.mode import ModeInfo  # noqa: E402
from cynthia.services.page_assembler import PageAssembler  # noqa: E402

from utils.mocks import MockMetadataStore, MockModeResolver, MockScriptRunner, make_record  # noqa: E402
from utils.site import SITE_NAME, build_site  # noqa: E402


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """A complete site on disk"""
    return build_site(tmp_path)


@pytest.fixture
def site_settings(site_root: Path) -> Settings:
    """Settings pointing at the on-disk site"""
    return Settings(site_root=site_root, trace_plugin_commands=True)


@pytest.fixture
def mock_runner():
    runner = MockScriptRunner()
    yield runner
    runner.clear()


@pytest.fixture
def default_mode(site_root: Path) -> ModeInfo:
    return ModeInfo(
        name="default",
        stylesheet_path=site_root / "cynthiaFiles" / "styles" / "s.css",
        post_template="post",
        page_template="page",
        site_name=SITE_NAME,
    )


@pytest.fixture
def metadata_store() -> MockMetadataStore:
    return MockMetadataStore([make_record("p1", "T", "post"), make_record("info", "Info", "page", mode="default")])


@pytest.fixture
def mode_resolver(default_mode: ModeInfo) -> MockModeResolver:
    return MockModeResolver({"default": default_mode})


@pytest.fixture
def assembler(site_root, metadata_store, mode_resolver, mock_runner) -> PageAssembler:
    """Page assembler over mock collaborators and the on-disk templates"""
    return PageAssembler(
        metadata_store,
        mode_resolver,
        HookDispatcher(mock_runner, site_root / "plugins"),
        site_root / "cynthiaFiles" / "templates",
        site_root / "src" / "client.js",
        version="9.9.9",
    )
