"""Pytest configuration and shared fixtures for the mailpost test suite."""

import logging
from pathlib import Path

import pytest
from utils import RecordingMailComposer, ScriptedPromptProvider

from mailpost.config import BlogConfig

MARKER = "<!-- end of post -->"


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture(autouse=True)
def _reset_mailpost_logger():
    """Undo handlers and levels installed by CLI runs."""
    yield
    logger = logging.getLogger("mailpost")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch, tmp_path):
    """Keep the user's config files and MAILPOST_* variables out of tests."""
    import os

    for key in list(os.environ):
        if key.startswith("MAILPOST_"):
            monkeypatch.delenv(key)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def posts_dir(tmp_path) -> Path:
    """Empty directory for post files."""
    path = tmp_path / "posts"
    path.mkdir()
    return path


@pytest.fixture
def config(posts_dir) -> BlogConfig:
    """Configuration without a converter."""
    return BlogConfig(
        posts_directory=posts_dir,
        recipient="secret123@post.example.com",
        categories=("General", "Travel"),
        default_tags="notes",
    )


@pytest.fixture
def converter_config(config) -> BlogConfig:
    """Configuration with a converter and the default cutoff marker."""
    return config.create_updated(converter="markdown", cutoff_marker=MARKER)


@pytest.fixture
def mailer() -> RecordingMailComposer:
    return RecordingMailComposer()


@pytest.fixture
def yes_prompts() -> ScriptedPromptProvider:
    """Prompt provider that confirms once and accepts defaults."""
    return ScriptedPromptProvider(answers=[None, None, None], confirmations=[True])
