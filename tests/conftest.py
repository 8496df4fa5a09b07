"""Pytest configuration and shared fixtures for the scrapmd test suite.

This module provides shared fixtures, test configuration, and sample
documents that are used across the entire test suite.
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Generator

import pytest

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Phase, Verbosity, settings

    # Register custom Hypothesis profiles
    settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=20)
    settings.register_profile(
        "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
    )

    # Load profile from environment or use default
    import os

    profile = os.getenv("HYPOTHESIS_PROFILE", "dev")
    settings.load_profile(profile)
except ImportError:
    # Hypothesis not installed, skip configuration
    pass


SCRAPBOX_SAMPLE = (
    "[*** Title]\n"
    "#tag #tag [internal link]\n"
    " item\n"
    "  nested [Rust https://www.rust-lang.org/]\n"
    "code:hello.py\n"
    " print('hello')\n"
)

MARKDOWN_SAMPLE = (
    "# Title\n"
    "#tag [[internal link]] [Rust](https://www.rust-lang.org/)\n"
    "* item\n"
    "  * nested\n"
    "```hello.py\n"
    "print('hello')\n"
    "```\n"
    "| a | b |\n"
    "| --- | --- |\n"
    "| c | d |\n"
)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests using hypothesis")


@pytest.fixture
def temp_dir(tmp_path: Path) -> Generator[Path, None, None]:
    """Provide a temporary directory for test files."""
    yield tmp_path


@pytest.fixture
def scrapbox_sample() -> str:
    """A Scrapbox page touching most of the grammar."""
    return SCRAPBOX_SAMPLE


@pytest.fixture
def markdown_sample() -> str:
    """A Markdown document touching most of the grammar."""
    return MARKDOWN_SAMPLE


@pytest.fixture
def restore_logging() -> Generator[None, None, None]:
    """Put back the root logger handlers replaced by ``configure_logging`` during a test."""
    root = logging.getLogger()
    original = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in original:
            handler.close()
    root.handlers[:] = original
    root.setLevel(level)


STOP_MARKER = "%%"


@pytest.fixture
def stopping_parser():
    """Build a subclass of a parser whose grammar cannot read past ``%%``.

    Both grammars accept any text, so the strict and lenient handling of an
    incomplete parse is exercised through this subclass.
    """

    def _make(parser_class):
        class StoppingParser(parser_class):
            def _page(self, cursor):
                distance = cursor.find(STOP_MARKER)
                if distance < 0:
                    return super()._page(cursor)
                rest, page = super()._page(cursor.window(distance))
                return replace(rest, end=cursor.end), page

            def _block(self, cursor):
                if cursor.startswith(STOP_MARKER):
                    raise cursor.error("unexpected marker")
                return super()._block(cursor)

        return StoppingParser

    return _make
