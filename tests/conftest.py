"""Pytest configuration and shared fixtures for the md2delta test suite.

This module registers the test markers and provides the sample documents
shared across unit and integration tests.
"""

import logging
import os

import pytest

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Verbosity, settings

    settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=30)

    settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
except ImportError:
    # Hypothesis not installed; property tests import it themselves
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - full markdown to Delta pipeline")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "property: Property-based tests using Hypothesis")


@pytest.fixture
def sample_markdown() -> str:
    """Provide a markdown document touching every built-in handler.

    Returns
    -------
    str
        Markdown text

    """
    return """# Sample Document

This is a **sample** with *italic text*, ~~struck~~ and `inline code`.

> Quoted line

- Item 1
- Item 2
  1. Nested first

[a link](https://example.com) and ![alt text](image.png)

```python
print("hi")
```
"""


@pytest.fixture
def isolated_cwd(tmp_path, monkeypatch):
    """Run the test inside an empty directory with an empty home directory.

    Keeps config discovery from picking up files outside the test.
    """
    work_dir = tmp_path / "work"
    home_dir = tmp_path / "home"
    work_dir.mkdir()
    home_dir.mkdir()
    monkeypatch.chdir(work_dir)
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setenv("USERPROFILE", str(home_dir))
    monkeypatch.delenv("MD2DELTA_CONFIG", raising=False)
    return work_dir


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo root logger changes made by the CLI's configure_logging."""
    root_logger = logging.getLogger()
    saved_handlers = list(root_logger.handlers)
    saved_level = root_logger.level
    yield
    root_logger.handlers[:] = saved_handlers
    root_logger.setLevel(saved_level)
