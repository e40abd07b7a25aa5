"""Shared test fixtures for the searchconf test suite.

Provides in-memory stores, sample store content and a clean environment
so the host's API keys never leak into assertions.
"""

from __future__ import annotations

import logging
import textwrap
from typing import Iterator

import pytest

from searchconf.config import set_default_resolver
from searchconf.config.resolver import ConfigResolver
from searchconf.config.schema import iter_leaves
from searchconf.config.store import MemoryConfigStore


SAMPLE_STORE = textwrap.dedent(
    """\
    GENERAL:
      SIMILARITY_MEASURE: cosine
      KEEP_ALIVE: 5m
    MODELS:
      OPENAI:
        API_KEY: FILE_KEY
      GROQ:
        API_KEY: X
      ANTHROPIC:
        API_KEY: ""
      GEMINI:
        API_KEY: ""
      OLLAMA:
        API_URL: http://localhost:11434
      CUSTOM_OPENAI:
        API_URL: ""
        API_KEY: ""
        MODEL_NAME: ""
    API_ENDPOINTS:
      SEARXNG: http://localhost:32768
    """
)


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Remove every override variable and the shared resolver."""
    for spec in iter_leaves():
        monkeypatch.delenv(spec.env, raising=False)
    monkeypatch.delenv("SEARCHCONF_CONFIG_PATH", raising=False)
    set_default_resolver(None)
    yield
    set_default_resolver(None)
    logger = logging.getLogger("searchconf")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


# ---------------------------------------------------------------------------
# Store Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_store_text() -> str:
    return SAMPLE_STORE


@pytest.fixture
def memory_store(sample_store_text: str) -> MemoryConfigStore:
    """An in-memory store holding the sample configuration."""
    return MemoryConfigStore(sample_store_text)


@pytest.fixture
def empty_store() -> MemoryConfigStore:
    """An in-memory store with nothing in it (like a missing file)."""
    return MemoryConfigStore()


@pytest.fixture
def resolver(memory_store: MemoryConfigStore) -> ConfigResolver:
    """A resolver over the sample store with no environment overrides."""
    return ConfigResolver(memory_store, environ={})
