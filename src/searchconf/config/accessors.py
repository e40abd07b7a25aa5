"""Module-level access to the effective configuration.

Callers that do not want to carry a ConfigResolver around use these
functions. They share one resolver, created on first use from
ResolverSettings; tests and embedders can replace it with
``set_default_resolver``.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Mapping

from searchconf.config.resolver import ConfigResolver
from searchconf.config.schema import Config
from searchconf.config.settings import load_resolver_settings
from searchconf.config.store import FileConfigStore

logger = logging.getLogger(__name__)

_default_resolver: ConfigResolver | None = None
_default_lock = threading.Lock()


def get_resolver() -> ConfigResolver:
    global _default_resolver
    if _default_resolver is None:
        with _default_lock:
            if _default_resolver is None:
                settings = load_resolver_settings()
                _default_resolver = ConfigResolver(FileConfigStore(settings.config_path))
                logger.debug("Using configuration store %s", settings.config_path)
    return _default_resolver


def set_default_resolver(resolver: ConfigResolver | None) -> None:
    """Replace the shared resolver. ``None`` recreates it on next use."""
    global _default_resolver
    with _default_lock:
        _default_resolver = resolver


def get_similarity_measure() -> str:
    return get_resolver().get_similarity_measure()


def get_keep_alive() -> str:
    return get_resolver().get_keep_alive()


def get_openai_api_key() -> str:
    return get_resolver().get_openai_api_key()


def get_groq_api_key() -> str:
    return get_resolver().get_groq_api_key()


def get_anthropic_api_key() -> str:
    return get_resolver().get_anthropic_api_key()


def get_gemini_api_key() -> str:
    return get_resolver().get_gemini_api_key()


def get_searxng_api_endpoint() -> str:
    return get_resolver().get_searxng_api_endpoint()


def get_ollama_api_endpoint() -> str:
    return get_resolver().get_ollama_api_endpoint()


def get_custom_openai_api_key() -> str:
    return get_resolver().get_custom_openai_api_key()


def get_custom_openai_api_url() -> str:
    return get_resolver().get_custom_openai_api_url()


def get_custom_openai_model_name() -> str:
    return get_resolver().get_custom_openai_model_name()


def update_config(update: Mapping[str, Any]) -> Config:
    """Persist a partial configuration through the shared resolver."""
    return get_resolver().persist_update(update)
