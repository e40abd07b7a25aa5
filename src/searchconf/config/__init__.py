"""Configuration management for searchconf.

Loads the YAML configuration store into Pydantic models, overlays
environment variables, and writes partial updates back to the store.
"""

from searchconf.config.accessors import (
    get_anthropic_api_key,
    get_custom_openai_api_key,
    get_custom_openai_api_url,
    get_custom_openai_model_name,
    get_gemini_api_key,
    get_groq_api_key,
    get_keep_alive,
    get_ollama_api_endpoint,
    get_openai_api_key,
    get_searxng_api_endpoint,
    get_similarity_measure,
    set_default_resolver,
    update_config,
)
from searchconf.config.merge import deep_merge
from searchconf.config.resolver import ConfigResolver
from searchconf.config.schema import Config
from searchconf.config.store import (
    ConfigStore,
    ConfigStoreError,
    FileConfigStore,
    MemoryConfigStore,
)

__all__ = [
    "Config",
    "ConfigResolver",
    "ConfigStore",
    "ConfigStoreError",
    "FileConfigStore",
    "MemoryConfigStore",
    "deep_merge",
    "get_anthropic_api_key",
    "get_custom_openai_api_key",
    "get_custom_openai_api_url",
    "get_custom_openai_model_name",
    "get_gemini_api_key",
    "get_groq_api_key",
    "get_keep_alive",
    "get_ollama_api_endpoint",
    "get_openai_api_key",
    "get_searxng_api_endpoint",
    "get_similarity_measure",
    "set_default_resolver",
    "update_config",
]
