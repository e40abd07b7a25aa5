"""Resolution of the effective configuration.

The base configuration comes from the store; each environment variable
that is set to a non-empty string replaces the one setting it maps to.
Nothing is cached: every call reads the store again.
"""

from __future__ import annotations

import logging
import os
import threading
from typing import Any, Mapping

import yaml
from pydantic import ValidationError

from searchconf.config.merge import deep_merge
from searchconf.config.schema import (
    Config,
    empty_store_data,
    iter_leaves,
    leaf_for_path,
    leaf_value,
)
from searchconf.config.store import ConfigStore, ConfigStoreError, FileConfigStore

logger = logging.getLogger(__name__)


def dump_config_yaml(data: Mapping[str, Any]) -> str:
    """Serialize store-layout data to YAML text.

    Raises:
        ConfigStoreError: If the data holds values YAML cannot represent.
    """
    try:
        return yaml.safe_dump(dict(data), default_flow_style=False, sort_keys=False)
    except yaml.YAMLError as e:
        raise ConfigStoreError(f"Cannot serialize configuration: {e}") from e


class ConfigResolver:
    """Reads, overrides and updates the searchconf configuration.

    Args:
        store: Where the configuration is persisted. Defaults to
            ``config.yaml`` in the working directory.
        environ: Source of override variables. Defaults to ``os.environ``,
            looked up on every call.
    """

    def __init__(
        self,
        store: ConfigStore | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._store = store or FileConfigStore()
        self._environ = environ
        self._write_lock = threading.Lock()

    @property
    def store(self) -> ConfigStore:
        return self._store

    @property
    def environ(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def _read_store(self) -> dict[str, Any]:
        data = yaml.safe_load(self._store.read())
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Top-level YAML must be a mapping, got: {type(data).__name__}")
        return data

    def _load(self) -> tuple[dict[str, Any], Config]:
        try:
            raw = self._read_store()
            return raw, Config.model_validate(raw)
        except (ConfigStoreError, yaml.YAMLError, ValueError) as e:
            logger.warning("Failed to load config file %s: %s", self._store.location, e)
            return empty_store_data(), Config()

    def load_base(self) -> Config:
        """Return the stored configuration without environment overrides.

        Never raises; an absent or malformed store gives ``Config()``.
        """
        return self._load()[1]

    def resolve_effective(self) -> Config:
        """Return the stored configuration with environment overrides applied."""
        data = self.load_base().model_dump(by_alias=True)
        environ = self.environ
        for spec in iter_leaves():
            value = environ.get(spec.env)
            if not value:
                continue
            section = data
            for key in spec.path[:-1]:
                section = section[key]
            section[spec.path[-1]] = value
        return Config.model_validate(data)

    def get(self, dotted: str) -> str:
        """Read one effective setting by dotted path (``MODELS.OPENAI.API_KEY``).

        Raises:
            KeyError: If the path does not name a setting.
        """
        spec = leaf_for_path(dotted)
        return leaf_value(self.resolve_effective(), spec)

    def env_sources(self) -> dict[str, str]:
        """Report where each effective setting comes from.

        Values are ``"env"``, ``"store"`` or ``"unset"``, keyed by dotted path.
        """
        base = self.load_base()
        environ = self.environ
        sources: dict[str, str] = {}
        for spec in iter_leaves():
            if environ.get(spec.env):
                sources[spec.dotted] = "env"
            elif leaf_value(base, spec):
                sources[spec.dotted] = "store"
            else:
                sources[spec.dotted] = "unset"
        return sources

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def persist_update(self, update: Mapping[str, Any]) -> Config:
        """Merge a partial configuration into the store and write it back.

        Returns the new base configuration. Keys already in the store,
        including ones searchconf does not know, are kept unless the update
        replaces them. Calls on one resolver are serialized; separate
        processes writing the same file are not.

        Raises:
            ConfigStoreError: If the result cannot be serialized or written,
                or would leave a setting that is not a string.
        """
        with self._write_lock:
            raw, _ = self._load()
            current = deep_merge(empty_store_data(), raw)
            merged = deep_merge(current, update)
            try:
                config = Config.model_validate(merged)
            except ValidationError as e:
                raise ConfigStoreError(f"Cannot apply configuration update: {e}") from e
            self._store.write(dump_config_yaml(merged))
        logger.info("Saved configuration update to %s", self._store.location)
        return config

    # ------------------------------------------------------------------
    # Getters
    # ------------------------------------------------------------------

    def get_similarity_measure(self) -> str:
        return self.resolve_effective().general.similarity_measure

    def get_keep_alive(self) -> str:
        return self.resolve_effective().general.keep_alive

    def get_openai_api_key(self) -> str:
        return self.resolve_effective().models.openai.api_key

    def get_groq_api_key(self) -> str:
        return self.resolve_effective().models.groq.api_key

    def get_anthropic_api_key(self) -> str:
        return self.resolve_effective().models.anthropic.api_key

    def get_gemini_api_key(self) -> str:
        return self.resolve_effective().models.gemini.api_key

    def get_searxng_api_endpoint(self) -> str:
        return self.resolve_effective().api_endpoints.searxng

    def get_ollama_api_endpoint(self) -> str:
        return self.resolve_effective().models.ollama.api_url

    def get_custom_openai_api_key(self) -> str:
        return self.resolve_effective().models.custom_openai.api_key

    def get_custom_openai_api_url(self) -> str:
        return self.resolve_effective().models.custom_openai.api_url

    def get_custom_openai_model_name(self) -> str:
        return self.resolve_effective().models.custom_openai.model_name
