"""Storage backends for the persisted configuration.

The resolver never touches the filesystem directly; it reads and writes
the raw YAML text through a ConfigStore. FileConfigStore is used in
production, MemoryConfigStore in tests and embedded use.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config.yaml")


class ConfigStoreError(Exception):
    """Raised when the persisted configuration cannot be read or written."""


class ConfigStore(ABC):
    """Abstract interface for the persisted configuration text."""

    @property
    @abstractmethod
    def location(self) -> str:
        """Human-readable description of where the configuration lives."""
        ...

    @abstractmethod
    def read(self) -> str:
        """Return the stored text.

        Raises:
            ConfigStoreError: If nothing is stored or it cannot be read.
        """
        ...

    @abstractmethod
    def write(self, text: str) -> None:
        """Replace the stored text.

        Raises:
            ConfigStoreError: If the text cannot be written.
        """
        ...


class FileConfigStore(ConfigStore):
    """Configuration kept in a YAML file.

    A relative path is resolved against the working directory at the
    time of each read or write.
    """

    def __init__(self, path: Path | str | None = None) -> None:
        self._path = Path(path) if path else DEFAULT_CONFIG_PATH

    @property
    def path(self) -> Path:
        return self._path

    @property
    def location(self) -> str:
        return str(self._path)

    def read(self) -> str:
        try:
            return self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigStoreError(f"Cannot read config file {self._path}: {e}") from e

    def write(self, text: str) -> None:
        try:
            with open(self._path, "w", encoding="utf-8") as f:
                f.write(text)
        except OSError as e:
            raise ConfigStoreError(f"Cannot write config file {self._path}: {e}") from e
        logger.debug("Wrote %d bytes to %s", len(text), self._path)


class MemoryConfigStore(ConfigStore):
    """Configuration kept in memory. ``text=None`` behaves like a missing file."""

    def __init__(self, text: str | None = None) -> None:
        self.text = text
        self.write_count = 0

    @property
    def location(self) -> str:
        return "<memory>"

    def read(self) -> str:
        if self.text is None:
            raise ConfigStoreError("No configuration stored in memory")
        return self.text

    def write(self, text: str) -> None:
        self.text = text
        self.write_count += 1
