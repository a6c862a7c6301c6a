"""Loading and saving the user configuration as a JSON file."""

from __future__ import annotations

import abc
import json
import logging
from pathlib import Path
from typing import Any

_log = logging.getLogger(__name__)


class ConfigurationManagement(abc.ABC):
    """Reads and writes a JSON file; subclasses map it onto a configuration object."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    @abc.abstractmethod
    def read_project_configuration(self, data: Any, conf: Any) -> None:
        """Fill ``conf`` from the parsed JSON ``data``."""

    @abc.abstractmethod
    def write_project_configuration(self, conf: Any, data: dict) -> None:
        """Store ``conf`` into the JSON object ``data``."""

    def read_configuration(self, conf: Any) -> None:
        """Update ``conf`` from the file.

        A missing file leaves ``conf`` untouched; an unreadable one is treated
        as empty, so the project reader falls back to its defaults.
        """
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError:
            _log.error("Failed to open file for reading, using default configuration.")
            return
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            _log.warning("Failed to read file, using default configuration.")
            data = {}
        self.read_project_configuration(data, conf)

    def write_configuration(self, conf: Any) -> None:
        """Write ``conf`` to the file, replacing what was there."""
        data: dict = {}
        self.write_project_configuration(conf, data)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as file:
            json.dump(data, file)