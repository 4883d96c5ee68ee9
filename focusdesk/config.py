# focusdesk: configuration
# Override paths, chunking and classifier keywords via config.yaml or CLI args.

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import List, Optional

import yaml

from .matrix.classifier import URGENT_KEYWORDS, IMPORTANT_KEYWORDS
from .blueprint.normalizer import DEFAULT_HEADER

logger = logging.getLogger(__name__)

CONFIG_PATH = Path.home() / ".config" / "focusdesk" / "config.yaml"
DB_ENV = "FOCUSDESK_DB"


class ConfigError(Exception):
    """Raised when configuration is invalid or incomplete."""
    pass


@dataclass
class Config:
    """Runtime configuration for focusdesk."""

    # Storage
    db_path: str = "~/.local/share/focusdesk/focusdesk.db"
    export_dir: str = "."

    # Blueprint organizer
    chunk_size: int = 1000
    default_header: str = DEFAULT_HEADER

    # Quadrant classifier (empty = built-in keyword sets)
    urgent_keywords: List[str] = field(default_factory=list)
    important_keywords: List[str] = field(default_factory=list)

    log_level: str = "INFO"

    def resolve(self):
        """Expand ~, apply env overrides and fill keyword defaults."""
        env_db = os.environ.get(DB_ENV)
        if env_db:
            self.db_path = env_db
        self.db_path = str(Path(self.db_path).expanduser())
        self.export_dir = str(Path(self.export_dir).expanduser())

        if not self.urgent_keywords:
            self.urgent_keywords = list(URGENT_KEYWORDS)
        if not self.important_keywords:
            self.important_keywords = list(IMPORTANT_KEYWORDS)
        self.urgent_keywords = [k.strip().lower() for k in self.urgent_keywords]
        self.important_keywords = [k.strip().lower() for k in self.important_keywords]

    def validate(self):
        for name in ("db_path", "export_dir"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(f"{name} must be a non-empty string, got {value!r}")
        if not isinstance(self.chunk_size, int) or isinstance(self.chunk_size, bool) or self.chunk_size < 1:
            raise ConfigError(f"chunk_size must be a positive integer, got {self.chunk_size!r}")
        for name in ("urgent_keywords", "important_keywords"):
            value = getattr(self, name)
            if not isinstance(value, list):
                raise ConfigError(f"{name} must be a list of strings")
            # a blank keyword is a substring of every task
            for kw in value:
                if not isinstance(kw, str) or not kw.strip():
                    raise ConfigError(f"{name} entries must be non-empty strings, got {kw!r}")
        if not isinstance(self.default_header, str) or not self.default_header.strip():
            raise ConfigError("default_header must be a non-empty string")
        if not isinstance(self.log_level, str) or not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ConfigError(f"log_level must name a logging level, got {self.log_level!r}")

    @classmethod
    def load(cls, path: Optional[str] = None, strict: bool = False) -> "Config":
        """
        Load config from YAML file, falling back to defaults.

        With strict=True a broken file raises ConfigError instead of being
        replaced by defaults.
        """
        cfg_path = Path(path).expanduser() if path else CONFIG_PATH
        known = {f.name for f in fields(cls)}
        if cfg_path.exists():
            try:
                with open(cfg_path, "r") as f:
                    data = yaml.safe_load(f) or {}
                if not isinstance(data, dict):
                    raise ConfigError(f"{cfg_path}: top level must be a mapping")
                cfg = cls(**{k: v for k, v in data.items() if k in known})
                cfg.validate()
                cfg.resolve()
                return cfg
            except (yaml.YAMLError, ConfigError, TypeError) as e:
                if strict:
                    if isinstance(e, ConfigError):
                        raise
                    raise ConfigError(f"Cannot load {cfg_path}: {e}") from e
                logger.warning(f"Ignoring invalid config {cfg_path}: {e}")
                cfg = cls()
        elif path and strict:
            raise ConfigError(f"Config file not found: {cfg_path}")
        else:
            cfg = cls()
        cfg.resolve()
        return cfg
