"""Configuration Management Package"""

import json
import sys
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

from gic import MAX_PROMPT_CHARS, PROMPT_OVERHEAD, HISTORY_LIMIT
from gic.prompts.budget import PromptBudget

DEFAULT_MODEL = "claude-3-7-sonnet-20250219"


@dataclass
class Config:
    """User configuration with sensible defaults."""
    model: str = DEFAULT_MODEL
    max_tokens: int = 2048
    max_prompt_chars: int = MAX_PROMPT_CHARS
    prompt_overhead: int = PROMPT_OVERHEAD
    history_limit: int = HISTORY_LIMIT
    auto_stage: bool = True
    confirm: bool = True

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}

    def budget(self) -> PromptBudget:
        return PromptBudget(max_chars=self.max_prompt_chars, overhead_chars=self.prompt_overhead)

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults after warning.
        """
        warnings = []
        defaults = Config()

        if not isinstance(self.model, str) or not self.model.strip():
            warnings.append(f"Invalid model '{self.model}', using '{defaults.model}'")
            self.model = defaults.model

        for name in ('max_tokens', 'max_prompt_chars', 'history_limit'):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                warnings.append(f"Invalid {name} '{value}', using {getattr(defaults, name)}")
                setattr(self, name, getattr(defaults, name))

        if not isinstance(self.prompt_overhead, int) or isinstance(self.prompt_overhead, bool) or self.prompt_overhead < 0:
            warnings.append(f"Invalid prompt_overhead '{self.prompt_overhead}', using {defaults.prompt_overhead}")
            self.prompt_overhead = defaults.prompt_overhead

        for name in ('auto_stage', 'confirm'):
            if not isinstance(getattr(self, name), bool):
                warnings.append(f"Invalid {name} '{getattr(self, name)}', using {str(getattr(defaults, name)).lower()}")
                setattr(self, name, getattr(defaults, name))

        return warnings

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        config = cls(**filtered)
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config


class ConfigManager:
    """Manages loading and saving configuration.

    Lookup order:
    1. .gicrc in current directory
    2. .gicrc in home directory
    3. Defaults
    """

    CONFIG_FILENAME = ".gicrc"

    def __init__(self):
        self._config: Optional[Config] = None
        self._config_path: Optional[Path] = None

    def load(self) -> Config:
        if self._config is not None:
            return self._config

        for path in (Path.cwd() / self.CONFIG_FILENAME, Path.home() / self.CONFIG_FILENAME):
            if path.exists():
                self._config = self._load_from_file(path)
                self._config_path = path
                return self._config

        self._config = Config()
        return self._config

    def _load_from_file(self, path: Path) -> Config:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("expected a JSON object")
            return Config.from_dict(data)
        except (json.JSONDecodeError, ValueError, OSError) as e:
            print(f"Warning: Could not load {path}: {e}", file=sys.stderr)
            return Config()

    def get_config_path(self) -> Optional[Path]:
        return self._config_path


_manager = ConfigManager()


def load_config() -> Config:
    return _manager.load()


def get_config_path() -> Optional[Path]:
    return _manager.get_config_path()


__all__ = [
    "Config",
    "ConfigManager",
    "DEFAULT_MODEL",
    "load_config",
    "get_config_path",
]
