"""Configuration classes for text translation.

This module provides the configuration object that selects a translation
preset, tunes numeric entity unescaping and controls how the command-line
tool decodes input and encodes output.
"""

import codecs
import json
from dataclasses import dataclass, fields, replace
from enum import Enum, auto
from pathlib import Path
from typing import Any, Dict, List, Optional

from .logging import LEVEL_NAMES


class TranslationMode(Enum):
    """Translation presets selectable through configuration."""

    ESCAPE_XML10 = auto()   # Escape for XML 1.0 documents
    ESCAPE_XML11 = auto()   # Escape for XML 1.1 documents
    UNESCAPE_XML = auto()   # Resolve XML entities and numeric references


class UnescapeOption(Enum):
    """Semicolon handling for numeric entity unescaping."""

    SEMICOLON_REQUIRED = auto()   # '&#65' without ';' is left untouched
    SEMICOLON_OPTIONAL = auto()   # '&#65' is decoded as well


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class TranslationConfig:
    """Immutable configuration for translators and the command-line tool.

    Thread-safe due to frozen dataclass implementation.
    """

    mode: TranslationMode = TranslationMode.ESCAPE_XML10
    semicolon: UnescapeOption = UnescapeOption.SEMICOLON_REQUIRED
    remove_unpaired_surrogates: bool = True

    # I/O settings for file and stream translation
    input_encoding: str = "utf-8"
    output_encoding: str = "utf-8"
    input_errors: str = "surrogatepass"
    output_errors: str = "strict"

    # Diagnostics
    logging_level: str = "WARNING"
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate translation configuration."""
        if not isinstance(self.mode, TranslationMode):
            raise ConfigValidationError(
                f"mode must be a TranslationMode, got {self.mode!r}",
                field_name="mode",
                suggestions=[m.name for m in TranslationMode],
            )
        if not isinstance(self.semicolon, UnescapeOption):
            raise ConfigValidationError(
                f"semicolon must be an UnescapeOption, got {self.semicolon!r}",
                field_name="semicolon",
                suggestions=[o.name for o in UnescapeOption],
            )
        for field_name in ("input_encoding", "output_encoding"):
            try:
                codecs.lookup(getattr(self, field_name))
            except (LookupError, TypeError) as e:
                raise ConfigValidationError(
                    f"{field_name} is not a known codec: {getattr(self, field_name)}",
                    field_name=field_name,
                    suggestions=["utf-8", "utf-16", "latin-1"],
                ) from e
        for field_name in ("input_errors", "output_errors"):
            try:
                codecs.lookup_error(getattr(self, field_name))
            except (LookupError, TypeError) as e:
                raise ConfigValidationError(
                    f"{field_name} is not a known error handler: "
                    f"{getattr(self, field_name)}",
                    field_name=field_name,
                    suggestions=["strict", "replace", "surrogatepass"],
                ) from e
        if self.logging_level not in LEVEL_NAMES:
            raise ConfigValidationError(
                f"logging_level must be one of {list(LEVEL_NAMES)}",
                field_name="logging_level",
                suggestions=list(LEVEL_NAMES),
            )

    @classmethod
    def create_preset(cls, preset: str) -> "TranslationConfig":
        """Create configuration preset.

        Args:
            preset: Preset name ('xml10', 'xml11', 'unescape', 'lenient_unescape')

        Returns:
            Configured TranslationConfig instance
        """
        if preset == "xml10":
            return cls(mode=TranslationMode.ESCAPE_XML10)
        if preset == "xml11":
            return cls(mode=TranslationMode.ESCAPE_XML11)
        if preset == "unescape":
            return cls(mode=TranslationMode.UNESCAPE_XML)
        if preset == "lenient_unescape":
            return cls(
                mode=TranslationMode.UNESCAPE_XML,
                semicolon=UnescapeOption.SEMICOLON_OPTIONAL,
                input_errors="replace",
            )
        raise ValueError(f"Unknown preset: {preset}")

    def override(self, **kwargs: Any) -> "TranslationConfig":
        """Create a new configuration with specific overrides.

        Raises:
            ConfigValidationError: If a key is not a configuration field
        """
        known = {f.name for f in fields(self)}
        for key in kwargs:
            if key not in known:
                raise ConfigValidationError(
                    f"Unknown configuration field: {key}",
                    field_name=key,
                    suggestions=sorted(known),
                )
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        result: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            result[f.name] = value.name if isinstance(value, Enum) else value
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TranslationConfig":
        """Create configuration from dictionary.

        Enum fields accept member names; unknown keys are rejected.
        """
        enum_fields = {"mode": TranslationMode, "semicolon": UnescapeOption}
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in data.items():
            if key not in known:
                raise ConfigValidationError(
                    f"Unknown configuration field: {key}",
                    field_name=key,
                    suggestions=sorted(known),
                )
            if key in enum_fields and isinstance(value, str):
                try:
                    value = enum_fields[key][value.upper()]
                except KeyError as e:
                    raise ConfigValidationError(
                        f"Invalid value for {key}: {value}",
                        field_name=key,
                        suggestions=[m.name for m in enum_fields[key]],
                    ) from e
            values[key] = value
        return cls(**values)

    @classmethod
    def from_json(cls, json_str: str) -> "TranslationConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError("Configuration JSON must be an object")
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, config_path: Path) -> "TranslationConfig":
        """Load configuration from a JSON file.

        Raises:
            ConfigError: If the file cannot be read or parsed
        """
        try:
            content = config_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Could not read config file {config_path}: {e}") from e
        return cls.from_json(content)
