"""
Address Book Configuration

Configuration management with YAML files, environment variables and
validation.

Configuration Sources (in order of precedence):
    1. Environment variables (ADDRESSBOOK_*)
    2. Runtime overrides
    3. Project config file (./addressbook.yaml, ./config/addressbook.yaml)
    4. User config file (~/.addressbook/config.yaml)
    5. Default values

The files in 3 and 4 are read once, when the manager is first created;
./addressbook.yaml wins over ./config/addressbook.yaml, which wins over the
user file. YAML documents are checked against the JSON Schema produced by
export_schema() before any value is applied.

Copyright (c) 2026 Momentum. All rights reserved.
Contact: engineering@momentum.inc
"""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar, Union

import yaml
from jsonschema import Draft202012Validator

T = TypeVar("T")


class ConfigError(Exception):
    """Configuration error."""
    pass


class ValidationError(ConfigError):
    """Configuration validation error."""
    pass


@dataclass
class ConfigValue(Generic[T]):
    """
    A single configuration value with metadata.

    Supports default values, environment variable binding,
    validation, and change callbacks.
    """
    default: T
    env_var: Optional[str] = None
    description: str = ""
    validator: Optional[Callable[[T], bool]] = None
    _value: Optional[T] = field(default=None, repr=False)
    _callbacks: List[Callable[[T, T], None]] = field(default_factory=list, repr=False)

    def get(self) -> T:
        """Get the current value."""
        # Check environment variable first
        if self.env_var and self.env_var in os.environ:
            env_value = os.environ[self.env_var]
            return self._coerce(env_value)

        # Return set value or default
        return self._value if self._value is not None else self.default

    def set(self, value: T) -> None:
        """Set the value with validation."""
        if self.validator and not self.validator(value):
            raise ValidationError(f"Invalid value for config: {value}")

        old_value = self._value
        self._value = value

        # Notify callbacks
        for callback in self._callbacks:
            callback(old_value, value)

    def reset(self) -> None:
        self._value = None

    def _coerce(self, value: str) -> T:
        """Coerce string value to target type."""
        target_type = type(self.default)

        if target_type == bool:
            return value.lower() in ("true", "1", "yes", "on")  # type: ignore
        elif target_type == int:
            return int(value)  # type: ignore
        else:
            return value  # type: ignore

    def on_change(self, callback: Callable[[T, T], None]) -> None:
        """Register a change callback."""
        self._callbacks.append(callback)


@dataclass
class RenderConfig:
    """Configuration for label rendering and registry dumps."""
    color: ConfigValue[bool] = field(default_factory=lambda: ConfigValue(
        default=True,
        env_var="ADDRESSBOOK_COLOR",
        description="Emit ANSI colors in rewritten text and reports",
    ))
    annotate_roles: ConfigValue[bool] = field(default_factory=lambda: ConfigValue(
        default=True,
        env_var="ADDRESSBOOK_ANNOTATE_ROLES",
        description="Append a [role] tag after labels substituted into text",
    ))
    rule_width: ConfigValue[int] = field(default_factory=lambda: ConfigValue(
        default=80,
        env_var="ADDRESSBOOK_RULE_WIDTH",
        description="Width of the horizontal rules in registry dumps",
        validator=lambda x: 20 <= x <= 400,
    ))
    label_width: ConfigValue[int] = field(default_factory=lambda: ConfigValue(
        default=30,
        env_var="ADDRESSBOOK_LABEL_WIDTH",
        description="Column width of labels in registry dumps",
        validator=lambda x: 1 <= x <= 200,
    ))


@dataclass
class RegistryConfig:
    """Configuration for new registries."""
    register_defaults: ConfigValue[bool] = field(default_factory=lambda: ConfigValue(
        default=True,
        env_var="ADDRESSBOOK_REGISTER_DEFAULTS",
        description="Pre-register the well-known executable addresses",
    ))


@dataclass
class SessionConfig:
    """Configuration for debug sessions."""
    dump_on_failure: ConfigValue[bool] = field(default_factory=lambda: ConfigValue(
        default=True,
        env_var="ADDRESSBOOK_DUMP_ON_FAILURE",
        description="Append the full registry dump to failure reports",
    ))


@dataclass
class ObservabilityConfig:
    """Configuration for Observability."""
    log_level: ConfigValue[str] = field(default_factory=lambda: ConfigValue(
        default="info",
        env_var="ADDRESSBOOK_LOG_LEVEL",
        description="Log level (debug, info, warning, error)",
        validator=lambda x: x in ("debug", "info", "warning", "error", "critical"),
    ))
    log_format: ConfigValue[str] = field(default_factory=lambda: ConfigValue(
        default="json",
        env_var="ADDRESSBOOK_LOG_FORMAT",
        description="Log format (json, text)",
        validator=lambda x: x in ("json", "text"),
    ))


@dataclass
class AddressBookConfig:
    """
    Root configuration for the address book.

    Aggregates all component configurations and provides
    loading/saving functionality.
    """
    render: RenderConfig = field(default_factory=RenderConfig)
    registry: RegistryConfig = field(default_factory=RegistryConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    observability: ObservabilityConfig = field(default_factory=ObservabilityConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        def extract_values(obj: Any) -> Any:
            if isinstance(obj, ConfigValue):
                return obj.get()
            elif hasattr(obj, "__dataclass_fields__"):
                return {k: extract_values(getattr(obj, k)) for k in obj.__dataclass_fields__}
            return obj

        return extract_values(self)

    def to_yaml(self) -> str:
        """Convert to YAML string."""
        return yaml.dump(self.to_dict(), default_flow_style=False)


_JSON_TYPES = {bool: "boolean", int: "integer", str: "string"}


class ConfigManager:
    """
    Configuration manager with file loading and environment binding.

    Thread-safe singleton that manages configuration lifecycle.
    """

    _instance: Optional["ConfigManager"] = None
    _lock = threading.Lock()

    def __new__(cls) -> "ConfigManager":
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._initialized = False
            return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._config = AddressBookConfig()
        self._config_paths: List[Path] = []
        self._watchers: List[Callable[[AddressBookConfig], None]] = []
        # A bad file leaves the manager uninitialized so the next call retries
        self.load_defaults()
        self._initialized = True

    @property
    def config(self) -> AddressBookConfig:
        """Get the current configuration."""
        return self._config

    def load_from_file(self, path: Union[str, Path]) -> None:
        """Load configuration from a YAML file."""
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if data:
            errors = self.validate_document(data)
            if errors:
                raise ValidationError(f"{path}: " + "; ".join(errors))
            self._apply_dict(data)
            if path not in self._config_paths:
                self._config_paths.append(path)

    def load_defaults(self) -> None:
        """Load default configuration files if they exist."""
        default_paths = [
            Path.home() / ".addressbook" / "config.yaml",
            Path("config/addressbook.yaml"),
            Path("addressbook.yaml"),
        ]

        # Later files override earlier ones
        for path in default_paths:
            if path.exists():
                self.load_from_file(path)

    def _apply_dict(self, data: Dict[str, Any]) -> None:
        """Apply dictionary values to configuration."""
        def apply_to_config(config_obj: Any, values: Dict[str, Any]) -> None:
            for key, value in values.items():
                if hasattr(config_obj, key):
                    attr = getattr(config_obj, key)
                    if isinstance(attr, ConfigValue):
                        attr.set(value)
                    elif hasattr(attr, "__dataclass_fields__") and isinstance(value, dict):
                        apply_to_config(attr, value)

        apply_to_config(self._config, data)

    def set(self, path: str, value: Any) -> None:
        """
        Set a configuration value by path.

        Example: config.set("render.color", False)
        """
        parts = path.split(".")
        obj = self._config

        try:
            for part in parts[:-1]:
                obj = getattr(obj, part)
            attr = getattr(obj, parts[-1])
        except AttributeError:
            raise ConfigError(f"Invalid config path: {path}") from None

        if isinstance(attr, ConfigValue):
            attr.set(value)
        else:
            raise ConfigError(f"Invalid config path: {path}")

    def get(self, path: str) -> Any:
        """
        Get a configuration value by path.

        Example: config.get("render.rule_width")
        """
        parts = path.split(".")
        obj = self._config

        try:
            for part in parts:
                obj = getattr(obj, part)
        except AttributeError:
            raise ConfigError(f"Invalid config path: {path}") from None

        if isinstance(obj, ConfigValue):
            return obj.get()
        return obj

    def watch(self, callback: Callable[[AddressBookConfig], None]) -> None:
        """Register a callback for configuration changes."""
        self._watchers.append(callback)

    def reload(self) -> None:
        """Reload configuration from all loaded files."""
        for path in self._config_paths:
            if path.exists():
                self.load_from_file(path)

        for watcher in self._watchers:
            watcher(self._config)

    def reset(self) -> None:
        """Drop runtime overrides and forget loaded files."""
        self._config = AddressBookConfig()
        self._config_paths = []

    def validate(self) -> List[str]:
        """
        Validate all configuration values.

        Returns list of validation errors.
        """
        errors: List[str] = []

        def validate_config(obj: Any, path: str = "") -> None:
            if isinstance(obj, ConfigValue):
                try:
                    value = obj.get()
                    if obj.validator and not obj.validator(value):
                        errors.append(f"{path}: validation failed for value {value}")
                except ValueError as e:
                    errors.append(f"{path}: {e}")
            elif hasattr(obj, "__dataclass_fields__"):
                for field_name in obj.__dataclass_fields__:
                    field_path = f"{path}.{field_name}" if path else field_name
                    validate_config(getattr(obj, field_name), field_path)

        validate_config(self._config)
        return errors

    def export_schema(self) -> Dict[str, Any]:
        """Export the configuration as a JSON Schema document."""
        def extract_schema(obj: Any) -> Dict[str, Any]:
            if isinstance(obj, ConfigValue):
                prop: Dict[str, Any] = {
                    "type": _JSON_TYPES[type(obj.default)],
                    "default": obj.default,
                    "description": obj.description,
                }
                if obj.env_var:
                    prop["x-env-var"] = obj.env_var
                return prop
            return {
                "type": "object",
                "additionalProperties": False,
                "properties": {
                    name: extract_schema(getattr(obj, name))
                    for name in obj.__dataclass_fields__
                },
            }

        schema = extract_schema(AddressBookConfig())
        schema["$schema"] = "https://json-schema.org/draft/2020-12/schema"
        return schema

    def validate_document(self, data: Any) -> List[str]:
        """Validate a parsed YAML document against the config schema."""
        validator = Draft202012Validator(self.export_schema())
        return [
            f"{error.json_path}: {error.message}"
            for error in sorted(validator.iter_errors(data), key=str)
        ]


def get_config() -> AddressBookConfig:
    """Get the current address book configuration."""
    return ConfigManager().config


def get_config_manager() -> ConfigManager:
    """Get the configuration manager instance."""
    return ConfigManager()
