"""Config loading, parsing, and validation."""

import json
from dataclasses import dataclass, field
from os import getenv
from pathlib import Path

from .rules import RULE_LABELS


class ConfigError(Exception):
    """Raised when config file is invalid."""


@dataclass
class Config:
    """Loaded configuration.

    Boolean settings are None when the file does not set them, so a project
    file only overrides what it actually mentions.
    """

    version: int
    enabled: bool | None = None
    rewrite_through_operators: bool | None = None
    disabled_rules: list[str] = field(default_factory=list)

    @property
    def rewriting_enabled(self) -> bool:
        return self.enabled is not False

    @property
    def through_operators(self) -> bool:
        return self.rewrite_through_operators is True


@dataclass
class ValidationResult:
    """Result of config file validation."""

    errors: list[str]
    disabled_rules: list[str]  # Empty if errors exist
    settings: dict[str, bool] = field(default_factory=dict)


_BOOLEAN_FIELDS = ("enabled", "rewrite_through_operators")


def _validate_disabled_rules(value: object) -> list[str]:
    errors: list[str] = []

    if not isinstance(value, list):
        raise ConfigError("'disabled_rules' must be an array")

    seen: set[str] = set()
    for i, label in enumerate(value):
        if not isinstance(label, str):
            errors.append(f"disabled_rules[{i}]: must be a string")
        elif not label:
            errors.append(f"disabled_rules[{i}]: must not be empty")
        elif label not in RULE_LABELS:
            errors.append(f"disabled_rules[{i}]: unknown rule '{label}'")
        elif label in seen:
            errors.append(f"disabled_rules[{i}]: duplicate rule '{label}'")
        else:
            seen.add(label)

    if errors:
        raise ConfigError("; ".join(errors))

    return list(value)


def _validate_config(data: dict) -> Config:
    """Validate config dict and return Config object."""
    # Check version
    if "version" not in data:
        raise ConfigError("missing required field 'version'")

    version = data["version"]
    if not isinstance(version, int) or isinstance(version, bool):
        raise ConfigError("'version' must be an integer")
    if version != 1:
        raise ConfigError(f"unsupported version {version}, expected 1")

    settings: dict[str, bool] = {}
    for name in _BOOLEAN_FIELDS:
        if name not in data:
            continue
        if not isinstance(data[name], bool):
            raise ConfigError(f"'{name}' must be a boolean")
        settings[name] = data[name]

    disabled_rules = _validate_disabled_rules(data.get("disabled_rules", []))

    return Config(
        version=version,
        enabled=settings.get("enabled"),
        rewrite_through_operators=settings.get("rewrite_through_operators"),
        disabled_rules=disabled_rules,
    )


def _load_single_config(path: Path) -> Config | None:
    """Load and validate a single config file.

    Returns None if file doesn't exist, is invalid, or has errors.
    """
    if not path.exists():
        return None

    try:
        content = path.read_text(encoding="utf-8")
    except OSError:
        return None

    if not content.strip():
        return None

    try:
        data = json.loads(content)
    except json.JSONDecodeError:
        return None

    if not isinstance(data, dict):
        return None

    try:
        return _validate_config(data)
    except ConfigError:
        return None


def _merge_configs(user_config: Config | None, project_config: Config | None) -> Config:
    """Merge user and project configs.

    Project booleans override user booleans when set; disabled rules from
    both scopes are combined.
    """
    if user_config is None and project_config is None:
        return Config(version=1)

    if user_config is None:
        return project_config  # type: ignore[return-value]

    if project_config is None:
        return user_config

    def pick(user_value: bool | None, project_value: bool | None) -> bool | None:
        return project_value if project_value is not None else user_value

    disabled = list(user_config.disabled_rules)
    disabled.extend(
        label
        for label in project_config.disabled_rules
        if label not in user_config.disabled_rules
    )

    return Config(
        version=1,
        enabled=pick(user_config.enabled, project_config.enabled),
        rewrite_through_operators=pick(
            user_config.rewrite_through_operators,
            project_config.rewrite_through_operators,
        ),
        disabled_rules=disabled,
    )


def user_config_path() -> Path:
    return Path.home() / ".cc-rtk-rewrite" / "config.json"


def load_config(cwd: str | None = None) -> Config | None:
    """Load config with scope merging.

    Loads from two scopes:
    1. User scope: ~/.cc-rtk-rewrite/config.json (always loaded if exists)
    2. Project scope: .rtk-rewrite.json in cwd (loaded if exists)

    Returns None only if neither scope has a valid config.
    All errors are silent: invalid files fall back to built-in defaults.
    """
    user_config = _load_single_config(user_config_path())

    project_config: Config | None = None
    if cwd:
        project_path = Path(cwd) / ".rtk-rewrite.json"
        project_config = _load_single_config(project_path)

    if user_config is None and project_config is None:
        return None

    return _merge_configs(user_config, project_config)


def validate_config_file(path: str) -> ValidationResult:
    """Validate a config file and return result with errors and settings."""
    config_path = Path(path).expanduser()

    if not config_path.exists():
        return ValidationResult(errors=[f"file not found: {path}"], disabled_rules=[])

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as e:
        return ValidationResult(errors=[f"cannot read file: {e}"], disabled_rules=[])

    if not content.strip():
        return ValidationResult(errors=["config file is empty"], disabled_rules=[])

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        return ValidationResult(errors=[f"invalid JSON: {e}"], disabled_rules=[])

    if not isinstance(data, dict):
        return ValidationResult(
            errors=["config must be a JSON object"], disabled_rules=[]
        )

    try:
        config = _validate_config(data)
    except ConfigError as e:
        return ValidationResult(errors=[str(e)], disabled_rules=[])

    settings = {
        name: value
        for name, value in (
            ("enabled", config.enabled),
            ("rewrite_through_operators", config.rewrite_through_operators),
        )
        if value is not None
    }
    return ValidationResult(
        errors=[], disabled_rules=list(config.disabled_rules), settings=settings
    )


def env_truthy(name: str) -> bool:
    val = (getenv(name) or "").strip().lower()
    return val in {"1", "true", "yes", "on"}


def rewriting_enabled(config: Config | None) -> bool:
    """Return False if rewriting is switched off by env or config."""
    if env_truthy("RTK_REWRITE_DISABLED"):
        return False
    return config is None or config.rewriting_enabled
