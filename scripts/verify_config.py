#!/usr/bin/env python3
"""Check rtk-rewrite config files and show the settings the hook would use."""

import os
import sys
from pathlib import Path

try:
    from scripts.rtk_rewrite_impl.config import (
        ValidationResult,
        env_truthy,
        load_config,
        rewriting_enabled,
        user_config_path,
        validate_config_file,
    )
    from scripts.rtk_rewrite_impl.rules import RULE_LABELS
except ImportError:  # When executed as a script from the scripts/ directory.
    from rtk_rewrite_impl.config import (  # type: ignore[no-redef]
        ValidationResult,
        env_truthy,
        load_config,
        rewriting_enabled,
        user_config_path,
        validate_config_file,
    )
    from rtk_rewrite_impl.rules import RULE_LABELS  # type: ignore[no-redef]

_USER_CONFIG = user_config_path()
_PROJECT_CONFIG_NAME = ".rtk-rewrite.json"

_TITLE = "RTK Rewrite Config"


def _config_files() -> list[tuple[str, Path]]:
    """Existing config files, user scope first."""
    found = []
    if _USER_CONFIG.exists():
        found.append(("User", _USER_CONFIG))
    project = Path.cwd() / _PROJECT_CONFIG_NAME
    if project.exists():
        found.append(("Project", project))
    return found


def _on_off(value: bool) -> str:
    return "on" if value else "off"


def _error_lines(result: ValidationResult) -> list[str]:
    # Rule errors arrive joined in one message; number them separately.
    parts = [part for error in result.errors for part in error.split("; ")]
    return [f"    {n}. {part}" for n, part in enumerate(parts, 1)]


def _settings_lines(result: ValidationResult) -> list[str]:
    lines = [
        f"  {name}: {str(value).lower()}" for name, value in result.settings.items()
    ]
    if not result.disabled_rules:
        lines.append("  Disabled rules: (none)")
        return lines
    lines.append("  Disabled rules:")
    lines.extend(
        f"    {n}. {label}" for n, label in enumerate(result.disabled_rules, 1)
    )
    return lines


def _effective_lines() -> list[str]:
    config = load_config(os.getcwd())
    disabled = set(config.disabled_rules) if config is not None else set()
    through_operators = env_truthy("RTK_REWRITE_THROUGH_OPERATORS") or (
        config is not None and config.through_operators
    )
    active = sum(1 for label in RULE_LABELS if label not in disabled)

    lines = [
        "Effective settings:",
        f"  rewriting: {_on_off(rewriting_enabled(config))}",
        f"  rewrite through operators: {_on_off(through_operators)}",
        f"  active rules: {active} of {len(RULE_LABELS)}",
    ]
    if env_truthy("RTK_REWRITE_DISABLED"):
        lines.append("  (RTK_REWRITE_DISABLED is set)")
    return lines


def main() -> int:
    print(_TITLE)
    print("═" * len(_TITLE))

    files = _config_files()
    if not files:
        print("\nNo config files found. Using built-in defaults.")

    failed = False
    for scope, path in files:
        result = validate_config_file(str(path))
        if result.errors:
            failed = True
            print(f"\n✗ {scope} config: {path}", file=sys.stderr)
            print("  Errors:", file=sys.stderr)
            print("\n".join(_error_lines(result)), file=sys.stderr)
        else:
            print(f"\n✓ {scope} config: {path}")
            print("\n".join(_settings_lines(result)))

    print()
    print("\n".join(_effective_lines()))

    if failed:
        print(
            "\nConfig validation failed. Invalid files are ignored by the hook.",
            file=sys.stderr,
        )
        return 1

    if files:
        print("\nAll configs valid.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
