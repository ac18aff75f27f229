#!/usr/bin/env python3
"""Claude Code PreToolUse hook: rewrite Bash commands to rtk equivalents."""

import sys

try:
    from scripts.rtk_rewrite_impl.hook import main
except ImportError:  # When executed as a script from the scripts/ directory.
    from rtk_rewrite_impl.hook import main  # type: ignore[no-redef]

__all__ = ["main"]

if __name__ == "__main__":
    sys.exit(main())
