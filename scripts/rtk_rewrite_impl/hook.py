"""rtk command rewriting for Claude Code.

Rewrites Bash commands to their `rtk` equivalents so their output reaches the
model in compact form. This hook runs before Bash commands execute and can
replace the command with an rtk invocation.

Exit behavior:
  - Exit 0 with JSON containing updatedInput = run the rewritten command
  - Exit 0 with JSON containing systemMessage = rtk is missing (once per session)
  - Exit 0 with no output = run the command as typed
"""

import json
import sys

from .config import Config, env_truthy, load_config, rewriting_enabled
from .engine import Rewriter
from .session import RewriteSession, probe_rtk
from .session_log import (
    EVENT_PASS,
    EVENT_REWRITE,
    EVENT_UNAVAILABLE,
    already_warned,
    session_log_file,
    write_log_entry,
)


def _build_rewriter(config: Config | None) -> Rewriter:
    through_operators = env_truthy("RTK_REWRITE_THROUGH_OPERATORS") or (
        config is not None and config.through_operators
    )
    disabled = config.disabled_rules if config is not None else []
    return Rewriter(disabled=disabled, rewrite_through_operators=through_operators)


def main() -> int:
    try:
        input_data = json.load(sys.stdin)
    except json.JSONDecodeError:
        return 0

    if not isinstance(input_data, dict):
        return 0

    tool_name = input_data.get("tool_name")
    if tool_name != "Bash":
        return 0

    tool_input = input_data.get("tool_input")
    if not isinstance(tool_input, dict):
        return 0

    command = tool_input.get("command")
    if not isinstance(command, str) or not command.strip():
        return 0

    cwd_val = input_data.get("cwd")
    cwd = cwd_val.strip() if isinstance(cwd_val, str) else None
    if cwd == "":
        cwd = None

    config = load_config(cwd)
    if not rewriting_enabled(config):
        return 0

    log_file = session_log_file(input_data.get("session_id"))
    session = RewriteSession(_build_rewriter(config), available=probe_rtk())

    warning = session.availability_warning()
    if warning is not None:
        # Without a session log there is no way to warn only once, so stay quiet.
        if log_file is not None and not already_warned(log_file):
            write_log_entry(log_file, EVENT_UNAVAILABLE, command, None, cwd)
            print(json.dumps({"systemMessage": warning}))
        return 0

    result = session.handle(command)
    if result is None:
        write_log_entry(log_file, EVENT_PASS, command, None, cwd)
        return 0

    write_log_entry(log_file, EVENT_REWRITE, command, result, cwd)

    updated_input = dict(tool_input)
    updated_input["command"] = result.rewritten
    output = {
        "hookSpecificOutput": {
            "hookEventName": "PreToolUse",
            "updatedInput": updated_input,
        }
    }
    print(json.dumps(output))
    return 0
