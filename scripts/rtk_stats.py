#!/usr/bin/env python3
"""Show rtk rewrite statistics for a Claude Code session.

Reads the session log written by the rewrite hook. Without a session id the
most recently active session is reported.
"""

import argparse
import os
import sys

try:
    from scripts.rtk_rewrite_impl.config import load_config, rewriting_enabled
    from scripts.rtk_rewrite_impl.engine import RewriteResult
    from scripts.rtk_rewrite_impl.session import RewriteStats, format_report
    from scripts.rtk_rewrite_impl.session_log import (
        EVENT_PASS,
        EVENT_REWRITE,
        latest_log_file,
        read_log_entries,
        session_log_file,
    )
except ImportError:  # When executed as a script from the scripts/ directory.
    from rtk_rewrite_impl.config import (  # type: ignore[no-redef]
        load_config,
        rewriting_enabled,
    )
    from rtk_rewrite_impl.engine import RewriteResult  # type: ignore[no-redef]
    from rtk_rewrite_impl.session import (  # type: ignore[no-redef]
        RewriteStats,
        format_report,
    )
    from rtk_rewrite_impl.session_log import (  # type: ignore[no-redef]
        EVENT_PASS,
        EVENT_REWRITE,
        latest_log_file,
        read_log_entries,
        session_log_file,
    )


def _stats_from_entries(entries: list[dict]) -> RewriteStats:
    stats = RewriteStats()
    for entry in entries:
        event = entry.get("event")
        if event == EVENT_PASS:
            stats.record(None)
        elif event == EVENT_REWRITE:
            rule = entry.get("rule")
            rewritten = entry.get("rewritten")
            stats.record(RewriteResult(str(rewritten or ""), str(rule or "?")))
    return stats


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "session_id",
        nargs="?",
        help="session to report on (default: most recent)",
    )
    args = parser.parse_args(argv)

    if args.session_id:
        log_file = session_log_file(args.session_id)
    else:
        log_file = latest_log_file()

    if log_file is None or not log_file.exists():
        print("No rewrite log found.", file=sys.stderr)
        return 1

    stats = _stats_from_entries(read_log_entries(log_file))
    enabled = rewriting_enabled(load_config(os.getcwd()))

    print(f"Session: {log_file.stem}")
    print(format_report(stats, enabled=enabled))
    return 0


if __name__ == "__main__":
    sys.exit(main())
