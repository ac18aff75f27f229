"""Session bookkeeping around the rewrite engine.

Holds the only mutable state in the system: rewrite counters and the on/off
toggle. Whether `rtk` is installed is checked once by the caller and passed in.
"""

import shutil
from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass, field

from .engine import Rewriter, RewriteResult

RTK_BINARY = "rtk"

_UNAVAILABLE_WARNING = (
    "rtk-rewrite: `rtk` not found on PATH. "
    "Install from https://github.com/rtk-ai/rtk; command rewriting is disabled."
)


def probe_rtk(which: Callable[[str], str | None] = shutil.which) -> bool:
    """Return True if the rtk binary is on PATH."""
    return which(RTK_BINARY) is not None


@dataclass
class RewriteStats:
    total: int = 0
    skipped: int = 0
    by_rule: Counter[str] = field(default_factory=Counter)

    @property
    def rewritten(self) -> int:
        return self.total - self.skipped

    def record(self, result: RewriteResult | None) -> None:
        self.total += 1
        if result is None:
            self.skipped += 1
        else:
            self.by_rule[result.rule] += 1

    def reset(self) -> None:
        self.total = 0
        self.skipped = 0
        self.by_rule.clear()


def format_report(stats: RewriteStats, *, enabled: bool) -> str:
    lines = [
        f"RTK Rewrite - {'enabled' if enabled else 'DISABLED'}",
        f"Commands seen:  {stats.total}",
        f"Rewritten:      {stats.rewritten}",
        f"Passed through: {stats.skipped}",
    ]
    if stats.by_rule:
        lines.extend(["", "By rule:"])
        for rule, count in stats.by_rule.most_common():
            lines.append(f"  {rule}: {count}")
    return "\n".join(lines)


class RewriteSession:
    """Per-session front end to a Rewriter.

    Commands are counted only while rewriting is enabled and rtk is available.
    """

    def __init__(
        self,
        rewriter: Rewriter | None = None,
        *,
        available: bool,
        enabled: bool = True,
    ) -> None:
        self.rewriter = rewriter if rewriter is not None else Rewriter()
        self.available = available
        self.enabled = enabled
        self.stats = RewriteStats()
        self._warned = False

    def handle(self, command: str) -> RewriteResult | None:
        """Rewrite one observed command and update the counters."""
        if not self.available or not self.enabled:
            return None
        if not command:
            return None

        result = self.rewriter.rewrite(command)
        self.stats.record(result)
        return result

    def availability_warning(self) -> str | None:
        """Return the missing-rtk warning the first time it is asked for."""
        if self.available or self._warned:
            return None
        self._warned = True
        return _UNAVAILABLE_WARNING

    def reset(self) -> None:
        self.stats.reset()

    def toggle(self) -> bool:
        self.enabled = not self.enabled
        return self.enabled

    def report(self) -> str:
        return format_report(self.stats, enabled=self.enabled)
