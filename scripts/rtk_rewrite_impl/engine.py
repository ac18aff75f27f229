"""Rewrite orchestration: safety gate, rule walk and multi-line handling.

The engine is a pure function of the command string. It never executes or
inspects anything outside its input; statistics and the on/off toggle live in
the session layer.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass

from .rules import RULES, RewriteRule
from .shell import has_operator, split_env_prefix

_RTK_INVOCATION = re.compile(r"^rtk\s|/rtk\s")
_HEREDOC = "<<"


@dataclass(frozen=True)
class RewriteResult:
    """A rewritten command and the label(s) of the rule(s) that produced it."""

    rewritten: str
    rule: str


def _invokes_rtk(command: str) -> bool:
    return _RTK_INVOCATION.search(command) is not None


def _merge_continuations(lines: list[str]) -> list[str]:
    """Join physical lines ending in `\\` into logical lines.

    The newline stays inside the logical line, so joining the result with
    newlines reproduces the input exactly.
    """
    merged: list[str] = []
    buf = ""
    for line in lines:
        if line.endswith("\\"):
            buf += line + "\n"
        else:
            merged.append(buf + line)
            buf = ""
    if buf:
        # Trailing continuation with nothing after it.
        merged.append(buf[:-1])
    return merged


class Rewriter:
    """Rewrites shell commands into rtk equivalents.

    By default any unquoted pipe, redirect, chain or substitution in the
    command body blocks rewriting. With `rewrite_through_operators` the rules
    run anyway and rewrite the command in front of the operator, leaving the
    rest of the line untouched.
    """

    def __init__(
        self,
        rules: Iterable[RewriteRule] = RULES,
        *,
        disabled: Iterable[str] = (),
        rewrite_through_operators: bool = False,
    ) -> None:
        skip = set(disabled)
        self.rules = tuple(rule for rule in rules if rule.label not in skip)
        self.rewrite_through_operators = rewrite_through_operators

    def rewrite(self, command: str) -> RewriteResult | None:
        """Return the rewritten command, or None to run it as typed."""
        if "\n" not in command:
            return self._rewrite_line(command)

        # Lines of a heredoc body must never be read as commands.
        if _HEREDOC in command:
            return None

        out: list[str] = []
        labels: list[str] = []
        for line in _merge_continuations(command.split("\n")):
            stripped = line.lstrip()
            if not stripped or stripped.startswith("#"):
                out.append(line)
                continue

            result = self._rewrite_line(line)
            if result is None:
                out.append(line)
                continue

            out.append(result.rewritten)
            if result.rule not in labels:
                labels.append(result.rule)

        if not labels:
            return None
        return RewriteResult("\n".join(out), ", ".join(labels))

    def _rewrite_line(self, line: str) -> RewriteResult | None:
        command = line.lstrip()
        indent = line[: len(line) - len(command)]

        if _invokes_rtk(command) or _HEREDOC in command:
            return None

        env_prefix, body = split_env_prefix(command)
        if _invokes_rtk(body):
            return None
        if not self.rewrite_through_operators and has_operator(body):
            return None

        for rule in self.rules:
            if not rule.match(body):
                continue
            rewritten = rule.rewrite(body)
            if rewritten == body:
                continue
            return RewriteResult(indent + env_prefix + rewritten, rule.label)

        return None


DEFAULT_REWRITER = Rewriter()


def rewrite_command(command: str) -> RewriteResult | None:
    """Rewrite `command` with the built-in rules and the default policy."""
    return DEFAULT_REWRITER.rewrite(command)
