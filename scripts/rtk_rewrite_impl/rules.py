"""Ordered rewrite rules: the first rule whose predicate matches wins.

Each rule sees the command body with any `KEY=value` prefix already removed.
Order matters: allow-listed sub-command rules come before anything broader
for the same program, and `docker compose` precedes plain `docker`.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass

from .shell import split_at_operator
from .subcommands import (
    cargo_subcommand,
    docker_subcommand,
    git_subcommand,
    kubectl_subcommand,
)
from .translate import translate_find, translate_grep

GIT_SUBCOMMANDS = frozenset(
    {
        "status",
        "diff",
        "log",
        "add",
        "commit",
        "push",
        "pull",
        "branch",
        "fetch",
        "stash",
        "show",
    }
)
CARGO_SUBCOMMANDS = frozenset({"test", "build", "clippy", "check", "install", "fmt"})
DOCKER_SUBCOMMANDS = frozenset({"ps", "images", "logs", "run", "build", "exec"})
KUBECTL_SUBCOMMANDS = frozenset({"get", "logs", "describe", "apply"})


@dataclass(frozen=True)
class RewriteRule:
    """A named (predicate, transform) pair."""

    label: str
    match: Callable[[str], bool]
    rewrite: Callable[[str], str]


def _matches(pattern: str) -> Callable[[str], bool]:
    compiled = re.compile(pattern)
    return lambda body: compiled.match(body) is not None


def _substitute(pattern: str, replacement: str) -> Callable[[str], str]:
    compiled = re.compile(pattern)
    return lambda body: compiled.sub(replacement, body, count=1)


def _prepend_rtk(body: str) -> str:
    return f"rtk {body}"


def _allow_listed(
    pattern: str, extract: Callable[[str], str], allowed: frozenset[str]
) -> Callable[[str], bool]:
    starts = _matches(pattern)
    return lambda body: starts(body) and extract(body) in allowed


_IS_DOCKER_COMPOSE = _matches(r"^docker\s+compose(\s|$)")
_IS_DOCKER_SUBCOMMAND = _allow_listed(
    r"^docker\s", docker_subcommand, DOCKER_SUBCOMMANDS
)

_HEAD_COUNT = re.compile(r"^head\s+(?:-|--lines=)(\d+)\s+(.+)$")


def _docker_simple(body: str) -> bool:
    return not _IS_DOCKER_COMPOSE(body) and _IS_DOCKER_SUBCOMMAND(body)


def _head_to_read(body: str) -> str:
    """head -N file -> rtk read file --max-lines N"""
    command, tail = split_at_operator(body)
    match = _HEAD_COUNT.match(command)
    if match is None:
        return body
    count, target = match.groups()
    return f"rtk read {target} --max-lines {count}{tail}"


def _grep_to_rtk(body: str) -> str:
    return translate_grep(body) or body


def _find_to_rtk(body: str) -> str:
    return translate_find(body) or body


RULES: tuple[RewriteRule, ...] = (
    # ── Version control ──
    RewriteRule(
        "git",
        _allow_listed(r"^git\s", git_subcommand, GIT_SUBCOMMANDS),
        _prepend_rtk,
    ),
    RewriteRule(
        "gh",
        _matches(r"^gh\s+(pr|issue|run|api|release)(\s|$)"),
        _substitute(r"^gh(?=\s)", "rtk gh"),
    ),
    # ── Rust ──
    RewriteRule(
        "cargo",
        _allow_listed(r"^cargo\s", cargo_subcommand, CARGO_SUBCOMMANDS),
        _prepend_rtk,
    ),
    # ── Files and search ──
    RewriteRule(
        "cat → rtk read",
        _matches(r"^cat\s+"),
        _substitute(r"^cat(?=\s)", "rtk read"),
    ),
    RewriteRule("grep/rg", _matches(r"^(rg|grep)\s+"), _grep_to_rtk),
    RewriteRule("ls", _matches(r"^ls(\s|$)"), _substitute(r"^ls", "rtk ls")),
    RewriteRule("tree", _matches(r"^tree(\s|$)"), _substitute(r"^tree", "rtk tree")),
    RewriteRule("find", _matches(r"^find\s+"), _find_to_rtk),
    RewriteRule(
        "diff",
        _matches(r"^diff\s+"),
        _substitute(r"^diff(?=\s)", "rtk diff"),
    ),
    RewriteRule(
        "head → rtk read",
        _matches(r"^head\s+(-\d+|--lines=\d+)\s+"),
        _head_to_read,
    ),
    # ── JS/TS tooling ──
    RewriteRule(
        "vitest",
        _matches(r"^(pnpm\s+)?(npx\s+)?vitest(\s|$)"),
        _substitute(
            r"^(?:pnpm\s+)?(?:npx\s+)?vitest(?:\s+run(?=\s|$))?", "rtk vitest run"
        ),
    ),
    RewriteRule(
        "pnpm test",
        _matches(r"^pnpm\s+test(\s|$)"),
        _substitute(r"^pnpm\s+test", "rtk vitest run"),
    ),
    RewriteRule(
        "npm test",
        _matches(r"^npm\s+test(\s|$)"),
        _substitute(r"^npm\s+test", "rtk npm test"),
    ),
    RewriteRule(
        "npm run",
        _matches(r"^npm\s+run\s+"),
        _substitute(r"^npm\s+run\s+", "rtk npm "),
    ),
    RewriteRule(
        "vue-tsc / tsc",
        _matches(r"^(npx\s+)?vue-tsc(\s|$)"),
        _substitute(r"^(?:npx\s+)?vue-tsc", "rtk tsc"),
    ),
    RewriteRule(
        "pnpm tsc",
        _matches(r"^pnpm\s+tsc(\s|$)"),
        _substitute(r"^pnpm\s+tsc", "rtk tsc"),
    ),
    RewriteRule(
        "tsc",
        _matches(r"^(npx\s+)?tsc(\s|$)"),
        _substitute(r"^(?:npx\s+)?tsc", "rtk tsc"),
    ),
    RewriteRule(
        "pnpm lint",
        _matches(r"^pnpm\s+lint(\s|$)"),
        _substitute(r"^pnpm\s+lint", "rtk lint"),
    ),
    RewriteRule(
        "eslint",
        _matches(r"^(npx\s+)?eslint(\s|$)"),
        _substitute(r"^(?:npx\s+)?eslint", "rtk lint"),
    ),
    RewriteRule(
        "prettier",
        _matches(r"^(npx\s+)?prettier(\s|$)"),
        _substitute(r"^(?:npx\s+)?prettier", "rtk prettier"),
    ),
    RewriteRule(
        "playwright",
        _matches(r"^(npx\s+|pnpm\s+)?playwright(\s|$)"),
        _substitute(r"^(?:npx\s+|pnpm\s+)?playwright", "rtk playwright"),
    ),
    RewriteRule(
        "prisma",
        _matches(r"^(npx\s+)?prisma(\s|$)"),
        _substitute(r"^(?:npx\s+)?prisma", "rtk prisma"),
    ),
    # ── Containers ──
    RewriteRule(
        "docker compose",
        _IS_DOCKER_COMPOSE,
        _substitute(r"^docker(?=\s)", "rtk docker"),
    ),
    RewriteRule(
        "docker",
        _docker_simple,
        _substitute(r"^docker(?=\s)", "rtk docker"),
    ),
    RewriteRule(
        "kubectl",
        _allow_listed(r"^kubectl\s", kubectl_subcommand, KUBECTL_SUBCOMMANDS),
        _substitute(r"^kubectl(?=\s)", "rtk kubectl"),
    ),
    # ── Network ──
    RewriteRule(
        "curl",
        _matches(r"^curl\s+"),
        _substitute(r"^curl(?=\s)", "rtk curl"),
    ),
    RewriteRule(
        "wget",
        _matches(r"^wget\s+"),
        _substitute(r"^wget(?=\s)", "rtk wget"),
    ),
    # ── pnpm package management ──
    RewriteRule(
        "pnpm list/outdated",
        _matches(r"^pnpm\s+(list|ls|outdated)(\s|$)"),
        _substitute(r"^pnpm(?=\s)", "rtk pnpm"),
    ),
    # ── Python ──
    RewriteRule(
        "pytest",
        _matches(r"^pytest(\s|$)"),
        _substitute(r"^pytest", "rtk pytest"),
    ),
    RewriteRule(
        "python -m pytest",
        _matches(r"^python3?\s+-m\s+pytest(\s|$)"),
        _substitute(r"^python3?\s+-m\s+pytest", "rtk pytest"),
    ),
    RewriteRule(
        "ruff",
        _matches(r"^ruff\s+(check|format)(\s|$)"),
        _substitute(r"^ruff(?=\s)", "rtk ruff"),
    ),
    RewriteRule(
        "pip",
        _matches(r"^pip\s+(list|outdated|install|show)(\s|$)"),
        _substitute(r"^pip(?=\s)", "rtk pip"),
    ),
    RewriteRule(
        "uv pip",
        _matches(r"^uv\s+pip\s+(list|outdated|install|show)(\s|$)"),
        _substitute(r"^uv\s+pip(?=\s)", "rtk pip"),
    ),
    # ── Go ──
    RewriteRule(
        "go test",
        _matches(r"^go\s+test(\s|$)"),
        _substitute(r"^go\s+test", "rtk go test"),
    ),
    RewriteRule(
        "go build",
        _matches(r"^go\s+build(\s|$)"),
        _substitute(r"^go\s+build", "rtk go build"),
    ),
    RewriteRule(
        "go vet",
        _matches(r"^go\s+vet(\s|$)"),
        _substitute(r"^go\s+vet", "rtk go vet"),
    ),
    RewriteRule(
        "golangci-lint",
        _matches(r"^golangci-lint(\s|$)"),
        _substitute(r"^golangci-lint", "rtk golangci-lint"),
    ),
)

RULE_LABELS: tuple[str, ...] = tuple(rule.label for rule in RULES)
