"""Sub-command extraction for programs that take global options.

Each program has an explicit table of the global flags that may precede its
sub-command. Flags outside the table are left in place, so an unknown
value-taking flag yields the wrong word and the caller's allow-list check
simply fails.
"""

from typing import NamedTuple

from .shell import split_args


class GlobalOptions(NamedTuple):
    with_value: frozenset[str]
    no_value: frozenset[str]
    # Short flags that also accept an attached value, e.g. `-C/repo`.
    attached: tuple[str, ...] = ()


GIT_OPTIONS = GlobalOptions(
    with_value=frozenset(
        {
            "-C",
            "-c",
            "--exec-path",
            "--git-dir",
            "--namespace",
            "--super-prefix",
            "--work-tree",
        }
    ),
    no_value=frozenset(
        {
            "-p",
            "-P",
            "--paginate",
            "--no-pager",
            "--bare",
            "--no-optional-locks",
            "--no-replace-objects",
            "--literal-pathspecs",
            "--glob-pathspecs",
            "--noglob-pathspecs",
            "--icase-pathspecs",
        }
    ),
    attached=("-C", "-c"),
)

DOCKER_OPTIONS = GlobalOptions(
    with_value=frozenset(
        {"-H", "--host", "--context", "-c", "--config", "-l", "--log-level"}
    ),
    no_value=frozenset({"-D", "--debug", "--tls", "--tlsverify"}),
    attached=("-H",),
)

KUBECTL_OPTIONS = GlobalOptions(
    with_value=frozenset(
        {
            "-n",
            "--namespace",
            "--context",
            "--kubeconfig",
            "--cluster",
            "--user",
            "-s",
            "--server",
        }
    ),
    no_value=frozenset({"--insecure-skip-tls-verify"}),
    attached=("-n",),
)


def _subcommand_after_options(args: list[str], options: GlobalOptions) -> str:
    i = 0
    while i < len(args):
        tok = args[i]

        if tok in options.no_value:
            i += 1
            continue

        if tok in options.with_value:
            i += 2
            continue

        # --option=value carries its own value.
        if tok.startswith("--") and "=" in tok:
            i += 1
            continue

        if any(
            tok.startswith(flag) and len(tok) > len(flag) for flag in options.attached
        ):
            i += 1
            continue

        return tok

    return ""


def git_subcommand(command: str) -> str:
    """Return the git sub-command, e.g. `status` for `git -C /repo status`."""
    return _subcommand_after_options(split_args(command)[1:], GIT_OPTIONS)


def docker_subcommand(command: str) -> str:
    return _subcommand_after_options(split_args(command)[1:], DOCKER_OPTIONS)


def kubectl_subcommand(command: str) -> str:
    return _subcommand_after_options(split_args(command)[1:], KUBECTL_OPTIONS)


def cargo_subcommand(command: str) -> str:
    """Return the cargo sub-command, skipping a `+toolchain` selector."""
    args = split_args(command)[1:]
    if args and args[0].startswith("+"):
        args = args[1:]
    return args[0] if args else ""
