"""Structural translation of grep/rg and find into rtk's positional syntax.

Both translators reparse the invocation into pattern/path/flag roles and
re-emit it in rtk's argument order. Anything they cannot map faithfully makes
them return None, and the command is left as typed.

Arguments are re-emitted with their original quoting so that globs and
patterns reach rtk exactly as the shell would have passed them to the
original tool.
"""

import re
import shlex

from .shell import Token, split_at_operator, tokenize

# rtk grep is recursive by default; these add nothing.
_GREP_REDUNDANT_SHORT = frozenset({"r", "R"})
_GREP_REDUNDANT_FLAGS = frozenset({"-r", "-R", "--recursive"})
_GREP_PROGRAMS = frozenset({"grep", "rg"})

# Short options that take a value, attached (`-m1`) or as the next word.
_GREP_SHORT_WITH_VALUE = {
    "grep": frozenset("ABCDdefm"),
    "rg": frozenset("ABCEMTefgjmrt"),
}
_GREP_LONG_WITH_VALUE = frozenset(
    {"--after-context", "--before-context", "--context", "--max-count", "--glob"}
)
# A pattern file, or rg's `-r` replacement text, has no rtk grep form.
_GREP_UNSUPPORTED_SHORT = frozenset({"f", "r"})
_GREP_UNSUPPORTED_LONG = frozenset({"--file", "--replace"})
_SHORT_OPTION = re.compile(r"^-[a-zA-Z]")
_INCLUDE_EQ = "--include="
_REGEXP_EQ = "--regexp="

# No rtk equivalent, and dropping them would change what the command does.
_FIND_SIDE_EFFECT_FLAGS = frozenset(
    {"-exec", "-execdir", "-delete", "-print0", "-ok", "-fls", "-fprint"}
)
_FIND_NAME_FLAGS = frozenset({"-name", "-iname"})
_FIND_ELIDED_WITH_VALUE = frozenset({"-maxdepth", "-mindepth"})
_FIND_TYPES = frozenset({"f", "d"})


def _strip_program(command: str, programs: frozenset[str]) -> list[Token] | None:
    tokens = tokenize(command)
    if not tokens or tokens[0].value not in programs:
        return None
    return tokens[1:]


def _attached_value(tok: Token, prefix: str) -> Token:
    """Return the value of a `<prefix><value>` token, quoted as written.

    If the whole token was quoted (`"--include=*.py"`) the value is re-quoted
    on its own.
    """
    value = tok.value[len(prefix) :]
    if tok.raw.startswith(prefix):
        return Token(tok.raw[len(prefix) :], value)
    return Token(shlex.quote(value), value)


def _split_short_cluster(
    cluster: str, with_value: frozenset[str]
) -> tuple[str, str, str] | None:
    """Split the letters of `-abXrest` into (flags, value_letter, attached).

    Letters up to the first value-taking one are plain flags; that letter
    takes the rest of the cluster, or the next word when nothing is attached.
    `value_letter` is empty when no letter takes a value. Returns None for
    anything but letters and digits in the flag part.
    """
    for idx, ch in enumerate(cluster):
        if ch in with_value:
            return cluster[:idx], ch, cluster[idx + 1 :]
        if not ch.isalnum():
            return None
    return cluster, "", ""


def translate_grep(body: str) -> str | None:
    """Translate a grep/rg invocation to `rtk grep <PATTERN> [PATH] [ARGS...]`.

    Returns the full rtk command (operator tail included), or None when the
    invocation cannot be translated.
    """
    command, tail = split_at_operator(body)
    tokens = tokenize(command)
    if len(tokens) < 2 or tokens[0].value not in _GREP_PROGRAMS:
        return None
    program = tokens[0].value
    with_value = _GREP_SHORT_WITH_VALUE[program]
    args = tokens[1:]

    regexp: Token | None = None
    positionals: list[Token] = []
    extra_args: list[str] = []

    i = 0
    while i < len(args):
        tok = args[i]
        value = tok.value

        if value == "--":
            positionals.extend(args[i + 1 :])
            break

        if program == "grep" and value in _GREP_REDUNDANT_FLAGS:
            i += 1
            continue

        if value.split("=", 1)[0] in _GREP_UNSUPPORTED_LONG:
            return None

        if value.startswith(_INCLUDE_EQ):
            extra_args.extend(["--glob", _attached_value(tok, _INCLUDE_EQ).raw])
            i += 1
            continue

        if value.startswith(_REGEXP_EQ):
            if regexp is not None:
                return None
            regexp = _attached_value(tok, _REGEXP_EQ)
            i += 1
            continue

        if value in {"--include", "--regexp"} or value in _GREP_LONG_WITH_VALUE:
            if i + 1 >= len(args):
                return None
            arg = args[i + 1]
            i += 2
            if value == "--regexp":
                if regexp is not None:
                    return None
                regexp = arg
            elif value == "--include":
                extra_args.extend(["--glob", arg.raw])
            else:
                extra_args.extend([tok.raw, arg.raw])
            continue

        if _SHORT_OPTION.match(value):
            parts = _split_short_cluster(value[1:], with_value)
            if parts is None:
                return None
            flags, letter, attached = parts

            kept = "".join(ch for ch in flags if ch not in _GREP_REDUNDANT_SHORT)
            if kept:
                extra_args.append("-" + kept)
            if not letter:
                i += 1
                continue
            if letter in _GREP_UNSUPPORTED_SHORT:
                return None

            if attached:
                arg = Token(shlex.quote(attached), attached)
                i += 1
            elif i + 1 < len(args):
                arg = args[i + 1]
                i += 2
            else:
                return None

            if letter == "e":
                if regexp is not None:
                    return None
                regexp = arg
            else:
                extra_args.extend(["-" + letter, arg.raw])
            continue

        if value.startswith("-") and value != "-":
            extra_args.append(tok.raw)
            i += 1
            continue

        positionals.append(tok)
        i += 1

    # With -e/--regexp every positional word is a path.
    if regexp is not None:
        pattern, paths = regexp, positionals
    elif positionals:
        pattern, paths = positionals[0], positionals[1:]
    else:
        return None

    # Several paths have no rtk equivalent.
    if len(paths) > 1:
        return None
    # rtk would read a leading dash as one of its own flags.
    if pattern.value.startswith("-"):
        return None

    parts = ["rtk grep", pattern.raw]
    if paths:
        parts.append(paths[0].raw)
    if extra_args:
        parts.append(" ".join(extra_args))
    return " ".join(parts) + tail


def translate_find(body: str) -> str | None:
    """Translate a find invocation to `rtk find <PATTERN> [PATH] [-t f|d]`.

    Only `-name`/`-iname`, `-type` and a single search path are carried
    over; `-maxdepth`/`-mindepth` are dropped. Side-effecting actions, unknown
    predicates and extra search paths make the command untranslatable.
    """
    command, tail = split_at_operator(body)
    args = _strip_program(command, frozenset({"find"}))
    if not args:
        return None

    if any(tok.value in _FIND_SIDE_EFFECT_FLAGS for tok in args):
        return None

    name_pattern: Token | None = None
    path: Token | None = None
    file_type: str | None = None

    i = 0
    while i < len(args):
        value = args[i].value

        if value in _FIND_NAME_FLAGS:
            if i + 1 < len(args):
                name_pattern = args[i + 1]
                i += 2
                continue
            i += 1
            continue

        if value == "-type" and i + 1 < len(args):
            file_type = args[i + 1].value
            i += 2
            continue

        if value in _FIND_ELIDED_WITH_VALUE and i + 1 < len(args):
            i += 2
            continue

        if value.startswith("-"):
            return None

        if path is not None:
            return None
        path = args[i]
        i += 1

    if name_pattern is None:
        return None

    parts = ["rtk find", name_pattern.raw]
    if path is not None:
        parts.append(path.raw)
    if file_type in _FIND_TYPES:
        parts.extend(["-t", file_type])
    return " ".join(parts) + tail
