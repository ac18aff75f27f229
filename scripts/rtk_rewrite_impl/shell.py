"""Shell scanning helpers for the rewrite engine.

Quote-aware, total over their input: an unterminated quote runs to the end of
the string and a trailing backslash is kept as a literal character. Nothing in
here raises on malformed shell text.
"""

import re
from collections.abc import Iterator
from typing import NamedTuple

# Values may be quoted; a quoted value never ends the prefix early.
_ENV_PREFIX = re.compile(
    r"(?:[A-Za-z_][A-Za-z0-9_]*="
    r"""(?:'[^']*'|"(?:[^"\\]|\\.)*"|\\.|[^\s'"\\])*"""
    r"[ \t]+)+"
)


class Token(NamedTuple):
    """One shell word: `raw` as written, `value` with quote characters removed."""

    raw: str
    value: str


def split_env_prefix(command: str) -> tuple[str, str]:
    """Split leading `KEY=value ` assignments from the command body.

    The prefix keeps its trailing whitespace, so `prefix + body == command`.
    """
    match = _ENV_PREFIX.match(command)
    if match is None:
        return "", command
    prefix = match.group(0)
    return prefix, command[len(prefix) :]


def _unquoted_chars(command: str) -> Iterator[tuple[int, str]]:
    """Yield (index, char) for characters outside quotes and escapes."""
    in_single = False
    in_double = False
    escape = False

    for i, ch in enumerate(command):
        if escape:
            escape = False
            continue

        if ch == "\\" and not in_single:
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
            continue

        if ch == '"' and not in_single:
            in_double = not in_double
            continue

        if in_single or in_double:
            continue

        yield i, ch


def find_operator(command: str) -> int | None:
    """Return the index of the first unquoted shell operator, or None.

    Recognized: `|` and `||`, `>` (but not `>&`), `<(`, backtick, `$(`,
    `&&` and `;`.
    """
    for i, ch in _unquoted_chars(command):
        nxt = command[i + 1 : i + 2]

        if ch in {"|", ";", "`"}:
            return i
        if ch == ">" and nxt != "&":
            return i
        if ch == "<" and nxt == "(":
            return i
        if ch == "$" and nxt == "(":
            return i
        if ch == "&" and nxt == "&":
            return i

    return None


def has_operator(command: str) -> bool:
    return find_operator(command) is not None


def split_at_operator(command: str) -> tuple[str, str]:
    """Split `command` at its first unquoted operator.

    Returns (command_part, tail). The tail is a single space followed by the
    operator and everything after it, verbatim; it is empty when there is no
    operator. File-descriptor digits (`2>`) and `&>` travel with the redirect.
    """
    index = find_operator(command)
    if index is None:
        return command, ""

    start = index
    if command[index] == ">":
        j = index
        while j > 0 and command[j - 1].isdigit():
            j -= 1
        if j == index and j > 0 and command[j - 1] == "&":
            j -= 1
        # Digits only name a descriptor when they start the word.
        if j == 0 or command[j - 1] in {" ", "\t"}:
            start = j

    return command[:start].rstrip(), " " + command[start:]


def tokenize(text: str) -> list[Token]:
    """Split `text` into shell words on unquoted spaces and tabs.

    Quote characters are dropped from each token's value; backslash escapes
    are left as written. A backslash-newline continuation separates words.
    """
    tokens: list[Token] = []
    raw: list[str] = []
    value: list[str] = []
    in_single = False
    in_double = False

    def flush() -> None:
        if raw:
            tokens.append(Token("".join(raw), "".join(value)))
        raw.clear()
        value.clear()

    i = 0
    while i < len(text):
        ch = text[i]

        if ch == "\\" and not in_single:
            pair = text[i : i + 2]
            if pair == "\\\n" and not in_double:
                flush()
            else:
                raw.append(pair)
                value.append(pair)
            i += 2
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
            raw.append(ch)
            i += 1
            continue

        if ch == '"' and not in_single:
            in_double = not in_double
            raw.append(ch)
            i += 1
            continue

        if ch in {" ", "\t"} and not in_single and not in_double:
            flush()
            i += 1
            continue

        raw.append(ch)
        value.append(ch)
        i += 1

    flush()
    return tokens


def split_args(text: str) -> list[str]:
    """Return the quote-stripped words of `text`."""
    return [tok.value for tok in tokenize(text)]
