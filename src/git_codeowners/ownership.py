from __future__ import annotations

import dataclasses
import re
from pathlib import Path

from .errors import RulesetError
from .owners import Owner, parse_owner

# Searched in order, relative to the repository root.
CODEOWNERS_LOCATIONS = (
    Path(".github") / "CODEOWNERS",
    Path("CODEOWNERS"),
    Path("docs") / "CODEOWNERS",
)


def locate(root: Path) -> Path | None:
    for rel in CODEOWNERS_LOCATIONS:
        candidate = root / rel
        if candidate.is_file():
            return candidate
    return None


def _split_tokens(line: str) -> list[str]:
    """Split on unescaped whitespace; an unescaped `#` starting a token ends the line."""
    tokens: list[str] = []
    cur: list[str] = []
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == "\\" and i + 1 < len(line):
            cur.append(line[i : i + 2])
            i += 2
            continue
        if ch.isspace():
            if cur:
                tokens.append("".join(cur))
                cur = []
        elif ch == "#" and not cur:
            break
        else:
            cur.append(ch)
        i += 1
    if cur:
        tokens.append("".join(cur))
    return tokens


def _translate(body: str) -> str:
    out: list[str] = []
    i = 0
    n = len(body)
    while i < n:
        ch = body[i]
        if ch == "\\" and i + 1 < n:
            out.append(re.escape(body[i + 1]))
            i += 2
        elif body.startswith("**/", i) and (i == 0 or body[i - 1] == "/"):
            out.append("(?:.*/)?")
            i += 3
        elif body.startswith("**", i) and i + 2 == n and (i == 0 or body[i - 1] == "/"):
            out.append(".*")
            i += 2
        elif ch == "*":
            out.append("[^/]*")
            i += 1
        elif ch == "?":
            out.append("[^/]")
            i += 1
        elif ch == "[":
            j = body.find("]", i + 2)
            if j == -1:
                out.append(re.escape(ch))
                i += 1
                continue
            inner = body[i + 1 : j]
            if inner.startswith("!"):
                inner = "^" + inner[1:]
            out.append("[" + inner.replace("\\", "\\\\") + "]")
            i = j + 1
        else:
            out.append(re.escape(ch))
            i += 1
    return "".join(out)


def compile_pattern(pattern: str) -> re.Pattern[str]:
    p = pattern
    anchored = p.startswith("/")
    p = p.lstrip("/")
    dir_only = p.endswith("/")
    p = p.rstrip("/")
    if "/" in p:
        anchored = True

    prefix = "" if anchored else "(?:.*/)?"
    if dir_only:
        suffix = "/.*"
    elif p.endswith("/*") or p == "*" and anchored:
        # Direct children only.
        suffix = ""
    else:
        # A pattern naming a directory owns everything beneath it.
        suffix = "(?:/.*)?"
    return re.compile(prefix + _translate(p) + suffix, re.DOTALL)


@dataclasses.dataclass(frozen=True)
class Rule:
    pattern: str
    owners: tuple[Owner, ...]
    lineno: int
    regex: re.Pattern[str] = dataclasses.field(compare=False, repr=False)

    def matches(self, path: str) -> bool:
        return self.regex.fullmatch(normalize_path(path)) is not None


def normalize_path(path: str) -> str:
    p = path.strip().replace("\\", "/")
    while p.startswith("./"):
        p = p[2:]
    return p.lstrip("/")


@dataclasses.dataclass(frozen=True)
class Ruleset:
    rules: tuple[Rule, ...]
    source: str = "<CODEOWNERS>"

    def resolve(self, path: str) -> tuple[Owner, ...] | None:
        """
        Owners of `path` under last-match-wins precedence.
        None when no rule matches or when the last matching rule lists no owners.
        """
        for rule in reversed(self.rules):
            if rule.matches(path):
                return rule.owners or None
        return None


def parse_ruleset(text: str, *, source: str = "<CODEOWNERS>") -> Ruleset:
    rules: list[Rule] = []
    for lineno, raw in enumerate(text.splitlines(), start=1):
        tokens = _split_tokens(raw)
        if not tokens:
            continue
        pattern, owner_tokens = tokens[0], tokens[1:]
        owners: list[Owner] = []
        for tok in owner_tokens:
            owner = parse_owner(tok)
            if owner is None:
                raise RulesetError(source, lineno, f"invalid owner {tok!r}")
            owners.append(owner)
        try:
            regex = compile_pattern(pattern)
        except re.error as e:
            raise RulesetError(source, lineno, f"invalid pattern {pattern!r}: {e}") from e
        rules.append(Rule(pattern=pattern, owners=tuple(owners), lineno=lineno, regex=regex))
    return Ruleset(rules=tuple(rules), source=source)


def load_ruleset(path: Path) -> Ruleset:
    return parse_ruleset(path.read_text(encoding="utf-8"), source=str(path))
