"""
Rule compiler: turns one line of an ignore file into a matchable rule

A raw line is first reduced to a small immutable record of flags plus the
cleaned glob text (``parse_line``), then the glob is made absolute against
the ignore file's directory and compiled into a ``pathspec`` regex pattern
(``compile_rule``).
"""

import re
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Tuple, Union

from pathspec.pattern import RegexPattern

from git_ignore.errors import PatternCompileError
from git_ignore.utils import get_logger

logger = get_logger(__name__)

PathLike = Union[str, PurePath]


@dataclass(frozen=True)
class ParsedLine:
    """Flags extracted from a raw ignore line, plus what is left to match"""
    text: str
    anchored: bool
    directory_only: bool
    negation: bool


@dataclass(frozen=True)
class IgnoreRule:
    """
    A single compiled ignore rule, owned by one rule set

    The rule's polarity lives on ``pattern.include``: an excluding rule is
    an included pattern in pathspec terms, a negation is not.
    """
    source: str
    glob: str
    pattern: RegexPattern
    anchored: bool
    directory_only: bool
    root: Path

    @property
    def negation(self) -> bool:
        return not self.pattern.include

    def glob_matches(self, path: PathLike) -> bool:
        """Test the bare glob against a path, ignoring every flag"""
        return self.pattern.match_file(to_match_text(path)) is not None

    def applies_to(self, path: PathLike, is_directory: bool) -> bool:
        """True when the glob matches and the directory-only flag allows it"""
        if self.directory_only and not is_directory:
            return False
        return self.glob_matches(path)

    def matches(self, path: PathLike, is_directory: bool) -> bool:
        """
        Contribution of this rule to the "still excluded" fold

        A directory-only rule tested against a non-directory reports its own
        negation flag. Otherwise an excluding rule reports the glob result
        and a negation reports its inverse, so a matching negation yields
        False (clears an exclusion).
        """
        if self.directory_only and not is_directory:
            return self.negation
        return self.pattern.include == self.glob_matches(path)

    def __str__(self) -> str:
        return self.source


def to_match_text(path: PathLike) -> str:
    """POSIX text form of a path, as fed to compiled rules"""
    if isinstance(path, PurePath):
        return path.as_posix()
    return PurePath(path).as_posix()


def parse_line(raw_line: str) -> ParsedLine:
    """
    Extract anchoring, directory-only and negation flags from a raw line

    Args:
        raw_line: A single non-blank, non-comment ignore line

    Returns:
        ParsedLine with the cleaned glob text

    Raises:
        PatternCompileError: Nothing is left to match once the flags are removed
    """
    text = raw_line

    directory_only = text.endswith('/')
    if directory_only:
        text = text[:-1]

    # Anchoring is decided before the '!' is removed: "!/x" is anchored
    anchored = '/' in text

    negation = text.startswith('!')
    if negation:
        text = text[1:].lstrip()

    if not text or text == '/':
        raise PatternCompileError(raw_line, "pattern is empty")

    return ParsedLine(
        text=text,
        anchored=anchored,
        directory_only=directory_only,
        negation=negation,
    )


def translate_glob(glob: str, literal_separator: bool) -> str:
    """
    Translate glob syntax into regular expression source

    Args:
        glob: Glob text (``*``, ``?``, ``[...]``, ``**`` and ``\\`` escapes)
        literal_separator: When set, ``*``, ``?`` and brackets never match '/'

    Returns:
        Regex source without start/end anchors

    Raises:
        PatternCompileError: Unterminated bracket, bad range or dangling escape
    """
    any_char = '[^/]' if literal_separator else '.'
    any_run = '[^/]*' if literal_separator else '.*'

    parts = []
    i = 0
    n = len(glob)
    while i < n:
        c = glob[i]
        if c == '*':
            j = i
            while j < n and glob[j] == '*':
                j += 1
            starts_component = i == 0 or glob[i - 1] == '/'
            ends_component = j == n or glob[j] == '/'
            if j - i == 2 and starts_component and ends_component:
                if j == n:
                    parts.append('.*')
                else:
                    # "**/" stands for zero or more whole directories
                    parts.append('(?:.*/)?')
                    j += 1
            else:
                parts.append(any_run)
            i = j
        elif c == '?':
            parts.append(any_char)
            i += 1
        elif c == '[':
            expr, i = _translate_bracket(glob, i, literal_separator)
            parts.append(expr)
        elif c == '\\':
            if i + 1 >= n:
                raise PatternCompileError(glob, "trailing backslash escapes nothing", i)
            parts.append(re.escape(glob[i + 1]))
            i += 2
        else:
            parts.append(re.escape(c))
            i += 1

    return ''.join(parts)


def _escape_class_member(c: str) -> str:
    return '\\' + c if c in '\\^-[]' else c


def _read_class_char(glob: str, i: int) -> Tuple[str, int]:
    if glob[i] == '\\' and i + 1 < len(glob):
        return glob[i + 1], i + 2
    return glob[i], i + 1


def _translate_bracket(glob: str, start: int, literal_separator: bool) -> Tuple[str, int]:
    i = start + 1
    n = len(glob)

    negate = i < n and glob[i] in '!^'
    if negate:
        i += 1

    members = []
    first = True
    while True:
        if i >= n:
            raise PatternCompileError(glob, "unterminated bracket expression", start)
        if glob[i] == ']' and not first:
            i += 1
            break
        first = False

        low, i = _read_class_char(glob, i)
        if i + 1 < n and glob[i] == '-' and glob[i + 1] != ']':
            high, i = _read_class_char(glob, i + 1)
            if ord(high) < ord(low):
                raise PatternCompileError(glob, f"invalid range '{low}-{high}'", start)
            members.append(f"{_escape_class_member(low)}-{_escape_class_member(high)}")
        else:
            members.append(_escape_class_member(low))

    body = ''.join(members)
    if negate:
        return f"[^{body}{'/' if literal_separator else ''}]", i
    if literal_separator:
        return f"(?!/)[{body}]", i
    return f"[{body}]", i


def absolute_glob(parsed: ParsedLine, root: PathLike) -> Tuple[str, str]:
    """
    Build the absolute glob text and its literal prefix

    Anchored patterns are rooted at the ignore file's directory; unanchored
    ones get a leading ``*`` so they can match at any depth.

    Returns:
        (prefix, glob) where ``prefix`` is matched literally before ``glob``
    """
    if parsed.anchored:
        root_text = to_match_text(root).rstrip('/')
        text = parsed.text[1:] if parsed.text.startswith('/') else parsed.text
        return f"{root_text}/", text
    if not parsed.text.startswith('*'):
        return "", f"*{parsed.text}"
    return "", parsed.text


def compile_rule(raw_line: str, root: PathLike) -> IgnoreRule:
    """
    Compile a raw ignore line into a rule rooted at ``root``

    Args:
        raw_line: A single non-blank, non-comment ignore line
        root: Directory the rule is relative to (the ignore file's directory)

    Returns:
        Compiled IgnoreRule

    Raises:
        PatternCompileError: The line is empty once parsed or its glob is invalid
    """
    parsed = parse_line(raw_line)
    prefix, glob = absolute_glob(parsed, root)

    try:
        body = translate_glob(glob, literal_separator=parsed.anchored)
    except PatternCompileError as e:
        raise PatternCompileError(raw_line, e.reason, e.position) from e

    try:
        regex = re.compile(rf"\A{re.escape(prefix)}{body}\Z", re.IGNORECASE | re.DOTALL)
    except re.error as e:
        raise PatternCompileError(raw_line, str(e)) from e

    rule = IgnoreRule(
        source=raw_line,
        glob=prefix + glob,
        pattern=RegexPattern(regex, include=not parsed.negation),
        anchored=parsed.anchored,
        directory_only=parsed.directory_only,
        root=Path(root),
    )
    logger.trace(f"Compiled rule '{raw_line}' -> {rule.glob}")
    return rule
