"""
Rule engine for evaluating paths against the rules of one ignore file
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Union

from git_ignore.errors import PatternCompileError
from git_ignore.rule_compiler import IgnoreRule, PathLike, compile_rule
from git_ignore.utils import get_logger

logger = get_logger(__name__)


class Verdict(Enum):
    """Outcome of evaluating a path against one rule set"""
    EXCLUDED = "excluded"
    INCLUDED = "included"
    UNDEFINED = "undefined"

    @property
    def is_definite(self) -> bool:
        return self is not Verdict.UNDEFINED


@dataclass(frozen=True)
class MatchResult:
    """Result of matching a path against ignore rules"""
    verdict: Verdict
    rule: Optional[IgnoreRule] = None
    root: Optional[Path] = None  # directory of the ignore file that decided

    @property
    def should_ignore(self) -> bool:
        return self.verdict is Verdict.EXCLUDED


@dataclass
class ValidationError:
    """A line of an ignore file that was dropped"""
    line: int
    pattern: str
    message: str


def is_pattern_line(line: str) -> bool:
    """True for lines that carry a pattern (not blank, not a comment)"""
    stripped = line.strip()
    return bool(stripped) and not stripped.startswith('#')


def pattern_text(line: str) -> str:
    """
    Pattern text of a raw line: line terminator and trailing whitespace
    removed, except a trailing space escaped with a backslash
    """
    line = line.rstrip('\r\n')
    stripped = line.rstrip()
    if len(stripped) < len(line):
        backslashes = len(stripped) - len(stripped.rstrip('\\'))
        if backslashes % 2 == 1:
            return line[:len(stripped) + 1]
    return stripped


@dataclass
class IgnoreRuleSet:
    """
    Ordered rules from a single ignore file

    Evaluation is a pure function of (rules, root, path, is_directory).
    """
    root: Path
    rules: List[IgnoreRule] = field(default_factory=list)
    errors: List[ValidationError] = field(default_factory=list)

    @classmethod
    def from_lines(cls, lines: Iterable[str], root: Union[str, Path]) -> 'IgnoreRuleSet':
        """
        Build a rule set from raw ignore file lines

        Blank and comment lines are skipped. Leading whitespace is part of
        the pattern; trailing whitespace is not, unless escaped with ``\\``.
        A line that fails to compile is
        dropped and recorded in ``errors``; the remaining lines still load.

        Args:
            lines: Raw lines of the ignore file
            root: Directory the rules are relative to

        Returns:
            IgnoreRuleSet with rules in file order
        """
        rule_set = cls(root=Path(root))

        for line_num, line in enumerate(lines, 1):
            if not is_pattern_line(line):
                continue
            pattern = pattern_text(line)
            try:
                rule_set.rules.append(compile_rule(pattern, rule_set.root))
            except PatternCompileError as e:
                logger.warning(f"Skipping invalid pattern on line {line_num} under {rule_set.root}: {e}")
                rule_set.errors.append(ValidationError(
                    line=line_num,
                    pattern=pattern,
                    message=e.reason,
                ))

        return rule_set

    @property
    def patterns(self) -> List[str]:
        """Source text of the kept rules, in file order"""
        return [rule.source for rule in self.rules]

    def absolute(self, path: PathLike) -> Path:
        path = Path(path)
        if not path.is_absolute():
            path = self.root / path
        return Path(os.path.normpath(path))

    def evaluate(self, path: PathLike, is_directory: bool) -> bool:
        """
        Boolean fold over the rules in file order

        A negation is skipped while nothing is excluded; otherwise it can
        only clear an exclusion, never set one.

        Args:
            path: Path to check (relative paths are joined with the root)
            is_directory: Whether the path is a directory

        Returns:
            True if the path is excluded by this file alone
        """
        abs_path = self.absolute(path)
        excluded = False

        for rule in self.rules:
            if rule.negation and not excluded:
                continue
            rule_match = rule.matches(abs_path, is_directory)
            if rule.negation:
                excluded = rule_match and excluded
            else:
                excluded = excluded or rule_match

        return excluded

    def match(self, path: PathLike, is_directory: bool) -> MatchResult:
        """
        Three-valued evaluation reporting the deciding rule

        A matching rule sets EXCLUDED; a matching negation sets INCLUDED
        whether or not anything was excluded before it, so a file holding
        only ``!name`` still has an opinion. No matching rule leaves
        UNDEFINED.

        Args:
            path: Path to check (relative paths are joined with the root)
            is_directory: Whether the path is a directory

        Returns:
            MatchResult with the verdict and the last rule that changed it
        """
        abs_path = self.absolute(path)
        result = MatchResult(verdict=Verdict.UNDEFINED)

        for rule in self.rules:
            if not rule.applies_to(abs_path, is_directory):
                continue
            result = MatchResult(
                verdict=Verdict.INCLUDED if rule.negation else Verdict.EXCLUDED,
                rule=rule,
                root=self.root,
            )
            logger.trace(f"{abs_path}: '{rule.source}' -> {result.verdict.value}")

        return result

    def verdict(self, path: PathLike, is_directory: bool) -> Verdict:
        return self.match(path, is_directory).verdict

    def __len__(self) -> int:
        return len(self.rules)
