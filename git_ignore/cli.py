#!/usr/bin/env python3
"""
git-ignore command line

- check: report whether paths are excluded by the ignore rules
- tree:  list every path that is not excluded
- rules: show the discovered ignore files and their rules
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Union

from git_ignore import __version__
from git_ignore.constants import IGNORE_FILENAME
from git_ignore.errors import IgnoreFileReadError
from git_ignore.ignore_file import IgnoreFile
from git_ignore.manager import IgnoreManager
from git_ignore.utils import configure_logging

Matcher = Union[IgnoreFile, IgnoreManager]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='git-ignore',
        description='Match paths against .gitignore rules without git',
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--log-level', default=None,
                        help='Log level (TRACE, DEBUG, INFO, WARNING, ERROR)')

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--root', default='.',
                        help='Repository root (default: current directory)')
    common.add_argument('--single', action='store_true',
                        help=f'Use only <root>/{IGNORE_FILENAME}, ignoring nested files')

    subparsers = parser.add_subparsers(dest='command', required=True)

    check_parser = subparsers.add_parser('check', parents=[common],
                                         help='Report whether paths are excluded')
    check_parser.add_argument('paths', nargs='+', help='Paths relative to the root')
    check_parser.add_argument('-v', '--verbose', action='store_true',
                              help='Show the deciding rule')
    check_parser.set_defaults(func=cmd_check)

    tree_parser = subparsers.add_parser('tree', parents=[common],
                                        help='List every path that is not excluded')
    tree_parser.set_defaults(func=cmd_tree)

    rules_parser = subparsers.add_parser('rules', parents=[common],
                                         help='Show discovered ignore files and their rules')
    rules_parser.set_defaults(func=cmd_rules)

    return parser


def open_matcher(args: argparse.Namespace) -> Matcher:
    root = Path(args.root)
    if args.single:
        return IgnoreFile(root / IGNORE_FILENAME, root=root)
    return IgnoreManager(root)


def cmd_check(args: argparse.Namespace) -> int:
    matcher = open_matcher(args)
    for raw_path in args.paths:
        if isinstance(matcher, IgnoreFile):
            result = matcher.match(raw_path)
        else:
            result = matcher.match_path(raw_path)
        line = f"File: {raw_path}, Excluded: {str(result.should_ignore).lower()}"
        if args.verbose and result.rule is not None:
            line += f" ({result.verdict.value} by '{result.rule.source}' in {result.root})"
        print(line)
    return 0


def cmd_tree(args: argparse.Namespace) -> int:
    matcher = open_matcher(args)
    if isinstance(matcher, IgnoreFile):
        paths = matcher.included_files()
    else:
        paths = matcher.included_paths()
    for path in paths:
        print(path)
    return 0


def cmd_rules(args: argparse.Namespace) -> int:
    matcher = open_matcher(args)
    if isinstance(matcher, IgnoreFile):
        entries = [(matcher.rule_set, matcher.file_info)]
    else:
        entries = [(rule_set, matcher.get_file_info(rule_set.root))
                   for rule_set in matcher.get_rule_sets()]

    for rule_set, file_info in entries:
        if file_info is None:
            print(f"{rule_set.root}/{IGNORE_FILENAME}")
        else:
            stats = file_info.stats
            status = "ok" if file_info.is_valid else f"{len(file_info.errors)} invalid"
            print(f"{file_info.path}  ({stats['pattern_lines']} patterns, "
                  f"{stats['comment_lines']} comments, {stats['empty_lines']} blank; {status})")
        for rule in rule_set.rules:
            flags = [name for name, on in (('anchored', rule.anchored),
                                           ('dir', rule.directory_only),
                                           ('negated', rule.negation)) if on]
            suffix = f"  [{', '.join(flags)}]" if flags else ""
            print(f"  {rule.source}{suffix}")
        for error in rule_set.errors:
            print(f"  ! line {error.line}: {error.pattern} ({error.message})")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        return args.func(args)
    except IgnoreFileReadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
