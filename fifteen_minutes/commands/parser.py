"""Tokenizing for the command line surface."""
from typing import List, NamedTuple, Optional, Tuple


class ParsedCommand(NamedTuple):
    name: str
    args: List[str]


def parse_command_line(line: str) -> Optional[ParsedCommand]:
    """Split a raw line into a lower-cased command name and its arguments.

    Returns None for blank input. Arguments are split on whitespace runs
    and are never re-quoted.
    """
    trimmed = (line or "").strip()
    if not trimmed:
        return None
    parts = trimmed.split()
    return ParsedCommand(parts[0].lower(), parts[1:])


def parse_ordinal(token: str) -> Optional[int]:
    """Parse a 1-based position; None unless ``token`` is a positive ASCII integer."""
    if not token or not (token.isascii() and token.isdigit()):
        return None
    value = int(token)
    return value if value >= 1 else None


def parse_task_address(token: str) -> Optional[Tuple[int, int]]:
    """Parse ``<feature>.<task>`` into two ordinals."""
    if not token:
        return None
    parts = token.split(".")
    if len(parts) != 2:
        return None
    feature_num, task_num = parse_ordinal(parts[0]), parse_ordinal(parts[1])
    if feature_num is None or task_num is None:
        return None
    return feature_num, task_num


def pop_flag(args: List[str], flag: str) -> Tuple[bool, List[str]]:
    """Remove every occurrence of ``flag`` from ``args``."""
    remaining = [arg for arg in args if arg != flag]
    return len(remaining) != len(args), remaining
