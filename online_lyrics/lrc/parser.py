"""
Line-oriented parser for timestamped (LRC) lyrics.

LRC Format:
    [ti:Song Title]           <- metadata line
    [ar:Artist]               <- metadata line
    [00:15.00]First line      <- timestamp line
    [00:18.50]Second line     <- timestamp line

A line is a timestamp line when it starts with [<digits>:<digits>.<digits>].
Anything else (ID tags, blank lines, plain text) is a header line and is
kept verbatim.

Parsing Rules:
    - The timestamp token is kept exactly as written, brackets included
      ("[01:23.456]"), so it can be written back unchanged
    - Content is the rest of the line, stripped; empty content is dropped
    - If a token occurs twice, the later line wins
    - Lines are split on \\r\\n, \\r and \\n
    - Parsing never fails: blank or tag-only input gives an empty mapping
"""

import decimal
import re
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping


# Timestamp at the very start of a line, ASCII digits only
TIMESTAMP_PATTERN = re.compile(r"^(\[\d+:\d+\.\d+\])", re.ASCII)

# Same token, with its numeric parts captured
_TIMESTAMP_PARTS_PATTERN = re.compile(r"^\[(\d+):(\d+)\.(\d+)\]$", re.ASCII)

_LINE_BREAK_PATTERN = re.compile(r"\r\n|\r|\n")

# Sort key parts for tokens that are not timestamps (placed last)
_UNKNOWN_TIME = Decimal("Infinity")
_ZERO = Decimal(0)


@dataclass(frozen=True)
class TimedLyricsDocument:
    """
    Parsed LRC text.

    Attributes:
        raw_text: The input text, unmodified.
        header_lines: Non-timestamp lines in original order, verbatim.
        lines: Timestamp token -> line content, in first-seen token order.
               Read-only; a dict passed in is copied.

    Example:
        doc = parse_timed_lyrics("[ar:Foo]\\n[00:01.00]Hello")
        doc.header_lines  # ("[ar:Foo]",)
        doc.lines         # {"[00:01.00]": "Hello"}
    """

    raw_text: str = ""
    header_lines: tuple[str, ...] = ()
    lines: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "lines", MappingProxyType(dict(self.lines)))

    @property
    def is_empty(self) -> bool:
        """True when the document has no timestamped lines."""
        return not self.lines


def split_lines(text: str) -> list[str]:
    """
    Split text on any line-break convention.

    A trailing line break yields a trailing empty line, and an empty
    string yields a single empty line.
    """
    return _LINE_BREAK_PATTERN.split(text)


def match_timestamp(line: str) -> str | None:
    """Return the leading timestamp token of a line, or None."""
    match = TIMESTAMP_PATTERN.match(line)
    return match.group(1) if match else None


def parse_timed_lyrics(raw_text: str) -> TimedLyricsDocument:
    """
    Parse LRC text into header lines and a timestamp -> content mapping.

    Args:
        raw_text: LRC text as returned by a provider.

    Returns:
        TimedLyricsDocument. For blank input the document has no header
        lines and no timestamped lines, but still carries raw_text.
    """
    if not raw_text.strip():
        return TimedLyricsDocument(raw_text=raw_text)

    header_lines: list[str] = []
    lines: dict[str, str] = {}

    for line in split_lines(raw_text):
        token = match_timestamp(line)
        if token is None:
            header_lines.append(line)
            continue

        content = line[len(token):].strip()
        if content:
            lines[token] = content

    return TimedLyricsDocument(
        raw_text=raw_text,
        header_lines=tuple(header_lines),
        lines=lines,
    )


def timestamp_sort_key(token: str) -> tuple:
    """
    Chronological sort key for a timestamp token.

    Plain string order breaks as soon as digit widths differ
    ("[9:59.99]" sorts after "[10:00.00]"), so the token is read as
    minutes, seconds and a decimal fraction. The token text is the last
    element so distinct tokens with the same time ("[00:01.5]" and
    "[00:01.50]") still have a fixed order.

    The numbers are Decimals: digit runs of any length convert exactly,
    where int() refuses strings longer than sys.get_int_max_str_digits().

    Examples:
        "[9:59.99]"  -> (Decimal("599"), Decimal("0.99"), "[9:59.99]")
        "[10:00.00]" -> (Decimal("600"), Decimal("0.00"), "[10:00.00]")
    """
    match = _TIMESTAMP_PARTS_PATTERN.match(token)
    if match is None:
        return (_UNKNOWN_TIME, _ZERO, token)

    minutes, seconds, fraction = match.groups()
    with decimal.localcontext() as ctx:
        # Exact arithmetic: enough digits for minutes * 60 + seconds
        ctx.prec = min(len(minutes) + len(seconds) + 3, decimal.MAX_PREC)
        ctx.Emax = decimal.MAX_EMAX
        whole_seconds = Decimal(minutes) * 60 + Decimal(seconds)
    return (whole_seconds, Decimal("0." + fraction), token)
