"""BibTeX / BibLaTeX reader.

Entries: @<entrytype>{citekey, field = {value}, ...}
Special entries (@STRING, @PREAMBLE, @COMMENT) are skipped.
Entries may span lines or sit on a single line, as registrar responses do.
Reference: http://www.bibtex.org/Format/
"""

import re
from dataclasses import dataclass, field

from bibresolve.normalize import normalize_ws

__all__ = ["BibEntry", "ParseResult", "parse_bibliography"]

ENTRY_START_PATTERN = re.compile(r"@\s*(\w+)\s*([{(])")
FIELD_NAME_PATTERN = re.compile(r"([\w\-]+)\s*=\s*")
SPECIAL_ENTRY_TYPES = frozenset({"string", "preamble", "comment"})


@dataclass(frozen=True)
class BibEntry:
    """One parsed bibliography entry.

    Attributes
    ----------
    entry_type : str
        Lowercased entry type (e.g., "article").
    key : str
        Citation key.
    fields : tuple[tuple[str, str], ...]
        ``(name, value)`` pairs in source order; names are lowercased and
        values keep their backslash escapes.
    """

    entry_type: str
    key: str
    fields: tuple[tuple[str, str], ...] = ()

    def get(self, name: str) -> str | None:
        """Value of the first field called ``name`` (case-insensitive)."""
        wanted = name.lower()
        for field_name, value in self.fields:
            if field_name == wanted:
                return value
        return None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None


@dataclass
class ParseResult:
    """Entries read from a text plus any problems met on the way."""

    entries: list[BibEntry] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


def parse_bibliography(text: str) -> ParseResult:
    """Parse every entry in a BibTeX/BibLaTeX text.

    Parameters
    ----------
    text : str
        Bibliography text.

    Returns
    -------
    ParseResult
        Entries in source order, warnings for skipped entries and errors
        for entries that could not be closed.
    """
    result = ParseResult()

    pos = 0
    while True:
        at = text.find("@", pos)
        if at == -1:
            break

        match = ENTRY_START_PATTERN.match(text, at)
        if not match:
            pos = at + 1
            continue

        entry_type = match.group(1).lower()
        open_index = match.end() - 1
        close_index = _find_closing_delimiter(text, open_index)

        if close_index == -1:
            result.errors.append(f"Offset {at}: Unclosed entry @{entry_type}")
            pos = match.end()
            continue

        if entry_type in SPECIAL_ENTRY_TYPES:
            result.warnings.append(f"Offset {at}: Skipping @{entry_type.upper()} entry")
            pos = close_index + 1
            continue

        body = text[open_index + 1 : close_index]
        key, sep, rest = body.partition(",")
        fields_data = _parse_fields(rest) if sep else []
        result.entries.append(BibEntry(entry_type, key.strip(), tuple(fields_data)))

        pos = close_index + 1

    return result


def _find_closing_delimiter(text: str, open_index: int) -> int:
    closer = "}" if text[open_index] == "{" else ")"
    brace_depth = 0
    in_quotes = False

    i = open_index + 1
    while i < len(text):
        char = text[i]

        if char == "\\":
            i += 2
            continue

        # Quotes delimit values only at the top level of the entry
        if char == '"' and brace_depth == 0:
            in_quotes = not in_quotes
        elif not in_quotes:
            if char == "{":
                brace_depth += 1
            elif char == "}":
                if brace_depth == 0:
                    if closer == "}":
                        return i
                else:
                    brace_depth -= 1
            elif char == ")" and closer == ")" and brace_depth == 0:
                return i
        i += 1

    return -1


def _parse_fields(content: str) -> list[tuple[str, str]]:
    fields: list[tuple[str, str]] = []

    i = 0
    while i < len(content):
        # Skip whitespace and separators
        while i < len(content) and (content[i].isspace() or content[i] == ","):
            i += 1
        if i >= len(content):
            break

        field_match = FIELD_NAME_PATTERN.match(content, i)
        if not field_match:
            i += 1
            continue

        field_name = field_match.group(1).lower()
        i = field_match.end()

        pieces: list[str] = []
        while True:
            while i < len(content) and content[i].isspace():
                i += 1
            if i >= len(content):
                break

            if content[i] == "{":
                value, i = _parse_braced_value(content, i)
            elif content[i] == '"':
                value, i = _parse_quoted_value(content, i)
            else:
                value, i = _parse_bare_value(content, i)
            pieces.append(value)

            # String concatenation
            while i < len(content) and content[i].isspace():
                i += 1
            if i < len(content) and content[i] == "#":
                i += 1
                continue
            break

        fields.append((field_name, normalize_ws("".join(pieces))))

    return fields


def _parse_braced_value(content: str, start: int) -> tuple[str, int]:
    brace_depth = 0
    value_chars: list[str] = []
    i = start

    while i < len(content):
        char = content[i]
        if char == "\\" and i + 1 < len(content):
            value_chars.append(content[i : i + 2])
            i += 2
            continue
        if char == "{":
            brace_depth += 1
            if brace_depth > 1:
                value_chars.append(char)
        elif char == "}":
            brace_depth -= 1
            if brace_depth == 0:
                return "".join(value_chars), i + 1
            value_chars.append(char)
        else:
            value_chars.append(char)
        i += 1

    return "".join(value_chars), i


def _parse_quoted_value(content: str, start: int) -> tuple[str, int]:
    i = start + 1  # skip opening quote
    brace_depth = 0
    value_chars: list[str] = []

    while i < len(content):
        char = content[i]
        if char == "\\" and i + 1 < len(content):
            value_chars.append(content[i : i + 2])
            i += 2
            continue
        if char == '"' and brace_depth == 0:
            return "".join(value_chars), i + 1
        if char == "{":
            brace_depth += 1
        elif char == "}":
            brace_depth -= 1
        value_chars.append(char)
        i += 1

    return "".join(value_chars), i


def _parse_bare_value(content: str, start: int) -> tuple[str, int]:
    value_chars: list[str] = []
    i = start

    while i < len(content) and content[i] not in ",\n}#":
        value_chars.append(content[i])
        i += 1

    return "".join(value_chars).strip(), i
