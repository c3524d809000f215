"""Line classification, keyword-line tokenizing and keyword scanning for .inp files."""

import re

from abaqusreader.errors import ParseError
from abaqusreader.models import DataValue, Keyword

COMMENT_MARKER = "**"
KEYWORD_MARKER = "*"

RE_NUMBER = re.compile(r'[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?')
RE_INTEGER = re.compile(r'-?\d+')
RE_INT_FIELD = re.compile(r'^[-+]?\d+$')
RE_FLOAT_FIELD = re.compile(r'^[-+]?(?:\d+\.?\d*|\.\d+)(?:[eEdD][-+]?\d+)?$')


def is_comment(line: str) -> bool:
    return line.startswith(COMMENT_MARKER)


def is_keyword(line: str) -> bool:
    return line.startswith(KEYWORD_MARKER) and not is_comment(line)


def is_blank_or_comment(line: str) -> bool:
    return not line.strip() or is_comment(line)


def normalize_name(token: str) -> str:
    """'*Solid  section ' -> 'SOLID SECTION'."""
    return " ".join(token.strip().lstrip(KEYWORD_MARKER).split()).upper()


def keyword_name(line: str) -> str:
    """Name of a keyword line without parsing its options."""
    return normalize_name(line.split(",", 1)[0])


def split_fields(line: str) -> list[str]:
    """Split on commas that are outside double quotes."""
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    for char in line:
        if char == '"':
            in_quotes = not in_quotes
            current.append(char)
        elif char == "," and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
    if in_quotes:
        raise ParseError(f"Unterminated quote in keyword line: {line.strip()}")
    fields.append("".join(current))
    return fields


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1]
    return value


def parse_keyword_line(line: str) -> Keyword:
    """Tokenize a keyword line into its uppercase name and option map.

    ``*Step, name=Load, NLGEOM`` -> Keyword("STEP", {"NAME": "Load", "NLGEOM": True})
    """
    fields = split_fields(line.strip())
    keyword = Keyword(name=normalize_name(fields[0]))
    for token in fields[1:]:
        if not token.strip():
            continue
        pair = token.split("=")
        if len(pair) == 1:
            keyword.options[pair[0].strip().upper()] = True
        elif len(pair) == 2:
            keyword.options[pair[0].strip().upper()] = _unquote(pair[1])
        else:
            raise ParseError(f"Malformed keyword option '{token.strip()}'",
                             keyword=keyword.name)
    return keyword


def find_keyword_lines(lines: list[str]) -> list[int]:
    """Indices of all keyword lines, plus a sentinel one past the last line."""
    indexes = [idx for idx, line in enumerate(lines) if is_keyword(line)]
    indexes.append(len(lines))
    return indexes


def iter_sections(lines: list[str]):
    """Yield (start, end) spans: keyword line at ``start``, data up to ``end`` exclusive."""
    indexes = find_keyword_lines(lines)
    for start, end in zip(indexes, indexes[1:]):
        yield start, end


def parse_numbers(line: str) -> list[str]:
    return RE_NUMBER.findall(line)


def parse_integers(line: str) -> list[int]:
    return [int(m) for m in RE_INTEGER.findall(line)]


def parse_value(text: str) -> DataValue:
    """Integer, float, or the bare (case-preserved) symbol."""
    text = text.strip()
    if not text:
        return None
    if RE_INT_FIELD.match(text):
        return int(text)
    if RE_FLOAT_FIELD.match(text):
        return float(text.replace("d", "e").replace("D", "E"))
    return text


def parse_data_rows(lines: list[str]) -> list[list[DataValue]]:
    """Strip commas/spaces around each row, split on commas and convert each field."""
    rows = []
    for line in lines:
        row = line.strip().strip(", ")
        rows.append([parse_value(field) for field in row.split(",")])
    return rows
