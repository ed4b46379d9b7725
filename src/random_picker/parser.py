"""
Random definition parsing.

A random definition is a list of items delimited by semicolons. Each item
is a value and an optional weight separated by a colon:

    apple;pear:2;plum:8

The weight is a non-negative whole number (default 1) and signifies how
likely the item is to be picked relative to the others. Values may repeat
and may be empty; every segment becomes its own item.

A query line adds the optional result count and repeat cap:

    <RandomDefinition>[ <ResultCount>[ <MaxRepCount>]]
"""

import re
from dataclasses import dataclass
from typing import List

from .core import INT64_MAX, NO_REPEAT_LIMIT
from .errors import ParseError

ITEM_DELIMITER = ";"
WEIGHT_DELIMITER = ":"
DEFAULT_WEIGHT = 1

FORMAT_HELP = (
    "Right format: <RandomDefinition>[ <ResultCount>[ <MaxRepCount>]]\n"
    "Where <RandomDefinition> is: <item>[:weight][;<item>[:weight][...]]"
)

# Digits only, surrounded by optional whitespace. No sign, no separators.
_WEIGHT_RE = re.compile(r"[ \t\n\r\f\v]*([0-9]+)[ \t\n\r\f\v]*")

_REQUEST_RE = re.compile(
    r"(?P<definition>.*?\S)"
    r"(?:\s(?P<result_count>[0-9]+))?"
    r"(?:\s(?P<max_repeat>[0-9]+))?"
)


@dataclass
class RandomItem:
    """One pickable value and its relative weight."""

    value: str
    weight: int = DEFAULT_WEIGHT


@dataclass
class PickRequest:
    """A parsed query line: what to pick from, how many, how often."""

    definition: str
    result_count: int = 1
    max_repeat_count: int = NO_REPEAT_LIMIT


def parse_weight(text: str) -> int:
    """Parse a weight field, tolerating surrounding whitespace."""
    match = _WEIGHT_RE.fullmatch(text)
    if not match:
        raise ParseError(f"Invalid weight: {text!r} is not a whole number", text=text)

    return _to_int64(match.group(1), "weights", text)


def parse_definition(definition: str) -> List[RandomItem]:
    """
    Parse a random definition into its items, in input order.

    Only the first colon separates value from weight; any further
    colon-delimited parts of an item are ignored.

    Raises:
        ParseError: a weight is not a whole number or exceeds the 64-bit range
    """
    items = []
    for item_definition in definition.split(ITEM_DELIMITER):
        parts = item_definition.split(WEIGHT_DELIMITER)
        weight = DEFAULT_WEIGHT if len(parts) == 1 else parse_weight(parts[1])
        items.append(RandomItem(value=parts[0], weight=weight))
    return items


def _to_int64(digits: str, name: str, text: str) -> int:
    # Longer digit strings are out of range, and too long for int() past 4300 digits
    significant = digits.lstrip("0")
    if len(significant) > len(str(INT64_MAX)):
        raise ParseError(f"The {name} must not exceed {INT64_MAX}", text=text)
    return check_count(int(significant or "0"), name)


def check_count(value: int, name: str) -> int:
    """Refuse numbers past the signed 64-bit range."""
    if value > INT64_MAX:
        raise ParseError(f"The {name} must not exceed {INT64_MAX}")
    return value


def _parse_count(text: str, name: str) -> int:
    return _to_int64(text, name, text)


def parse_request(text: str) -> PickRequest:
    """
    Split a query line into definition, result count and repeat cap.

    A trailing number is always read as a count, so a definition whose
    last item is a bare number needs an explicit weight (``a;5:1``).
    """
    match = _REQUEST_RE.fullmatch(text)
    if not match:
        raise ParseError(
            "The given input does not match the required format",
            text=text,
            help_text=FORMAT_HELP,
        )

    request = PickRequest(definition=match.group("definition"))
    if match.group("result_count") is not None:
        request.result_count = _parse_count(match.group("result_count"), "result count")
    if match.group("max_repeat") is not None:
        request.max_repeat_count = _parse_count(match.group("max_repeat"), "max repeat count")
    return request
