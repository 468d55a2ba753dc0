"""Domain model for warehouse bin locations."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from ..services.routing.errors import ParseError

LOCATION_PATTERN = re.compile(r"^([A-Z])-(\d{1,3})-(\d{2})$")


@dataclass(frozen=True, slots=True)
class Location:
    """A single warehouse slot addressed by zone, aisle and shelf.

    Equality and hashing use the ``(zone, aisle, shelf)`` triple only, so two
    codes that differ in aisle zero-padding (``A-1-05`` / ``A-01-05``) are the
    same physical slot.
    """

    zone: str
    aisle: int
    shelf: int
    aisle_digits: int = field(default=2, compare=False)

    @property
    def key(self) -> tuple[str, int, int]:
        return (self.zone, self.aisle, self.shelf)

    @property
    def zone_index(self) -> int:
        return ord(self.zone) - ord("A")

    @property
    def code(self) -> str:
        return self.to_code()

    def to_code(self) -> str:
        return f"{self.zone}-{self.aisle:0{self.aisle_digits}d}-{self.shelf:02d}"

    def __str__(self) -> str:
        return self.to_code()


def parse_location(code: str) -> Location:
    """Parse ``Z-AA-SS`` into a :class:`Location` or raise :class:`ParseError`."""

    if not isinstance(code, str):
        raise ParseError(code, "location must be a string")
    match = LOCATION_PATTERN.match(code)
    if not match:
        raise ParseError(code)
    zone, aisle_text, shelf_text = match.groups()
    aisle = int(aisle_text)
    shelf = int(shelf_text)
    if aisle < 1:
        raise ParseError(code, "aisle must be a positive number")
    if shelf < 1:
        raise ParseError(code, "shelf must be a positive number")
    return Location(zone=zone, aisle=aisle, shelf=shelf, aisle_digits=len(aisle_text))


def parse_locations(codes: list[str] | tuple[str, ...]) -> list[Location]:
    return [parse_location(code) for code in codes]
