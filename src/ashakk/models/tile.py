"""Domino tile model."""

from pydantic import BaseModel, ConfigDict, Field

MAX_PIP = 6


class Tile(BaseModel):
    """A domino tile: an unordered pair of pip counts.

    Orientation is irrelevant, so 2|5 and 5|2 are the same tile. Equality
    and hashing follow that rule.
    """

    model_config = ConfigDict(frozen=True)

    a: int = Field(ge=0, le=MAX_PIP)
    b: int = Field(ge=0, le=MAX_PIP)

    @classmethod
    def of(cls, a: int, b: int) -> "Tile":
        """Shorthand constructor: Tile.of(6, 6)."""
        return cls(a=a, b=b)

    def key(self) -> tuple[int, int]:
        """Canonical (low, high) form."""
        return (min(self.a, self.b), max(self.a, self.b))

    def contains(self, number: int) -> bool:
        """Check whether either end shows the given pip count."""
        return self.a == number or self.b == number

    def is_double(self) -> bool:
        return self.a == self.b

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tile):
            return NotImplemented
        return self.key() == other.key()

    def __hash__(self) -> int:
        return hash(self.key())

    def __str__(self) -> str:
        return f"{self.a}|{self.b}"

    def __repr__(self) -> str:
        return f"Tile({self.a}|{self.b})"


DOUBLE_SIX = Tile(a=MAX_PIP, b=MAX_PIP)
