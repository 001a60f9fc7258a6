"""
Card — the unit of inventory.

A card's identity is (name, rarity, variation), compared case-insensitively
on the name. Base value is an attribute, not part of identity.

INVARIANT: Identity attributes never change after construction.
Only `count` is mutable.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, NamedTuple

from cardkeeper.models.failure import ValidationFailedError

CENT = Decimal("0.01")


class Rarity(str, Enum):
    """Card rarity tiers."""

    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    LEGENDARY = "legendary"


class Variation(str, Enum):
    """Printing variations. Anything but NORMAL is a premium printing."""

    NORMAL = "normal"
    EXTENDED_ART = "extended_art"
    FULL_ART = "full_art"
    ALT_ART = "alt_art"


VARIATION_MULTIPLIERS: dict[Variation, Decimal] = {
    Variation.NORMAL: Decimal("1.0"),
    Variation.EXTENDED_ART: Decimal("1.5"),
    Variation.FULL_ART: Decimal("2.0"),
    Variation.ALT_ART: Decimal("3.0"),
}


class CardIdentity(NamedTuple):
    """Key deciding whether two cards are the same card."""

    name: str
    rarity: Rarity
    variation: Variation


def normalize_name(name: str) -> str:
    """Lookup key for card and container names (trimmed, case-folded)."""
    return name.strip().lower()


def to_money(value: Decimal | int | float | str) -> Decimal:
    """Coerce to Decimal without float noise (10.1 stays 10.1)."""
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except ArithmeticError as e:
        raise ValidationFailedError(f"'{value}' is not a valid amount") from e


def round_money(amount: Decimal) -> Decimal:
    """Round to cents, half-up."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(eq=False)
class Card:
    """
    A trading card and the number of physical copies it stands for.

    Inside the collection a Card is the ledger entry for its identity and
    `count` is the authoritative number of loose copies. Inside a binder or
    deck every physical unit is its own Card with count fixed at 1.

    Attributes:
        name: Display name, trimmed (identity is case-insensitive)
        rarity: Rarity tier
        variation: Printing variation, drives the value multiplier
        base_value: Market value of a normal printing
        count: Copies represented (0 keeps the entry as a ledger record)
    """

    name: str
    rarity: Rarity
    variation: Variation
    base_value: Decimal
    count: int = 1

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValidationFailedError("Card name cannot be empty")
        object.__setattr__(self, "name", self.name.strip())
        try:
            object.__setattr__(self, "rarity", Rarity(self.rarity))
            object.__setattr__(self, "variation", Variation(self.variation))
        except ValueError as e:
            raise ValidationFailedError(f"Invalid attributes for '{self.name}': {e}") from e
        base_value = to_money(self.base_value)
        if not base_value.is_finite() or base_value < 0:
            raise ValidationFailedError(
                f"Base value for '{self.name}' must be a non-negative amount",
                detail=f"base_value={base_value}",
            )
        object.__setattr__(self, "base_value", base_value)
        if self.count < 0:
            raise ValidationFailedError(f"Count for '{self.name}' cannot be negative")

    def __setattr__(self, attr: str, value: Any) -> None:
        if attr != "count" and attr in self.__dict__:
            raise AttributeError(f"Card.{attr} cannot be changed after creation")
        super().__setattr__(attr, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.identity == other.identity

    def __hash__(self) -> int:
        return hash(self.identity)

    @property
    def identity(self) -> CardIdentity:
        return CardIdentity(normalize_name(self.name), self.rarity, self.variation)

    @property
    def key(self) -> str:
        return normalize_name(self.name)

    @property
    def value(self) -> Decimal:
        """Value of one copy: base value times the variation multiplier."""
        return round_money(self.base_value * VARIATION_MULTIPLIERS[self.variation])

    def increment(self) -> None:
        self.count += 1

    def decrement(self) -> None:
        """Remove one copy. Never drops below zero."""
        if self.count > 0:
            self.count -= 1

    def unit_copy(self) -> "Card":
        """A new single physical copy with the same attributes."""
        return Card(
            name=self.name,
            rarity=self.rarity,
            variation=self.variation,
            base_value=self.base_value,
            count=1,
        )
