"""
Deck Actions: The Complete Mutation Surface.

Every change to a deck working state is one of these actions,
dispatched through the deck state machine. Actions are plain
immutable values; they carry no behavior.

Structurally invalid payloads (negative quantities, empty codes)
are not rejected here. The state machine clamps or ignores them so
that dispatch stays total.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field

from deckledger.models.snapshot import DeckSnapshot

# --- Main deck ---


@dataclass(frozen=True, slots=True)
class AddCard:
    code: str
    quantity: int = 1


@dataclass(frozen=True, slots=True)
class RemoveCard:
    code: str
    quantity: int = 1


@dataclass(frozen=True, slots=True)
class SetQuantity:
    """Set an exact quantity. Zero or less removes the card."""

    code: str
    quantity: int


@dataclass(frozen=True, slots=True)
class SwapCard:
    """Replace one copy of `old_code` with one copy of `new_code` (upgrade)."""

    old_code: str
    new_code: str


# --- Side deck ---


@dataclass(frozen=True, slots=True)
class AddToSide:
    code: str
    quantity: int = 1


@dataclass(frozen=True, slots=True)
class RemoveFromSide:
    code: str
    quantity: int = 1


@dataclass(frozen=True, slots=True)
class MoveToSide:
    """Move one copy from the main deck to the side deck."""

    code: str


@dataclass(frozen=True, slots=True)
class MoveToMain:
    """Move one copy from the side deck to the main deck."""

    code: str


# --- Per-card modifiers ---


@dataclass(frozen=True, slots=True)
class SetExemptCount:
    """Exempt `count` copies of a card from the deck-size count."""

    code: str
    count: int


@dataclass(frozen=True, slots=True)
class SetDiscount:
    """Subtract `amount` XP from a card's base cost."""

    code: str
    amount: int


@dataclass(frozen=True, slots=True)
class SetCustomizations:
    """Select customization positions for a card. Empty clears them."""

    code: str
    positions: tuple[int, ...] = ()


@dataclass(frozen=True, slots=True)
class SetTabooList:
    taboo_list_id: int | None


# --- Campaign XP ---


@dataclass(frozen=True, slots=True)
class AddXp:
    """Add earned XP after a scenario."""

    amount: int


@dataclass(frozen=True, slots=True)
class SetXp:
    """Set earned and/or spent XP explicitly (campaign action)."""

    earned: int | None = None
    spent: int | None = None


# --- Whole-deck replacement ---


@dataclass(frozen=True, slots=True)
class NewDeck:
    """Start a fresh deck for a character."""

    character_code: str


@dataclass(frozen=True, slots=True)
class LoadDeck:
    """Replace the working state with a persisted snapshot."""

    snapshot: DeckSnapshot


@dataclass(frozen=True, slots=True)
class ImportDeck:
    """Start a fresh deck for a character from already-parsed quantities."""

    character_code: str
    slots: Mapping[str, int] = field(default_factory=dict)


# --- History ---


@dataclass(frozen=True, slots=True)
class Undo:
    pass


@dataclass(frozen=True, slots=True)
class Redo:
    pass


@dataclass(frozen=True, slots=True)
class Revalidate:
    """Recompute the cached validation result."""


DeckAction = (
    AddCard
    | RemoveCard
    | SetQuantity
    | SwapCard
    | AddToSide
    | RemoveFromSide
    | MoveToSide
    | MoveToMain
    | SetExemptCount
    | SetDiscount
    | SetCustomizations
    | SetTabooList
    | AddXp
    | SetXp
    | NewDeck
    | LoadDeck
    | ImportDeck
    | Undo
    | Redo
    | Revalidate
)
