"""
Deck Working State: The Single Mutable Deck, Held Immutably.

A DeckState is never changed in place. The deck state machine produces
a new DeckState for every accepted action and returns the same object
for a rejected one.

INVARIANTS:
- `slots` never contains a zero or negative quantity
- `exempt_counts[c] <= slots[c]`
- `discounts[c]` never exceeds the card's maximum base XP cost
- `xp_spent >= 0`
- `len(history) <= max_history`; `history[history_cursor]` mirrors the
  current `(slots, xp_spent)` whenever history is non-empty
"""

from collections.abc import Mapping
from dataclasses import dataclass, field

from deckledger.models.character import Character
from deckledger.models.snapshot import DeckSnapshot
from deckledger.models.validation import ValidationResult


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """An undo/redo point: slot quantities and spent XP."""

    slots: tuple[tuple[str, int], ...]
    xp_spent: int

    @classmethod
    def capture(cls, slots: Mapping[str, int], xp_spent: int) -> "HistoryEntry":
        return cls(slots=tuple(slots.items()), xp_spent=xp_spent)

    def slots_dict(self) -> dict[str, int]:
        """Slot quantities as a fresh dict (insertion order preserved)."""
        return dict(self.slots)


@dataclass(frozen=True, slots=True)
class DeckState:
    """
    The deck being edited.

    Attributes:
        character: Owner of the deck (None before one is chosen)
        slots: Main deck {code: quantity}
        side_slots: Side deck {code: quantity}, never counted or charged
        exempt_counts: Copies manually exempted from deck size {code: count}
        discounts: XP subtracted from a card's base cost {code: amount}
        customizations: Selected upgrade positions {code: positions}
        taboo_list_id: Active taboo list
        xp_earned: Campaign XP available to spend
        xp_spent: XP spent, as the XP ledger computes it
        history: Undo/redo points, oldest first
        history_cursor: Index of the entry matching the current state (-1 if none)
        validation: Cached validation result for the current state
    """

    character: Character | None = None
    slots: dict[str, int] = field(default_factory=dict)
    side_slots: dict[str, int] = field(default_factory=dict)
    exempt_counts: dict[str, int] = field(default_factory=dict)
    discounts: dict[str, int] = field(default_factory=dict)
    customizations: dict[str, tuple[int, ...]] = field(default_factory=dict)
    taboo_list_id: int | None = None
    xp_earned: int = 0
    xp_spent: int = 0
    history: tuple[HistoryEntry, ...] = ()
    history_cursor: int = -1
    validation: ValidationResult | None = None

    @property
    def can_undo(self) -> bool:
        return self.history_cursor > 0

    @property
    def can_redo(self) -> bool:
        return 0 <= self.history_cursor < len(self.history) - 1

    @property
    def available_xp(self) -> int:
        """Earned XP not yet spent."""
        return self.xp_earned - self.xp_spent

    def quantity(self, code: str) -> int:
        return self.slots.get(code, 0)

    def side_quantity(self, code: str) -> int:
        return self.side_slots.get(code, 0)

    def total_cards(self) -> int:
        """Total copies in the main deck, counted or not."""
        return sum(self.slots.values())

    def to_snapshot(self) -> DeckSnapshot:
        """
        Capture the persisted shape of this state.

        Raises:
            ValueError: If no character has been chosen
        """
        if self.character is None:
            raise ValueError("Cannot snapshot a deck without a character")

        return DeckSnapshot(
            investigator_code=self.character.code,
            slots=dict(self.slots),
            side_slots=dict(self.side_slots),
            ignore_deck_size_slots=dict(self.exempt_counts),
            xp_discount_slots=dict(self.discounts),
            customizations={code: list(p) for code, p in self.customizations.items()},
            taboo_id=self.taboo_list_id,
            xp_earned=self.xp_earned,
            xp_spent=self.xp_spent,
        )
