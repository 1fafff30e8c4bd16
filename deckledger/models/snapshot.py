"""
Deck Snapshot: Persisted Shape of a Deck Working State.

Storage is owned by the embedding application. This module only fixes
the shape: code -> number maps, code -> number[] for customizations,
and scalar fields, under the keys existing deck records already use.

INVARIANT: dump_snapshot(load_snapshot(text)) == text for any text
produced by dump_snapshot. Key order and values survive a round trip.
"""

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from deckledger.models.failure import SnapshotError


class DeckSnapshot(BaseModel):
    """A persisted deck, as stored by the embedding application."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    investigator_code: str
    slots: dict[str, int] = Field(default_factory=dict)
    side_slots: dict[str, int] = Field(default_factory=dict, alias="sideSlots")
    ignore_deck_size_slots: dict[str, int] = Field(
        default_factory=dict, alias="ignoreDeckSizeSlots"
    )
    xp_discount_slots: dict[str, int] = Field(default_factory=dict, alias="xpDiscountSlots")
    customizations: dict[str, list[int]] = Field(default_factory=dict)
    taboo_id: int | None = None
    xp_earned: int = 0
    xp_spent: int = 0


def dump_snapshot(snapshot: DeckSnapshot) -> str:
    """Serialize a snapshot to compact JSON under its persisted keys."""
    return snapshot.model_dump_json(by_alias=True)


def load_snapshot(data: str | bytes) -> DeckSnapshot:
    """
    Decode a persisted snapshot.

    Raises:
        SnapshotError: If the data is not a well-formed snapshot
    """
    try:
        return DeckSnapshot.model_validate_json(data)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or "<root>"
        raise SnapshotError(detail=f"{location}: {first['msg']}") from e
