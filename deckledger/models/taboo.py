from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TabooEntry:
    """
    A taboo list's ruling on one card.

    Attributes:
        list_id: Taboo list the entry belongs to
        code: Card code
        deck_limit: Reduced per-copy limit; 0 forbids the card
        xp: Flat XP delta applied per counted copy
    """

    list_id: int
    code: str
    deck_limit: int | None = None
    xp: int | None = None

    @property
    def forbidden(self) -> bool:
        """True if the card may not be included at all."""
        return self.deck_limit == 0
