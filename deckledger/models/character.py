"""
Character Models: Deck Construction Rules.

A Character owns a deck and defines how it may be built:
required size, signature cards and an ordered list of
construction options.

INVARIANT: Construction options are evaluated in declaration order.
The first matching non-`not` option is the one that counts for
`limit` and `size` bookkeeping.
"""

from dataclasses import dataclass, field

# Required deck size when a character declares none
DEFAULT_DECK_SIZE = 30


@dataclass(frozen=True, slots=True)
class LevelRange:
    """Inclusive XP level range [min, max]."""

    min: int = 0
    max: int = 5

    def __contains__(self, xp: int) -> bool:
        return self.min <= xp <= self.max


@dataclass(frozen=True, slots=True)
class ConstructionOption:
    """
    A filter rule over cards.

    A card matches when ALL present filters match. Absent filters
    (None or empty) do not constrain.

    Attributes:
        faction: Allowed faction codes
        level: Allowed XP level range
        type: Allowed type codes
        trait: Trait substrings (any one, case-insensitive)
        permanent: Required permanence, when specified
        uses: "Uses (...)" substrings (any one, case-insensitive)
        name: Explicitly allowed card names
        not_: This option excludes matching cards instead of allowing them
        limit: Max total copies across all cards matching this option
        size: Copies matching this option exempt from the deck-size count
        id: Stable key aggregating `limit` and `size` usage across cards
        error: Message used when a `not_` option rejects a card
    """

    faction: frozenset[str] = frozenset()
    level: LevelRange | None = None
    type: frozenset[str] = frozenset()
    trait: frozenset[str] = frozenset()
    permanent: bool | None = None
    uses: frozenset[str] = frozenset()
    name: frozenset[str] = frozenset()
    not_: bool = False
    limit: int | None = None
    size: int | None = None
    id: str | None = None
    error: str | None = None


@dataclass(frozen=True, slots=True)
class Character:
    """
    The owner of a deck.

    Attributes:
        code: Character card code
        name: Character name
        deck_size: Required number of counted cards
        deck_options: Ordered construction options
        required_cards: Signature cards {code: fixed quantity}
        requires_random_weakness: Deck must include a random basic weakness
        faction_code: Character's own faction (informational)
    """

    code: str
    name: str
    deck_size: int = DEFAULT_DECK_SIZE
    deck_options: tuple[ConstructionOption, ...] = ()
    required_cards: dict[str, int] = field(default_factory=dict)
    requires_random_weakness: bool = False
    faction_code: str = "neutral"

    def is_required(self, card_code: str) -> bool:
        """True if the card is one of this character's signature cards."""
        return card_code in self.required_cards
