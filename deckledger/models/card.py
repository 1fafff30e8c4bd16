"""
Card Models.

Player cards as the catalog provides them. All models are frozen:
the engine reads catalog data and never mutates it.
"""

from dataclasses import dataclass

# Type code that marks a character (investigator) card
CHARACTER_TYPE_CODE = "investigator"

# Subtype codes for weaknesses
BASIC_WEAKNESS_SUBTYPE = "basicweakness"
WEAKNESS_SUBTYPES = frozenset({"weakness", BASIC_WEAKNESS_SUBTYPE})

# Copy limit when a card declares none
DEFAULT_DECK_LIMIT = 2


@dataclass(frozen=True, slots=True)
class CustomizationOption:
    """
    A selectable upgrade on a customizable card.

    Attributes:
        position: Index of the option on the upgrade sheet
        xp: XP cost to unlock this option
        text: Rules text of the option (informational)
    """

    position: int
    xp: int
    text: str = ""


@dataclass(frozen=True, slots=True)
class Card:
    """
    A player card from the catalog.

    Attributes:
        code: Unique card code (e.g., "01020")
        name: Card name
        type_code: Card type (asset, event, skill, investigator, ...)
        faction_codes: One to three faction slots, primary first
        xp: Card level; 0 means the card is free
        deck_limit: Maximum copies per deck (default 2)
        permanent: Permanent cards never count toward deck size
        subtype_code: "weakness" / "basicweakness" or None
        restricted_to: Character codes this signature card belongs to
        exceptional: Costs double XP
        myriad: Pays XP once regardless of copies
        traits: Trait line (e.g., "Item. Weapon. Firearm.")
        text: Rules text
        quantity: Copies printed per pack (seeds signature cards)
        customization_options: Upgrade sheet options, if customizable
    """

    code: str
    name: str
    type_code: str = "asset"
    faction_codes: tuple[str, ...] = ("neutral",)
    xp: int = 0
    deck_limit: int = DEFAULT_DECK_LIMIT
    permanent: bool = False
    subtype_code: str | None = None
    restricted_to: frozenset[str] = frozenset()
    exceptional: bool = False
    myriad: bool = False
    traits: str = ""
    text: str = ""
    quantity: int = 1
    customization_options: tuple[CustomizationOption, ...] = ()

    @property
    def faction_code(self) -> str:
        """Primary faction."""
        return self.faction_codes[0] if self.faction_codes else "neutral"

    @property
    def is_signature(self) -> bool:
        """True if the card is bound to one or more characters."""
        return len(self.restricted_to) > 0

    @property
    def is_basic_weakness(self) -> bool:
        return self.subtype_code == BASIC_WEAKNESS_SUBTYPE

    @property
    def is_weakness(self) -> bool:
        return self.subtype_code in WEAKNESS_SUBTYPES

    def customization_option(self, position: int) -> CustomizationOption | None:
        """Get the customization option at a position, or None."""
        for option in self.customization_options:
            if option.position == position:
                return option
        return None
