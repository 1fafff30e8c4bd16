"""
Eligibility resolver.

Decides whether a character may include a card, and which construction
option admitted it. Pure functions over catalog data.

Resolution order:
1. Character cards are never allowed
2. Signature cards are allowed only for the characters they name
3. Any `not` option that matches rejects the card
4. The first positive option that matches admits the card
5. Otherwise the card is rejected
"""

import re
from collections.abc import Iterable

from deckledger.models.card import CHARACTER_TYPE_CODE, Card
from deckledger.models.character import Character, ConstructionOption
from deckledger.models.deck_state import DeckState
from deckledger.models.validation import EligibilityResult
from deckledger.services.catalog import CatalogProvider

CHARACTER_CARD_REASON = "Investigators cannot be included in decks"
SIGNATURE_REASON = "This card is a signature card for another investigator"
EXCLUDED_REASON = "Card excluded by deck building rules"
NO_MATCH_REASON = "Card does not match any deck building option"


def _has_uses(card_text: str, use: str) -> bool:
    """Match "Uses (4 ammo)" style text; the count may be a number or X."""
    return re.search(rf"uses \(\S+ {re.escape(use.lower())}", card_text) is not None


def card_matches_option(card: Card, option: ConstructionOption) -> bool:
    """
    Check whether a card satisfies every filter present on an option.

    The option's `not_` flag is ignored here; callers decide whether a
    match admits or excludes.
    """
    if option.faction and not any(f in option.faction for f in card.faction_codes):
        return False

    if option.level is not None and card.xp not in option.level:
        return False

    if option.type and card.type_code not in option.type:
        return False

    if option.trait:
        card_traits = card.traits.lower()
        if not card_traits or not any(t.lower() in card_traits for t in option.trait):
            return False

    if option.permanent is not None and card.permanent != option.permanent:
        return False

    if option.uses:
        card_text = card.text.lower()
        if not card_text or not any(_has_uses(card_text, use) for use in option.uses):
            return False

    if option.name and card.name not in option.name:
        return False

    return True


def resolve_eligibility(character: Character, card: Card) -> EligibilityResult:
    """
    Decide whether a character may include a card.

    Args:
        character: Deck owner
        card: Candidate card (already resolved from the catalog)

    Returns:
        EligibilityResult; `matched_option` is set only for cards admitted
        by a construction option
    """
    if card.type_code == CHARACTER_TYPE_CODE:
        return EligibilityResult(allowed=False, reason=CHARACTER_CARD_REASON)

    if card.is_signature:
        if character.code not in card.restricted_to:
            return EligibilityResult(allowed=False, reason=SIGNATURE_REASON)
        return EligibilityResult(allowed=True)

    for option in character.deck_options:
        if option.not_ and card_matches_option(card, option):
            return EligibilityResult(allowed=False, reason=option.error or EXCLUDED_REASON)

    for option in character.deck_options:
        if not option.not_ and card_matches_option(card, option):
            return EligibilityResult(allowed=True, matched_option=option)

    return EligibilityResult(allowed=False, reason=NO_MATCH_REASON)


def eligible_cards(character: Character, cards: Iterable[Card]) -> list[Card]:
    """Filter cards down to those the character may include."""
    return [card for card in cards if resolve_eligibility(character, card).allowed]


def eligible_cards_by_faction(
    character: Character,
    cards: Iterable[Card],
) -> dict[str, list[Card]]:
    """Eligible cards grouped by primary faction, in first-seen faction order."""
    by_faction: dict[str, list[Card]] = {}
    for card in eligible_cards(character, cards):
        by_faction.setdefault(card.faction_code, []).append(card)
    return by_faction


def can_add_card(catalog: CatalogProvider, state: DeckState, code: str) -> EligibilityResult:
    """
    Check whether one more copy of a card may be added to the deck.

    Rejects when no character is chosen, the card is unknown, or the deck
    already holds the card's copy limit. Otherwise defers to the resolver.
    """
    if state.character is None:
        return EligibilityResult(allowed=False, reason="No investigator selected")

    card = catalog.get_card(code)
    if card is None:
        return EligibilityResult(allowed=False, reason="Card not found")

    if state.quantity(code) >= card.deck_limit:
        return EligibilityResult(
            allowed=False,
            reason=f"Maximum copies ({card.deck_limit}) already in deck",
        )

    return resolve_eligibility(state.character, card)
