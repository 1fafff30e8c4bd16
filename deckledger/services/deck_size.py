"""
Deck-size accountant.

Counts how many copies in the main deck count toward the character's
required deck size.

Never counted:
- Permanent cards
- Weaknesses (basic and signature)
- The character's required signature cards
- Copies manually exempted via exempt counts

Construction options with a `size` and an `id` grant a capped number of
"free" copies shared by every card matching that option.

INVARIANT: Free copies are granted greedily in slot insertion order.
Two cards competing for the same allowance are resolved by which was
added to the deck first, not by any priority rule.
"""

import logging
from collections.abc import Mapping

from deckledger.models.character import Character
from deckledger.services.catalog import CatalogProvider
from deckledger.services.eligibility import resolve_eligibility

logger = logging.getLogger(__name__)


def compute_deck_size(
    catalog: CatalogProvider,
    character: Character,
    slots: Mapping[str, int],
    exempt_counts: Mapping[str, int] | None = None,
) -> int:
    """
    Count the copies that count toward the required deck size.

    Args:
        catalog: Card lookups
        character: Deck owner
        slots: Main deck {code: quantity}, iterated in insertion order
        exempt_counts: Manually exempted copies {code: count}

    Returns:
        Number of counted copies
    """
    exempt_counts = exempt_counts or {}
    size_usage: dict[str, int] = {}
    total = 0

    for code, quantity in slots.items():
        card = catalog.get_card(code)
        if card is None:
            continue

        if card.permanent or card.is_weakness or character.is_required(code):
            continue

        countable = quantity - exempt_counts.get(code, 0)
        if countable <= 0:
            continue

        option = resolve_eligibility(character, card).matched_option
        if option is None or option.size is None or not option.id:
            total += countable
            continue

        used = size_usage.get(option.id, 0)
        free = min(countable, max(0, option.size - used))
        size_usage[option.id] = used + free
        total += countable - free

        if free:
            logger.debug(
                "%d free cop%s of %s under option %s (%d/%d used)",
                free,
                "y" if free == 1 else "ies",
                code,
                option.id,
                used + free,
                option.size,
            )

    return total
