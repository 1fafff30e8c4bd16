"""
XP ledger.

Computes the XP spent on a deck's cards under every cost modifier:

- Exceptional cards cost double their printed XP
- Myriad cards are paid for once regardless of copies
- Per-card discounts reduce the base cost, never below zero for that card
- Taboo XP deltas apply per counted copy (not doubled, not discounted)
- Customization options add their flat XP (never discounted)

INVARIANT: The grand total is never negative.
"""

from collections.abc import Iterable, Mapping

from deckledger.models.card import Card
from deckledger.services.catalog import CatalogProvider


def counted_copies(card: Card, quantity: int) -> int:
    """Copies that are paid for: one for Myriad cards, otherwise all."""
    return 1 if card.myriad else quantity


def base_xp_cost(card: Card, quantity: int) -> int:
    """
    Printed XP cost of `quantity` copies before discounts and taboo.

    This is also the largest discount the card can absorb.
    """
    multiplier = 2 if card.exceptional else 1
    return card.xp * counted_copies(card, quantity) * multiplier


def compute_xp_spent(
    catalog: CatalogProvider,
    slots: Mapping[str, int],
    discounts: Mapping[str, int] | None = None,
    customizations: Mapping[str, Iterable[int]] | None = None,
    taboo_list_id: int | None = None,
) -> int:
    """
    Total XP spent on the cards in `slots`.

    Unknown card codes contribute nothing.

    Args:
        catalog: Card, taboo and customization lookups
        slots: Main deck {code: quantity}
        discounts: XP subtracted from a card's base cost {code: amount}
        customizations: Selected option positions {code: positions}
        taboo_list_id: Active taboo list, if any

    Returns:
        Spent XP, clamped at zero
    """
    discounts = discounts or {}
    customizations = customizations or {}
    total = 0

    for code, quantity in slots.items():
        card = catalog.get_card(code)
        if card is None:
            continue

        base = base_xp_cost(card, quantity)
        total += base - min(discounts.get(code, 0), base)

        if taboo_list_id is not None:
            entry = catalog.get_taboo_entry(taboo_list_id, code)
            if entry is not None and entry.xp:
                total += entry.xp * counted_copies(card, quantity)

        for position in customizations.get(code, ()):
            option = catalog.get_customization_option(code, position)
            if option is not None:
                total += option.xp

    return max(0, total)


def calculate_upgrade_cost(old_card: Card, new_card: Card) -> int:
    """
    XP to replace one card with another.

    Upgrading to a higher level of the same card pays the difference;
    a different card pays its full level.
    """
    if old_card.name == new_card.name:
        return max(0, new_card.xp - old_card.xp)
    return new_card.xp
