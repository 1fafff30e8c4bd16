"""
Deckledger services.

Deck legality checks, deck-size and XP accounting, and the deck state
machine. Every function takes its catalog explicitly.
"""

from deckledger.services.catalog import (
    CatalogProvider,
    InMemoryCatalog,
    get_catalog,
    load_catalog,
)
from deckledger.services.deck_size import compute_deck_size
from deckledger.services.deck_state_machine import (
    DeckStateMachine,
    available_xp,
    dispatch,
    new_deck,
    snapshot_from_state,
)
from deckledger.services.deck_validator import validate_deck
from deckledger.services.eligibility import (
    can_add_card,
    card_matches_option,
    eligible_cards,
    eligible_cards_by_faction,
    resolve_eligibility,
)
from deckledger.services.xp_ledger import (
    base_xp_cost,
    calculate_upgrade_cost,
    compute_xp_spent,
    counted_copies,
)

__all__ = [
    # Catalog
    "CatalogProvider",
    "InMemoryCatalog",
    "get_catalog",
    "load_catalog",
    # Eligibility
    "resolve_eligibility",
    "card_matches_option",
    "eligible_cards",
    "eligible_cards_by_faction",
    "can_add_card",
    # Accounting
    "compute_deck_size",
    "compute_xp_spent",
    "base_xp_cost",
    "counted_copies",
    "calculate_upgrade_cost",
    # Validation
    "validate_deck",
    # State machine
    "DeckStateMachine",
    "dispatch",
    "new_deck",
    "available_xp",
    "snapshot_from_state",
]
