"""
Validate a saved deck.

Loads the card catalog and a deck snapshot JSON file, then logs every
validation issue. Exits non-zero when the deck is not legal.

Usage:
    python -m deckledger.jobs.validate_deck deck.json [--cards cards.json] [--taboos taboos.json]
"""

import argparse
import logging
import sys
from pathlib import Path

from deckledger.models.actions import LoadDeck
from deckledger.models.deck_state import DeckState
from deckledger.models.failure import CatalogLoadError, SnapshotError
from deckledger.models.snapshot import load_snapshot
from deckledger.models.validation import ValidationResult
from deckledger.services.catalog import load_catalog
from deckledger.services.deck_state_machine import DeckStateMachine

logger = logging.getLogger(__name__)


def run_validation(
    deck_path: Path,
    cards_path: Path | None = None,
    taboos_path: Path | None = None,
) -> ValidationResult | None:
    """
    Validate one deck snapshot file.

    Returns:
        The validation result, or None if the deck's investigator is not
        in the catalog
    """
    catalog = load_catalog(cards_path, taboos_path)
    snapshot = load_snapshot(deck_path.read_text(encoding="utf-8"))

    machine = DeckStateMachine(catalog)
    state = machine.dispatch(DeckState(), LoadDeck(snapshot))
    if state.validation is None:
        logger.error("Unknown investigator %s", snapshot.investigator_code)
        return None

    result = state.validation
    for issue in result.errors:
        logger.error("%s: %s", issue.code.value, issue.message)
    for issue in result.warnings:
        logger.warning("%s: %s", issue.code.value, issue.message)

    logger.info(
        "Deck %s: %d/%d cards, %d XP spent of %d earned",
        "valid" if result.valid else "invalid",
        result.deck_size,
        result.required_size,
        state.xp_spent,
        state.xp_earned,
    )
    return result


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Validate a saved deck snapshot.")
    parser.add_argument("deck", type=Path, help="Deck snapshot JSON file")
    parser.add_argument("--cards", type=Path, default=None, help="ArkhamDB card list JSON")
    parser.add_argument("--taboos", type=Path, default=None, help="ArkhamDB taboo list JSON")
    args = parser.parse_args(argv)

    try:
        result = run_validation(args.deck, args.cards, args.taboos)
    except (FileNotFoundError, CatalogLoadError, SnapshotError) as e:
        logger.error("Failed to validate deck: %s", e)
        return 2

    if result is None:
        return 2
    return 0 if result.valid else 1


if __name__ == "__main__":
    sys.exit(main())
