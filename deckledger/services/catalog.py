"""
Catalog provider.

The engine reads cards, characters, taboo rulings and customization
options through the CatalogProvider protocol, passed explicitly into
every call. Nothing in the engine holds a global catalog.

InMemoryCatalog is the reference implementation: plain dictionaries,
buildable from ArkhamDB records or from JSON files on disk.
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Protocol

from deckledger.config import settings
from deckledger.models.card import Card, CustomizationOption
from deckledger.models.character import Character
from deckledger.models.failure import CatalogLoadError
from deckledger.models.taboo import TabooEntry
from deckledger.parsers.arkhamdb import (
    is_character_record,
    load_records,
    parse_card,
    parse_character,
    parse_taboo_entries,
)

logger = logging.getLogger(__name__)


class CatalogProvider(Protocol):
    """Read-only lookups the engine needs. Supplied by the embedding application."""

    def get_card(self, code: str) -> Card | None: ...

    def get_character(self, code: str) -> Character | None: ...

    def get_taboo_entry(self, list_id: int, code: str) -> TabooEntry | None: ...

    def get_customization_option(self, code: str, position: int) -> CustomizationOption | None: ...


@dataclass
class InMemoryCatalog:
    """
    Dictionary-backed catalog.

    Attributes:
        cards: {code: Card}, character cards included
        characters: {code: Character}
        taboo_entries: {(list_id, code): TabooEntry}
    """

    cards: dict[str, Card] = field(default_factory=dict)
    characters: dict[str, Character] = field(default_factory=dict)
    taboo_entries: dict[tuple[int, str], TabooEntry] = field(default_factory=dict)

    @classmethod
    def from_models(
        cls,
        cards: Iterable[Card] = (),
        characters: Iterable[Character] = (),
        taboo_entries: Iterable[TabooEntry] = (),
    ) -> "InMemoryCatalog":
        """Build a catalog from already-constructed models."""
        return cls(
            cards={card.code: card for card in cards},
            characters={character.code: character for character in characters},
            taboo_entries={(entry.list_id, entry.code): entry for entry in taboo_entries},
        )

    @classmethod
    def from_records(
        cls,
        card_records: Iterable[dict[str, Any]],
        taboo_records: Iterable[dict[str, Any]] = (),
    ) -> "InMemoryCatalog":
        """
        Build a catalog from ArkhamDB records.

        Investigator records become both a Card (so decks can reject them)
        and a Character. Signature cards are seeded at their printed quantity.
        """
        records = list(card_records)
        cards = [parse_card(record) for record in records]
        quantities = {card.code: card.quantity for card in cards}

        characters = [
            parse_character(record, quantities) for record in records if is_character_record(record)
        ]

        entries: list[TabooEntry] = []
        for taboo_record in taboo_records:
            entries.extend(parse_taboo_entries(taboo_record))

        return cls.from_models(cards, characters, entries)

    def get_card(self, code: str) -> Card | None:
        return self.cards.get(code)

    def get_character(self, code: str) -> Character | None:
        return self.characters.get(code)

    def get_taboo_entry(self, list_id: int, code: str) -> TabooEntry | None:
        return self.taboo_entries.get((list_id, code))

    def get_customization_option(self, code: str, position: int) -> CustomizationOption | None:
        card = self.cards.get(code)
        if card is None:
            return None
        return card.customization_option(position)

    def player_cards(self) -> Iterator[Card]:
        """All cards except character cards."""
        return (card for card in self.cards.values() if card.code not in self.characters)

    def basic_weaknesses(self) -> list[Card]:
        return [card for card in self.cards.values() if card.is_basic_weakness]


def load_catalog(
    cards_path: Path | None = None,
    taboos_path: Path | None = None,
) -> InMemoryCatalog:
    """
    Load a catalog from ArkhamDB JSON files.

    Args:
        cards_path: JSON array of card records. Defaults to settings.catalog_path
        taboos_path: Optional JSON array of taboo list records

    Returns:
        InMemoryCatalog

    Raises:
        FileNotFoundError: If a catalog file doesn't exist
        CatalogLoadError: If a file exists but its records cannot be parsed
    """
    if cards_path is None:
        cards_path = settings.catalog_path

    if not cards_path.exists():
        raise FileNotFoundError(
            f"Card catalog not found at {cards_path}. "
            "Export the ArkhamDB card list to this path or set DECKLEDGER_CATALOG_PATH."
        )
    if taboos_path is not None and not taboos_path.exists():
        raise FileNotFoundError(f"Taboo list file not found at {taboos_path}.")

    try:
        card_records = load_records(cards_path)
        taboo_records = load_records(taboos_path) if taboos_path is not None else []
        catalog = InMemoryCatalog.from_records(card_records, taboo_records)
    except (KeyError, TypeError, ValueError) as e:
        source = str(cards_path if taboos_path is None else f"{cards_path} / {taboos_path}")
        raise CatalogLoadError(source, detail=f"{type(e).__name__}: {e}") from e

    logger.info(
        "Loaded catalog: %d cards, %d characters, %d taboo rulings",
        len(catalog.cards),
        len(catalog.characters),
        len(catalog.taboo_entries),
    )
    return catalog


@lru_cache(maxsize=1)
def get_catalog() -> InMemoryCatalog:
    """
    Get the cached default catalog.

    Loaded from settings.catalog_path / settings.taboos_path on first use.

    Raises:
        FileNotFoundError: If the catalog file doesn't exist
    """
    return load_catalog(settings.catalog_path, settings.taboos_path)
