"""
ArkhamDB record parser.

Converts ArkhamDB-shaped JSON records (public card API and taboo API)
into catalog models. Parsing is local: records are read from files or
passed in as already-decoded dicts. Nothing here touches the network.

API reference: https://arkhamdb.com/api/
"""

import json
from pathlib import Path
from typing import Any

from deckledger.config import settings
from deckledger.models.card import CHARACTER_TYPE_CODE, Card, CustomizationOption
from deckledger.models.character import Character, ConstructionOption, LevelRange
from deckledger.models.taboo import TabooEntry

# Keyword lines that modify XP cost
EXCEPTIONAL_KEYWORD = "Exceptional."
MYRIAD_KEYWORD = "Myriad."

# deck_requirements.random target that asks for a basic weakness
RANDOM_WEAKNESS_VALUE = "basicweakness"


def _string_set(value: Any) -> frozenset[str]:
    """Normalize a list (or single string) of filter values."""
    if not value:
        return frozenset()
    if isinstance(value, str):
        return frozenset({value})
    return frozenset(str(v) for v in value)


def _faction_codes(record: dict[str, Any]) -> tuple[str, ...]:
    codes = [record.get(key) for key in ("faction_code", "faction2_code", "faction3_code")]
    present = tuple(str(code) for code in codes if code)
    return present or ("neutral",)


def is_character_record(record: dict[str, Any]) -> bool:
    """True if the record describes a character (investigator) card."""
    return record.get("type_code") == CHARACTER_TYPE_CODE


def parse_customization_options(
    records: list[dict[str, Any]] | None,
) -> tuple[CustomizationOption, ...]:
    if not records:
        return ()
    return tuple(
        CustomizationOption(
            position=int(option.get("position", index)),
            xp=int(option.get("xp") or 0),
            text=option.get("text") or "",
        )
        for index, option in enumerate(records)
    )


def parse_card(record: dict[str, Any]) -> Card:
    """
    Parse one ArkhamDB card record.

    Exceptional and Myriad are taken from explicit flags when the record
    carries them, otherwise from the keyword lines in the card text.

    Args:
        record: Card record from the ArkhamDB public API

    Returns:
        Card model

    Raises:
        KeyError: If the record has no code or name
    """
    text = record.get("text") or ""
    restrictions = record.get("restrictions") or {}
    restricted_to = _string_set(list((restrictions.get("investigator") or {}).keys()))

    exceptional = record.get("exceptional")
    if exceptional is None:
        exceptional = EXCEPTIONAL_KEYWORD in text
    myriad = record.get("myriad")
    if myriad is None:
        myriad = MYRIAD_KEYWORD in text

    deck_limit = record.get("deck_limit")

    return Card(
        code=str(record["code"]),
        name=str(record["name"]),
        type_code=record.get("type_code") or "asset",
        faction_codes=_faction_codes(record),
        xp=int(record.get("xp") or 0),
        deck_limit=settings.default_deck_limit if deck_limit is None else int(deck_limit),
        permanent=bool(record.get("permanent", False)),
        subtype_code=record.get("subtype_code"),
        restricted_to=restricted_to,
        exceptional=bool(exceptional),
        myriad=bool(myriad),
        traits=record.get("traits") or "",
        text=text,
        quantity=int(record.get("quantity") or 1),
        customization_options=parse_customization_options(record.get("customization_options")),
    )


def parse_construction_option(record: dict[str, Any]) -> ConstructionOption:
    """Parse one entry of an investigator's deck_options."""
    level = record.get("level")
    limit = record.get("limit")
    size = record.get("size")
    permanent = record.get("permanent")

    return ConstructionOption(
        faction=_string_set(record.get("faction")),
        level=LevelRange(min=int(level["min"]), max=int(level["max"])) if level else None,
        type=_string_set(record.get("type")),
        trait=_string_set(record.get("trait")),
        permanent=None if permanent is None else bool(permanent),
        uses=_string_set(record.get("uses")),
        name=_string_set(record.get("name")),
        not_=bool(record.get("not", False)),
        limit=None if limit is None else int(limit),
        size=None if size is None else int(size),
        id=record.get("id"),
        error=record.get("error"),
    )


def parse_character(
    record: dict[str, Any],
    card_quantities: dict[str, int] | None = None,
) -> Character:
    """
    Parse an investigator record into a Character.

    Args:
        record: Investigator card record
        card_quantities: {code: printed quantity}, used to seed signature
            cards at their fixed quantity (1 when unknown)

    Returns:
        Character model
    """
    card_quantities = card_quantities or {}
    requirements = record.get("deck_requirements") or {}

    required_cards = {
        str(code): card_quantities.get(str(code), 1) for code in (requirements.get("card") or {})
    }
    requires_random_weakness = any(
        entry.get("value") == RANDOM_WEAKNESS_VALUE for entry in requirements.get("random") or []
    )

    return Character(
        code=str(record["code"]),
        name=str(record["name"]),
        deck_size=int(requirements.get("size") or settings.default_deck_size),
        deck_options=tuple(parse_construction_option(o) for o in record.get("deck_options") or []),
        required_cards=required_cards,
        requires_random_weakness=requires_random_weakness,
        faction_code=record.get("faction_code") or "neutral",
    )


def parse_taboo_entries(record: dict[str, Any]) -> list[TabooEntry]:
    """
    Parse one taboo list record.

    The ArkhamDB taboo API encodes the per-card rulings as a JSON string
    in the `cards` field; an already-decoded list is accepted too.

    Raises:
        ValueError: If the `cards` payload is not valid JSON
    """
    list_id = int(record["id"])
    cards = record.get("cards") or []
    if isinstance(cards, str):
        cards = json.loads(cards)

    entries: list[TabooEntry] = []
    for ruling in cards:
        deck_limit = ruling.get("deck_limit")
        xp = ruling.get("xp")
        entries.append(
            TabooEntry(
                list_id=list_id,
                code=str(ruling["code"]),
                deck_limit=None if deck_limit is None else int(deck_limit),
                xp=None if xp is None else int(xp),
            )
        )
    return entries


def load_records(path: Path) -> list[dict[str, Any]]:
    """
    Read a JSON array of records from disk.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not a JSON array
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array of records in {path}")

    return data
