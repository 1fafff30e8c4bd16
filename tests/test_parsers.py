"""Tests for ArkhamDB record parsing."""

import json
from pathlib import Path

import pytest

from deckledger.models.character import LevelRange
from deckledger.parsers.arkhamdb import (
    is_character_record,
    load_records,
    parse_card,
    parse_character,
    parse_construction_option,
    parse_taboo_entries,
)

ROLAND_RECORD = {
    "code": "01001",
    "name": "Roland Banks",
    "type_code": "investigator",
    "faction_code": "guardian",
    "deck_requirements": {
        "size": 30,
        "card": {"01006": "01006", "01007": "01007"},
        "random": [{"target": "subtype", "value": "basicweakness"}],
    },
    "deck_options": [
        {"faction": ["guardian", "neutral"], "level": {"min": 0, "max": 5}},
        {"faction": ["seeker"], "level": {"min": 0, "max": 0}, "limit": 3, "id": "splash"},
    ],
}


class TestParseCard:
    def test_minimal_record(self) -> None:
        card = parse_card({"code": "01088", "name": "Emergency Cache"})

        assert card.code == "01088"
        assert card.type_code == "asset"
        assert card.faction_codes == ("neutral",)
        assert card.xp == 0
        assert card.deck_limit == 2

    def test_full_record(self) -> None:
        card = parse_card(
            {
                "code": "02186",
                "name": "Beat Cop",
                "type_code": "asset",
                "faction_code": "guardian",
                "faction2_code": "survivor",
                "xp": 2,
                "deck_limit": 2,
                "traits": "Ally. Police.",
                "quantity": 2,
            }
        )

        assert card.faction_codes == ("guardian", "survivor")
        assert card.xp == 2
        assert card.traits == "Ally. Police."
        assert card.quantity == 2

    def test_null_xp_is_zero(self) -> None:
        assert parse_card({"code": "x", "name": "Y", "xp": None}).xp == 0

    def test_keyword_flags_from_text(self) -> None:
        exceptional = parse_card({"code": "a", "name": "A", "text": "Exceptional. Fast."})
        myriad = parse_card({"code": "b", "name": "B", "text": "Myriad.\n[action]: Draw 1 card."})

        assert exceptional.exceptional and not exceptional.myriad
        assert myriad.myriad and not myriad.exceptional

    def test_explicit_flags_win_over_text(self) -> None:
        card = parse_card({"code": "a", "name": "A", "text": "Exceptional.", "exceptional": False})
        assert not card.exceptional

    def test_signature_restriction(self) -> None:
        card = parse_card(
            {
                "code": "01006",
                "name": "Roland's .38 Special",
                "restrictions": {"investigator": {"01001": "01001"}},
            }
        )

        assert card.restricted_to == frozenset({"01001"})
        assert card.is_signature

    def test_weakness_subtype(self) -> None:
        card = parse_card({"code": "01096", "name": "Amnesia", "subtype_code": "basicweakness"})
        assert card.is_basic_weakness

    def test_customization_options(self) -> None:
        card = parse_card(
            {
                "code": "09021",
                "name": "Hunter's Armor",
                "customization_options": [{"xp": 1}, {"xp": 2, "text": "Durable"}],
            }
        )

        assert [o.position for o in card.customization_options] == [0, 1]
        assert card.customization_option(1) is not None
        assert card.customization_option(1).xp == 2

    def test_missing_code_raises(self) -> None:
        with pytest.raises(KeyError):
            parse_card({"name": "Nameless"})


class TestParseCharacter:
    def test_is_character_record(self) -> None:
        assert is_character_record(ROLAND_RECORD)
        assert not is_character_record({"code": "x", "type_code": "asset"})

    def test_requirements(self) -> None:
        character = parse_character(ROLAND_RECORD, {"01006": 1, "01007": 1})

        assert character.code == "01001"
        assert character.deck_size == 30
        assert character.required_cards == {"01006": 1, "01007": 1}
        assert character.requires_random_weakness
        assert character.faction_code == "guardian"

    def test_options_in_order(self) -> None:
        character = parse_character(ROLAND_RECORD)

        first, second = character.deck_options
        assert first.faction == frozenset({"guardian", "neutral"})
        assert second.limit == 3
        assert second.id == "splash"

    def test_missing_size_uses_default(self) -> None:
        character = parse_character({"code": "x", "name": "No Size"})

        assert character.deck_size == 30
        assert character.deck_options == ()
        assert not character.requires_random_weakness


class TestParseConstructionOption:
    def test_filters(self) -> None:
        option = parse_construction_option(
            {
                "faction": ["seeker"],
                "level": {"min": 0, "max": 2},
                "type": ["asset"],
                "trait": ["Tome"],
                "uses": ["charges"],
                "size": 2,
                "id": "free-assets",
            }
        )

        assert option.level == LevelRange(min=0, max=2)
        assert option.type == frozenset({"asset"})
        assert option.trait == frozenset({"Tome"})
        assert option.uses == frozenset({"charges"})
        assert option.size == 2
        assert option.limit is None

    def test_not_option(self) -> None:
        option = parse_construction_option(
            {"not": True, "trait": ["Spell"], "error": "No spells"}
        )

        assert option.not_
        assert option.error == "No spells"

    def test_single_string_filter(self) -> None:
        option = parse_construction_option({"faction": "mystic"})
        assert option.faction == frozenset({"mystic"})

    def test_absent_filters_do_not_constrain(self) -> None:
        option = parse_construction_option({})

        assert option.level is None
        assert option.permanent is None
        assert option.faction == frozenset()


class TestParseTabooEntries:
    def test_json_encoded_cards(self) -> None:
        record = {
            "id": 5,
            "cards": json.dumps(
                [
                    {"code": "01016", "xp": 1},
                    {"code": "01017", "deck_limit": 0},
                ]
            ),
        }

        entries = parse_taboo_entries(record)

        assert [e.code for e in entries] == ["01016", "01017"]
        assert entries[0].xp == 1
        assert entries[0].deck_limit is None
        assert entries[1].forbidden
        assert all(e.list_id == 5 for e in entries)

    def test_decoded_cards(self) -> None:
        entries = parse_taboo_entries({"id": "2", "cards": [{"code": "01020", "deck_limit": 1}]})

        assert entries[0].list_id == 2
        assert entries[0].deck_limit == 1

    def test_empty_list(self) -> None:
        assert parse_taboo_entries({"id": 1}) == []

    def test_bad_json_raises(self) -> None:
        with pytest.raises(ValueError):
            parse_taboo_entries({"id": 1, "cards": "[{"})


class TestLoadRecords:
    def test_reads_array(self, tmp_path: Path) -> None:
        path = tmp_path / "cards.json"
        path.write_text(json.dumps([{"code": "01088", "name": "Emergency Cache"}]))

        assert load_records(path) == [{"code": "01088", "name": "Emergency Cache"}]

    def test_rejects_non_array(self, tmp_path: Path) -> None:
        path = tmp_path / "cards.json"
        path.write_text(json.dumps({"code": "01088"}))

        with pytest.raises(ValueError, match="JSON array"):
            load_records(path)
