from deckledger.parsers.arkhamdb import (
    is_character_record,
    load_records,
    parse_card,
    parse_character,
    parse_construction_option,
    parse_taboo_entries,
)

__all__ = [
    "is_character_record",
    "load_records",
    "parse_card",
    "parse_character",
    "parse_construction_option",
    "parse_taboo_entries",
]
