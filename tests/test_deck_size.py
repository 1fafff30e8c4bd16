"""
Tests for the deck-size accountant.

Permanent cards, weaknesses, signature cards and exempted copies never
count. Size-limited options grant free copies in slot order.
"""

from deckledger.models.character import Character
from deckledger.services.catalog import InMemoryCatalog
from deckledger.services.deck_size import compute_deck_size


class TestCountedCopies:
    def test_empty_deck(self, catalog: InMemoryCatalog, roland: Character) -> None:
        assert compute_deck_size(catalog, roland, {}) == 0

    def test_plain_cards_count_every_copy(
        self, catalog: InMemoryCatalog, roland: Character
    ) -> None:
        slots = {"01016": 2, "01020": 2, "01088": 1}
        assert compute_deck_size(catalog, roland, slots) == 5

    def test_signature_card_not_counted(
        self, catalog: InMemoryCatalog, roland: Character
    ) -> None:
        assert compute_deck_size(catalog, roland, {"01001": 1, "01016": 1}) == 1

    def test_permanent_not_counted(self, catalog: InMemoryCatalog, roland: Character) -> None:
        assert compute_deck_size(catalog, roland, {"90030": 1, "01016": 2}) == 2

    def test_weaknesses_not_counted(self, catalog: InMemoryCatalog, roland: Character) -> None:
        """Basic and signature weaknesses are both skipped."""
        assert compute_deck_size(catalog, roland, {"01096": 1, "01007": 1}) == 0

    def test_unknown_cards_ignored(self, catalog: InMemoryCatalog, roland: Character) -> None:
        assert compute_deck_size(catalog, roland, {"99999": 3, "01016": 1}) == 1

    def test_exempt_copies_not_counted(
        self, catalog: InMemoryCatalog, roland: Character
    ) -> None:
        slots = {"01016": 2, "01020": 2}
        assert compute_deck_size(catalog, roland, slots, {"01016": 1}) == 3

    def test_over_exemption_does_not_go_negative(
        self, catalog: InMemoryCatalog, roland: Character
    ) -> None:
        slots = {"01016": 1, "01020": 2}
        assert compute_deck_size(catalog, roland, slots, {"01016": 5}) == 2

    def test_adding_a_plain_copy_never_shrinks_the_deck(
        self, catalog: InMemoryCatalog, roland: Character
    ) -> None:
        slots = {"01001": 1, "01016": 1, "90030": 1}
        before = compute_deck_size(catalog, roland, slots)

        after = compute_deck_size(catalog, roland, {**slots, "01016": 2})

        assert after == before + 1


class TestFreeSlots:
    def test_two_of_four_matching_copies_are_free(
        self, catalog: InMemoryCatalog, mandy: Character
    ) -> None:
        """size=2 on "free-assets": two cards at quantity 2 leave 2 counted."""
        assert compute_deck_size(catalog, mandy, {"01030": 2, "01033": 2}) == 2

    def test_allowance_shared_across_cards(
        self, catalog: InMemoryCatalog, mandy: Character
    ) -> None:
        slots = {"01030": 1, "01033": 1, "01031": 1}
        assert compute_deck_size(catalog, mandy, slots) == 1

    def test_non_matching_cards_count_fully(
        self, catalog: InMemoryCatalog, mandy: Character
    ) -> None:
        """Skills and neutral cards fall to the second option, which has no size."""
        slots = {"01039": 2, "01088": 1, "01030": 1}
        assert compute_deck_size(catalog, mandy, slots) == 3

    def test_allocation_follows_slot_order(
        self, catalog: InMemoryCatalog, mandy: Character
    ) -> None:
        """The earliest slots take the allowance; the total is the same either way."""
        forward = {"01031": 1, "01030": 2, "01033": 2}
        backward = {"01033": 2, "01030": 2, "01031": 1}

        assert compute_deck_size(catalog, mandy, forward) == 3
        assert compute_deck_size(catalog, mandy, backward) == 3

    def test_exemptions_apply_before_free_copies(
        self, catalog: InMemoryCatalog, mandy: Character
    ) -> None:
        """An exempted copy does not consume the free allowance."""
        slots = {"01030": 2, "01033": 2}
        assert compute_deck_size(catalog, mandy, slots, {"01030": 1}) == 1

    def test_signature_does_not_consume_allowance(
        self, catalog: InMemoryCatalog, mandy: Character
    ) -> None:
        slots = {"01002": 1, "01030": 2, "01033": 1}
        assert compute_deck_size(catalog, mandy, slots) == 1
