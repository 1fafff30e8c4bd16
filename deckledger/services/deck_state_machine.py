"""
Deck state machine.

Applies one action at a time to a DeckState and returns a new DeckState.
Every accepted mutation, as one atomic unit:

1. Applies the change to copies of the slot and modifier mappings,
   re-capping or deleting exemptions, discounts and customizations
   whose card shrank or left the deck
2. Recomputes xp_spent with the XP ledger
3. Records an undo point (truncating redo entries, bounded history)
4. Recomputes the cached validation result

INVARIANTS:
- dispatch never raises; a rejected action returns the SAME object
- The input state is never modified
- Undo/redo restore only slots and xp_spent; exemptions, discounts and
  customizations are re-capped against the restored slots, not restored
- The history holds at most max_history entries and the newest one mirrors the
  current state, so at most max_history - 1 undo steps are available
- Changing the character (NewDeck, ImportDeck, LoadDeck) replaces the
  whole state and discards history
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, replace
from typing import Any

from deckledger.config import settings
from deckledger.models.actions import (
    AddCard,
    AddToSide,
    AddXp,
    DeckAction,
    ImportDeck,
    LoadDeck,
    MoveToMain,
    MoveToSide,
    NewDeck,
    Redo,
    RemoveCard,
    RemoveFromSide,
    Revalidate,
    SetCustomizations,
    SetDiscount,
    SetExemptCount,
    SetQuantity,
    SetTabooList,
    SetXp,
    SwapCard,
    Undo,
)
from deckledger.models.character import Character
from deckledger.models.deck_state import DeckState, HistoryEntry
from deckledger.models.snapshot import DeckSnapshot
from deckledger.models.validation import ValidationResult
from deckledger.services.catalog import CatalogProvider
from deckledger.services.deck_validator import validate_deck
from deckledger.services.xp_ledger import base_xp_cost, compute_xp_spent

logger = logging.getLogger(__name__)


def _positive(mapping: Mapping[str, int]) -> dict[str, int]:
    """Copy a {code: count} mapping, dropping zero and negative entries."""
    return {code: int(count) for code, count in mapping.items() if count > 0}


@dataclass
class _Draft:
    """Mutable working copies of the per-card mappings for one transition."""

    slots: dict[str, int]
    side_slots: dict[str, int]
    exempt_counts: dict[str, int]
    discounts: dict[str, int]
    customizations: dict[str, tuple[int, ...]]

    @classmethod
    def of(cls, state: DeckState) -> "_Draft":
        return cls(
            slots=dict(state.slots),
            side_slots=dict(state.side_slots),
            exempt_counts=dict(state.exempt_counts),
            discounts=dict(state.discounts),
            customizations=dict(state.customizations),
        )

    def changes(self) -> dict[str, Any]:
        return {
            "slots": self.slots,
            "side_slots": self.side_slots,
            "exempt_counts": self.exempt_counts,
            "discounts": self.discounts,
            "customizations": self.customizations,
        }


class DeckStateMachine:
    """
    Pure transition function over deck working states.

    The catalog is injected once; the machine holds no deck state of its
    own, so one instance can serve any number of decks.

    Usage:
        machine = DeckStateMachine(catalog)
        state = machine.new_deck("01001")
        state = machine.dispatch(state, AddCard("01020", 2))
        state = machine.dispatch(state, Undo())
    """

    def __init__(self, catalog: CatalogProvider, max_history: int | None = None) -> None:
        self._catalog = catalog
        self._max_history = settings.max_history if max_history is None else max_history
        self._handlers: dict[type, Callable[[DeckState, Any], DeckState]] = {
            AddCard: self._add_card,
            RemoveCard: self._remove_card,
            SetQuantity: self._set_quantity,
            SwapCard: self._swap_card,
            AddToSide: self._add_to_side,
            RemoveFromSide: self._remove_from_side,
            MoveToSide: self._move_to_side,
            MoveToMain: self._move_to_main,
            SetExemptCount: self._set_exempt_count,
            SetDiscount: self._set_discount,
            SetCustomizations: self._set_customizations,
            SetTabooList: self._set_taboo_list,
            AddXp: self._add_xp,
            SetXp: self._set_xp,
            NewDeck: self._new_deck,
            ImportDeck: self._import_deck,
            LoadDeck: self._load_deck,
            Undo: self._undo,
            Redo: self._redo,
            Revalidate: self._revalidate,
        }

    @property
    def catalog(self) -> CatalogProvider:
        return self._catalog

    @property
    def max_history(self) -> int:
        return self._max_history

    def new_deck(self, character_code: str) -> DeckState:
        """Start a fresh deck; an unknown character yields an empty state."""
        return self.dispatch(DeckState(), NewDeck(character_code))

    def dispatch(self, state: DeckState, action: DeckAction) -> DeckState:
        """
        Apply one action.

        Args:
            state: Current working state (never modified)
            action: The mutation to apply

        Returns:
            A new DeckState, or `state` itself if the action was rejected
        """
        handler = self._handlers.get(type(action))
        if handler is None:
            logger.warning("Ignoring unknown deck action %r", action)
            return state

        new_state = handler(state, action)
        if new_state is state:
            logger.debug("Rejected %s", type(action).__name__)
        else:
            logger.debug(
                "Applied %s: %d cards, %d xp spent",
                type(action).__name__,
                new_state.total_cards(),
                new_state.xp_spent,
            )
        return new_state

    # =========================================================================
    # COMMIT PIPELINE
    # =========================================================================

    def _validate(self, state: DeckState) -> ValidationResult | None:
        if state.character is None:
            return None
        return validate_deck(
            self._catalog,
            state.character,
            state.slots,
            xp_budget=state.xp_earned if state.xp_earned > 0 else 0,
            exempt_counts=state.exempt_counts,
            taboo_list_id=state.taboo_list_id,
            discounts=state.discounts,
            customizations=state.customizations,
        )

    def _xp_spent(self, state: DeckState) -> int:
        return compute_xp_spent(
            self._catalog,
            state.slots,
            state.discounts,
            state.customizations,
            state.taboo_list_id,
        )

    def _record(self, before: DeckState, after: DeckState) -> DeckState:
        """Record `after` as the newest undo point, dropping redo entries."""
        history = list(before.history[: before.history_cursor + 1])
        if not history:
            history.append(HistoryEntry.capture(before.slots, before.xp_spent))
        history.append(HistoryEntry.capture(after.slots, after.xp_spent))

        overflow = len(history) - self._max_history
        if overflow > 0:
            history = history[overflow:]

        return replace(after, history=tuple(history), history_cursor=len(history) - 1)

    def _commit(
        self,
        state: DeckState,
        draft: _Draft | None = None,
        xp_spent: int | None = None,
        **changes: Any,
    ) -> DeckState:
        """Build, charge, record and validate the next state."""
        if draft is not None:
            changes.update(draft.changes())
        next_state = replace(state, **changes)
        if xp_spent is None:
            xp_spent = self._xp_spent(next_state)
        next_state = replace(next_state, xp_spent=xp_spent)
        next_state = self._record(state, next_state)
        return replace(next_state, validation=self._validate(next_state))

    def _fresh(self, character: Character, slots: dict[str, int]) -> DeckState:
        state = DeckState(character=character, slots=slots)
        state = replace(state, xp_spent=self._xp_spent(state))
        return replace(state, validation=self._validate(state))

    # =========================================================================
    # SIDE-TABLE MAINTENANCE
    # =========================================================================

    def _max_discount(self, code: str, quantity: int) -> int:
        card = self._catalog.get_card(code)
        if card is None:
            return 0
        return base_xp_cost(card, quantity)

    def _reconcile(self, draft: _Draft, code: str) -> None:
        """Re-cap or delete a card's modifiers after its quantity changed."""
        quantity = draft.slots.get(code, 0)
        if quantity <= 0:
            draft.slots.pop(code, None)
            draft.exempt_counts.pop(code, None)
            draft.discounts.pop(code, None)
            draft.customizations.pop(code, None)
            return

        if draft.exempt_counts.get(code, 0) > quantity:
            draft.exempt_counts[code] = quantity

        if code in draft.discounts:
            capped = min(draft.discounts[code], self._max_discount(code, quantity))
            if capped > 0:
                draft.discounts[code] = capped
            else:
                del draft.discounts[code]

    def _set_main(self, draft: _Draft, code: str, quantity: int) -> None:
        draft.slots[code] = quantity
        self._reconcile(draft, code)

    @staticmethod
    def _set_side(draft: _Draft, code: str, quantity: int) -> None:
        if quantity > 0:
            draft.side_slots[code] = quantity
        else:
            draft.side_slots.pop(code, None)

    # =========================================================================
    # MAIN DECK
    # =========================================================================

    def _add_card(self, state: DeckState, action: AddCard) -> DeckState:
        if not action.code or action.quantity <= 0:
            return state
        draft = _Draft.of(state)
        self._set_main(draft, action.code, state.quantity(action.code) + action.quantity)
        return self._commit(state, draft)

    def _remove_card(self, state: DeckState, action: RemoveCard) -> DeckState:
        if action.code not in state.slots or action.quantity <= 0:
            return state
        draft = _Draft.of(state)
        self._set_main(draft, action.code, max(0, state.quantity(action.code) - action.quantity))
        return self._commit(state, draft)

    def _set_quantity(self, state: DeckState, action: SetQuantity) -> DeckState:
        if not action.code or (action.quantity <= 0 and action.code not in state.slots):
            return state
        draft = _Draft.of(state)
        self._set_main(draft, action.code, max(0, action.quantity))
        return self._commit(state, draft)

    def _swap_card(self, state: DeckState, action: SwapCard) -> DeckState:
        if action.old_code not in state.slots or not action.new_code:
            return state
        if action.old_code == action.new_code:
            return state
        draft = _Draft.of(state)
        self._set_main(draft, action.old_code, state.quantity(action.old_code) - 1)
        self._set_main(draft, action.new_code, draft.slots.get(action.new_code, 0) + 1)
        return self._commit(state, draft)

    # =========================================================================
    # SIDE DECK
    # =========================================================================

    def _add_to_side(self, state: DeckState, action: AddToSide) -> DeckState:
        if not action.code or action.quantity <= 0:
            return state
        draft = _Draft.of(state)
        self._set_side(draft, action.code, state.side_quantity(action.code) + action.quantity)
        return self._commit(state, draft)

    def _remove_from_side(self, state: DeckState, action: RemoveFromSide) -> DeckState:
        if action.code not in state.side_slots or action.quantity <= 0:
            return state
        draft = _Draft.of(state)
        self._set_side(draft, action.code, state.side_quantity(action.code) - action.quantity)
        return self._commit(state, draft)

    def _move_to_side(self, state: DeckState, action: MoveToSide) -> DeckState:
        if action.code not in state.slots:
            logger.warning("Cannot move %s to side deck: not in main deck", action.code)
            return state
        draft = _Draft.of(state)
        self._set_main(draft, action.code, state.quantity(action.code) - 1)
        self._set_side(draft, action.code, state.side_quantity(action.code) + 1)
        return self._commit(state, draft)

    def _move_to_main(self, state: DeckState, action: MoveToMain) -> DeckState:
        if action.code not in state.side_slots:
            logger.warning("Cannot move %s to main deck: not in side deck", action.code)
            return state
        draft = _Draft.of(state)
        self._set_side(draft, action.code, state.side_quantity(action.code) - 1)
        self._set_main(draft, action.code, state.quantity(action.code) + 1)
        return self._commit(state, draft)

    # =========================================================================
    # PER-CARD MODIFIERS
    # =========================================================================

    def _set_exempt_count(self, state: DeckState, action: SetExemptCount) -> DeckState:
        if not action.code:
            return state
        draft = _Draft.of(state)
        count = min(action.count, state.quantity(action.code))
        if count > 0:
            draft.exempt_counts[action.code] = count
        else:
            draft.exempt_counts.pop(action.code, None)
        return self._commit(state, draft)

    def _set_discount(self, state: DeckState, action: SetDiscount) -> DeckState:
        if not action.code:
            return state
        draft = _Draft.of(state)
        amount = min(action.amount, self._max_discount(action.code, state.quantity(action.code)))
        if amount > 0:
            draft.discounts[action.code] = amount
        else:
            draft.discounts.pop(action.code, None)
        return self._commit(state, draft)

    def _set_customizations(self, state: DeckState, action: SetCustomizations) -> DeckState:
        if not action.code or action.code not in state.slots:
            return state
        draft = _Draft.of(state)
        positions = tuple(dict.fromkeys(int(p) for p in action.positions))
        if positions:
            draft.customizations[action.code] = positions
        else:
            draft.customizations.pop(action.code, None)
        return self._commit(state, draft)

    def _set_taboo_list(self, state: DeckState, action: SetTabooList) -> DeckState:
        return self._commit(state, taboo_list_id=action.taboo_list_id)

    # =========================================================================
    # CAMPAIGN XP
    # =========================================================================

    def _add_xp(self, state: DeckState, action: AddXp) -> DeckState:
        return self._commit(state, xp_earned=max(0, state.xp_earned + action.amount))

    def _set_xp(self, state: DeckState, action: SetXp) -> DeckState:
        earned = state.xp_earned if action.earned is None else max(0, action.earned)
        spent = None if action.spent is None else max(0, action.spent)
        return self._commit(state, xp_spent=spent, xp_earned=earned)

    # =========================================================================
    # WHOLE-DECK REPLACEMENT
    # =========================================================================

    def _lookup_character(self, code: str) -> Character | None:
        character = self._catalog.get_character(code)
        if character is None:
            logger.warning("Unknown investigator %s; deck left unchanged", code)
        return character

    def _signature_slots(self, character: Character) -> dict[str, int]:
        """Signature cards at their fixed quantities (only those the catalog knows)."""
        return {
            code: quantity
            for code, quantity in character.required_cards.items()
            if self._catalog.get_card(code) is not None and quantity > 0
        }

    def _new_deck(self, state: DeckState, action: NewDeck) -> DeckState:
        character = self._lookup_character(action.character_code)
        if character is None:
            return state
        logger.info("New deck for %s (%s)", character.name, character.code)
        return self._fresh(character, self._signature_slots(character))

    def _import_deck(self, state: DeckState, action: ImportDeck) -> DeckState:
        character = self._lookup_character(action.character_code)
        if character is None:
            return state
        slots = self._signature_slots(character)
        slots.update(_positive(action.slots))
        logger.info("Imported deck for %s with %d distinct cards", character.code, len(slots))
        return self._fresh(character, slots)

    def _load_deck(self, state: DeckState, action: LoadDeck) -> DeckState:
        snapshot = action.snapshot
        character = self._lookup_character(snapshot.investigator_code)
        if character is None:
            return state

        draft = _Draft(
            slots=_positive(snapshot.slots),
            side_slots=_positive(snapshot.side_slots),
            exempt_counts=_positive(snapshot.ignore_deck_size_slots),
            discounts=_positive(snapshot.xp_discount_slots),
            customizations={
                code: tuple(dict.fromkeys(int(p) for p in positions))
                for code, positions in snapshot.customizations.items()
                if positions
            },
        )
        # Stored modifiers may outlive or exceed their card
        for code in _all_codes(
            draft.slots, draft.exempt_counts, draft.discounts, draft.customizations
        ):
            self._reconcile(draft, code)

        loaded = DeckState(
            character=character,
            **draft.changes(),
            taboo_list_id=snapshot.taboo_id,
            xp_earned=max(0, snapshot.xp_earned),
            xp_spent=max(0, snapshot.xp_spent),
        )
        logger.info("Loaded deck for %s", character.code)
        return replace(loaded, validation=self._validate(loaded))

    # =========================================================================
    # HISTORY
    # =========================================================================

    def _restore(self, state: DeckState, cursor: int) -> DeckState:
        entry = state.history[cursor]
        draft = _Draft.of(state)
        draft.slots = entry.slots_dict()
        for code in _all_codes(state.slots, draft.slots, draft.exempt_counts, draft.discounts):
            self._reconcile(draft, code)
        restored = replace(
            state,
            **draft.changes(),
            xp_spent=entry.xp_spent,
            history_cursor=cursor,
        )
        return replace(restored, validation=self._validate(restored))

    def _undo(self, state: DeckState, action: Undo) -> DeckState:
        if not state.can_undo:
            return state
        return self._restore(state, state.history_cursor - 1)

    def _redo(self, state: DeckState, action: Redo) -> DeckState:
        if not state.can_redo:
            return state
        return self._restore(state, state.history_cursor + 1)

    def _revalidate(self, state: DeckState, action: Revalidate) -> DeckState:
        return replace(state, validation=self._validate(state))


def _all_codes(*mappings: Iterable[str]) -> list[str]:
    """Union of mapping keys, first-seen order."""
    seen: dict[str, None] = {}
    for mapping in mappings:
        for code in mapping:
            seen.setdefault(code, None)
    return list(seen)


def dispatch(catalog: CatalogProvider, state: DeckState, action: DeckAction) -> DeckState:
    """Apply one action with a default-configured state machine."""
    return DeckStateMachine(catalog).dispatch(state, action)


def new_deck(catalog: CatalogProvider, character_code: str) -> DeckState:
    """Fresh deck for a character, seeded with its signature cards."""
    return DeckStateMachine(catalog).new_deck(character_code)


def available_xp(state: DeckState) -> int:
    """Earned XP not yet spent."""
    return state.available_xp


def snapshot_from_state(state: DeckState) -> DeckSnapshot:
    """
    Persisted shape of a working state.

    Raises:
        ValueError: If no character has been chosen
    """
    return state.to_snapshot()
