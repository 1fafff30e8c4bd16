"""
Deck validator.

Combines the eligibility resolver, deck-size accountant and XP ledger
into one structured legality result.

INVARIANTS:
- The validator never raises on bad input; every problem is reported
- Checks never short-circuit: a player sees all problems at once
- `valid` is True iff no errors were found; warnings never affect it
- Same inputs, same result (pure function)
"""

import logging
from collections.abc import Iterable, Mapping

from deckledger.models.character import Character
from deckledger.models.validation import IssueCode, Severity, ValidationIssue, ValidationResult
from deckledger.services.catalog import CatalogProvider
from deckledger.services.deck_size import compute_deck_size
from deckledger.services.eligibility import resolve_eligibility
from deckledger.services.xp_ledger import compute_xp_spent

logger = logging.getLogger(__name__)


def _error(code: IssueCode, message: str, card_code: str | None = None) -> ValidationIssue:
    return ValidationIssue(code=code, severity=Severity.ERROR, message=message, card_code=card_code)


def _warning(code: IssueCode, message: str, card_code: str | None = None) -> ValidationIssue:
    return ValidationIssue(
        code=code, severity=Severity.WARNING, message=message, card_code=card_code
    )


def validate_deck(
    catalog: CatalogProvider,
    character: Character,
    slots: Mapping[str, int],
    xp_budget: int = 0,
    exempt_counts: Mapping[str, int] | None = None,
    taboo_list_id: int | None = None,
    *,
    discounts: Mapping[str, int] | None = None,
    customizations: Mapping[str, Iterable[int]] | None = None,
) -> ValidationResult:
    """
    Validate a deck against its character's construction rules.

    Args:
        catalog: Card, taboo and customization lookups
        character: Deck owner
        slots: Main deck {code: quantity}
        xp_budget: Earned XP; 0 disables the XP check
        exempt_counts: Manually exempted copies {code: count}
        taboo_list_id: Active taboo list, if any
        discounts: Per-card XP discounts, so total_xp matches the ledger
        customizations: Selected customization positions

    Returns:
        ValidationResult with every error and warning found
    """
    errors: list[ValidationIssue] = []
    warnings: list[ValidationIssue] = []

    option_counts: dict[str, int] = {}

    for code, quantity in slots.items():
        card = catalog.get_card(code)
        if card is None:
            errors.append(_error(IssueCode.UNKNOWN_CARD, f"Unknown card: {code}", code))
            continue

        eligibility = resolve_eligibility(character, card)
        if not eligibility.allowed:
            errors.append(
                _error(IssueCode.INVALID_CARD, f"{card.name}: {eligibility.reason}", code)
            )
            continue

        entry = catalog.get_taboo_entry(taboo_list_id, code) if taboo_list_id is not None else None
        if entry is not None:
            if entry.forbidden:
                errors.append(
                    _error(
                        IssueCode.TABOO_FORBIDDEN,
                        f"{card.name}: forbidden by the active taboo list",
                        code,
                    )
                )
            elif entry.deck_limit is not None and quantity > entry.deck_limit:
                errors.append(
                    _error(
                        IssueCode.TABOO_LIMIT,
                        f"{card.name}: exceeds taboo copy limit ({quantity}/{entry.deck_limit})",
                        code,
                    )
                )

        if quantity > card.deck_limit:
            errors.append(
                _error(
                    IssueCode.COPY_LIMIT,
                    f"{card.name}: exceeds copy limit ({quantity}/{card.deck_limit})",
                    code,
                )
            )

        option = eligibility.matched_option
        if option is not None and option.limit is not None and option.id:
            option_counts[option.id] = option_counts.get(option.id, 0) + quantity

    for option in character.deck_options:
        if option.limit is None or not option.id:
            continue
        count = option_counts.get(option.id, 0)
        if count > option.limit:
            errors.append(
                _error(
                    IssueCode.OPTION_LIMIT,
                    f"Exceeded limit for {option.id}: {count}/{option.limit}",
                )
            )

    for code in character.required_cards:
        if not slots.get(code):
            card = catalog.get_card(code)
            name = card.name if card is not None else code
            errors.append(
                _error(IssueCode.MISSING_REQUIRED, f"Missing required card: {name}", code)
            )

    required_size = character.deck_size
    deck_size = compute_deck_size(catalog, character, slots, exempt_counts)
    if deck_size < required_size:
        warnings.append(
            _warning(
                IssueCode.DECK_TOO_SMALL,
                f"Deck needs {required_size - deck_size} more cards "
                f"({deck_size}/{required_size})",
            )
        )
    elif deck_size > required_size:
        errors.append(
            _error(
                IssueCode.DECK_TOO_LARGE,
                f"Deck has too many cards: {deck_size}/{required_size}",
            )
        )

    total_xp = compute_xp_spent(catalog, slots, discounts, customizations, taboo_list_id)
    if xp_budget > 0 and total_xp > xp_budget:
        errors.append(
            _error(IssueCode.XP_EXCEEDED, f"XP spent ({total_xp}) exceeds budget ({xp_budget})")
        )

    if character.requires_random_weakness and not _has_basic_weakness(catalog, slots):
        warnings.append(
            _warning(IssueCode.MISSING_WEAKNESS, "Deck should include a random basic weakness")
        )

    logger.debug(
        "Validated deck for %s: %d error(s), %d warning(s), size %d/%d, xp %d",
        character.code,
        len(errors),
        len(warnings),
        deck_size,
        required_size,
        total_xp,
    )

    return ValidationResult(
        valid=len(errors) == 0,
        errors=tuple(errors),
        warnings=tuple(warnings),
        deck_size=deck_size,
        required_size=required_size,
        total_xp=total_xp,
    )


def _has_basic_weakness(catalog: CatalogProvider, slots: Mapping[str, int]) -> bool:
    for code in slots:
        card = catalog.get_card(code)
        if card is not None and card.is_basic_weakness:
            return True
    return False
