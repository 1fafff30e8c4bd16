"""
Validation Result Envelope: Structured Deck Legality Outcome.

Every problem with a deck is reported, never raised. The validator
accumulates all issues so a player sees every problem at once.

INVARIANT: `valid` is True iff `errors` is empty.
Warnings are advisory and never affect `valid`.

Issue codes are stable strings. Consumers may switch on them.
"""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from deckledger.models.character import ConstructionOption


class IssueCode(str, Enum):
    """Stable classification of validation issues."""

    # Hard failures (block validity)
    UNKNOWN_CARD = "UNKNOWN_CARD"
    INVALID_CARD = "INVALID_CARD"
    TABOO_FORBIDDEN = "TABOO_FORBIDDEN"
    TABOO_LIMIT = "TABOO_LIMIT"
    COPY_LIMIT = "COPY_LIMIT"
    OPTION_LIMIT = "OPTION_LIMIT"
    MISSING_REQUIRED = "MISSING_REQUIRED"
    DECK_TOO_LARGE = "DECK_TOO_LARGE"
    XP_EXCEEDED = "XP_EXCEEDED"

    # Soft, informational
    DECK_TOO_SMALL = "DECK_TOO_SMALL"
    MISSING_WEAKNESS = "MISSING_WEAKNESS"


class Severity(str, Enum):
    """error = blocks the deck, warning = advisory."""

    ERROR = "error"
    WARNING = "warning"


class ValidationIssue(BaseModel):
    """A single validation problem."""

    model_config = ConfigDict(frozen=True)

    code: IssueCode = Field(..., description="Stable issue classification")
    severity: Severity = Field(..., description="error or warning")
    message: str = Field(..., description="Human-readable explanation")
    card_code: str | None = Field(default=None, description="Related card code, if any")


class ValidationResult(BaseModel):
    """
    Complete legality outcome for a deck.

    Attributes:
        valid: True iff there are no errors
        errors: Blocking issues, in detection order
        warnings: Advisory issues, in detection order
        deck_size: Cards counted toward the required size
        required_size: The character's required deck size
        total_xp: XP spent on the deck's cards
    """

    model_config = ConfigDict(frozen=True)

    valid: bool
    errors: tuple[ValidationIssue, ...] = ()
    warnings: tuple[ValidationIssue, ...] = ()
    deck_size: int = 0
    required_size: int = 0
    total_xp: int = 0

    @model_validator(mode="after")
    def _check_valid_flag(self) -> "ValidationResult":
        if self.valid != (len(self.errors) == 0):
            raise ValueError("valid must be True exactly when there are no errors")
        return self

    def has_issue(self, code: IssueCode) -> bool:
        """True if any error or warning carries this code."""
        return any(issue.code == code for issue in (*self.errors, *self.warnings))

    def issues_for(self, code: IssueCode) -> list[ValidationIssue]:
        """All errors and warnings carrying this code."""
        return [issue for issue in (*self.errors, *self.warnings) if issue.code == code]


@dataclass(frozen=True, slots=True)
class EligibilityResult:
    """
    Whether a character may include a card.

    `matched_option` is the construction option that admitted the card,
    used downstream for `limit` and `size` bookkeeping. Signature cards
    are allowed with no matched option.
    """

    allowed: bool
    reason: str | None = None
    matched_option: ConstructionOption | None = None
