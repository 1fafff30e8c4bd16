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
from deckledger.models.card import (
    BASIC_WEAKNESS_SUBTYPE,
    CHARACTER_TYPE_CODE,
    DEFAULT_DECK_LIMIT,
    Card,
    CustomizationOption,
)
from deckledger.models.character import (
    DEFAULT_DECK_SIZE,
    Character,
    ConstructionOption,
    LevelRange,
)
from deckledger.models.deck_state import DeckState, HistoryEntry
from deckledger.models.failure import (
    CatalogLoadError,
    FailureKind,
    KnownError,
    SnapshotError,
)
from deckledger.models.snapshot import DeckSnapshot, dump_snapshot, load_snapshot
from deckledger.models.taboo import TabooEntry
from deckledger.models.validation import (
    EligibilityResult,
    IssueCode,
    Severity,
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    "AddCard",
    "AddToSide",
    "AddXp",
    "BASIC_WEAKNESS_SUBTYPE",
    "CHARACTER_TYPE_CODE",
    "Card",
    "CatalogLoadError",
    "Character",
    "ConstructionOption",
    "CustomizationOption",
    "DEFAULT_DECK_LIMIT",
    "DEFAULT_DECK_SIZE",
    "DeckAction",
    "DeckSnapshot",
    "DeckState",
    "EligibilityResult",
    "FailureKind",
    "HistoryEntry",
    "ImportDeck",
    "IssueCode",
    "KnownError",
    "LevelRange",
    "LoadDeck",
    "MoveToMain",
    "MoveToSide",
    "NewDeck",
    "Redo",
    "RemoveCard",
    "RemoveFromSide",
    "Revalidate",
    "SetCustomizations",
    "SetDiscount",
    "SetExemptCount",
    "SetQuantity",
    "SetTabooList",
    "SetXp",
    "Severity",
    "SnapshotError",
    "SwapCard",
    "TabooEntry",
    "Undo",
    "ValidationIssue",
    "ValidationResult",
    "dump_snapshot",
    "load_snapshot",
]
