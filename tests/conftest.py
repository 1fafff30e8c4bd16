import pytest

from deckledger.models.card import Card, CustomizationOption
from deckledger.models.character import Character, ConstructionOption, LevelRange
from deckledger.models.deck_state import DeckState
from deckledger.models.taboo import TabooEntry
from deckledger.services.catalog import InMemoryCatalog
from deckledger.services.deck_state_machine import DeckStateMachine

ROLAND = "00001"
MANDY = "00002"
TABOO_LIST = 1


def _guardian(code: str, name: str, **kwargs) -> Card:
    return Card(code=code, name=name, faction_codes=("guardian",), **kwargs)


def _seeker(code: str, name: str, **kwargs) -> Card:
    return Card(code=code, name=name, faction_codes=("seeker",), **kwargs)


@pytest.fixture
def cards() -> list[Card]:
    """A small slice of the core set plus cards for each cost rule."""
    return [
        # Character cards
        _guardian(ROLAND, "Roland Banks", type_code="investigator"),
        _seeker(MANDY, "Mandy Thompson", type_code="investigator"),
        # Signature
        _guardian("01001", "Roland's .38 Special", deck_limit=1, restricted_to=frozenset({ROLAND})),
        _seeker("01002", "Occult Evidence", deck_limit=1, restricted_to=frozenset({MANDY})),
        # Guardian
        _guardian(
            "01016",
            ".45 Automatic",
            traits="Item. Weapon. Firearm.",
            text="Uses (4 ammo).",
        ),
        _guardian("01017", "Physical Training", traits="Talent."),
        _guardian("01020", "Machete", traits="Item. Weapon. Melee."),
        _guardian("01025", "Vicious Blow", type_code="skill", traits="Practiced."),
        _guardian("02186", "Beat Cop", xp=2, traits="Ally. Police."),
        _guardian("90010", "Smuggled Revolver", traits="Item. Illicit. Weapon. Firearm."),
        _guardian("90020", "Relic of Ages", xp=2, exceptional=True, deck_limit=1),
        _guardian("90021", "Trusted Informant", type_code="event", xp=3, myriad=True, deck_limit=3),
        _guardian("90022", "Steadfast Oath", xp=3, deck_limit=2),
        _guardian(
            "09021",
            "Hunter's Armor",
            customization_options=(
                CustomizationOption(position=0, xp=1, text="Enchanted"),
                CustomizationOption(position=1, xp=2, text="Durable"),
                CustomizationOption(position=2, xp=3, text="Hallowed"),
            ),
        ),
        # Seeker
        _seeker("01030", "Magnifying Glass", traits="Item. Tool."),
        _seeker("01033", "Dr. Milan Christopher", traits="Ally. Miskatonic."),
        _seeker("01039", "Deduction", type_code="skill", traits="Practiced."),
        _seeker("01031", "Old Book of Lore", traits="Item. Tome."),
        _seeker("02153", "Encyclopedia", xp=2, traits="Item. Tome."),
        # Mystic
        Card(code="01060", name="Shrivelling", faction_codes=("mystic",), traits="Spell."),
        # Neutral
        Card(code="01088", name="Emergency Cache", type_code="event", traits="Supply."),
        Card(code="01093", name="Knife", traits="Item. Weapon. Melee."),
        Card(code="90030", name="Charisma", xp=3, permanent=True, deck_limit=1, traits="Talent."),
        Card(
            code="01096",
            name="Amnesia",
            type_code="treachery",
            subtype_code="basicweakness",
            deck_limit=1,
        ),
        Card(
            code="01007",
            name="Cover Up",
            type_code="treachery",
            subtype_code="weakness",
            deck_limit=1,
            restricted_to=frozenset({ROLAND}),
        ),
    ]


@pytest.fixture
def roland() -> Character:
    """Guardian with a level-0 seeker splash and an exclusion rule."""
    return Character(
        code=ROLAND,
        name="Roland Banks",
        deck_size=30,
        deck_options=(
            ConstructionOption(
                trait=frozenset({"Illicit"}),
                not_=True,
                error="Roland does not use illicit gear",
            ),
            ConstructionOption(
                faction=frozenset({"guardian", "neutral"}),
                level=LevelRange(min=0, max=5),
            ),
            ConstructionOption(
                faction=frozenset({"seeker"}),
                level=LevelRange(min=0, max=0),
                limit=3,
                id="seeker-splash",
            ),
        ),
        required_cards={"01001": 1},
        requires_random_weakness=True,
        faction_code="guardian",
    )


@pytest.fixture
def mandy() -> Character:
    """Seeker whose first two seeker assets are free."""
    return Character(
        code=MANDY,
        name="Mandy Thompson",
        deck_size=30,
        deck_options=(
            ConstructionOption(
                faction=frozenset({"seeker"}),
                type=frozenset({"asset"}),
                level=LevelRange(min=0, max=5),
                size=2,
                id="free-assets",
            ),
            ConstructionOption(
                faction=frozenset({"seeker", "neutral"}),
                level=LevelRange(min=0, max=5),
            ),
        ),
        required_cards={"01002": 1},
        requires_random_weakness=False,
        faction_code="seeker",
    )


@pytest.fixture
def taboo_entries() -> list[TabooEntry]:
    return [
        TabooEntry(list_id=TABOO_LIST, code="01016", xp=1),
        TabooEntry(list_id=TABOO_LIST, code="01020", deck_limit=1),
        TabooEntry(list_id=TABOO_LIST, code="01017", deck_limit=0),
    ]


@pytest.fixture
def catalog(
    cards: list[Card],
    roland: Character,
    mandy: Character,
    taboo_entries: list[TabooEntry],
) -> InMemoryCatalog:
    return InMemoryCatalog.from_models(cards, [roland, mandy], taboo_entries)


@pytest.fixture
def machine(catalog: InMemoryCatalog) -> DeckStateMachine:
    return DeckStateMachine(catalog)


@pytest.fixture
def fresh_deck(machine: DeckStateMachine) -> DeckState:
    """A new Roland deck: signature card only, no history."""
    return machine.new_deck(ROLAND)
