from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DATA_DIR = Path(__file__).parent / "data"


class Settings(BaseSettings):
    """Engine settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="DECKLEDGER_")

    # Undo/redo depth
    max_history: int = 50

    # Fallbacks when catalog data omits them
    default_deck_size: int = 30
    default_deck_limit: int = 2

    # Default catalog files for get_catalog()
    catalog_path: Path = DATA_DIR / "cards.json"
    taboos_path: Path | None = None


settings = Settings()
