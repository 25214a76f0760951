from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DATA_DIR = Path(__file__).parent / "data"


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="RECOUPLE_")

    app_name: str = "Recouple"

    # Exposes the exception type in unknown-failure responses
    debug: bool = False

    # Contestant pool data file, and where the download job fetches it from
    contestants_path: Path = DATA_DIR / "contestants.json"
    contestants_url: str = ""

    # Layout used when a request does not name one
    default_layout: str = "griddy"


settings = Settings()
