from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_prefix="CARDKEEPER_", env_file=".env")

    app_name: str = "CardKeeper"
    debug: bool = False

    log_level: str = "INFO"

    # Prefix used when money is rendered for display
    currency_symbol: str = "$"


settings = Settings()
