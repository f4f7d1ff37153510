from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    db_dsn: str = "sqlite:///./data/dice_rounds.db"
    window: int = Field(default=20, ge=1)
    api_key: str | None = None
    log_level: str = "INFO"

settings = Settings()
