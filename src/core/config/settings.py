from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_ignore_empty=True, extra="ignore"
    )

    PROJECT_NAME: str = "Error Translation Service"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 4009

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"


settings = Settings()
