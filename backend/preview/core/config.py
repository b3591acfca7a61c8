from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "Markup Preview API"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Truncation defaults (overridable per call)
    PREVIEW_ELLIPSIS: str = "..."
    PREVIEW_BY_WORDS: bool = False
    PREVIEW_KEEP_WHITESPACES: bool = False
    PREVIEW_DECODE_ENTITIES: bool = False

    CORS_ORIGINS: list[str] = ["http://localhost:3000"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
