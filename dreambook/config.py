from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./dreambook.db"
    api_key: str | None = None
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000

    # Chat assistant: simulated typing delay, drawn uniformly per reply
    chat_delay_min_ms: int = 600
    chat_delay_max_ms: int = 1600
    chat_suggestion_limit: int = 3  # Suggestions listed inline in a chat reply

    # Discover screen
    top_picks_limit: int = 6
    per_category_limit: int = 4

    # Pattern analysis
    focus_check_threshold: int = 5  # "Focus Check" fires above this many active dreams

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
