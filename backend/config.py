"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Bros Unblocked search settings loaded from environment variables."""

    # Content index: filesystem path or http(s) URL
    content_source: str = "content.json"

    # Site path prefix used when building result links
    base_url: str = "/bros-unblocked/"

    # Appended as ?v= when fetching the index over HTTP
    build_version: str = ""

    # Search behaviour
    results_per_page: int = 10
    preview_limit: int = 5
    debounce_ms: int = 300

    # Remote index fetch timeout (seconds)
    fetch_timeout: float = 15.0

    # CORS (comma-separated extra origins, in addition to localhost defaults)
    cors_origins: str = ""

    model_config = {
        "env_prefix": "BROS_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000


# Singleton instance
settings = Settings()
