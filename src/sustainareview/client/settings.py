"""Client settings read from the environment."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Where the API lives and how long to wait for it.

    Variables use the ``SUSTAINAREVIEW_`` prefix, e.g. ``SUSTAINAREVIEW_API_BASE_URL``.
    """

    model_config = SettingsConfigDict(env_prefix="SUSTAINAREVIEW_", extra="ignore")

    api_base_url: str = "http://localhost:8000"
    timeout_seconds: float = 10.0
    state_file: str | None = None
