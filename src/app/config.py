"""Configuration management using Pydantic settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ATLAS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "SITE-ATLAS"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Site dataset — a local path or an http(s) URL, loaded once at startup
    dataset_source: str = "data/site_data.json"
    fetch_timeout: float = 10.0  # seconds, URL sources only

    # Layer groups hidden until the user toggles them on
    hidden_layers: list[str] = ["distance"]

    # Basemap tiles (CartoDB Dark Matter)
    tile_url: str = "https://{s}.basemaps.cartocdn.com/dark_all/{z}/{x}/{y}{r}.png"
    tile_attribution: str = (
        '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> '
        'contributors &copy; <a href="https://carto.com/attributions">CARTO</a>'
    )
    tile_subdomains: str = "abcd"
    tile_max_zoom: int = 20


settings = Settings()
