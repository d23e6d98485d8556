"""
Application configuration loaded from environment variables.

Uses pydantic-settings for type-safe env var parsing with automatic
.env file loading. Every field can be overridden with a PREFMAP_-prefixed
environment variable, e.g. PREFMAP_VIEWPORT_MODE=fixed.

To extend: add new fields here and document them in .env.example.
See https://docs.pydantic.dev/latest/concepts/pydantic_settings/
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

# Output canvas is the same for every response.
CANVAS_WIDTH = 1280
CANVAS_HEIGHT = 720


class Settings(BaseSettings):
    # ─── Core ──────────────────────────────────────────────────────
    environment: str = "development"
    debug: bool = False

    # ─── Static geometry ───────────────────────────────────────────
    # One feature per prefecture, lon/lat order, numeric id property.
    geojson_path: str = "japan.geojson"
    region_id_property: str = "id"

    # ─── Rendering ─────────────────────────────────────────────────
    # "adaptive" fits the view to regions with nonzero severity;
    # "fixed" always shows the whole country.
    viewport_mode: Literal["adaptive", "fixed"] = "adaptive"

    # When False, out-of-range scale values are passed through to the
    # color policy instead of being rejected with 400.
    strict_scale_validation: bool = True

    # ─── Caption ───────────────────────────────────────────────────
    font_path: str = "fonts/roboto.ttf"
    font_size: int = 14
    default_footer: str = "Code available under the MIT License (GitHub: evacuate)."

    # ─── HTTP ──────────────────────────────────────────────────────
    # slowapi limit string applied per client IP to GET /map.
    map_rate_limit: str = "60/minute"

    # Comma-separated allowed origins ("*" for any).
    cors_origins_str: str = "*"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins_str.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_prefix="PREFMAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Don't fail on unknown env vars
    )


# Module-level singleton — import this everywhere instead of instantiating Settings()
settings = Settings()
