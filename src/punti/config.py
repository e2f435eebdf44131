"""
@file config.py
@brief Configurazione applicativa tramite pydantic-settings.
@ingroup core_module

@details
Valori letti da variabili d'ambiente con prefisso PUNTI_ (es. PUNTI_PORT)
oppure da file .env.
"""

from __future__ import annotations
import logging
from functools import lru_cache
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """@brief Impostazioni del servizio."""

    app_name: str = Field(default="Receipt Points API", description="Titolo API")
    app_version: str = Field(default="0.1.0", description="Versione API")

    host: str = Field(default="0.0.0.0", description="Host server")
    port: int = Field(default=8080, ge=1, le=65535, description="Porta server")

    log_level: str = Field(default="INFO", description="Livello logging")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Formato log",
    )

    model_config = SettingsConfigDict(
        env_prefix="PUNTI_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        v = v.upper()
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f"Unknown log level: {v}")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(settings: Settings) -> None:
    """
    @brief Configura il logging root con livello e formato da Settings.
    @param settings Impostazioni correnti.
    @return None
    """
    logging.basicConfig(level=settings.log_level, format=settings.log_format)
