"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) away from the CLI.
- Lets adapters (HTTP) and the aggregator read config consistently.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Per-user config directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "beacon-aggregator"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "beacon-aggregator"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "beacon-aggregator"
    return Path.home() / ".config" / "beacon-aggregator"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Central application settings.

    Why pydantic-settings:
    - Typed + validated at the edge (env vars) without leaking into the core.
    - A single configuration contract for CLI, aggregator and adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="BEACON_AGG_",
        extra="ignore",
        case_sensitive=False,
        # Project .env first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout for a single HTTP request (seconds).",
    )
    request_deadline_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Deadline shared by every beacon unit of one aggregated query (seconds).",
    )
    max_concurrency: int = Field(
        default=16,
        ge=1,
        le=256,
        description="Maximum number of beacon requests in flight for one query.",
    )
    user_agent: str = Field(
        default="beacon-aggregator/0.1 (+https://local)",
        min_length=1,
        description="User-Agent sent to beacon providers.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Root log level for the CLI (DEBUG, INFO, WARNING, ...).",
    )

    ucsc_base_url: str = Field(
        default="http://hgwdev-max.cse.ucsc.edu/cgi-bin/beacon/query",
        min_length=8,
        description="UCSC Genome Browser beacon endpoint.",
    )
    ucsc_tracks: list[str] = Field(
        default_factory=lambda: ["clinvar", "uniprot", "lovd"],
        min_length=1,
        description="UCSC tracks registered as beacons, in registration order.",
    )
    ncbi_base_url: str = Field(
        default="https://www.ncbi.nlm.nih.gov/projects/genome/beacon/beacon.cgi",
        min_length=8,
        description="NCBI beacon endpoint.",
    )
    cafe_variome_base_url: str = Field(
        default="https://beacon.cafevariome.org/query",
        min_length=8,
        description="Cafe Variome beacon endpoint.",
    )
    cafe_variome_sources: list[str] = Field(
        default_factory=lambda: ["central", "cardiokit"],
        min_length=1,
        description="Cafe Variome installations registered as beacons.",
    )
    kaviar_base_url: str = Field(
        default="http://db.systemsbiology.net/kaviar/cgi-pub/Kaviar.pl",
        min_length=8,
        description="Kaviar variant search page.",
    )
