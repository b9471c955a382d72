"""
Runtime configuration for the Mixer Admin dashboard.

All settings come from environment variables and are resolved once at
import time, matching how the Reflex app reads its port and branding.
"""

import os
from dataclasses import asdict, dataclass, field

from mixer_admin.lib import paths

_TRUE_VALUES = {"1", "true", "yes"}


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in _TRUE_VALUES


API_BASE_URL = os.getenv("MIXER_ADMIN_API_BASE_URL", "http://localhost:3000/api")
API_TOKEN = os.getenv("MIXER_ADMIN_API_TOKEN") or None
API_TIMEOUT = float(os.getenv("MIXER_ADMIN_API_TIMEOUT", "15"))

# "live" talks to API_BASE_URL, "demo" serves the in-memory backend
SERVICE_KIND = os.getenv("MIXER_ADMIN_SERVICE", "demo").lower()

APP_PORT = int(os.getenv("MIXER_ADMIN_APP_PORT", "8000"))
APP_TITLE = os.getenv("MIXER_ADMIN_TITLE", "Mixer Rental Admin")

CACHE_DIR = paths.cache_dir(
    "mixer_admin_query_cache", os.getenv("MIXER_ADMIN_CACHE_DIR") or None
)
STALE_SECONDS = float(os.getenv("MIXER_ADMIN_STALE_SECONDS", "300"))
CACHE_SECONDS = float(os.getenv("MIXER_ADMIN_CACHE_SECONDS", "600"))
SEARCH_DEBOUNCE_SECONDS = int(os.getenv("MIXER_ADMIN_SEARCH_DEBOUNCE_MS", "500")) / 1000
FETCH_RETRIES = int(os.getenv("MIXER_ADMIN_FETCH_RETRIES", "1"))

# Stats cards above list pages
SHOW_STATS = _flag("MIXER_ADMIN_SHOW_STATS", "true")


@dataclass
class ProcessConfig:
    """
    Supervision settings for the backend API process.

    Mirrors the process-manager entry the backend ships with. The dashboard
    never starts the backend; this exists so deployment tooling can render
    it from one place.

    Attributes:
        name: Process name shown by the supervisor.
        script: Entry script relative to the backend root.
        instances: Number of worker instances.
        exec_mode: ``cluster`` or ``fork``.
        max_restarts: Restarts allowed before the supervisor gives up.
        restart_delay_ms: Delay between restarts.
        min_uptime: Uptime after which a start counts as stable.
        max_memory_restart: Memory ceiling that triggers a restart.
        log_file: Combined log path.
        out_file: Stdout log path.
        error_file: Stderr log path.
        env: Environment variables for the process.
    """

    name: str = "concrete-mixer-api"
    script: str = "src/server.js"
    instances: int = 1
    exec_mode: str = "cluster"
    max_restarts: int = 10
    restart_delay_ms: int = 1000
    min_uptime: str = "10s"
    max_memory_restart: str = "500M"
    log_file: str = "./logs/combined.log"
    out_file: str = "./logs/out.log"
    error_file: str = "./logs/error.log"
    env: dict[str, str] = field(
        default_factory=lambda: {"NODE_ENV": "production", "PORT": "3000"}
    )

    @classmethod
    def from_env(cls) -> "ProcessConfig":
        """Build the config, letting ``MIXER_API_*`` variables override defaults."""
        config = cls()
        config.name = os.getenv("MIXER_API_PROCESS_NAME", config.name)
        config.instances = int(os.getenv("MIXER_API_INSTANCES", config.instances))
        config.max_memory_restart = os.getenv(
            "MIXER_API_MAX_MEMORY", config.max_memory_restart
        )
        return config

    def to_dict(self) -> dict:
        """Render the supervisor app entry (snake_case keys)."""
        data = asdict(self)
        data["restart_delay"] = data.pop("restart_delay_ms")
        return data
