# =============================================================================
# core/config.py  —  Process Configuration
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads the UNOMI_* environment variables once, validates them once, and
#   freezes them into a UnomiConfig that every component receives.
#
#   Loading .env files is the entry point's job (main.py calls load_dotenv()
#   before anything else); this module only reads an environment mapping,
#   so tests can hand it a plain dict.
# =============================================================================

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from core.errors import ConfigurationError

DEFAULT_BASE_URL = "http://localhost:8181"
DEFAULT_SOURCE_ID = "claude-desktop"
DEFAULT_SCOPE = "claude-desktop"
DEFAULT_LOG_LEVEL = "INFO"

# Header Unomi checks before accepting protected events.
PEER_HEADER = "X-Unomi-Peer"


@dataclass(frozen=True)
class UnomiConfig:
    """Everything the server needs to talk to Unomi."""

    base_url: str
    username: str
    password: str
    key: str                           # privileged key sent as X-Unomi-Peer
    profile_id: str                    # fallback profile for "my profile" tools
    source_id: str = DEFAULT_SOURCE_ID
    email: Optional[str] = None        # enables lookup-by-email when set
    default_scope: str = DEFAULT_SCOPE
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def auth(self) -> tuple[str, str]:
        return (self.username, self.password)

    @property
    def headers(self) -> dict[str, str]:
        return {PEER_HEADER: self.key}

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "UnomiConfig":
        """Build a config from an environment mapping (default: os.environ).

        Raises:
            ConfigurationError: if a required variable is missing or empty.
        """
        env = os.environ if environ is None else environ

        def get(name: str) -> Optional[str]:
            value = env.get(name)
            return value if value else None

        username, password = get("UNOMI_USERNAME"), get("UNOMI_PASSWORD")
        if not username or not password:
            raise ConfigurationError(
                "UNOMI_USERNAME and UNOMI_PASSWORD environment variables are required"
            )

        key = get("UNOMI_KEY")
        if not key:
            raise ConfigurationError(
                "UNOMI_KEY environment variable is required for protected events"
            )

        profile_id = get("UNOMI_PROFILE_ID")
        if not profile_id:
            raise ConfigurationError(
                "UNOMI_PROFILE_ID environment variable is required as fallback"
            )

        return cls(
            base_url=(get("UNOMI_BASE_URL") or DEFAULT_BASE_URL).rstrip("/"),
            username=username,
            password=password,
            key=key,
            profile_id=profile_id,
            source_id=get("UNOMI_SOURCE_ID") or DEFAULT_SOURCE_ID,
            email=get("UNOMI_EMAIL"),
            log_level=(get("UNOMI_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        )
