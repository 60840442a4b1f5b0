import logging
from enum import Enum
from typing import Optional

from postgrest.exceptions import APIError
from supabase import Client, create_client

from ..config import Settings
from ..errors import ConfigurationError, InputError, PersistenceError

logger = logging.getLogger(__name__)

NO_TOOL = "None"
TOOL_OPTIONS = (
    "Vibe Code Prompt Generator",
    "Vibe Coding Prompt Optimizer/Rewriter",
    "Prebuilt Prompts to Fix Vide Code Error Loops",
)

UNIQUE_VIOLATION = "23505"


class WaitlistStatus(str, Enum):
    JOINED = "joined"
    ALREADY_JOINED = "already_joined"


def _is_duplicate(exc: APIError) -> bool:
    message = (exc.message or "").lower()
    return exc.code == UNIQUE_VIOLATION or "duplicate" in message or "unique" in message


class WaitlistWriter:
    """Inserts waitlist sign-ups into the hosted `waitlist` table."""

    def __init__(self, settings: Settings):
        self._settings = settings
        self._client: Optional[Client] = None

    @property
    def configured(self) -> bool:
        return self._settings.database_configured

    def _get_client(self) -> Client:
        if not self.configured:
            raise ConfigurationError("Waitlist storage is not properly configured.")
        if self._client is None:
            self._client = create_client(self._settings.supabase_url, self._settings.supabase_anon_key)
        return self._client

    def submit(self, email: str, tool: Optional[str]) -> WaitlistStatus:
        email = (email or "").strip()
        if not email or not tool or tool == NO_TOOL or tool not in TOOL_OPTIONS:
            raise InputError("Please enter your email and select a tool.")

        client = self._get_client()
        try:
            client.table(self._settings.waitlist_table).insert({"email": email, "tool": tool}).execute()
        except APIError as exc:
            if _is_duplicate(exc):
                logger.info("Waitlist sign-up for an email already on the list")
                return WaitlistStatus.ALREADY_JOINED
            logger.error("Waitlist insert failed: code=%s message=%s", exc.code, exc.message)
            raise PersistenceError("waitlist insert failed") from exc
        except Exception as exc:
            logger.error("Waitlist insert failed: %s", exc, exc_info=True)
            raise PersistenceError("waitlist insert failed") from exc

        logger.info("Waitlist sign-up stored (tool=%s)", tool)
        return WaitlistStatus.JOINED
