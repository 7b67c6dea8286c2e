"""Auth guard — verifies a Drive credential before protected content is served."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from orgconsole.services.drive_service import DriveClient

logger = logging.getLogger(__name__)

CONNECT_PROMPT = "Please authenticate to access the organizational management system"
LOAD_FAILED = "Failed to load organizational resources"


class GuardState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    VERIFYING = "verifying"
    INVALID = "invalid"
    AUTHORIZED = "authorized"


@dataclass(frozen=True)
class GuardDecision:
    state: GuardState
    message: str | None = None

    @property
    def authorized(self) -> bool:
        return self.state == GuardState.AUTHORIZED


class AuthGuard:
    """UNAUTHENTICATED -> VERIFYING -> AUTHORIZED | INVALID.

    One validation call (a Drive file listing) per check. An authorized
    decision only means the credential was valid at check time.
    """

    def __init__(self, drive: DriveClient):
        self._drive = drive

    async def check(self, access_token: str | None) -> GuardDecision:
        if not access_token:
            return GuardDecision(GuardState.UNAUTHENTICATED, CONNECT_PROMPT)

        try:
            await self._drive.list_files(access_token)
        except Exception as exc:
            logger.error("Credential validation against Drive failed: %s", exc)
            return GuardDecision(GuardState.INVALID, LOAD_FAILED)

        return GuardDecision(GuardState.AUTHORIZED)
