"""Business logic services — singleton registry."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from orgconsole.config import settings

if TYPE_CHECKING:
    from orgconsole.services.auth_guard import AuthGuard
    from orgconsole.services.drive_actions import DriveActionService
    from orgconsole.services.drive_service import DriveClient

logger = logging.getLogger(__name__)

_drive_client: DriveClient | None = None
_drive_actions: DriveActionService | None = None
_auth_guard: AuthGuard | None = None


async def init_services() -> None:
    """Create and wire up all service singletons."""
    global _drive_client, _drive_actions, _auth_guard

    from orgconsole.services.auth_guard import AuthGuard
    from orgconsole.services.drive_actions import DriveActionService
    from orgconsole.services.drive_service import DriveClient

    _drive_client = DriveClient()
    _drive_actions = DriveActionService(_drive_client)
    _auth_guard = AuthGuard(_drive_client)

    if not settings.google_client_id:
        logger.warning(
            "Google OAuth client not configured (ORGCONSOLE_GOOGLE_CLIENT_ID) — "
            "connect flow disabled, bearer tokens still accepted"
        )
    logger.info("Drive services initialized (%s)", settings.drive_api_url)


async def shutdown_services() -> None:
    global _drive_client, _drive_actions, _auth_guard
    _drive_client = None
    _drive_actions = None
    _auth_guard = None


def get_drive_client() -> DriveClient:
    if _drive_client is None:
        raise RuntimeError("Services not initialized — call init_services() first")
    return _drive_client


def get_drive_actions() -> DriveActionService:
    if _drive_actions is None:
        raise RuntimeError("Services not initialized — call init_services() first")
    return _drive_actions


def get_auth_guard() -> AuthGuard:
    if _auth_guard is None:
        raise RuntimeError("Services not initialized — call init_services() first")
    return _auth_guard
