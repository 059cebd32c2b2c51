"""
Azure AD remove-user-from-group action.
Resolves a user's directory object ID from their userPrincipalName, then
removes that object from the group's members. Exposes the three lifecycle
callbacks the job runner drives: invoke, error and halt.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional

import aiohttp

from .auth import GraphAuthenticator, select_credential
from .config import ActionSettings
from .directory_client import DirectoryClient
from .errors import ActionError, ErrorDisposition, classify_error_message
from .models import RemovalRequest, RemovalResult

SessionFactory = Callable[[ActionSettings], Any]

RETRY_REQUESTED = {"status": "retry_requested"}
UNKNOWN = "unknown"


def _default_session_factory(settings: ActionSettings) -> aiohttp.ClientSession:
    connector = aiohttp.TCPConnector(limit=4, ttl_dns_cache=300)
    timeout = aiohttp.ClientTimeout(total=None, connect=settings.connection_timeout, sock_read=settings.read_timeout)
    return aiohttp.ClientSession(connector=connector, timeout=timeout)


def _error_message(error: Any) -> str:
    if isinstance(error, BaseException):
        return str(error)
    if isinstance(error, Mapping):
        return str(error.get("message", ""))
    return str(error or "")


class RemoveFromGroupAction:
    """Lifecycle callbacks for removing a user from a directory group."""

    def __init__(self, settings: ActionSettings, session_factory: SessionFactory = _default_session_factory):
        self.settings = settings
        self.session_factory = session_factory

        self.logger = logging.getLogger('aad_group_removal')
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter('%(asctime)s - ACTION - %(levelname)s - %(message)s')
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)

    async def invoke(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Remove the user from the group.

        Both remote calls must complete before a result is returned; any
        failure along the way raises and nothing is reported as done.
        """
        self.logger.info("Starting Azure AD remove user from group action")

        request = RemovalRequest.from_params(params, self.settings.default_address)
        credential = select_credential(self.settings.environment, self.settings.secrets)

        async with self.session_factory(self.settings) as session:
            authorization = await GraphAuthenticator(session).authorization_header(credential)
            client = DirectoryClient(request.base_address, authorization, session)

            self.logger.info("Removing user %s from group %s", request.user_principal_name, request.group_id)

            self.logger.info("Step 1: Getting user directory object ID for %s", request.user_principal_name)
            user = await client.get_user(request.user_principal_name)
            self.logger.info("Found user directory object ID: %s", user.directory_object_id)

            self.logger.info("Step 2: Removing user %s from group %s", user.directory_object_id, request.group_id)
            removed = await client.remove_member(request.group_id, user.directory_object_id)

        if removed:
            self.logger.info("Successfully removed user %s from group %s", request.user_principal_name, request.group_id)
        else:
            self.logger.info("User %s was not a member of group %s", request.user_principal_name, request.group_id)

        return RemovalResult(
            user_principal_name=request.user_principal_name,
            group_id=request.group_id,
            user_id=user.directory_object_id,
            removed=removed,
        ).to_dict()

    async def error(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Advise the job runner after a failed invoke.

        Returns a retry request or re-raises the original error when it is
        an authentication/authorization failure.
        """
        error = params.get("error")
        message = _error_message(error)
        self.logger.error("Azure AD remove from group action encountered error: %s", message)

        disposition = classify_error_message(message)

        if disposition is ErrorDisposition.RATE_LIMITED:
            self.logger.info("Rate limited, waiting %ss before retry", self.settings.rate_limit_delay)
            await asyncio.sleep(self.settings.rate_limit_delay)
            return dict(RETRY_REQUESTED)

        if disposition is ErrorDisposition.TRANSIENT:
            self.logger.info("Server error encountered, requesting retry")
            return dict(RETRY_REQUESTED)

        if disposition is ErrorDisposition.AUTH_FAILURE:
            self.logger.error("Authentication/authorization error - not retryable")
            self._reraise(error, message)

        if not self.settings.retry_unknown_errors:
            self.logger.error("Unrecognized error - not retryable")
            self._reraise(error, message)

        return dict(RETRY_REQUESTED)

    @staticmethod
    def _reraise(error: Any, message: str):
        if isinstance(error, BaseException):
            raise error
        raise ActionError(message)

    async def halt(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        """Report a graceful cancellation; performs no I/O."""
        reason: Optional[str] = params.get("reason")
        user_principal_name = params.get("userPrincipalName") or UNKNOWN
        group_id = params.get("groupId") or UNKNOWN
        self.logger.info(
            "Azure AD remove from group action halted (%s) for user %s and group %s",
            reason, user_principal_name, group_id,
        )

        return {
            "status": "halted",
            "userPrincipalName": user_principal_name,
            "groupId": group_id,
            "reason": reason,
            "halted_at": datetime.now(timezone.utc).isoformat(),
        }
