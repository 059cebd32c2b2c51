"""Async client for the two directory graph calls the action needs."""
from __future__ import annotations

import logging
from typing import Dict
from urllib.parse import quote

import aiohttp
from yarl import URL

from .errors import DirectoryObjectNotFoundError, MembershipRemovalError, UserLookupError
from .models import ResolvedUser

logger = logging.getLogger(__name__)

API_VERSION = "v1.0"


def encode_component(value: str) -> str:
    """Percent-encode a single path segment, reserved characters included."""
    return quote(value, safe="")


class DirectoryClient:
    def __init__(self, base_url: str, authorization: str, session: aiohttp.ClientSession):
        self.base_url = base_url.rstrip("/")
        self.session = session
        self.headers: Dict[str, str] = {
            "Authorization": authorization,
            "Accept": "application/json",
        }

    def user_url(self, user_principal_name: str) -> str:
        return f"{self.base_url}/{API_VERSION}/users/{encode_component(user_principal_name)}"

    def member_ref_url(self, group_id: str, directory_object_id: str) -> str:
        return f"{self.base_url}/{API_VERSION}/groups/{group_id}/members/{encode_component(directory_object_id)}/$ref"

    async def get_user(self, user_principal_name: str) -> ResolvedUser:
        url = self.user_url(user_principal_name)
        # encoded=True keeps %40 / %2B escapes from being normalised away
        async with self.session.get(URL(url, encoded=True), headers=self.headers) as response:
            logger.debug("GET %s -> Status: %s", url, response.status)
            if not 200 <= response.status < 300:
                raise UserLookupError(
                    f"Failed to get user {user_principal_name}: {response.status} {response.reason}",
                    status=response.status,
                    reason=response.reason,
                )
            data = await response.json()

        user_id = data.get("id") if isinstance(data, dict) else None
        if not user_id:
            raise DirectoryObjectNotFoundError(f"No directory object ID found for user {user_principal_name}")
        return ResolvedUser(directory_object_id=user_id, data=data)

    async def remove_member(self, group_id: str, directory_object_id: str) -> bool:
        """
        Delete a group membership reference.

        Returns True when the membership was removed (204) and False when the
        directory reports it never existed (404).
        """
        url = self.member_ref_url(group_id, directory_object_id)
        async with self.session.delete(URL(url, encoded=True), headers=self.headers) as response:
            logger.debug("DELETE %s -> Status: %s", url, response.status)
            if response.status == 204:
                return True
            if response.status == 404:
                return False
            raise MembershipRemovalError(
                f"Failed to remove user from group: {response.status} {response.reason}",
                status=response.status,
                reason=response.reason,
            )
