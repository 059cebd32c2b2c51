import asyncio

import pytest

from aad_group_removal.directory_client import DirectoryClient
from aad_group_removal.errors import DirectoryObjectNotFoundError, MembershipRemovalError, UserLookupError

BASE = "https://graph.microsoft.com/"


def test_get_user_encodes_principal_name(fake_session, make_response):
    fake_session.responses.append(make_response(200, {"id": "U1"}))
    client = DirectoryClient(BASE, "Bearer t", fake_session)

    user = asyncio.run(client.get_user("user+tag@example.com"))

    assert user.directory_object_id == "U1"
    request = fake_session.requests[0]
    assert request["method"] == "GET"
    assert request["url"] == "https://graph.microsoft.com/v1.0/users/user%2Btag%40example.com"
    assert request["headers"] == {"Authorization": "Bearer t", "Accept": "application/json"}


def test_get_user_failure_carries_status_and_reason(fake_session, make_response):
    fake_session.responses.append(make_response(404))
    client = DirectoryClient(BASE, "Bearer t", fake_session)

    with pytest.raises(UserLookupError, match="Failed to get user test@example.com: 404 Not Found") as excinfo:
        asyncio.run(client.get_user("test@example.com"))
    assert excinfo.value.status == 404


@pytest.mark.parametrize("body", [{"userPrincipalName": "test@example.com"}, {"id": ""}, None])
def test_get_user_without_id(fake_session, make_response, body):
    fake_session.responses.append(make_response(200, body))
    client = DirectoryClient(BASE, "Bearer t", fake_session)

    with pytest.raises(DirectoryObjectNotFoundError, match="No directory object ID found for user test@example.com"):
        asyncio.run(client.get_user("test@example.com"))


def test_remove_member_encodes_object_id_but_not_group(fake_session, make_response):
    fake_session.responses.append(make_response(204))
    client = DirectoryClient(BASE, "Bearer t", fake_session)

    assert asyncio.run(client.remove_member("group-123", "user+123&456=789")) is True
    request = fake_session.requests[0]
    assert request["method"] == "DELETE"
    assert request["url"] == "https://graph.microsoft.com/v1.0/groups/group-123/members/user%2B123%26456%3D789/$ref"


def test_remove_member_not_found_is_a_no_op(fake_session, make_response):
    fake_session.responses.append(make_response(404))
    client = DirectoryClient(BASE, "Bearer t", fake_session)

    assert asyncio.run(client.remove_member("group-123", "U1")) is False


@pytest.mark.parametrize("status", [400, 403, 500, 503])
def test_remove_member_other_statuses_fail(fake_session, make_response, status):
    fake_session.responses.append(make_response(status))
    client = DirectoryClient(BASE, "Bearer t", fake_session)

    with pytest.raises(MembershipRemovalError, match=f"Failed to remove user from group: {status}"):
        asyncio.run(client.remove_member("group-123", "U1"))
