"""End-to-end tests for the users endpoints."""

from typing import Any

import pytest
import pytest_check
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from api_boilerplate.users.models import User

USERS_URL = "/api/users"


async def create_user(
    client: AsyncClient,
    first_name: str = "Al",
    last_name: str = "Ng",
    email: str = "a@b.co",
) -> dict[str, Any]:
    response = await client.post(
        USERS_URL,
        json={"firstName": first_name, "lastName": last_name, "email": email},
    )
    assert response.status_code == 201, response.text
    data: dict[str, Any] = response.json()["data"]
    return data


@pytest.mark.integration
class TestCreateUser:
    """POST /api/users."""

    async def test_creates_user(self, client: AsyncClient) -> None:
        response = await client.post(
            USERS_URL, json={"firstName": "Al", "lastName": "Ng", "email": "a@b.co"}
        )
        body = response.json()

        with pytest_check.check:
            assert response.status_code == 201
        with pytest_check.check:
            assert body["success"] is True
        with pytest_check.check:
            assert body["message"] == "User created successfully"
        with pytest_check.check:
            assert isinstance(body["data"]["id"], int)
        with pytest_check.check:
            assert body["data"]["firstName"] == "Al"
        with pytest_check.check:
            assert body["data"]["lastName"] == "Ng"
        with pytest_check.check:
            assert body["data"]["email"] == "a@b.co"
        with pytest_check.check:
            assert "createdAt" in body["data"]
        with pytest_check.check:
            assert "errors" not in body

    async def test_duplicate_email_conflicts(self, client: AsyncClient) -> None:
        await create_user(client)

        response = await client.post(
            USERS_URL, json={"firstName": "Bo", "lastName": "Li", "email": "a@b.co"}
        )
        body = response.json()

        assert response.status_code == 409
        assert body["success"] is False
        assert body["message"] == "User with this email already exists"
        assert "data" not in body

    async def test_invalid_body_reports_every_field(self, client: AsyncClient) -> None:
        response = await client.post(
            USERS_URL, json={"firstName": "A", "email": "not-an-email"}
        )
        body = response.json()

        assert response.status_code == 400
        assert body["message"] == "Validation failed"
        assert body["errors"] == [
            {
                "field": "firstName",
                "message": "firstName must be at least 2 characters long",
                "value": "A",
            },
            {"field": "lastName", "message": "lastName is required"},
            {
                "field": "email",
                "message": "email must be a valid email",
                "value": "not-an-email",
            },
        ]

    async def test_empty_body_is_validated(self, client: AsyncClient) -> None:
        response = await client.post(USERS_URL)

        assert response.status_code == 400
        assert [error["field"] for error in response.json()["errors"]] == [
            "firstName",
            "lastName",
            "email",
        ]

    async def test_malformed_json(self, client: AsyncClient) -> None:
        response = await client.post(
            USERS_URL,
            content=b"{not json",
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid JSON body"


@pytest.mark.integration
class TestReadUsers:
    """GET /api/users and GET /api/users/{id}."""

    async def test_list_is_ordered_by_id(self, client: AsyncClient) -> None:
        first = await create_user(client, email="first@example.com")
        second = await create_user(client, email="second@example.com")

        response = await client.get(USERS_URL)
        body = response.json()

        assert response.status_code == 200
        assert body["message"] == "Users retrieved successfully"
        assert [user["id"] for user in body["data"]] == [first["id"], second["id"]]

    async def test_empty_list(self, client: AsyncClient) -> None:
        response = await client.get(USERS_URL)

        assert response.json() == {
            "success": True,
            "message": "Users retrieved successfully",
            "data": [],
        }

    async def test_get_by_id(self, client: AsyncClient) -> None:
        created = await create_user(client)

        response = await client.get(f"{USERS_URL}/{created['id']}")

        assert response.status_code == 200
        assert response.json()["message"] == "User retrieved successfully"
        assert response.json()["data"] == created

    async def test_non_numeric_id(self, client: AsyncClient) -> None:
        response = await client.get(f"{USERS_URL}/abc")

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid user ID"

    async def test_unknown_id(self, client: AsyncClient) -> None:
        response = await client.get(f"{USERS_URL}/999999")

        assert response.status_code == 404
        assert response.json()["message"] == "User not found"


@pytest.mark.integration
class TestUpdateUser:
    """PUT /api/users/{id}."""

    async def test_updates_only_email(self, client: AsyncClient) -> None:
        created = await create_user(client)

        response = await client.put(
            f"{USERS_URL}/{created['id']}", json={"email": "new@example.com"}
        )
        body = response.json()

        assert response.status_code == 200
        assert body["message"] == "User updated successfully"
        assert body["data"]["email"] == "new@example.com"
        assert body["data"]["firstName"] == created["firstName"]
        assert body["data"]["lastName"] == created["lastName"]

    async def test_empty_values_are_ignored(self, client: AsyncClient) -> None:
        created = await create_user(client)

        response = await client.put(
            f"{USERS_URL}/{created['id']}", json={"firstName": "", "lastName": "Wu"}
        )

        assert response.status_code == 200
        assert response.json()["data"]["firstName"] == "Al"
        assert response.json()["data"]["lastName"] == "Wu"

    async def test_email_collision_leaves_user_unchanged(
        self, client: AsyncClient
    ) -> None:
        await create_user(client, email="taken@example.com")
        target = await create_user(client, email="mine@example.com")

        response = await client.put(
            f"{USERS_URL}/{target['id']}", json={"email": "taken@example.com"}
        )
        assert response.status_code == 409
        assert response.json()["message"] == "User with this email already exists"

        current = await client.get(f"{USERS_URL}/{target['id']}")
        assert current.json()["data"]["email"] == "mine@example.com"

    async def test_keeping_own_email_is_allowed(self, client: AsyncClient) -> None:
        created = await create_user(client)

        response = await client.put(
            f"{USERS_URL}/{created['id']}",
            json={"email": created["email"], "firstName": "Bo"},
        )

        assert response.status_code == 200
        assert response.json()["data"]["firstName"] == "Bo"

    async def test_body_is_validated_before_id(self, client: AsyncClient) -> None:
        response = await client.put(f"{USERS_URL}/abc", json={"email": "bad"})

        assert response.status_code == 400
        assert response.json()["message"] == "Validation failed"

    async def test_invalid_id(self, client: AsyncClient) -> None:
        response = await client.put(f"{USERS_URL}/abc", json={"firstName": "Bo"})

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid user ID"

    async def test_unknown_user(self, client: AsyncClient) -> None:
        response = await client.put(f"{USERS_URL}/424242", json={"firstName": "Bo"})

        assert response.status_code == 404
        assert response.json()["message"] == "User not found"


@pytest.mark.integration
class TestDeleteUser:
    """DELETE /api/users/{id}."""

    async def test_delete_twice(self, client: AsyncClient) -> None:
        created = await create_user(client)
        url = f"{USERS_URL}/{created['id']}"

        first = await client.delete(url)
        second = await client.delete(url)

        assert first.status_code == 204
        assert first.content == b""
        assert second.status_code == 404
        assert second.json()["success"] is False
        assert second.json()["message"] == "User not found"

    async def test_deleted_user_is_gone(self, client: AsyncClient) -> None:
        created = await create_user(client)

        await client.delete(f"{USERS_URL}/{created['id']}")
        response = await client.get(f"{USERS_URL}/{created['id']}")

        assert response.status_code == 404

    async def test_invalid_id(self, client: AsyncClient) -> None:
        response = await client.delete(f"{USERS_URL}/abc")

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid user ID"


@pytest.mark.integration
class TestUserIdRange:
    """IDs that no BIGINT column can hold."""

    @pytest.mark.parametrize("user_id", ["9223372036854775808", "9" * 25])
    async def test_get_out_of_range(self, client: AsyncClient, user_id: str) -> None:
        response = await client.get(f"{USERS_URL}/{user_id}")

        assert response.status_code == 404
        assert response.json()["message"] == "User not found"

    @pytest.mark.parametrize("user_id", ["9223372036854775808", "9" * 25])
    async def test_delete_out_of_range(
        self, client: AsyncClient, user_id: str
    ) -> None:
        response = await client.delete(f"{USERS_URL}/{user_id}")

        assert response.status_code == 404
        assert response.json()["message"] == "User not found"

    async def test_update_out_of_range(self, client: AsyncClient) -> None:
        response = await client.put(
            f"{USERS_URL}/9223372036854775808", json={"firstName": "Bo"}
        )

        assert response.status_code == 404

    async def test_largest_id_is_looked_up(self, client: AsyncClient) -> None:
        response = await client.get(f"{USERS_URL}/9223372036854775807")

        assert response.status_code == 404
        assert response.json()["message"] == "User not found"

    async def test_underscore_id_is_rejected(self, client: AsyncClient) -> None:
        response = await client.get(f"{USERS_URL}/1_0")

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid user ID"


@pytest.mark.integration
class TestUnitOfWork:
    """Each request commits through the session dependency."""

    async def test_created_user_is_committed(
        self,
        client: AsyncClient,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        created = await create_user(client)

        async with session_factory() as session:
            stored = await session.scalar(select(User).where(User.id == created["id"]))

        assert stored is not None
        assert stored.email == "a@b.co"

    async def test_conflicting_update_is_not_committed(
        self,
        client: AsyncClient,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        await create_user(client, email="taken@example.com")
        target = await create_user(client, email="mine@example.com")

        await client.put(
            f"{USERS_URL}/{target['id']}", json={"email": "taken@example.com"}
        )

        async with session_factory() as session:
            stored = await session.scalar(select(User).where(User.id == target["id"]))

        assert stored is not None
        assert stored.email == "mine@example.com"
