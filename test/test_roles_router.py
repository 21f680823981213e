"""
API tests for organization role administration.
"""

from uuid import uuid4

import pytest
from fastapi import status
from httpx import AsyncClient

from fish_follow.organizations.models import Organization


class TestRoleEndpoints:
    @pytest.mark.asyncio
    async def test_admin_lifecycle(
        self,
        async_client: AsyncClient,
        admin_headers: dict[str, str],
        organization: Organization,
        other_organization: Organization,
        make_user,
    ) -> None:
        user = await make_user(org_id=other_organization.id)

        created = await async_client.post(
            "/roles",
            json={"orgId": str(organization.id), "userId": str(user.id), "role": "admin"},
            headers=admin_headers,
        )
        assert created.status_code == status.HTTP_201_CREATED
        role = created.json()
        assert role["orgId"] == str(organization.id)
        assert role["userId"] == str(user.id)
        assert role["role"] == "admin"

        listed = await async_client.get("/roles", headers=admin_headers)
        assert [r["id"] for r in listed.json()] == [role["id"]]

        other = await async_client.get(
            "/roles", params={"orgId": str(other_organization.id)}, headers=admin_headers
        )
        assert [r["userId"] for r in other.json()] == [str(user.id)]

        updated = await async_client.put(
            f"/roles/{role['id']}", json={"role": "staff"}, headers=admin_headers
        )
        assert updated.json()["role"] == "staff"

        deleted = await async_client.delete(f"/roles/{role['id']}", headers=admin_headers)
        assert deleted.status_code == status.HTTP_204_NO_CONTENT
        missing = await async_client.get(f"/roles/{role['id']}", headers=admin_headers)
        assert missing.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_required_fields(
        self,
        async_client: AsyncClient,
        admin_headers: dict[str, str],
    ) -> None:
        response = await async_client.post("/roles", json={}, headers=admin_headers)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        fields = {error["field"] for error in response.json()["detail"]["errors"]}
        assert {"body.userId", "body.role"} <= fields

    @pytest.mark.asyncio
    async def test_unknown_user(
        self,
        async_client: AsyncClient,
        admin_headers: dict[str, str],
        organization: Organization,
    ) -> None:
        response = await async_client.post(
            "/roles", json={"userId": str(uuid4()), "role": "staff"}, headers=admin_headers
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["field"] == "userId"

    @pytest.mark.asyncio
    async def test_duplicate_membership(
        self,
        async_client: AsyncClient,
        admin_headers: dict[str, str],
        make_user,
    ) -> None:
        user = await make_user()

        response = await async_client.post(
            "/roles", json={"userId": str(user.id), "role": "admin"}, headers=admin_headers
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    @pytest.mark.asyncio
    async def test_missing_role(self, async_client: AsyncClient, admin_headers: dict[str, str]) -> None:
        updated = await async_client.put(
            f"/roles/{uuid4()}", json={"role": "admin"}, headers=admin_headers
        )
        deleted = await async_client.delete(f"/roles/{uuid4()}", headers=admin_headers)

        assert updated.status_code == status.HTTP_404_NOT_FOUND
        assert deleted.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_staff_is_forbidden(
        self,
        async_client: AsyncClient,
        auth_headers: dict[str, str],
    ) -> None:
        response = await async_client.get("/roles", headers=auth_headers)

        assert response.status_code == status.HTTP_403_FORBIDDEN
