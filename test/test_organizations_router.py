"""
API tests for organization administration.
"""

from uuid import uuid4

import pytest
from fastapi import status
from httpx import AsyncClient

from fish_follow.organizations.models import Organization


class TestOrganizationEndpoints:
    @pytest.mark.asyncio
    async def test_list_and_get(
        self,
        async_client: AsyncClient,
        auth_headers: dict[str, str],
        organization: Organization,
        other_organization: Organization,
    ) -> None:
        listed = await async_client.get("/organizations", headers=auth_headers)

        assert listed.status_code == status.HTTP_200_OK
        assert [o["name"] for o in listed.json()] == ["Campus Outreach", "Other Ministry"]

        fetched = await async_client.get(f"/organizations/{organization.id}", headers=auth_headers)
        assert fetched.json() == {
            "id": str(organization.id),
            "name": "Campus Outreach",
            "country": "US",
            "strategy": "Campus",
        }

    @pytest.mark.asyncio
    async def test_get_missing(self, async_client: AsyncClient, auth_headers: dict[str, str]) -> None:
        response = await async_client.get(f"/organizations/{uuid4()}", headers=auth_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_admin_lifecycle(
        self,
        async_client: AsyncClient,
        admin_headers: dict[str, str],
    ) -> None:
        created = await async_client.post(
            "/organizations", json={"name": "  New Campus  "}, headers=admin_headers
        )
        assert created.status_code == status.HTTP_201_CREATED
        org = created.json()
        assert org["name"] == "New Campus"
        assert org["country"] == ""

        updated = await async_client.put(
            f"/organizations/{org['id']}", json={"country": "MX"}, headers=admin_headers
        )
        assert updated.json()["country"] == "MX"
        assert updated.json()["name"] == "New Campus"

        deleted = await async_client.delete(f"/organizations/{org['id']}", headers=admin_headers)
        assert deleted.status_code == status.HTTP_204_NO_CONTENT

        missing = await async_client.delete(f"/organizations/{org['id']}", headers=admin_headers)
        assert missing.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_blank_name_rejected(
        self,
        async_client: AsyncClient,
        admin_headers: dict[str, str],
    ) -> None:
        response = await async_client.post(
            "/organizations", json={"name": "   "}, headers=admin_headers
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    @pytest.mark.asyncio
    async def test_staff_cannot_create(
        self,
        async_client: AsyncClient,
        auth_headers: dict[str, str],
    ) -> None:
        response = await async_client.post(
            "/organizations", json={"name": "Sneaky"}, headers=auth_headers
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
