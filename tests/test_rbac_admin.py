"""
tests.test_rbac_admin

Role, permission and user-role administration through the gated /api endpoints.
"""

from __future__ import annotations

import httpx
import pytest

from rbac_platform.security.jwt import JwtConfig, principal_from_token
from tests.helpers import bearer


async def _permission_id(client: httpx.AsyncClient, token: str, name: str) -> int:
    r = await client.get(f"/api/permissions/name/{name}", headers=bearer(token))
    assert r.status_code == 200
    return r.json()["id"]


@pytest.mark.asyncio
async def test_permission_crud(auth_client: httpx.AsyncClient, admin_token: str) -> None:
    headers = bearer(admin_token)
    payload = {"name": "EXPORT_REPORTS", "resource": "REPORT", "action": "EXPORT"}

    r = await auth_client.post("/api/permissions", json=payload, headers=headers)
    assert r.status_code == 201
    created = r.json()
    assert created["name"] == "EXPORT_REPORTS"
    assert created["description"] is None

    r = await auth_client.post("/api/permissions", json=payload, headers=headers)
    assert r.status_code == 409
    assert r.json()["detail"] == "Permission already exists: EXPORT_REPORTS"

    r = await auth_client.get("/api/permissions/resource/REPORT", headers=headers)
    assert [p["name"] for p in r.json()] == ["EXPORT_REPORTS"]

    r = await auth_client.put(
        f"/api/permissions/{created['id']}",
        params={"description": "Export reports as CSV"},
        headers=headers,
    )
    assert r.status_code == 200
    assert r.json()["description"] == "Export reports as CSV"

    r = await auth_client.delete(f"/api/permissions/{created['id']}", headers=headers)
    assert r.status_code == 204

    r = await auth_client.get(f"/api/permissions/{created['id']}", headers=headers)
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_permission_assigned_to_role_cannot_be_deleted(auth_client, admin_token) -> None:
    headers = bearer(admin_token)
    perm_id = await _permission_id(auth_client, admin_token, "READ_PRODUCTS")

    r = await auth_client.delete(f"/api/permissions/{perm_id}", headers=headers)
    assert r.status_code == 409
    assert r.json()["detail"] == "Cannot delete permission that is assigned to roles"


@pytest.mark.asyncio
async def test_role_lifecycle(auth_client: httpx.AsyncClient, admin_token: str) -> None:
    headers = bearer(admin_token)
    read_id = await _permission_id(auth_client, admin_token, "READ_PRODUCTS")
    write_id = await _permission_id(auth_client, admin_token, "WRITE_PRODUCTS")

    r = await auth_client.post(
        "/api/roles",
        json={"name": "ROLE_CATALOG", "description": "Catalog editors", "permission_ids": [read_id]},
        headers=headers,
    )
    assert r.status_code == 201
    role = r.json()
    assert [p["name"] for p in role["permissions"]] == ["READ_PRODUCTS"]
    assert role["active"] is True

    r = await auth_client.post(
        "/api/roles",
        json={"name": "ROLE_CATALOG", "permission_ids": [read_id]},
        headers=headers,
    )
    assert r.status_code == 409

    r = await auth_client.post(
        f"/api/roles/{role['id']}/permissions",
        json={"permission_ids": [write_id, read_id]},
        headers=headers,
    )
    assert r.status_code == 200
    assert {p["name"] for p in r.json()["permissions"]} == {"READ_PRODUCTS", "WRITE_PRODUCTS"}

    r = await auth_client.request(
        "DELETE",
        f"/api/roles/{role['id']}/permissions",
        json={"permission_ids": [read_id]},
        headers=headers,
    )
    assert [p["name"] for p in r.json()["permissions"]] == ["WRITE_PRODUCTS"]

    r = await auth_client.put(f"/api/roles/{role['id']}", json={"active": False}, headers=headers)
    assert r.json()["active"] is False
    assert r.json()["description"] == "Catalog editors"

    r = await auth_client.get("/api/roles/active", headers=headers)
    assert "ROLE_CATALOG" not in [x["name"] for x in r.json()]

    r = await auth_client.get("/api/roles/name/ROLE_CATALOG", headers=headers)
    assert r.json()["id"] == role["id"]

    r = await auth_client.delete(f"/api/roles/{role['id']}", headers=headers)
    assert r.status_code == 204
    r = await auth_client.get(f"/api/roles/{role['id']}", headers=headers)
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_role_requires_known_permissions(auth_client, admin_token) -> None:
    headers = bearer(admin_token)

    r = await auth_client.post(
        "/api/roles", json={"name": "ROLE_X", "permission_ids": [9999]}, headers=headers
    )
    assert r.status_code == 404
    assert r.json()["detail"] == "Permission not found: 9999"

    r = await auth_client.post(
        "/api/roles", json={"name": "ROLE_X", "permission_ids": []}, headers=headers
    )
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_role_assigned_to_users_cannot_be_deleted(auth_client, admin_token) -> None:
    headers = bearer(admin_token)
    admin_role = (await auth_client.get("/api/roles/name/ROLE_ADMIN", headers=headers)).json()

    r = await auth_client.delete(f"/api/roles/{admin_role['id']}", headers=headers)
    assert r.status_code == 409
    assert r.json()["detail"] == "Cannot delete role that is assigned to users"


@pytest.mark.asyncio
async def test_assign_and_remove_roles(auth_client, admin_token, settings) -> None:
    headers = bearer(admin_token)
    reg = await auth_client.post(
        "/register", json={"email": "bob@example.com", "password": "bob-pass"}
    )
    assert reg.status_code == 201
    users = (await auth_client.get("/api/users", headers=headers)).json()
    bob = next(u for u in users if u["email"] == "bob@example.com")
    admin_role = (await auth_client.get("/api/roles/name/ROLE_ADMIN", headers=headers)).json()

    r = await auth_client.post(
        f"/api/users/{bob['id']}/roles", json={"role_ids": [admin_role["id"]]}, headers=headers
    )
    assert r.status_code == 200
    assert {role["name"] for role in r.json()["roles"]} == {"ROLE_USER", "ROLE_ADMIN"}

    login = await auth_client.post(
        "/login", json={"email": "bob@example.com", "password": "bob-pass"}
    )
    principal = principal_from_token(
        cfg=JwtConfig.from_settings(settings), token=login.json()["token"]
    )
    assert principal.has_role("ROLE_ADMIN")
    assert principal.has_permission("DELETE_PRODUCTS")
    # Distinct permission names only.
    assert len(principal.permissions) == len(set(principal.permissions))

    r = await auth_client.request(
        "DELETE",
        f"/api/users/{bob['id']}/roles",
        json={"role_ids": [admin_role["id"]]},
        headers=headers,
    )
    assert [role["name"] for role in r.json()["roles"]] == ["ROLE_USER"]

    r = await auth_client.post(
        f"/api/users/{bob['id']}/roles", json={"role_ids": [4242]}, headers=headers
    )
    assert r.status_code == 404

    r = await auth_client.post("/api/users/9999/roles", json={"role_ids": [1]}, headers=headers)
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_user_crud(auth_client: httpx.AsyncClient, admin_token: str) -> None:
    headers = bearer(admin_token)

    r = await auth_client.post(
        "/api/users",
        json={"email": "carol@example.com", "password": "carol-pass", "full_name": "Carol"},
        headers=headers,
    )
    assert r.status_code == 201
    carol = r.json()
    assert [role["name"] for role in carol["roles"]] == ["ROLE_USER"]
    assert "password_hash" not in carol

    r = await auth_client.post(
        "/api/users",
        json={"email": "carol@example.com", "password": "carol-pass"},
        headers=headers,
    )
    assert r.status_code == 409

    r = await auth_client.put(
        f"/api/users/{carol['id']}", json={"full_name": "Carol King"}, headers=headers
    )
    assert r.json()["full_name"] == "Carol King"
    assert r.json()["enabled"] is True

    r = await auth_client.delete(f"/api/users/{carol['id']}", headers=headers)
    assert r.status_code == 204
    r = await auth_client.get(f"/api/users/{carol['id']}", headers=headers)
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_admin_endpoints_need_matching_permission(auth_client, mint_token) -> None:
    token = mint_token(permissions=["READ_PRODUCTS"])

    for path in ("/api/users", "/api/roles", "/api/permissions"):
        r = await auth_client.get(path, headers=bearer(token))
        assert r.status_code == 403, path
        assert "does not have permission" in r.json()["detail"]
