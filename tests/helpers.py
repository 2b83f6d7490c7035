from __future__ import annotations


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def gateway_headers(permissions: str, email: str = "gateway-user@example.com") -> dict[str, str]:
    # Headers an upstream proxy sets after authenticating the caller.
    return {"X-User-Permissions": permissions, "X-User-Email": email}
