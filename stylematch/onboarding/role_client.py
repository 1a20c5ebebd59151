from __future__ import annotations

import logging
from urllib.parse import quote

import httpx

from .config import DEFAULT_ROLE_CLIENT_CONFIG, RoleClientConfig

logger = logging.getLogger(__name__)


class RoleGrantError(Exception):
    """The identity service did not accept a role grant."""


class RoleClient:
    """Grants roles to users through the auth service's admin API.

    One-way: the response body is ignored, only the status matters. With no
    ``AUTH_SERVICE_URL`` configured the client is disabled and every grant is
    a logged no-op.
    """

    def __init__(self, config: RoleClientConfig = DEFAULT_ROLE_CLIENT_CONFIG) -> None:
        self.config = config

    def grant_role(self, user_id: str, role: str) -> bool:
        """PUT ``/api/admin/users/{user_id}/roles?role=...``.

        Returns ``False`` when disabled, ``True`` once the grant is accepted.
        Raises ``RoleGrantError`` on transport failure or a non-2xx status.
        """
        if not self.config.enabled:
            logger.info("Role client disabled, not granting %s to %s", role, user_id)
            return False

        url = f"{self.config.base_url.rstrip('/')}/api/admin/users/{quote(user_id, safe='')}/roles"
        try:
            response = httpx.put(url, params={"role": role}, timeout=self.config.timeout)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("Granting %s to %s failed", role, user_id, exc_info=True)
            raise RoleGrantError(f"Could not grant {role} to {user_id}: {exc}") from exc

        logger.info("Granted %s to %s", role, user_id)
        return True


_role_client: RoleClient | None = None


def get_role_client() -> RoleClient:
    global _role_client
    if _role_client is None:
        _role_client = RoleClient()
    return _role_client
