"""
Session login client.

Logs in to a backend with form credentials and returns the session cookie
value to attach to requests delivered to that backend.
"""
import logging
from typing import Optional

import httpx

from collabgate.core.error_handling import request_id_var
from collabgate.core.http_client import get_managed_client

logger = logging.getLogger(__name__)


class SessionLoginClient:
    """Posts account/pwd to a login URL and extracts the session cookie."""

    def __init__(
        self,
        login_url: str,
        user: str,
        password: str,
        cookie_name: str = "JSESSIONID",
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.login_url = login_url
        self.user = user
        self.password = password
        self.cookie_name = cookie_name
        self._client = client

    async def fetch_session_id(self) -> Optional[str]:
        """
        Perform the login call.

        Returns:
            Session id, or None when the login fails or sets no session cookie
        """
        request_id = request_id_var.get()
        try:
            async with get_managed_client(self._client) as client:
                response = await client.post(
                    self.login_url,
                    data={"account": self.user, "pwd": self.password},
                )
        except httpx.HTTPError as e:
            logger.warning(f"[{request_id}] Login to {self.login_url} failed: {e!r}")
            return None

        session_id = response.cookies.get(self.cookie_name)
        if not session_id:
            logger.warning(
                f"[{request_id}] Login to {self.login_url} returned {response.status_code} "
                f"without a {self.cookie_name} cookie"
            )
            return None

        logger.debug(f"[{request_id}] Obtained {self.cookie_name} for user '{self.user}'")
        return session_id
