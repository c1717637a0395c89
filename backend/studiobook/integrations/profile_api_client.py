"""Client for the photographer profile API's availability write."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import SecretStr

logger = logging.getLogger(__name__)

PROFILE_PATH = "/api/photographers/profile"


class ProfileApiError(RuntimeError):
    """Raised when the profile API rejects or never answers an availability write."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ProfileApiClient:
    """
    Writes the whole availability map with ``PATCH /api/photographers/profile``.

    The profile API identifies the photographer from the bearer token; the
    photographer id is only used for logging.
    """

    def __init__(
        self,
        *,
        base_url: str,
        token: str | SecretStr | None = None,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if not base_url:
            raise ValueError("Profile API base URL must be provided")
        self._base_url = base_url.rstrip("/")
        self._token = token.get_secret_value() if isinstance(token, SecretStr) else token
        self._timeout = timeout
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def replace_availability(self, photographer_id: str, payload: Dict[str, List[str]]) -> None:
        url = f"{self._base_url}{PROFILE_PATH}"
        body: Dict[str, Any] = {"availableTimes": payload}
        with httpx.Client(
            timeout=self._timeout,
            transport=self._transport,
            headers=self._headers(),
        ) as client:
            try:
                response = client.patch(url, json=body)
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                status = exc.response.status_code
                logger.error(
                    "Profile API error %s for photographer %s: %s",
                    status,
                    photographer_id,
                    exc.response.text[:500],
                )
                raise ProfileApiError(
                    f"Profile API responded with status {status}", status_code=status
                ) from exc
            except httpx.RequestError as exc:
                logger.error("Profile API request failure for %s: %s", photographer_id, str(exc))
                raise ProfileApiError("Failed to reach profile API") from exc

        logger.debug(
            "Profile availability replaced",
            extra={"photographer_id": photographer_id, "dates": len(payload)},
        )
