"""AUR RPC client.

Uses the RPC v5 ``info`` endpoint, which accepts a list of package names
and returns the matching packages.
"""

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from pacup.core.config import DEFAULT_AUR_URL
from pacup.models.package import RegistryPackage
from pacup.sources.base import RegistryClient, RegistryError

logger = logging.getLogger(__name__)

RPC_VERSION = 5


def parse_info_response(data: Any, names: Sequence[str]) -> list[RegistryPackage]:
    """Turn an RPC info response into packages ordered like ``names``.

    Args:
        data: Decoded JSON body.
        names: Names that were queried.

    Returns:
        The matching packages in query order.

    Raises:
        RegistryError: If the response is an RPC error or malformed.
    """
    if not isinstance(data, dict):
        msg = "AUR returned an unexpected response"
        raise RegistryError(msg)
    if data.get("type") == "error":
        msg = f"AUR error: {data.get('error') or 'unknown error'}"
        raise RegistryError(msg)

    results = data.get("results")
    if not isinstance(results, list):
        msg = "AUR response has no results"
        raise RegistryError(msg)

    by_name: dict[str, RegistryPackage] = {}
    for item in results:
        if not isinstance(item, dict) or "Name" not in item or "Version" not in item:
            logger.debug("Skipping malformed AUR result: %r", item)
            continue
        by_name[str(item["Name"])] = RegistryPackage(
            name=str(item["Name"]),
            version=str(item["Version"]),
            last_modified=int(item.get("LastModified") or 0),
        )

    return [by_name[name] for name in names if name in by_name]


class AurClient(RegistryClient):
    """Thread-safe client for the AUR info endpoint.

    Attributes:
        base_url: AUR base URL.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_AUR_URL,
        *,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: AUR base URL.
            timeout: Request timeout in seconds.
            transport: Custom httpx transport (used by tests).
        """
        from pacup import __version__

        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
            headers={"User-Agent": f"pacup/{__version__}"},
        )

    def info(self, names: Sequence[str]) -> list[RegistryPackage]:
        """Look up a batch of packages.

        Raises:
            RegistryError: If the request or the RPC call fails.
        """
        if not names:
            return []

        params: list[tuple[str, str | int]] = [("v", RPC_VERSION), ("type", "info")]
        params.extend(("arg[]", name) for name in names)

        try:
            response = self._client.get("/rpc/", params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            msg = f"AUR request failed: {e}"
            raise RegistryError(msg) from e
        except ValueError as e:
            msg = f"AUR returned invalid JSON: {e}"
            raise RegistryError(msg) from e

        return parse_info_response(data, names)

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._client.close()

    def __enter__(self) -> "AurClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
