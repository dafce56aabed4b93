"""
REST client for the device readings API
"""

from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx


class DeviceApiError(Exception):
    """
    a device API request failed
    """

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        super().__init__(f"{url}: {message}")
        self.url = url
        self.status_code = status_code


class DeviceApiClient:
    """
    access the two read endpoints of the device API
    """

    def __init__(
        self,
        base_url: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            base_url: base URL of the API e.g. http://localhost:3000
            transport: optional httpx transport e.g. a MockTransport for tests
        """
        self.base_url = base_url.rstrip("/")
        self.transport = transport

    def device_data_path(self, device: str, limit: int) -> str:
        path = f"/devices/{quote(device, safe='')}/data?limit={limit}"
        return path

    async def get_json(self, path: str) -> Any:
        """
        GET the given path and return the decoded JSON body

        Raises:
            DeviceApiError: for non-2xx responses, transport and JSON errors
        """
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.get(url)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as ex:
            status_code = ex.response.status_code
            raise DeviceApiError(url, f"HTTP {status_code}", status_code) from ex
        except httpx.RequestError as ex:
            raise DeviceApiError(url, str(ex) or type(ex).__name__) from ex
        except ValueError as ex:
            raise DeviceApiError(url, f"invalid JSON: {ex}") from ex

    async def list_devices(self) -> List[Any]:
        """
        get the raw device records
        """
        devices = await self.get_json("/devices")
        if not isinstance(devices, list):
            raise DeviceApiError(
                f"{self.base_url}/devices", "expected a JSON array of devices"
            )
        return devices

    async def get_device_data(self, device: str, limit: int) -> Dict[str, Any]:
        """
        get the most recent readings of the given device

        Args:
            device: the device name
            limit: maximum number of rows to return

        Returns:
            the response object with "data" and "count"
        """
        path = self.device_data_path(device, limit)
        data = await self.get_json(path)
        if not isinstance(data, dict):
            raise DeviceApiError(
                f"{self.base_url}{path}", "expected a JSON object with data"
            )
        if not isinstance(data.get("data"), (list, type(None))):
            raise DeviceApiError(
                f"{self.base_url}{path}", "expected data to be a JSON array"
            )
        return data
