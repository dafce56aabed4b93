"""
Created on 2026-10-12

@author: wf
"""
import asyncio
import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, List, Optional, Tuple

from iotdash.api_client import DeviceApiClient, DeviceApiError
from iotdash.config import DashboardConfig
from iotdash.readings import Reading, clamp_limit, device_names, readings_from_response

logger = logging.getLogger(__name__)

StateListener = Callable[["DashboardState"], None]


@dataclass(frozen=True)
class DashboardState:
    """
    immutable snapshot of the dashboard session state
    """

    devices: Tuple[str, ...] = ()
    selected_device: str = ""
    limit: int = 50
    readings: Tuple[Reading, ...] = ()
    status: str = "Initializing…"
    error: str = ""
    loading: bool = False

    @property
    def can_refresh(self) -> bool:
        return bool(self.selected_device) and not self.loading


class DashboardController:
    """
    owns the session state of the device dashboard and
    loads devices and readings from the device API
    """

    def __init__(self, api: DeviceApiClient, config: Optional[DashboardConfig] = None):
        """
        Args:
            api: the device API client
            config: the dashboard configuration
        """
        self.api = api
        self.config = config or DashboardConfig.from_env()
        self._state = DashboardState(limit=clamp_limit(self.config.default_limit))
        self._listeners: List[StateListener] = []
        self._refresh_task: Optional[asyncio.Task] = None
        self._refresh_key = None
        self.disposed = False

    @property
    def state(self) -> DashboardState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        register a listener to be called with every new state snapshot

        Returns:
            a callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _update(self, **changes: Any):
        self._state = replace(self._state, **changes)
        self._rearm_refresh()
        for listener in list(self._listeners):
            listener(self._state)

    def _rearm_refresh(self):
        """
        restart the background refresh when device, limit or loading changed
        """
        state = self._state
        key = (state.selected_device, state.limit, state.loading)
        if key == self._refresh_key:
            return
        self._refresh_key = key
        self._cancel_refresh()
        if self.disposed or not state.selected_device or state.loading:
            return
        logger.debug(
            "arming refresh of %s every %.1f s",
            state.selected_device,
            self.config.refresh_interval,
        )
        self._refresh_task = asyncio.create_task(self._refresh_loop())

    def _cancel_refresh(self):
        if self._refresh_task is not None:
            self._refresh_task.cancel()
            self._refresh_task = None

    @property
    def refresh_armed(self) -> bool:
        return self._refresh_task is not None and not self._refresh_task.done()

    async def _refresh_loop(self):
        while True:
            await asyncio.sleep(self.config.refresh_interval)
            try:
                await self.background_tick()
            except Exception as ex:
                logger.exception("background refresh failed: %s", ex)

    async def background_tick(self) -> bool:
        """
        silently refresh the selected device unless a user fetch is running

        Returns:
            True if a fetch was done
        """
        state = self._state
        if self.disposed or not state.selected_device or state.loading:
            return False
        await self.fetch_device_data(
            state.selected_device, state.limit, show_loading=False
        )
        return True

    async def list_devices(self):
        """
        load the device list and select the first device
        """
        self._update(status="Loading devices…", error="")
        try:
            records = await self.api.list_devices()
        except DeviceApiError as ex:
            logger.error("failed to load devices: %s", ex)
            self._update(
                devices=(),
                selected_device="",
                readings=(),
                error="Failed to load devices. Check API server.",
                status="Error loading devices.",
            )
            return
        if self.disposed:
            return
        names = device_names(records)
        if not names:
            self._update(
                devices=(),
                selected_device="",
                readings=(),
                status="No devices found in database.",
            )
            return
        first = names[0]
        self._update(
            devices=names,
            selected_device=first,
            status=f"Devices loaded. Selected: {first}",
        )
        await self.fetch_device_data(first, self._state.limit, show_loading=True)

    async def fetch_device_data(self, device: str, limit: int, show_loading: bool = True):
        """
        load the readings of the given device

        Args:
            device: name of the device
            limit: maximum number of readings
            show_loading: if True set the loading flag while fetching
        """
        if self.disposed:
            return
        if not device:
            self._update(status="Please select a device.")
            return
        changes = {"error": "", "status": f"Loading data for {device}…"}
        if show_loading:
            changes["loading"] = True
        self._update(**changes)
        try:
            response = await self.api.get_device_data(device, limit)
            readings = readings_from_response(response)
            count = response.get("count")
            if not isinstance(count, int) or isinstance(count, bool):
                count = len(readings)
            logger.debug("loaded %d rows for %s", count, device)
            self._update(readings=readings, status=f"Loaded {count} rows for {device}.")
        except (DeviceApiError, ValueError) as ex:
            logger.error("failed to load data for %s: %s", device, ex)
            self._update(
                error="Failed to load data. Check API / database.",
                status="Error loading data.",
            )
        finally:
            if show_loading:
                self._update(loading=False)

    async def change_device(self, device: Optional[str]):
        """
        select the given device and load its readings
        """
        device = device or ""
        if device and device not in self._state.devices:
            raise ValueError(f"unknown device {device}")
        if device:
            self._update(selected_device=device)
            await self.fetch_device_data(device, self._state.limit, show_loading=True)
        else:
            self._update(selected_device="", readings=())

    async def change_limit(self, value: Any) -> int:
        """
        set the row limit for the next fetch

        Returns:
            the clamped limit
        """
        limit = clamp_limit(value)
        self._update(limit=limit)
        return limit

    async def refresh(self):
        """
        reload the readings of the selected device
        """
        device = self._state.selected_device
        if not device:
            return
        await self.fetch_device_data(device, self._state.limit, show_loading=True)

    def dispose(self):
        """
        stop the background refresh for good
        """
        self.disposed = True
        self._cancel_refresh()
        self._listeners.clear()
