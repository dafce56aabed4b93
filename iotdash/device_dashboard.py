"""
Created on 2026-10-12

@author: wf
"""
from ngwidgets.lod_grid import GridConfig, ListOfDictsGrid
from nicegui import ui

from iotdash.api_client import DeviceApiClient
from iotdash.config import DashboardConfig
from iotdash.controller import DashboardController, DashboardState
from iotdash.dashboard import Dashboard
from iotdash.readings import MAX_LIMIT, MIN_LIMIT


class DeviceDashboard(Dashboard):
    """
    Dashboard showing the most recent sensor readings of a selected IoT device
    with manual and timed refresh.
    """

    def __init__(self, solution, config: DashboardConfig = None):
        super().__init__(solution)
        self.config = config or DashboardConfig.from_env()
        self.controller = DashboardController(
            DeviceApiClient(self.config.api_base_url), self.config
        )
        self.device_select = None
        self.limit_input = None
        self.refresh_button = None
        self.status_label = None
        self.error_label = None
        self.title_label = None
        self.grid_container = None
        self.rendered_readings = None
        self.unsubscribe = None

    def setup_ui(self):
        """
        Setup the Dashboard UI elements.
        """
        state = self.controller.state
        with ui.row().classes("w-full items-center mb-4"):
            ui.label("IoT Sensor Dashboard").classes("text-2xl font-bold")
            self.setup_legend()

        with ui.card().classes("w-full"):
            with ui.row().classes("w-full items-center gap-4"):
                self.device_select = ui.select(
                    [],
                    label="Device",
                    on_change=self.on_device_change,
                ).classes("w-64")
                self.limit_input = ui.number(
                    label="Limit",
                    value=state.limit,
                    min=MIN_LIMIT,
                    max=MAX_LIMIT,
                    step=1,
                    format="%d",
                    on_change=self.on_limit_change,
                ).classes("w-24")
                self.refresh_button = ui.button(
                    "Refresh Data", icon="refresh", on_click=self.controller.refresh
                )
                self.status_label = ui.label(state.status).classes(
                    "text-sm px-2 py-1 rounded"
                )
            self.error_label = ui.label().classes("text-red-700")

        with ui.card().classes("w-full"):
            self.title_label = ui.label("Device Data").classes("text-lg font-bold")
            self.grid_container = ui.column().classes("w-full h-full")

        self.unsubscribe = self.controller.subscribe(self.on_state)
        self.solution.client.on_disconnect(self.dispose)
        self.on_state(state)
        # Trigger load in background after UI setup
        ui.timer(0.1, self.reload_devices, once=True)

    async def reload_devices(self):
        """
        load the device list and the readings of the first device
        """
        try:
            await self.controller.list_devices()
        except Exception as ex:
            self.solution.handle_exception(ex)

    async def on_device_change(self, event):
        device = event.value or ""
        if device == self.controller.state.selected_device:
            return
        try:
            await self.controller.change_device(device)
        except Exception as ex:
            ui.notify(f"Error selecting {device}: {str(ex)}", type="negative")
            self.solution.handle_exception(ex)

    async def on_limit_change(self, event):
        limit = await self.controller.change_limit(event.value)
        if event.value != limit:
            self.limit_input.value = limit

    def status_color(self, state: DashboardState) -> str:
        if state.error:
            color = self.COLORS["error"]
        elif state.loading:
            color = self.COLORS["loading"]
        else:
            color = self.COLORS["idle"]
        return color

    def on_state(self, state: DashboardState):
        """
        render the given state snapshot
        """
        options = list(state.devices) if state.devices else {"": "No devices found"}
        self.device_select.set_options(options, value=state.selected_device or None)
        self.device_select.set_enabled(not state.loading)
        self.limit_input.set_enabled(not state.loading)
        self.refresh_button.set_text("Loading…" if state.loading else "Refresh Data")
        self.refresh_button.set_enabled(state.can_refresh)
        self.status_label.set_text(state.status)
        self.status_label.style(f"background: {self.status_color(state)}")
        self.error_label.set_text(state.error)
        self.error_label.set_visibility(bool(state.error))
        title = "Device Data"
        if state.selected_device:
            title = f"{title} – {state.selected_device}"
        self.title_label.set_text(title)
        if state.readings is not self.rendered_readings:
            self.render_grid(state)

    def render_grid(self, state: DashboardState):
        """
        Transform the readings to a list of dicts and render the AG Grid.
        """
        self.rendered_readings = state.readings
        self.grid_container.clear()
        if not state.readings:
            with self.grid_container:
                ui.label("No data loaded for this device.").classes("italic")
            self.grid = None
            return

        rows = [
            reading.as_row(index)
            for index, reading in enumerate(state.readings, start=1)
        ]
        pre_style = {"whiteSpace": "pre", "fontFamily": "monospace"}
        column_defs = [
            {"headerName": "#", "field": "#", "width": 60, "pinned": "left"},
            {"headerName": "Topic", "field": "topic", "filter": True, "width": 200},
            {
                "headerName": "Payload (JSON)",
                "field": "payload",
                "flex": 2,
                "autoHeight": True,
                "cellStyle": pre_style,
            },
            {
                "headerName": "Raw",
                "field": "raw",
                "flex": 1,
                "autoHeight": True,
                "cellStyle": pre_style,
            },
            {"headerName": "Timestamp", "field": "timestamp", "width": 180},
        ]

        grid_options = {
            "rowSelection": "single",
            "animateRows": True,
        }

        config = GridConfig(
            column_defs=column_defs,
            key_col="#",
            options=grid_options,
            auto_size_columns=True,
            theme="balham",
        )

        with self.grid_container:
            self.grid = ListOfDictsGrid(lod=rows, config=config)

    def dispose(self):
        """
        stop listening and refreshing once the client is gone
        """
        if self.unsubscribe:
            self.unsubscribe()
        self.controller.dispose()
