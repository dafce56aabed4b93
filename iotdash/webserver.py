"""
Webserver definition
"""
import logging

from ngwidgets.input_webserver import InputWebserver, InputWebSolution, WebserverConfig
from nicegui import Client

from iotdash.config import DashboardConfig
from iotdash.device_dashboard import DeviceDashboard
from iotdash.version import Version


class IotDashboardWebserver(InputWebserver):
    """
    The main webserver class
    """

    @classmethod
    def get_config(cls) -> WebserverConfig:
        config = WebserverConfig(
            short_name="iotdash",
            timeout=6.0,
            copy_right="(c) 2026 Wolfgang Fahl",
            version=Version(),
            default_port=9010,
        )
        server_config = WebserverConfig.get(config)
        server_config.solution_class = IotDashboardSolution
        return server_config

    def __init__(self):
        super().__init__(config=IotDashboardWebserver.get_config())
        self.dashboard_config = DashboardConfig.from_env()

    def configure_run(self):
        """
        configure me
        """
        super().configure_run()
        logging.basicConfig(
            level=logging.DEBUG if self.args.debug else logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        self.dashboard_config = DashboardConfig.from_env(
            api_base_url=self.args.api_base_url
        )


class IotDashboardSolution(InputWebSolution):
    """
    Handling specific page requests for a client session.
    """

    def __init__(self, webserver, client: Client):
        super().__init__(webserver, client)
        self.device_dashboard = None

    def setup_menu(self, detailed: bool = True):
        """
        Configure the navigation menu
        """
        super().setup_menu(detailed=detailed)

        with self.header:
            self.link_button("Devices", "/", "sensors")
            self.link_button(
                "API",
                self.webserver.dashboard_config.api_base_url,
                "api",
                new_tab=True,
            )

    async def home(self):
        """
        The main page content
        """

        def show():
            self.device_dashboard = DeviceDashboard(
                self, config=self.webserver.dashboard_config
            )
            self.device_dashboard.setup_ui()

        await self.setup_content_div(show)
