"""
Created on 2026-10-12

@author: wf
"""
import sys
from argparse import ArgumentParser

from ngwidgets.cmd import WebserverCmd

from iotdash.config import API_BASE_URL_ENV, DashboardConfig
from iotdash.webserver import IotDashboardWebserver


class IotDashboardCmd(WebserverCmd):
    """
    command line handling for the IoT sensor dashboard
    """

    def getArgParser(self, description: str, version_msg) -> ArgumentParser:
        """
        override the default argparser call
        """
        parser = super().getArgParser(description, version_msg)
        parser.add_argument(
            "--api_base_url",
            default=DashboardConfig.from_env().api_base_url,
            help=f"base URL of the device API [default: %(default)s from ${API_BASE_URL_ENV}]",
        )
        return parser


def main(argv: list = None):
    """
    main call
    """
    cmd = IotDashboardCmd(
        config=IotDashboardWebserver.get_config(),
        webserver_cls=IotDashboardWebserver,
    )
    exit_code = cmd.cmd_main(argv)
    return exit_code


DEBUG = 0
if __name__ == "__main__":
    if DEBUG:
        sys.argv.append("-d")
    sys.exit(main())
