"""
Created on 2026-10-12

@author: wf
"""
import os
from dataclasses import dataclass

API_BASE_URL_ENV = "IOT_API_BASE_URL"
DEFAULT_API_BASE_URL = "http://localhost:3000"


@dataclass
class DashboardConfig:
    """
    configuration of a device dashboard
    """

    api_base_url: str = DEFAULT_API_BASE_URL
    # seconds between silent refreshes of the selected device
    refresh_interval: float = 10.0
    default_limit: int = 50

    @classmethod
    def from_env(cls, **kwargs) -> "DashboardConfig":
        """
        create a configuration taking the API base URL from the environment
        """
        api_base_url = os.environ.get(API_BASE_URL_ENV) or DEFAULT_API_BASE_URL
        kwargs.setdefault("api_base_url", api_base_url)
        config = cls(**kwargs)
        return config
