"""
Runtime configuration, read from the environment.

    CASCADE_HOST       bind address           (default 0.0.0.0)
    CASCADE_PORT       bind port              (default 5000)
    CASCADE_DEBUG      Flask debug mode       (default false)
    CASCADE_LOG_LEVEL  root logging level     (default INFO)

A .env file in the working directory is loaded first, if present.
"""

import os
from typing import Mapping, Optional

from dotenv import load_dotenv


class Settings:

    def __init__(self, host: str = "0.0.0.0", port: int = 5000,
                 debug: bool = False, log_level: str = "INFO"):
        if not 0 < port < 65536:
            raise ValueError(f"Port out of range: {port}")
        self.host      = host
        self.port      = port
        self.debug     = debug
        self.log_level = log_level.upper()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        if environ is None:
            load_dotenv()
            environ = os.environ
        port = environ.get("CASCADE_PORT", "5000")
        try:
            port = int(port)
        except ValueError:
            raise ValueError(f"CASCADE_PORT must be an integer, got {port!r}")
        return cls(
            host      = environ.get("CASCADE_HOST", "0.0.0.0"),
            port      = port,
            debug     = environ.get("CASCADE_DEBUG", "false").lower() == "true",
            log_level = environ.get("CASCADE_LOG_LEVEL", "INFO"),
        )

    def __repr__(self):
        return (f"Settings(host={self.host!r}, port={self.port}, "
                f"debug={self.debug}, log_level={self.log_level!r})")
