import os
from typing import Optional


DEFAULT_STORE_PATH = "opportunities.json"
DEFAULT_FETCH_TIMEOUT = 20.0
DEFAULT_USER_AGENT = "jobclip/1.0 (+https://github.com/jobclip/jobclip)"


class Settings:
    @staticmethod
    def env() -> str:
        return os.getenv("JOBCLIP_ENV", "production").lower()

    @staticmethod
    def is_dev() -> bool:
        return Settings.env() == "dev"

    @staticmethod
    def log_level() -> str:
        return os.getenv("JOBCLIP_LOG_LEVEL", "INFO").upper()

    @staticmethod
    def store_path() -> str:
        return os.getenv("JOBCLIP_STORE_PATH", DEFAULT_STORE_PATH)

    @staticmethod
    def fetch_timeout() -> float:
        raw = os.getenv("JOBCLIP_FETCH_TIMEOUT")
        if not raw:
            return DEFAULT_FETCH_TIMEOUT
        try:
            return max(1.0, float(raw))
        except ValueError:
            return DEFAULT_FETCH_TIMEOUT

    @staticmethod
    def user_agent(override: Optional[str] = None) -> str:
        return override or os.getenv("JOBCLIP_USER_AGENT", DEFAULT_USER_AGENT)

    @classmethod
    def get_status(cls) -> dict:
        return {
            "env": cls.env(),
            "log_level": cls.log_level(),
            "store_path": cls.store_path(),
            "fetch_timeout": cls.fetch_timeout(),
        }


def get_env_presence() -> dict:
    required_vars = [
        "JOBCLIP_ENV",
        "JOBCLIP_LOG_LEVEL",
        "JOBCLIP_STORE_PATH",
        "JOBCLIP_FETCH_TIMEOUT",
        "JOBCLIP_USER_AGENT",
    ]

    return {var: bool(os.getenv(var)) for var in required_vars}
