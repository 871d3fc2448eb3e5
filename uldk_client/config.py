"""
Configuration for the ULDK client, read from the environment (and .env).
"""
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from uldk_client.models import InitialSelection

load_dotenv()

DEFAULT_BASE_URL = "https://uldk.gugik.gov.pl/"
DEFAULT_TIMEOUT = 15.0


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_code(name: str) -> Optional[str]:
    value = os.getenv(name)
    return value.strip() if value and value.strip() else None


class Settings(BaseModel):
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    demo_mode: bool = False
    log_level: str = "INFO"
    initial: InitialSelection = InitialSelection()

    @classmethod
    def from_env(cls) -> "Settings":
        base_url = os.getenv("ULDK_BASE_URL", DEFAULT_BASE_URL)
        if not base_url.endswith("/"):
            base_url += "/"

        return cls(
            base_url=base_url,
            timeout=float(os.getenv("ULDK_TIMEOUT", str(DEFAULT_TIMEOUT))),
            demo_mode=_env_flag("ULDK_DEMO_MODE"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            initial=InitialSelection(
                voivodeship=_env_code("ULDK_VOIVODESHIP"),
                district=_env_code("ULDK_DISTRICT"),
                tenant=_env_code("ULDK_TENANT"),
            ),
        )
