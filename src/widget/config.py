"""
Counter endpoint configuration
Environment variables (or the project .env) override defaults.
"""
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional
from pathlib import Path
from urllib.parse import parse_qs, urlencode, urlparse

from dotenv import load_dotenv

# Load env vars from project root
env_path = Path(__file__).parent.parent.parent / '.env'
load_dotenv(dotenv_path=env_path)

PRODUCTION = "production"
LOCAL = "local"

DEFAULT_FUNCTION_URL = "https://getresumecountercmc.azurewebsites.net/api/GetResumeCounter"
DEFAULT_LOCAL_URL = "http://localhost:7071/api/GetResumeCounter"
DEFAULT_ELEMENT_ID = "counter"
# Seconds the page host waits for the count before serving the page without it
DEFAULT_RENDER_WAIT = 5.0


def with_function_key(url: str, key: Optional[str]) -> str:
    """Append the function key as the `code` query parameter unless already present."""
    if not key:
        return url
    if "code" in parse_qs(urlparse(url).query):
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{urlencode({'code': key})}"


@dataclass(frozen=True)
class CounterSettings:
    """计数器配置"""
    environment: str = PRODUCTION
    function_url: str = DEFAULT_FUNCTION_URL
    local_url: str = DEFAULT_LOCAL_URL
    element_id: str = DEFAULT_ELEMENT_ID
    render_wait: float = DEFAULT_RENDER_WAIT

    def __post_init__(self):
        if self.render_wait <= 0:
            raise ValueError(f"COUNTER_RENDER_WAIT must be positive, got {self.render_wait}")
        if self.environment not in (PRODUCTION, LOCAL):
            raise ValueError(
                f"COUNTER_ENV must be '{PRODUCTION}' or '{LOCAL}', got '{self.environment}'"
            )

    @property
    def endpoint_url(self) -> str:
        """当前环境使用的接口地址"""
        if self.environment == LOCAL:
            return self.local_url
        return self.function_url

    @classmethod
    def from_env(cls) -> "CounterSettings":
        function_url = with_function_key(
            os.getenv("COUNTER_FUNCTION_URL", DEFAULT_FUNCTION_URL),
            os.getenv("COUNTER_FUNCTION_KEY"),
        )
        return cls(
            environment=os.getenv("COUNTER_ENV", PRODUCTION).strip().lower(),
            function_url=function_url,
            local_url=os.getenv("COUNTER_LOCAL_URL", DEFAULT_LOCAL_URL),
            element_id=os.getenv("COUNTER_ELEMENT_ID", DEFAULT_ELEMENT_ID),
            render_wait=float(os.getenv("COUNTER_RENDER_WAIT", DEFAULT_RENDER_WAIT)),
        )


@lru_cache(maxsize=1)
def get_settings() -> CounterSettings:
    """Settings are resolved once, at startup."""
    return CounterSettings.from_env()
