"""
Smoke run configuration
"""

import os

from pathlib import Path
from typing import Dict, Optional

import aiohttp

DEFAULT_SERVICE_BASE_URL = "http://localhost:4000"
DEFAULT_OLLAMA_BASE_URL = "http://localhost:11434"
DEFAULT_CHAT_MODEL = "llama3.2:1b"
DEFAULT_EMBED_MODEL = "nomic-embed-text"


def _join(base: Optional[str], path: str) -> str:
    # Unset bases interpolate as empty strings, like ${OLLAMA_BASE_URL} in a shell
    return f"{(base or '').rstrip('/')}{path}"


def _parse_timeout(value: Optional[str]) -> Optional[float]:
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"SMOKE_TIMEOUT must be a number of seconds, got {value!r}") from None

class SmokeConfig:
    """Targets and request settings for a smoke run"""
    def __init__(self,
                 service_base_url: str = DEFAULT_SERVICE_BASE_URL,
                 ollama_base_url: Optional[str] = None,
                 token: Optional[str] = None,
                 timeout: Optional[float] = None,
                 chat_model: str = DEFAULT_CHAT_MODEL,
                 embed_model: str = DEFAULT_EMBED_MODEL,
                 log_dir: Path = Path("logs")):
        self.service_base_url = service_base_url
        self.ollama_base_url = ollama_base_url
        self.token = token
        self.timeout = timeout
        self.chat_model = chat_model
        self.embed_model = embed_model
        self.log_dir = Path(log_dir)

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "SmokeConfig":
        env = os.environ if environ is None else environ

        timeout = env.get("SMOKE_TIMEOUT")
        return cls(
            service_base_url=env.get("SERVICE_BASE_URL") or DEFAULT_SERVICE_BASE_URL,
            ollama_base_url=env.get("OLLAMA_BASE_URL"),
            token=env.get("TOKEN") or None,
            timeout=_parse_timeout(timeout),
            chat_model=env.get("OLLAMA_CHAT_MODEL") or DEFAULT_CHAT_MODEL,
            embed_model=env.get("OLLAMA_EMBED_MODEL") or DEFAULT_EMBED_MODEL,
            log_dir=Path(env.get("SMOKE_LOG_DIR") or "logs"),
        )

    def with_overrides(self, **overrides) -> "SmokeConfig":
        """Copy of this config with every non-None override applied"""
        values = dict(vars(self))
        values.update({key: value for key, value in overrides.items() if value is not None})
        return SmokeConfig(**values)

    def service_url(self, path: str) -> str:
        return _join(self.service_base_url, path)

    def ollama_url(self, path: str, fallback: Optional[str] = None) -> str:
        return _join(self.ollama_base_url or fallback, path)

    def auth_headers(self) -> Dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def client_timeout(self) -> aiohttp.ClientTimeout:
        # Unset means no limits, not aiohttp's default total and connect timeouts
        if self.timeout is None:
            return aiohttp.ClientTimeout(total=None, sock_connect=None)
        return aiohttp.ClientTimeout(total=self.timeout)


_smoke_config = None


def get_smoke_config() -> SmokeConfig:
    global _smoke_config
    if _smoke_config is None:
        _smoke_config = SmokeConfig.from_env()
    return _smoke_config
