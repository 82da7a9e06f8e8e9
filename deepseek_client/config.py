"""
Client configuration
--------------------

`ClientConfig` is the construction-time configuration of a `Client`. It is
a frozen pydantic model: once a client is built from it nothing changes.

Defaults are applied by `resolve_config`, a pure function run exactly once
by `Client.__init__` before any request is sent:

- `base_url` defaults to the public DeepSeek endpoint. A trailing slash is
  stripped since request paths always start with one.
- `user_agent` defaults to a fixed library identifier.
- `timeout` (seconds) defaults to 30 and is only used when the client has to
  create its own `httpx.AsyncClient`. An injected `http_client` keeps its own
  timeout settings and stays owned by the caller.

`ClientConfig.from_env()` builds a configuration from `DEEPSEEK_*`
environment variables for applications that configure through the
environment.
"""

import os
from typing import Optional

import httpx
from pydantic import BaseModel, ConfigDict

DEFAULT_BASE_URL = "https://api.deepseek.com/v1"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_USER_AGENT = "deepseek-python/1.0"
CONTENT_TYPE_JSON = "application/json"

CHAT_COMPLETIONS_PATH = "/chat/completions"


class ClientConfig(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    api_key: str
    base_url: Optional[str] = None
    user_agent: Optional[str] = None
    timeout: Optional[float] = None
    http_client: Optional[httpx.AsyncClient] = None

    @classmethod
    def from_env(cls, **overrides) -> "ClientConfig":
        """Read configuration from the environment.

        Unset variables are left as None so `resolve_config` applies the
        defaults. Keyword overrides win over the environment.
        """
        timeout: Optional[float] = None
        raw_timeout = os.getenv("DEEPSEEK_TIMEOUT_SECONDS")
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                timeout = None
        values = {
            "api_key": os.getenv("DEEPSEEK_API_KEY", ""),
            "base_url": os.getenv("DEEPSEEK_BASE_URL") or None,
            "user_agent": os.getenv("DEEPSEEK_USER_AGENT") or None,
            "timeout": timeout,
        }
        values.update(overrides)
        return cls(**values)


def resolve_config(config: ClientConfig) -> ClientConfig:
    """Return a copy of `config` with every default applied."""
    if not config.api_key or not config.api_key.strip():
        raise ValueError("DEEPSEEK_API_KEY is required to create a Client.")
    base_url = (config.base_url or DEFAULT_BASE_URL).rstrip("/")
    return config.model_copy(
        update={
            "base_url": base_url,
            "user_agent": config.user_agent or DEFAULT_USER_AGENT,
            "timeout": config.timeout if config.timeout is not None else DEFAULT_TIMEOUT_SECONDS,
        }
    )
