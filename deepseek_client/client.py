"""
DeepSeek API client
-------------------

`Client` is the transport core of the library: it turns one call
description (`RequestOptions`) into one HTTP exchange and returns either a
decoded value or raises exactly one `DeepSeekError` subclass.

Flow of `send_request`:
1) Encode the optional body to JSON. Failure raises `EncodeError` before
   any network activity.
2) Build the request: base URL + path, bearer credential, JSON content type
   and the configured user-agent. Failure raises `RequestBuildError`.
3) Send it with the shared `httpx.AsyncClient`, read the whole body and
   close the response in a `finally` block. Transport failures and an
   expired per-call `timeout` raise `ExecuteError`.
4) Status >= 400 raises `APIError` (or `DecodeErrorResponseError` when the
   error body is not decodable). Otherwise the body is decoded into
   `result_type` if one was given; failure raises `DecodeResponseError`.

The client holds no per-call state, so one instance can be shared by any
number of concurrent tasks.
"""

import asyncio
import json
import math
import time
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Optional, Tuple, Type, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from deepseek_client.config import CONTENT_TYPE_JSON, ClientConfig, resolve_config
from deepseek_client.errors import (
    APIError,
    DecodeErrorResponseError,
    DecodeResponseError,
    DeepSeekError,
    EncodeError,
    ExecuteError,
    RequestBuildError,
)
from deepseek_client.log import log_exchange, log_outgoing
from deepseek_client.metrics import observe_request
from deepseek_client.schemas.chat import ErrorResponse

T = TypeVar("T")


@dataclass(frozen=True)
class RequestOptions:
    method: str
    path: str
    body: Any = None


@lru_cache(maxsize=None)
def _adapter(result_type: Any) -> TypeAdapter:
    return TypeAdapter(result_type)


def _reject_non_finite(value: Any) -> None:
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"unsupported value: {value!r}")
    if isinstance(value, dict):
        for item in value.values():
            _reject_non_finite(item)
    elif isinstance(value, (list, tuple)):
        for item in value:
            _reject_non_finite(item)


def _encode_body(body: Any) -> Optional[bytes]:
    if body is None:
        return None
    try:
        if isinstance(body, BaseModel):
            # pydantic writes NaN/inf as null, so check before dumping
            _reject_non_finite(body.model_dump(exclude_none=True))
            # Unset optional fields are None and stay off the wire
            return body.model_dump_json(exclude_none=True).encode("utf-8")
        return json.dumps(body, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError, PydanticSerializationError) as exc:
        raise EncodeError(f"marshal request body failed: {exc}") from exc


class Client:
    """Async client for the DeepSeek API.

    Attributes:
        chat: the chat-completion endpoint service.
    """

    def __init__(self, config: ClientConfig) -> None:
        resolved = resolve_config(config)
        self._api_key = resolved.api_key
        self._base_url = resolved.base_url
        self._user_agent = resolved.user_agent
        self._timeout = resolved.timeout
        # Only a client we created ourselves is closed by `aclose()`
        self._owns_http_client = resolved.http_client is None
        self._http_client = resolved.http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(self._timeout)
        )

        # Import here to avoid a circular import at module load time
        from deepseek_client.services.chat import ChatService

        self.chat = ChatService(self)

    @classmethod
    def from_env(cls, **overrides) -> "Client":
        return cls(ClientConfig.from_env(**overrides))

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def user_agent(self) -> str:
        return self._user_agent

    @property
    def timeout(self) -> float:
        return self._timeout

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": CONTENT_TYPE_JSON,
            "User-Agent": self._user_agent,
        }

    def _build_request(self, options: RequestOptions, content: Optional[bytes]) -> httpx.Request:
        if not options.method or not options.path:
            raise RequestBuildError(
                "create request failed: method and path must not be empty"
            )
        try:
            return self._http_client.build_request(
                options.method,
                self._base_url + options.path,
                headers=self._headers(),
                content=content,
            )
        except (httpx.InvalidURL, ValueError, TypeError) as exc:
            raise RequestBuildError(f"create request failed: {exc}") from exc

    async def _execute(self, request: httpx.Request) -> Tuple[int, bytes]:
        response = await self._http_client.send(request, stream=True)
        try:
            content = await response.aread()
        finally:
            await response.aclose()
        return response.status_code, content

    async def send_request(
        self,
        options: RequestOptions,
        result_type: Optional[Type[T]] = None,
        *,
        timeout: Optional[float] = None,
    ) -> Optional[T]:
        """Perform one API call and decode its result.

        `timeout` is a deadline in seconds for the whole exchange; when it
        expires the call raises `ExecuteError`. Cancelling the awaiting task
        propagates `asyncio.CancelledError` once the response is closed.

        Returns the decoded `result_type` value, or None when no
        `result_type` was given.
        """
        start = time.perf_counter()
        status: Optional[int] = None
        outcome = "success"
        try:
            content = _encode_body(options.body)
            request = self._build_request(options, content)
            log_outgoing(
                options.method, str(request.url), len(content or b""), self._user_agent
            )

            try:
                status, body = await asyncio.wait_for(self._execute(request), timeout)
            except (httpx.HTTPError, asyncio.TimeoutError) as exc:
                raise ExecuteError(f"execute request failed: {exc!r}") from exc

            if status >= 400:
                try:
                    error_response = ErrorResponse.model_validate_json(body, strict=True)
                except ValidationError as exc:
                    raise DecodeErrorResponseError(status, str(exc)) from exc
                error_response.http_status_code = status
                raise APIError(error_response)

            if result_type is None:
                return None
            try:
                return _adapter(result_type).validate_json(body, strict=True)
            except ValidationError as exc:
                raise DecodeResponseError(f"decode response failed: {exc}") from exc
        except DeepSeekError as exc:
            outcome = exc.kind
            raise
        except asyncio.CancelledError:
            outcome = "cancelled"
            raise
        except Exception:
            outcome = "error"
            raise
        finally:
            duration = time.perf_counter() - start
            observe_request(options.method, options.path, outcome, duration)
            log_exchange(
                options.method,
                options.path,
                status,
                outcome,
                duration * 1000.0,
                self._user_agent,
            )

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http_client.aclose()

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
