from typing import Optional

from deepseek_client.client import Client, RequestOptions
from deepseek_client.config import CHAT_COMPLETIONS_PATH
from deepseek_client.schemas.chat import ChatCompletionRequest, ChatCompletionResponse


class ChatService:
    """Chat-completion endpoint.

    Every call is an independent exchange: the library keeps no
    conversation state, so the full message history goes in each request.
    """

    def __init__(self, client: Client) -> None:
        self._client = client

    async def create_completion(
        self,
        request: ChatCompletionRequest,
        *,
        timeout: Optional[float] = None,
    ) -> ChatCompletionResponse:
        """POST the request to `/chat/completions` and return the decoded reply.

        Errors raised by the transport core propagate unchanged.
        """
        return await self._client.send_request(
            RequestOptions(method="POST", path=CHAT_COMPLETIONS_PATH, body=request),
            ChatCompletionResponse,
            timeout=timeout,
        )
