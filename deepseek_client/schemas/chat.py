from pydantic import AfterValidator, BaseModel, BeforeValidator, Field
from typing import Annotated, List, Optional


def _null_as_empty(value):
    return "" if value is None else value


# JSON null leaves a string at its zero value
NullableStr = Annotated[str, BeforeValidator(_null_as_empty)]


class Message(BaseModel):
    role: NullableStr
    content: NullableStr


class ChatCompletionRequest(BaseModel):
    messages: List[Message]
    model: str
    # Optional sampling parameters; None means "not sent"
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    max_tokens: Optional[int] = None
    stream: Optional[bool] = None
    presence_penalty: Optional[float] = None
    frequency_penalty: Optional[float] = None


# Response shapes default every field so that a body missing keys still
# decodes to zero values instead of failing.
class Choice(BaseModel):
    index: int = 0
    message: Message = Field(default_factory=lambda: Message(role="", content=""))
    finish_reason: NullableStr = ""


class Usage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class ChatCompletionResponse(BaseModel):
    id: str = ""
    object: str = ""
    created: int = 0
    model: str = ""
    choices: List[Choice] = Field(default_factory=list)
    usage: Usage = Field(default_factory=Usage)


class APIErrorDetail(BaseModel):
    message: NullableStr = ""
    code: NullableStr = ""


def _null_as_empty_detail(value):
    return APIErrorDetail() if value is None else value


class ErrorResponse(BaseModel):
    # Captured from the transport, never part of the JSON body
    http_status_code: int = Field(default=0, exclude=True)
    error: Annotated[
        Optional[APIErrorDetail], AfterValidator(_null_as_empty_detail)
    ] = Field(default_factory=APIErrorDetail)
