"""Canonical request model shared by the normalizer and the code generators.

The Postman parser converts every collection item into a CanonicalRequest;
generators only ever read these models, they never build or mutate them.
"""

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, JsonValue

RAW_CONTENT_TYPES = {
    "json": "application/json",
    "xml": "application/xml",
    "html": "text/html",
    "javascript": "application/javascript",
    "text": "text/plain",
}


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class FormDataField(_Frozen):
    """A single multipart entry; `type` is "text" or "file"."""

    key: str
    value: str = ""
    type: str = "text"


class JsonBody(_Frozen):
    kind: Literal["json"] = "json"
    content: JsonValue

    @property
    def content_type(self) -> str:
        return "application/json"


class UrlEncodedBody(_Frozen):
    kind: Literal["urlencoded"] = "urlencoded"
    content: dict[str, str] = {}

    @property
    def content_type(self) -> str:
        return "application/x-www-form-urlencoded"


class FormDataBody(_Frozen):
    kind: Literal["formdata"] = "formdata"
    content: list[FormDataField] = []

    @property
    def content_type(self) -> str:
        return "multipart/form-data"


class RawBody(_Frozen):
    kind: Literal["raw"] = "raw"
    content: str = ""
    language: str | None = None  # Postman's options.raw.language hint

    @property
    def content_type(self) -> str:
        return RAW_CONTENT_TYPES.get(self.language or "", "text/plain")


Body = Annotated[
    JsonBody | UrlEncodedBody | FormDataBody | RawBody,
    Field(discriminator="kind"),
]


class BearerAuth(_Frozen):
    kind: Literal["bearer"] = "bearer"
    token: str = Field(min_length=1)


class BasicAuth(_Frozen):
    kind: Literal["basic"] = "basic"
    username: str | None = None
    password: str | None = None


class ApiKeyAuth(_Frozen):
    kind: Literal["apikey"] = "apikey"
    key_name: str = ""
    key_value: str = ""
    placement: Literal["header", "query"] = "header"


Auth = Annotated[
    BearerAuth | BasicAuth | ApiKeyAuth,
    Field(discriminator="kind"),
]


class CanonicalRequest(_Frozen):
    """One API call, independent of the collection format it came from."""

    id: str
    name: str
    method: HttpMethod = HttpMethod.GET
    url: str = ""
    headers: dict[str, str] = {}
    query_params: dict[str, str] = {}
    body: Body | None = None
    auth: Auth | None = None
    description: str | None = None
