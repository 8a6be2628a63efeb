"""Request assembly and the common code generator contract.

Every generator renders from an AssembledRequest: the canonical request with
auth and implied headers already overlaid and the body dropped for methods
that cannot carry one. Only the final literal syntax differs per language.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from urllib.parse import quote

from postman_codegen.generator.literals import compact_json
from postman_codegen.parser.base import (
    ApiKeyAuth,
    BearerAuth,
    CanonicalRequest,
    FormDataBody,
    JsonBody,
    RawBody,
    UrlEncodedBody,
)

BODYLESS_METHODS = {"GET", "HEAD"}

# characters encodeURIComponent leaves alone besides alphanumerics and "-_.~"
_URI_COMPONENT_SAFE = "!*'()"


@dataclass
class AssembledRequest:
    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    query_params: dict[str, str] = field(default_factory=dict)
    body: JsonBody | UrlEncodedBody | FormDataBody | RawBody | None = None

    def full_url(self, encode: bool = False) -> str:
        """Return the URL with query params appended as `?k=v&...`."""
        if not self.query_params:
            return self.url
        if encode:
            pairs = [
                f"{quote(k, safe=_URI_COMPONENT_SAFE)}={quote(v, safe=_URI_COMPONENT_SAFE)}"
                for k, v in self.query_params.items()
            ]
        else:
            pairs = [f"{k}={v}" for k, v in self.query_params.items()]
        sep = "&" if "?" in self.url else "?"
        return self.url + sep + "&".join(pairs)

    @property
    def body_kind(self) -> str | None:
        return self.body.kind if self.body is not None else None

    @property
    def body_text(self) -> str:
        """The body as a single string, for targets without a richer construct."""
        body = self.body
        if body is None:
            return ""
        if isinstance(body, JsonBody):
            return compact_json(body.content)
        if isinstance(body, UrlEncodedBody):
            return "&".join(f"{k}={v}" for k, v in body.content.items())
        if isinstance(body, FormDataBody):
            return "&".join(f"{f.key}={f.value}" for f in body.content)
        if isinstance(body, RawBody):
            return body.content
        return str(getattr(body, "content", ""))

    def header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        for key, value in self.headers.items():
            if key.lower() == name.lower():
                return value
        return None


def assemble(
    request: CanonicalRequest,
    implicit_json_content_type: bool = False,
    urlencoded_content_type: bool = False,
) -> AssembledRequest:
    """Overlay auth and implied headers onto a copy of the request's fields.

    `implicit_json_content_type` is set by generators whose HTTP library adds
    `Content-Type: application/json` itself; those skip the explicit header.
    """
    method = request.method.value
    headers = dict(request.headers)
    query_params = dict(request.query_params)
    body = None if method in BODYLESS_METHODS else request.body

    auth = request.auth
    if isinstance(auth, BearerAuth):
        _overlay(headers, "Authorization", f"Bearer {auth.token}")
    elif isinstance(auth, ApiKeyAuth) and auth.key_name:
        if auth.placement == "query":
            query_params[auth.key_name] = auth.key_value
        else:
            _overlay(headers, auth.key_name, auth.key_value)
    # basic auth is not rendered by any generator

    if isinstance(body, JsonBody) and not implicit_json_content_type:
        _overlay(headers, "Content-Type", body.content_type)
    elif isinstance(body, UrlEncodedBody) and urlencoded_content_type:
        _overlay(headers, "Content-Type", body.content_type)

    return AssembledRequest(
        method=method,
        url=request.url,
        headers=headers,
        query_params=query_params,
        body=body,
    )


def _overlay(headers: dict[str, str], name: str, value: str) -> None:
    if name in headers:
        headers[name] = value
        return
    for key in [k for k in headers if k.lower() == name.lower()]:
        del headers[key]
    headers[name] = value


class CodeGenerator(ABC):
    """Renders a CanonicalRequest as a source-code snippet for one target."""

    language_id: str = ""
    label: str = ""
    extension: str = ""
    implicit_json_content_type: bool = False
    urlencoded_content_type: bool = False

    def generate(self, request: CanonicalRequest) -> str:
        assembled = assemble(
            request,
            implicit_json_content_type=self.implicit_json_content_type,
            urlencoded_content_type=self.urlencoded_content_type,
        )
        return self.render(assembled, request)

    @abstractmethod
    def render(self, req: AssembledRequest, request: CanonicalRequest) -> str:
        """Render the assembled request; `request` supplies name and metadata."""

    def file_extension(self) -> str:
        return self.extension

    def display_name(self) -> str:
        return self.label

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.language_id!r}>"
