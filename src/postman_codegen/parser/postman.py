"""Postman Collection v2.0 / v2.1 parser.

Normalizes collection items into CanonicalRequest models. Item-level
problems never abort a collection: every extractor degrades to an empty or
absent value, and an item that still fails is replaced by a bare GET.
"""

import json
import logging
import math
from pathlib import Path
from urllib.parse import parse_qsl, urlsplit, urlunsplit

from pydantic import ValidationError

from postman_codegen.errors import CollectionLoadError
from postman_codegen.parser.base import (
    ApiKeyAuth,
    BasicAuth,
    BearerAuth,
    CanonicalRequest,
    FormDataBody,
    FormDataField,
    HttpMethod,
    JsonBody,
    RawBody,
    UrlEncodedBody,
)
from postman_codegen.parser.detect import is_postman_collection

logger = logging.getLogger(__name__)

DEFAULT_PROTOCOL = "https"
DEFAULT_HOST = "api.example.com"


def parse_postman(file_path: Path) -> list[CanonicalRequest]:
    """Parse a Postman collection file into a list of CanonicalRequest."""
    text = file_path.read_text(encoding="utf-8")
    return normalize(load_collection(text))


def load_collection(text: str) -> dict:
    """Decode collection JSON, rejecting documents that are not collections."""
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, ValueError) as e:
        raise CollectionLoadError(f"Invalid JSON: {e}") from e
    if not is_postman_collection(data):
        raise CollectionLoadError("Document is not a Postman collection (missing 'item' list)")
    return data


def normalize(collection: dict) -> list[CanonicalRequest]:
    """Convert a decoded collection into canonical requests, in document order."""
    if not isinstance(collection, dict):
        return []
    items: list[dict] = []
    _collect_items(collection.get("item"), items)
    return [_normalize_item(item, f"req-{index}") for index, item in enumerate(items)]


def _collect_items(items, out: list[dict]) -> None:
    """Recursively flatten folders into request items."""
    if not isinstance(items, list):
        return
    for item in items:
        if not isinstance(item, dict):
            continue
        if isinstance(item.get("item"), list):
            _collect_items(item["item"], out)
        else:
            out.append(item)


def _normalize_item(item: dict, request_id: str) -> CanonicalRequest:
    name = _text(item.get("name"))
    try:
        return _parse_request(item, request_id, name)
    except (TypeError, AttributeError, ValueError, RecursionError, ValidationError) as e:
        logger.warning("Could not normalize item %s (%r), using an empty request: %s", request_id, name, e)
        return CanonicalRequest(id=request_id, name=name)


def _parse_request(item: dict, request_id: str, name: str) -> CanonicalRequest:
    req = item.get("request") or {}
    if isinstance(req, str):
        # v2 allows a bare URL string as the whole request
        req = {"url": req}

    url, query_params = _parse_url(req.get("url"))
    auth = _parse_auth(req.get("auth"))

    return CanonicalRequest(
        id=request_id,
        name=name,
        method=_parse_method(req.get("method")),
        url=url,
        headers=_parse_headers(req.get("header")),
        query_params=query_params,
        body=_parse_body(req.get("body")),
        auth=auth,
        description=_parse_description(req.get("description")),
    )


def _parse_method(method) -> HttpMethod:
    value = _text(method).upper() or "GET"
    try:
        return HttpMethod(value)
    except ValueError:
        logger.debug("Unsupported method %r, falling back to GET", method)
        return HttpMethod.GET


# -- url ----------------------------------------------------------------------


def _parse_url(url) -> tuple[str, dict[str, str]]:
    if isinstance(url, str):
        return _parse_url_string(url)
    if isinstance(url, dict):
        return _build_structured_url(url), _parse_query(url.get("query"))
    return "", {}


def _parse_url_string(raw: str) -> tuple[str, dict[str, str]]:
    try:
        parts = urlsplit(raw)
    except ValueError:
        return raw, {}
    if not parts.scheme or not parts.netloc:
        # unresolvable (e.g. "{{baseUrl}}/users"): keep it verbatim
        return raw, {}
    params = dict(parse_qsl(parts.query, keep_blank_values=True))
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", "")), params


def _build_structured_url(url: dict) -> str:
    protocol = _text(url.get("protocol")) or DEFAULT_PROTOCOL
    host = url.get("host")
    if isinstance(host, list):
        host = ".".join(_segment(h) for h in host)
    host = _text(host) or DEFAULT_HOST
    if url.get("port"):
        host = f"{host}:{_text(url['port'])}"
    path = url.get("path")
    if isinstance(path, list):
        path = "/".join(_segment(p) for p in path)
    path = _text(path).lstrip("/")
    return f"{protocol}://{host}/{path}"


def _segment(segment) -> str:
    """Host/path segments are strings in v2.0 and may be {value: ...} in v2.1."""
    if isinstance(segment, dict):
        return _text(segment.get("value"))
    return _text(segment)


def _parse_query(query) -> dict[str, str]:
    params: dict[str, str] = {}
    for entry in _enabled(query):
        if entry.get("key") is None:
            continue
        params[_text(entry["key"])] = _text(entry.get("value"))
    return params


# -- headers ------------------------------------------------------------------


def _parse_headers(headers) -> dict[str, str]:
    if isinstance(headers, str):
        return _parse_header_string(headers)
    result: dict[str, str] = {}
    for h in _enabled(headers):
        key = _text(h.get("key"))
        if key:
            result[key] = _text(h.get("value"))
    return result


def _parse_header_string(headers: str) -> dict[str, str]:
    result: dict[str, str] = {}
    for line in headers.splitlines():
        key, sep, value = line.partition(":")
        if sep and key.strip():
            result[key.strip()] = value.strip()
    return result


# -- body ---------------------------------------------------------------------


def _parse_body(body):
    if not isinstance(body, dict):
        return None

    mode = body.get("mode")
    if mode == "raw":
        return _parse_raw_body(body)
    if mode == "urlencoded":
        return UrlEncodedBody(content={
            _text(entry.get("key")): _text(entry.get("value"))
            for entry in _enabled(body.get("urlencoded"))
        })
    if mode == "formdata":
        return FormDataBody(content=[_form_field(entry) for entry in _enabled(body.get("formdata"))])
    return RawBody(content=_text(body.get("raw")))


def _parse_raw_body(body: dict) -> JsonBody | RawBody:
    raw = _text(body.get("raw"))
    language = None
    options = body.get("options")
    if isinstance(options, dict) and isinstance(options.get("raw"), dict):
        language = options["raw"].get("language")
        language = _text(language) or None

    if raw.strip():
        try:
            return JsonBody(content=json.loads(raw, parse_constant=_reject_constant, parse_float=_finite_float))
        except (ValueError, RecursionError):
            if language == "json":
                logger.debug("Raw body is marked as JSON but does not parse, keeping text")
    return RawBody(content=raw, language=language)


def _reject_constant(name: str):
    raise ValueError(f"non-standard JSON constant {name}")


def _finite_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise ValueError(f"number out of range: {text}")
    return value


def _form_field(entry: dict) -> FormDataField:
    field_type = _text(entry.get("type")) or "text"
    if field_type == "file":
        value = entry.get("src")
        if isinstance(value, list):
            value = value[0] if value else ""
    else:
        value = entry.get("value")
    return FormDataField(key=_text(entry.get("key")), value=_text(value), type=field_type)


# -- auth ---------------------------------------------------------------------


def _parse_auth(auth):
    if not isinstance(auth, dict):
        return None
    auth_type = auth.get("type")
    attrs = auth.get(auth_type) if isinstance(auth_type, str) else None

    if auth_type == "bearer":
        token = _auth_attr(attrs, "token")
        return BearerAuth(token=token) if token else None
    if auth_type == "basic":
        return BasicAuth(
            username=_auth_attr(attrs, "username"),
            password=_auth_attr(attrs, "password"),
        )
    if auth_type == "apikey":
        placement = "query" if _auth_attr(attrs, "in") == "query" else "header"
        return ApiKeyAuth(
            key_name=_auth_attr(attrs, "key") or "",
            key_value=_auth_attr(attrs, "value") or "",
            placement=placement,
        )
    return None


def _auth_attr(attrs, key: str) -> str | None:
    """Look up an auth attribute in either the v2.1 list or the v2.0 mapping shape."""
    if isinstance(attrs, dict):
        return _text(attrs[key]) if key in attrs else None
    if isinstance(attrs, list):
        for entry in attrs:
            if isinstance(entry, dict) and entry.get("key") == key:
                return _text(entry.get("value"))
    return None


# -- helpers ------------------------------------------------------------------


def _parse_description(description) -> str | None:
    if isinstance(description, dict):
        description = description.get("content")
    return _text(description) or None


def _enabled(entries) -> list[dict]:
    if not isinstance(entries, list):
        return []
    return [e for e in entries if isinstance(e, dict) and not e.get("disabled")]


def _text(value) -> str:
    """Coerce a loosely-typed Postman field to a string."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value)
