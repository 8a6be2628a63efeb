import ast

import pytest

from postman_codegen.generator.registry import get_generator, list_languages
from postman_codegen.parser.base import (
    ApiKeyAuth,
    BasicAuth,
    BearerAuth,
    CanonicalRequest,
    FormDataBody,
    FormDataField,
    JsonBody,
    RawBody,
    UrlEncodedBody,
)
from postman_codegen.parser.postman import normalize

ALL_LANGUAGES = list_languages()

BODIES = [
    JsonBody(content={"name": "Alice", "tags": ["a", "b"], "age": 30, "admin": False, "meta": None}),
    JsonBody(content=[1, 2, {"nested": {"deep": True}}]),
    JsonBody(content="just a string"),
    UrlEncodedBody(content={"user": "alice", "pass": "s3cret"}),
    FormDataBody(content=[FormDataField(key="title", value="x"), FormDataField(key="f", value="/tmp/a.png", type="file")]),
    RawBody(content="line one\nline 'two' \"three\""),
]


def _request(**kwargs) -> CanonicalRequest:
    kwargs.setdefault("method", "POST")
    kwargs.setdefault("url", "https://api.example.com/users")
    kwargs.setdefault("name", "Create User")
    return CanonicalRequest(id="req-0", **kwargs)


class TestGeneratorContract:
    @pytest.mark.parametrize("language", ALL_LANGUAGES)
    def test_metadata(self, language):
        gen = get_generator(language)
        assert gen.file_extension()
        assert gen.display_name()
        assert gen.language_id == language

    @pytest.mark.parametrize("language", ALL_LANGUAGES)
    @pytest.mark.parametrize("body", BODIES, ids=lambda b: b.kind)
    def test_every_body_renders_deterministically(self, language, body):
        request = _request(body=body, headers={"X-Env": "prod"}, query_params={"a": "1"})
        gen = get_generator(language)
        first = gen.generate(request)
        assert first == gen.generate(request)
        assert "Create User" in first

    @pytest.mark.parametrize("language", ALL_LANGUAGES)
    @pytest.mark.parametrize("method", ["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"])
    def test_every_method_renders(self, language, method):
        code = get_generator(language).generate(_request(method=method))
        assert code


class TestSharedRenderingRules:
    @pytest.mark.parametrize("language", ALL_LANGUAGES)
    def test_query_params_never_dropped(self, language):
        code = get_generator(language).generate(_request(method="GET", query_params={"alpha": "one1", "beta": "two2"}))
        for token in ("alpha", "one1", "beta", "two2"):
            assert token in code

    @pytest.mark.parametrize("language", ALL_LANGUAGES)
    def test_bearer_overrides_authorization_header(self, language):
        request = _request(headers={"Authorization": "Basic xxx"}, auth=BearerAuth(token="T1"))
        code = get_generator(language).generate(request)
        assert "Bearer T1" in code
        assert "Basic xxx" not in code

    @pytest.mark.parametrize("language", ALL_LANGUAGES)
    def test_apikey_header_injected(self, language):
        request = _request(auth=ApiKeyAuth(key_name="X-Api-Key", key_value="k-123"))
        code = get_generator(language).generate(request)
        assert "X-Api-Key" in code
        assert "k-123" in code

    @pytest.mark.parametrize("language", ALL_LANGUAGES)
    def test_basic_auth_renders_nothing(self, language):
        request = _request(auth=BasicAuth(username="u-name", password="p-word"))
        code = get_generator(language).generate(request)
        assert "u-name" not in code
        assert "p-word" not in code

    @pytest.mark.parametrize("language", ALL_LANGUAGES)
    @pytest.mark.parametrize("method", ["GET", "HEAD"])
    def test_get_and_head_never_render_body(self, language, method):
        request = _request(method=method, body=JsonBody(content={"secret": "payload-marker"}))
        code = get_generator(language).generate(request)
        assert "payload-marker" not in code

    @pytest.mark.parametrize("language", ALL_LANGUAGES)
    def test_disabled_entries_never_rendered(self, language):
        collection = {
            "item": [{
                "name": "Search",
                "request": {
                    "method": "POST",
                    "header": [
                        {"key": "Accept", "value": "application/json"},
                        {"key": "X-Off-Header", "value": "off-header-value", "disabled": True},
                    ],
                    "url": {
                        "protocol": "https",
                        "host": ["api", "example", "com"],
                        "path": ["search"],
                        "query": [
                            {"key": "q", "value": "term"},
                            {"key": "offparam", "value": "off-query-value", "disabled": True},
                        ],
                    },
                    "body": {
                        "mode": "urlencoded",
                        "urlencoded": [
                            {"key": "kept", "value": "yes"},
                            {"key": "offfield", "value": "off-body-value", "disabled": True},
                        ],
                    },
                },
            }]
        }
        (request,) = normalize(collection)
        code = get_generator(language).generate(request)
        assert "term" in code
        for token in ("X-Off-Header", "off-header-value", "offparam", "off-query-value", "offfield", "off-body-value"):
            assert token not in code

    @pytest.mark.parametrize("language", ["php", "java", "csharp", "go", "kotlin", "swift", "dart", "ruby", "rust"])
    def test_explicit_json_content_type(self, language):
        code = get_generator(language).generate(_request(body=JsonBody(content={"a": 1})))
        assert "application/json" in code

    @pytest.mark.parametrize("language", ["javascript-fetch", "nodejs", "python", "curl"])
    def test_implicit_json_content_type(self, language):
        code = get_generator(language).generate(_request(body=JsonBody(content={"a": 1})))
        assert "Content-Type" not in code


class TestEscaping:
    def test_php_escapes_double_quotes(self):
        code = get_generator("php").generate(_request(body=JsonBody(content={"quote": 'He said "hi"'})))
        assert r'"quote" => "He said \"hi\""' in code
        assert 'He said "hi"' not in code

    def test_java_escapes_json_string(self):
        code = get_generator("java").generate(_request(body=JsonBody(content={"quote": 'He said "hi"'})))
        assert r'ofString("{\"quote\":\"He said \\\"hi\\\"\"}")' in code
        assert 'He said "hi"' not in code

    def test_csharp_escapes_double_quotes(self):
        request = _request(headers={"X-Note": 'He said "hi"'}, body=JsonBody(content={"quote": 'He said "hi"'}))
        code = get_generator("csharp").generate(request)
        assert r'TryAddWithoutValidation("X-Note", "He said \"hi\"")' in code
        assert r'["quote"] = "He said \"hi\""' in code
        assert 'He said "hi"' not in code

    def test_curl_escapes_single_quote(self):
        code = get_generator("curl").generate(_request(body=RawBody(content="it's")))
        assert "--data-raw 'it'\\''s'" in code

    def test_go_uses_interpreted_string_for_backquotes(self):
        code = get_generator("go").generate(_request(body=JsonBody(content={"cmd": "`ls`"})))
        assert r'strings.NewReader("{\"cmd\":\"`ls`\"}")' in code


class TestQueryEncodingAsymmetry:
    # only the fetch snippet percent-encodes query params
    def test_fetch_percent_encodes(self):
        code = get_generator("javascript-fetch").generate(_request(method="GET", query_params={"q": "a b&c"}))
        assert "?q=a%20b%26c" in code

    def test_curl_does_not_encode(self):
        code = get_generator("curl").generate(_request(method="GET", query_params={"q": "a b&c"}))
        assert "?q=a b&c" in code


class TestCurl:
    def test_end_to_end_post(self):
        request = _request(
            headers={"X-Env": "prod"},
            body=JsonBody(content={"name": "Alice"}),
            auth=BearerAuth(token="abc123"),
        )
        code = get_generator("curl").generate(request)
        assert "curl -X POST 'https://api.example.com/users'" in code
        assert "-H 'X-Env: prod'" in code
        assert "-H 'Authorization: Bearer abc123'" in code
        assert """-d '{"name":"Alice"}'""" in code

    def test_formdata_uses_form_flags(self):
        body = FormDataBody(content=[FormDataField(key="f", value="/tmp/a.png", type="file")])
        code = get_generator("curl").generate(_request(body=body))
        assert "-F 'f=@/tmp/a.png'" in code


class TestPython:
    @pytest.mark.parametrize("body", BODIES, ids=lambda b: b.kind)
    def test_output_is_valid_python(self, body):
        request = _request(
            name='Weird "name"\nwith newline',
            headers={"X-Quote": "it's \"q\""},
            query_params={"a": "1"},
            body=body,
            auth=BearerAuth(token="T"),
        )
        ast.parse(get_generator("python").generate(request))

    def test_uses_native_params_and_json(self):
        request = _request(query_params={"a": "1"}, body=JsonBody(content={"ok": True, "none": None}))
        code = get_generator("python").generate(request)
        assert 'url = "https://api.example.com/users"' in code
        assert "params=params" in code
        assert "json=payload" in code
        assert '"ok": True' in code
        assert '"none": None' in code
        assert "requests.post(" in code


class TestNativeQueryTargets:
    @pytest.mark.parametrize("language", ["nodejs", "python", "dart", "rust", "ruby"])
    def test_bare_url_without_query_string(self, language):
        code = get_generator(language).generate(_request(method="GET", query_params={"a": "1"}))
        assert "users?a=1" not in code


class TestOtherTargets:
    def test_java_patch_uses_generic_method(self):
        code = get_generator("java").generate(_request(method="PATCH", body=RawBody(content="x")))
        assert '.method("PATCH", HttpRequest.BodyPublishers.ofString("x"))' in code

    def test_go_imports_match_body(self):
        code = get_generator("go").generate(_request(method="GET"))
        assert '"strings"' not in code
        code = get_generator("go").generate(_request(body=UrlEncodedBody(content={"a": "1"})))
        assert '"net/url"' in code
        assert 'form.Set("a", "1")' in code

    def test_ruby_splits_base_uri(self):
        code = get_generator("ruby").generate(_request(method="GET"))
        assert "base_uri 'https://api.example.com'" in code
        assert "response = get('/users', options)" in code

    def test_rust_query_tuples(self):
        code = get_generator("rust").generate(_request(method="GET", query_params={"a": "1"}))
        assert '("a", "1"),' in code
        assert ".query(&params)" in code

    def test_fetch_formdata(self):
        body = FormDataBody(content=[FormDataField(key="title", value="x")])
        code = get_generator("javascript-fetch").generate(_request(body=body))
        assert "formData.append('title', 'x');" in code
        assert "body: formData" in code
