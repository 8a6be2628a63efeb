import pytest

from postman_codegen.errors import UnknownLanguageError
from postman_codegen.generator.registry import (
    DEFAULT_LANGUAGES,
    FALLBACK_TEXT,
    REGISTRY,
    display_name,
    export_filename,
    file_extension,
    generate_code,
    get_generator,
    list_languages,
)
from postman_codegen.parser.base import CanonicalRequest


def _request(name: str = "Get User") -> CanonicalRequest:
    return CanonicalRequest(id="req-0", name=name, url="https://api.example.com/users/1")


class TestRegistryLookup:
    def test_registration_order(self):
        assert list_languages() == [
            "javascript-fetch", "nodejs", "python", "curl", "php", "java", "csharp", "go",
            "rust", "kotlin", "swift", "dart", "ruby",
        ]

    def test_default_languages_are_registered(self):
        assert set(DEFAULT_LANGUAGES) <= set(REGISTRY)

    def test_unknown_language(self):
        curl = get_generator("curl")
        with pytest.raises(UnknownLanguageError) as exc_info:
            get_generator("cobol")
        assert exc_info.value.language_id == "cobol"
        assert "cobol" in str(exc_info.value)
        assert isinstance(exc_info.value, LookupError)
        assert get_generator("curl") is curl

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            REGISTRY["cobol"] = get_generator("curl")

    def test_display_names_and_extensions(self):
        assert display_name("javascript-fetch") == "JavaScript (Fetch)"
        assert display_name("go") == "Go (net/http)"
        assert file_extension("curl") == "sh"
        assert file_extension("csharp") == "cs"


class TestGenerateCode:
    def test_renders_known_language(self):
        assert generate_code(_request(), "curl").startswith("# Get User\ncurl -X GET")

    def test_unknown_language_falls_back(self):
        assert generate_code(_request(), "cobol") == FALLBACK_TEXT

    def test_generator_failure_falls_back(self, monkeypatch):
        gen = get_generator("python")

        def boom(*args, **kwargs):
            raise RecursionError("too deep")

        monkeypatch.setattr(gen, "render", boom)
        assert generate_code(_request(), "python") == FALLBACK_TEXT
        monkeypatch.undo()
        assert generate_code(_request(), "python") != FALLBACK_TEXT


class TestExportFilename:
    def test_whitespace_collapsed_and_lowercased(self):
        assert export_filename(_request("Get  User\tBy Id"), "python") == "get-user-by-id.py"

    def test_unknown_language_raises(self):
        with pytest.raises(UnknownLanguageError):
            export_filename(_request(), "cobol")
