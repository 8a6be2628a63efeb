"""Exceptions raised by postman-codegen."""


class CodegenError(Exception):
    """Base class for all postman-codegen errors."""


class CollectionLoadError(CodegenError, ValueError):
    """The input document is not valid JSON or not a Postman collection."""


class UnknownLanguageError(CodegenError, LookupError):
    """No generator is registered under the requested language id."""

    def __init__(self, language_id: str):
        self.language_id = language_id
        super().__init__(f"Unknown language: {language_id!r}")
