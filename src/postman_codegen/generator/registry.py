"""Generator registry: language id -> generator instance.

Built once at import time and never mutated afterwards.
"""

import logging
import re
from types import MappingProxyType

from postman_codegen.errors import UnknownLanguageError
from postman_codegen.generator.base import CodeGenerator
from postman_codegen.generator.csharp import CSharpHttpClientGenerator
from postman_codegen.generator.curl import CurlGenerator
from postman_codegen.generator.dart import DartDioGenerator
from postman_codegen.generator.go import GoHttpGenerator
from postman_codegen.generator.java import JavaHttpClientGenerator
from postman_codegen.generator.javascript import JavaScriptFetchGenerator
from postman_codegen.generator.kotlin import KotlinOkHttpGenerator
from postman_codegen.generator.nodejs import NodeAxiosGenerator
from postman_codegen.generator.php import PhpCurlGenerator
from postman_codegen.generator.python import PythonRequestsGenerator
from postman_codegen.generator.ruby import RubyHTTPartyGenerator
from postman_codegen.generator.rust import RustReqwestGenerator
from postman_codegen.generator.swift import SwiftURLSessionGenerator
from postman_codegen.parser.base import CanonicalRequest

logger = logging.getLogger(__name__)

FALLBACK_TEXT = "// Error generating code"

_GENERATORS: tuple[CodeGenerator, ...] = (
    JavaScriptFetchGenerator(),
    NodeAxiosGenerator(),
    PythonRequestsGenerator(),
    CurlGenerator(),
    PhpCurlGenerator(),
    JavaHttpClientGenerator(),
    CSharpHttpClientGenerator(),
    GoHttpGenerator(),
    RustReqwestGenerator(),
    KotlinOkHttpGenerator(),
    SwiftURLSessionGenerator(),
    DartDioGenerator(),
    RubyHTTPartyGenerator(),
)

REGISTRY = MappingProxyType({gen.language_id: gen for gen in _GENERATORS})

# ids offered by the default language selector
DEFAULT_LANGUAGES = ("javascript-fetch", "nodejs", "python", "curl", "php", "java", "csharp", "go")


def get_generator(language_id: str) -> CodeGenerator:
    """Return the generator for `language_id` or raise UnknownLanguageError."""
    try:
        return REGISTRY[language_id]
    except KeyError:
        raise UnknownLanguageError(language_id) from None


def list_languages() -> list[str]:
    """All registered language ids, in registration order."""
    return list(REGISTRY)


def file_extension(language_id: str) -> str:
    return get_generator(language_id).file_extension()


def display_name(language_id: str) -> str:
    return get_generator(language_id).display_name()


def generate_code(request: CanonicalRequest, language_id: str) -> str:
    """Render `request` for `language_id`, never raising.

    An unknown language or a failing generator yields FALLBACK_TEXT so a
    single bad render cannot take the caller down.
    """
    try:
        generator = get_generator(language_id)
    except UnknownLanguageError:
        logger.error("No generator registered for %r", language_id)
        return FALLBACK_TEXT
    try:
        return generator.generate(request)
    except Exception:
        logger.exception("Code generation failed for request %s (%s)", request.id, language_id)
        return FALLBACK_TEXT


def export_filename(request: CanonicalRequest, language_id: str) -> str:
    """`<name, whitespace runs to hyphens, lowercased>.<extension>`."""
    stem = re.sub(r"\s+", "-", request.name).lower()
    return f"{stem}.{file_extension(language_id)}"
