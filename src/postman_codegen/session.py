"""Collection session: the loaded requests plus the current selection.

Holds the only mutable state in the package. Requests are replaced wholesale
on every load and dropped on clear; generated snippets are memoized per
(request id, language id) since generation is pure.
"""

import logging

from postman_codegen.config import Settings
from postman_codegen.generator.registry import export_filename, generate_code, get_generator
from postman_codegen.parser.base import CanonicalRequest
from postman_codegen.parser.detect import detect_schema_version
from postman_codegen.parser.postman import load_collection, normalize

logger = logging.getLogger(__name__)


class CollectionSession:
    def __init__(self, settings: Settings | None = None):
        self.settings = settings or Settings()
        self.collection: dict | None = None
        self.requests: list[CanonicalRequest] = []
        self.selected_request: CanonicalRequest | None = None
        self.language = self.settings.default_language
        self._cache: dict[tuple[str, str], str] = {}

    @property
    def name(self) -> str:
        info = (self.collection or {}).get("info")
        return info.get("name", "") if isinstance(info, dict) else ""

    @property
    def schema_version(self) -> str | None:
        return detect_schema_version(self.collection)

    def load_text(self, text: str) -> list[CanonicalRequest]:
        """Decode and load collection JSON.

        Raises CollectionLoadError and leaves the current state untouched when
        the text is not a collection.
        """
        return self.load(load_collection(text))

    def load(self, collection: dict) -> list[CanonicalRequest]:
        requests = normalize(collection)
        self.collection = collection
        self.requests = requests
        self.selected_request = requests[0] if requests else None
        self._cache.clear()
        logger.debug("Loaded %d requests from collection %r", len(requests), self.name)
        return requests

    def select_request(self, request_id: str) -> CanonicalRequest | None:
        self.selected_request = next((r for r in self.requests if r.id == request_id), None)
        return self.selected_request

    def select_language(self, language_id: str) -> None:
        get_generator(language_id)  # raises UnknownLanguageError
        self.language = language_id

    def clear(self) -> None:
        self.collection = None
        self.requests = []
        self.selected_request = None
        self._cache.clear()

    def generated_code(self) -> str | None:
        """Snippet for the selected request and language, or None with no selection."""
        request = self.selected_request
        if request is None:
            return None
        key = (request.id, self.language)
        if key not in self._cache:
            self._cache[key] = generate_code(request, self.language)
        return self._cache[key]

    def export_filename(self) -> str | None:
        if self.selected_request is None:
            return None
        return export_filename(self.selected_request, self.language)
