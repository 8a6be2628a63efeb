"""Detect Postman collection documents and their schema version."""

SCHEMA_VERSIONS = {
    "v2.0.0": "v2.0",
    "v2.1.0": "v2.1",
}


def is_postman_collection(data) -> bool:
    """A collection is a JSON object with an `item` list."""
    return isinstance(data, dict) and isinstance(data.get("item"), list)


def detect_schema_version(data) -> str | None:
    """Return 'v2.0' or 'v2.1' from the collection's info.schema URL.

    Returns None when the document does not declare a known schema.
    """
    if not isinstance(data, dict):
        return None
    info = data.get("info")
    if not isinstance(info, dict):
        return None
    schema = info.get("schema")
    if not isinstance(schema, str):
        return None
    for marker, version in SCHEMA_VERSIONS.items():
        if f"/{marker}/" in schema:
            return version
    return None
