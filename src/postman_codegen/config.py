"""Settings loaded from an optional YAML file and the environment."""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from postman_codegen.errors import CodegenError
from postman_codegen.generator.registry import DEFAULT_LANGUAGES, REGISTRY

CONFIG_ENV = "POSTMAN_CODEGEN_CONFIG"
LANGUAGE_ENV = "POSTMAN_CODEGEN_LANGUAGE"


class Settings(BaseModel):
    default_language: str = "javascript-fetch"
    languages: list[str] = list(DEFAULT_LANGUAGES)  # ids shown by the selector
    output_dir: Path | None = None

    @field_validator("default_language")
    @classmethod
    def _known_language(cls, value: str) -> str:
        if value not in REGISTRY:
            raise ValueError(f"unknown language {value!r}")
        return value

    @field_validator("languages")
    @classmethod
    def _known_languages(cls, value: list[str]) -> list[str]:
        unknown = [v for v in value if v not in REGISTRY]
        if unknown:
            raise ValueError(f"unknown languages: {', '.join(unknown)}")
        return value


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from `path` (or $POSTMAN_CODEGEN_CONFIG), then apply env overrides.

    A missing file yields the defaults.
    """
    if path is None and os.getenv(CONFIG_ENV):
        path = Path(os.environ[CONFIG_ENV])

    data: dict = {}
    if path is not None and path.exists():
        try:
            loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise CodegenError(f"Invalid config file {path}: {e}") from e
        if loaded is not None and not isinstance(loaded, dict):
            raise CodegenError(f"Invalid config file {path}: expected a mapping")
        data = loaded or {}

    language = os.getenv(LANGUAGE_ENV, "").strip()
    if language:
        data["default_language"] = language

    try:
        return Settings(**data)
    except ValidationError as e:
        raise CodegenError(f"Invalid settings: {e}") from e
