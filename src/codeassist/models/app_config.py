"""Persisted configuration model for codeassist."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from codeassist.providers import (
    DEFAULT_PROVIDER,
    PROVIDERS,
    Provider,
    clamp_opacity,
    coerce_provider,
    sanitize_model_selection,
)

DEFAULT_MODEL = PROVIDERS[DEFAULT_PROVIDER].default_model
MODEL_FIELDS = ("extraction_model", "solution_model", "debugging_model")


class AppConfig(BaseModel):
    """Application configuration as stored in config.json.

    Fields serialize under camelCase aliases. Keys this model does not know
    about are kept so they survive a load/update/save cycle.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    api_key: str = Field(default="", alias="apiKey")
    api_provider: Provider = Field(default=DEFAULT_PROVIDER, alias="apiProvider")
    extraction_model: str = Field(default=DEFAULT_MODEL, alias="extractionModel")
    solution_model: str = Field(default=DEFAULT_MODEL, alias="solutionModel")
    debugging_model: str = Field(default=DEFAULT_MODEL, alias="debuggingModel")
    language: str | None = None
    opacity: float = 1.0

    @field_validator("api_provider", mode="before")
    @classmethod
    def _coerce_provider(cls, value: Any) -> Provider:
        return coerce_provider(value)

    @field_validator("opacity")
    @classmethod
    def _clamp_opacity(cls, value: float) -> float:
        return clamp_opacity(value)

    @model_validator(mode="after")
    def _sanitize_models(self) -> "AppConfig":
        # Every model must belong to the stored provider.
        for name in MODEL_FIELDS:
            setattr(self, name, sanitize_model_selection(getattr(self, name), self.api_provider))
        return self

    def to_json_dict(self) -> dict[str, Any]:
        """Return the on-disk representation."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def default_config() -> AppConfig:
    """Return a fresh copy of the default configuration."""
    return AppConfig()
