"""AI provider metadata: allowed models, default model, and API key format rules."""

import logging
import re
from dataclasses import dataclass
from enum import Enum

log = logging.getLogger(__name__)

MIN_OPACITY = 0.1
MAX_OPACITY = 1.0


class Provider(str, Enum):
    """Supported AI API vendors."""

    OPENAI = "openai"
    GEMINI = "gemini"
    ANTHROPIC = "anthropic"
    OPENROUTER = "openrouter"

    def __str__(self) -> str:
        return self.value


DEFAULT_PROVIDER = Provider.GEMINI


@dataclass(frozen=True)
class ProviderInfo:
    """Everything the config layer needs to know about one provider."""

    label: str
    models: tuple[str, ...]
    default_model: str
    key_pattern: re.Pattern[str] | None = None
    min_key_length: int = 0

    def accepts_key_format(self, api_key: str) -> bool:
        key = api_key.strip()
        if self.key_pattern is not None:
            return self.key_pattern.fullmatch(key) is not None
        return len(key) >= self.min_key_length


PROVIDERS: dict[Provider, ProviderInfo] = {
    Provider.OPENAI: ProviderInfo(
        label="OpenAI",
        models=("gpt-4o", "gpt-4o-mini"),
        default_model="gpt-4o",
        key_pattern=re.compile(r"sk-[a-zA-Z0-9]{32,}"),
    ),
    Provider.GEMINI: ProviderInfo(
        label="Gemini",
        models=(
            "gemini-2.5-pro-preview-05-06",
            "gemini-2.5-flash-preview-05-20",
            "gemini-2.0-flash",
            "gemini-2.0-flash-lite",
        ),
        default_model="gemini-2.5-flash-preview-05-20",
        min_key_length=10,
    ),
    Provider.ANTHROPIC: ProviderInfo(
        label="Anthropic",
        models=(
            "claude-3-5-sonnet-20241022",
            "claude-3-5-haiku-20241022",
            "claude-3-opus-20240229",
        ),
        default_model="claude-3-5-sonnet-20241022",
        key_pattern=re.compile(r"sk-ant-[a-zA-Z0-9]{32,}"),
    ),
    Provider.OPENROUTER: ProviderInfo(
        label="OpenRouter",
        models=(
            "openai/gpt-4o",
            "openai/gpt-4o-mini",
            "anthropic/claude-3.5-sonnet",
            "anthropic/claude-3.5-haiku",
            "google/gemini-2.0-flash-exp",
            "meta-llama/llama-3.1-405b-instruct",
            "meta-llama/llama-3.1-70b-instruct",
            "mistralai/mistral-large-2407",
            "cohere/command-r-plus",
        ),
        default_model="openai/gpt-4o",
        key_pattern=re.compile(r"sk-or-[a-zA-Z0-9]{32,}"),
    ),
}


def parse_provider(value: object) -> Provider | None:
    """Return the Provider named by value, or None if it names none."""
    if isinstance(value, Provider):
        return value
    try:
        return Provider(value)
    except (ValueError, TypeError):
        return None


def coerce_provider(value: object) -> Provider:
    """Return the Provider named by value, falling back to the default provider."""
    provider = parse_provider(value)
    if provider is None:
        log.warning("Invalid API provider %r. Using default provider: %s", value, DEFAULT_PROVIDER)
        return DEFAULT_PROVIDER
    return provider


def infer_provider(api_key: str) -> Provider:
    """Guess the provider from an API key prefix."""
    key = api_key.strip()
    if key.startswith("sk-ant-"):
        return Provider.ANTHROPIC
    if key.startswith("sk-or-"):
        return Provider.OPENROUTER
    if key.startswith("sk-"):
        return Provider.OPENAI
    return Provider.GEMINI


def sanitize_model_selection(model: str, provider: Provider | str) -> str:
    """Return model if the provider allows it, otherwise the provider's default model."""
    info = PROVIDERS[coerce_provider(provider)]
    if model not in info.models:
        log.warning(
            "Invalid %s model specified: %s. Using default model: %s",
            info.label,
            model,
            info.default_model,
        )
        return info.default_model
    return model


def is_valid_api_key_format(api_key: str, provider: Provider | str | None = None) -> bool:
    """Check an API key against the provider's format rule without any network I/O."""
    if provider is None:
        resolved = infer_provider(api_key)
    else:
        resolved = parse_provider(provider)
        if resolved is None:
            return False
    return PROVIDERS[resolved].accepts_key_format(api_key)


def clamp_opacity(value: float) -> float:
    """Clamp a window opacity to the supported range."""
    return min(MAX_OPACITY, max(MIN_OPACITY, value))
