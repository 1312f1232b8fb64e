"""Persistent configuration store for codeassist."""

import json
import logging
import os
import time
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from codeassist.key_check import check_api_key
from codeassist.language import detect_language
from codeassist.models import MODEL_FIELDS, AppConfig, KeyTestResult, default_config
from codeassist.providers import (
    PROVIDERS,
    Provider,
    clamp_opacity,
    coerce_provider,
    infer_provider,
    is_valid_api_key_format,
    parse_provider,
    sanitize_model_selection,
)

log = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".codeassist"
CONFIG_DIR_ENV = "CODEASSIST_CONFIG_DIR"
CONFIG_FILE_NAME = "config.json"

ConfigListener = Callable[[AppConfig], None]

# Fields whose changes do not require AI clients to be rebuilt.
COSMETIC_FIELDS = frozenset({"opacity"})


def default_user_data_dir() -> Path:
    """Return the per-user directory holding config.json."""
    override = os.environ.get(CONFIG_DIR_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return CONFIG_DIR


UserDataDir = Callable[[], str | os.PathLike[str] | None]


def resolve_config_path(user_data_dir: UserDataDir | None) -> Path:
    """Place config.json in the host's user data directory, or the cwd if it has none."""
    if user_data_dir is not None:
        try:
            directory = user_data_dir()
        except Exception as e:
            log.warning("Could not access user data path (%s), using fallback", e)
        else:
            if directory:
                return Path(directory) / CONFIG_FILE_NAME
            log.warning("No user data path available, using fallback")
    return Path.cwd() / CONFIG_FILE_NAME


def _normalize_keys(updates: Mapping[str, Any]) -> dict[str, Any]:
    """Map camelCase aliases onto field names."""
    aliases = {field.alias: name for name, field in AppConfig.model_fields.items() if field.alias}
    return {aliases.get(key, key): value for key, value in updates.items()}


def _validate_stored(data: dict[str, Any]) -> AppConfig:
    """Merge stored values over the defaults, resetting each invalid field to its default."""
    defaults = default_config().to_json_dict()
    merged = {**defaults, **data}
    try:
        return AppConfig.model_validate(merged)
    except ValidationError as e:
        for error in e.errors():
            key = error["loc"][0] if error["loc"] else None
            if key not in merged:
                continue
            log.warning("Invalid %s in config (%s). Using default", key, error["msg"])
            if key in defaults:
                merged[key] = defaults[key]
            else:
                del merged[key]
    return AppConfig.model_validate(merged)


class ConfigStore:
    """Owns config.json: load, validate, update, and notify subscribers of changes."""

    def __init__(
        self,
        config_path: str | os.PathLike[str] | None = None,
        user_data_dir: UserDataDir | None = None,
    ) -> None:
        if config_path is not None:
            self.config_path = Path(config_path)
        else:
            self.config_path = resolve_config_path(user_data_dir)
        log.debug("config path: %s", self.config_path)
        self._listeners: list[ConfigListener] = []
        self._ensure_config_exists()

    def _ensure_config_exists(self) -> None:
        if not self.config_path.exists():
            self.save_config(default_config())

    # -- persistence ---------------------------------------------------------

    def load_config(self) -> AppConfig:
        """Return the stored configuration merged over the defaults."""
        if not self.config_path.exists():
            config = default_config()
            self.save_config(config)
            return config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError(f"expected a JSON object, got {type(data).__name__}")
            return _validate_stored(data)
        except (OSError, ValueError, ValidationError) as e:
            log.error("Error loading config from %s: %s", self.config_path, e)
            return default_config()

    def save_config(self, config: AppConfig) -> None:
        """Write config as pretty-printed JSON; failures are logged, not raised."""
        try:
            self.config_path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
            temp_file = self.config_path.with_name(
                f".{self.config_path.name}.{os.getpid()}.{time.time_ns()}.tmp"
            )
            fd = os.open(temp_file, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(config.to_json_dict(), f, indent=2)
            os.replace(temp_file, self.config_path)
        except OSError as e:
            log.error("Error saving config to %s: %s", self.config_path, e)

    def update_config(self, updates: Mapping[str, Any]) -> AppConfig:
        """Apply a partial update, persist it, and notify subscribers.

        A new API key without an explicit provider selects the provider its
        prefix implies. Changing provider resets every model to that
        provider's default. Subscribers are not notified when opacity is the
        only field that changed.
        """
        try:
            current = self.load_config()
            changes = _normalize_keys(updates)

            if changes.get("api_key") and not changes.get("api_provider"):
                inferred = infer_provider(changes["api_key"])
                log.info("Auto-detected %s API key format", PROVIDERS[inferred].label)
                changes["api_provider"] = inferred

            if changes.get("api_provider"):
                provider = coerce_provider(changes["api_provider"])
                changes["api_provider"] = provider
            else:
                provider = current.api_provider

            if provider != current.api_provider:
                default_model = PROVIDERS[provider].default_model
                for name in MODEL_FIELDS:
                    changes[name] = default_model

            for name in MODEL_FIELDS:
                if changes.get(name):
                    changes[name] = sanitize_model_selection(changes[name], provider)

            updated = AppConfig.model_validate({**current.model_dump(), **changes})
            self.save_config(updated)
        except Exception:
            log.exception("Error updating config")
            return default_config()

        before = current.model_dump()
        changed = {
            name for name, value in updated.model_dump().items() if before.get(name) != value
        }
        if changed - COSMETIC_FIELDS:
            self._notify(updated)
        else:
            log.debug("config-updated suppressed, changed fields: %s", sorted(changed))
        return updated

    # -- change notification -------------------------------------------------

    def subscribe(self, listener: ConfigListener) -> Callable[[], None]:
        """Call listener with the new config after every non-cosmetic update.

        Returns a function that removes the subscription.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, config: AppConfig) -> None:
        log.debug("config-updated: notifying %d listener(s)", len(self._listeners))
        for listener in list(self._listeners):
            try:
                listener(config)
            except Exception:
                log.exception("config-updated listener %r failed", listener)

    # -- accessors -----------------------------------------------------------

    def sanitize_model_selection(self, model: str, provider: Provider | str) -> str:
        """Return model if the provider allows it, else the provider default."""
        return sanitize_model_selection(model, provider)

    def has_api_key(self) -> bool:
        """Return whether a non-blank API key is stored."""
        return bool(self.load_config().api_key.strip())

    def is_valid_api_key_format(self, api_key: str, provider: Provider | str | None = None) -> bool:
        """Check the key format for provider, inferred from the key when omitted."""
        return is_valid_api_key_format(api_key, provider)

    def get_opacity(self) -> float:
        """Return the stored window opacity."""
        return self.load_config().opacity

    def set_opacity(self, opacity: float) -> None:
        """Store a window opacity clamped to 0.1-1.0."""
        self.update_config({"opacity": clamp_opacity(opacity)})

    def get_language(self, filename: str | None = None, content: str | None = None) -> str:
        """Return the stored language preference, or detect one from the file."""
        config = self.load_config()
        if config.language:
            return config.language
        return detect_language(filename, content)

    def set_language(self, language: str | None = None) -> None:
        """Store a language preference; None reverts to auto-detection."""
        self.update_config({"language": language})

    def detect_language(self, filename: str | None = None, content: str | None = None) -> str:
        """Detect a language from the file, ignoring any stored preference."""
        return detect_language(filename, content)

    def get_available_models(self, provider: Provider | str) -> list[str]:
        """Return the models allowed for provider, or an empty list if unknown."""
        resolved = parse_provider(provider)
        if resolved is None:
            return []
        return list(PROVIDERS[resolved].models)

    def get_available_providers(self) -> list[Provider]:
        """Return every supported provider."""
        return list(Provider)

    def test_api_key(self, api_key: str, provider: Provider | str | None = None) -> KeyTestResult:
        """Check an API key with its provider; never raises."""
        if provider is not None:
            resolved = parse_provider(provider)
            if resolved is None:
                return KeyTestResult(valid=False, error="Unknown API provider")
            return check_api_key(api_key, resolved)
        return check_api_key(api_key)
