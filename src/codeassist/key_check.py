"""Check API keys against their providers."""

import logging
from collections.abc import Callable
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from openai import APIStatusError, OpenAI, OpenAIError

from codeassist.models import KeyTestResult
from codeassist.providers import PROVIDERS, Provider, infer_provider

log = logging.getLogger(__name__)

OPENROUTER_MODELS_URL = "https://openrouter.ai/api/v1/models"
GEMINI_MIN_KEY_LENGTH = 20

OPENAI_STATUS_MESSAGES = {
    401: "Invalid API key. Please check your OpenAI key and try again.",
    429: (
        "Rate limit exceeded. Your OpenAI API key has reached its request limit "
        "or has insufficient quota."
    ),
    500: "OpenAI server error. Please try again later.",
}
OPENROUTER_STATUS_MESSAGES = {
    401: "Invalid OpenRouter API key. Please check your key and try again.",
    429: "Rate limit exceeded. Your OpenRouter API key has reached its request limit.",
}


def check_openai_key(api_key: str) -> KeyTestResult:
    """List models with the key; any failure means the key is not usable."""
    try:
        client = OpenAI(api_key=api_key, max_retries=0)
        client.models.list()
        return KeyTestResult(valid=True)
    except APIStatusError as e:
        log.error("OpenAI API key test failed: %s", e)
        message = OPENAI_STATUS_MESSAGES.get(e.status_code, f"Error: {e.message}")
        return KeyTestResult(valid=False, error=message)
    except OpenAIError as e:
        log.error("OpenAI API key test failed: %s", e)
        return KeyTestResult(valid=False, error=f"Error: {e}")
    except ValueError as e:
        # Keys that cannot be sent as a header, e.g. trailing newline or non-ASCII.
        log.error("OpenAI API key test failed: %s", e)
        return KeyTestResult(valid=False, error=f"Error: {e}")


def check_gemini_key(api_key: str) -> KeyTestResult:
    """Format-only check; no request is sent to Gemini."""
    if api_key and len(api_key.strip()) >= GEMINI_MIN_KEY_LENGTH:
        return KeyTestResult(valid=True)
    return KeyTestResult(valid=False, error="Invalid Gemini API key format.")


def check_anthropic_key(api_key: str) -> KeyTestResult:
    """Format-only check; no request is sent to Anthropic."""
    if api_key and PROVIDERS[Provider.ANTHROPIC].accepts_key_format(api_key):
        return KeyTestResult(valid=True)
    return KeyTestResult(valid=False, error="Invalid Anthropic API key format.")


def check_openrouter_key(api_key: str) -> KeyTestResult:
    """Request the OpenRouter model list with the key as a bearer token."""
    request = Request(
        OPENROUTER_MODELS_URL,
        headers={
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        },
    )
    try:
        with urlopen(request):
            return KeyTestResult(valid=True)
    except HTTPError as e:
        log.error("OpenRouter API key test failed: %s", e)
        message = OPENROUTER_STATUS_MESSAGES.get(
            e.code, f"OpenRouter API error: {e.code} {e.reason}"
        )
        return KeyTestResult(valid=False, error=message)
    except (URLError, TimeoutError, OSError) as e:
        log.error("OpenRouter API key test failed: %s", e)
        reason = e.reason if isinstance(e, URLError) else e
        return KeyTestResult(valid=False, error=f"Error: {reason}")
    except ValueError as e:
        log.error("OpenRouter API key test failed: %s", e)
        return KeyTestResult(valid=False, error=f"Error: {e}")


KEY_CHECKERS: dict[Provider, Callable[[str], KeyTestResult]] = {
    Provider.OPENAI: check_openai_key,
    Provider.GEMINI: check_gemini_key,
    Provider.ANTHROPIC: check_anthropic_key,
    Provider.OPENROUTER: check_openrouter_key,
}


def check_api_key(api_key: str, provider: Provider | None = None) -> KeyTestResult:
    """Test an API key with its provider, inferring the provider from the key if needed."""
    if provider is None:
        provider = infer_provider(api_key)
        log.info("Auto-detected %s API key format for testing", PROVIDERS[provider].label)
    checker = KEY_CHECKERS.get(provider)
    if checker is None:
        return KeyTestResult(valid=False, error="Unknown API provider")
    return checker(api_key)
