"""codeassist: configuration store and language detection for the coding assistant."""

__version__ = "0.1.0"
