"""Guess the programming language of a source file from its name or contents."""

import logging
import os
import re

log = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "python"
CONTENT_SAMPLE_LINES = 20

FILE_EXTENSIONS: dict[str, str] = {
    ".py": "python",
    ".js": "javascript",
    ".jsx": "javascript",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".java": "java",
    ".cpp": "cpp",
    ".cc": "cpp",
    ".cxx": "cpp",
    ".c": "cpp",
    ".cs": "csharp",
    ".go": "go",
    ".rs": "rust",
    ".php": "php",
    ".rb": "ruby",
    ".swift": "swift",
    ".kt": "kotlin",
    ".scala": "scala",
    ".r": "r",
    ".m": "matlab",
    ".pl": "perl",
    ".sh": "bash",
    ".ps1": "powershell",
}

# Checked in order; the first pattern that matches decides.
CONTENT_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"^#!", re.ASCII), "bash"),
    (re.compile(r"import\s+\w+\s*;", re.ASCII), "java"),
    (re.compile(r"from\s+\w+\s+import", re.ASCII), "python"),
    (re.compile(r"def\s+\w+\s*\(", re.ASCII), "python"),
    (re.compile(r"function\s+\w+\s*\(", re.ASCII), "javascript"),
    (re.compile(r"const\s+\w+\s*=", re.ASCII), "javascript"),
    (re.compile(r"let\s+\w+\s*=", re.ASCII), "javascript"),
    (re.compile(r"interface\s+\w+", re.ASCII), "typescript"),
    (re.compile(r"class\s+\w+\s*\{", re.ASCII), "java"),
    (re.compile(r"public\s+class\s+\w+", re.ASCII), "java"),
    (re.compile(r"#include\s*<", re.ASCII), "cpp"),
    (re.compile(r"using\s+namespace", re.ASCII), "cpp"),
    (re.compile(r"package\s+main", re.ASCII), "go"),
    (re.compile(r"func\s+\w+\s*\(", re.ASCII), "go"),
    (re.compile(r"fn\s+\w+\s*\(", re.ASCII), "rust"),
    (re.compile(r"use\s+std::", re.ASCII), "rust"),
]


def detect_from_filename(filename: str) -> str | None:
    """Return the language mapped to the file extension, if any."""
    ext = os.path.splitext(filename)[1].lower()
    return FILE_EXTENSIONS.get(ext)


def detect_from_content(content: str) -> str | None:
    """Return the language of the first pattern matching the head of content."""
    sample = "\n".join(content.split("\n")[:CONTENT_SAMPLE_LINES])
    for pattern, language in CONTENT_PATTERNS:
        if pattern.search(sample):
            return language
    return None


def detect_language(filename: str | None = None, content: str | None = None) -> str:
    """Detect a language: extension first, then content sniffing, then the default."""
    if filename:
        language = detect_from_filename(filename)
        if language:
            log.debug("detected %s from filename %s", language, filename)
            return language

    if content:
        language = detect_from_content(content)
        if language:
            log.debug("detected %s from content", language)
            return language

    log.debug("no language detected, using %s", DEFAULT_LANGUAGE)
    return DEFAULT_LANGUAGE
