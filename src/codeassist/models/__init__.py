"""Model package for codeassist."""

from codeassist.models.app_config import MODEL_FIELDS, AppConfig, default_config
from codeassist.models.key_test_result import KeyTestResult

__all__ = [
    "AppConfig",
    "KeyTestResult",
    "MODEL_FIELDS",
    "default_config",
]
