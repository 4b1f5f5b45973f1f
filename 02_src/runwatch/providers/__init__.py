"""Provider availability module."""

from .registry import (
    IProviderDetector,
    IProviderRegistry,
    ProviderDetector,
    ProviderRegistry,
    builtin_detectors,
    env_var_set,
    executable_on_path,
    file_exists,
)

__all__ = [
    "IProviderDetector",
    "IProviderRegistry",
    "ProviderDetector",
    "ProviderRegistry",
    "builtin_detectors",
    "env_var_set",
    "executable_on_path",
    "file_exists",
]
