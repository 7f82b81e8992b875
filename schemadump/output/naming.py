from __future__ import annotations

import re
import sys
from typing import Optional

from ..core.errors import UnsupportedPlatformError


def _host_module_suffix(platform: str) -> Optional[str]:
    if platform.startswith("linux"):
        return ".so"
    if platform in ("win32", "cygwin"):
        return ".dll"
    return None


# fixed for the lifetime of the interpreter
MODULE_SUFFIX = _host_module_suffix(sys.platform)

_WORD_SPLIT = re.compile(r"[\W_]+")


def format_module_name(module_name: str) -> str:
    """Strip the host's shared-library suffix from ``module_name``."""
    if MODULE_SUFFIX is None:
        raise UnsupportedPlatformError(f"unsupported platform: {sys.platform}")
    if not module_name.endswith(MODULE_SUFFIX):
        raise ValueError(f"module name {module_name!r} lacks {MODULE_SUFFIX!r} suffix")
    return module_name[: -len(MODULE_SUFFIX)]


def sanitize_name(name: str) -> str:
    return "".join(c if c.isalnum() else "_" for c in name)


def to_pascal_case(name: str) -> str:
    parts = [part for part in _WORD_SPLIT.split(name) if part]
    return "".join(part[0].upper() + part[1:] for part in parts)


def hex_literal(value: int) -> str:
    if value < 0:
        return f"-0x{-value:X}"
    return f"0x{value:X}"
