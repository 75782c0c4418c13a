# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from typing import Any

_I = re.IGNORECASE

# Order matters: whole JWTs go first so the key=value rules never see half a token.
_RULES: tuple[tuple[str, str, int], ...] = (
    (r"\beyJ[\w-]+\.[\w-]+\.[\w-]+", "***JWT***", 0),
    (r"\$2[aby]?\$\d{2}\$[./A-Za-z0-9]{53}", "***BCRYPT***", 0),
    (r"((?:secret[_-]?key|jwt[_-]?secret)\s*[:=]\s*['\"]?)[\w-]{8,}", r"\1***REDACTED***", _I),
    (r"(bearer\s+)[\w.-]{20,}", r"\1***REDACTED***", _I),
    (r"((?:auth[_-]?)?token\s*[:=]\s*['\"]?)[\w.-]{20,}", r"\1***REDACTED***", _I),
    (r"((?:current_|new_)?password\s*[:=]\s*['\"]?)[^'\"\s]{6,}", r"\1***REDACTED***", _I),
    (r"((?:postgres(?:ql)?|mysql)(?:\+\w+)?://[^:/@]+:)[^@]+@", r"\1***REDACTED***@", 0),
    (r"[\w.%+-]+@([\w-]+(?:\.[\w-]+)*\.[a-zA-Z]{2,})", r"***@\1", 0),
    (r"((?:authorization|cookie|set-cookie)\s*:\s*['\"]?)[^'\"]{10,}", r"\1***REDACTED***", _I),
)

SENSITIVE_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = tuple(
    (re.compile(pattern, flags), replacement) for pattern, replacement, flags in _RULES
)


def sanitize_message(message: str) -> str:
    for pattern, replacement in SENSITIVE_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


def sanitize_record(record: dict[str, Any]) -> bool:
    """loguru filter: scrub the message in place and always keep the record."""

    if "message" in record:
        record["message"] = sanitize_message(record["message"])
    return True
