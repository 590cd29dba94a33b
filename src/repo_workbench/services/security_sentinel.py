"""Security sentinel — redacts secrets before file content is sent to the LLM.

Files being committed or explained may contain live credentials.  Matches
are replaced with ``[REDACTED]``; over-redaction is acceptable.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_SECRET_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    ("AWS_KEY", re.compile(r"AKIA[0-9A-Z]{16}")),
    ("GITHUB_TOKEN", re.compile(r"(?:gh[pousr]_[A-Za-z0-9_]{36,}|github_pat_[A-Za-z0-9_]{22,})")),
    ("OPENAI_KEY", re.compile(r"sk-(?:proj-)?[A-Za-z0-9_\-]{20,}")),
    (
        "ASSIGNMENT",
        re.compile(
            r"(?:api[_\-]?key|secret[_\-]?key|access[_\-]?token|auth[_\-]?token|password|passwd)"
            r"""\s*[:=]\s*['"]?[^\s'"]{8,}['"]?""",
            re.IGNORECASE,
        ),
    ),
    ("PRIVATE_KEY", re.compile(r"-----BEGIN (?:RSA |EC |DSA |OPENSSH )?PRIVATE KEY-----")),
    ("JWT", re.compile(r"eyJ[A-Za-z0-9_-]{10,}\.[A-Za-z0-9_-]{10,}\.[A-Za-z0-9_-]{10,}")),
    ("CONN_STRING", re.compile(r"(?:postgres|mysql|mongodb|redis)(?:\+\w+)?://\S{10,}", re.IGNORECASE)),
]

_REDACTION = "[REDACTED]"


@dataclass(frozen=True, slots=True)
class Redaction:
    text: str
    count: int
    labels: tuple[str, ...] = ()


def redact(text: str) -> Redaction:
    """Replace every secret-looking match in *text* and report what was hit."""
    count = 0
    labels: list[str] = []
    for label, pattern in _SECRET_PATTERNS:
        text, hits = pattern.subn(_REDACTION, text)
        if hits:
            count += hits
            labels.append(label)
    return Redaction(text=text, count=count, labels=tuple(labels))
