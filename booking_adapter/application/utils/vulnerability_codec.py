"""Vulnerability set <-> provider code string.

Encoding is strict and canonical (ascending, de-duplicated codes). Decoding is
lenient: the provider is the only source of malformed strings, so unknown or
garbled tokens are dropped instead of failing the whole payload.
"""

from __future__ import annotations

import logging
from typing import Iterable

from booking_adapter.domain.entities.vulnerability import Vulnerability

logger = logging.getLogger(__name__)

# Provider code 5 (electrical medical equipment) has no canonical counterpart.
PROVIDER_CODES: dict[Vulnerability, int] = {
    Vulnerability.HEARING: 1,
    Vulnerability.SIGHT: 2,
    Vulnerability.PENSIONABLE_AGE: 3,
    Vulnerability.LEARNING_DIFFICULTIES: 4,
    Vulnerability.FOREIGN_LANGUAGE_ONLY: 6,
    Vulnerability.PHYSICAL_OR_RESTRICTED_MOVEMENT: 7,
    Vulnerability.ILLNESS: 8,
    Vulnerability.OTHER: 9,
    Vulnerability.UNKNOWN: 9,
}

FROM_PROVIDER_CODE: dict[int, Vulnerability] = {
    1: Vulnerability.HEARING,
    2: Vulnerability.SIGHT,
    3: Vulnerability.PENSIONABLE_AGE,
    4: Vulnerability.LEARNING_DIFFICULTIES,
    6: Vulnerability.FOREIGN_LANGUAGE_ONLY,
    7: Vulnerability.PHYSICAL_OR_RESTRICTED_MOVEMENT,
    8: Vulnerability.ILLNESS,
    9: Vulnerability.OTHER,
}


def encode_vulnerabilities(vulnerabilities: Iterable[Vulnerability]) -> str:
    codes = sorted({PROVIDER_CODES[Vulnerability(v)] for v in vulnerabilities})
    return ",".join(str(code) for code in codes)


def decode_vulnerabilities_lenient(value: str | None) -> frozenset[Vulnerability]:
    decoded: set[Vulnerability] = set()
    for token in (value or "").split(","):
        token = token.strip()
        if not token:
            continue
        try:
            code = int(token)
        except ValueError:
            logger.debug("Dropping malformed vulnerability code", extra={"error": token})
            continue
        vulnerability = FROM_PROVIDER_CODE.get(code)
        if vulnerability is None:
            logger.debug("Dropping unknown vulnerability code", extra={"error": token})
            continue
        decoded.add(vulnerability)
    return frozenset(decoded)
