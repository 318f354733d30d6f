from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Vulnerability(str, Enum):
    UNKNOWN = "unknown"
    HEARING = "hearing"
    SIGHT = "sight"
    PENSIONABLE_AGE = "pensionable_age"
    LEARNING_DIFFICULTIES = "learning_difficulties"
    FOREIGN_LANGUAGE_ONLY = "foreign_language_only"
    PHYSICAL_OR_RESTRICTED_MOVEMENT = "physical_or_restricted_movement"
    ILLNESS = "illness"
    OTHER = "other"


@dataclass(frozen=True)
class VulnerabilityDetails:
    vulnerabilities: frozenset[Vulnerability] = field(default_factory=frozenset)
    other: str = ""  # free-text note, sent alongside the codes
