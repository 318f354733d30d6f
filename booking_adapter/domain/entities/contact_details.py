from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ContactDetails:
    title: str = ""
    first_name: str = ""
    last_name: str = ""
    phone: str = ""

    def site_contact_name(self) -> str:
        """Single free-text name the provider accepts, e.g. "Mr John Doe"."""
        parts = (self.title.strip(), self.first_name.strip(), self.last_name.strip())
        return " ".join(part for part in parts if part)
