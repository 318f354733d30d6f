from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SiteAddress:
    """Postal address in PAF (Postcode Address File) structure."""

    uprn: str = ""
    organisation: str = ""
    department: str = ""
    sub_building: str = ""
    building_name: str = ""
    building_number: str = ""
    dependent_thoroughfare: str = ""
    thoroughfare: str = ""
    double_dependent_locality: str = ""
    dependent_locality: str = ""
    post_town: str = ""
    postcode: str = ""
