"""
Trim family module for archsolids.
Contains moulding profiles and the provider that hands them to builders.
"""

from .trim import (
    ProfileSet,
    TrimFamily,
    TrimFamilyProvider,
    build_aranea_family,
    DEFAULT_FAMILIES,
    PROFILE_SCALES
)

__all__ = [
    'ProfileSet',
    'TrimFamily',
    'TrimFamilyProvider',
    'build_aranea_family',
    'DEFAULT_FAMILIES',
    'PROFILE_SCALES'
]
