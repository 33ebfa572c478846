"""
Site adapter package and registry.

The set of supported job boards is closed: each site key maps to exactly one
adapter class, in the declared order of `utils.schema.SUPPORTED_SITES`. The
factory resolves URLs and site names against this registry.
"""

from __future__ import annotations

from typing import Dict, Type

from .base import JobSiteAdapter
from .glassdoor_adapter import GlassdoorAdapter
from .indeed_adapter import IndeedAdapter
from .linkedin_adapter import LinkedInAdapter

#: Mapping from site key (e.g., "linkedin") to the adapter class.
ADAPTER_REGISTRY: Dict[str, Type[JobSiteAdapter]] = {
    "linkedin": LinkedInAdapter,
    "indeed": IndeedAdapter,
    "glassdoor": GlassdoorAdapter,
}

__all__ = [
    "ADAPTER_REGISTRY",
    "JobSiteAdapter",
    "LinkedInAdapter",
    "IndeedAdapter",
    "GlassdoorAdapter",
]
