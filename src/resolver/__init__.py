"""Managed policy and certificate lookups."""

from src.resolver.certificates import CertificateLocator
from src.resolver.exceptions import (
    CertificateProbeError,
    ConcurrentModificationError,
    ConfigError,
    DistributionError,
    PolicyNotFoundError,
    PublishFailedError,
)
from src.resolver.matching import domain_matches, normalize
from src.resolver.policies import PolicyResolver

__all__ = [
    "CertificateLocator",
    "PolicyResolver",
    "domain_matches",
    "normalize",
    "DistributionError",
    "ConfigError",
    "PolicyNotFoundError",
    "CertificateProbeError",
    "PublishFailedError",
    "ConcurrentModificationError",
]
