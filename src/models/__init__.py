"""Data models for CloudFront distribution provisioning."""

from src.models.certificate import ISSUED, CertificateCandidate, CertificateMatch
from src.models.distribution import (
    ALLOWED_METHODS,
    CACHED_METHODS,
    READ_METHODS,
    CacheBehavior,
    CacheRule,
    CustomCertificate,
    CustomOrigin,
    DefaultCertificate,
    DistributionConfig,
    S3Origin,
)
from src.models.policy import ManagedPolicies, PolicyCategory

__all__ = [  # noqa: RUF022
    # Distribution models
    "CacheBehavior",
    "CacheRule",
    "CustomCertificate",
    "CustomOrigin",
    "DefaultCertificate",
    "DistributionConfig",
    "S3Origin",
    "ALLOWED_METHODS",
    "CACHED_METHODS",
    "READ_METHODS",
    # Certificate models
    "CertificateCandidate",
    "CertificateMatch",
    "ISSUED",
    # Policy models
    "ManagedPolicies",
    "PolicyCategory",
]
