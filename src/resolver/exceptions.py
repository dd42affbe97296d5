"""Custom exceptions for distribution provisioning."""


class DistributionError(Exception):
    """Base exception for distribution provisioning errors."""


class ConfigError(DistributionError):
    """Local configuration is missing or invalid."""


class PolicyNotFoundError(DistributionError):
    """A managed policy name did not resolve to an identifier."""

    def __init__(self, category: str, name: str):
        self.category = category
        self.name = name
        super().__init__(f"Managed {category} policy not found: {name}")


class CertificateProbeError(DistributionError):
    """Fetching the details of a certificate candidate failed."""

    def __init__(self, arn: str, reason: str):
        self.arn = arn
        super().__init__(f"Failed to describe certificate {arn}: {reason}")


class PublishFailedError(DistributionError):
    """CloudFront returned no distribution for a create or update call."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Failed to {operation} CloudFront distribution")


class ConcurrentModificationError(DistributionError):
    """The ETag used for an update was rejected as stale."""

    def __init__(self, distribution_id: str):
        self.distribution_id = distribution_id
        super().__init__(
            f"Distribution {distribution_id} was modified concurrently "
            "(ETag no longer matches); re-run to apply changes"
        )
