"""Create or update a CloudFront distribution."""

import logging
from typing import Any

import boto3
from botocore.exceptions import ClientError

from src.models.distribution import DistributionConfig
from src.resolver.exceptions import ConcurrentModificationError, PublishFailedError

logger = logging.getLogger(__name__)

PRECONDITION_FAILED = "PreconditionFailed"


def merge_distribution_config(
    remote: dict[str, Any],
    assembled: dict[str, Any],
) -> dict[str, Any]:
    """
    Overlay an assembled config on the remote one.

    Top-level fields from ``assembled`` replace the remote ones, remote
    fields it does not mention pass through, and the remote caller
    reference is always kept.

    Args:
        remote: DistributionConfig from get_distribution_config
        assembled: Output of DistributionConfig.to_api()

    Returns:
        DistributionConfig for update_distribution
    """
    merged = {**remote, **assembled}
    if "CallerReference" in remote:
        merged["CallerReference"] = remote["CallerReference"]
    else:
        merged.pop("CallerReference", None)
    return merged


class DistributionPublisher:
    """
    Submit a distribution config to CloudFront.

    Updates are read-modify-write guarded by the ETag from the read. A stale
    ETag is reported as ConcurrentModificationError and never retried, so an
    interleaved change is not overwritten.
    """

    def __init__(self, cloudfront_client=None, region: str = "us-east-1"):
        """
        Initialize the publisher.

        Args:
            cloudfront_client: Optional boto3 CloudFront client (for testing)
            region: Region used when creating the client
        """
        self.region = region
        self._cloudfront_client = cloudfront_client

    @property
    def cloudfront_client(self):
        """Lazy-load CloudFront client."""
        if self._cloudfront_client is None:
            self._cloudfront_client = boto3.client(
                "cloudfront", region_name=self.region
            )
        return self._cloudfront_client

    def publish(
        self,
        config: DistributionConfig,
        distribution_id: str | None = None,
    ) -> str:
        """Update ``distribution_id`` if given, otherwise create a new one."""
        if distribution_id:
            return self.update(distribution_id, config)
        return self.create(config)

    def create(self, config: DistributionConfig) -> str:
        """
        Create a new distribution.

        Returns:
            The new distribution ID

        Raises:
            PublishFailedError: If CloudFront returned no distribution
        """
        logger.info("Creating new distribution...")
        response = self.cloudfront_client.create_distribution(
            DistributionConfig=config.to_api()
        )
        distribution_id = response.get("Distribution", {}).get("Id")
        if not distribution_id:
            raise PublishFailedError("create")

        logger.info(f"Created distribution {distribution_id}")
        return distribution_id

    def update(self, distribution_id: str, config: DistributionConfig) -> str:
        """
        Merge the config into an existing distribution.

        Raises:
            ConcurrentModificationError: If the ETag went stale
            PublishFailedError: If CloudFront returned no distribution
        """
        logger.info(f"Updating existing distribution: {distribution_id}")
        current = self.cloudfront_client.get_distribution_config(Id=distribution_id)
        etag = current.get("ETag")
        payload = merge_distribution_config(
            current.get("DistributionConfig", {}), config.to_api()
        )

        try:
            response = self.cloudfront_client.update_distribution(
                Id=distribution_id,
                IfMatch=etag,
                DistributionConfig=payload,
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == PRECONDITION_FAILED:
                raise ConcurrentModificationError(distribution_id) from e
            raise

        updated_id = response.get("Distribution", {}).get("Id")
        if not updated_id:
            raise PublishFailedError("update")

        logger.info(f"Updated distribution {updated_id}")
        return updated_id
