"""End-to-end provisioning of a CloudFront distribution."""

import logging
from concurrent.futures import ThreadPoolExecutor

import boto3

from src.config.cache_rules import CacheRuleSource, JsonCacheRuleSource
from src.config.settings import Settings
from src.distribution.assembler import assemble_distribution, build_origin
from src.distribution.publisher import DistributionPublisher
from src.models.distribution import DistributionConfig
from src.resolver.certificates import CertificateLocator
from src.resolver.policies import PolicyResolver

logger = logging.getLogger(__name__)


class DistributionWorkflow:
    """
    Resolve inputs, assemble the config and publish it.

    Nothing is sent to CloudFront unless every lookup succeeded, so a run
    either yields a distribution ID or fails without changes.
    """

    def __init__(
        self,
        settings: Settings,
        cloudfront_client=None,
        acm_client=None,
        cache_rule_source: CacheRuleSource | None = None,
    ):
        """
        Initialize the workflow.

        Args:
            settings: Application settings
            cloudfront_client: Optional boto3 CloudFront client (for testing)
            acm_client: Optional boto3 ACM client (for testing)
            cache_rule_source: Extra cache rules; defaults to the JSON file
                named by settings.cache_rules_path
        """
        self.settings = settings
        self._cloudfront_client = cloudfront_client
        self._acm_client = acm_client
        self.cache_rule_source = cache_rule_source or JsonCacheRuleSource(
            settings.cache_rules_file
        )

    @property
    def cloudfront_client(self):
        """Lazy-load CloudFront client."""
        if self._cloudfront_client is None:
            self._cloudfront_client = boto3.client(
                "cloudfront", region_name=self.settings.aws_region
            )
        return self._cloudfront_client

    @property
    def acm_client(self):
        """Lazy-load ACM client."""
        if self._acm_client is None:
            self._acm_client = boto3.client(
                "acm", region_name=self.settings.aws_region
            )
        return self._acm_client

    def build_config(self) -> DistributionConfig:
        """
        Resolve policies and certificate, then assemble the config.

        Raises:
            ConfigError: If no origin is configured or cache rules are invalid
            PolicyNotFoundError: If a managed policy cannot be resolved
        """
        settings = self.settings

        # Fail on local config before any AWS call
        origin = build_origin(settings.s3_bucket, settings.origin_domain_name)
        rules = self.cache_rule_source.load_rules()

        resolver = PolicyResolver(self.cloudfront_client, region=settings.aws_region)
        locator = CertificateLocator(self.acm_client, region=settings.aws_region)

        # A failed policy lookup is raised without waiting on the certificate search
        executor = ThreadPoolExecutor(max_workers=2)
        try:
            policies_future = executor.submit(resolver.resolve_all)
            certificate_future = executor.submit(
                locator.find_certificate, settings.certificate_name
            )
            try:
                policies = policies_future.result()
            except Exception:
                locator.stop()
                raise
            certificate = certificate_future.result()
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        return assemble_distribution(
            origin=origin,
            policies=policies,
            certificate=certificate,
            aliases=settings.alternate_domain_names,
            rules=rules,
            distribution_id=settings.distribution_id,
        )

    def run(self) -> str:
        """Build the config and create or update the distribution."""
        config = self.build_config()
        publisher = DistributionPublisher(
            self.cloudfront_client, region=self.settings.aws_region
        )
        return publisher.publish(config, self.settings.distribution_id)
