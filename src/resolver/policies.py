"""Resolve CloudFront managed policy identifiers by name."""

import logging
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait

import boto3

from src.models.policy import (
    ALL_VIEWER_EXCEPT_HOST_HEADER,
    CACHING_DISABLED,
    CACHING_OPTIMIZED,
    CORS_WITH_PREFLIGHT,
    ManagedPolicies,
    PolicyCategory,
)
from src.resolver.exceptions import PolicyNotFoundError
from src.resolver.matching import normalize

logger = logging.getLogger(__name__)

# list call, response list key, item key, config key per category
_LISTINGS = {
    PolicyCategory.CACHE: (
        "list_cache_policies",
        "CachePolicyList",
        "CachePolicy",
        "CachePolicyConfig",
    ),
    PolicyCategory.ORIGIN_REQUEST: (
        "list_origin_request_policies",
        "OriginRequestPolicyList",
        "OriginRequestPolicy",
        "OriginRequestPolicyConfig",
    ),
    PolicyCategory.RESPONSE_HEADERS: (
        "list_response_headers_policies",
        "ResponseHeadersPolicyList",
        "ResponseHeadersPolicy",
        "ResponseHeadersPolicyConfig",
    ),
}


class PolicyResolver:
    """Look up managed policy IDs from their human readable names."""

    def __init__(self, cloudfront_client=None, region: str = "us-east-1"):
        """
        Initialize the resolver.

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

    def resolve_managed_policy(self, category: PolicyCategory, name: str) -> str:
        """
        Find the ID of a managed policy.

        Managed policies are a small curated set, so the first page of the
        listing holds all of them.

        Args:
            category: Which policy listing to search
            name: Policy name, compared after normalization

        Returns:
            The policy ID

        Raises:
            PolicyNotFoundError: If no managed policy has that name
        """
        method, list_key, item_key, config_key = _LISTINGS[category]
        response = getattr(self.cloudfront_client, method)(Type="managed")
        target = normalize(name)

        for item in response.get(list_key, {}).get("Items", []):
            policy = item.get(item_key, {})
            policy_name = policy.get(config_key, {}).get("Name")
            if policy_name and normalize(policy_name) == target:
                logger.debug(f"Resolved {category} policy {name} -> {policy['Id']}")
                return policy["Id"]

        raise PolicyNotFoundError(str(category), name)

    def resolve_all(self) -> ManagedPolicies:
        """
        Resolve the four managed policies used by every distribution.

        Lookups run concurrently. The first failure is raised without
        waiting on the lookups still in flight.
        """
        lookups = {
            "response_headers_policy_id": (
                PolicyCategory.RESPONSE_HEADERS,
                CORS_WITH_PREFLIGHT,
            ),
            "cache_disabled_policy_id": (PolicyCategory.CACHE, CACHING_DISABLED),
            "origin_request_policy_id": (
                PolicyCategory.ORIGIN_REQUEST,
                ALL_VIEWER_EXCEPT_HOST_HEADER,
            ),
            "cache_optimized_policy_id": (PolicyCategory.CACHE, CACHING_OPTIMIZED),
        }

        executor = ThreadPoolExecutor(max_workers=len(lookups))
        try:
            futures = {
                field: executor.submit(self.resolve_managed_policy, category, name)
                for field, (category, name) in lookups.items()
            }
            done, _ = wait(futures.values(), return_when=FIRST_EXCEPTION)
            for future in done:
                error = future.exception()
                if error is not None:
                    raise error
            resolved = {field: f.result() for field, f in futures.items()}
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        logger.info("Resolved managed policy IDs")
        return ManagedPolicies(**resolved)
