"""Managed policy categories and resolved identifiers."""

from enum import StrEnum

from pydantic import BaseModel, Field

# Names of the CloudFront managed policies used by every distribution
CORS_WITH_PREFLIGHT = "Managed-CORS-With-Preflight"
CACHING_DISABLED = "Managed-CachingDisabled"
ALL_VIEWER_EXCEPT_HOST_HEADER = "Managed-AllViewerExceptHostHeader"
CACHING_OPTIMIZED = "Managed-CachingOptimized"


class PolicyCategory(StrEnum):
    """Kind of CloudFront managed policy."""

    CACHE = "cache"
    ORIGIN_REQUEST = "origin request"
    RESPONSE_HEADERS = "response headers"


class ManagedPolicies(BaseModel):
    """Identifiers of the managed policies referenced by cache behaviors."""

    response_headers_policy_id: str = Field(
        ..., description="CORS with preflight response headers policy"
    )
    cache_disabled_policy_id: str = Field(
        ..., description="Cache policy used for uncached paths"
    )
    origin_request_policy_id: str = Field(
        ..., description="Forwards all viewer headers except Host"
    )
    cache_optimized_policy_id: str = Field(
        ..., description="Cache policy used for cached paths"
    )
