"""CloudFront distribution configuration model."""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

# The default behavior forwards every method so API traffic reaches the origin
ALLOWED_METHODS = ["GET", "HEAD", "OPTIONS", "PUT", "POST", "PATCH", "DELETE"]
CACHED_METHODS = ["GET", "HEAD"]
# Path pattern behaviors only serve reads
READ_METHODS = ["GET", "HEAD", "OPTIONS"]
VIEWER_PROTOCOL_POLICY = "redirect-to-https"

S3_ORIGIN_ID = "S3Origin"
CUSTOM_ORIGIN_ID = "LambdaOrigin"


def quantity_items(items: list) -> dict[str, Any]:
    """Wrap a list in CloudFront's ``{"Quantity": n, "Items": [...]}`` shape."""
    return {"Quantity": len(items), "Items": list(items)}


class S3Origin(BaseModel):
    """Object storage (S3 bucket) origin."""

    kind: Literal["s3"] = "s3"
    bucket: str = Field(..., min_length=1, description="S3 bucket name")
    origin_id: str = S3_ORIGIN_ID

    @property
    def domain_name(self) -> str:
        return f"{self.bucket}.s3.amazonaws.com"

    def to_api(self) -> dict[str, Any]:
        return {
            "Id": self.origin_id,
            "DomainName": self.domain_name,
            # Public bucket, or origin access control attached separately
            "S3OriginConfig": {"OriginAccessIdentity": ""},
        }


class CustomOrigin(BaseModel):
    """HTTP(S) origin such as a Lambda function URL."""

    kind: Literal["custom"] = "custom"
    domain_name: str = Field(..., min_length=1, description="Origin host name")
    origin_id: str = CUSTOM_ORIGIN_ID
    protocol_policy: str = "https-only"
    http_port: int = Field(default=80, ge=1, le=65535)
    https_port: int = Field(default=443, ge=1, le=65535)

    def to_api(self) -> dict[str, Any]:
        return {
            "Id": self.origin_id,
            "DomainName": self.domain_name,
            "CustomOriginConfig": {
                "OriginProtocolPolicy": self.protocol_policy,
                "HTTPPort": self.http_port,
                "HTTPSPort": self.https_port,
            },
        }


Origin = Annotated[S3Origin | CustomOrigin, Field(discriminator="kind")]


class CacheRule(BaseModel):
    """An extra path pattern supplied by a cache rule source."""

    model_config = ConfigDict(populate_by_name=True)

    path_pattern: str = Field(..., alias="pathPattern", min_length=1)
    cache: bool = Field(default=False, description="Use the caching policy")


class CacheBehavior(BaseModel):
    """A cache behavior; the default behavior has no path pattern."""

    path_pattern: str | None = None
    target_origin_id: str
    cache_policy_id: str
    origin_request_policy_id: str
    response_headers_policy_id: str
    allowed_methods: list[str] = Field(default_factory=lambda: list(ALLOWED_METHODS))
    cached_methods: list[str] = Field(default_factory=lambda: list(CACHED_METHODS))
    viewer_protocol_policy: str = VIEWER_PROTOCOL_POLICY

    @property
    def is_default(self) -> bool:
        return self.path_pattern is None

    def to_api(self) -> dict[str, Any]:
        behavior: dict[str, Any] = {}
        if self.path_pattern is not None:
            behavior["PathPattern"] = self.path_pattern
        allowed = quantity_items(self.allowed_methods)
        allowed["CachedMethods"] = quantity_items(self.cached_methods)
        behavior.update(
            {
                "TargetOriginId": self.target_origin_id,
                "ViewerProtocolPolicy": self.viewer_protocol_policy,
                "AllowedMethods": allowed,
                "CachePolicyId": self.cache_policy_id,
                "OriginRequestPolicyId": self.origin_request_policy_id,
                "ResponseHeadersPolicyId": self.response_headers_policy_id,
            }
        )
        return behavior


class CustomCertificate(BaseModel):
    """ACM certificate presented to viewers."""

    kind: Literal["custom"] = "custom"
    arn: str
    ssl_support_method: str = "sni-only"
    minimum_protocol_version: str = "TLSv1.2_2019"

    def to_api(self) -> dict[str, Any]:
        return {
            "ACMCertificateArn": self.arn,
            "SSLSupportMethod": self.ssl_support_method,
            "MinimumProtocolVersion": self.minimum_protocol_version,
        }


class DefaultCertificate(BaseModel):
    """The *.cloudfront.net certificate."""

    kind: Literal["default"] = "default"

    def to_api(self) -> dict[str, Any]:
        return {"CloudFrontDefaultCertificate": True}


ViewerCertificate = Annotated[
    CustomCertificate | DefaultCertificate, Field(discriminator="kind")
]


class DistributionConfig(BaseModel):
    """
    The part of a CloudFront distribution config this tool manages.

    Optional fields left as None are omitted from :meth:`to_api`, so an
    update keeps whatever the remote distribution already has for them.
    """

    origins: list[Origin] = Field(..., min_length=1)
    default_behavior: CacheBehavior
    cache_behaviors: list[CacheBehavior] = Field(default_factory=list)
    viewer_certificate: ViewerCertificate
    aliases: list[str] | None = Field(
        default=None, description="Alternate domain names (CNAMEs)"
    )
    enabled: bool = True
    comment: str = ""
    default_root_object: str | None = None
    caller_reference: str | None = Field(
        default=None, description="Only set when creating a distribution"
    )

    @model_validator(mode="after")
    def _check_aliases_need_custom_certificate(self) -> "DistributionConfig":
        # CloudFront rejects aliases paired with the default certificate
        if isinstance(self.viewer_certificate, DefaultCertificate) and self.aliases:
            raise ValueError("Aliases require a custom viewer certificate")
        if not self.default_behavior.is_default:
            raise ValueError("Default cache behavior cannot have a path pattern")
        return self

    def to_api(self) -> dict[str, Any]:
        """Render the config in the shape boto3's CloudFront client expects."""
        config: dict[str, Any] = {}
        if self.caller_reference is not None:
            config["CallerReference"] = self.caller_reference
        config["Origins"] = quantity_items([o.to_api() for o in self.origins])
        config["DefaultCacheBehavior"] = self.default_behavior.to_api()
        config["CacheBehaviors"] = quantity_items(
            [b.to_api() for b in self.cache_behaviors]
        )
        config["ViewerCertificate"] = self.viewer_certificate.to_api()
        if self.aliases is not None:
            config["Aliases"] = quantity_items(self.aliases)
        config["Enabled"] = self.enabled
        config["Comment"] = self.comment
        if self.default_root_object is not None:
            config["DefaultRootObject"] = self.default_root_object
        return config
