"""Assemble a CloudFront distribution config from resolved inputs."""

import logging
import time

from src.models.certificate import CertificateMatch
from src.models.distribution import (
    READ_METHODS,
    CacheBehavior,
    CacheRule,
    CustomCertificate,
    CustomOrigin,
    DefaultCertificate,
    DistributionConfig,
    S3Origin,
)
from src.models.policy import ManagedPolicies
from src.resolver.exceptions import ConfigError

logger = logging.getLogger(__name__)

S3_DEFAULT_ROOT_OBJECT = "index.html"


def new_caller_reference() -> str:
    """Caller reference for a new distribution (epoch milliseconds)."""
    return str(int(time.time() * 1000))


def build_origin(
    s3_bucket: str | None,
    origin_domain_name: str | None,
) -> S3Origin | CustomOrigin:
    """
    Build the single origin for the distribution.

    The bucket wins if both are given.

    Raises:
        ConfigError: If neither origin source is configured
    """
    if s3_bucket:
        logger.info(f"Configuring S3 origin for bucket: {s3_bucket}")
        return S3Origin(bucket=s3_bucket)
    if origin_domain_name:
        logger.info(f"Configuring Lambda origin: {origin_domain_name}")
        return CustomOrigin(domain_name=origin_domain_name)
    raise ConfigError(
        "No origin source: set AWS_BUCKET or ORIGIN_DOMAIN_NAME/CF_ORIGIN_DOMAIN_NAME"
    )


def build_cache_behaviors(
    origin_id: str,
    policies: ManagedPolicies,
    rules: list[CacheRule],
) -> tuple[CacheBehavior, list[CacheBehavior]]:
    """
    Build the default behavior and one behavior per cache rule.

    The default behavior never caches and forwards every method. Rule
    behaviors only serve reads. Rule order is kept since CloudFront
    evaluates path patterns in list order.

    Returns:
        Tuple of (default behavior, extra behaviors)
    """
    default_behavior = CacheBehavior(
        target_origin_id=origin_id,
        cache_policy_id=policies.cache_disabled_policy_id,
        origin_request_policy_id=policies.origin_request_policy_id,
        response_headers_policy_id=policies.response_headers_policy_id,
    )
    behaviors = [
        CacheBehavior(
            path_pattern=rule.path_pattern,
            target_origin_id=origin_id,
            cache_policy_id=(
                policies.cache_optimized_policy_id
                if rule.cache
                else policies.cache_disabled_policy_id
            ),
            origin_request_policy_id=policies.origin_request_policy_id,
            response_headers_policy_id=policies.response_headers_policy_id,
            allowed_methods=list(READ_METHODS),
            cached_methods=list(READ_METHODS),
        )
        for rule in rules
    ]
    return default_behavior, behaviors


def assemble_distribution(
    origin: S3Origin | CustomOrigin,
    policies: ManagedPolicies,
    certificate: CertificateMatch,
    aliases: list[str],
    rules: list[CacheRule],
    distribution_id: str | None = None,
) -> DistributionConfig:
    """
    Compose the distribution config.

    A custom certificate is used only when one was found and is ISSUED;
    otherwise the default certificate is used and aliases are dropped.

    Args:
        origin: The single origin
        policies: Resolved managed policy IDs
        certificate: Certificate search result (may be empty)
        aliases: Requested alternate domain names
        rules: Extra cache rules in precedence order
        distribution_id: Existing distribution; when set no caller
            reference is generated so the remote one is kept

    Returns:
        DistributionConfig ready to publish
    """
    default_behavior, behaviors = build_cache_behaviors(
        origin.origin_id, policies, rules
    )

    if certificate.usable:
        logger.info(f"Using custom certificate: {certificate.arn}")
        viewer_certificate = CustomCertificate(arn=certificate.arn)
        distribution_aliases = list(aliases) if aliases else None
    else:
        if certificate.found:
            logger.warning(
                f"Certificate found with status {certificate.status}. "
                "Falling back to default CloudFront certificate."
            )
        else:
            logger.info("Using default CloudFront certificate (custom cert not found)")
        if aliases:
            logger.warning(f"Dropping aliases {aliases}: no issued certificate")
        viewer_certificate = DefaultCertificate()
        distribution_aliases = []

    is_s3 = isinstance(origin, S3Origin)
    return DistributionConfig(
        origins=[origin],
        default_behavior=default_behavior,
        cache_behaviors=behaviors,
        viewer_certificate=viewer_certificate,
        aliases=distribution_aliases,
        enabled=True,
        comment=(
            f"Created by provision_distribution for {'S3' if is_s3 else 'Lambda'}"
        ),
        default_root_object=S3_DEFAULT_ROOT_OBJECT if is_s3 else None,
        caller_reference=None if distribution_id else new_caller_reference(),
    )
