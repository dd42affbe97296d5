"""Tests for distribution config assembly."""

import pytest

from src.distribution.assembler import (
    assemble_distribution,
    build_cache_behaviors,
    build_origin,
    new_caller_reference,
)
from src.models import (
    ALLOWED_METHODS,
    READ_METHODS,
    CacheRule,
    CertificateMatch,
    CustomCertificate,
    CustomOrigin,
    DefaultCertificate,
    S3Origin,
)
from src.resolver.exceptions import ConfigError

CERT_ARN = "arn:aws:acm:us-east-1:123456789012:certificate/abc"


class TestBuildOrigin:
    """Tests for origin selection."""

    def test_bucket_origin(self):
        """Test that a bucket name builds an S3 origin."""
        origin = build_origin("my-bucket", None)

        assert isinstance(origin, S3Origin)
        assert origin.origin_id == "S3Origin"
        assert origin.domain_name == "my-bucket.s3.amazonaws.com"

    def test_custom_origin(self):
        """Test that an origin domain builds an HTTPS-only custom origin."""
        origin = build_origin(None, "abc.lambda-url.eu-west-1.on.aws")

        assert isinstance(origin, CustomOrigin)
        assert origin.origin_id == "LambdaOrigin"
        assert origin.protocol_policy == "https-only"
        assert (origin.http_port, origin.https_port) == (80, 443)

    def test_bucket_takes_precedence(self):
        """Test that the bucket wins when both sources are set."""
        assert isinstance(build_origin("my-bucket", "origin.example.com"), S3Origin)

    @pytest.mark.parametrize(("bucket", "domain"), [(None, None), ("", "")])
    def test_missing_origin_raises(self, bucket, domain):
        """Test that no origin source raises ConfigError."""
        with pytest.raises(ConfigError, match="No origin source"):
            build_origin(bucket, domain)


class TestBuildCacheBehaviors:
    """Tests for default and extra cache behaviors."""

    def test_default_behavior_never_caches(self, managed_policies):
        """Test that the default behavior uses the caching-disabled policy."""
        default, extra = build_cache_behaviors("S3Origin", managed_policies, [])

        assert extra == []
        assert default.path_pattern is None
        assert default.cache_policy_id == managed_policies.cache_disabled_policy_id
        assert (
            default.origin_request_policy_id
            == managed_policies.origin_request_policy_id
        )
        assert (
            default.response_headers_policy_id
            == managed_policies.response_headers_policy_id
        )
        assert default.allowed_methods == ALLOWED_METHODS
        assert "POST" in default.allowed_methods
        assert default.cached_methods == ["GET", "HEAD"]

    def test_extra_behaviors_keep_order_and_cache_flag(self, managed_policies):
        """Test that N rules give N behaviors in order with matching policies."""
        rules = [
            CacheRule(path_pattern="/static/*", cache=True),
            CacheRule(path_pattern="/api/*", cache=False),
            CacheRule(path_pattern="*.js", cache=True),
        ]

        _, behaviors = build_cache_behaviors("LambdaOrigin", managed_policies, rules)

        assert [b.path_pattern for b in behaviors] == ["/static/*", "/api/*", "*.js"]
        assert [b.cache_policy_id for b in behaviors] == [
            managed_policies.cache_optimized_policy_id,
            managed_policies.cache_disabled_policy_id,
            managed_policies.cache_optimized_policy_id,
        ]
        for behavior in behaviors:
            assert behavior.target_origin_id == "LambdaOrigin"
            assert (
                behavior.origin_request_policy_id
                == managed_policies.origin_request_policy_id
            )
            assert (
                behavior.response_headers_policy_id
                == managed_policies.response_headers_policy_id
            )

    def test_extra_behaviors_only_serve_reads(self, managed_policies):
        """Test that path pattern behaviors allow and cache only read methods."""
        rules = [
            CacheRule(path_pattern="/static/*", cache=True),
            CacheRule(path_pattern="/api/*", cache=False),
        ]

        default, behaviors = build_cache_behaviors("S3Origin", managed_policies, rules)

        for behavior in behaviors:
            assert behavior.allowed_methods == READ_METHODS
            assert behavior.cached_methods == ["GET", "HEAD", "OPTIONS"]
            assert "POST" not in behavior.allowed_methods
            api = behavior.to_api()
            assert api["AllowedMethods"]["Quantity"] == 3
            assert api["AllowedMethods"]["CachedMethods"]["Quantity"] == 3
        assert "POST" in default.allowed_methods


class TestAssembleDistribution:
    """Tests for assemble_distribution."""

    def test_issued_certificate_uses_custom_certificate_and_aliases(
        self, managed_policies
    ):
        """Test that an issued certificate is attached with the aliases."""
        config = assemble_distribution(
            origin=S3Origin(bucket="my-bucket"),
            policies=managed_policies,
            certificate=CertificateMatch(arn=CERT_ARN, status="ISSUED"),
            aliases=["www.example.com", "example.com"],
            rules=[],
        )

        assert isinstance(config.viewer_certificate, CustomCertificate)
        assert config.viewer_certificate.arn == CERT_ARN
        assert config.aliases == ["www.example.com", "example.com"]
        api = config.to_api()
        assert api["ViewerCertificate"] == {
            "ACMCertificateArn": CERT_ARN,
            "SSLSupportMethod": "sni-only",
            "MinimumProtocolVersion": "TLSv1.2_2019",
        }
        assert api["Aliases"] == {
            "Quantity": 2,
            "Items": ["www.example.com", "example.com"],
        }

    def test_issued_certificate_without_aliases_omits_aliases(self, managed_policies):
        """Test that no alias block is sent when none were requested."""
        config = assemble_distribution(
            origin=S3Origin(bucket="my-bucket"),
            policies=managed_policies,
            certificate=CertificateMatch(arn=CERT_ARN, status="ISSUED"),
            aliases=[],
            rules=[],
        )

        assert config.aliases is None
        assert "Aliases" not in config.to_api()

    @pytest.mark.parametrize(
        "certificate",
        [
            CertificateMatch(arn=CERT_ARN, status="PENDING_VALIDATION"),
            CertificateMatch(arn=CERT_ARN, status="EXPIRED"),
            CertificateMatch(),
        ],
    )
    def test_unusable_certificate_falls_back_and_drops_aliases(
        self, managed_policies, certificate
    ):
        """Test that without an issued certificate aliases are forced empty."""
        config = assemble_distribution(
            origin=S3Origin(bucket="my-bucket"),
            policies=managed_policies,
            certificate=certificate,
            aliases=["www.example.com"],
            rules=[],
        )

        assert isinstance(config.viewer_certificate, DefaultCertificate)
        assert config.aliases == []
        api = config.to_api()
        assert api["ViewerCertificate"] == {"CloudFrontDefaultCertificate": True}
        assert api["Aliases"] == {"Quantity": 0, "Items": []}

    def test_create_sets_caller_reference(self, managed_policies):
        """Test that a new distribution gets a caller reference."""
        config = assemble_distribution(
            origin=S3Origin(bucket="my-bucket"),
            policies=managed_policies,
            certificate=CertificateMatch(),
            aliases=[],
            rules=[],
        )

        assert config.caller_reference
        assert config.caller_reference.isdigit()

    def test_update_leaves_caller_reference_unset(self, managed_policies):
        """Test that an update does not generate a caller reference."""
        config = assemble_distribution(
            origin=S3Origin(bucket="my-bucket"),
            policies=managed_policies,
            certificate=CertificateMatch(),
            aliases=[],
            rules=[],
            distribution_id="E2QWRUHAPOMQZL",
        )

        assert config.caller_reference is None
        assert "CallerReference" not in config.to_api()

    def test_s3_origin_details(self, managed_policies):
        """Test the comment and root object for an S3 origin."""
        config = assemble_distribution(
            origin=S3Origin(bucket="my-bucket"),
            policies=managed_policies,
            certificate=CertificateMatch(),
            aliases=[],
            rules=[],
        )

        assert config.comment == "Created by provision_distribution for S3"
        assert config.default_root_object == "index.html"
        assert config.enabled is True

    def test_custom_origin_details(self, managed_policies):
        """Test that an HTTP origin has no default root object."""
        config = assemble_distribution(
            origin=CustomOrigin(domain_name="origin.example.com"),
            policies=managed_policies,
            certificate=CertificateMatch(),
            aliases=[],
            rules=[CacheRule(path_pattern="/assets/*", cache=True)],
        )

        assert config.comment == "Created by provision_distribution for Lambda"
        assert config.default_root_object is None
        assert "DefaultRootObject" not in config.to_api()
        assert config.cache_behaviors[0].target_origin_id == "LambdaOrigin"


def test_new_caller_reference_is_epoch_millis():
    """Test that caller references are millisecond timestamps."""
    reference = new_caller_reference()

    assert reference.isdigit()
    assert len(reference) >= 13
