"""Pytest fixtures for distribution provisioning tests."""

from unittest.mock import MagicMock

import pytest

from src.models import ManagedPolicies

CACHE_DISABLED_ID = "4135ea2d-6df8-44a3-9df3-4b5a84be39ad"
CACHE_OPTIMIZED_ID = "658327ea-f89d-4fab-a63d-7e88639e58f6"
ALL_VIEWER_EXCEPT_HOST_ID = "b689b0a8-53d0-40ab-baf2-68738e2966ac"
CORS_WITH_PREFLIGHT_ID = "5cc3b908-e619-4b99-88e5-2cf7f45965bd"


def _policy_items(item_key: str, config_key: str, policies: dict[str, str]) -> dict:
    return {
        "Items": [
            {
                "Type": "managed",
                item_key: {"Id": policy_id, config_key: {"Name": name}},
            }
            for name, policy_id in policies.items()
        ]
    }


@pytest.fixture
def managed_policies() -> ManagedPolicies:
    """Resolved managed policy IDs."""
    return ManagedPolicies(
        response_headers_policy_id=CORS_WITH_PREFLIGHT_ID,
        cache_disabled_policy_id=CACHE_DISABLED_ID,
        origin_request_policy_id=ALL_VIEWER_EXCEPT_HOST_ID,
        cache_optimized_policy_id=CACHE_OPTIMIZED_ID,
    )


@pytest.fixture
def mock_cloudfront() -> MagicMock:
    """CloudFront client returning the real managed policy listings."""
    client = MagicMock()
    client.list_cache_policies.return_value = {
        "CachePolicyList": _policy_items(
            "CachePolicy",
            "CachePolicyConfig",
            {
                "Managed-CachingOptimized": CACHE_OPTIMIZED_ID,
                "Managed-CachingDisabled": CACHE_DISABLED_ID,
                "Managed-Amplify": "2e54312d-136d-493c-8eb9-b001f22f67d2",
            },
        )
    }
    client.list_origin_request_policies.return_value = {
        "OriginRequestPolicyList": _policy_items(
            "OriginRequestPolicy",
            "OriginRequestPolicyConfig",
            {
                "Managed-AllViewer": "216adef6-5c7f-47e4-b989-5492eafa07d3",
                "Managed-AllViewerExceptHostHeader": ALL_VIEWER_EXCEPT_HOST_ID,
            },
        )
    }
    client.list_response_headers_policies.return_value = {
        "ResponseHeadersPolicyList": _policy_items(
            "ResponseHeadersPolicy",
            "ResponseHeadersPolicyConfig",
            {
                "Managed-CORS-With-Preflight": CORS_WITH_PREFLIGHT_ID,
                "Managed-SecurityHeadersPolicy": "67f7725c-6f97-4210-82d7-5512b31e9d03",
            },
        )
    }
    return client


def _make_acm_client(certificates: list[dict], page_size: int = 2) -> MagicMock:
    """
    Build an ACM client serving the given certificate details.

    Each certificate dict uses describe_certificate's field names
    (CertificateArn, DomainName, SubjectAlternativeNames, Status). The
    listing is split into pages of ``page_size`` linked by NextToken.
    """
    summaries = [
        {"CertificateArn": c["CertificateArn"], "DomainName": c.get("DomainName")}
        for c in certificates
    ]
    pages = [
        summaries[i : i + page_size] for i in range(0, len(summaries), page_size)
    ] or [[]]

    def list_certificates(**kwargs):
        index = int(kwargs.get("NextToken", "0"))
        response = {"CertificateSummaryList": pages[index]}
        if index + 1 < len(pages):
            response["NextToken"] = str(index + 1)
        return response

    by_arn = {c["CertificateArn"]: c for c in certificates}

    def describe_certificate(CertificateArn):  # noqa: N803
        return {"Certificate": by_arn[CertificateArn]}

    client = MagicMock()
    client.list_certificates.side_effect = list_certificates
    client.describe_certificate.side_effect = describe_certificate
    return client


def _certificate(
    arn_suffix: str,
    domain: str,
    alternate_names: list[str] | None = None,
    status: str = "ISSUED",
) -> dict:
    """Certificate detail as returned by describe_certificate."""
    return {
        "CertificateArn": f"arn:aws:acm:us-east-1:123456789012:certificate/{arn_suffix}",
        "DomainName": domain,
        "SubjectAlternativeNames": alternate_names or [domain],
        "Status": status,
    }


@pytest.fixture
def acm_factory():
    """Factory for ACM clients serving a list of certificates."""
    return _make_acm_client


@pytest.fixture
def cert():
    """Factory for describe_certificate payloads."""
    return _certificate


SETTINGS_ENV_VARS = [
    "ALTERNATE_DOMAIN_NAMES",
    "CERTIFICATE_NAME",
    "DISTRIBUTION_ID",
    "CLOUDFRONT_DISTRIBUTION_ID",
    "AWS_BUCKET",
    "ORIGIN_DOMAIN_NAME",
    "CF_ORIGIN_DOMAIN_NAME",
    "CACHE_RULES_PATH",
    "CLOUDFRONT_REGION",
    "DEBUG",
    "DRY_RUN",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Remove settings variables and run from an empty directory (no .env)."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch
