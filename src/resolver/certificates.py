"""Locate an ACM certificate covering a domain name."""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from src.models.certificate import CertificateCandidate, CertificateMatch
from src.resolver.exceptions import CertificateProbeError
from src.resolver.matching import domain_matches

logger = logging.getLogger(__name__)


class CertificateLocator:
    """
    Two-stage certificate search: enumerate, then probe.

    The summary listing only carries each certificate's primary domain, not
    its subject alternative names, so every certificate is described before
    it is tested. Probing is sequential unless ``probe_workers`` is greater
    than one; either way the first match in listing order wins.
    """

    def __init__(
        self,
        acm_client=None,
        region: str = "us-east-1",
        probe_workers: int = 1,
    ):
        """
        Initialize the locator.

        Args:
            acm_client: Optional boto3 ACM client (for testing)
            region: Region used when creating the client. CloudFront only
                accepts certificates from us-east-1.
            probe_workers: Number of concurrent describe calls
        """
        self.region = region
        self.probe_workers = max(1, probe_workers)
        self._acm_client = acm_client
        self._stopped = threading.Event()

    @property
    def acm_client(self):
        """Lazy-load ACM client."""
        if self._acm_client is None:
            self._acm_client = boto3.client("acm", region_name=self.region)
        return self._acm_client

    def stop(self) -> None:
        """Stop an in-flight search; remaining candidates are not described."""
        self._stopped.set()

    def enumerate_candidates(self) -> list[str]:
        """Page through the certificate listing and collect every ARN."""
        arns: list[str] = []
        next_token: str | None = None

        while not self._stopped.is_set():
            kwargs = {"NextToken": next_token} if next_token else {}
            response = self.acm_client.list_certificates(**kwargs)
            for summary in response.get("CertificateSummaryList", []):
                arn = summary.get("CertificateArn")
                if arn:
                    arns.append(arn)
            next_token = response.get("NextToken")
            if not next_token:
                break

        logger.debug(f"Found {len(arns)} certificate candidates")
        return arns

    def probe(self, arn: str) -> CertificateCandidate | None:
        """
        Describe a certificate.

        Returns:
            Candidate details, or None if ACM returned no certificate

        Raises:
            CertificateProbeError: If the describe call failed
        """
        try:
            response = self.acm_client.describe_certificate(CertificateArn=arn)
        except (ClientError, BotoCoreError) as e:
            raise CertificateProbeError(arn, str(e)) from e

        cert = response.get("Certificate")
        if not cert:
            return None
        return CertificateCandidate(
            arn=arn,
            primary_name=cert.get("DomainName"),
            alternate_names=[n for n in cert.get("SubjectAlternativeNames", []) if n],
            status=cert.get("Status"),
        )

    def _probe_match(self, target: str, arn: str) -> CertificateCandidate | None:
        if self._stopped.is_set():
            return None
        try:
            candidate = self.probe(arn)
        except CertificateProbeError as e:
            logger.warning(f"{e}; skipping")
            return None
        if candidate and any(domain_matches(target, n) for n in candidate.names):
            return candidate
        return None

    def find_certificate(self, target_name: str | None) -> CertificateMatch:
        """
        Find the first certificate whose names cover ``target_name``.

        A failed describe call skips that candidate. No match is not an
        error: the result is empty and the caller falls back to the default
        certificate.

        Args:
            target_name: Domain to look up (e.g. "example.com")

        Returns:
            CertificateMatch with the ARN and status, or an empty match
        """
        if not target_name:
            return CertificateMatch()

        target = target_name.lower()
        arns = self.enumerate_candidates()

        if self.probe_workers > 1 and len(arns) > 1:
            with ThreadPoolExecutor(max_workers=self.probe_workers) as executor:
                results = list(
                    executor.map(lambda arn: self._probe_match(target, arn), arns)
                )
            # map preserves input order, so the first hit is the lowest index
            match = next((c for c in results if c is not None), None)
        else:
            match = None
            for arn in arns:
                if self._stopped.is_set():
                    break
                match = self._probe_match(target, arn)
                if match:
                    break

        if match is None:
            logger.info(f"No certificate found for {target_name}")
            return CertificateMatch()

        logger.info(
            f"Certificate {match.arn} matches {target_name} (status={match.status})"
        )
        return CertificateMatch(arn=match.arn, status=match.status)
