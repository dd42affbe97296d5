"""ACM certificate lookup results."""

from pydantic import BaseModel, Field

ISSUED = "ISSUED"


class CertificateCandidate(BaseModel):
    """Full details of a certificate being tested against a domain."""

    arn: str
    primary_name: str | None = None
    alternate_names: list[str] = Field(default_factory=list)
    status: str | None = None

    @property
    def names(self) -> set[str]:
        """All names the certificate covers, lower-cased."""
        names = {n.lower() for n in self.alternate_names if n}
        if self.primary_name:
            names.add(self.primary_name.lower())
        return names


class CertificateMatch(BaseModel):
    """Outcome of a certificate search.

    Both fields are None when no certificate matched.
    """

    arn: str | None = None
    status: str | None = None

    @property
    def found(self) -> bool:
        return self.arn is not None

    @property
    def usable(self) -> bool:
        """Only an issued certificate can be attached to a distribution."""
        return self.arn is not None and self.status == ISSUED
