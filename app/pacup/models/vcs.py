"""VCS tracking models.

A tracked package is a development (``-git``) package whose upgrades are
driven by upstream commits rather than version numbers.
"""

from dataclasses import dataclass
from typing import Any

# Length of the commit prefix shown as the installed "version"
SHORT_SHA_LENGTH = 6


@dataclass(frozen=True, slots=True)
class TrackedPackage:
    """Revision state of one tracked VCS package.

    Attributes:
        name: Installed package name.
        url: Git URL of the upstream source.
        branch: Branch followed upstream.
        sha: Last known commit of that branch at install time.
    """

    name: str
    url: str
    branch: str = "HEAD"
    sha: str = ""

    def __post_init__(self) -> None:
        """Validate tracking data after initialization."""
        if not self.name:
            msg = "Package name cannot be empty"
            raise ValueError(msg)
        if not self.url:
            msg = f"Tracked package {self.name} needs a source URL"
            raise ValueError(msg)

    @property
    def short_sha(self) -> str:
        """Return the abbreviated last known commit."""
        return self.sha[:SHORT_SHA_LENGTH]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"url": self.url, "branch": self.branch, "sha": self.sha}

    @classmethod
    def from_dict(cls, name: str, data: dict[str, Any]) -> "TrackedPackage":
        """Create a TrackedPackage from its stored form.

        Raises:
            KeyError: If the URL is missing.
            ValueError: If the data is invalid.
        """
        return cls(
            name=name,
            url=str(data["url"]),
            branch=str(data.get("branch") or "HEAD"),
            sha=str(data.get("sha") or ""),
        )
