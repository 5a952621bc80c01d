"""Value types describing what is being fetched and from where."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RemoteRepository:
    """A remote artifact repository.

    Attributes
    ----------
    id:
        Repository identifier; rule files are looked up by it.
    url:
        Base URL of the repository.
    layout:
        Repository layout name.  Only ``"default"`` is understood.
    blocked:
        Blocked repositories are never consulted for prefix rules.
    """

    id: str
    url: str = ""
    layout: str = "default"
    blocked: bool = False

    def __str__(self) -> str:
        return f"{self.id} ({self.url}, {self.layout})"


@dataclass(frozen=True)
class Artifact:
    """An artifact coordinate."""

    group_id: str
    artifact_id: str
    version: str
    extension: str = "jar"
    classifier: str = ""

    @classmethod
    def parse(cls, coords: str) -> Artifact:
        """Parse ``group:artifact[:extension[:classifier]]:version``.

        Raises
        ------
        ValueError
            If *coords* does not have three to five non-empty parts.
        """
        parts = coords.split(":")
        if not 3 <= len(parts) <= 5 or not all(parts):
            raise ValueError(
                f"Bad artifact coordinates '{coords}', expected "
                "<groupId>:<artifactId>[:<extension>[:<classifier>]]:<version>"
            )
        if len(parts) == 3:
            return cls(parts[0], parts[1], parts[2])
        if len(parts) == 4:
            return cls(parts[0], parts[1], parts[3], extension=parts[2])
        return cls(parts[0], parts[1], parts[4], extension=parts[2], classifier=parts[3])

    def __str__(self) -> str:
        middle = f":{self.extension}"
        if self.classifier:
            middle += f":{self.classifier}"
        return f"{self.group_id}:{self.artifact_id}{middle}:{self.version}"


@dataclass(frozen=True)
class Metadata:
    """Repository metadata, addressed at group, artifact or version level."""

    group_id: str = ""
    artifact_id: str = ""
    version: str = ""
    type: str = "maven-metadata.xml"
