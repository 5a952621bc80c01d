"""Repository layouts converting coordinates to repository-relative paths.

Only the Maven 2 ``default`` layout is supported.  Prefix rules are written
against these paths, e.g. ``/org/apache/maven`` covers every artifact whose
group starts with ``org.apache.maven``.

Example
-------
>>> from repo_gatekeeper.filters.model import Artifact
>>> Maven2Layout().artifact_path(Artifact("org.apache.maven", "maven-core", "3.9.6"))
'org/apache/maven/maven-core/3.9.6/maven-core-3.9.6.jar'
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from repo_gatekeeper.filters.model import Artifact, Metadata, RemoteRepository

logger = logging.getLogger(__name__)


class RepositoryLayout(ABC):
    """Maps artifacts and metadata to paths inside a repository."""

    @abstractmethod
    def artifact_path(self, artifact: Artifact) -> str:
        """Return the repository-relative path of *artifact*."""

    @abstractmethod
    def metadata_path(self, metadata: Metadata) -> str:
        """Return the repository-relative path of *metadata*."""


class Maven2Layout(RepositoryLayout):
    """The Maven 2 ``default`` repository layout."""

    name = "default"

    def artifact_path(self, artifact: Artifact) -> str:
        filename = f"{artifact.artifact_id}-{artifact.version}"
        if artifact.classifier:
            filename += f"-{artifact.classifier}"
        if artifact.extension:
            filename += f".{artifact.extension}"
        return "/".join(
            [
                artifact.group_id.replace(".", "/"),
                artifact.artifact_id,
                artifact.version,
                filename,
            ]
        )

    def metadata_path(self, metadata: Metadata) -> str:
        parts: list[str] = []
        if metadata.group_id:
            parts.append(metadata.group_id.replace(".", "/"))
            if metadata.artifact_id:
                parts.append(metadata.artifact_id)
                if metadata.version:
                    parts.append(metadata.version)
        parts.append(metadata.type)
        return "/".join(parts)


_LAYOUTS: dict[str, RepositoryLayout] = {Maven2Layout.name: Maven2Layout()}


def layout_for(repository: RemoteRepository) -> RepositoryLayout | None:
    """Return the layout of *repository*, or ``None`` when it is not supported."""
    layout = _LAYOUTS.get(repository.layout)
    if layout is None:
        logger.warning(
            "Unsupported layout '%s' for remote repository %s",
            repository.layout,
            repository.id,
        )
    return layout
