"""
List the resources of a rendered release manifest.

A manifest is a multi-document YAML stream where each document is one
resource (``apiVersion``, ``kind``, ``metadata.name``, ...). Each resource
is looked up through a ClusterClient, which supplies the live metadata:
namespace, creation timestamp and resource type.

ManifestClient is an offline client that answers lookups from the
manifest documents themselves.
"""

from __future__ import annotations

import abc as _abc
import dataclasses as _dataclasses
import datetime as _datetime
import logging as _logging
import typing as _typing

import yaml as _yaml

import stratum.errors as errors

_logger = _logging.getLogger(__name__)


class ClusterUnreachableError(errors.StratumError):
    """The cluster holding the release cannot be reached."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(source, f"cluster is not reachable: {message}")


class ResourceLookupError(errors.StratumError):
    """A resource from the manifest could not be found or described."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(source, f"failed to look up resource {source!r}: {message}")


@_dataclasses.dataclass(frozen=True)
class ResourceMetadata:
    """Live metadata for one resource."""

    namespace: str
    resource: str
    """Plural resource type, e.g. ``deployments``."""
    creation_timestamp: _datetime.datetime | None = None


@_dataclasses.dataclass(frozen=True)
class ResourceElement:
    """One row of the resource listing."""

    name: str
    namespace: str
    api_version: str
    resource: str
    creation_timestamp: _datetime.datetime | None = None

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to a JSON-serializable dict."""
        return {
            "name": self.name,
            "namespace": self.namespace,
            "apiVersion": self.api_version,
            "resource": self.resource,
            "creationTimestamp": (
                self.creation_timestamp.isoformat() if self.creation_timestamp else None
            ),
        }


def split_manifest(manifest: str) -> list[dict[str, _typing.Any]]:
    """
    Split a manifest into its resource documents.

    Empty documents are skipped.

    Raises:
        stratum.errors.FormatError: If the manifest is not valid YAML or a
            document is not a mapping.
    """
    documents: list[dict[str, _typing.Any]] = []
    try:
        for document in _yaml.safe_load_all(manifest):
            if document is None:
                continue
            if not isinstance(document, dict):
                raise errors.FormatError(
                    "manifest", f"resource must be a mapping, got {type(document).__name__}"
                )
            documents.append(document)
    except _yaml.YAMLError as e:
        raise errors.FormatError("manifest", f"invalid YAML: {e}") from e
    return documents


def resource_name(document: _typing.Mapping[str, _typing.Any]) -> str:
    """Return ``metadata.name`` of a resource document, or an empty string."""
    metadata = document.get("metadata") or {}
    return str(metadata.get("name", "")) if isinstance(metadata, dict) else ""


def guess_resource(kind: str) -> str:
    """Guess the plural resource type for a kind (``Ingress`` -> ``ingresses``)."""
    lower = kind.lower()
    if not lower:
        return lower
    if lower.endswith("s"):
        return lower + "es"
    if lower.endswith("y") and lower[-2:-1] not in ("a", "e", "i", "o", "u"):
        return lower[:-1] + "ies"
    return lower + "s"


def _parse_timestamp(value: _typing.Any) -> _datetime.datetime | None:
    if value is None:
        return None
    if isinstance(value, _datetime.datetime):
        timestamp = value
    else:
        try:
            timestamp = _datetime.datetime.fromisoformat(str(value))
        except ValueError:
            return None
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=_datetime.timezone.utc)
    return timestamp


class ClusterClient(_abc.ABC):
    """Access to the cluster a release was deployed to."""

    @_abc.abstractmethod
    def is_reachable(self) -> bool:
        """Check whether the cluster answers requests."""

    @_abc.abstractmethod
    def lookup(self, document: _typing.Mapping[str, _typing.Any]) -> ResourceMetadata:
        """
        Describe the live object matching a manifest document.

        Raises:
            ResourceLookupError: If no matching object exists.
        """


class ManifestClient(ClusterClient):
    """
    Offline client that reads metadata from the manifest documents.

    Namespace and creation timestamp come from ``metadata``; the resource
    type is guessed from ``kind``.
    """

    def __init__(self, default_namespace: str = "") -> None:
        self._default_namespace = default_namespace

    def is_reachable(self) -> bool:
        return True

    def lookup(self, document: _typing.Mapping[str, _typing.Any]) -> ResourceMetadata:
        kind = document.get("kind")
        if not kind:
            raise ResourceLookupError(resource_name(document), "document has no kind")
        metadata = document.get("metadata") or {}
        if not isinstance(metadata, dict):
            raise ResourceLookupError(
                resource_name(document),
                f"metadata must be a mapping, got {type(metadata).__name__}",
            )
        return ResourceMetadata(
            namespace=str(metadata.get("namespace") or self._default_namespace),
            resource=guess_resource(str(kind)),
            creation_timestamp=_parse_timestamp(metadata.get("creationTimestamp")),
        )


class GetDeployed:
    """Lists the resources of a release manifest with their live metadata."""

    def __init__(self, client: ClusterClient) -> None:
        self._client = client

    def run(self, manifest: str) -> list[ResourceElement]:
        """
        Build the resource listing for a manifest.

        Args:
            manifest: Rendered multi-document YAML.

        Returns:
            One element per resource, in manifest order.

        Raises:
            ClusterUnreachableError: If the cluster cannot be reached.
            stratum.errors.FormatError: If the manifest cannot be parsed.
            ResourceLookupError: If a resource cannot be described.
        """
        if not self._client.is_reachable():
            raise ClusterUnreachableError("cluster", "health check failed")

        elements: list[ResourceElement] = []
        for document in split_manifest(manifest):
            name = resource_name(document)
            try:
                metadata = self._client.lookup(document)
            except LookupError as e:
                raise ResourceLookupError(name, str(e)) from e
            _logger.debug("Resolved %s/%s", metadata.resource, name)
            elements.append(
                ResourceElement(
                    name=name,
                    namespace=metadata.namespace,
                    api_version=str(document.get("apiVersion", "")),
                    resource=metadata.resource,
                    creation_timestamp=metadata.creation_timestamp,
                )
            )
        return elements
