"""
Resource listings for rendered release manifests.
"""

from stratum.deployed.resources import (
    ClusterClient,
    ClusterUnreachableError,
    GetDeployed,
    ManifestClient,
    ResourceElement,
    ResourceLookupError,
    ResourceMetadata,
    guess_resource,
    split_manifest,
)
from stratum.deployed.writer import OUTPUT_FORMATS, ResourceListWriter, human_duration

__all__ = [
    "OUTPUT_FORMATS",
    "ClusterClient",
    "ClusterUnreachableError",
    "GetDeployed",
    "ManifestClient",
    "ResourceElement",
    "ResourceListWriter",
    "ResourceLookupError",
    "ResourceMetadata",
    "guess_resource",
    "human_duration",
    "split_manifest",
]
