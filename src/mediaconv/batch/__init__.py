"""Batch jobs: YAML manifests and directory bulk conversion."""

from mediaconv.batch.bulk import discover_bulk_requests
from mediaconv.batch.manifest import (
    BatchManifest,
    ManifestError,
    ManifestModel,
    job_to_request,
    load_manifest,
    load_manifest_from_dict,
)

__all__ = [
    "BatchManifest",
    "ManifestError",
    "ManifestModel",
    "discover_bulk_requests",
    "job_to_request",
    "load_manifest",
    "load_manifest_from_dict",
]
