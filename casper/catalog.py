"""The Casper catalog: a resolved manifest ready to be served.

Wraps the JSON-ready form of a manifest with a version hash, single-entity
lookup, and JSON round-tripping, so a host can either resolve data on startup
or load a manifest that was built ahead of time.
"""

import hashlib
import json
import logging
from pathlib import Path
from typing import Any, Iterable

from .core.models import ErrorReport
from .resolution import BuildResult, ComponentRegistry

logger = logging.getLogger(__name__)


def manifest_hash(manifest: dict[str, Any]) -> str:
    """Version hash of a manifest: sha256 of its canonical JSON."""
    canonical = json.dumps(manifest, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


class Casper:
    """A resolved manifest with its version hash."""

    def __init__(
        self,
        manifest: dict[str, dict[str, Any]],
        errors: ErrorReport | None = None,
        override_hash: str | None = None,
    ):
        self.manifest = manifest
        self.errors = errors if errors is not None else ErrorReport()
        self.hash = override_hash or manifest_hash(manifest)

        logger.info("Loaded %d entities (version %s)", len(self.manifest), self.hash[:12])

    @classmethod
    def from_result(cls, result: BuildResult) -> "Casper":
        return cls(result.manifest.to_dict(), errors=result.errors)

    @classmethod
    def parse(
        cls,
        data_dirs: Iterable[Path | str] | Path | str,
        registry: ComponentRegistry | None = None,
        **options: Any,
    ) -> "Casper":
        """Load and resolve everything under the data directories."""
        from .loader import build_manifest

        if isinstance(data_dirs, (str, Path)):
            data_dirs = [data_dirs]
        return cls.from_result(build_manifest(data_dirs, registry=registry, **options))

    @classmethod
    def from_json(cls, data: str) -> "Casper":
        """Create a Casper instance from a serialized catalog.

        Validates the root level only.

        Raises:
            ValueError: If the JSON is invalid or lacks ``manifest`` or ``hash``
        """
        try:
            payload = json.loads(data)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid catalog JSON: {e}") from e

        if not isinstance(payload, dict) or not isinstance(payload.get("manifest"), dict):
            raise ValueError("JSON data did not include a manifest!")
        if not isinstance(payload.get("hash"), str):
            raise ValueError("JSON data did not include a version hash!")

        return cls(payload["manifest"], override_hash=payload["hash"])

    def get(self, entity_id: str) -> dict[str, Any] | None:
        """Get a particular entity by id."""
        return self.manifest.get(entity_id)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self.manifest

    def __len__(self) -> int:
        return len(self.manifest)

    def to_dict(self) -> dict[str, Any]:
        return {"manifest": self.manifest, "hash": self.hash}

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
