"""Load raw records from YAML data directories.

Records do not need any particular file layout: every ``*.yaml``/``*.yml``
file under a data directory holds a list of records, and records may be
spread across files however the authors like. Files are read in sorted path
order so that the same data always produces the same record order.

Problems with a file are reported under the file's path and never stop the
rest of the data from loading.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

import yaml

from .core.models import ErrorKind, ErrorReport, ResolutionIssue
from .resolution import BuildResult, ComponentRegistry, ManifestBuilder

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


@dataclass
class LoadResult:
    records: list[dict[str, Any]] = field(default_factory=list)
    errors: ErrorReport = field(default_factory=ErrorReport)
    files: list[Path] = field(default_factory=list)


def find_data_files(data_dirs: Iterable[Path | str]) -> list[Path]:
    """List YAML files under the given directories (or files), sorted per directory."""
    files: list[Path] = []
    for data_dir in data_dirs:
        path = Path(data_dir)
        if path.is_file():
            files.append(path)
        elif path.is_dir():
            files.extend(
                sorted(p for p in path.rglob("*") if p.is_file() and p.suffix in YAML_SUFFIXES)
            )
        else:
            logger.warning("Data directory %s does not exist", path)
    return files


def _load_error(path: Path, message: str) -> ResolutionIssue:
    return ResolutionIssue(kind=ErrorKind.LOAD_ERROR, component=None, message=f"{path}: {message}")


def load_file(path: Path, result: LoadResult) -> None:
    """Append the records of one YAML file to ``result``."""
    key = str(path)
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Failed to load %s: %s", path, exc)
        result.errors.add(key, _load_error(path, str(exc)))
        return

    result.files.append(path)
    if data is None:
        return
    if not isinstance(data, list):
        result.errors.add(key, _load_error(path, "root of a data file must be a list of records"))
        return

    for index, record in enumerate(data):
        if not isinstance(record, dict):
            result.errors.add(key, _load_error(path, f"entry #{index} is not a mapping"))
            continue
        result.records.append(record)


def load_records(data_dirs: Iterable[Path | str]) -> LoadResult:
    """Load every record found under the data directories.

    Args:
        data_dirs: Directories (searched recursively) or individual files

    Returns:
        LoadResult with the records in file order and any file-level errors
    """
    result = LoadResult()
    for path in find_data_files(data_dirs):
        load_file(path, result)

    logger.info("Loaded %d records from %d files", len(result.records), len(result.files))
    return result


def build_manifest(
    data_dirs: Iterable[Path | str],
    registry: ComponentRegistry | None = None,
    **options: Any,
) -> BuildResult:
    """Load records from data directories and resolve them.

    File-level load errors and resolution errors end up in the same report.
    """
    loaded = load_records(data_dirs)
    if registry is None:
        from .components import build_registry

        registry = build_registry()

    builder = ManifestBuilder(registry, loaded.records, report=loaded.errors, **options)
    return builder.run()
