#!/usr/bin/env python3
"""PDB discovery."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path, PureWindowsPath

from ..domain.artifact import BinaryArtifact
from ..utils.logger import get_logger

logger = get_logger(__name__)


def candidate_pdb_paths(
    artifact: BinaryArtifact,
    search_paths: Iterable[str | Path] = (),
    use_codeview_path: bool = True,
) -> Iterator[Path]:
    """
    Yield PDB locations to try, most specific first.

    Order: the CodeView path recorded in the image (when absolute on this
    host), the CodeView file name beside the image, ``<stem>.pdb`` beside
    the image, then both names in each search directory.
    """
    image_dir = artifact.path.parent
    names: list[str] = []

    if use_codeview_path and artifact.pdb_path:
        # Recorded by the linker on the build machine, usually a Windows path;
        # only an absolute path on this host names a real location
        recorded = Path(artifact.pdb_path)
        if recorded.is_absolute():
            yield recorded
        names.append(PureWindowsPath(artifact.pdb_path).name)
    names.append(f"{artifact.path.stem}.pdb")

    unique_names = list(dict.fromkeys(names))

    for directory in (image_dir, *(Path(p) for p in search_paths)):
        for name in unique_names:
            yield directory / name


def locate_pdb(
    artifact: BinaryArtifact,
    explicit: str | Path | None = None,
    search_paths: Iterable[str | Path] = (),
    use_codeview_path: bool = True,
) -> Path | None:
    """
    Find the PDB for an artifact.

    Args:
        artifact: Image whose PDB is wanted
        explicit: PDB supplied by the user; when given, no search is done
        search_paths: Extra directories to look in
        use_codeview_path: Honour the path recorded in the debug directory

    Returns:
        Path to an existing PDB, or None
    """
    if explicit is not None:
        explicit = Path(explicit)
        if explicit.is_file():
            return explicit
        logger.warning(f"PDB {explicit} given for {artifact.artifact_id} does not exist")
        return None

    for candidate in candidate_pdb_paths(artifact, search_paths, use_codeview_path):
        if candidate.is_file():
            logger.debug(f"Using PDB {candidate} for {artifact.artifact_id}")
            return candidate

    logger.debug(f"No PDB found for {artifact.artifact_id}")
    return None
