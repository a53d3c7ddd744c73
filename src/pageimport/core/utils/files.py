"""Filesystem helpers for copying assets into the media directory"""

from pathlib import Path


def unique_filename(directory: Path, filename: str) -> str:
    """Return filename, or 'stem-N.ext' with the lowest N not already present in directory."""
    candidate = Path(filename)
    stem, suffix = candidate.stem, candidate.suffix
    n = 0
    name = filename
    while (directory / name).exists():
        n += 1
        name = f"{stem}-{n}{suffix}"
    return name
