"""
Course Archive Utilities

Locates .tar.gz course exports and extracts them into a working directory.
"""

import tarfile
from pathlib import Path, PurePosixPath
from typing import List, Optional, Union

from ..errors import ArchiveError

ARCHIVE_SUFFIX = '.tar.gz'


def archive_stem(path: Union[str, Path]) -> str:
    """Course name for an archive: file name without .tar.gz, trailing spaces removed"""
    name = Path(path).name
    if name.endswith(ARCHIVE_SUFFIX):
        name = name[:-len(ARCHIVE_SUFFIX)]
    return name.strip()


def find_course_archives(input_path: Union[str, Path]) -> List[Path]:
    """
    Resolve the input to a list of .tar.gz files

    Args:
        input_path: A single .tar.gz file or a directory containing some

    Returns:
        Archive paths, sorted by name for directories
    """
    input_path = Path(input_path)

    if not input_path.exists():
        raise ArchiveError(f"Input path does not exist: {input_path}")

    if input_path.is_file():
        if not input_path.name.endswith(ARCHIVE_SUFFIX):
            raise ArchiveError(f"Input file must be a {ARCHIVE_SUFFIX} file: {input_path}")
        return [input_path]

    archives = sorted(
        p for p in input_path.iterdir()
        if p.is_file() and p.name.endswith(ARCHIVE_SUFFIX)
    )
    if not archives:
        raise ArchiveError(f"Input directory contains no {ARCHIVE_SUFFIX} files: {input_path}")
    return archives


def _common_top_dir(names: List[str]) -> Optional[str]:
    tops = {PurePosixPath(n).parts[0] for n in names if PurePosixPath(n).parts}
    if len(tops) != 1:
        return None
    top = tops.pop()
    # A lone top-level file is not a wrapping directory
    if all(PurePosixPath(n).parts == (top,) for n in names):
        return None
    return top


def extract_course(archive_path: Union[str, Path], dest_dir: Union[str, Path], verbose: bool = False) -> Path:
    """
    Extract a course archive, dropping its single top-level directory

    Absolute paths, '..' components, links and special files are skipped.

    Returns:
        The destination directory
    """
    archive_path = Path(archive_path)
    dest_dir = Path(dest_dir)
    dest_dir.mkdir(parents=True, exist_ok=True)

    try:
        with tarfile.open(archive_path, 'r:gz') as tar:
            members = tar.getmembers()
            top = _common_top_dir([m.name for m in members])

            for member in members:
                parts = PurePosixPath(member.name).parts
                if top is not None:
                    parts = parts[1:]
                if not parts or member.name.startswith('/') or '..' in parts:
                    continue
                if not (member.isfile() or member.isdir()):
                    continue

                target = dest_dir.joinpath(*parts)
                if member.isdir():
                    target.mkdir(parents=True, exist_ok=True)
                    continue

                target.parent.mkdir(parents=True, exist_ok=True)
                source = tar.extractfile(member)
                with source, open(target, 'wb') as f:
                    f.write(source.read())
    except (tarfile.TarError, OSError) as e:
        raise ArchiveError(f"Failed to extract course {archive_path.name}: {e}") from e

    if verbose:
        print(f"   Extracted to: {dest_dir}")

    return dest_dir
