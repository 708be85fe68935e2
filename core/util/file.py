import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, Sequence, Tuple

from core.constants import IO_MAX_WORKERS, JSON_SUFFIX
from core.errors import ReadFailure, WriteFailure
from core.types import SourceFile
from core.util import all_predicates

log = logging.getLogger()

is_json_file = all_predicates(Path.is_file, lambda p: p.suffix.lower() == JSON_SUFFIX)


def collect_json_files(paths: Iterable[Path]) -> list[Tuple[Path, str]]:
    """
    Expand dropped or picked paths into JSON files and their import-relative paths.

    Args:
        paths: Files and/or directories.

    Returns:
        (absolute path, relative path) pairs. Files inside a directory keep the directory's
        own name as the first path component, single files use their bare name.
    """

    found = []
    for path in paths:
        path = Path(path)
        if path.is_dir():
            for file in sorted(path.rglob('*')):
                if is_json_file(file):
                    found.append((file, (Path(path.name) / file.relative_to(path)).as_posix()))
        elif is_json_file(path):
            found.append((path, path.name))
        else:
            log.debug(f'Ignoring non-JSON item {path}')
    return found


def _read(item: Tuple[Path, str]) -> SourceFile:
    file, relative_path = item
    return SourceFile(name=file.name, text=file.read_text(encoding='utf-8'), relative_path=relative_path)


def read_source_files(paths: Iterable[Path]) -> list[SourceFile]:
    """
    Read every JSON file below `paths` concurrently.

    Args:
        paths: Files and/or directories.

    Returns:
        One SourceFile per JSON file, in a stable order.

    Raises:
        ReadFailure: If any file could not be read. Nothing from the batch is returned.
    """

    items = collect_json_files(paths)
    try:
        with ThreadPoolExecutor(max_workers=IO_MAX_WORKERS) as executor:
            files = list(executor.map(_read, items))
    except (OSError, UnicodeDecodeError) as e:
        raise ReadFailure(f'Failed to read source files: {e}') from e

    log.debug(f'Read {len(files)} JSON file(s)')
    return files


def _stage(base: Path, relative_path: str, contents: str) -> Tuple[Path, Path]:
    target = base / relative_path
    target.parent.mkdir(parents=True, exist_ok=True)
    staged = target.with_name(target.name + '.tmp')
    staged.write_text(contents, encoding='utf-8')
    return staged, target


def _discard(staged: Iterable[Path]) -> None:
    for file in staged:
        try:
            file.unlink(missing_ok=True)
        except OSError:
            log.exception(f'Could not remove staged file {file}')


def write_files(base_directory: Path, files: Sequence[Tuple[str, str]]) -> list[Path]:
    """
    Write a batch of files under a base directory, creating folders as needed.

    Every file is first written next to its target and only moved into place once the
    whole batch has been staged, so a failure leaves no partially written batch behind.

    Args:
        base_directory: Directory the relative paths are resolved against.
        files: (relative path, contents) pairs.

    Returns:
        The written target paths.

    Raises:
        WriteFailure: If any file could not be staged or moved into place.
    """

    base = Path(base_directory)
    with ThreadPoolExecutor(max_workers=IO_MAX_WORKERS) as executor:
        futures = [executor.submit(_stage, base, relative_path, contents) for relative_path, contents in files]

    # the executor has waited for every stage, successful or not
    staged = [f.result() for f in futures if f.exception() is None]
    errors = [f.exception() for f in futures if f.exception() is not None]
    if errors:
        _discard(s for s, _ in staged)
        raise WriteFailure(f'Failed to write files to {base}: {errors[0]}') from errors[0]

    written = []
    try:
        for staged_file, target in staged:
            os.replace(staged_file, target)
            written.append(target)
    except OSError as e:
        _discard(s for s, t in staged if t not in written)
        raise WriteFailure(f'Failed to move files into {base}: {e}') from e

    log.info(f'Wrote {len(written)} file(s) to {base}')
    return written
