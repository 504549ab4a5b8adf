from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List, Optional

from git_standup.config import DEFAULT_WHITELIST_FILENAME
from git_standup.options import StandupOptions


GIT_MARKER = ".git"


def read_search_roots(cwd: Path, whitelist_filename: str = DEFAULT_WHITELIST_FILENAME) -> List[Path]:
    """Search roots from the whitelist file in `cwd`, or `cwd` itself.

    The whitelist holds one path per line; blank lines and `#` comments are
    ignored and relative paths are taken relative to `cwd`.
    """
    whitelist = cwd / whitelist_filename
    if not whitelist.is_file():
        return [cwd]

    roots: List[Path] = []
    for line in whitelist.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        roots.append(cwd / Path(line).expanduser())
    return roots


def find_git_markers(root: Path, max_depth: int, follow_symlinks: bool = False) -> List[Path]:
    """Return `.git` entries under `root` at most `max_depth` levels below it.

    `root` itself is level 0, so a repository directly inside `root` has its
    marker at level 2. Directories are visited in sorted order.
    """
    markers: List[Path] = []
    if max_depth < 0 or not root.is_dir():
        return markers

    def onerror(err: OSError) -> None:
        _ = err

    root_str = os.path.abspath(root)
    for dirpath, dirnames, filenames in os.walk(root_str, onerror=onerror, followlinks=follow_symlinks):
        rel = os.path.relpath(dirpath, root_str)
        depth = 0 if rel == os.curdir else len(rel.split(os.sep))
        if depth + 1 > max_depth:
            dirnames[:] = []
            continue

        if GIT_MARKER in dirnames or GIT_MARKER in filenames:
            markers.append(Path(dirpath) / GIT_MARKER)
        # Markers are leaves; repository contents are still searched for nested repos.
        if depth + 2 > max_depth:
            dirnames[:] = []
        else:
            dirnames[:] = sorted(d for d in dirnames if d != GIT_MARKER)
    return markers


def markers_to_repositories(markers: Iterable[Path]) -> List[Path]:
    repos: List[Path] = []
    seen = set()
    for marker in markers:
        repo = Path(os.path.abspath(marker.parent))
        if repo in seen:
            continue
        seen.add(repo)
        repos.append(repo)
    return repos


def needs_recursive_search(cwd: Path, options: StandupOptions) -> bool:
    marker = cwd / GIT_MARKER
    return options.force_recursion or (not marker.is_dir() and not marker.is_file())


def locate_repositories(
    cwd: Path,
    options: StandupOptions,
    git,
    *,
    whitelist_filename: str = DEFAULT_WHITELIST_FILENAME,
) -> List[Path]:
    """Repository directories to report on, in discovery order.

    An empty list means no repository was found under `cwd` and `cwd` is not
    inside one either.
    """
    cwd = Path(os.path.abspath(cwd))
    markers: List[Path] = []

    if needs_recursive_search(cwd, options):
        # The user-facing depth counts repositories, the walk counts the marker too.
        depth = options.max_depth + 1
        for root in read_search_roots(cwd, whitelist_filename):
            markers.extend(find_git_markers(root, depth, options.follow_symlinks))
    else:
        markers.append(cwd / GIT_MARKER)

    if not markers:
        toplevel: Optional[Path] = git.get_toplevel(cwd)
        if toplevel is None:
            return []
        markers.append(toplevel / GIT_MARKER)

    return markers_to_repositories(markers)
