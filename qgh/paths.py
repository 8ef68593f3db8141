import os


def split_relative(directory: str, cwd: str | None = None) -> list[str]:
    """Split directory into components relative to cwd."""
    try:
        rel = os.path.relpath(directory, cwd or os.getcwd())
    except ValueError:
        # Different drive on Windows
        rel = directory
    return [part for part in rel.split(os.sep) if part] or [rel]


def common_prefix_length(paths: list[list[str]]) -> int:
    if not paths:
        return 0
    shortest = min(len(p) for p in paths)
    length = 0
    for i in range(shortest):
        first = paths[0][i]
        if any(p[i] != first for p in paths[1:]):
            break
        length += 1
    return length


def minimal_paths(directories: list[str], cwd: str | None = None) -> list[str]:
    """Shortest distinguishing path for each directory, in input order.

    Strips the leading components shared by every directory. A directory that
    is itself the shared prefix falls back to its last component, so the
    result never contains an empty string.
    """
    if not directories:
        return []
    parts = [split_relative(d, cwd) for d in directories]
    prefix = common_prefix_length(parts)
    result = []
    for p in parts:
        if prefix >= len(p):
            result.append(p[-1])
        else:
            result.append(os.sep.join(p[prefix:]))
    return result
