"""Mapping of local filesystem paths onto remote object keys.

Ambient process state (working directory, home directory) is always passed
in, so every function here is pure.
"""

HOME_MARKER = "~"
SEPARATOR = "/"


def absolute_path(local_path: str, cwd: str, home: str) -> str:
    """
    Resolve a user supplied path to an absolute path string.

    Args:
        local_path: Path as typed by the user, may be empty
        cwd: Current working directory
        home: Home directory substituted for a leading ``~``

    Returns:
        The absolute path. No normalisation is applied, so ``..`` and
        trailing separators are kept as given.
    """
    if not local_path:
        return cwd
    if local_path.startswith(HOME_MARKER):
        # Only the marker character itself is replaced, "~bob" becomes home + "bob"
        return home + local_path[len(HOME_MARKER):]
    if local_path.startswith(SEPARATOR):
        return local_path
    return f"{cwd}{SEPARATOR}{local_path}"


def strip_prefix(full_path: str, prefix: str) -> str:
    """
    Remove the first literal occurrence of ``prefix`` from ``full_path``.

    The match is not anchored to a path boundary: a prefix that recurs
    inside a directory name is removed from there. When the prefix is
    the leading part of the path the separator that follows it is
    dropped as well, so ``/Users/alice/Documents`` with prefix
    ``/Users/alice`` becomes ``Documents``.
    """
    if not prefix or prefix not in full_path:
        return full_path

    cleaned = full_path.replace(prefix, "", 1)
    if full_path.startswith(prefix) and cleaned.startswith(SEPARATOR):
        cleaned = cleaned[len(SEPARATOR):]
    return cleaned


def map_path(
    local_path: str,
    cwd: str,
    home: str,
    prefix: str,
    bucket: str,
    scheme: str = "s3",
) -> str:
    """
    Convert a local path into the remote key it is stored under.

    Returns:
        ``<scheme>://<bucket>/<cleaned-path>``
    """
    full_path = absolute_path(local_path, cwd, home)
    return f"{scheme}://{bucket}/{strip_prefix(full_path, prefix)}"
