"""Text-safe rendering of filesystem paths.

On POSIX, a filename that is not valid UTF-8 arrives as a ``str`` carrying
surrogate escapes (``\\udcff`` for byte ``0xff``).  Such strings cannot be
written to a UTF-8 stream, so anything printed or serialized goes through
:func:`display_path` first.  Undecodable bytes are shown as ``\\xNN``.
"""

from __future__ import annotations


def display_path(path: str) -> str:
    """Return *path* with undecodable bytes rendered as ``\\xNN`` escapes."""
    try:
        return path.encode("utf-8", "surrogateescape").decode("utf-8", "backslashreplace")
    except UnicodeEncodeError:
        # Lone surrogates that did not come from surrogateescape.
        return path.encode("utf-8", "backslashreplace").decode("utf-8")
