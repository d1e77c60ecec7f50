#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcallouts/utils/io_utils.py
"""Writing rendered output.

``convert`` and the renderers accept a path, a binary stream or a text
stream as destination; ``write_content`` is the one place that tells them
apart.

"""

from __future__ import annotations

import io
from io import BytesIO, StringIO
from pathlib import Path
from typing import IO, Union, cast


def _is_binary_stream(output: Union[IO[bytes], IO[str]]) -> bool:
    """Guess whether a file-like object expects bytes."""
    if isinstance(output, BytesIO):
        return True
    if isinstance(output, StringIO) or isinstance(output, io.TextIOBase):
        return False
    if isinstance(output, (io.BufferedIOBase, io.RawIOBase)):
        return True
    mode = getattr(output, "mode", "")
    return isinstance(mode, str) and "b" in mode


def write_content(
    content: Union[str, bytes], output: Union[str, Path, IO[bytes], IO[str], None]
) -> Union[StringIO, BytesIO, None]:
    """Deliver ``content`` to ``output``.

    Paths are written as UTF-8 files. Streams get bytes or text depending on
    their mode, converting through UTF-8 when the types differ. With
    ``output=None`` nothing is written and the content comes back as a
    ``StringIO`` or ``BytesIO`` at position 0.

    Raises
    ------
    TypeError
        Content that is not text or bytes, or a destination without ``write``

    Examples
    --------
        >>> sink = BytesIO()
        >>> write_content("<p>Hi</p>", sink)
        >>> sink.getvalue()
        b'<p>Hi</p>'

    """
    if not isinstance(content, (str, bytes)):
        raise TypeError(f"Content must be str or bytes, got {type(content)}")

    if output is None:
        if isinstance(content, str):
            return StringIO(content)
        return BytesIO(content)

    if isinstance(output, (str, Path)):
        target = Path(output)
        if isinstance(content, str):
            target.write_text(content, encoding="utf-8")
        else:
            target.write_bytes(content)
        return None

    if hasattr(output, "write"):
        if _is_binary_stream(output):
            data = content.encode("utf-8") if isinstance(content, str) else content
            cast(IO[bytes], output).write(data)
        else:
            text = content.decode("utf-8") if isinstance(content, bytes) else content
            cast(IO[str], output).write(text)
        return None

    raise TypeError(f"Unsupported output type: {type(output)}")


__all__ = ["write_content"]
