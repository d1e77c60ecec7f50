#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcallouts/parsers/base.py
"""Shared input handling for parsers.

Everything after parsing works on the ``Document`` tree; this module is
where the different ways of handing over source text (a string, a path,
bytes or a binary stream) are reduced to one decoded string.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from mdcallouts.ast.nodes import Document
from mdcallouts.exceptions import FileAccessError, FileNotFoundError, InvalidOptionsError, ParsingError, ValidationError
from mdcallouts.options.base import BaseParserOptions

logger = logging.getLogger(__name__)

# Strings longer than this, or containing a newline, are never treated as paths
_MAX_PATH_LENGTH = 260


class BaseParser(ABC):
    """Parser interface; subclasses implement ``parse``.

    ``parse`` takes source text as a ``str`` (or a ``str`` naming an existing
    file), a ``Path``, a binary stream or raw ``bytes``.
    ``_load_text_content`` turns any of these into text.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Settings for the concrete parser

    """

    def __init__(self, options: BaseParserOptions | None = None):
        self.options = options

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Reject an options object built for a different component.

        Raises
        ------
        InvalidOptionsError
            When ``options`` is set and is not an ``expected_type``; the
            message names ``parser_name``

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, input_data: Union[str, Path, IO[bytes], bytes]) -> Document:
        """Build the tree for ``input_data``.

        Raises
        ------
        ParsingError
            Input that cannot be decoded or parsed
        FileNotFoundError
            A path that does not exist
        FileAccessError
            A path that exists but cannot be read as a file

        """

    @staticmethod
    def _read_path(path: Path) -> bytes:
        """Read a file, translating OS errors into library errors."""
        if not path.exists():
            raise FileNotFoundError(str(path))
        if not path.is_file():
            raise FileAccessError(str(path), message=f"Not a regular file: {path}")
        try:
            return path.read_bytes()
        except OSError as e:
            raise FileAccessError(str(path), original_error=e) from e

    @staticmethod
    def _decode(data: bytes, encoding: str) -> str:
        """Decode bytes, dropping a UTF-8 byte order mark if present.

        Raises
        ------
        ParsingError
            If the bytes are not valid in the given encoding

        """
        if encoding.lower().replace("_", "-") in ("utf-8", "utf8"):
            encoding = "utf-8-sig"
        try:
            return data.decode(encoding)
        except UnicodeDecodeError as e:
            raise ParsingError(
                f"Input is not valid {encoding}: {e}", parsing_stage="decoding", original_error=e
            ) from e

    def _load_text_content(self, input_data: Union[str, Path, IO[bytes], bytes], encoding: str = "utf-8") -> str:
        """Return ``input_data`` as text.

        A short single-line ``str`` naming an existing file is read from
        disk; any other ``str`` is the source itself. Text streams are
        returned as read.

        Raises
        ------
        ValidationError
            For an input that is none of the accepted types

        """
        if isinstance(input_data, bytes):
            return self._decode(input_data, encoding)
        if isinstance(input_data, Path):
            return self._decode(self._read_path(input_data), encoding)
        if isinstance(input_data, str):
            if len(input_data) <= _MAX_PATH_LENGTH and "\n" not in input_data:
                try:
                    path = Path(input_data)
                    if path.is_file():
                        logger.debug("Reading input from %s", path)
                        return self._decode(self._read_path(path), encoding)
                except OSError:
                    # Invalid as a path; it is content
                    pass
            return input_data
        if hasattr(input_data, "read"):
            chunk = input_data.read()
            return chunk if isinstance(chunk, str) else self._decode(chunk, encoding)

        raise ValidationError(
            f"Unsupported input type: {type(input_data).__name__}",
            parameter_name="input_data",
            parameter_value=input_data,
        )


__all__ = ["BaseParser"]
