#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Errors raised by mdcallouts.

The callout rewrite never raises: a quote that is not a callout stays a
plain quote. Everything around it can fail, and each layer raises its own
subclass of ``MdCalloutsError`` so the command line can map failures to exit
codes (2 for ``ValidationError``, 3 for ``FileError`` and ``OutputWriteError``,
1 for the rest).

Exception Hierarchy
-------------------
- MdCalloutsError

  - ValidationError: bad keyword, option value or transform parameter
    - InvalidOptionsError: options object meant for another component

  - FileError: unusable input path
    - FileNotFoundError
    - FileAccessError

  - ParsingError: Markdown or front matter that cannot be read

  - RenderingError: HTML generation failed
    - OutputWriteError

  - TransformError: unknown transform or a transform that blew up

``FileNotFoundError`` shadows the builtin of the same name on purpose; import
it from this module when catching library errors.

"""

from typing import Any


class MdCalloutsError(Exception):
    """Base class; catch this to handle any failure raised by the library.

    Attributes
    ----------
    message : str
        Text the error was created with
    original_error : Exception or None
        Lower-level exception this one wraps, e.g. a ``yaml.YAMLError``

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(MdCalloutsError):
    """Rejected input to the API or the command line.

    ``parameter_name`` names the offending keyword or option (``"input"``
    when no Markdown file was found on the command line) and
    ``parameter_value`` holds what was passed.
    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Parser or renderer handed the wrong options class.

    Raised for instance when ``HtmlRendererOptions`` reaches the Markdown
    parser. ``expected_type`` and ``received_type`` record both classes.
    """

    def __init__(
        self,
        converter_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        if message is None:
            message = f"{converter_name} needs {expected_type.__name__}, not {received_type.__name__}"
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.converter_name = converter_name
        self.expected_type = expected_type
        self.received_type = received_type


class FileError(MdCalloutsError):
    """Problem with an input path.

    Subclasses set ``template``; it builds the message when none is given.
    """

    template = "Cannot use file: {path}"

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        super().__init__(message or self.template.format(path=file_path), original_error)
        self.file_path = file_path


class FileNotFoundError(FileError):
    """Input path does not exist."""

    template = "File not found: {path}"


class FileAccessError(FileError):
    """Input path exists but is a directory, unreadable or otherwise unusable."""

    template = "Cannot access file: {path}"


class ParsingError(MdCalloutsError):
    """Input could not be turned into a document tree.

    ``parsing_stage`` is ``"decoding"``, ``"frontmatter"``, ``"markdown"`` or
    ``"ast_conversion"``.
    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class RenderingError(MdCalloutsError):
    """HTML output could not be produced; ``rendering_stage`` says where."""

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class OutputWriteError(RenderingError):
    """Rendered output could not be written to ``file_path``."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        super().__init__(
            message or f"Failed to write output file: {file_path}",
            rendering_stage="file_write",
            original_error=original_error,
        )
        self.file_path = file_path


class TransformError(MdCalloutsError):
    """A pipeline step could not be set up or failed while running.

    ``transform_name`` is set when the failing step is known.
    """

    def __init__(self, message: str, transform_name: str | None = None, original_error: Exception | None = None):
        super().__init__(message, original_error)
        self.transform_name = transform_name


__all__ = [
    "MdCalloutsError",
    "ValidationError",
    "InvalidOptionsError",
    "FileError",
    "FileNotFoundError",
    "FileAccessError",
    "ParsingError",
    "RenderingError",
    "OutputWriteError",
    "TransformError",
]
