#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcallouts/transforms/metadata.py
"""Descriptions of registered transforms and their parameters.

A ``TransformMetadata`` is what the registry stores under a transform name:
the class to instantiate, its run priority and a ``ParameterSpec`` per
constructor keyword. ``--transform heading-ids:id_prefix=doc-`` on the
command line and ``transform_options`` in the API both go through
``ParameterSpec.coerce``/``validate`` before the class is built.

Examples
--------
    >>> spec = ParameterSpec(type=int, default=100, validator=lambda v: v > 0)
    >>> spec.validate(spec.coerce("40"))
    True

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Type

from mdcallouts.ast.transforms import NodeTransformer

logger = logging.getLogger(__name__)

_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off"})


@dataclass
class ParameterSpec:
    """One keyword accepted by a transform constructor.

    Parameters
    ----------
    type : type
        ``str``, ``int`` or ``bool``; command-line strings are converted to it
    default : Any, default = None
        Passed to the constructor when the keyword is omitted; ``None`` leaves
        the constructor's own default in place
    help : str, default = ""
        Shown by ``--list-transforms``
    required : bool, default = False
        Instantiation fails when the keyword is missing
    choices : list or None, default = None
        Closed set of accepted values
    validator : callable or None, default = None
        Extra check; a falsy return rejects the value

    """

    type: Type
    default: Any = None
    help: str = ""
    required: bool = False
    choices: Optional[list[Any]] = None
    validator: Optional[Callable[[Any], bool]] = None

    def _matches_type(self, value: Any) -> bool:
        # True/False are ints to isinstance but never valid int parameters
        if self.type is int and isinstance(value, bool):
            return False
        return isinstance(value, self.type)

    def validate(self, value: Any) -> bool:
        """Check ``value`` against the type, the choices and the validator.

        Returns
        -------
        bool
            Always True; failures raise

        Raises
        ------
        ValueError
            Naming the first check the value failed

        """
        if not self._matches_type(value):
            raise ValueError(f"Expected type {self.type.__name__}, got {type(value).__name__}")
        if self.choices is not None and value not in self.choices:
            raise ValueError(f"Value must be one of {self.choices}, got {value}")
        if self.validator is not None and not self.validator(value):
            raise ValueError(f"Validation failed for value: {value}")
        return True

    def coerce(self, raw: str) -> Any:
        """Turn a command-line string into a value of ``type``.

        Booleans accept 1/0, true/false, yes/no and on/off in any case.
        Strings are returned as given.

        Raises
        ------
        ValueError
            If ``raw`` does not spell a value of the type

        """
        if self.type is bool:
            word = raw.strip().lower()
            if word in _TRUE_WORDS:
                return True
            if word in _FALSE_WORDS:
                return False
            raise ValueError(f"Expected a boolean, got {raw!r}")
        if self.type is int:
            return int(raw)
        return raw


@dataclass
class TransformMetadata:
    """Registry entry for one transform.

    Parameters
    ----------
    name : str
        Lookup key, e.g. ``"callouts"`` or ``"heading-ids"``
    description : str
        One line for ``--list-transforms``
    transformer_class : type
        ``NodeTransformer`` subclass built by ``create_instance``
    parameters : dict of str to ParameterSpec, default = empty dict
        Constructor keywords the transform accepts
    priority : int, default = 100
        Pipelines run lower priorities first; callouts use 10 so heading ids
        (100) see the rewritten tree
    version : str, default = "1.0.0"
    author : str or None, default = None
    tags : list of str, default = empty list
        Filter keys for ``TransformRegistry.list_transforms``

    Raises
    ------
    ValueError
        On an empty name, a negative priority or a class that is not a
        ``NodeTransformer``

    """

    name: str
    description: str
    transformer_class: Type[NodeTransformer]
    parameters: dict[str, ParameterSpec] = field(default_factory=dict)
    priority: int = 100
    version: str = "1.0.0"
    author: Optional[str] = None
    tags: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Transform name cannot be empty")
        if not (isinstance(self.transformer_class, type) and issubclass(self.transformer_class, NodeTransformer)):
            raise ValueError(f"transformer_class must inherit from NodeTransformer, got {self.transformer_class!r}")
        if self.priority < 0:
            raise ValueError(f"Priority must be non-negative, got {self.priority}")

    def _constructor_kwargs(self, given: dict[str, Any]) -> dict[str, Any]:
        kwargs = {}
        for name, spec in self.parameters.items():
            if name in given:
                spec.validate(given[name])
                kwargs[name] = given[name]
            elif spec.required:
                raise ValueError(f"Required parameter '{name}' not provided")
            elif spec.default is not None:
                kwargs[name] = spec.default
        return kwargs

    def create_instance(self, **kwargs: Any) -> NodeTransformer:
        """Build the transform from keyword parameters.

        Declared parameters are validated and defaulted; undeclared ones are
        logged at warning level and left out.

        Raises
        ------
        ValueError
            If a value fails validation, a required parameter is missing or
            the constructor rejects the keywords

        """
        constructor_kwargs = self._constructor_kwargs(kwargs)

        ignored = sorted(set(kwargs) - set(self.parameters))
        if ignored:
            logger.warning(
                "Transform '%s' received unknown parameter(s): %s. Valid parameters are: %s",
                self.name,
                ", ".join(ignored),
                ", ".join(sorted(self.parameters)) or "(none)",
            )

        try:
            return self.transformer_class(**constructor_kwargs)
        except TypeError as e:
            raise ValueError(f"Failed to create transform instance: {e}") from e


__all__ = [
    "ParameterSpec",
    "TransformMetadata",
]
