#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcallouts/transforms/registry.py
"""Name-to-transform lookup used by the API and the ``--transform`` flag.

``callouts`` and ``heading-ids`` are always present. Other packages can add
transforms by publishing a ``TransformMetadata`` object in the
``mdcallouts.transforms`` entry point group::

    [project.entry-points."mdcallouts.transforms"]
    admonitions = "my_package.transforms:ADMONITIONS_METADATA"

Both sources are loaded lazily, on the first query, so importing the package
never imports plugins.

Examples
--------
    >>> from mdcallouts.transforms import transform_registry
    >>> transform_registry.list_transforms()
    ['callouts', 'heading-ids']
    >>> transformer = transform_registry.get_transform("heading-ids", id_prefix="doc-")

"""

from __future__ import annotations

import importlib.metadata
import logging
from typing import TYPE_CHECKING, Any, Optional, Sequence, Union

from mdcallouts.ast.transforms import NodeTransformer
from mdcallouts.constants import TRANSFORM_ENTRY_POINT_GROUP

if TYPE_CHECKING:
    from mdcallouts.transforms.metadata import TransformMetadata

logger = logging.getLogger(__name__)

# Rank given to transformer instances whose class was never registered
DEFAULT_PRIORITY = 100


class TransformRegistry:
    """Registered transforms keyed by name.

    There is one registry per process; constructing the class again hands
    back the existing object, so ``TransformRegistry()`` and the module
    level ``transform_registry`` are interchangeable.
    """

    _instance: Optional[TransformRegistry] = None
    _transforms: dict[str, TransformMetadata]
    _initialized: bool

    def __new__(cls) -> TransformRegistry:
        if cls._instance is None:
            registry = super().__new__(cls)
            registry._transforms = {}
            registry._initialized = False
            cls._instance = registry
        return cls._instance

    def _load_defaults(self) -> None:
        if self._initialized:
            return
        self._initialized = True

        from mdcallouts.transforms._builtin_metadata import BUILTIN_TRANSFORMS

        for metadata in BUILTIN_TRANSFORMS:
            # a name claimed with register() before the first query keeps its entry
            self._transforms.setdefault(metadata.name, metadata)
        self.discover_plugins()

    def register(self, metadata: TransformMetadata) -> None:
        """Add ``metadata`` under its name, replacing (with a warning) any previous entry."""
        if metadata.name in self._transforms:
            logger.warning("Transform '%s' already registered, overwriting", metadata.name)
        self._transforms[metadata.name] = metadata
        logger.debug("Registered transform: %s", metadata.name)

    def unregister(self, name: str) -> bool:
        """Drop ``name``; the return value says whether it was registered."""
        self._load_defaults()
        if self._transforms.pop(name, None) is None:
            return False
        logger.debug("Unregistered transform: %s", name)
        return True

    def get_metadata(self, name: str) -> TransformMetadata:
        """Look up the entry for ``name``.

        Raises
        ------
        KeyError
            Listing the registered names when ``name`` is unknown

        """
        self._load_defaults()
        try:
            return self._transforms[name]
        except KeyError:
            available = ", ".join(sorted(self._transforms)) or "(none)"
            raise KeyError(f"Transform '{name}' not registered. Available transforms: {available}") from None

    def get_transform(self, name: str, **kwargs: Any) -> NodeTransformer:
        """Build the transform registered as ``name`` with ``kwargs``.

        Raises
        ------
        KeyError
            Unknown name
        ValueError
            A parameter failed validation

        """
        return self.get_metadata(name).create_instance(**kwargs)

    def has_transform(self, name: str) -> bool:
        self._load_defaults()
        return name in self._transforms

    def list_transforms(self, tags: Optional[list[str]] = None) -> list[str]:
        """Sorted registered names, optionally only those sharing a tag with ``tags``."""
        self._load_defaults()
        if tags is None:
            return sorted(self._transforms)
        wanted = set(tags)
        return sorted(name for name, metadata in self._transforms.items() if wanted.intersection(metadata.tags))

    def _priority_of(self, transformer: NodeTransformer) -> int:
        return next(
            (
                metadata.priority
                for metadata in self._transforms.values()
                if type(transformer) is metadata.transformer_class
            ),
            DEFAULT_PRIORITY,
        )

    def resolve_transforms(
        self,
        transforms: Sequence[Union[str, NodeTransformer]],
        options: Optional[dict[str, dict[str, Any]]] = None,
    ) -> list[NodeTransformer]:
        """Instantiate a pipeline description in run order.

        Names are built with their entry in ``options`` (a second mention of
        a name is ignored); instances are used as given and ranked by the
        priority of their registered class. The result is sorted by
        priority, lowest first, ties keeping the input order. With the
        built-ins this puts ``callouts`` (10) ahead of ``heading-ids`` (100).

        Parameters
        ----------
        transforms : sequence of str or NodeTransformer
            Pipeline entries
        options : dict of str to dict, optional
            Constructor keywords per name, e.g. ``{"heading-ids": {"id_prefix": "doc-"}}``

        Raises
        ------
        KeyError
            An unknown name
        TypeError
            An entry that is neither a name nor a transformer

        """
        self._load_defaults()
        options = options or {}

        ranked: list[tuple[int, NodeTransformer]] = []
        built: set[str] = set()
        for entry in transforms:
            if isinstance(entry, NodeTransformer):
                ranked.append((self._priority_of(entry), entry))
                continue
            if not isinstance(entry, str):
                raise TypeError(f"Transform must be str or NodeTransformer, got {type(entry).__name__}")
            if entry in built:
                continue
            built.add(entry)
            metadata = self.get_metadata(entry)
            ranked.append((metadata.priority, metadata.create_instance(**options.get(entry, {}))))

        ranked.sort(key=lambda pair: pair[0])
        logger.debug("Resolved %d transform(s) for execution", len(ranked))
        return [transformer for _, transformer in ranked]

    def discover_plugins(self) -> int:
        """Register every ``TransformMetadata`` published under the entry point group.

        Entry points that fail to import or hold something else are logged
        and skipped. Returns how many were registered.
        """
        from mdcallouts.transforms.metadata import TransformMetadata

        count = 0
        for ep in importlib.metadata.entry_points(group=TRANSFORM_ENTRY_POINT_GROUP):
            try:
                metadata = ep.load()
            except Exception as e:
                logger.warning("Failed to load transform entry point '%s': %s", ep.name, e)
                continue
            if not isinstance(metadata, TransformMetadata):
                logger.warning("Entry point '%s' did not return TransformMetadata, skipping", ep.name)
                continue

            self.register(metadata)
            count += 1
            logger.debug("Discovered transform from entry point: %s", ep.name)

        if count:
            logger.info("Discovered %d transform(s) from entry points", count)
        return count

    def clear(self) -> None:
        """Forget everything; the next query loads the built-ins and plugins again."""
        self._transforms.clear()
        self._initialized = False
        logger.debug("Cleared transform registry")


transform_registry = TransformRegistry()

__all__ = [
    "TransformRegistry",
    "transform_registry",
]
