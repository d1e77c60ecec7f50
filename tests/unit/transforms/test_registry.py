#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for the transform registry and transform metadata."""

from unittest.mock import MagicMock, patch

import pytest

from mdcallouts.ast import Document
from mdcallouts.ast.transforms import NodeTransformer
from mdcallouts.transforms import (
    AddHeadingIdsTransform,
    CalloutTransform,
    ParameterSpec,
    TransformMetadata,
    TransformRegistry,
)


class ShoutTransform(NodeTransformer):
    """Test transform with one parameter."""

    def __init__(self, suffix: str = "!"):
        self.suffix = suffix


def _shout_metadata(**overrides) -> TransformMetadata:
    values = {
        "name": "shout",
        "description": "Test transform",
        "transformer_class": ShoutTransform,
        "parameters": {"suffix": ParameterSpec(type=str, default="!", help="Suffix")},
        "priority": 50,
        "tags": ["test"],
    }
    values.update(overrides)
    return TransformMetadata(**values)


@pytest.mark.unit
class TestParameterSpec:
    """Test ParameterSpec validation and coercion."""

    def test_validate_type(self):
        """Values of the wrong type are rejected."""
        spec = ParameterSpec(type=int, default=1)
        assert spec.validate(3)
        with pytest.raises(ValueError, match="Expected type int"):
            spec.validate("3")

    def test_bool_is_not_an_int(self):
        """True does not pass as an int parameter."""
        with pytest.raises(ValueError):
            ParameterSpec(type=int).validate(True)

    def test_choices_and_validator(self):
        """Choices and custom validators are enforced."""
        assert ParameterSpec(type=str, choices=["a", "b"]).validate("a")
        with pytest.raises(ValueError, match="must be one of"):
            ParameterSpec(type=str, choices=["a", "b"]).validate("c")
        with pytest.raises(ValueError, match="Validation failed"):
            ParameterSpec(type=int, validator=lambda v: v > 0).validate(0)

    @pytest.mark.parametrize(
        "spec_type,raw,expected",
        [(bool, "yes", True), (bool, "Off", False), (int, "42", 42), (str, "doc-", "doc-")],
    )
    def test_coerce(self, spec_type, raw, expected):
        """Command-line strings are converted to the declared type."""
        assert ParameterSpec(type=spec_type).coerce(raw) == expected

    def test_coerce_rejects_bad_values(self):
        """Unconvertible strings raise ValueError."""
        with pytest.raises(ValueError):
            ParameterSpec(type=bool).coerce("maybe")
        with pytest.raises(ValueError):
            ParameterSpec(type=int).coerce("ten")


@pytest.mark.unit
class TestTransformMetadata:
    """Test TransformMetadata."""

    def test_rejects_non_transformer_class(self):
        """Only NodeTransformer subclasses can be registered."""
        with pytest.raises(ValueError, match="NodeTransformer"):
            _shout_metadata(transformer_class=dict)

    def test_rejects_empty_name_and_negative_priority(self):
        """Name and priority are validated."""
        with pytest.raises(ValueError):
            _shout_metadata(name="")
        with pytest.raises(ValueError):
            _shout_metadata(priority=-1)

    def test_create_instance_applies_defaults(self):
        """Missing parameters take their defaults."""
        instance = _shout_metadata().create_instance()
        assert isinstance(instance, ShoutTransform)
        assert instance.suffix == "!"

    def test_create_instance_validates(self):
        """Invalid parameter values are rejected."""
        with pytest.raises(ValueError):
            _shout_metadata().create_instance(suffix=3)

    def test_required_parameter(self):
        """Required parameters must be given."""
        metadata = _shout_metadata(parameters={"suffix": ParameterSpec(type=str, required=True)})
        with pytest.raises(ValueError, match="Required parameter"):
            metadata.create_instance()

    def test_unknown_parameters_are_ignored_with_warning(self, caplog):
        """Unknown keywords do not reach the constructor."""
        instance = _shout_metadata().create_instance(volume=11)
        assert instance.suffix == "!"
        assert "unknown parameter" in caplog.text


@pytest.mark.unit
class TestTransformRegistry:
    """Test TransformRegistry."""

    def test_singleton(self):
        """Every instantiation returns the same registry."""
        assert TransformRegistry() is TransformRegistry()

    def test_builtins_registered(self, clean_registry):
        """The built-in transforms are available by name."""
        assert clean_registry.list_transforms() == ["callouts", "heading-ids"]
        assert isinstance(clean_registry.get_transform("callouts"), CalloutTransform)

    def test_get_transform_with_parameters(self, clean_registry):
        """Parameters reach the constructor."""
        transform = clean_registry.get_transform("heading-ids", id_prefix="doc-")
        assert isinstance(transform, AddHeadingIdsTransform)
        assert transform.id_prefix == "doc-"

    def test_unknown_name(self, clean_registry):
        """Looking up an unknown name lists the available ones."""
        with pytest.raises(KeyError, match="Available transforms: callouts, heading-ids"):
            clean_registry.get_metadata("nope")

    def test_register_and_unregister(self, clean_registry):
        """Custom transforms can be added and removed."""
        clean_registry.register(_shout_metadata())
        assert clean_registry.has_transform("shout")
        assert clean_registry.list_transforms(tags=["test"]) == ["shout"]

        assert clean_registry.unregister("shout") is True
        assert clean_registry.unregister("shout") is False
        assert not clean_registry.has_transform("shout")

    def test_register_before_first_use_wins_over_builtin(self, clean_registry):
        """An early registration under a built-in name is kept."""
        clean_registry.register(_shout_metadata(name="callouts"))
        assert clean_registry.get_metadata("callouts").transformer_class is ShoutTransform

    def test_resolve_orders_by_priority(self, clean_registry):
        """Lower priorities run first; given order breaks ties."""
        clean_registry.register(_shout_metadata())
        resolved = clean_registry.resolve_transforms(["heading-ids", "shout", "callouts"])

        assert [type(t) for t in resolved] == [CalloutTransform, ShoutTransform, AddHeadingIdsTransform]

    def test_resolve_mixes_names_and_instances(self, clean_registry):
        """Instances of registered classes take their class priority."""
        heading_ids = AddHeadingIdsTransform(id_prefix="x-")
        resolved = clean_registry.resolve_transforms([heading_ids, "callouts"])

        assert isinstance(resolved[0], CalloutTransform)
        assert resolved[1] is heading_ids

    def test_resolve_deduplicates_names(self, clean_registry):
        """A repeated name is instantiated once."""
        assert len(clean_registry.resolve_transforms(["callouts", "callouts"])) == 1

    def test_resolve_passes_options(self, clean_registry):
        """Per-name options configure the instances."""
        (transform,) = clean_registry.resolve_transforms(["heading-ids"], {"heading-ids": {"separator": "_"}})
        assert transform.separator == "_"

    def test_resolve_rejects_other_types(self, clean_registry):
        """Entries must be names or NodeTransformer instances."""
        with pytest.raises(TypeError):
            clean_registry.resolve_transforms([42])

    def test_discover_plugins(self, clean_registry):
        """Entry points returning metadata are registered; others are skipped."""
        good = MagicMock()
        good.name = "shout"
        good.load.return_value = _shout_metadata()
        bad = MagicMock()
        bad.name = "broken"
        bad.load.side_effect = ImportError("missing")
        wrong = MagicMock()
        wrong.name = "wrong"
        wrong.load.return_value = object()

        with patch("importlib.metadata.entry_points", return_value=[good, bad, wrong]):
            assert clean_registry.discover_plugins() == 1

        assert clean_registry.has_transform("shout")
        assert not clean_registry.has_transform("broken")

    def test_registered_transform_runs(self, clean_registry):
        """A custom transform resolved by name transforms documents."""
        clean_registry.register(_shout_metadata())
        transform = clean_registry.get_transform("shout", suffix="?")
        assert isinstance(transform.transform(Document()), Document)
