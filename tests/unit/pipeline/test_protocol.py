"""Unit tests for the stage contract and its pass-through defaults."""

import pytest

pytestmark = pytest.mark.unit

from stagecraft.pipeline.errors import InvalidOptions, PipelineError
from stagecraft.pipeline.protocol import Component, StageComponent, default_init


class _Minimal(Component):
    """Overrides nothing."""


class _Structural:
    """Satisfies StageComponent without inheriting from Component."""

    def init(self, options):
        return options

    def forward(self, context, options):
        return context

    def reverse(self, context, options):
        return context


class _NoReverse:
    def init(self, options):
        return options

    def forward(self, context, options):
        return context


class TestStageComponentProtocol:
    def test_component_subclass_satisfies_protocol(self):
        assert isinstance(_Minimal(), StageComponent)

    def test_structural_class_satisfies_protocol(self):
        assert isinstance(_Structural(), StageComponent)

    def test_class_missing_reverse_does_not_satisfy_protocol(self):
        assert not isinstance(_NoReverse(), StageComponent)


class TestComponentDefaults:
    """A minimal component passes everything through."""

    def test_init_returns_mapping_unchanged(self):
        opts = {"a": 1, "b": 2}
        assert _Minimal().init(opts) == opts

    def test_init_preserves_key_order(self):
        assert list(_Minimal().init({"z": 1, "a": 2})) == ["z", "a"]

    def test_init_treats_none_as_empty(self):
        assert _Minimal().init(None) == {}

    @pytest.mark.parametrize("bad", [["a", 1], "opts", 42, {1: "non-string key"}])
    def test_init_rejects_non_mapping(self, bad):
        with pytest.raises(InvalidOptions, match="_Minimal"):
            _Minimal().init(bad)

    def test_forward_is_identity(self):
        ctx = {"k": "v"}
        assert _Minimal().forward(ctx, {}) is ctx

    def test_reverse_is_identity(self):
        ctx = ["anything"]
        assert _Minimal().reverse(ctx, {}) is ctx


class TestDefaultInit:
    def test_returns_plain_dict_copy(self):
        opts = {"a": 1}
        result = default_init(opts)
        assert result == opts
        assert result is not opts

    def test_error_is_value_error_and_pipeline_error(self):
        with pytest.raises(ValueError) as excinfo:
            default_init([("a", 1)], stage="Thing")
        assert isinstance(excinfo.value, PipelineError)
        assert excinfo.value.stage == "Thing"
