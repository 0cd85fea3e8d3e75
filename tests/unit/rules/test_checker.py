"""Tests for checking values against rendered rules."""

import pytest

from ontoschema.compiler import SchemaCompiler
from ontoschema.errors import InvalidTermRecordError, UnknownHookError, ValueCheckError
from ontoschema.rules import Directive, DirectiveName, HookRegistry, RenderedRule, RuleChecker, RuleKind


@pytest.fixture
def checker():
    return RuleChecker()


@pytest.fixture
def rules(compiler):
    """Compile descriptors against the test registry."""
    def _rule(descriptor):
        return compiler.rule_for_descriptor(descriptor)
    return _rule


class TestScalars:
    """Test scalar kinds and directives."""

    def test_percentage(self, checker, rules):
        rule = rules({"type": "percentage", "decimals": 2})

        assert checker.check(rule, 42.5) == 42.5
        assert checker.check(rule, "12.25") == 12.25
        assert not checker.is_valid(rule, 101)
        assert not checker.is_valid(rule, 1.125)
        assert not checker.is_valid(rule, "abc")

    def test_integer(self, checker, rules):
        rule = rules({"type": ":type:value:int"})
        assert checker.check(rule, "7") == 7
        assert checker.check(rule, 8.0) == 8
        assert not checker.is_valid(rule, 1.5)

    def test_text_length_and_regex(self, checker, rules):
        rule = rules({"type": "iso_code"})
        assert checker.check(rule, "ITA") == "ITA"
        assert not checker.is_valid(rule, "I")
        assert not checker.is_valid(rule, "ita")

    def test_text_cast(self, checker, rules):
        rule = rules({"type": ":type:data:text"})
        assert checker.check(rule, 12) == "12"
        with pytest.raises(ValueCheckError):
            checker.check(rule, ["a"])

    def test_hex_is_lowercased(self, checker, rules):
        rule = rules({"type": ":type:value:hex"})
        assert checker.check(rule, "ABCDEF") == "abcdef"
        assert not checker.is_valid(rule, "xyz")

    def test_email_and_url(self, checker, rules):
        assert checker.is_valid(rules({"type": ":type:value:email"}), "a@b.org")
        assert not checker.is_valid(rules({"type": ":type:value:email"}), "nope")
        assert checker.is_valid(rules({"type": ":type:value:url"}), "https://example.org/x")
        assert not checker.is_valid(rules({"type": ":type:value:url"}), "example")

    def test_boolean(self, checker, rules):
        rule = rules({"type": ":type:data:bool"})
        assert checker.check(rule, "false") is False
        assert checker.check(rule, 1) is True

    def test_any_accepts_everything(self, checker, rules):
        rule = rules({"type": ":type:data:any"})
        assert checker.check(rule, {"a": [1]}) == {"a": [1]}

    def test_none_and_required(self, checker, rules):
        rule = rules({"type": ":type:data:text"})
        assert checker.check(rule, None) is None
        with pytest.raises(ValueCheckError, match="required"):
            checker.check(rule.required(), None)

    def test_exact_value(self, checker):
        rule = RenderedRule(RuleKind.NUMBER, [Directive(DirectiveName.EXACT, 3)])
        assert checker.is_valid(rule, 3)
        assert not checker.is_valid(rule, 4)

    def test_exclusive_fractional_range(self, checker, node, compiler):
        rule = compiler.rule_for_type([node("ratio", "numeric", range=[0, 1, False, False])])

        assert checker.check(rule, 0.5) == 0.5
        assert not checker.is_valid(rule, 0)
        assert not checker.is_valid(rule, 1)

    def test_invalid_pattern(self, checker):
        rule = RenderedRule(RuleKind.STRING, [Directive(DirectiveName.MATCHES, "[")])
        with pytest.raises(InvalidTermRecordError, match="Invalid regular expression") as exc_info:
            checker.check(rule, "abc")
        assert exc_info.value.reference == "["


class TestContainers:
    """Test arrays and objects."""

    def test_list_elements_are_checked_with_path(self, checker, rules):
        rule = rules({"type": "iso_code", "format": "list", "size": [1, 3, True, True]})

        assert checker.check(rule, ["ITA", "FR"]) == ["ITA", "FR"]
        assert not checker.is_valid(rule, [])
        assert not checker.is_valid(rule, ["A", "B", "C", "D"])
        with pytest.raises(ValueCheckError) as exc_info:
            checker.check(rule, ["ITA", "x"], "countries")
        assert exc_info.value.path == "countries[1]"

    def test_set_rejects_duplicates(self, checker, rules):
        rule = rules({"type": ":type:data:text", "format": "set"})
        assert checker.is_valid(rule, ["a", "b"])
        assert not checker.is_valid(rule, ["a", "a"])

    def test_array_kind(self, checker, rules):
        rule = rules({"type": ":type:data:text", "format": "list"})
        with pytest.raises(ValueCheckError, match="array"):
            checker.check(rule, "a")

    def test_object_keys_and_values(self, checker, rules):
        rule = rules({
            "type": ":type:data:object",
            "type-key": {"type": ":type:value:key", "length": [1, 3, True, True]},
            "type-value": {"type": "percentage"},
        })

        assert checker.check(rule, {"a": "50"}) == {"a": 50}
        assert not checker.is_valid(rule, {"abcd": 1})
        with pytest.raises(ValueCheckError) as exc_info:
            checker.check(rule, {"a": 500}, "scores")
        assert exc_info.value.path == "scores.a"

    def test_struct_must_be_mapping(self, checker, rules):
        rule = rules({"type": ":type:data:struct"})
        assert checker.is_valid(rule, {"x": 1})
        assert not checker.is_valid(rule, [1])


class TestHooks:
    """Test hook resolution."""

    def test_unknown_hook(self, checker):
        rule = RenderedRule(RuleKind.STRING, cast=[":rule:castMystery"])
        with pytest.raises(UnknownHookError):
            checker.check(rule, "a")

    def test_custom_registry(self):
        hooks = HookRegistry.default()
        hooks.register_custom(":rule:customUpper", lambda rule, value, path: value.upper())
        rule = RenderedRule(RuleKind.STRING, custom=[":rule:customUpper"])

        assert RuleChecker(hooks).check(rule, "abc") == "ABC"

    def test_default_compiler_hooks_resolve(self, checker):
        rule = SchemaCompiler().rule_for_type(":type:value:stamp")
        assert checker.check(rule, "1700000000") == 1700000000
        assert not checker.is_valid(rule, -5)
