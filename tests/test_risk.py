"""Tests for dependency extraction, setter matching and verdicts."""

from __future__ import annotations

from loop_analyzer.analyzer.effect_scan import iter_effect_candidates
from loop_analyzer.analyzer.risk import (
    classify_effect,
    classify_value,
    extract_dependencies,
    find_setter_calls,
    is_breaking_value,
    state_name_for_setter,
)
from loop_analyzer.analyzer.service import analyze_source
from loop_analyzer.ir import iter_calls, parse_source


def _value(expr: str) -> str:
    """Classify the first argument of ``setX(<expr>)``."""
    call = next(iter_calls(parse_source(f"setX({expr});")))
    return classify_value(call.arguments[0] if call.arguments else None)


def _effect(code: str):
    (candidate,) = iter_effect_candidates(parse_source(code))
    return candidate


class TestNamingConvention:
    def test_simple_setter(self):
        assert state_name_for_setter("setCount") == "count"

    def test_only_first_char_lowered(self):
        assert state_name_for_setter("setURL") == "uRL"
        assert state_name_for_setter("setIsOpen") == "isOpen"

    def test_prefix_is_case_sensitive(self):
        assert state_name_for_setter("SetCount") is None
        assert state_name_for_setter("resetCount") is None

    def test_bare_prefix_is_not_a_setter(self):
        assert state_name_for_setter("set") is None

    def test_non_state_setter_shaped_names_still_match(self):
        assert state_name_for_setter("setTimeout") == "timeout"


class TestDependencies:
    def test_identifiers_in_order(self):
        c = _effect("useEffect(() => {}, [b, a]);")
        assert extract_dependencies(c.dependency_list) == ["b", "a"]

    def test_non_identifiers_ignored(self):
        c = _effect("useEffect(() => {}, [props.id, 'x', 1, ...rest, , a]);")
        assert extract_dependencies(c.dependency_list) == ["a"]

    def test_duplicates_preserved(self):
        c = _effect("useEffect(() => {}, [a, a, b]);")
        assert extract_dependencies(c.dependency_list) == ["a", "a", "b"]


class TestValueClassification:
    def test_absent_argument(self):
        assert _value("") == "non_breaking"
        assert is_breaking_value(None) is False

    def test_booleans(self):
        assert _value("false") == "breaking"
        assert _value("true") == "non_breaking"

    def test_null_and_undefined(self):
        assert _value("null") == "breaking"
        assert _value("undefined") == "breaking"

    def test_numbers(self):
        assert _value("0") == "breaking"
        assert _value("0.0") == "breaking"
        assert _value("0x0") == "breaking"
        assert _value("1") == "non_breaking"
        assert _value("-0") == "non_breaking"   # unary expression
        assert _value("0n") == "non_breaking"   # BigInt

    def test_strings(self):
        assert _value("''") == "breaking"
        assert _value("'   '") == "breaking"
        assert _value(r"'\n\t'") == "breaking"
        assert _value("'x'") == "non_breaking"
        assert _value("' x '") == "non_breaking"

    def test_non_ascii_whitespace_string(self):
        assert _value("'" + chr(0xA0) + chr(0x3000) + "'") == "breaking"
        assert _value("'" + chr(0xFEFF) + chr(0x2028) + "'") == "breaking"

    def test_arrays(self):
        assert _value("[]") == "breaking"
        assert _value("[1, 2, 3]") == "non_breaking"
        assert _value("[,]") == "non_breaking"

    def test_parenthesized_literal(self):
        assert _value("(null)") == "breaking"

    def test_everything_else_non_breaking(self):
        for expr in (
            "count + 1", "prev => prev + 1", "{}", "`${a}`", "``", "fetchData()",
            "props.value", "other", "!flag", "void 0", "new Array()",
        ):
            assert _value(expr) == "non_breaking", expr


class TestSetterSearch:
    def test_finds_nested_setters_in_order(self):
        c = _effect('''
useEffect(() => {
  if (ready) {
    setA(1);
  }
  items.forEach((x) => setA(x));
  function later() { setA(null); }
}, [a]);
''')
        found = find_setter_calls(c.body, ["a"])
        assert [(m.setter, m.line) for m in found] == [("setA", 4), ("setA", 6), ("setA", 7)]

    def test_unrelated_setters_skipped(self):
        c = _effect("useEffect(() => { setB(0); setA(1); }, [a]);")
        found = find_setter_calls(c.body, ["a"])
        assert [m.setter for m in found] == ["setA"]

    def test_member_callee_not_a_setter(self):
        c = _effect("useEffect(() => { this.setA(0); store.setA(0); }, [a]);")
        assert find_setter_calls(c.body, ["a"]) == []

    def test_matching_is_case_sensitive(self):
        c = _effect("useEffect(() => { setCount(0); }, [Count]);")
        assert find_setter_calls(c.body, ["Count"]) == []

    def test_argument_captured(self):
        c = _effect("useEffect(() => { setA(); setA(0, 1); }, [a]);")
        found = find_setter_calls(c.body, ["a"])
        assert found[0].argument is None
        assert found[1].argument.value == 0


class TestScenarios:
    def test_reset_to_zero_is_guarded(self):
        """Scenario A."""
        (v,) = analyze_source("useEffect(() => { setCount(0); }, [count]);")
        assert v.dependencies == ["count"]
        assert [(s.setter, s.value) for s in v.setters] == [("setCount", "breaking")]
        assert v.risk == "guarded"

    def test_increment_is_risky(self):
        """Scenario B."""
        (v,) = analyze_source("useEffect(() => { setCount(count + 1); }, [count]);")
        assert v.risk == "risky"
        assert v.setters[0].value == "non_breaking"

    def test_empty_deps_no_verdict(self):
        """Scenario C."""
        assert analyze_source("useEffect(() => { setCount(count + 1); }, []);") == []

    def test_unrelated_state_no_verdict(self):
        """Scenario D."""
        assert analyze_source("useEffect(() => { setCount(0); }, [user]);") == []

    def test_any_breaking_call_guards(self):
        """Scenario E."""
        (v,) = analyze_source("useEffect(() => { setItems([]); setItems([1,2,3]); }, [items]);")
        assert [s.value for s in v.setters] == ["breaking", "non_breaking"]
        assert v.risk == "guarded"

    def test_only_non_identifier_deps_no_verdict(self):
        assert analyze_source("useEffect(() => { setId(1); }, [props.id]);") == []

    def test_conditional_setter_treated_like_top_level(self):
        (v,) = analyze_source('''
useEffect(() => {
  if (count > 10) {
    setCount(count - 1);
  }
}, [count]);
''')
        assert v.risk == "risky"

    def test_verdict_fields(self):
        code = '''
function Counter() {
  const [count, setCount] = useState(0);
  React.useEffect(() => {
    setCount((c) => c + 1);
  }, [count, count]);
}
'''
        (v,) = analyze_source(code, file="Counter.jsx")
        assert v.file == "Counter.jsx"
        assert v.line == 4
        assert v.hook == "useEffect"
        assert v.dependencies == ["count", "count"]
        assert v.setters[0].state == "count"
        assert v.setters[0].line == 5
        assert v.snippet == "React.useEffect(() => {"

    def test_classify_effect_none_without_setters(self):
        c = _effect("useEffect(() => { log(a); }, [a]);")
        assert classify_effect(c) is None

    def test_idempotent(self):
        code = '''
useEffect(() => { setA(0); setB(b + 1); }, [a, b]);
useEffect(() => { setB(b + 1); }, [b]);
'''
        first = [v.model_dump() for v in analyze_source(code)]
        second = [v.model_dump() for v in analyze_source(code)]
        assert first == second
        assert [v["risk"] for v in first] == ["guarded", "risky"]
