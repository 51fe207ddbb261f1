"""
Tests for the function boundary engine.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from complexity_lens.boundaries import (
    find_arrow_end,
    find_arrow_start,
    find_end_fallback,
    find_function_boundaries,
    find_named_end,
    find_named_start,
)
from complexity_lens.boundaries.braces import callback_tail, resolve_body_end
from complexity_lens.boundaries.named import body_text, opens_body
from complexity_lens.types import FunctionBoundary, FunctionNodeType

from .conftest import arrow, declaration

# ============================================================================
# Strategies
# ============================================================================

source_lines = st.lists(
    st.sampled_from(
        [
            "function a() {",
            "const b = () => {",
            "const c = (",
            "  x,",
            "): number => {",
            "  items.map(i => i * 2);",
            "  if (x) { y(); }",
            "}, [dep]);",
            "}, 1000);",
            "};",
            "}",
            "  return (",
            "    <div />",
            "  );",
            "  // {",
            "  const s = `{",
            "`;",
            "",
        ]
    ),
    max_size=30,
)

node_types = st.sampled_from(list(FunctionNodeType))


class TestNamedFunctions:
    """Tests for declarations and named functions."""

    def test_simple_declaration(self):
        source = "function testFunction() {\n  return true;\n}"
        result = find_function_boundaries(source, [declaration(1, "testFunction")])
        assert result == {1: FunctionBoundary(start=1, end=3)}

    def test_empty_descriptors(self):
        assert find_function_boundaries("function test() {}", []) == {}

    def test_reported_line_inside_function(self):
        """The start walks back to the declaration."""
        source = "function testFunction() {\n  if (true) {\n    return true;\n  }\n}"
        result = find_function_boundaries(source, [declaration(2, "testFunction")])
        assert result[2] == FunctionBoundary(start=1, end=5)

    def test_multiple_functions_do_not_overlap(self):
        source = "function first() {\n  return 1;\n}\n\nfunction second() {\n  return 2;\n}"
        result = find_function_boundaries(source, [declaration(1, "first"), declaration(5, "second")])
        assert result[1].end < result[5].start
        assert result[5] == FunctionBoundary(start=5, end=7)

    def test_return_type_with_braces(self):
        """Braces in a return type annotation are not the body."""
        source = "function testFunction(): { prop: string } {\n  return { prop: 'value' };\n}"
        result = find_function_boundaries(source, [declaration(1, "testFunction")])
        assert result[1].end == 3

    def test_destructured_parameters(self):
        source = (
            "function testFunction({ prop1, prop2 }: { prop1: string, prop2: number }): boolean {\n"
            "  return true;\n"
            "}"
        )
        result = find_function_boundaries(source, [declaration(1, "testFunction")])
        assert result[1].end == 3

    def test_body_on_one_line(self):
        source = "function testFunction() { return true; }"
        result = find_function_boundaries(source, [declaration(1, "testFunction")])
        assert result[1] == FunctionBoundary(start=1, end=1)

    def test_template_literal_with_braces(self):
        source = "function testFunction() {\n  return `Value: ${obj.prop}`;\n}"
        result = find_function_boundaries(source, [declaration(1, "testFunction")])
        assert result[1].end == 3

    def test_declaration_without_body(self):
        """A bodiless declaration falls back to a one-line span."""
        source = "function testFunction(); // Type declaration only"
        result = find_function_boundaries(source, [declaration(1, "testFunction")])
        assert result[1] == FunctionBoundary(start=1, end=1)

    def test_does_not_end_at_inner_hook_callback(self):
        """A declaration keeps going past an inner `}, [deps]);`."""
        source = """function Component() {
  const scrollTo = useCallback(
    (i) => {
      if (x) doSomething();
    },
    [dep]
  );
  const onSelect = useCallback(() => {
    if (!api) return;
  }, [api]);
  return <div />;
}"""
        result = find_function_boundaries(
            source,
            [declaration(1, "Component"), arrow(3, "scrollTo"), arrow(8, "onSelect")],
        )
        assert result[1] == FunctionBoundary(start=1, end=12)
        assert result[3] == FunctionBoundary(start=3, end=6)
        assert result[8] == FunctionBoundary(start=8, end=10)

    def test_missing_node_type_behaves_as_declaration(self):
        source = "function testFunction() {\n  return true;\n}"
        result = find_function_boundaries(source, [{"line": 1, "functionName": "testFunction"}])
        assert result[1] == FunctionBoundary(start=1, end=3)

    def test_malformed_descriptors_are_skipped(self):
        """Undecodable descriptors are dropped; valid ones still get spans."""
        source = "function testFunction() {\n  return true;\n}"
        result = find_function_boundaries(
            source,
            [
                {"line": 1, "functionName": "testFunction", "nodeType": "FunctionDeclaration"},
                {"functionName": "broken"},
                {"line": "n/a"},
            ],
        )
        assert result == {1: FunctionBoundary(start=1, end=3)}


class TestArrowFunctions:
    """Tests for arrow function spans."""

    def test_const_arrow_with_body(self):
        source = "const testFunction = () => {\n  return true;\n};"
        result = find_function_boundaries(source, [arrow(1, "testFunction")])
        assert result[1] == FunctionBoundary(start=1, end=3)

    def test_multi_line_parameters_start_at_declaration(self):
        """An arrow reported at its `=>` line starts at the `= (` line."""
        source = """const getContrastRatioOptimized = (
  color1: ReturnType<typeof Color> | null,
  color2: ReturnType<typeof Color> | null
): number => {
  return 1;
};"""
        result = find_function_boundaries(source, [arrow(4, "getContrastRatioOptimized")])
        assert result[4] == FunctionBoundary(start=1, end=6)

    def test_start_walk_stops_at_previous_arrow(self):
        """An earlier function's `= (` is never borrowed."""
        source = """const parseDecisionPointsFn = (sourceCode, functionBoundaries, functions, filePath, projectRoot) =>
  parseDecisionPointsAST(sourceCode, functionBoundaries, functions, filePath, projectRoot);

  const folderPromises = folders.map((folder) => generateOneFolderHTML(folder));
  const filePromises = Array.from(fileMap.entries()).map(([filePath, functions]) =>
    generateOneFileHTML(filePath, functions)
  );
"""
        result = find_function_boundaries(source, [arrow(1), arrow(4), arrow(5)])
        assert result[1].start == 1
        assert result[4].start == 4
        assert result[5].start == 5

    def test_parameters_on_arrow_line_do_not_walk_back(self):
        """An earlier `= (` is ignored when the arrow's parameters are on its own line."""
        source = """function sum(items) {
  const total = (a + b);
  items.forEach((item) => {
    use(item);
  });
}"""
        result = find_function_boundaries(source, [declaration(1, "sum"), arrow(3)])
        assert result[3] == FunctionBoundary(start=3, end=5)

    def test_destructured_parameters_walk_back(self):
        source = "const render = ({\n  title,\n}) => {\n  return title;\n};"
        result = find_function_boundaries(source, [arrow(3, "render")])
        assert result[3] == FunctionBoundary(start=1, end=5)

    def test_object_literal_return(self):
        result = find_function_boundaries("const testFunction = () => ({ prop: 'value' });", [arrow(1)])
        assert result[1] == FunctionBoundary(start=1, end=1)

    def test_nested_object_literal_return(self):
        result = find_function_boundaries(
            "const testFunction = () => ({ prop: { nested: 'value' } });", [arrow(1)]
        )
        assert result[1].end == 1

    def test_jsx_attribute(self):
        """Arrows inside a JSX attribute end on their line."""
        for source in (
            "<button onClick={(e) => handleClick(e)}>Click</button>",
            "<input onChange={(e) => setValue(e.target.value)} />",
            "<button onClick={() => handleClick()}>Click</button>",
        ):
            assert find_function_boundaries(source, [arrow(1)])[1].end == 1

    def test_single_expression(self):
        for source in (
            "const testFunction = () => true;",
            "const items = [1, 2, 3].map(item => item * 2,);",
            "const result = items.find(item => item.id === targetId);",
            "const obj = { fn: () => value };",
        ):
            assert find_function_boundaries(source, [arrow(1)])[1].end == 1

    def test_multi_line_single_expression(self):
        source = "const result = items.find(item =>\n  item.id === targetId &&\n  item.valid\n);"
        result = find_function_boundaries(source, [arrow(1)])
        assert result[1].end == 4

    def test_expression_on_next_line(self):
        source = "const testFunction = () =>\n  someValue;"
        assert find_function_boundaries(source, [arrow(1)])[1].end == 2

    def test_jsx_return(self):
        source = "const Component = () => (\n  <div>\n    <span>Hello</span>\n  </div>\n);"
        result = find_function_boundaries(source, [arrow(1, "Component")])
        assert result[1] == FunctionBoundary(start=1, end=5)

    def test_jsx_return_with_nested_parens(self):
        source = """const Component = () => (
  <div>
    {items.map(item => (
      <Item key={item.id} />
    ))}
  </div>
);"""
        result = find_function_boundaries(source, [arrow(1, "Component")])
        assert result[1].end == 7

    def test_body_brace_on_next_line(self):
        source = "const testFunction = () =>\n{\n  return true;\n};"
        result = find_function_boundaries(source, [arrow(1)])
        assert result[1] == FunctionBoundary(start=1, end=4)

    def test_dependency_array(self):
        source = "useEffect(() => {\n  console.log('mounted');\n}, [deps]);"
        assert find_function_boundaries(source, [arrow(1)])[1].end == 3

    def test_dependency_array_on_next_line(self):
        """The `[deps]` tail may start on the line after the closing brace."""
        source = "useEffect(() => {\n  console.log('mounted');\n},\n[deps]);"
        assert find_function_boundaries(source, [arrow(1)])[1].end == 4

    def test_timer_callback(self):
        source = "setTimeout(() => {\n  console.log('timeout');\n}, 1000);"
        assert find_function_boundaries(source, [arrow(1)])[1].end == 3

    def test_nested_callbacks(self):
        """Each callback ends before the function enclosing it."""
        source = """function parent() {
  items.map(item => {
    return item.nested.map(nested => {
      return nested.value;
    });
  });
}"""
        result = find_function_boundaries(source, [declaration(1, "parent"), arrow(2), arrow(3)])
        assert result[1].end > result[2].end > result[3].end
        assert (result[1].end, result[2].end, result[3].end) == (7, 6, 5)

    def test_sibling_callbacks_never_nest(self):
        """Single-line callbacks on adjacent lines stay disjoint."""
        source = "items.forEach((item) => { process(item); });\nothers.forEach((other) => { process(other); });"
        result = find_function_boundaries(source, [arrow(1), arrow(2)])
        assert result[1].end < result[2].start

    def test_hooks_component(self, hooks_source, hooks_descriptors):
        """Component, effect, handler and cleanup nest correctly."""
        result = find_function_boundaries(hooks_source, hooks_descriptors)
        assert len(result) == 4
        assert result[1].end > result[2].end > result[3].end
        assert result[2].end >= result[6].end
        assert result[1] == FunctionBoundary(start=1, end=12)
        assert result[2] == FunctionBoundary(start=2, end=9)
        assert result[3] == FunctionBoundary(start=3, end=5)
        assert result[6] == FunctionBoundary(start=6, end=8)


class TestFirstWriterWins:
    """One boundary per reported line."""

    def test_shared_line(self):
        source = "function Component() {\n  return items.map(item => <Item onClick={() => go(item)} />);\n}"
        result = find_function_boundaries(source, [declaration(1, "Component"), arrow(2), arrow(2)])
        assert set(result) == {1, 2}


class TestHelpers:
    """Tests for the individual boundary steps."""

    def test_find_named_start_lookback(self):
        lines = ["function target() {"] + ["  x();"] * 60
        assert find_named_start(lines, 30, "target") == 1
        assert find_named_start(lines, 60, "target") == 60

    def test_find_arrow_start_without_arrow(self):
        assert find_arrow_start(["const a = (", "  b", ")"], 3) == 3

    def test_find_arrow_end_without_arrow(self):
        assert find_arrow_end(["function f() {", "}"], 1) is None

    def test_find_named_end_without_body(self):
        assert find_named_end(["declare const x: number;"], 1) is None

    def test_fallback_clamps(self):
        assert find_end_fallback(["a", "b", "c"], 2) == 3

    def test_opens_body(self):
        assert opens_body("function f(a) {")
        assert opens_body("): number => {")
        assert not opens_body("const x = {")

    def test_body_text_skips_parameter_braces(self):
        assert body_text("function f({ a }) {") == ") {"

    def test_callback_tail(self):
        assert callback_tail(["}, [a]);"], 0) == (True, False)
        assert callback_tail(["}, 500);"], 0) == (False, True)
        assert callback_tail(["},", "[a]);"], 0) == (True, False)

    def test_declaration_does_not_close_on_dependency_tail(self):
        lines = ["  }, [api]);"]
        assert resolve_body_end(lines, 0, FunctionNodeType.FUNCTION_DECLARATION) is None
        assert resolve_body_end(lines, 0, FunctionNodeType.ARROW_FUNCTION_EXPRESSION) == 1


class TestBoundaryProperties:
    """Property-based checks over arbitrary line soups."""

    @given(
        lines=source_lines,
        reported=st.lists(st.tuples(st.integers(1, 35), node_types), max_size=8),
    )
    @settings(max_examples=150)
    def test_one_ordered_span_per_line(self, lines, reported):
        """Every distinct reported line gets exactly one span with start <= end."""
        descriptors = [
            {"line": line, "functionName": "a", "nodeType": node_type.value} for line, node_type in reported
        ]
        result = find_function_boundaries("\n".join(lines), descriptors)
        assert set(result) == {line for line, _ in reported}
        for boundary in result.values():
            assert 1 <= boundary.start <= boundary.end
