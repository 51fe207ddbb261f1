"""
Tests for the ESLint integration helpers.
"""

from complexity_lens.eslint import (
    descriptors_from_eslint_results,
    find_eslint_config,
    get_complexity_level,
    parse_complexity_threshold,
    parse_complexity_variant,
    relative_path,
)
from complexity_lens.types import FunctionNodeType, Variant

SOURCE = "function f(a) {\n  return items.map((x) => x && a);\n}"


def message(line, complexity, node_type="FunctionDeclaration", severity=1, rule="complexity"):
    return {
        "ruleId": rule,
        "severity": severity,
        "message": f"Function has a complexity of {complexity}. Maximum allowed is 10.",
        "line": line,
        "column": 1,
        "nodeType": node_type,
    }


class TestDescriptorsFromResults:
    """Tests for descriptors_from_eslint_results()."""

    def test_extracts_and_sorts(self):
        results = [
            {
                "filePath": "/proj/src/a.js",
                "messages": [
                    message(1, 12),
                    message(2, 15, "ArrowFunctionExpression"),
                    message(1, 30, rule="max-lines"),
                    message(1, 40, severity=2),
                ],
            }
        ]
        descriptors = descriptors_from_eslint_results(results, "/proj", {"src/a.js": SOURCE})
        assert [(d.line, d.function_name, d.complexity) for d in descriptors] == [
            (2, "map", 15),
            (1, "f", 12),
        ]
        assert descriptors[0].node_type is FunctionNodeType.ARROW_FUNCTION_EXPRESSION
        assert {d.file_path for d in descriptors} == {"src/a.js"}

    def test_duplicates_keep_highest(self):
        results = [{"filePath": "/proj/a.js", "messages": [message(1, 11), message(1, 13), message(1, 12)]}]
        descriptors = descriptors_from_eslint_results(results, "/proj", {"a.js": SOURCE})
        assert len(descriptors) == 1
        assert descriptors[0].complexity == 13

    def test_without_source_names_are_unknown(self):
        results = [{"filePath": "/proj/a.js", "messages": [message(1, 11)]}]
        (descriptor,) = descriptors_from_eslint_results(results, "/proj")
        assert descriptor.function_name == "unknown"

    def test_missing_node_type_defaults_to_declaration(self):
        entry = message(1, 11)
        del entry["nodeType"]
        (descriptor,) = descriptors_from_eslint_results([{"filePath": "a.js", "messages": [entry]}], "/proj")
        assert descriptor.node_type is FunctionNodeType.FUNCTION_DECLARATION

    def test_skips_messages_without_line(self):
        entry = message(1, 11)
        del entry["line"]
        assert descriptors_from_eslint_results([{"filePath": "a.js", "messages": [entry]}], "/proj") == []

    def test_relative_path(self):
        assert relative_path("/proj/src/a.js", "/proj") == "src/a.js"
        assert relative_path("/proj/src/a.js", "/proj/") == "src/a.js"
        assert relative_path("/other/a.js", "/proj") == "/other/a.js"


class TestConfigParsing:
    """Tests for reading complexity settings from flat config text."""

    def test_threshold_takes_highest(self):
        text = 'rules: { complexity: ["warn", { max: 10, variant: "modified" }] },\nrules: { complexity: [\'error\', { max: 15 }] }'
        assert parse_complexity_threshold(text) == 15

    def test_threshold_default(self):
        assert parse_complexity_threshold("export default [];") == 10
        assert parse_complexity_threshold("", default=8) == 8

    def test_variant(self):
        assert parse_complexity_variant('complexity: ["warn", { max: 10, variant: "modified" }]') is Variant.MODIFIED
        assert parse_complexity_variant('complexity: ["warn", { max: 10 }]') is Variant.CLASSIC

    def test_find_config(self, tmp_path):
        assert find_eslint_config(tmp_path) is None
        (tmp_path / "eslint.config.mjs").write_text("export default [];")
        assert find_eslint_config(tmp_path) == tmp_path / "eslint.config.mjs"
        (tmp_path / "eslint.config.js").write_text("module.exports = [];")
        assert find_eslint_config(str(tmp_path)) == tmp_path / "eslint.config.js"


class TestComplexityLevel:
    """Tests for get_complexity_level()."""

    def test_levels(self):
        assert get_complexity_level(3) == "good"
        assert get_complexity_level(7) == "acceptable"
        assert get_complexity_level(10) == "acceptable"
        assert get_complexity_level(11) == "high"
        assert get_complexity_level("15") == "medium"
        assert get_complexity_level(25) == "low"
