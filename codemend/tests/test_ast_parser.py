"""Tests for the AST parser module."""

import pytest
from codemend.core.ast_parser import ParsedSource, detect_dialect, get_parser, is_supported_file, parse_source
from codemend.core.ast_parser.utils import should_skip_directory
from codemend.core.codemod import ParseFailure, SourceTree


# =========================================================================
# Sample sources
# =========================================================================

JSX_SOURCE = """\
import Avatar from '@atlaskit/avatar';

export const Example = () => <Avatar size="large" />;
"""

TSX_SOURCE = """\
import memoize from 'memoize-one';

function add(a: number, b: number): number {
  return a + b;
}

export const View = () => <div>{memoize(add)(1, 2)}</div>;
"""

BROKEN_SOURCE = """\
const = ;
"""


# =========================================================================
# Tests: Dialect detection
# =========================================================================

class TestDialectDetection:
    def test_javascript_family(self):
        assert detect_dialect("src/a.js") == "javascript"
        assert detect_dialect("src/a.jsx") == "javascript"
        assert detect_dialect("src/a.mjs") == "javascript"

    def test_typescript_family(self):
        assert detect_dialect("src/a.ts") == "typescript"
        assert detect_dialect("src/a.tsx") == "tsx"

    def test_declaration_files_unsupported(self):
        assert detect_dialect("types/index.d.ts") is None

    def test_unknown(self):
        assert detect_dialect("README.md") is None
        assert not is_supported_file("setup.py")

    def test_case_insensitive(self):
        assert detect_dialect("APP.TSX") == "tsx"

    def test_skip_directories(self):
        assert should_skip_directory("node_modules")
        assert should_skip_directory(".git")
        assert not should_skip_directory("src")


# =========================================================================
# Tests: Parsing
# =========================================================================

class TestParseSource:
    def test_javascript_accepts_jsx(self):
        result = parse_source(JSX_SOURCE, "javascript")
        assert isinstance(result, ParsedSource)
        assert result.dialect == "javascript"
        assert result.errors == []
        assert result.tree.root_node.type == "program"

    def test_tsx(self):
        result = parse_source(TSX_SOURCE, "tsx")
        assert not result.has_errors
        assert result.line_count == 7

    def test_source_bytes_match_text(self):
        result = parse_source(TSX_SOURCE, "tsx")
        assert result.source == TSX_SOURCE.encode("utf-8")

    def test_syntax_errors_reported(self):
        result = parse_source(BROKEN_SOURCE, "javascript")
        assert result.has_errors
        assert result.errors[0].line == 1

    def test_unknown_dialect(self):
        with pytest.raises(ValueError):
            get_parser("cobol")

    def test_parser_instances_are_cached(self):
        assert get_parser("tsx") is get_parser("tsx")


class TestSourceTree:
    def test_parse_failure_propagates(self):
        with pytest.raises(ParseFailure) as exc_info:
            SourceTree.from_text(BROKEN_SOURCE, "tsx")
        assert exc_info.value.line == 1

    def test_unmodified_tree(self):
        tree = SourceTree.from_text(TSX_SOURCE, "tsx")
        assert not tree.modified
        assert tree.dialect == "tsx"
