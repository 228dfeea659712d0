"""
Tests for the front-end pipeline: FrontEnd, FrontEndOptions and the
convenience functions, including the end-to-end scenarios.
"""

import pytest

from mylang import CompilationError, MyLangError, __version__
from mylang.frontend import (
    FrontEnd,
    FrontEndOptions,
    MissingTokenError,
    compile_file,
    compile_source,
    dump_source,
)
from mylang.frontend.lexer import TokenType


# =============================================================================
# End-to-End Scenarios
# =============================================================================

class TestScenarios:
    """Whole-pipeline behavior on small programs."""

    def test_return_zero(self):
        result = compile_source("int main() { return 0; }")
        assert result.success
        assert result.diagnostics == []
        assert "FunctionDecl main : int" in result.dump
        assert "Literal 0" in result.dump

    def test_precedence_in_dump(self):
        result = compile_source("int main() { int x = 1 + 2 * 3; return x; }")
        assert result.success
        lines = result.dump.split("\n")
        plus = lines.index("        BinaryExpr +")
        assert lines[plus + 1] == "          Literal 1"
        assert lines[plus + 2] == "          BinaryExpr *"
        assert lines[plus + 3] == "            Literal 2"
        assert lines[plus + 4] == "            Literal 3"

    def test_undeclared(self):
        result = compile_source("int main() { return y; }")
        assert not result.success
        assert len(result.diagnostics) == 1
        assert result.diagnostics[0].kind == "undeclared"
        assert "'y'" in str(result.diagnostics[0])

    def test_redefinition(self):
        result = compile_source("int main() { int x = 1; int x = 2; return x; }")
        assert not result.success
        assert len(result.diagnostics) == 1
        assert result.diagnostics[0].kind == "redefinition"
        assert "'x'" in str(result.diagnostics[0])

    def test_void_return_mismatch(self):
        result = compile_source("void f() { return 1; }")
        assert not result.success
        assert "return type mismatch" in str(result.diagnostics[0])

    def test_initializer_mismatch(self):
        result = compile_source('int main() { int x = "hi"; return x; }')
        assert not result.success
        assert "type mismatch in initialization" in str(result.diagnostics[0])


# =============================================================================
# Pipeline Behavior
# =============================================================================

class TestFrontEnd:
    """FrontEnd results and options."""

    def test_result_fields(self):
        result = FrontEnd().compile_source("int main() { return 0; }", "main.ml")
        assert result.filename == "main.ml"
        assert result.tokens[-1].type == TokenType.EOF
        assert result.token_count == 9
        assert len(result.ast.declarations) == 1

    def test_accepts_bytes(self):
        result = compile_source(b"int main() { return 0; }")
        assert result.success

    def test_tree_and_dump_present_on_failure(self):
        result = compile_source("int main() { return y; }")
        assert result.ast is not None
        assert result.dump.startswith("Program")

    def test_missing_semicolon_is_a_diagnostic(self):
        result = compile_source("int main() { int x = 1 return x; }")
        assert not result.success
        assert [type(d) for d in result.diagnostics] == [MissingTokenError]

    def test_quiet_syntax(self):
        """Without syntax diagnostics, recoverable syntax errors pass."""
        options = FrontEndOptions(syntax_diagnostics=False)
        result = compile_source("int main() { int x = 1 return x; }", options=options)
        assert result.success

    def test_quiet_syntax_keeps_semantic_errors(self):
        options = FrontEndOptions(syntax_diagnostics=False)
        result = compile_source("int main() { return y }", options=options)
        assert [d.kind for d in result.diagnostics] == ["undeclared"]

    def test_diagnostics_merged_in_source_order(self):
        """Syntax and semantic diagnostics interleave by position."""
        result = compile_source("int main() {\n  return y\n}\nvoid f() { return 1; }")
        assert [str(d) for d in result.diagnostics] == [
            "[2:10] use of undeclared identifier 'y'",
            "[3:1] expected ';'",
            "[4:12] return type mismatch: expected void, got int",
        ]

    def test_line_comments_option(self):
        source = "// entry point\nint main() { return 0; }"
        assert compile_source(source).success
        assert not compile_source(source, options=FrontEndOptions(line_comments=False)).success

    def test_float_literals_option(self):
        source = "float f() { return 1.5; }"
        assert compile_source(source).success
        assert not compile_source(source, options=FrontEndOptions(float_literals=False)).success


class TestFiles:
    """compile_file()."""

    def test_compile_file(self, tmp_path):
        path = tmp_path / "prog.ml"
        path.write_text("int main() { return y; }")
        result = compile_file(path)
        assert result.filename == str(path)
        assert result.diagnostics[0].location.filename == str(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            FrontEnd().compile_file(tmp_path / "nope.ml")


# =============================================================================
# Convenience Functions
# =============================================================================

class TestDumpSource:
    """dump_source() raises on diagnostics."""

    def test_returns_dump(self):
        assert dump_source("void f() { }") == (
            "Program\n"
            "  FunctionDecl f : void\n"
            "    BlockStmt"
        )

    def test_raises_compilation_error(self):
        with pytest.raises(CompilationError) as excinfo:
            dump_source("int main() { return y; }")

        error = excinfo.value
        assert str(error) == "[1:21] use of undeclared identifier 'y'\n1 error"
        assert len(error.diagnostics) == 1

    def test_compilation_error_is_mylang_error(self):
        with pytest.raises(MyLangError):
            dump_source("int main() { int x; int x; return x; }")

    def test_version(self):
        assert __version__ == "1.0.0"
