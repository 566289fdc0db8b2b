from __future__ import annotations

import ast
import textwrap
from pathlib import Path

import pytest

from weighted_coverage.core.complexity import PythonComplexityProvider, cognitive_complexity
from weighted_coverage.core.types import Complexity
from weighted_coverage.errors import ComplexityError

LOOP = textwrap.dedent(
    """\
    def count(xs):
        total = 0
        for x in xs:
            if x:
                total += 1
        return total
    """
)

CHAIN = textwrap.dedent(
    """\
    def sign(x):
        if x > 0:
            return 1
        elif x < 0:
            return -1
        else:
            return 0
    """
)

METHODS = textwrap.dedent(
    """\
    class Box:
        def put(self, item):
            if item is None:
                raise ValueError("empty")
            self.item = item

    def helper():
        return 1
    """
)


def _write(tmp_path: Path, text: str, name: str = "mod.py") -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def _cognitive(text: str) -> int:
    return cognitive_complexity(ast.parse(textwrap.dedent(text)))


def test_supports_python_only() -> None:
    provider = PythonComplexityProvider()
    assert provider.supports(Path("a.py"))
    assert not provider.supports(Path("a.rs"))
    assert not provider.supports(Path("README.md"))


def test_function_spans_cyclomatic(tmp_path: Path) -> None:
    result = PythonComplexityProvider().analyze(_write(tmp_path, LOOP), Complexity.CYCLOMATIC, functions=True)
    assert result.sloc == 6
    (fn,) = result.functions
    assert (fn.name, fn.start, fn.end, fn.sloc) == ("count", 1, 6, 6)
    assert fn.complexity == 3
    assert result.complexity >= fn.complexity


def test_function_spans_cognitive(tmp_path: Path) -> None:
    result = PythonComplexityProvider().analyze(_write(tmp_path, LOOP), Complexity.COGNITIVE, functions=True)
    (fn,) = result.functions
    assert fn.complexity == 3
    assert result.complexity == 3


def test_functions_omitted_unless_requested(tmp_path: Path) -> None:
    result = PythonComplexityProvider().analyze(_write(tmp_path, LOOP), Complexity.CYCLOMATIC)
    assert result.functions == ()


def test_methods_use_qualified_names(tmp_path: Path) -> None:
    result = PythonComplexityProvider().analyze(_write(tmp_path, METHODS), Complexity.COGNITIVE, functions=True)
    assert [(f.name, f.complexity) for f in result.functions] == [("Box.put", 1), ("helper", 0)]


def test_syntax_error_is_complexity_error(tmp_path: Path) -> None:
    path = _write(tmp_path, "def broken(:\n    pass\n")
    with pytest.raises(ComplexityError, match="mod.py"):
        PythonComplexityProvider().analyze(path, Complexity.CYCLOMATIC)


def test_cognitive_elif_chain() -> None:
    assert _cognitive(CHAIN) == 3


def test_cognitive_nesting_increments() -> None:
    src = """\
    def f(rows):
        for row in rows:
            for cell in row:
                if cell:
                    pass
    """
    assert _cognitive(src) == 1 + 2 + 3


def test_cognitive_boolean_sequences() -> None:
    assert _cognitive("x = a and b and c\n") == 1
    assert _cognitive("x = a and b or c\n") == 2


def test_cognitive_try_and_ternary() -> None:
    src = """\
    def f(x):
        try:
            y = 1 if x else 2
        except ValueError:
            y = 0
        return y
    """
    assert _cognitive(src) == 2


def test_cognitive_straight_line_code_is_zero() -> None:
    assert _cognitive("x = 1\ny = x + 2\n") == 0


def test_span_includes_trailing_multiline_statement(tmp_path: Path) -> None:
    src = textwrap.dedent(
        """\
        def build(x):
            return dict(
                a=x,
                b=x,
            )
        """
    )
    result = PythonComplexityProvider().analyze(_write(tmp_path, src), Complexity.CYCLOMATIC, functions=True)
    (fn,) = result.functions
    assert (fn.start, fn.end, fn.sloc) == (1, 5, 5)
