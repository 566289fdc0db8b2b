"""Complexity providers.

The scan engine only depends on the :class:`ComplexityProvider` protocol, so
analysers for other languages can be plugged in without touching it.  The
bundled :class:`PythonComplexityProvider` uses radon for cyclomatic complexity
and an AST visitor for cognitive complexity.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from radon.complexity import cc_visit
from radon.visitors import ComplexityVisitor, Function

from weighted_coverage.core.files import read_source
from weighted_coverage.core.types import Complexity
from weighted_coverage.errors import ComplexityError

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True, slots=True)
class FunctionSpan:
    """A function discovered in a file, with its inclusive line span."""

    name: str
    start: int
    end: int
    complexity: float

    @property
    def sloc(self) -> int:
        return self.end - self.start + 1


@dataclass(frozen=True, slots=True)
class FileComplexity:
    sloc: int
    complexity: float
    functions: tuple[FunctionSpan, ...] = ()


class ComplexityProvider(Protocol):
    """Capability returning structural complexity for a source file."""

    def supports(self, path: Path) -> bool: ...

    def analyze(self, path: Path, complexity: Complexity, *, functions: bool = False) -> FileComplexity: ...


# --------------------------- Cognitive complexity ---------------------------
class CognitiveVisitor(ast.NodeVisitor):
    """Accumulate cognitive complexity of a module or function body.

    Structural statements (``if``, loops, ``try``/``except``, ternaries) cost
    one plus the current nesting level; ``elif``/``else`` cost a flat one; each
    run of boolean operators costs one.  Nested functions and lambdas increase
    the nesting level without costing anything themselves.
    """

    def __init__(self) -> None:
        self.score = 0
        self.nesting = 0

    def _nested(self, nodes: list[ast.stmt] | list[ast.expr]) -> None:
        self.nesting += 1
        for node in nodes:
            self.visit(node)
        self.nesting -= 1

    def _visit_if(self, node: ast.If, *, is_elif: bool) -> None:
        self.score += 1 if is_elif else 1 + self.nesting
        self.visit(node.test)
        self._nested(node.body)
        orelse = node.orelse
        if len(orelse) == 1 and isinstance(orelse[0], ast.If):
            self._visit_if(orelse[0], is_elif=True)
        elif orelse:
            self.score += 1
            self._nested(orelse)

    def visit_If(self, node: ast.If) -> None:
        self._visit_if(node, is_elif=False)

    def _visit_loop(self, node: ast.For | ast.AsyncFor | ast.While) -> None:
        self.score += 1 + self.nesting
        if isinstance(node, ast.While):
            self.visit(node.test)
        else:
            self.visit(node.iter)
        self._nested(node.body)
        if node.orelse:
            self.score += 1
            self._nested(node.orelse)

    visit_For = _visit_loop
    visit_AsyncFor = _visit_loop
    visit_While = _visit_loop

    def visit_Try(self, node: ast.Try) -> None:
        for stmt in node.body:
            self.visit(stmt)
        for handler in node.handlers:
            self.score += 1 + self.nesting
            self._nested(handler.body)
        if node.orelse:
            self.score += 1
            self._nested(node.orelse)
        for stmt in node.finalbody:
            self.visit(stmt)

    visit_TryStar = visit_Try

    def visit_IfExp(self, node: ast.IfExp) -> None:
        self.score += 1 + self.nesting
        self._nested([node.test, node.body, node.orelse])

    def visit_Match(self, node: ast.Match) -> None:
        self.score += 1 + self.nesting
        self.visit(node.subject)
        for case in node.cases:
            self._nested(case.body)

    def visit_BoolOp(self, node: ast.BoolOp) -> None:
        self.score += 1
        for value in node.values:
            # ``a and b and c`` is one sequence; a different operator inside starts another.
            if isinstance(value, ast.BoolOp) and isinstance(value.op, type(node.op)):
                for inner in value.values:
                    self.visit(inner)
            else:
                self.visit(value)

    def _visit_function(self, node: ast.FunctionDef | ast.AsyncFunctionDef | ast.Lambda) -> None:
        body = [node.body] if isinstance(node, ast.Lambda) else node.body
        self._nested(body)

    visit_FunctionDef = _visit_function
    visit_AsyncFunctionDef = _visit_function
    visit_Lambda = _visit_function

    def visit_ClassDef(self, node: ast.ClassDef) -> None:
        for stmt in node.body:
            self.visit(stmt)


def cognitive_complexity(node: ast.AST) -> int:
    """Return the cognitive complexity of *node*.

    Top-level definitions in a module or class do not add nesting; only the
    code inside them is scored.
    """
    visitor = CognitiveVisitor()
    if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
        for stmt in node.body:
            visitor.visit(stmt)
        return visitor.score
    for stmt in getattr(node, "body", []):
        if isinstance(stmt, (ast.FunctionDef, ast.AsyncFunctionDef)):
            visitor.score += cognitive_complexity(stmt)
        else:
            visitor.visit(stmt)
    return visitor.score


# --------------------------- Python provider --------------------------------
def _function_nodes(tree: ast.AST) -> dict[int, ast.FunctionDef | ast.AsyncFunctionDef]:
    return {
        node.lineno: node for node in ast.walk(tree) if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef))
    }


class PythonComplexityProvider:
    """Complexity of Python sources."""

    suffixes = (".py",)

    def supports(self, path: Path) -> bool:
        return path.suffix in self.suffixes

    def analyze(self, path: Path, complexity: Complexity, *, functions: bool = False) -> FileComplexity:
        source = read_source(path)
        try:
            tree = ast.parse(source, filename=str(path))
            if complexity is Complexity.CYCLOMATIC:
                total = float(ComplexityVisitor.from_ast(tree).total_complexity)
            else:
                total = float(cognitive_complexity(tree))
            spans = self._functions(source, tree, complexity) if functions else ()
        except (SyntaxError, ValueError) as exc:
            msg = f"{path}: {exc}"
            raise ComplexityError(msg) from exc
        return FileComplexity(sloc=len(source.splitlines()), complexity=total, functions=spans)

    @staticmethod
    def _functions(source: str, tree: ast.AST, complexity: Complexity) -> tuple[FunctionSpan, ...]:
        nodes = _function_nodes(tree)
        spans: list[FunctionSpan] = []
        for block in cc_visit(source):
            if not isinstance(block, Function):
                continue
            node = nodes.get(block.lineno)
            if complexity is Complexity.CYCLOMATIC:
                value = float(block.complexity)
            else:
                value = float(cognitive_complexity(node)) if node is not None else 0.0
            # radon stops at the first line of the last statement.
            end = max(block.endline, getattr(node, "end_lineno", None) or 0)
            spans.append(FunctionSpan(name=block.fullname, start=block.lineno, end=end, complexity=value))
        spans.sort(key=lambda s: (s.start, s.name))
        return tuple(spans)


__all__ = [
    "CognitiveVisitor",
    "ComplexityProvider",
    "FileComplexity",
    "FunctionSpan",
    "PythonComplexityProvider",
    "cognitive_complexity",
]
