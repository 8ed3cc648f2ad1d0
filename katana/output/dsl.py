"""A small expression language for matching and filtering results."""

from __future__ import annotations

import functools
import operator
import re
from collections.abc import Callable, Mapping
from typing import Any

Node = Callable[[Mapping[str, Any]], Any]


class DslError(ValueError):
    """Raised when an expression cannot be parsed or evaluated.

    ``ignorable`` marks errors caused by missing values or bad function
    arguments, which callers usually treat as a plain non-match.
    """

    def __init__(self, message: str, ignorable: bool = False) -> None:
        super().__init__(message)
        self.ignorable = ignorable


_SPACE = re.compile(r"\s+")
_LEXEME_PATTERN = re.compile(
    r"""
    (?P<number>\d+(?:\.\d+)?)
    |(?P<string>"(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*')
    |(?P<bracket>\[[^\]]+\])
    |(?P<name>[A-Za-z_][A-Za-z0-9_]*)
    |(?P<op>\|\||&&|==|!=|>=|<=|=~|!~|[-+*/%<>!(),])
    """,
    re.VERBOSE,
)
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r"}


def _to_str(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if value is None:
        return ""
    return str(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _tokenize(expression: str) -> list[tuple[str, Any]]:
    tokens: list[tuple[str, Any]] = []
    pos = 0
    while pos < len(expression):
        space = _SPACE.match(expression, pos)
        if space:
            pos = space.end()
            if pos >= len(expression):
                break
        match = _LEXEME_PATTERN.match(expression, pos)
        if not match:
            raise DslError(f"invalid token at position {pos}: {expression[pos:]!r}")
        pos = match.end()
        kind = match.lastgroup
        text = match.group(kind)
        if kind == "number":
            tokens.append((kind, float(text) if "." in text else int(text)))
        elif kind == "string":
            body = re.sub(r"\\(.)", lambda m: _ESCAPES.get(m.group(1), m.group(1)), text[1:-1])
            tokens.append((kind, body))
        elif kind == "bracket":
            tokens.append((kind, text[1:-1]))
        else:
            tokens.append((kind, text))
    return tokens


def _as_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise DslError(f"value {_to_str(value)!r} is not a boolean")
    return value


def _regex(pattern: Any, value: Any) -> bool:
    try:
        return re.search(_to_str(pattern), _to_str(value)) is not None
    except re.error as exc:
        raise DslError(f"invalid regex {_to_str(pattern)!r}: {exc}") from exc


def _length(value: Any) -> int:
    if isinstance(value, (str, list, dict, tuple)):
        return len(value)
    return len(_to_str(value))


_FUNCTIONS: dict[str, tuple[int, int | None, Callable[..., Any]]] = {
    "len": (1, 1, _length),
    "to_lower": (1, 1, lambda v: _to_str(v).lower()),
    "to_upper": (1, 1, lambda v: _to_str(v).upper()),
    "trim_space": (1, 1, lambda v: _to_str(v).strip()),
    "contains": (2, 2, lambda a, b: _to_str(b) in _to_str(a)),
    "contains_all": (2, None, lambda a, *subs: all(_to_str(s) in _to_str(a) for s in subs)),
    "contains_any": (2, None, lambda a, *subs: any(_to_str(s) in _to_str(a) for s in subs)),
    "starts_with": (2, None, lambda a, *p: _to_str(a).startswith(tuple(_to_str(x) for x in p))),
    "ends_with": (2, None, lambda a, *p: _to_str(a).endswith(tuple(_to_str(x) for x in p))),
    "regex": (2, 2, _regex),
    "replace": (3, 3, lambda s, old, new: _to_str(s).replace(_to_str(old), _to_str(new))),
    "concat": (1, None, lambda *args: "".join(_to_str(a) for a in args)),
}

_ORDERING = {"<": operator.lt, "<=": operator.le, ">": operator.gt, ">=": operator.ge}


def _compare(op: str, left: Any, right: Any) -> bool:
    if op == "==":
        return left == right and (_is_number(left) == _is_number(right))
    if op == "!=":
        return not _compare("==", left, right)
    if op in ("=~", "!~"):
        matched = _regex(right, left)
        return matched if op == "=~" else not matched
    if (_is_number(left) and _is_number(right)) or (isinstance(left, str) and isinstance(right, str)):
        return _ORDERING[op](left, right)
    raise DslError(f"cannot compare {_to_str(left)!r} and {_to_str(right)!r}")


def _arithmetic(op: str, left: Any, right: Any) -> Any:
    if op == "+" and (isinstance(left, str) or isinstance(right, str)):
        return _to_str(left) + _to_str(right)
    if not (_is_number(left) and _is_number(right)):
        raise DslError(f"operator {op} needs numbers, got {_to_str(left)!r} and {_to_str(right)!r}")
    if op == "+":
        return left + right
    if op == "-":
        return left - right
    if op == "*":
        return left * right
    if right == 0:
        raise DslError("division by zero")
    return left / right if op == "/" else left % right


class _Parser:
    def __init__(self, tokens: list[tuple[str, Any]]) -> None:
        self._tokens = tokens
        self._pos = 0

    def _peek(self) -> tuple[str | None, Any]:
        return self._tokens[self._pos] if self._pos < len(self._tokens) else (None, None)

    def _peek_op(self) -> str | None:
        kind, value = self._peek()
        return value if kind == "op" else None

    def _next(self) -> tuple[str, Any]:
        if self._pos >= len(self._tokens):
            raise DslError("unexpected end of expression")
        current = self._tokens[self._pos]
        self._pos += 1
        return current

    def _expect(self, op: str) -> None:
        kind, value = self._next()
        if kind != "op" or value != op:
            raise DslError(f"expected {op!r}, found {_to_str(value)!r}")

    def parse(self) -> Node:
        node = self._or()
        if self._pos < len(self._tokens):
            raise DslError(f"unexpected token {_to_str(self._tokens[self._pos][1])!r}")
        return node

    def _or(self) -> Node:
        left = self._and()
        while self._peek_op() == "||":
            self._next()
            right = self._and()
            left = (lambda a, b: lambda v: _as_bool(a(v)) or _as_bool(b(v)))(left, right)
        return left

    def _and(self) -> Node:
        left = self._comparison()
        while self._peek_op() == "&&":
            self._next()
            right = self._comparison()
            left = (lambda a, b: lambda v: _as_bool(a(v)) and _as_bool(b(v)))(left, right)
        return left

    def _comparison(self) -> Node:
        left = self._additive()
        while self._peek_op() in ("==", "!=", "<", "<=", ">", ">=", "=~", "!~"):
            op = self._next()[1]
            right = self._additive()
            left = (lambda o, a, b: lambda v: _compare(o, a(v), b(v)))(op, left, right)
        return left

    def _additive(self) -> Node:
        left = self._multiplicative()
        while self._peek_op() in ("+", "-"):
            op = self._next()[1]
            right = self._multiplicative()
            left = (lambda o, a, b: lambda v: _arithmetic(o, a(v), b(v)))(op, left, right)
        return left

    def _multiplicative(self) -> Node:
        left = self._unary()
        while self._peek_op() in ("*", "/", "%"):
            op = self._next()[1]
            right = self._unary()
            left = (lambda o, a, b: lambda v: _arithmetic(o, a(v), b(v)))(op, left, right)
        return left

    def _unary(self) -> Node:
        op = self._peek_op()
        if op == "!":
            self._next()
            inner = self._unary()
            return lambda v: not _as_bool(inner(v))
        if op == "-":
            self._next()
            inner = self._unary()
            return lambda v: _arithmetic("-", 0, inner(v))
        return self._primary()

    def _primary(self) -> Node:
        kind, value = self._next()
        if kind in ("number", "string"):
            return lambda _v: value
        if kind == "name":
            if value in ("true", "false"):
                constant = value == "true"
                return lambda _v: constant
            if self._peek_op() == "(":
                return self._call(value)
            return _variable(value)
        if kind == "bracket":
            return _variable(value)
        if kind == "op" and value == "(":
            node = self._or()
            self._expect(")")
            return node
        raise DslError(f"unexpected token {_to_str(value)!r}")

    def _call(self, name: str) -> Node:
        if name not in _FUNCTIONS:
            raise DslError(f"unknown function {name}")
        self._expect("(")
        args: list[Node] = []
        if self._peek_op() != ")":
            while True:
                args.append(self._or())
                if self._peek_op() != ",":
                    break
                self._next()
        self._expect(")")
        low, high, impl = _FUNCTIONS[name]
        if len(args) < low or (high is not None and len(args) > high):
            raise DslError(f"{name}: error parsing argument value", ignorable=True)
        return lambda v: impl(*(arg(v) for arg in args))


def _variable(name: str) -> Node:
    def lookup(values: Mapping[str, Any]) -> Any:
        try:
            return values[name]
        except KeyError:
            raise DslError(f"No parameter '{name}' found.", ignorable=True) from None

    return lookup


@functools.lru_cache(maxsize=256)
def _compile(expression: str) -> Node:
    tokens = _tokenize(expression)
    if not tokens:
        raise DslError("empty expression")
    return _Parser(tokens).parse()


def evaluate(expression: str, values: Mapping[str, Any]) -> Any:
    """Evaluate ``expression`` with variables taken from ``values``."""
    return _compile(expression)(values)