"""Call forms: the unevaluated call expressions observed by the compiler."""

from dataclasses import dataclass
from typing import Any, Iterator, Optional, Tuple

from simplify_lint.core.errors import FormError


@dataclass(frozen=True)
class Symbol:
    """A Lisp symbol, compared by name."""
    name: str

    def __str__(self) -> str:
        return self.name


NIL = Symbol("nil")


@dataclass(frozen=True)
class CallForm:
    """
    A call expression as handed over by the compiler.

    Attributes:
        head: The callee. A Symbol when statically known, otherwise any
            expression (e.g. a lambda form).
        args: Argument expressions, unevaluated.
    """
    head: Any
    args: Tuple[Any, ...] = ()

    @property
    def callee(self) -> Optional[str]:
        """Name of the callee, or None when the head is computed."""
        if isinstance(self.head, Symbol):
            return self.head.name
        return None

    def __str__(self) -> str:
        return render(self)


def call(head: Any, *args: Any) -> CallForm:
    """Build a call form; a string head is taken as a symbol name."""
    if isinstance(head, str):
        head = Symbol(head)
    return CallForm(head, tuple(args))


def is_bare_call(expr: Any, name: str) -> bool:
    """Check if expr is exactly ``(name)`` with no arguments."""
    return isinstance(expr, CallForm) and expr.callee == name and not expr.args


def is_nil(expr: Any) -> bool:
    """Check if expr is the nil placeholder."""
    return expr == NIL or expr is None


def render(expr: Any) -> str:
    """Print an expression the way Lisp would."""
    if isinstance(expr, CallForm):
        parts = [render(expr.head)] + [render(arg) for arg in expr.args]
        return "(" + " ".join(parts) + ")"
    if isinstance(expr, Symbol):
        return expr.name
    if expr is None:
        return "nil"
    if isinstance(expr, bool):
        return "t" if expr else "nil"
    if isinstance(expr, str):
        escaped = expr.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return str(expr)


def from_data(obj: Any) -> Any:
    """
    Decode the JSON data encoding of an expression.

    Lists are call forms (first element is the head), bare strings are
    symbols, {"str": ...} objects are string literals, integers are
    integers and null is nil.
    """
    if obj is None:
        return NIL
    if isinstance(obj, bool):
        return Symbol("t") if obj else NIL
    if isinstance(obj, int):
        return obj
    if isinstance(obj, str):
        return Symbol(obj)
    if isinstance(obj, dict):
        if set(obj) == {"str"} and isinstance(obj["str"], str):
            return obj["str"]
        raise FormError(f"Unsupported object in call data: {sorted(obj)}")
    if isinstance(obj, list):
        if not obj:
            return NIL
        return CallForm(from_data(obj[0]), tuple(from_data(item) for item in obj[1:]))
    raise FormError(f"Unsupported value in call data: {type(obj).__name__}")


# Special forms whose argument lists are not all evaluated as calls.
BINDING_FORMS = frozenset({"let", "let*"})
DEFINING_FORMS = frozenset({"defun", "defmacro", "defsubst"})


def iter_calls(expr: Any) -> Iterator[CallForm]:
    """Yield every call form in expr, outermost first.

    Only evaluated positions are visited: nothing below ``(quote ...)``,
    the variable names of ``let`` bindings, the argument lists of
    ``lambda`` and ``defun``, or the clause lists of ``cond``.
    """
    if not isinstance(expr, CallForm):
        return
    yield expr

    callee = expr.callee
    if callee == "quote":
        return

    if callee in BINDING_FORMS and expr.args:
        bindings = expr.args[0]
        if isinstance(bindings, CallForm):
            for binding in (bindings.head,) + bindings.args:
                # A bare symbol binds to nil; (var value) evaluates value only
                if isinstance(binding, CallForm):
                    for value in binding.args:
                        yield from iter_calls(value)
        body = expr.args[1:]
    elif callee == "lambda":
        body = expr.args[1:]
    elif callee in DEFINING_FORMS:
        body = expr.args[2:]
    elif callee == "cond":
        for clause in expr.args:
            if isinstance(clause, CallForm):
                for item in (clause.head,) + clause.args:
                    yield from iter_calls(item)
        body = ()
    else:
        yield from iter_calls(expr.head)
        body = expr.args

    for arg in body:
        yield from iter_calls(arg)
