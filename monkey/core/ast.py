"""Abstract syntax tree for the Monkey language.

Every node is either a Statement or an Expression (Program is the root and is neither). The node set is closed: the
evaluator keeps one handler per concrete class below, and tests check that nothing is left out.

Each node renders back to source with str(). Expressions render fully parenthesised, so the rendering of a parsed
expression shows exactly how the parser grouped it:

```
-a * b                  ->  ((-a) * b)
a + b * c + d / e - f   ->  (((a + (b * c)) + (d / e)) - f)
add(a * b[2], c)        ->  add((a * (b[2])), c)
fn(x) { x + 1 }         ->  fn(x) { (x + 1) }
```

Sub-nodes that failed to parse are None and render as an empty string.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from monkey.core.token import Token


def _render(node):
    return "" if node is None else str(node)


class Node(ABC):
    """Superclass of every AST node."""
    token: Token

    def token_literal(self):
        """Literal text of the token this node was built from."""
        return self.token.literal

    @property
    def nodes(self):
        """Direct child nodes, in source order. Missing children are skipped."""
        return []

    @abstractmethod
    def __str__(self):
        """Canonical source rendering."""

    def display(self, indents=0):
        """Recursively displays the tree in a readable format.

        Format:
        <Node>(expr='<expr>', nodes=[
            <Node>(expr='<expr>', nodes=[
                ...
                <Node>(expr='<expr>')  # <-- if nodes is empty
            ])
        ])
        """
        result = f"{'    ' * indents}{type(self).__name__}(expr='{self}'"
        nodes = [node for node in self.nodes if node is not None]
        if nodes:
            result += ", nodes=["
            for node in nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"


class Statement(Node, ABC):
    """A node that is executed for its effect within a block or program."""


class Expression(Node, ABC):
    """A node that produces a value."""


@dataclass
class Program(Node):
    statements: List[Statement] = field(default_factory=list)

    def token_literal(self):
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    @property
    def nodes(self):
        return list(self.statements)

    def __str__(self):
        return "; ".join(_render(stmt) for stmt in self.statements)


# expressions


@dataclass
class Identifier(Expression):
    token: Token
    value: str

    def __str__(self):
        return self.value


@dataclass
class IntegerLiteral(Expression):
    token: Token
    value: int

    def __str__(self):
        return self.token.literal


@dataclass
class Boolean(Expression):
    token: Token
    value: bool

    def __str__(self):
        return self.token.literal


@dataclass
class StringLiteral(Expression):
    token: Token
    value: str

    def __str__(self):
        return f'"{self.value}"'


@dataclass
class ArrayLiteral(Expression):
    token: Token
    elements: List[Optional[Expression]] = field(default_factory=list)

    @property
    def nodes(self):
        return list(self.elements)

    def __str__(self):
        return "[" + ", ".join(_render(element) for element in self.elements) + "]"


@dataclass
class HashLiteral(Expression):
    token: Token
    pairs: List[Tuple[Optional[Expression], Optional[Expression]]] = field(default_factory=list)

    @property
    def nodes(self):
        return [node for pair in self.pairs for node in pair]

    def __str__(self):
        return "{" + ", ".join(f"{_render(key)}: {_render(value)}" for key, value in self.pairs) + "}"


@dataclass
class PrefixExpression(Expression):
    token: Token
    operator: str
    right: Optional[Expression] = None

    @property
    def nodes(self):
        return [self.right]

    def __str__(self):
        return f"({self.operator}{_render(self.right)})"


@dataclass
class InfixExpression(Expression):
    token: Token
    left: Optional[Expression]
    operator: str
    right: Optional[Expression] = None

    @property
    def nodes(self):
        return [self.left, self.right]

    def __str__(self):
        return f"({_render(self.left)} {self.operator} {_render(self.right)})"


@dataclass
class IfExpression(Expression):
    token: Token
    condition: Optional[Expression] = None
    consequence: Optional["BlockStatement"] = None
    alternative: Optional["BlockStatement"] = None

    @property
    def nodes(self):
        return [self.condition, self.consequence, self.alternative]

    def __str__(self):
        result = f"if ({_render(self.condition)}) {_render(self.consequence)}"
        if self.alternative is not None:
            result += f" else {self.alternative}"
        return result


@dataclass
class FunctionLiteral(Expression):
    token: Token
    parameters: List[Identifier] = field(default_factory=list)
    body: Optional["BlockStatement"] = None

    @property
    def nodes(self):
        return [*self.parameters, self.body]

    def __str__(self):
        params = ", ".join(str(param) for param in self.parameters)
        return f"{self.token_literal()}({params}) {_render(self.body)}"


@dataclass
class CallExpression(Expression):
    token: Token  # the "(" token
    function: Optional[Expression]
    arguments: List[Optional[Expression]] = field(default_factory=list)

    @property
    def nodes(self):
        return [self.function, *self.arguments]

    def __str__(self):
        args = ", ".join(_render(arg) for arg in self.arguments)
        return f"{_render(self.function)}({args})"


@dataclass
class IndexExpression(Expression):
    token: Token  # the "[" token
    left: Optional[Expression]
    index: Optional[Expression] = None

    @property
    def nodes(self):
        return [self.left, self.index]

    def __str__(self):
        return f"({_render(self.left)}[{_render(self.index)}])"


# statements


@dataclass
class LetStatement(Statement):
    token: Token
    name: Identifier
    value: Optional[Expression] = None

    @property
    def nodes(self):
        return [self.name, self.value]

    def __str__(self):
        return f"{self.token_literal()} {self.name} = {_render(self.value)}"


@dataclass
class ReturnStatement(Statement):
    token: Token
    return_value: Optional[Expression] = None

    @property
    def nodes(self):
        return [self.return_value]

    def __str__(self):
        if self.return_value is None:
            return self.token_literal()
        return f"{self.token_literal()} {self.return_value}"


@dataclass
class ExpressionStatement(Statement):
    token: Token  # first token of the expression
    expression: Optional[Expression] = None

    @property
    def nodes(self):
        return [self.expression]

    def __str__(self):
        return _render(self.expression)


@dataclass
class BlockStatement(Statement):
    token: Token  # the "{" token
    statements: List[Statement] = field(default_factory=list)

    @property
    def nodes(self):
        return list(self.statements)

    def __str__(self):
        if not self.statements:
            return "{ }"
        return "{ " + "; ".join(_render(stmt) for stmt in self.statements) + " }"
