"""Monkey abstract syntax tree. Nodes are built bottom-up by the parser and never mutated afterwards; the evaluator only
reads them.

```
<program>     ::= <statement>*
<statement>   ::= "let" <ident> "=" <expr> [";"]
                | "return" <expr> [";"]
                | <expr> [";"]
<block>       ::= "{" <statement>* "}"
<expr>        ::= <ident> | <int> | "true" | "false"
                | <prefix_op> <expr>                              ; "-" or "!"
                | <expr> <infix_op> <expr>                        ; see parser.PRECEDENCES
                | "(" <expr> ")"
                | "if" "(" <expr> ")" <block> ["else" <block>]
                | "function" "(" [<ident> ("," <ident>)*] ")" <block>
                | <expr> "(" [<expr> ("," <expr>)*] ")"
```

Every node renders back to source-like text with str(). Infix and prefix expressions are fully parenthesized, so the
rendering doubles as a precedence oracle in tests. Missing children (None) render as empty text.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields
from typing import Optional, Tuple

from monkey.syntax.token import Token


def render(node):
    """str(node), or "" if node is absent."""
    return "" if node is None else str(node)


class Node(ABC):
    """Superclass of every statement and expression node."""
    token: Token

    def token_literal(self):
        """Literal text of the token this node was built from."""
        return self.token.literal

    @abstractmethod
    def __str__(self):
        ...

    @property
    def children(self):
        """Child nodes in source order, skipping absent ones."""
        result = []
        for attr in fields(self):
            value = getattr(self, attr.name)
            if isinstance(value, Node):
                result.append(value)
            elif isinstance(value, tuple):
                result.extend(item for item in value if isinstance(item, Node))
        return result

    def display(self, indents=0):
        """Recursively displays the tree with a readable format.

        Format:
        <Node>('<rendered>', nodes=[
            <Node>('<rendered>', nodes=[
                ...
                <Node>('<rendered>')  # <-- if there are no children
            ])
        ])
        """
        result = f"{'    ' * indents}{type(self).__name__}('{self}'"
        children = self.children
        if children:
            result += ", nodes=["
            for child in children:
                result += "\n" + child.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"


class Statement(Node):
    """Marker superclass for statements."""


class Expression(Node):
    """Marker superclass for expressions."""


@dataclass(frozen=True)
class Identifier(Expression):
    token: Token
    value: str

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    token: Token
    value: int

    def __str__(self):
        return self.token.literal


@dataclass(frozen=True)
class Boolean(Expression):
    token: Token
    value: bool

    def __str__(self):
        return self.token.literal


@dataclass(frozen=True)
class PrefixExpression(Expression):
    token: Token
    operator: str
    right: Optional[Expression]

    def __str__(self):
        return f"({self.operator}{render(self.right)})"


@dataclass(frozen=True)
class InfixExpression(Expression):
    token: Token
    left: Optional[Expression]
    operator: str
    right: Optional[Expression]

    def __str__(self):
        return f"({render(self.left)} {self.operator} {render(self.right)})"


@dataclass(frozen=True)
class LetStatement(Statement):
    token: Token
    name: Optional[Identifier]
    value: Optional[Expression]

    def __str__(self):
        return f"{self.token_literal()} {render(self.name)} = {render(self.value)};"


@dataclass(frozen=True)
class ReturnStatement(Statement):
    token: Token
    return_value: Optional[Expression]

    def __str__(self):
        return f"{self.token_literal()} {render(self.return_value)};"


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    token: Token
    expression: Optional[Expression]

    def __str__(self):
        return render(self.expression)


@dataclass(frozen=True)
class BlockStatement(Statement):
    token: Token
    statements: Tuple[Statement, ...] = ()

    def __str__(self):
        return "".join(str(statement) for statement in self.statements)


@dataclass(frozen=True)
class IfExpression(Expression):
    token: Token
    condition: Optional[Expression]
    consequence: Optional[BlockStatement]
    alternative: Optional[BlockStatement] = None

    def __str__(self):
        result = f"if {render(self.condition)} {render(self.consequence)}"
        if self.alternative is not None:
            result += f" else {self.alternative}"
        return result


@dataclass(frozen=True)
class FunctionLiteral(Expression):
    token: Token
    parameters: Tuple[Identifier, ...]
    body: Optional[BlockStatement]

    def __str__(self):
        params = ", ".join(str(param) for param in self.parameters)
        return f"{self.token_literal()}({params}) {render(self.body)}"


@dataclass(frozen=True)
class CallExpression(Expression):
    token: Token  # the '(' token
    function: Optional[Expression]
    arguments: Tuple[Expression, ...] = ()

    def __str__(self):
        args = ", ".join(str(arg) for arg in self.arguments)
        return f"{render(self.function)}({args})"


@dataclass(frozen=True)
class Program(Node):
    """Root of every parse: an ordered sequence of statements."""
    statements: Tuple[Statement, ...] = ()
    token: Optional[Token] = field(default=None, repr=False, compare=False)

    def token_literal(self):
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def __str__(self):
        return "".join(str(statement) for statement in self.statements)
