"""Boolean query language: tokenizer and expression tree builder.

Queries combine terms with ``AND``/``&&``, ``OR``/``||`` and ``NOT``/``-``,
group with parentheses, quote phrases with ``"..."`` and restrict a term to a
note attribute with ``field:value`` (``title``, ``content``, ``tag``).
Adjacent operands are joined by an implicit ``AND``.

Examples:
    >>> parse_search_query("git OR backup")
    OrNode(left=TermNode(value='git'), right=TermNode(value='backup'))
    >>> parse_search_query('title:"Getting Started" -draft')
    AndNode(left=FieldNode(field='title', value='Getting Started'), right=NotNode(operand=TermNode(value='draft')))
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class QuerySyntaxError(ValueError):
    """Raised when a search query cannot be parsed into a single expression."""


class TokenType(str, Enum):
    TERM = "TERM"
    FIELD = "FIELD"
    AND = "AND"
    OR = "OR"
    NOT = "NOT"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"


@dataclass(frozen=True)
class Token:
    """Single lexical unit of a query.

    ``value`` is set for TERM and FIELD tokens, ``field`` only for FIELD tokens.
    """

    type: TokenType
    value: Optional[str] = None
    field: Optional[str] = None


# ==============================================================================
# EXPRESSION NODES
# ==============================================================================


@dataclass(frozen=True)
class TermNode:
    value: str


@dataclass(frozen=True)
class FieldNode:
    field: str
    value: str


@dataclass(frozen=True)
class AndNode:
    left: "ExpressionNode"
    right: "ExpressionNode"


@dataclass(frozen=True)
class OrNode:
    left: "ExpressionNode"
    right: "ExpressionNode"


@dataclass(frozen=True)
class NotNode:
    operand: "ExpressionNode"


ExpressionNode = Union[TermNode, FieldNode, AndNode, OrNode, NotNode]

_KEYWORDS = {
    "AND": TokenType.AND,
    "&&": TokenType.AND,
    "OR": TokenType.OR,
    "||": TokenType.OR,
    "NOT": TokenType.NOT,
}

# Word characters end at whitespace, quotes, parentheses and symbolic operators.
_WORD_TERMINATORS = {'"', "(", ")"}
_SYMBOL_OPERATORS = ("&&", "||")

_PRECEDENCE = {TokenType.NOT: 3, TokenType.AND: 2, TokenType.OR: 1}

_LEFT_OPERANDS = {TokenType.TERM, TokenType.FIELD, TokenType.RPAREN}
_RIGHT_OPERANDS = {TokenType.TERM, TokenType.FIELD, TokenType.LPAREN, TokenType.NOT}


# ==============================================================================
# TOKENIZER
# ==============================================================================


def _read_quoted(query: str, start: int) -> tuple[str, int]:
    """Read a quoted phrase whose opening quote sits at ``start``.

    Returns:
        The phrase without quotes and the index just past the closing quote.

    Raises:
        QuerySyntaxError: If the closing quote is missing.
    """
    end = query.find('"', start + 1)
    if end == -1:
        raise QuerySyntaxError(
            f"Unterminated quoted phrase starting at position {start}: {query[start:]!r}"
        )
    return query[start + 1:end], end + 1


def _read_word(query: str, start: int) -> tuple[str, int]:
    index = start
    length = len(query)
    while (
        index < length
        and not query[index].isspace()
        and query[index] not in _WORD_TERMINATORS
        and not query.startswith(_SYMBOL_OPERATORS, index)
    ):
        index += 1
    return query[start:index], index


def _insert_implicit_and(tokens: list[Token]) -> list[Token]:
    result: list[Token] = []
    for index, token in enumerate(tokens):
        result.append(token)
        if index + 1 < len(tokens):
            following = tokens[index + 1]
            if token.type in _LEFT_OPERANDS and following.type in _RIGHT_OPERANDS:
                result.append(Token(TokenType.AND))
    return result


def tokenize_query(query: str) -> list[Token]:
    """Split a raw query into tokens, inserting implicit ``AND`` operators.

    Args:
        query: Raw search query.

    Returns:
        The token stream; empty for blank input.

    Raises:
        QuerySyntaxError: If a quoted phrase is never closed.
    """
    if not query or not query.strip():
        return []

    tokens: list[Token] = []
    index = 0
    length = len(query)

    while index < length:
        char = query[index]

        if char.isspace():
            index += 1
            continue

        if char == '"':
            phrase, index = _read_quoted(query, index)
            tokens.append(Token(TokenType.TERM, value=phrase))
            continue

        if char == "(":
            tokens.append(Token(TokenType.LPAREN))
            index += 1
            continue

        if char == ")":
            tokens.append(Token(TokenType.RPAREN))
            index += 1
            continue

        if query.startswith(_SYMBOL_OPERATORS, index):
            tokens.append(Token(_KEYWORDS[query[index:index + 2]]))
            index += 2
            continue

        if char == "-" and index + 1 < length and not query[index + 1].isspace():
            tokens.append(Token(TokenType.NOT))
            index += 1
            continue

        word, index = _read_word(query, index)

        keyword = _KEYWORDS.get(word)
        if keyword is not None:
            tokens.append(Token(keyword))
            continue

        field, separator, value = word.partition(":")
        if separator and field:
            if value:
                tokens.append(Token(TokenType.FIELD, value=value, field=field.lower()))
                continue
            if index < length and query[index] == '"':
                phrase, index = _read_quoted(query, index)
                tokens.append(Token(TokenType.FIELD, value=phrase, field=field.lower()))
                continue

        tokens.append(Token(TokenType.TERM, value=word))

    return _insert_implicit_and(tokens)


# ==============================================================================
# EXPRESSION BUILDER
# ==============================================================================


def _to_postfix(tokens: list[Token]) -> list[Token]:
    """Reorder infix tokens into postfix order (shunting-yard)."""
    output: list[Token] = []
    operators: list[Token] = []

    for token in tokens:
        if token.type in (TokenType.TERM, TokenType.FIELD):
            output.append(token)
        elif token.type is TokenType.NOT:
            # Prefix operator: binds to whatever follows, never pops.
            operators.append(token)
        elif token.type in (TokenType.AND, TokenType.OR):
            while (
                operators
                and operators[-1].type is not TokenType.LPAREN
                and _PRECEDENCE[operators[-1].type] >= _PRECEDENCE[token.type]
            ):
                output.append(operators.pop())
            operators.append(token)
        elif token.type is TokenType.LPAREN:
            operators.append(token)
        elif token.type is TokenType.RPAREN:
            while operators and operators[-1].type is not TokenType.LPAREN:
                output.append(operators.pop())
            if not operators:
                raise QuerySyntaxError("Unbalanced parentheses: unexpected ')'")
            operators.pop()

    while operators:
        operator = operators.pop()
        if operator.type is TokenType.LPAREN:
            raise QuerySyntaxError("Unbalanced parentheses: missing ')'")
        output.append(operator)

    return output


def build_search_expression(tokens: list[Token]) -> Optional[ExpressionNode]:
    """Build an expression tree from a token stream.

    Args:
        tokens: Tokens produced by :func:`tokenize_query`.

    Returns:
        The root node, or ``None`` when there are no tokens (matches everything).

    Raises:
        QuerySyntaxError: On a dangling operator, an operand count that does not
            reduce to one root, or unbalanced parentheses.
    """
    if not tokens:
        return None

    stack: list[ExpressionNode] = []

    for token in _to_postfix(tokens):
        if token.type is TokenType.TERM:
            stack.append(TermNode(token.value or ""))
        elif token.type is TokenType.FIELD:
            stack.append(FieldNode(token.field or "", token.value or ""))
        elif token.type is TokenType.NOT:
            if not stack:
                raise QuerySyntaxError("Invalid syntax: NOT requires an operand")
            stack.append(NotNode(stack.pop()))
        else:
            if len(stack) < 2:
                raise QuerySyntaxError(f"Invalid syntax: {token.type.value} requires two operands")
            right = stack.pop()
            left = stack.pop()
            node_type = AndNode if token.type is TokenType.AND else OrNode
            stack.append(node_type(left, right))

    if len(stack) != 1:
        raise QuerySyntaxError("Invalid syntax: expression not well-formed")

    return stack[0]


def parse_search_query(query: str) -> Optional[ExpressionNode]:
    """Tokenize and build ``query`` in one step.

    Raises:
        QuerySyntaxError: If the query is malformed.
    """
    return build_search_expression(tokenize_query(query))
