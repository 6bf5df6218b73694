"""Tokenizer for PHP source files.

Produces the token stream consumed by the class collector: single-character
punctuation is returned as a bare string, everything else as a
``TaggedToken(kind, text)`` pair.

The source is parsed with tree-sitter's PHP grammar and the leaves of the
syntax tree are mapped onto token kinds. String literals, heredocs and
variables are kept whole, so nothing inside them is ever read as code.
"""

import enum
import re
from typing import Iterator, List, NamedTuple, Union

import tree_sitter_php
from tree_sitter import Language, Node, Parser


PHP_LANGUAGE = Language(tree_sitter_php.language_php())


class TokenKind(enum.Enum):
    """Token kinds produced by the PHP tokenizer."""

    OPEN_TAG = "T_OPEN_TAG"
    OPEN_TAG_WITH_ECHO = "T_OPEN_TAG_WITH_ECHO"
    CLOSE_TAG = "T_CLOSE_TAG"
    INLINE_HTML = "T_INLINE_HTML"
    WHITESPACE = "T_WHITESPACE"
    COMMENT = "T_COMMENT"
    DOC_COMMENT = "T_DOC_COMMENT"
    VARIABLE = "T_VARIABLE"
    IDENTIFIER = "T_STRING"
    STRING_LITERAL = "T_CONSTANT_ENCAPSED_STRING"
    INTERPOLATED_STRING = "T_ENCAPSED_AND_WHITESPACE"
    HEREDOC = "T_HEREDOC"
    NUMBER = "T_NUMBER"
    NAMESPACE = "T_NAMESPACE"
    CLASS = "T_CLASS"
    INTERFACE = "T_INTERFACE"
    TRAIT = "T_TRAIT"
    KEYWORD = "T_KEYWORD"
    DOUBLE_COLON = "T_DOUBLE_COLON"
    NS_SEPARATOR = "T_NS_SEPARATOR"
    OBJECT_OPERATOR = "T_OBJECT_OPERATOR"
    ATTRIBUTE = "T_ATTRIBUTE"
    OPERATOR = "T_OPERATOR"
    BAD_CHARACTER = "T_BAD_CHARACTER"


class TaggedToken(NamedTuple):
    """A classified token: its kind and the exact source text."""

    kind: TokenKind
    text: str


Token = Union[str, TaggedToken]


# Keywords with a dedicated kind; every other keyword is KEYWORD
DECLARATION_KEYWORDS = {
    "namespace": TokenKind.NAMESPACE,
    "class": TokenKind.CLASS,
    "interface": TokenKind.INTERFACE,
    "trait": TokenKind.TRAIT,
}

# Nodes emitted as a single token, children included
ATOMIC_NODES = {
    "string": TokenKind.STRING_LITERAL,
    "encapsed_string": TokenKind.STRING_LITERAL,
    "heredoc": TokenKind.HEREDOC,
    "nowdoc": TokenKind.HEREDOC,
    "shell_command_expression": TokenKind.INTERPOLATED_STRING,
    "variable_name": TokenKind.VARIABLE,
    "text": TokenKind.INLINE_HTML,
}

# Parts of a double-quoted string that keep it constant
CONSTANT_STRING_PARTS = {"string_content", "string_value", "string", "escape_sequence"}

NAMED_LEAVES = {
    "name": TokenKind.IDENTIFIER,
    "integer": TokenKind.NUMBER,
    "float": TokenKind.NUMBER,
    "ERROR": TokenKind.BAD_CHARACTER,
}

OPERATOR_KINDS = {
    "?>": TokenKind.CLOSE_TAG,
    "::": TokenKind.DOUBLE_COLON,
    "\\": TokenKind.NS_SEPARATOR,
    "->": TokenKind.OBJECT_OPERATOR,
    "?->": TokenKind.OBJECT_OPERATOR,
    "#[": TokenKind.ATTRIBUTE,
}

_WORD_RE = re.compile(r"[A-Za-z_]\w*\Z")
_DOC_COMMENT_RE = re.compile(r"/\*\*\s")


def tokenize(code: str) -> List[Token]:
    """
    Split PHP source text into tokens.

    Text outside of ``<?php``/``<?=`` ... ``?>`` blocks is returned as
    INLINE_HTML. Never raises: the parser recovers from syntax errors, and
    text it cannot place is returned as BAD_CHARACTER.

    Args:
        code: Full text of a PHP file, including the opening tag.

    Returns:
        List of tokens in source order.
    """
    source = code.encode("utf-8")
    tree = Parser(PHP_LANGUAGE).parse(source)

    tokens: List[Token] = []
    pos = 0
    for node in _iter_leaves(tree.root_node):
        if node.start_byte < pos:
            continue
        if node.start_byte > pos:
            tokens.append(_gap(_decode(source, pos, node.start_byte)))
        tokens.append(_classify(node, _decode(source, node.start_byte, node.end_byte)))
        pos = node.end_byte
    if pos < len(source):
        tokens.append(_gap(_decode(source, pos, len(source))))

    return tokens


def _iter_leaves(root: Node) -> Iterator[Node]:
    """Yield leaf and atomic nodes in source order, skipping empty ones."""
    stack = list(reversed(root.children))
    while stack:
        node = stack.pop()
        if node.start_byte == node.end_byte:
            continue
        if node.type in ATOMIC_NODES or node.child_count == 0:
            yield node
        else:
            stack.extend(reversed(node.children))


def _decode(source: bytes, start: int, end: int) -> str:
    return source[start:end].decode("utf-8", errors="replace")


def _gap(text: str) -> TaggedToken:
    """Classify text between two nodes."""
    if text.isspace():
        return TaggedToken(TokenKind.WHITESPACE, text)
    return TaggedToken(TokenKind.BAD_CHARACTER, text)


def _classify(node: Node, text: str) -> Token:
    """Turn a leaf or atomic node into a token."""
    kind = node.type

    if kind == "encapsed_string":
        if all(child.type in CONSTANT_STRING_PARTS for child in node.named_children):
            return TaggedToken(TokenKind.STRING_LITERAL, text)
        return TaggedToken(TokenKind.INTERPOLATED_STRING, text)
    if kind in ATOMIC_NODES:
        return TaggedToken(ATOMIC_NODES[kind], text)
    if kind == "comment":
        if _DOC_COMMENT_RE.match(text):
            return TaggedToken(TokenKind.DOC_COMMENT, text)
        return TaggedToken(TokenKind.COMMENT, text)
    if kind == "php_tag":
        if text == "<?=":
            return TaggedToken(TokenKind.OPEN_TAG_WITH_ECHO, text)
        return TaggedToken(TokenKind.OPEN_TAG, text)

    if node.is_named:
        if kind.endswith("_modifier"):
            return TaggedToken(TokenKind.KEYWORD, text)
        # Literal names such as true, null or int are plain identifiers
        return TaggedToken(NAMED_LEAVES.get(kind, TokenKind.IDENTIFIER), text)

    # Anonymous leaves are typed by their lowercase spelling
    if kind in OPERATOR_KINDS:
        return TaggedToken(OPERATOR_KINDS[kind], text)
    if kind in DECLARATION_KEYWORDS:
        return TaggedToken(DECLARATION_KEYWORDS[kind], text)
    if _WORD_RE.match(kind):
        return TaggedToken(TokenKind.KEYWORD, text)
    if len(text) == 1:
        return text
    return TaggedToken(TokenKind.OPERATOR, text)


def token_text(token: Token) -> str:
    """Return the source text of a token."""
    if isinstance(token, str):
        return token
    return token.text


def is_kind(token: Token, *kinds: TokenKind) -> bool:
    """Check whether a token is tagged with one of the given kinds."""
    return not isinstance(token, str) and token.kind in kinds
