"""Detection of class, interface and trait names declared in PHP code.

A single pass over the token stream, with no backtracking. The scanner is
idle until a sequence-starting token (``namespace``, ``class``,
``interface``, ``trait``, ``::`` or a call to ``class_alias``) opens an
expect sequence, then collects tokens until that sequence closes.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Union

from .lexer import Token, TokenKind, is_kind, token_text, tokenize


# Well-known function registering an additional name for an existing class
ALIAS_FUNCTION = "class_alias"

NAMESPACE_SEPARATOR = "\\"

# Tokens that may appear inside the first argument of class_alias(Foo::class, ...)
_ALIAS_TARGET_KINDS = (
    TokenKind.IDENTIFIER,
    TokenKind.DOUBLE_COLON,
    TokenKind.CLASS,
    TokenKind.WHITESPACE,
)


# Expect sequences. Idle is represented by None.

@dataclass
class NamespaceSequence:
    """Collecting the name following ``namespace``."""

    tokens: List[Token] = field(default_factory=list)


@dataclass
class DeclarationSequence:
    """Collecting the name following ``class``, ``interface`` or ``trait``."""

    keyword: TokenKind
    tokens: List[Token] = field(default_factory=list)


@dataclass(frozen=True)
class ScopeResolution:
    """Swallowing the single token following ``::``."""


# class_alias() argument states

@dataclass(frozen=True)
class AwaitingCall:
    """Saw the function name, the call has not opened yet."""


@dataclass(frozen=True)
class InTarget:
    """Inside the first argument."""


@dataclass(frozen=True)
class TargetSeen:
    """Past the first argument, no alias name recorded yet."""


@dataclass(frozen=True)
class AliasNamed:
    """Past the first argument with the alias name recorded."""

    name: str


AliasState = Union[AwaitingCall, InTarget, TargetSeen, AliasNamed]


@dataclass
class AliasCall:
    """Collecting the arguments of a ``class_alias()`` call."""

    state: AliasState = field(default_factory=AwaitingCall)


Sequence = Union[NamespaceSequence, DeclarationSequence, ScopeResolution, AliasCall]


class ScanSession:
    """
    State of a single scan over one file's tokens.

    Nothing survives past the file: a new session starts with the global
    namespace and an empty result.
    """

    def __init__(self):
        self.namespace = ""
        self.sequence: Optional[Sequence] = None
        self.classes: List[str] = []

    def feed(self, token: Token) -> None:
        """Advance the state machine by one token."""
        if self.sequence is None:
            self.sequence = self._begin(token)
        elif isinstance(self.sequence, ScopeResolution):
            # Skip the token after "::". This is usually the class keyword as in
            # "self::class", which reads a class name rather than declaring one.
            self.sequence = None
        elif isinstance(self.sequence, NamespaceSequence):
            self._feed_namespace(self.sequence, token)
        elif isinstance(self.sequence, DeclarationSequence):
            self._feed_declaration(self.sequence, token)
        else:
            self._feed_alias(self.sequence, token)

    def _begin(self, token: Token) -> Optional[Sequence]:
        """Return the sequence opened by token, or None to stay idle."""
        if isinstance(token, str):
            return None
        if token.kind is TokenKind.NAMESPACE:
            return NamespaceSequence()
        if token.kind in (TokenKind.CLASS, TokenKind.INTERFACE, TokenKind.TRAIT):
            return DeclarationSequence(token.kind)
        if token.kind is TokenKind.DOUBLE_COLON:
            return ScopeResolution()
        if token.kind is TokenKind.IDENTIFIER and token.text == ALIAS_FUNCTION:
            return AliasCall()
        return None

    def _feed_namespace(self, sequence: NamespaceSequence, token: Token) -> None:
        if token == ";" or token == "{":
            self.namespace = implode_tokens(sequence.tokens) + NAMESPACE_SEPARATOR
            self.sequence = None
        else:
            sequence.tokens.append(token)

    def _feed_declaration(self, sequence: DeclarationSequence, token: Token) -> None:
        sequence.tokens.append(token)
        # The first identifier after the keyword is the declared name
        if is_kind(token, TokenKind.IDENTIFIER):
            self.classes.append(self.namespace + implode_tokens(sequence.tokens))
            self.sequence = None

    def _feed_alias(self, sequence: AliasCall, token: Token) -> None:
        """
        Follow the arguments of a class_alias() call.

        Two forms of first argument are understood:

            class_alias( 'TargetClass', 'AliasName' );
            class_alias( TargetClass::class, 'AliasName' );

        Any other first argument (a variable, a concatenation, ...) cannot be
        resolved by reading tokens, so the call is ignored.
        """
        state = sequence.state
        if token == "(":
            sequence.state = InTarget()
        elif token == ",":
            if isinstance(state, (AwaitingCall, InTarget)):
                sequence.state = TargetSeen()
        elif is_kind(token, TokenKind.STRING_LITERAL):
            if isinstance(state, (TargetSeen, AliasNamed)):
                # Second argument; strip the quotes
                sequence.state = AliasNamed(token.text[1:-1])
        elif token == ")":
            if isinstance(state, AliasNamed):
                self.classes.append(state.name)
            self.sequence = None
        elif not is_kind(token, *_ALIAS_TARGET_KINDS):
            self.sequence = None


def implode_tokens(tokens: Iterable[Token]) -> str:
    """Join the text of tokens, trimming surrounding spaces, tabs and newlines."""
    return "".join(token_text(token) for token in tokens).strip(" \n\t")


def collect_classes(tokens: Iterable[Token]) -> List[str]:
    """
    Scan a token stream for declared class names.

    Args:
        tokens: Tokens of one PHP file, as produced by ``tokenize``.

    Returns:
        Fully-qualified names in order of appearance, duplicates included.
        Aliases registered through class_alias() are included as written.
    """
    session = ScanSession()
    for token in tokens:
        session.feed(token)
    return session.classes


def get_classes(code: str) -> List[str]:
    """
    Return the FQCN of every class, interface, trait and alias in PHP code.

    Args:
        code: PHP source, including the ``<?php`` opening tag.

    Returns:
        List of fully-qualified names in order of appearance.
    """
    return collect_classes(tokenize(code))
