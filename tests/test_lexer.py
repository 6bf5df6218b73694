"""Tests for the PHP tokenizer."""

import pytest

from scanner.lexer import TaggedToken, TokenKind, is_kind, token_text, tokenize


def tagged(code):
    """Return the tokens of code without whitespace."""
    return [t for t in tokenize(code) if not is_kind(t, TokenKind.WHITESPACE)]


def kinds_of(code, *kinds):
    """Return the tokens of code tagged with one of kinds."""
    return [t for t in tokenize(code) if is_kind(t, *kinds)]


class TestTags:
    """Tests for PHP open/close tags and inline HTML."""

    def test_open_tag(self):
        """Test the tokens of a minimal declaration."""
        tokens = tokenize("<?php class Foo {}")

        assert tokens == [
            TaggedToken(TokenKind.OPEN_TAG, "<?php"),
            TaggedToken(TokenKind.WHITESPACE, " "),
            TaggedToken(TokenKind.CLASS, "class"),
            TaggedToken(TokenKind.WHITESPACE, " "),
            TaggedToken(TokenKind.IDENTIFIER, "Foo"),
            TaggedToken(TokenKind.WHITESPACE, " "),
            "{",
            "}",
        ]

    def test_short_open_tag(self):
        """Test that the short open tag starts PHP code."""
        tokens = tagged("<? class Legacy {}")

        assert tokens[0] == TaggedToken(TokenKind.OPEN_TAG, "<?")
        assert tokens[1] == TaggedToken(TokenKind.CLASS, "class")

    def test_no_open_tag(self):
        """Test that text without an open tag is inline HTML."""
        tokens = tokenize("class Foo {}")

        assert tokens == [TaggedToken(TokenKind.INLINE_HTML, "class Foo {}")]

    def test_empty_input(self):
        """Test that empty input produces no tokens."""
        assert tokenize("") == []

    def test_close_tag_returns_to_html(self):
        """Test that text after ?> is inline HTML again."""
        tokens = tagged("<html><?php echo 1 ?>\n<p>class B</p>")

        assert tokens[0] == TaggedToken(TokenKind.INLINE_HTML, "<html>")
        assert TaggedToken(TokenKind.CLOSE_TAG, "?>") in tokens
        assert is_kind(tokens[-1], TokenKind.INLINE_HTML)
        assert tokens[-1].text.endswith("<p>class B</p>")
        assert not kinds_of("<html><?php echo 1 ?>\n<p>class B</p>", TokenKind.CLASS)

    def test_open_tag_with_echo(self):
        """Test the short echo tag."""
        tokens = tokenize("<?= $title ?>")

        assert tokens[0] == TaggedToken(TokenKind.OPEN_TAG_WITH_ECHO, "<?=")
        assert TaggedToken(TokenKind.VARIABLE, "$title") in tokens


class TestKeywords:
    """Tests for keyword and identifier classification."""

    @pytest.mark.parametrize("code, kind", [
        ("<?php namespace Foo;", TokenKind.NAMESPACE),
        ("<?php class Foo {}", TokenKind.CLASS),
        ("<?php interface Foo {}", TokenKind.INTERFACE),
        ("<?php trait Foo {}", TokenKind.TRAIT),
    ])
    def test_declaration_keywords(self, code, kind):
        """Test that declaration keywords get their own kinds."""
        assert tagged(code)[1].kind is kind

    def test_keywords_are_case_insensitive(self):
        """Test that keywords match regardless of case."""
        assert TaggedToken(TokenKind.CLASS, "CLASS") in tokenize("<?php CLASS Foo {}")

    def test_other_keywords(self):
        """Test that other keywords are generic keywords."""
        tokens = tokenize("<?php class Foo extends Bar implements Baz {}")

        assert TaggedToken(TokenKind.KEYWORD, "extends") in tokens
        assert TaggedToken(TokenKind.KEYWORD, "implements") in tokens

    def test_literal_names_are_identifiers(self):
        """Test that true, false, null and function names are plain identifiers."""
        tokens = tokenize("<?php $x = [true, false, null]; class_alias();")

        for word in ("true", "false", "null", "class_alias"):
            assert TaggedToken(TokenKind.IDENTIFIER, word) in tokens

    def test_property_named_like_keyword(self):
        """Test that a name after -> is never a keyword."""
        tokens = tokenize("<?php $obj->class; $obj?->interface;")

        assert TaggedToken(TokenKind.IDENTIFIER, "class") in tokens
        assert TaggedToken(TokenKind.IDENTIFIER, "interface") in tokens
        assert not kinds_of("<?php $obj->class; $obj?->interface;", TokenKind.CLASS, TokenKind.INTERFACE)

    def test_double_colon(self):
        """Test that the scope resolution operator is tagged."""
        tokens = tagged("<?php echo Foo::class;")

        assert tokens[2:4] == [
            TaggedToken(TokenKind.IDENTIFIER, "Foo"),
            TaggedToken(TokenKind.DOUBLE_COLON, "::"),
        ]

    def test_qualified_name(self):
        """Test that namespace separators are separate tokens."""
        tokens = tagged("<?php Foo\\Bar;")

        assert tokens[1:4] == [
            TaggedToken(TokenKind.IDENTIFIER, "Foo"),
            TaggedToken(TokenKind.NS_SEPARATOR, "\\"),
            TaggedToken(TokenKind.IDENTIFIER, "Bar"),
        ]


class TestLiterals:
    """Tests for strings, comments and other literals."""

    def test_single_quoted_string(self):
        """Test single-quoted strings keep their quotes."""
        tokens = tokenize("<?php $a = 'it\\'s';")

        assert TaggedToken(TokenKind.STRING_LITERAL, "'it\\'s'") in tokens

    def test_double_quoted_string(self):
        """Test double-quoted strings without interpolation are constant."""
        tokens = tokenize('<?php $a = "Foo"; $b = "cost: \\$total";')

        assert TaggedToken(TokenKind.STRING_LITERAL, '"Foo"') in tokens
        assert TaggedToken(TokenKind.STRING_LITERAL, '"cost: \\$total"') in tokens

    @pytest.mark.parametrize("literal", ['"Foo$bar"', '"{$baz}"', '"${qux}"'])
    def test_interpolated_string(self, literal):
        """Test that strings with variables are not constant."""
        tokens = kinds_of(f"<?php $a = {literal};", TokenKind.STRING_LITERAL, TokenKind.INTERPOLATED_STRING)

        assert tokens == [TaggedToken(TokenKind.INTERPOLATED_STRING, literal)]

    @pytest.mark.parametrize("literal", [
        '"{$row["class"]}"',
        '"Value: {$o->get("trait")}"',
        '"${names["interface"]}"',
    ])
    def test_nested_quotes_in_interpolation(self, literal):
        """Test that quotes inside {$...} do not end the string."""
        tokens = tokenize(f"<?php echo {literal};")

        assert TaggedToken(TokenKind.INTERPOLATED_STRING, literal) in tokens
        assert not any(is_kind(t, TokenKind.CLASS, TokenKind.TRAIT, TokenKind.INTERFACE) for t in tokens)

    def test_backtick_string(self):
        """Test that shell commands are single interpolated tokens."""
        literal = '`ls {$opts["class"]}`'
        tokens = tokenize(f"<?php $out = {literal};")

        assert TaggedToken(TokenKind.INTERPOLATED_STRING, literal) in tokens
        assert not kinds_of(f"<?php $out = {literal};", TokenKind.CLASS)

    def test_class_keyword_inside_string(self):
        """Test that keywords inside strings are not tokens."""
        tokens = tagged("<?php $a = 'class Foo';")

        assert TaggedToken(TokenKind.STRING_LITERAL, "'class Foo'") in tokens
        assert not any(is_kind(t, TokenKind.CLASS) for t in tokens)

    def test_heredoc(self):
        """Test that heredoc bodies are a single token."""
        tokens = tokenize('<?php $a = <<<EOT\nclass Foo {$row["class"]}\nEOT;\n')

        heredocs = [t for t in tokens if is_kind(t, TokenKind.HEREDOC)]
        assert len(heredocs) == 1
        assert heredocs[0].text.startswith("<<<EOT\nclass Foo")
        assert heredocs[0].text.endswith("EOT")
        assert not any(is_kind(t, TokenKind.CLASS) for t in tokens)

    def test_nowdoc(self):
        """Test quoted nowdoc labels."""
        tokens = tokenize("<?php $a = <<<'EOT'\n  class Foo\n  EOT;\n")

        assert kinds_of("<?php $a = <<<'EOT'\n  class Foo\n  EOT;\n", TokenKind.HEREDOC)
        assert not any(is_kind(t, TokenKind.CLASS) for t in tokens)

    def test_comments(self):
        """Test line, hash, block and doc comments."""
        tokens = kinds_of("<?php // a\n# b\n/* c */ /** d */", TokenKind.COMMENT, TokenKind.DOC_COMMENT)

        assert [t.kind for t in tokens] == [
            TokenKind.COMMENT,
            TokenKind.COMMENT,
            TokenKind.COMMENT,
            TokenKind.DOC_COMMENT,
        ]

    def test_line_comment_ends_before_close_tag(self):
        """Test that ?> ends a single-line comment."""
        tokens = tokenize("<?php // class Foo ?>class Bar")

        assert TaggedToken(TokenKind.COMMENT, "// class Foo ") in tokens
        assert TaggedToken(TokenKind.CLOSE_TAG, "?>") in tokens
        assert not any(is_kind(t, TokenKind.CLASS) for t in tokens)

    def test_attribute_is_not_a_comment(self):
        """Test that #[ opens an attribute."""
        tokens = tagged("<?php #[Attr] class Foo {}")

        assert tokens[1] == TaggedToken(TokenKind.ATTRIBUTE, "#[")
        assert TaggedToken(TokenKind.CLASS, "class") in tokens


class TestOperators:
    """Tests for punctuation and operators."""

    def test_single_characters_are_bare(self):
        """Test that single-character punctuation is a plain string."""
        tokens = tagged("<?php foo(1, 2);")

        assert tokens[2:] == [
            "(",
            TaggedToken(TokenKind.NUMBER, "1"),
            ",",
            TaggedToken(TokenKind.NUMBER, "2"),
            ")",
            ";",
        ]

    def test_multi_character_operators(self):
        """Test that multi-character operators are tagged."""
        tokens = tokenize("<?php $a = $b === [1 => $c];")

        assert TaggedToken(TokenKind.OPERATOR, "===") in tokens
        assert TaggedToken(TokenKind.OPERATOR, "=>") in tokens

    def test_object_operator(self):
        """Test that -> is tagged."""
        assert TaggedToken(TokenKind.OBJECT_OPERATOR, "->") in tokenize("<?php $a->b();")


class TestRecovery:
    """Tests for invalid and truncated input."""

    @pytest.mark.parametrize("code", [
        "<?php ",
        "<?php class",
        "<?php 'open",
        "<?php <<<EOT\n",
        "<?php /* class Foo",
        "<?php \x00 class A {}",
        "<?php }}} {{{ ;;; ::",
    ])
    def test_text_is_preserved(self, code):
        """Test that invalid input tokenizes without error and loses no text."""
        assert "".join(token_text(t) for t in tokenize(code)) == code

    def test_source_is_reproduced(self):
        """Test that joining token texts reproduces the source."""
        code = (
            "<p>header</p>\n<?php\nnamespace A\\B;\n\n/** Doc */\n"
            "final class C extends D implements E {\n\tconst X = 1.5e3;\n"
            "\tpublic function f() { return \"{$this->x[\"y\"]}\"; }\n}\n"
        )

        assert "".join(token_text(t) for t in tokenize(code)) == code

    def test_non_ascii_source(self):
        """Test that multi-byte characters keep token boundaries."""
        code = "<?php\n$s = 'Ünïcode';\nclass Façade {}\n"

        assert TaggedToken(TokenKind.IDENTIFIER, "Façade") in tokenize(code)
        assert "".join(token_text(t) for t in tokenize(code)) == code
