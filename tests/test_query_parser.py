"""Tests for the query tokenizer and expression builder."""

import pytest

from obsidian_fs.core.query_parser import (
    AndNode,
    FieldNode,
    NotNode,
    OrNode,
    QuerySyntaxError,
    TermNode,
    Token,
    TokenType,
    build_search_expression,
    parse_search_query,
    tokenize_query,
)


def _types(query):
    return [token.type for token in tokenize_query(query)]


class TestTokenizer:
    """Token stream produced for individual syntax elements."""

    @pytest.mark.parametrize("query", ["", "   ", "\t\n"])
    def test_blank_query_has_no_tokens(self, query):
        assert tokenize_query(query) == []

    def test_single_term(self):
        assert tokenize_query("git") == [Token(TokenType.TERM, value="git")]

    def test_quoted_phrase_is_one_term(self):
        tokens = tokenize_query('"machine learning"')
        assert tokens == [Token(TokenType.TERM, value="machine learning")]

    def test_empty_quoted_phrase(self):
        assert tokenize_query('""') == [Token(TokenType.TERM, value="")]

    def test_parentheses(self):
        assert _types("(a)") == [TokenType.LPAREN, TokenType.TERM, TokenType.RPAREN]

    def test_keywords(self):
        assert _types("a AND b OR c") == [
            TokenType.TERM, TokenType.AND, TokenType.TERM, TokenType.OR, TokenType.TERM,
        ]
        assert _types("a && b || c") == _types("a AND b OR c")

    def test_keywords_are_case_sensitive(self):
        tokens = tokenize_query("a and b")
        assert [token.value for token in tokens if token.type is TokenType.TERM] == ["a", "and", "b"]

    @pytest.mark.parametrize(
        "query, field, value",
        [("10:30", "10", "30"), ("https://example.com", "https", "//example.com")],
    )
    def test_any_colon_word_is_a_field(self, query, field, value):
        assert tokenize_query(query) == [Token(TokenType.FIELD, value=value, field=field)]
        assert parse_search_query(query) == FieldNode(field, value)

    def test_symbol_operators_split_words(self):
        assert tokenize_query("a&&b") == [
            Token(TokenType.TERM, value="a"),
            Token(TokenType.AND),
            Token(TokenType.TERM, value="b"),
        ]
        assert _types("a||b") == [TokenType.TERM, TokenType.OR, TokenType.TERM]

    def test_leading_minus_is_not(self):
        assert tokenize_query("-draft") == [
            Token(TokenType.NOT),
            Token(TokenType.TERM, value="draft"),
        ]

    def test_inner_minus_stays_in_word(self):
        assert tokenize_query("low-level") == [Token(TokenType.TERM, value="low-level")]

    def test_field_term(self):
        assert tokenize_query("tag:project") == [
            Token(TokenType.FIELD, value="project", field="tag"),
        ]

    def test_field_name_is_lowercased(self):
        assert tokenize_query("Title:Roadmap") == [
            Token(TokenType.FIELD, value="Roadmap", field="title"),
        ]

    def test_field_with_quoted_value(self):
        assert tokenize_query('title:"Getting Started"') == [
            Token(TokenType.FIELD, value="Getting Started", field="title"),
        ]

    @pytest.mark.parametrize("query", ["foo:", ":foo"])
    def test_incomplete_field_is_a_term(self, query):
        assert tokenize_query(query) == [Token(TokenType.TERM, value=query)]

    def test_value_keeps_additional_colons(self):
        assert tokenize_query("content:10:30") == [
            Token(TokenType.FIELD, value="10:30", field="content"),
        ]

    @pytest.mark.parametrize("query", ['"open phrase', 'title:"Getting Started', 'a "b'])
    def test_unterminated_quote_raises(self, query):
        with pytest.raises(QuerySyntaxError, match="Unterminated"):
            tokenize_query(query)


class TestImplicitAnd:
    """Implicit AND insertion between adjacent operands."""

    def test_between_terms(self):
        assert _types("a b") == [TokenType.TERM, TokenType.AND, TokenType.TERM]

    def test_before_group_and_after_group(self):
        assert _types("a (b) c") == [
            TokenType.TERM, TokenType.AND,
            TokenType.LPAREN, TokenType.TERM, TokenType.RPAREN,
            TokenType.AND, TokenType.TERM,
        ]

    def test_before_negation(self):
        assert _types("mcp -caas") == [TokenType.TERM, TokenType.AND, TokenType.NOT, TokenType.TERM]

    def test_not_after_explicit_operator(self):
        assert _types("a OR b") == [TokenType.TERM, TokenType.OR, TokenType.TERM]
        assert _types("NOT a") == [TokenType.NOT, TokenType.TERM]


class TestExpressionBuilder:
    """Tree shapes, precedence and grouping."""

    def test_empty_tokens_give_no_expression(self):
        assert build_search_expression([]) is None
        assert parse_search_query("   ") is None

    @pytest.mark.parametrize("query", ["a AND b", "a b", "a&&b", "a && b"])
    def test_and_spellings(self, query):
        assert parse_search_query(query) == AndNode(TermNode("a"), TermNode("b"))

    @pytest.mark.parametrize("query", ["a OR b", "a||b", "a || b"])
    def test_or_spellings(self, query):
        assert parse_search_query(query) == OrNode(TermNode("a"), TermNode("b"))

    def test_and_binds_tighter_than_or(self):
        assert parse_search_query("a OR b AND c") == OrNode(
            TermNode("a"), AndNode(TermNode("b"), TermNode("c"))
        )
        assert parse_search_query("a AND b OR c") == OrNode(
            AndNode(TermNode("a"), TermNode("b")), TermNode("c")
        )

    def test_not_binds_tightest(self):
        assert parse_search_query("NOT a AND b") == AndNode(NotNode(TermNode("a")), TermNode("b"))
        assert parse_search_query("mcp NOT caas") == AndNode(TermNode("mcp"), NotNode(TermNode("caas")))

    def test_equal_precedence_is_left_associative(self):
        assert parse_search_query("a OR b OR c") == OrNode(
            OrNode(TermNode("a"), TermNode("b")), TermNode("c")
        )

    def test_parentheses_override_precedence(self):
        assert parse_search_query("(a OR b) AND c") == AndNode(
            OrNode(TermNode("a"), TermNode("b")), TermNode("c")
        )

    def test_not_applies_to_group(self):
        assert parse_search_query("-(a OR b)") == NotNode(OrNode(TermNode("a"), TermNode("b")))

    def test_double_negation(self):
        assert parse_search_query("NOT NOT a") == NotNode(NotNode(TermNode("a")))

    def test_fields_and_phrases(self):
        assert parse_search_query('title:"Getting Started" tag:guide') == AndNode(
            FieldNode("title", "Getting Started"), FieldNode("tag", "guide")
        )

    @pytest.mark.parametrize(
        "query",
        ["AND", "a AND", "OR b", "NOT", "a NOT", "()", "(a", "a)", "(a OR b))", "a AND OR b"],
    )
    def test_malformed_queries_raise(self, query):
        with pytest.raises(QuerySyntaxError):
            parse_search_query(query)

    def test_syntax_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_search_query("(git")
