"""
Query grammar: WITH, set operations, SELECT specifications, relations and
joins, sampling, grouping, ORDER BY and LIMIT.
"""

from dataclasses import replace
from typing import Optional

from . import ast
from .base import GrammarBase, memoized, nested
from .tokens import TokenKind, can_be_identifier

# INTERSECT binds tighter than UNION and EXCEPT
_SET_OPERATION_PRECEDENCE = {
    'UNION': 1,
    'EXCEPT': 1,
    'INTERSECT': 2,
}

_SET_OPERATIONS = {
    'UNION': ast.Union,
    'EXCEPT': ast.Except,
    'INTERSECT': ast.Intersect,
}

_JOIN_TYPES = ('JOIN', 'INNER', 'LEFT', 'RIGHT', 'FULL')

_SAMPLE_TYPES = ('BERNOULLI', 'SYSTEM', 'POISSONIZED')

# Tokens that may follow a complete grouping element
_GROUPING_FOLLOW = frozenset({
    'HAVING', 'ORDER', 'LIMIT', 'UNION', 'EXCEPT', 'INTERSECT',
})


class QueryGrammar(GrammarBase):
    """Queries and the relations in their FROM clauses."""

    # ----- Queries -----

    @memoized
    def _query(self) -> ast.Query:
        start = self._token
        with_clause = None
        if self._accept('WITH'):
            recursive = self._accept('RECURSIVE') is not None
            queries = self._comma_list(self._named_query)
            with_clause = ast.With(recursive, tuple(queries), location=self._location(start))
        return self._query_no_with(with_clause, start)

    def _named_query(self) -> ast.WithQuery:
        name = self._identifier()
        column_names = None
        if self._at_symbol('('):
            column_names = tuple(self._parenthesized_list(self._identifier))
        self._expect('AS')
        self._expect_symbol('(')
        query = self._query()
        self._expect_symbol(')')
        return ast.WithQuery(name, query, column_names, location=name.location)

    def _query_no_with(self, with_clause: Optional[ast.With] = None, start=None) -> ast.Query:
        start = start or self._token
        body = self._query_term()

        order_by = None
        if self._at('ORDER'):
            order_by = self._order_by()
        limit = None
        if self._accept('LIMIT'):
            if self._at('ALL'):
                limit = self._advance().keyword
            else:
                limit = self._expect_kind(TokenKind.INTEGER_VALUE, "<integer>").text

        location = self._location(start)
        if isinstance(body, ast.QuerySpecification):
            body = replace(body, order_by=order_by, limit=limit)
            return ast.Query(body, with_clause, location=location)
        return ast.Query(body, with_clause, order_by, limit, location=location)

    def _query_term(self, min_precedence: int = 1) -> ast.QueryBody:
        left = self._query_primary()
        while True:
            if not self._at(*_SET_OPERATION_PRECEDENCE):
                return left
            operator = self._token.keyword
            precedence = _SET_OPERATION_PRECEDENCE[operator]
            if precedence < min_precedence:
                return left
            self._advance()
            distinct = True
            if self._accept('ALL'):
                distinct = False
            else:
                self._accept('DISTINCT')
            right = self._query_term(precedence + 1)
            left = _SET_OPERATIONS[operator](left, right, distinct, location=left.location)

    @memoized
    @nested
    def _query_primary(self) -> ast.QueryBody:
        start = self._token
        location = self._location(start)
        if self._at('SELECT'):
            return self._query_specification()
        if self._accept('TABLE'):
            return ast.Table(self._qualified_name(), location=location)
        if self._accept('VALUES'):
            rows = self._comma_list(self._expression)
            return ast.Values(tuple(rows), location=location)
        if self._accept_symbol('('):
            query = self._query_no_with()
            self._expect_symbol(')')
            return ast.TableSubquery(query, location=location)
        raise self._syntax_error()

    # ----- SELECT -----

    def _query_specification(self) -> ast.QuerySpecification:
        start = self._expect('SELECT')
        distinct, items = self._quantified(self._select_items)
        select = ast.Select(distinct, tuple(items), location=self._location(start))

        from_ = None
        if self._accept('FROM'):
            relations = self._comma_list(self._relation)
            from_ = relations[0]
            for relation in relations[1:]:
                from_ = ast.Join(ast.JoinType.IMPLICIT, from_, relation, location=from_.location)

        where = None
        if self._accept('WHERE'):
            where = self._expression()

        group_by = None
        if self._at('GROUP'):
            group_by = self._group_by()

        having = None
        if self._accept('HAVING'):
            having = self._expression()

        return ast.QuerySpecification(
            select, from_, where, group_by, having, location=self._location(start)
        )

    def _select_items(self):
        return self._comma_list(self._select_item)

    def _select_item(self) -> ast.SelectItem:
        start = self._token
        if self._accept_symbol('*'):
            return ast.AllColumns(location=self._location(start))
        if can_be_identifier(start) and self._at_all_columns_prefix():
            prefix = self._qualified_name()
            self._expect_symbol('.')
            self._expect_symbol('*')
            return ast.AllColumns(prefix, location=self._location(start))

        expression = self._expression()
        alias = None
        if self._accept('AS'):
            alias = self._identifier()
        elif self._at_identifier():
            alias = self._identifier()
        return ast.SingleColumn(expression, alias, location=self._location(start))

    def _at_all_columns_prefix(self) -> bool:
        """Look ahead for ``identifier ('.' identifier)* '.' '*'``."""
        offset = 1
        while self._peek_symbol('.', offset) and can_be_identifier(self._peek(offset + 1)):
            offset += 2
        return self._peek_symbol('.', offset) and self._peek_symbol('*', offset + 1)

    # ----- GROUP BY -----

    def _group_by(self) -> ast.GroupBy:
        start = self._expect('GROUP')
        self._expect('BY')
        distinct, elements = self._quantified(lambda: self._comma_list(self._grouping_element))
        return ast.GroupBy(distinct, tuple(elements), location=self._location(start))

    def _grouping_element(self) -> ast.GroupingElement:
        start = self._token
        location = self._location(start)
        if self._accept('ROLLUP'):
            return ast.Rollup(self._name_list(), location=location)
        if self._accept('CUBE'):
            return ast.Cube(self._name_list(), location=location)
        if self._at_sequence('GROUPING', 'SETS'):
            self._advance()
            self._advance()
            sets = self._parenthesized_list(self._grouping_set)
            return ast.GroupingSets(tuple(sets), location=location)
        if self._at_symbol('('):
            element = self._attempt(self._parenthesized_grouping)
            if element is not None:
                return element
        return ast.SimpleGroupBy((self._expression(),), location=location)

    def _parenthesized_grouping(self) -> ast.SimpleGroupBy:
        start = self._expect_symbol('(')
        columns = ()
        if not self._at_symbol(')'):
            columns = tuple(self._comma_list(self._expression))
        self._expect_symbol(')')
        if not self._at_grouping_end():
            raise self._syntax_error()
        return ast.SimpleGroupBy(columns, location=self._location(start))

    def _at_grouping_end(self) -> bool:
        token = self._token
        if token.kind in (TokenKind.EOF, TokenKind.DELIMITER):
            return True
        if token.kind is TokenKind.PUNCTUATION and token.text in (',', ')'):
            return True
        return token.keyword in _GROUPING_FOLLOW

    def _name_list(self):
        """``'(' (qualifiedName (',' qualifiedName)*)? ')'``"""
        self._expect_symbol('(')
        names = ()
        if not self._at_symbol(')'):
            names = tuple(self._comma_list(self._qualified_name))
        self._expect_symbol(')')
        return names

    def _grouping_set(self):
        if self._at_symbol('('):
            return self._name_list()
        return (self._qualified_name(),)

    # ----- Relations -----

    @memoized
    def _relation(self) -> ast.Relation:
        left = self._sampled_relation()
        while True:
            if self._accept('CROSS'):
                self._expect('JOIN')
                right = self._sampled_relation()
                left = ast.Join(ast.JoinType.CROSS, left, right, location=left.location)
            elif self._accept('NATURAL'):
                join_type = self._join_type()
                right = self._sampled_relation()
                left = ast.Join(join_type, left, right, ast.NaturalJoin(), location=left.location)
            elif self._at(*_JOIN_TYPES):
                join_type = self._join_type()
                joined = self._attempt(self._criteria_join, join_type, left)
                if joined is None:
                    right = self._sampled_relation()
                    criteria = None
                    if join_type is not ast.JoinType.INNER or self._at('ON', 'USING'):
                        criteria = self._join_criteria()
                    joined = ast.Join(join_type, left, right, criteria, location=left.location)
                left = joined
            else:
                return left

    def _criteria_join(self, join_type: ast.JoinType, left: ast.Relation) -> ast.Join:
        """The right side of a qualified join may itself be a chain of joins."""
        right = self._relation()
        criteria = self._join_criteria()
        return ast.Join(join_type, left, right, criteria, location=left.location)

    def _join_type(self) -> ast.JoinType:
        """``[INNER] JOIN`` or ``(LEFT|RIGHT|FULL) [OUTER] JOIN``."""
        join_type = ast.JoinType.INNER
        token = self._accept('LEFT', 'RIGHT', 'FULL')
        if token is not None:
            join_type = ast.JoinType[token.keyword]
            self._accept('OUTER')
        else:
            self._accept('INNER')
        self._expect('JOIN')
        return join_type

    def _join_criteria(self) -> ast.JoinCriteria:
        start = self._token
        if self._accept('ON'):
            return ast.JoinOn(self._expression(), location=self._location(start))
        self._expect('USING')
        columns = self._parenthesized_list(self._identifier)
        return ast.JoinUsing(tuple(columns), location=self._location(start))

    def _sampled_relation(self) -> ast.Relation:
        relation = self._aliased_relation()
        if not self._at_tablesample():
            return relation
        self._advance()
        sample_type = ast.SampleType[self._advance().keyword]
        self._expect_symbol('(')
        percentage = self._expression()
        self._expect_symbol(')')
        return ast.SampledRelation(relation, sample_type, percentage, location=relation.location)

    def _at_tablesample(self) -> bool:
        if not self._at('TABLESAMPLE'):
            return False
        if self._peek().keyword in _SAMPLE_TYPES:
            return True
        self._note(*(f"'{t}'" for t in _SAMPLE_TYPES), offset=1)
        return False

    def _aliased_relation(self) -> ast.Relation:
        relation = self._relation_primary()
        if self._accept('AS'):
            alias = self._identifier()
        elif self._at_identifier() and not self._at_tablesample():
            alias = self._identifier()
        else:
            return relation

        column_names = None
        if self._at_symbol('('):
            column_names = tuple(self._parenthesized_list(self._identifier))
        return ast.AliasedRelation(relation, alias, column_names, location=relation.location)

    @nested
    def _relation_primary(self) -> ast.Relation:
        start = self._token
        location = self._location(start)
        if self._at_symbol('('):
            if self._starts_query(1):
                self._advance()
                query = self._query()
                self._expect_symbol(')')
                return ast.TableSubquery(query, location=location)
            if self._peek_symbol('('):
                subquery = self._attempt(self._subquery_relation)
                if subquery is not None:
                    return subquery
            self._advance()
            relation = self._relation()
            self._expect_symbol(')')
            return ast.ParenthesizedRelation(relation, location=location)

        if self._at('UNNEST') and self._peek_symbol('('):
            self._advance()
            expressions = self._parenthesized_list(self._expression)
            with_ordinality = False
            if self._at_sequence('WITH', 'ORDINALITY'):
                self._advance()
                self._advance()
                with_ordinality = True
            return ast.Unnest(tuple(expressions), with_ordinality, location=location)

        return ast.Table(self._qualified_name(), location=location)

    def _subquery_relation(self) -> ast.TableSubquery:
        start = self._expect_symbol('(')
        query = self._query()
        self._expect_symbol(')')
        return ast.TableSubquery(query, location=self._location(start))
