"""
Unit tests for query parsing: SELECT, relations, joins, grouping and set operations.
"""

import pytest
from sqlfront.parser.parser import SqlParser
from sqlfront.parser import ast
from sqlfront.utils.exceptions import SQLSyntaxError


def _col(name):
    return ast.ColumnReference(ast.Identifier(name))


def _table(*parts):
    return ast.Table(ast.QualifiedName.of(*parts))


def _spec(value):
    """QuerySpecification for ``SELECT <value>``."""
    select = ast.Select(False, (ast.SingleColumn(ast.LongLiteral(value)),))
    return ast.QuerySpecification(select)


class TestQueries:
    """Test SELECT queries."""

    def setup_method(self):
        """Set up parser for each test."""
        self.parser = SqlParser()

    def query_body(self, sql):
        """Helper to parse a query and return its body."""
        query = self.parser.parse_statement(sql)
        assert isinstance(query, ast.Query)
        return query.body

    def test_parse_select_full(self):
        """Test SELECT with FROM, WHERE, ORDER BY and LIMIT."""
        query = self.parser.parse_statement(
            "SELECT a, b AS c FROM t WHERE x > 1 ORDER BY a DESC LIMIT 10"
        )

        assert query == ast.Query(ast.QuerySpecification(
            select=ast.Select(False, (
                ast.SingleColumn(_col("a")),
                ast.SingleColumn(_col("b"), ast.Identifier("c")),
            )),
            from_=_table("t"),
            where=ast.ComparisonExpression(
                ast.ComparisonOperator.GREATER_THAN, _col("x"), ast.LongLiteral(1)
            ),
            order_by=ast.OrderBy((ast.SortItem(_col("a"), ast.Ordering.DESCENDING),)),
            limit="10",
        ))

    def test_select_quantifiers(self):
        """Test SELECT DISTINCT and SELECT ALL."""
        assert self.query_body("SELECT DISTINCT a FROM t").select.distinct is True
        assert self.query_body("SELECT ALL a FROM t").select.distinct is False

    def test_column_named_all(self):
        """Test that ALL is only a quantifier when a select list follows."""
        body = self.query_body("SELECT all FROM t")

        assert body.select.select_items == (ast.SingleColumn(_col("all")),)

    def test_all_columns(self):
        """Test * and prefix.*."""
        body = self.query_body("SELECT t.*, s.t.*, * FROM t")

        assert body.select.select_items == (
            ast.AllColumns(ast.QualifiedName.of("t")),
            ast.AllColumns(ast.QualifiedName.of("s", "t")),
            ast.AllColumns(),
        )

    def test_alias_without_as(self):
        """Test an alias written without AS."""
        body = self.query_body("SELECT a b FROM t")

        assert body.select.select_items[0].alias == ast.Identifier("b")

    def test_non_reserved_alias(self):
        """Test that a non-reserved keyword can be an alias."""
        body = self.query_body("SELECT 1 AS format")

        assert body.select.select_items[0].alias == ast.Identifier("format")

    def test_reserved_alias_rejected(self):
        """Test that a reserved keyword cannot be an alias."""
        with pytest.raises(SQLSyntaxError):
            self.parser.parse_statement("SELECT 1 AS select")

    def test_quoted_reserved_alias(self):
        """Test that a quoted reserved keyword can be an alias."""
        body = self.query_body('SELECT 1 AS "select"')

        assert body.select.select_items[0].alias == ast.Identifier("select", True)

    def test_limit_all(self):
        """Test LIMIT ALL."""
        assert self.query_body("SELECT a FROM t LIMIT ALL").limit == "ALL"

    def test_table_and_values(self):
        """Test TABLE and VALUES query bodies."""
        assert self.query_body("TABLE s.t") == _table("s", "t")
        assert self.query_body("VALUES 1, 2") == ast.Values((ast.LongLiteral(1), ast.LongLiteral(2)))
        assert self.query_body("VALUES (1, 'a')") == ast.Values((
            ast.Row((ast.LongLiteral(1), ast.StringLiteral("a"))),
        ))

    def test_with_clause(self):
        """Test WITH and WITH RECURSIVE."""
        query = self.parser.parse_statement("WITH x (a) AS (SELECT 1), y AS (SELECT 2) SELECT a FROM x")
        recursive = self.parser.parse_statement("WITH RECURSIVE x AS (SELECT 1) SELECT * FROM x")

        assert query.with_clause == ast.With(False, (
            ast.WithQuery(ast.Identifier("x"), ast.Query(_spec(1)), (ast.Identifier("a"),)),
            ast.WithQuery(ast.Identifier("y"), ast.Query(_spec(2))),
        ))
        assert query.body.from_ == _table("x")
        assert recursive.with_clause.recursive is True


class TestSetOperations:
    """Test UNION, INTERSECT and EXCEPT."""

    def setup_method(self):
        """Set up parser for each test."""
        self.parser = SqlParser()

    def test_intersect_binds_tighter(self):
        """Test that INTERSECT binds tighter than UNION."""
        query = self.parser.parse_statement("SELECT 1 UNION SELECT 2 INTERSECT SELECT 3")

        assert query.body == ast.Union(_spec(1), ast.Intersect(_spec(2), _spec(3)))

    def test_left_associative(self):
        """Test that UNION and EXCEPT associate to the left."""
        query = self.parser.parse_statement("SELECT 1 EXCEPT SELECT 2 UNION SELECT 3")

        assert query.body == ast.Union(ast.Except(_spec(1), _spec(2)), _spec(3))

    def test_set_quantifiers(self):
        """Test ALL and DISTINCT on set operations."""
        union_all = self.parser.parse_statement("SELECT 1 UNION ALL SELECT 2")
        union_distinct = self.parser.parse_statement("SELECT 1 UNION DISTINCT SELECT 2")

        assert union_all.body.distinct is False
        assert union_distinct.body.distinct is True

    def test_order_by_applies_to_set_operation(self):
        """Test that ORDER BY and LIMIT after a set operation belong to the query."""
        query = self.parser.parse_statement("SELECT 1 UNION SELECT 2 ORDER BY 1 LIMIT 5")

        assert isinstance(query.body, ast.Union)
        assert query.body.right.order_by is None
        assert query.order_by == ast.OrderBy((ast.SortItem(ast.LongLiteral(1)),))
        assert query.limit == "5"

    def test_parenthesized_operand(self):
        """Test a parenthesized query inside a set operation."""
        query = self.parser.parse_statement("(SELECT 1 UNION SELECT 2) INTERSECT SELECT 3")

        assert isinstance(query.body, ast.Intersect)
        assert query.body.left == ast.TableSubquery(
            ast.Query(ast.Union(_spec(1), _spec(2)))
        )


class TestRelations:
    """Test FROM clause relations."""

    def setup_method(self):
        """Set up parser for each test."""
        self.parser = SqlParser()

    def from_clause(self, sql):
        """Helper to parse a query and return its FROM relation."""
        return self.parser.parse_statement(sql).body.from_

    def test_joins_are_left_associative(self):
        """Test a JOIN b JOIN c."""
        relation = self.from_clause("SELECT * FROM a JOIN b JOIN c")

        assert relation == ast.Join(
            ast.JoinType.INNER,
            ast.Join(ast.JoinType.INNER, _table("a"), _table("b")),
            _table("c")
        )

    def test_join_chain_with_criteria(self):
        """Test a JOIN b ON ... LEFT JOIN c USING (...)."""
        relation = self.from_clause(
            "SELECT * FROM a JOIN b ON a.x = b.x LEFT OUTER JOIN c USING (id, ds)"
        )

        assert relation.type is ast.JoinType.LEFT
        assert relation.criteria == ast.JoinUsing((ast.Identifier("id"), ast.Identifier("ds")))
        assert relation.left.type is ast.JoinType.INNER
        assert isinstance(relation.left.criteria, ast.JoinOn)

    def test_nested_join_on_the_right(self):
        """Test that a JOIN b JOIN c ON x ON y joins a to (b JOIN c)."""
        relation = self.from_clause("SELECT * FROM a JOIN b JOIN c ON x ON y")

        assert relation == ast.Join(
            ast.JoinType.INNER,
            _table("a"),
            ast.Join(ast.JoinType.INNER, _table("b"), _table("c"), ast.JoinOn(_col("x"))),
            ast.JoinOn(_col("y"))
        )

    def test_trailing_criteria_bind_to_last_join(self):
        """Test that a JOIN b JOIN c ON x stays left-deep."""
        relation = self.from_clause("SELECT * FROM a JOIN b JOIN c ON x")

        assert relation == ast.Join(
            ast.JoinType.INNER,
            ast.Join(ast.JoinType.INNER, _table("a"), _table("b")),
            _table("c"),
            ast.JoinOn(_col("x"))
        )

    def test_outer_join_requires_criteria(self):
        """Test that LEFT, RIGHT and FULL joins need ON or USING."""
        for join in ("LEFT", "RIGHT OUTER", "FULL"):
            with pytest.raises(SQLSyntaxError) as exc_info:
                self.parser.parse_statement(f"SELECT * FROM a {join} JOIN b")
            assert "'ON'" in exc_info.value.expected_tokens

    def test_cross_and_natural_joins(self):
        """Test CROSS JOIN and NATURAL joins."""
        cross = self.from_clause("SELECT * FROM a CROSS JOIN b")
        natural = self.from_clause("SELECT * FROM a NATURAL FULL JOIN b")

        assert cross == ast.Join(ast.JoinType.CROSS, _table("a"), _table("b"))
        assert natural == ast.Join(ast.JoinType.FULL, _table("a"), _table("b"), ast.NaturalJoin())

    def test_implicit_join(self):
        """Test that FROM a, b, c folds into a left-deep implicit join."""
        relation = self.from_clause("SELECT * FROM a, b, c")

        assert relation == ast.Join(
            ast.JoinType.IMPLICIT,
            ast.Join(ast.JoinType.IMPLICIT, _table("a"), _table("b")),
            _table("c")
        )

    def test_aliases(self):
        """Test aliases with and without AS and column names."""
        aliased = self.from_clause("SELECT * FROM t AS x (a, b)")
        bare = self.from_clause("SELECT * FROM t x")

        assert aliased == ast.AliasedRelation(
            _table("t"), ast.Identifier("x"), (ast.Identifier("a"), ast.Identifier("b"))
        )
        assert bare == ast.AliasedRelation(_table("t"), ast.Identifier("x"))

    def test_tablesample(self):
        """Test TABLESAMPLE, and tablesample used as an alias."""
        sampled = self.from_clause("SELECT * FROM t TABLESAMPLE BERNOULLI (10)")
        aliased = self.from_clause("SELECT * FROM t tablesample")

        assert sampled == ast.SampledRelation(
            _table("t"), ast.SampleType.BERNOULLI, ast.LongLiteral(10)
        )
        assert aliased == ast.AliasedRelation(_table("t"), ast.Identifier("tablesample"))

    def test_unnest(self):
        """Test UNNEST WITH ORDINALITY."""
        relation = self.from_clause(
            "SELECT * FROM UNNEST(ARRAY[1, 2]) WITH ORDINALITY AS u (x, n)"
        )

        assert relation == ast.AliasedRelation(
            ast.Unnest(
                (ast.ArrayConstructor((ast.LongLiteral(1), ast.LongLiteral(2))),), True
            ),
            ast.Identifier("u"),
            (ast.Identifier("x"), ast.Identifier("n"))
        )

    def test_subquery_relation(self):
        """Test a subquery in FROM."""
        relation = self.from_clause("SELECT * FROM (SELECT 1) t")

        assert relation == ast.AliasedRelation(
            ast.TableSubquery(ast.Query(_spec(1))), ast.Identifier("t")
        )

    def test_parenthesized_set_operation_relation(self):
        """Test a parenthesized set operation of subqueries in FROM."""
        relation = self.from_clause("SELECT * FROM ((SELECT 1) UNION (SELECT 2)) u")

        assert isinstance(relation.relation, ast.TableSubquery)
        assert isinstance(relation.relation.query.body, ast.Union)

    def test_parenthesized_join(self):
        """Test parenthesized joins."""
        relation = self.from_clause("SELECT * FROM ((a JOIN b ON p) JOIN c ON q)")

        assert isinstance(relation, ast.ParenthesizedRelation)
        assert isinstance(relation.relation.left, ast.ParenthesizedRelation)
        assert relation.relation.right == _table("c")


class TestGroupBy:
    """Test GROUP BY and HAVING."""

    def setup_method(self):
        """Set up parser for each test."""
        self.parser = SqlParser()

    def group_by(self, clause):
        """Helper to parse a GROUP BY clause of a simple query."""
        return self.parser.parse_statement(f"SELECT count(*) FROM t GROUP BY {clause}").body.group_by

    def test_simple_group_by(self):
        """Test GROUP BY a, b with HAVING."""
        body = self.parser.parse_statement(
            "SELECT a, count(*) FROM t GROUP BY a, b HAVING count(*) > 1"
        ).body

        assert body.group_by == ast.GroupBy(False, (
            ast.SimpleGroupBy((_col("a"),)),
            ast.SimpleGroupBy((_col("b"),)),
        ))
        assert isinstance(body.having, ast.ComparisonExpression)

    def test_parenthesized_grouping(self):
        """Test GROUP BY (a, b), c and the empty grouping set."""
        assert self.group_by("(a, b), c").grouping_elements == (
            ast.SimpleGroupBy((_col("a"), _col("b"))),
            ast.SimpleGroupBy((_col("c"),)),
        )
        assert self.group_by("()").grouping_elements == (ast.SimpleGroupBy(()),)

    def test_parenthesized_expression(self):
        """Test that (a + 1) * 2 is one grouping expression."""
        element = self.group_by("(a + 1) * 2").grouping_elements[0]

        assert element == ast.SimpleGroupBy((ast.ArithmeticBinaryExpression(
            ast.ArithmeticOperator.MULTIPLY,
            ast.ArithmeticBinaryExpression(ast.ArithmeticOperator.ADD, _col("a"), ast.LongLiteral(1)),
            ast.LongLiteral(2)
        ),))

    def test_rollup_cube_grouping_sets(self):
        """Test ROLLUP, CUBE and GROUPING SETS."""
        a = ast.QualifiedName.of("a")
        b = ast.QualifiedName.of("b")
        c = ast.QualifiedName.of("c")

        assert self.group_by("ROLLUP (a, b)").grouping_elements == (ast.Rollup((a, b)),)
        assert self.group_by("CUBE (a)").grouping_elements == (ast.Cube((a,)),)
        assert self.group_by("GROUPING SETS ((a, b), c, ())").grouping_elements == (
            ast.GroupingSets(((a, b), (c,), ())),
        )

    def test_group_by_distinct(self):
        """Test GROUP BY DISTINCT."""
        assert self.group_by("DISTINCT a").distinct is True


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
