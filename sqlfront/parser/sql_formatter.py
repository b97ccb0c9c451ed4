"""
Canonical SQL rendering of AST nodes.

format_sql() prints any node back to single-line SQL. Compound expressions
are fully parenthesized, so parsing the output again yields an equal tree
without the printer having to reason about precedence.
"""

import math
import re
from typing import Iterable

from . import ast
from .tokens import is_reserved
from .visitor import AstVisitor

_PLAIN_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_@:]*")

# names that start a different construct when written bare
_LITERAL_PREFIXES = frozenset({"time", "timestamp", "interval"})
_TYPE_PREFIXES = frozenset({"row", "array", "map"})
_COMPOUND_TYPE_NAMES = frozenset({"time with time zone", "timestamp with time zone", "double precision"})


def format_sql(node: ast.Node) -> str:
    """
    Render a node as SQL text.

    Args:
        node: Any AST node (statement, expression, relation, type, ...)

    Returns:
        Canonical SQL text for the node
    """
    return SqlFormatter().process(node)


def quote_identifier(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def quote_string(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def _is_plain_name(value: str) -> bool:
    """Check whether a name reads back unchanged without quotes."""
    return _PLAIN_NAME.fullmatch(value) is not None and not is_reserved(value)


class SqlFormatter(AstVisitor):
    """Visitor returning the SQL text of each node."""

    def visit_node(self, node, context):
        raise TypeError(f"Cannot format node of type {type(node).__name__}")

    def _join(self, nodes: Iterable[ast.Node], separator: str = ", ") -> str:
        return separator.join(self.process(n) for n in nodes)

    # ----- Names -----

    def visit_identifier(self, node: ast.Identifier, context):
        if node.delimited:
            return quote_identifier(node.value)
        return node.value

    def visit_qualified_name(self, node: ast.QualifiedName, context):
        return self._join(node.parts, ".")

    # ----- Literals -----

    def visit_null_literal(self, node, context):
        return "NULL"

    def visit_boolean_literal(self, node: ast.BooleanLiteral, context):
        return "TRUE" if node.value else "FALSE"

    def visit_long_literal(self, node: ast.LongLiteral, context):
        return str(node.value)

    def visit_double_literal(self, node: ast.DoubleLiteral, context):
        if math.isinf(node.value) and node.value > 0:
            # overflowing literals such as 1e400 read back as infinity
            return "1E999"
        if not math.isfinite(node.value):
            raise ValueError(f"Cannot format double literal {node.value!r}")
        return repr(node.value)

    def visit_decimal_literal(self, node: ast.DecimalLiteral, context):
        return node.value

    def visit_string_literal(self, node: ast.StringLiteral, context):
        return quote_string(node.value)

    def visit_binary_literal(self, node: ast.BinaryLiteral, context):
        return "X'" + node.value.hex().upper() + "'"

    def visit_generic_literal(self, node: ast.GenericLiteral, context):
        type_name = node.type
        if not _is_plain_name(type_name) or type_name.lower() in _LITERAL_PREFIXES:
            type_name = quote_identifier(type_name)
        return f"{type_name} {quote_string(node.value)}"

    def visit_time_literal(self, node: ast.TimeLiteral, context):
        return f"TIME {quote_string(node.value)}"

    def visit_timestamp_literal(self, node: ast.TimestampLiteral, context):
        return f"TIMESTAMP {quote_string(node.value)}"

    def visit_interval_literal(self, node: ast.IntervalLiteral, context):
        sign = "- " if node.sign is ast.IntervalSign.NEGATIVE else ""
        text = f"INTERVAL {sign}{quote_string(node.value)} {node.start_field.value}"
        if node.end_field is not None:
            text += f" TO {node.end_field.value}"
        return text

    # ----- Expressions -----

    def visit_parameter(self, node, context):
        return "?"

    def visit_column_reference(self, node: ast.ColumnReference, context):
        return self.process(node.name)

    def visit_dereference_expression(self, node: ast.DereferenceExpression, context):
        return f"{self.process(node.base)}.{self.process(node.field)}"

    def visit_subscript_expression(self, node: ast.SubscriptExpression, context):
        return f"{self.process(node.base)}[{self.process(node.index)}]"

    def visit_arithmetic_unary_expression(self, node: ast.ArithmeticUnaryExpression, context):
        return f"({node.sign.value}{self.process(node.value)})"

    def visit_arithmetic_binary_expression(self, node: ast.ArithmeticBinaryExpression, context):
        return f"({self.process(node.left)} {node.operator.value} {self.process(node.right)})"

    def visit_concatenation_expression(self, node: ast.ConcatenationExpression, context):
        return f"({self.process(node.left)} || {self.process(node.right)})"

    def visit_at_time_zone(self, node: ast.AtTimeZone, context):
        return f"({self.process(node.value)} AT TIME ZONE {self.process(node.time_zone)})"

    def visit_comparison_expression(self, node: ast.ComparisonExpression, context):
        return f"({self.process(node.left)} {node.operator.value} {self.process(node.right)})"

    def visit_not_expression(self, node: ast.NotExpression, context):
        return f"(NOT {self.process(node.value)})"

    def visit_logical_binary_expression(self, node: ast.LogicalBinaryExpression, context):
        return f"({self.process(node.left)} {node.operator.value} {self.process(node.right)})"

    def visit_between_predicate(self, node: ast.BetweenPredicate, context):
        return (
            f"({self.process(node.value)} BETWEEN "
            f"{self.process(node.min)} AND {self.process(node.max)})"
        )

    def visit_in_list_expression(self, node: ast.InListExpression, context):
        return f"({self._join(node.values)})"

    def visit_in_predicate(self, node: ast.InPredicate, context):
        return f"({self.process(node.value)} IN {self.process(node.value_list)})"

    def visit_like_predicate(self, node: ast.LikePredicate, context):
        text = f"{self.process(node.value)} LIKE {self.process(node.pattern)}"
        if node.escape is not None:
            text += f" ESCAPE {self.process(node.escape)}"
        return f"({text})"

    def visit_is_null_predicate(self, node: ast.IsNullPredicate, context):
        return f"({self.process(node.value)} IS NULL)"

    def visit_is_not_null_predicate(self, node: ast.IsNotNullPredicate, context):
        return f"({self.process(node.value)} IS NOT NULL)"

    def visit_subquery_expression(self, node: ast.SubqueryExpression, context):
        return f"({self.process(node.query)})"

    def visit_quantified_comparison_expression(self, node, context):
        return (
            f"({self.process(node.value)} {node.operator.value} "
            f"{node.quantifier.value} {self.process(node.subquery)})"
        )

    def visit_exists_predicate(self, node: ast.ExistsPredicate, context):
        return f"EXISTS ({self.process(node.subquery)})"

    def visit_array_constructor(self, node: ast.ArrayConstructor, context):
        return f"ARRAY[{self._join(node.values)}]"

    def visit_row(self, node: ast.Row, context):
        # a single parenthesized expression is not a row
        if len(node.items) == 1:
            return f"ROW ({self.process(node.items[0])})"
        return f"({self._join(node.items)})"

    def visit_lambda_expression(self, node: ast.LambdaExpression, context):
        return f"(({self._join(node.arguments)}) -> {self.process(node.body)})"

    def visit_function_call(self, node: ast.FunctionCall, context):
        if node.arguments:
            arguments = self._join(node.arguments)
            if node.distinct:
                arguments = "DISTINCT " + arguments
        elif node.name.suffix.lower() == 'count':
            arguments = "*"
        else:
            arguments = ""
        text = f"{self.process(node.name)}({arguments})"
        if node.filter is not None:
            text += f" FILTER (WHERE {self.process(node.filter)})"
        if node.window is not None:
            text += " " + self.process(node.window)
        return text

    def visit_window(self, node: ast.Window, context):
        parts = []
        if node.partition_by:
            parts.append("PARTITION BY " + self._join(node.partition_by))
        if node.order_by is not None:
            parts.append(self.process(node.order_by))
        if node.frame is not None:
            parts.append(self.process(node.frame))
        return f"OVER ({' '.join(parts)})"

    def visit_window_frame(self, node: ast.WindowFrame, context):
        if node.end is None:
            return f"{node.type.value} {self.process(node.start)}"
        return f"{node.type.value} BETWEEN {self.process(node.start)} AND {self.process(node.end)}"

    def visit_frame_bound(self, node: ast.FrameBound, context):
        if node.value is None:
            return node.type.value
        return f"{self.process(node.value)} {node.type.value}"

    def visit_order_by(self, node: ast.OrderBy, context):
        return "ORDER BY " + self._join(node.sort_items)

    def visit_sort_item(self, node: ast.SortItem, context):
        text = f"{self.process(node.sort_key)} {node.ordering.value}"
        if node.null_ordering is not ast.NullOrdering.UNDEFINED:
            text += f" NULLS {node.null_ordering.value}"
        return text

    def visit_when_clause(self, node: ast.WhenClause, context):
        return f"WHEN {self.process(node.operand)} THEN {self.process(node.result)}"

    def _case(self, head: str, when_clauses, default) -> str:
        parts = [head] + [self.process(w) for w in when_clauses]
        if default is not None:
            parts.append(f"ELSE {self.process(default)}")
        parts.append("END")
        return " ".join(parts)

    def visit_simple_case_expression(self, node: ast.SimpleCaseExpression, context):
        return self._case(f"CASE {self.process(node.operand)}", node.when_clauses, node.default)

    def visit_searched_case_expression(self, node: ast.SearchedCaseExpression, context):
        return self._case("CASE", node.when_clauses, node.default)

    def visit_if_expression(self, node: ast.IfExpression, context):
        arguments = [node.condition, node.true_value]
        if node.false_value is not None:
            arguments.append(node.false_value)
        return f"IF({self._join(arguments)})"

    def visit_null_if_expression(self, node: ast.NullIfExpression, context):
        return f"NULLIF({self.process(node.first)}, {self.process(node.second)})"

    def visit_coalesce_expression(self, node: ast.CoalesceExpression, context):
        return f"COALESCE({self._join(node.operands)})"

    def visit_try_expression(self, node: ast.TryExpression, context):
        return f"TRY({self.process(node.inner)})"

    def visit_cast(self, node: ast.Cast, context):
        keyword = "TRY_CAST" if node.safe else "CAST"
        return f"{keyword}({self.process(node.expression)} AS {self.process(node.type)})"

    def visit_extract(self, node: ast.Extract, context):
        return f"EXTRACT({node.field.value} FROM {self.process(node.expression)})"

    def visit_position(self, node: ast.Position, context):
        return f"POSITION({self.process(node.substring)} IN {self.process(node.string)})"

    def visit_substring(self, node: ast.Substring, context):
        text = f"SUBSTRING({self.process(node.value)} FROM {self.process(node.start)}"
        if node.length is not None:
            text += f" FOR {self.process(node.length)}"
        return text + ")"

    def visit_normalize(self, node: ast.Normalize, context):
        if node.form is None:
            return f"NORMALIZE({self.process(node.value)})"
        return f"NORMALIZE({self.process(node.value)}, {node.form.value})"

    def visit_current_time(self, node: ast.CurrentTime, context):
        if node.precision is None:
            return node.function.value
        return f"{node.function.value}({node.precision})"

    # ----- Types -----

    def visit_base_type(self, node: ast.BaseType, context):
        name = node.name
        if name not in _COMPOUND_TYPE_NAMES and (
            not _is_plain_name(name) or name != name.lower() or name in _TYPE_PREFIXES
        ):
            name = quote_identifier(name)
        if not node.parameters:
            return name
        parameters = ", ".join(
            str(p) if isinstance(p, int) else self.process(p) for p in node.parameters
        )
        return f"{name}({parameters})"

    def visit_array_type(self, node: ast.ArrayType, context):
        return f"ARRAY<{self.process(node.element_type)}>"

    def visit_map_type(self, node: ast.MapType, context):
        return f"MAP<{self.process(node.key_type)}, {self.process(node.value_type)}>"

    def visit_row_field(self, node: ast.RowField, context):
        return f"{self.process(node.name)} {self.process(node.type)}"

    def visit_row_type(self, node: ast.RowType, context):
        return f"ROW({self._join(node.fields)})"

    # ----- Queries -----

    def visit_query(self, node: ast.Query, context):
        parts = []
        if node.with_clause is not None:
            parts.append(self.process(node.with_clause))
        parts.append(self.process(node.body))
        if node.order_by is not None:
            parts.append(self.process(node.order_by))
        if node.limit is not None:
            parts.append(f"LIMIT {node.limit}")
        return " ".join(parts)

    def visit_with(self, node: ast.With, context):
        keyword = "WITH RECURSIVE" if node.recursive else "WITH"
        return f"{keyword} {self._join(node.queries)}"

    def visit_with_query(self, node: ast.WithQuery, context):
        name = self.process(node.name)
        if node.column_names is not None:
            name += f" ({self._join(node.column_names)})"
        return f"{name} AS ({self.process(node.query)})"

    def visit_query_specification(self, node: ast.QuerySpecification, context):
        parts = [self.process(node.select)]
        if node.from_ is not None:
            parts.append("FROM " + self._relation(node.from_))
        if node.where is not None:
            parts.append("WHERE " + self.process(node.where))
        if node.group_by is not None:
            parts.append(self.process(node.group_by))
        if node.having is not None:
            parts.append("HAVING " + self.process(node.having))
        if node.order_by is not None:
            parts.append(self.process(node.order_by))
        if node.limit is not None:
            parts.append(f"LIMIT {node.limit}")
        return " ".join(parts)

    def visit_select(self, node: ast.Select, context):
        keyword = "SELECT DISTINCT" if node.distinct else "SELECT"
        return f"{keyword} {self._join(node.select_items)}"

    def visit_single_column(self, node: ast.SingleColumn, context):
        if node.alias is None:
            return self.process(node.expression)
        return f"{self.process(node.expression)} AS {self.process(node.alias)}"

    def visit_all_columns(self, node: ast.AllColumns, context):
        if node.prefix is None:
            return "*"
        return f"{self.process(node.prefix)}.*"

    def visit_group_by(self, node: ast.GroupBy, context):
        keyword = "GROUP BY DISTINCT" if node.distinct else "GROUP BY"
        return f"{keyword} {self._join(node.grouping_elements)}"

    def visit_simple_group_by(self, node: ast.SimpleGroupBy, context):
        if len(node.columns) == 1:
            return self.process(node.columns[0])
        return f"({self._join(node.columns)})"

    def visit_rollup(self, node: ast.Rollup, context):
        return f"ROLLUP ({self._join(node.columns)})"

    def visit_cube(self, node: ast.Cube, context):
        return f"CUBE ({self._join(node.columns)})"

    def visit_grouping_sets(self, node: ast.GroupingSets, context):
        sets = ", ".join(f"({self._join(s)})" for s in node.sets)
        return f"GROUPING SETS ({sets})"

    def visit_set_operation(self, node: ast.SetOperation, context):
        keyword = type(node).__name__.upper()
        if not node.distinct:
            keyword += " ALL"
        return f"{self.process(node.left)} {keyword} {self.process(node.right)}"

    def visit_values(self, node: ast.Values, context):
        return "VALUES " + self._join(node.rows)

    def visit_table(self, node: ast.Table, context):
        return "TABLE " + self.process(node.name)

    def visit_table_subquery(self, node: ast.TableSubquery, context):
        return f"({self.process(node.query)})"

    # ----- Relations -----

    def _relation(self, node: ast.Relation) -> str:
        # a table in FROM is written without the TABLE keyword
        if isinstance(node, ast.Table):
            return self.process(node.name)
        return self.process(node)

    def visit_aliased_relation(self, node: ast.AliasedRelation, context):
        text = f"{self._relation(node.relation)} AS {self.process(node.alias)}"
        if node.column_names is not None:
            text += f" ({self._join(node.column_names)})"
        return text

    def visit_sampled_relation(self, node: ast.SampledRelation, context):
        return (
            f"{self._relation(node.relation)} TABLESAMPLE {node.type.value} "
            f"({self.process(node.sample_percentage)})"
        )

    def visit_join(self, node: ast.Join, context):
        left = self._relation(node.left)
        right = self._relation(node.right)
        if node.type is ast.JoinType.IMPLICIT:
            return f"{left}, {right}"
        if node.type is ast.JoinType.CROSS:
            return f"{left} CROSS JOIN {right}"
        if isinstance(node.criteria, ast.NaturalJoin):
            return f"{left} NATURAL {node.type.value} JOIN {right}"
        text = f"{left} {node.type.value} JOIN {right}"
        if node.criteria is not None:
            text += " " + self.process(node.criteria)
        return text

    def visit_join_on(self, node: ast.JoinOn, context):
        return "ON " + self.process(node.expression)

    def visit_join_using(self, node: ast.JoinUsing, context):
        return f"USING ({self._join(node.columns)})"

    def visit_unnest(self, node: ast.Unnest, context):
        text = f"UNNEST({self._join(node.expressions)})"
        if node.with_ordinality:
            text += " WITH ORDINALITY"
        return text

    def visit_parenthesized_relation(self, node: ast.ParenthesizedRelation, context):
        return f"({self._relation(node.relation)})"

    # ----- Schemas and tables -----

    def _properties(self, properties) -> str:
        if not properties:
            return ""
        return f" WITH ({self._join(properties)})"

    def visit_property(self, node: ast.Property, context):
        return f"{self.process(node.name)} = {self.process(node.value)}"

    def visit_create_schema(self, node: ast.CreateSchema, context):
        exists = "IF NOT EXISTS " if node.not_exists else ""
        return f"CREATE SCHEMA {exists}{self.process(node.name)}{self._properties(node.properties)}"

    def visit_drop_schema(self, node: ast.DropSchema, context):
        exists = "IF EXISTS " if node.exists else ""
        behavior = " CASCADE" if node.cascade else ""
        return f"DROP SCHEMA {exists}{self.process(node.name)}{behavior}"

    def visit_rename_schema(self, node: ast.RenameSchema, context):
        return f"ALTER SCHEMA {self.process(node.source)} RENAME TO {self.process(node.target)}"

    def visit_column_definition(self, node: ast.ColumnDefinition, context):
        text = f"{self.process(node.name)} {self.process(node.type)}"
        if node.comment is not None:
            text += f" COMMENT {quote_string(node.comment)}"
        return text

    def visit_like_clause(self, node: ast.LikeClause, context):
        text = f"LIKE {self.process(node.table_name)}"
        if node.properties_option is not None:
            text += f" {node.properties_option.value} PROPERTIES"
        return text

    def visit_create_table(self, node: ast.CreateTable, context):
        exists = "IF NOT EXISTS " if node.not_exists else ""
        return (
            f"CREATE TABLE {exists}{self.process(node.name)} ({self._join(node.elements)})"
            f"{self._properties(node.properties)}"
        )

    def visit_create_table_as_select(self, node: ast.CreateTableAsSelect, context):
        exists = "IF NOT EXISTS " if node.not_exists else ""
        text = (
            f"CREATE TABLE {exists}{self.process(node.name)}{self._properties(node.properties)} "
            f"AS {self.process(node.query)}"
        )
        if not node.with_data:
            text += " WITH NO DATA"
        return text

    def visit_drop_table(self, node: ast.DropTable, context):
        exists = "IF EXISTS " if node.exists else ""
        return f"DROP TABLE {exists}{self.process(node.table_name)}"

    def visit_rename_table(self, node: ast.RenameTable, context):
        return f"ALTER TABLE {self.process(node.source)} RENAME TO {self.process(node.target)}"

    def visit_rename_column(self, node: ast.RenameColumn, context):
        return (
            f"ALTER TABLE {self.process(node.table)} RENAME COLUMN "
            f"{self.process(node.source)} TO {self.process(node.target)}"
        )

    def visit_add_column(self, node: ast.AddColumn, context):
        return f"ALTER TABLE {self.process(node.name)} ADD COLUMN {self.process(node.column)}"

    def visit_create_view(self, node: ast.CreateView, context):
        keyword = "CREATE OR REPLACE VIEW" if node.replace else "CREATE VIEW"
        return f"{keyword} {self.process(node.name)} AS {self.process(node.query)}"

    def visit_drop_view(self, node: ast.DropView, context):
        exists = "IF EXISTS " if node.exists else ""
        return f"DROP VIEW {exists}{self.process(node.name)}"

    # ----- Data modification -----

    def visit_insert(self, node: ast.Insert, context):
        columns = ""
        if node.columns is not None:
            columns = f" ({self._join(node.columns)})"
        return f"INSERT INTO {self.process(node.target)}{columns} {self.process(node.query)}"

    def visit_delete(self, node: ast.Delete, context):
        text = f"DELETE FROM {self.process(node.table.name)}"
        if node.where is not None:
            text += f" WHERE {self.process(node.where)}"
        return text

    # ----- Procedures and access control -----

    def visit_call_argument(self, node: ast.CallArgument, context):
        if node.name is None:
            return self.process(node.value)
        return f"{self.process(node.name)} => {self.process(node.value)}"

    def visit_call(self, node: ast.Call, context):
        return f"CALL {self.process(node.name)}({self._join(node.arguments)})"

    def _privileges(self, privileges) -> str:
        if privileges is None:
            return "ALL PRIVILEGES"
        return self._join(privileges)

    def visit_grant(self, node: ast.Grant, context):
        table = "TABLE " if node.table else ""
        text = (
            f"GRANT {self._privileges(node.privileges)} ON {table}"
            f"{self.process(node.table_name)} TO {self.process(node.grantee)}"
        )
        if node.with_grant_option:
            text += " WITH GRANT OPTION"
        return text

    def visit_revoke(self, node: ast.Revoke, context):
        option = "GRANT OPTION FOR " if node.grant_option_for else ""
        table = "TABLE " if node.table else ""
        return (
            f"REVOKE {option}{self._privileges(node.privileges)} ON {table}"
            f"{self.process(node.table_name)} FROM {self.process(node.grantee)}"
        )

    # ----- Introspection -----

    def visit_explain_format(self, node: ast.ExplainFormat, context):
        return f"FORMAT {node.type.value}"

    def visit_explain_type(self, node: ast.ExplainType, context):
        return f"TYPE {node.type.value}"

    def visit_explain(self, node: ast.Explain, context):
        parts = ["EXPLAIN"]
        if node.analyze:
            parts.append("ANALYZE")
        if node.options:
            parts.append(f"({self._join(node.options)})")
        parts.append(self.process(node.statement))
        return " ".join(parts)

    def visit_show_create(self, node: ast.ShowCreate, context):
        return f"SHOW CREATE {node.type.value} {self.process(node.name)}"

    def _like(self, pattern) -> str:
        if pattern is None:
            return ""
        return f" LIKE {quote_string(pattern)}"

    def visit_show_tables(self, node: ast.ShowTables, context):
        text = "SHOW TABLES"
        if node.schema is not None:
            text += f" FROM {self.process(node.schema)}"
        return text + self._like(node.like_pattern)

    def visit_show_schemas(self, node: ast.ShowSchemas, context):
        text = "SHOW SCHEMAS"
        if node.catalog is not None:
            text += f" FROM {self.process(node.catalog)}"
        return text + self._like(node.like_pattern)

    def visit_show_catalogs(self, node: ast.ShowCatalogs, context):
        return "SHOW CATALOGS" + self._like(node.like_pattern)

    def visit_show_columns(self, node: ast.ShowColumns, context):
        return f"SHOW COLUMNS FROM {self.process(node.table)}"

    def visit_show_functions(self, node, context):
        return "SHOW FUNCTIONS"

    def visit_show_session(self, node, context):
        return "SHOW SESSION"

    def visit_show_partitions(self, node: ast.ShowPartitions, context):
        parts = [f"SHOW PARTITIONS FROM {self.process(node.table)}"]
        if node.where is not None:
            parts.append(f"WHERE {self.process(node.where)}")
        if node.order_by is not None:
            parts.append(self.process(node.order_by))
        if node.limit is not None:
            parts.append(f"LIMIT {node.limit}")
        return " ".join(parts)

    # ----- Session and transactions -----

    def visit_use(self, node: ast.Use, context):
        if node.catalog is None:
            return f"USE {self.process(node.schema)}"
        return f"USE {self.process(node.catalog)}.{self.process(node.schema)}"

    def visit_set_session(self, node: ast.SetSession, context):
        return f"SET SESSION {self.process(node.name)} = {self.process(node.value)}"

    def visit_reset_session(self, node: ast.ResetSession, context):
        return f"RESET SESSION {self.process(node.name)}"

    def visit_isolation(self, node: ast.Isolation, context):
        return f"ISOLATION LEVEL {node.level.value}"

    def visit_transaction_access_mode(self, node: ast.TransactionAccessMode, context):
        return "READ ONLY" if node.read_only else "READ WRITE"

    def visit_start_transaction(self, node: ast.StartTransaction, context):
        if not node.transaction_modes:
            return "START TRANSACTION"
        return f"START TRANSACTION {self._join(node.transaction_modes)}"

    def visit_commit(self, node, context):
        return "COMMIT"

    def visit_rollback(self, node, context):
        return "ROLLBACK"

    # ----- Prepared statements -----

    def visit_prepare(self, node: ast.Prepare, context):
        return f"PREPARE {self.process(node.name)} FROM {self.process(node.statement)}"

    def visit_deallocate(self, node: ast.Deallocate, context):
        return f"DEALLOCATE PREPARE {self.process(node.name)}"

    def visit_execute(self, node: ast.Execute, context):
        text = f"EXECUTE {self.process(node.name)}"
        if node.parameters:
            text += f" USING {self._join(node.parameters)}"
        return text

    def visit_describe_input(self, node: ast.DescribeInput, context):
        return f"DESCRIBE INPUT {self.process(node.name)}"

    def visit_describe_output(self, node: ast.DescribeOutput, context):
        return f"DESCRIBE OUTPUT {self.process(node.name)}"
