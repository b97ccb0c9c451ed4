"""
Abstract Syntax Tree (AST) node definitions.

These frozen dataclasses represent parsed SQL in a structured form,
decoupling the grammar from the tools that consume it (semantic analysis,
formatting, planning). Nodes are immutable; list-valued fields are tuples.
Operator precedence is already encoded in the shape of the tree.
"""

import re
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Iterator, Optional, Tuple


# ----- Enums -----

class ComparisonOperator(Enum):
    """Comparison operators."""
    EQUAL = "="
    NOT_EQUAL = "<>"
    LESS_THAN = "<"
    LESS_THAN_OR_EQUAL = "<="
    GREATER_THAN = ">"
    GREATER_THAN_OR_EQUAL = ">="
    IS_DISTINCT_FROM = "IS DISTINCT FROM"


class LogicalOperator(Enum):
    """Logical operators for combining conditions."""
    AND = "AND"
    OR = "OR"


class ArithmeticOperator(Enum):
    """Binary arithmetic operators."""
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    MODULUS = "%"


class Sign(Enum):
    """Sign of a unary arithmetic expression."""
    PLUS = "+"
    MINUS = "-"


class Quantifier(Enum):
    """Quantifier of a comparison against a subquery."""
    ALL = "ALL"
    ANY = "ANY"
    SOME = "SOME"


class IntervalSign(Enum):
    POSITIVE = "+"
    NEGATIVE = "-"


class IntervalField(Enum):
    YEAR = "YEAR"
    MONTH = "MONTH"
    DAY = "DAY"
    HOUR = "HOUR"
    MINUTE = "MINUTE"
    SECOND = "SECOND"


class ExtractField(Enum):
    """Fields accepted by EXTRACT(field FROM value)."""
    YEAR = "YEAR"
    QUARTER = "QUARTER"
    MONTH = "MONTH"
    WEEK = "WEEK"
    DAY = "DAY"
    DAY_OF_MONTH = "DAY_OF_MONTH"
    DAY_OF_WEEK = "DAY_OF_WEEK"
    DOW = "DOW"
    DAY_OF_YEAR = "DAY_OF_YEAR"
    DOY = "DOY"
    YEAR_OF_WEEK = "YEAR_OF_WEEK"
    YOW = "YOW"
    HOUR = "HOUR"
    MINUTE = "MINUTE"
    SECOND = "SECOND"
    TIMEZONE_MINUTE = "TIMEZONE_MINUTE"
    TIMEZONE_HOUR = "TIMEZONE_HOUR"


class NormalForm(Enum):
    NFD = "NFD"
    NFC = "NFC"
    NFKD = "NFKD"
    NFKC = "NFKC"


class CurrentTimeFunction(Enum):
    """Special datetime functions written without parentheses."""
    DATE = "CURRENT_DATE"
    TIME = "CURRENT_TIME"
    TIMESTAMP = "CURRENT_TIMESTAMP"
    LOCALTIME = "LOCALTIME"
    LOCALTIMESTAMP = "LOCALTIMESTAMP"


class FrameType(Enum):
    RANGE = "RANGE"
    ROWS = "ROWS"


class FrameBoundType(Enum):
    UNBOUNDED_PRECEDING = "UNBOUNDED PRECEDING"
    PRECEDING = "PRECEDING"
    CURRENT_ROW = "CURRENT ROW"
    FOLLOWING = "FOLLOWING"
    UNBOUNDED_FOLLOWING = "UNBOUNDED FOLLOWING"


class Ordering(Enum):
    ASCENDING = "ASC"
    DESCENDING = "DESC"


class NullOrdering(Enum):
    FIRST = "FIRST"
    LAST = "LAST"
    UNDEFINED = "UNDEFINED"


class JoinType(Enum):
    """Join kinds. IMPLICIT is the comma join of a FROM list."""
    CROSS = "CROSS"
    INNER = "INNER"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    FULL = "FULL"
    IMPLICIT = "IMPLICIT"


class SampleType(Enum):
    BERNOULLI = "BERNOULLI"
    SYSTEM = "SYSTEM"
    POISSONIZED = "POISSONIZED"


class LikeClauseOption(Enum):
    INCLUDING_PROPERTIES = "INCLUDING"
    EXCLUDING_PROPERTIES = "EXCLUDING"


class ShowCreateType(Enum):
    TABLE = "TABLE"
    VIEW = "VIEW"


class ExplainOutputFormat(Enum):
    TEXT = "TEXT"
    GRAPHVIZ = "GRAPHVIZ"


class ExplainPlanType(Enum):
    LOGICAL = "LOGICAL"
    DISTRIBUTED = "DISTRIBUTED"
    VALIDATE = "VALIDATE"


class IsolationLevel(Enum):
    SERIALIZABLE = "SERIALIZABLE"
    REPEATABLE_READ = "REPEATABLE READ"
    READ_COMMITTED = "READ COMMITTED"
    READ_UNCOMMITTED = "READ UNCOMMITTED"


# ----- Base Nodes -----

@dataclass(frozen=True)
class NodeLocation:
    """Source position of the first token of a node."""
    line: int
    column: int


_CAMEL_BOUNDARY = re.compile(r'(?<=[a-z0-9])(?=[A-Z])')


@dataclass(frozen=True)
class Node:
    """
    Base class of every AST node.

    The location is informational only: it is excluded from equality so that
    trees parsed from differently formatted text compare equal.
    """
    location: Optional[NodeLocation] = field(
        default=None, compare=False, repr=False, kw_only=True
    )

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.visit_name = "visit_" + _CAMEL_BOUNDARY.sub('_', cls.__name__).lower()

    def children(self) -> Iterator['Node']:
        """Yield the direct child nodes, in field order."""
        for f in fields(self):
            if f.name == 'location':
                continue
            value = getattr(self, f.name)
            if isinstance(value, Node):
                yield value
            elif isinstance(value, tuple):
                for item in value:
                    if isinstance(item, Node):
                        yield item
                    elif isinstance(item, tuple):
                        yield from (i for i in item if isinstance(i, Node))

    def accept(self, visitor, context=None):
        """Dispatch to the visitor method for this node type."""
        return visitor.process(self, context)


@dataclass(frozen=True)
class Statement(Node):
    pass


@dataclass(frozen=True)
class Expression(Node):
    pass


@dataclass(frozen=True)
class Literal(Expression):
    pass


@dataclass(frozen=True)
class Relation(Node):
    pass


@dataclass(frozen=True)
class QueryBody(Relation):
    pass


@dataclass(frozen=True)
class DataType(Node):
    pass


# ----- Names -----

@dataclass(frozen=True)
class Identifier(Node):
    """A single name. ``delimited`` is True when it was written in quotes."""
    value: str
    delimited: bool = False

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class QualifiedName(Node):
    """Dotted name such as catalog.schema.table. Never empty."""
    parts: Tuple[Identifier, ...]

    def __post_init__(self):
        if not self.parts:
            raise ValueError("qualified name must have at least one part")

    @classmethod
    def of(cls, *names: str) -> 'QualifiedName':
        return cls(tuple(Identifier(name) for name in names))

    @property
    def suffix(self) -> str:
        return self.parts[-1].value

    def __str__(self):
        return ".".join(part.value for part in self.parts)


# ----- Literals -----

@dataclass(frozen=True)
class NullLiteral(Literal):
    pass


@dataclass(frozen=True)
class BooleanLiteral(Literal):
    value: bool


@dataclass(frozen=True)
class LongLiteral(Literal):
    value: int


@dataclass(frozen=True)
class DoubleLiteral(Literal):
    value: float


@dataclass(frozen=True)
class DecimalLiteral(Literal):
    """Exact decimal literal, kept as written."""
    value: str


@dataclass(frozen=True)
class StringLiteral(Literal):
    value: str


@dataclass(frozen=True)
class BinaryLiteral(Literal):
    value: bytes


@dataclass(frozen=True)
class GenericLiteral(Literal):
    """Type constructor literal: DATE '2001-08-22', DECIMAL '1.5', ..."""
    type: str
    value: str


@dataclass(frozen=True)
class TimeLiteral(Literal):
    value: str


@dataclass(frozen=True)
class TimestampLiteral(Literal):
    value: str


@dataclass(frozen=True)
class IntervalLiteral(Literal):
    """INTERVAL [+|-] 'value' start_field [TO end_field]."""
    value: str
    sign: IntervalSign
    start_field: IntervalField
    end_field: Optional[IntervalField] = None


# ----- Expression Nodes -----

@dataclass(frozen=True)
class Parameter(Expression):
    """Positional '?' placeholder, numbered from 0 in order of appearance."""
    position: int


@dataclass(frozen=True)
class ColumnReference(Expression):
    name: Identifier


@dataclass(frozen=True)
class DereferenceExpression(Expression):
    """Field access: base.field."""
    base: Expression
    field: Identifier


@dataclass(frozen=True)
class SubscriptExpression(Expression):
    base: Expression
    index: Expression


@dataclass(frozen=True)
class FrameBound(Node):
    type: FrameBoundType
    value: Optional[Expression] = None


@dataclass(frozen=True)
class WindowFrame(Node):
    type: FrameType
    start: FrameBound
    end: Optional[FrameBound] = None


@dataclass(frozen=True)
class SortItem(Node):
    sort_key: Expression
    ordering: Ordering = Ordering.ASCENDING
    null_ordering: NullOrdering = NullOrdering.UNDEFINED


@dataclass(frozen=True)
class OrderBy(Node):
    sort_items: Tuple[SortItem, ...]


@dataclass(frozen=True)
class Window(Node):
    """OVER (PARTITION BY ... ORDER BY ... frame)."""
    partition_by: Tuple[Expression, ...] = ()
    order_by: Optional[OrderBy] = None
    frame: Optional[WindowFrame] = None


@dataclass(frozen=True)
class FunctionCall(Expression):
    """
    Function invocation.

    ``count(*)`` is represented with an empty argument tuple.
    """
    name: QualifiedName
    arguments: Tuple[Expression, ...] = ()
    distinct: bool = False
    filter: Optional[Expression] = None
    window: Optional[Window] = None


@dataclass(frozen=True)
class LambdaExpression(Expression):
    arguments: Tuple[Identifier, ...]
    body: Expression


@dataclass(frozen=True)
class WhenClause(Node):
    operand: Expression
    result: Expression


@dataclass(frozen=True)
class SimpleCaseExpression(Expression):
    operand: Expression
    when_clauses: Tuple[WhenClause, ...]
    default: Optional[Expression] = None


@dataclass(frozen=True)
class SearchedCaseExpression(Expression):
    when_clauses: Tuple[WhenClause, ...]
    default: Optional[Expression] = None


@dataclass(frozen=True)
class IfExpression(Expression):
    condition: Expression
    true_value: Expression
    false_value: Optional[Expression] = None


@dataclass(frozen=True)
class NullIfExpression(Expression):
    first: Expression
    second: Expression


@dataclass(frozen=True)
class CoalesceExpression(Expression):
    operands: Tuple[Expression, ...]


@dataclass(frozen=True)
class TryExpression(Expression):
    inner: Expression


@dataclass(frozen=True)
class Cast(Expression):
    """CAST(expression AS type); ``safe`` marks TRY_CAST."""
    expression: Expression
    type: DataType
    safe: bool = False


@dataclass(frozen=True)
class ArithmeticUnaryExpression(Expression):
    sign: Sign
    value: Expression


@dataclass(frozen=True)
class ArithmeticBinaryExpression(Expression):
    operator: ArithmeticOperator
    left: Expression
    right: Expression


@dataclass(frozen=True)
class ConcatenationExpression(Expression):
    """left || right."""
    left: Expression
    right: Expression


@dataclass(frozen=True)
class AtTimeZone(Expression):
    value: Expression
    time_zone: Expression


@dataclass(frozen=True)
class ComparisonExpression(Expression):
    operator: ComparisonOperator
    left: Expression
    right: Expression


@dataclass(frozen=True)
class NotExpression(Expression):
    value: Expression


@dataclass(frozen=True)
class LogicalBinaryExpression(Expression):
    operator: LogicalOperator
    left: Expression
    right: Expression


@dataclass(frozen=True)
class BetweenPredicate(Expression):
    value: Expression
    min: Expression
    max: Expression


@dataclass(frozen=True)
class InListExpression(Expression):
    values: Tuple[Expression, ...]


@dataclass(frozen=True)
class InPredicate(Expression):
    """value IN (list) or value IN (subquery)."""
    value: Expression
    value_list: Expression


@dataclass(frozen=True)
class LikePredicate(Expression):
    value: Expression
    pattern: Expression
    escape: Optional[Expression] = None


@dataclass(frozen=True)
class IsNullPredicate(Expression):
    value: Expression


@dataclass(frozen=True)
class IsNotNullPredicate(Expression):
    value: Expression


@dataclass(frozen=True)
class SubqueryExpression(Expression):
    query: 'Query'


@dataclass(frozen=True)
class QuantifiedComparisonExpression(Expression):
    """value op ALL|ANY|SOME (subquery)."""
    operator: ComparisonOperator
    quantifier: Quantifier
    value: Expression
    subquery: SubqueryExpression


@dataclass(frozen=True)
class ExistsPredicate(Expression):
    subquery: 'Query'


@dataclass(frozen=True)
class ArrayConstructor(Expression):
    values: Tuple[Expression, ...] = ()


@dataclass(frozen=True)
class Row(Expression):
    items: Tuple[Expression, ...]


@dataclass(frozen=True)
class Extract(Expression):
    expression: Expression
    field: ExtractField


@dataclass(frozen=True)
class Position(Expression):
    """POSITION(substring IN string)."""
    substring: Expression
    string: Expression


@dataclass(frozen=True)
class Substring(Expression):
    """SUBSTRING(value FROM start [FOR length])."""
    value: Expression
    start: Expression
    length: Optional[Expression] = None


@dataclass(frozen=True)
class Normalize(Expression):
    value: Expression
    form: Optional[NormalForm] = None


@dataclass(frozen=True)
class CurrentTime(Expression):
    function: CurrentTimeFunction
    precision: Optional[int] = None


# ----- Data Types -----

@dataclass(frozen=True)
class BaseType(DataType):
    """
    Named type with optional parameters, e.g. varchar(10) or decimal(10, 2).

    Parameters are integers or nested types. Names are lower-cased.
    """
    name: str
    parameters: Tuple[int | DataType, ...] = ()


@dataclass(frozen=True)
class ArrayType(DataType):
    element_type: DataType


@dataclass(frozen=True)
class MapType(DataType):
    key_type: DataType
    value_type: DataType


@dataclass(frozen=True)
class RowField(Node):
    name: Identifier
    type: DataType


@dataclass(frozen=True)
class RowType(DataType):
    fields: Tuple[RowField, ...]


# ----- Query Nodes -----

@dataclass(frozen=True)
class SelectItem(Node):
    pass


@dataclass(frozen=True)
class SingleColumn(SelectItem):
    expression: Expression
    alias: Optional[Identifier] = None


@dataclass(frozen=True)
class AllColumns(SelectItem):
    """* or prefix.*"""
    prefix: Optional[QualifiedName] = None


@dataclass(frozen=True)
class Select(Node):
    distinct: bool
    select_items: Tuple[SelectItem, ...]


@dataclass(frozen=True)
class GroupingElement(Node):
    pass


@dataclass(frozen=True)
class SimpleGroupBy(GroupingElement):
    columns: Tuple[Expression, ...]


@dataclass(frozen=True)
class Rollup(GroupingElement):
    columns: Tuple[QualifiedName, ...]


@dataclass(frozen=True)
class Cube(GroupingElement):
    columns: Tuple[QualifiedName, ...]


@dataclass(frozen=True)
class GroupingSets(GroupingElement):
    sets: Tuple[Tuple[QualifiedName, ...], ...]


@dataclass(frozen=True)
class GroupBy(Node):
    distinct: bool
    grouping_elements: Tuple[GroupingElement, ...]


@dataclass(frozen=True)
class WithQuery(Node):
    name: Identifier
    query: 'Query'
    column_names: Optional[Tuple[Identifier, ...]] = None


@dataclass(frozen=True)
class With(Node):
    recursive: bool
    queries: Tuple[WithQuery, ...]


@dataclass(frozen=True)
class QuerySpecification(QueryBody):
    """SELECT ... FROM ... WHERE ... GROUP BY ... HAVING ... ORDER BY ... LIMIT."""
    select: Select
    from_: Optional[Relation] = None
    where: Optional[Expression] = None
    group_by: Optional[GroupBy] = None
    having: Optional[Expression] = None
    order_by: Optional[OrderBy] = None
    limit: Optional[str] = None


@dataclass(frozen=True)
class Query(Statement):
    """
    Complete query: optional WITH, a body, ORDER BY and LIMIT.

    When the body is a plain QuerySpecification its ORDER BY and LIMIT live
    on the specification and these fields are None.
    """
    body: QueryBody
    with_clause: Optional[With] = None
    order_by: Optional[OrderBy] = None
    limit: Optional[str] = None


@dataclass(frozen=True)
class SetOperation(QueryBody):
    left: QueryBody
    right: QueryBody
    distinct: bool = True


@dataclass(frozen=True)
class Union(SetOperation):
    pass


@dataclass(frozen=True)
class Intersect(SetOperation):
    pass


@dataclass(frozen=True)
class Except(SetOperation):
    pass


@dataclass(frozen=True)
class Values(QueryBody):
    rows: Tuple[Expression, ...]


@dataclass(frozen=True)
class Table(QueryBody):
    name: QualifiedName


@dataclass(frozen=True)
class TableSubquery(QueryBody):
    query: Query


# ----- Relation Nodes -----

@dataclass(frozen=True)
class AliasedRelation(Relation):
    relation: Relation
    alias: Identifier
    column_names: Optional[Tuple[Identifier, ...]] = None


@dataclass(frozen=True)
class SampledRelation(Relation):
    relation: Relation
    type: SampleType
    sample_percentage: Expression


@dataclass(frozen=True)
class JoinCriteria(Node):
    pass


@dataclass(frozen=True)
class JoinOn(JoinCriteria):
    expression: Expression


@dataclass(frozen=True)
class JoinUsing(JoinCriteria):
    columns: Tuple[Identifier, ...]


@dataclass(frozen=True)
class NaturalJoin(JoinCriteria):
    pass


@dataclass(frozen=True)
class Join(Relation):
    type: JoinType
    left: Relation
    right: Relation
    criteria: Optional[JoinCriteria] = None


@dataclass(frozen=True)
class Unnest(Relation):
    expressions: Tuple[Expression, ...]
    with_ordinality: bool = False


@dataclass(frozen=True)
class ParenthesizedRelation(Relation):
    relation: Relation


# ----- DDL Nodes -----

@dataclass(frozen=True)
class Property(Node):
    """name = value entry of a WITH (...) property list."""
    name: Identifier
    value: Expression


@dataclass(frozen=True)
class TableElement(Node):
    pass


@dataclass(frozen=True)
class ColumnDefinition(TableElement):
    name: Identifier
    type: DataType
    comment: Optional[str] = None


@dataclass(frozen=True)
class LikeClause(TableElement):
    table_name: QualifiedName
    properties_option: Optional[LikeClauseOption] = None


@dataclass(frozen=True)
class CreateSchema(Statement):
    name: QualifiedName
    not_exists: bool = False
    properties: Tuple[Property, ...] = ()


@dataclass(frozen=True)
class DropSchema(Statement):
    name: QualifiedName
    exists: bool = False
    cascade: bool = False


@dataclass(frozen=True)
class RenameSchema(Statement):
    source: QualifiedName
    target: Identifier


@dataclass(frozen=True)
class CreateTable(Statement):
    name: QualifiedName
    elements: Tuple[TableElement, ...]
    not_exists: bool = False
    properties: Tuple[Property, ...] = ()


@dataclass(frozen=True)
class CreateTableAsSelect(Statement):
    name: QualifiedName
    query: Query
    not_exists: bool = False
    properties: Tuple[Property, ...] = ()
    with_data: bool = True


@dataclass(frozen=True)
class DropTable(Statement):
    table_name: QualifiedName
    exists: bool = False


@dataclass(frozen=True)
class RenameTable(Statement):
    source: QualifiedName
    target: QualifiedName


@dataclass(frozen=True)
class RenameColumn(Statement):
    table: QualifiedName
    source: Identifier
    target: Identifier


@dataclass(frozen=True)
class AddColumn(Statement):
    name: QualifiedName
    column: ColumnDefinition


@dataclass(frozen=True)
class CreateView(Statement):
    name: QualifiedName
    query: Query
    replace: bool = False


@dataclass(frozen=True)
class DropView(Statement):
    name: QualifiedName
    exists: bool = False


# ----- DML Nodes -----

@dataclass(frozen=True)
class Insert(Statement):
    """INSERT INTO target [(columns)] query."""
    target: QualifiedName
    query: Query
    columns: Optional[Tuple[Identifier, ...]] = None


@dataclass(frozen=True)
class Delete(Statement):
    """DELETE FROM table [WHERE condition]."""
    table: Table
    where: Optional[Expression] = None


# ----- Procedure and Access Control Nodes -----

@dataclass(frozen=True)
class CallArgument(Node):
    value: Expression
    name: Optional[Identifier] = None


@dataclass(frozen=True)
class Call(Statement):
    name: QualifiedName
    arguments: Tuple[CallArgument, ...] = ()


@dataclass(frozen=True)
class Grant(Statement):
    """GRANT privileges ON [TABLE] name TO grantee. None privileges means ALL."""
    privileges: Optional[Tuple[Identifier, ...]]
    table_name: QualifiedName
    grantee: Identifier
    table: bool = False
    with_grant_option: bool = False


@dataclass(frozen=True)
class Revoke(Statement):
    privileges: Optional[Tuple[Identifier, ...]]
    table_name: QualifiedName
    grantee: Identifier
    table: bool = False
    grant_option_for: bool = False


# ----- Introspection Nodes -----

@dataclass(frozen=True)
class ExplainOption(Node):
    pass


@dataclass(frozen=True)
class ExplainFormat(ExplainOption):
    type: ExplainOutputFormat


@dataclass(frozen=True)
class ExplainType(ExplainOption):
    type: ExplainPlanType


@dataclass(frozen=True)
class Explain(Statement):
    statement: Statement
    analyze: bool = False
    options: Tuple[ExplainOption, ...] = ()


@dataclass(frozen=True)
class ShowCreate(Statement):
    type: ShowCreateType
    name: QualifiedName


@dataclass(frozen=True)
class ShowTables(Statement):
    schema: Optional[QualifiedName] = None
    like_pattern: Optional[str] = None


@dataclass(frozen=True)
class ShowSchemas(Statement):
    catalog: Optional[Identifier] = None
    like_pattern: Optional[str] = None


@dataclass(frozen=True)
class ShowCatalogs(Statement):
    like_pattern: Optional[str] = None


@dataclass(frozen=True)
class ShowColumns(Statement):
    table: QualifiedName


@dataclass(frozen=True)
class ShowFunctions(Statement):
    pass


@dataclass(frozen=True)
class ShowSession(Statement):
    pass


@dataclass(frozen=True)
class ShowPartitions(Statement):
    table: QualifiedName
    where: Optional[Expression] = None
    order_by: Optional[OrderBy] = None
    limit: Optional[str] = None


# ----- Session and Transaction Nodes -----

@dataclass(frozen=True)
class Use(Statement):
    schema: Identifier
    catalog: Optional[Identifier] = None


@dataclass(frozen=True)
class SetSession(Statement):
    name: QualifiedName
    value: Expression


@dataclass(frozen=True)
class ResetSession(Statement):
    name: QualifiedName


@dataclass(frozen=True)
class TransactionMode(Node):
    pass


@dataclass(frozen=True)
class Isolation(TransactionMode):
    level: IsolationLevel


@dataclass(frozen=True)
class TransactionAccessMode(TransactionMode):
    read_only: bool


@dataclass(frozen=True)
class StartTransaction(Statement):
    transaction_modes: Tuple[TransactionMode, ...] = ()


@dataclass(frozen=True)
class Commit(Statement):
    pass


@dataclass(frozen=True)
class Rollback(Statement):
    pass


# ----- Prepared Statement Nodes -----

@dataclass(frozen=True)
class Prepare(Statement):
    name: Identifier
    statement: Statement


@dataclass(frozen=True)
class Deallocate(Statement):
    name: Identifier


@dataclass(frozen=True)
class Execute(Statement):
    name: Identifier
    parameters: Tuple[Expression, ...] = ()


@dataclass(frozen=True)
class DescribeInput(Statement):
    name: Identifier


@dataclass(frozen=True)
class DescribeOutput(Statement):
    name: Identifier
