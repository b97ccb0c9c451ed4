"""
Expression grammar.

Boolean and value expressions are parsed by precedence climbing: each level
parses one operand, then keeps consuming operators that bind at least as
tightly as the level it was called for. From loosest to tightest:

    OR
    AND
    NOT                        (prefix)
    predicate                  (comparison, BETWEEN, IN, LIKE, IS ...; at most one)
    ||
    + -
    * / %
    + -                        (unary prefix)
    AT TIME ZONE               (postfix)
    [index]  .field            (postfix, chainable)
    primary expression
"""

import re
from typing import List, Optional

from . import ast
from .base import GrammarBase, memoized, nested
from .options import DecimalLiteralTreatment
from .tokens import Token, TokenKind, can_be_identifier

_MAX_LONG = 2 ** 63 - 1

_LOGICAL_PRECEDENCE = {
    'OR': 1,
    'AND': 2,
}

_VALUE_PRECEDENCE = {
    '||': 1,
    '+': 2,
    '-': 2,
    '*': 3,
    '/': 3,
    '%': 3,
}

_ARITHMETIC_OPERATORS = {
    '+': ast.ArithmeticOperator.ADD,
    '-': ast.ArithmeticOperator.SUBTRACT,
    '*': ast.ArithmeticOperator.MULTIPLY,
    '/': ast.ArithmeticOperator.DIVIDE,
    '%': ast.ArithmeticOperator.MODULUS,
}

_COMPARISON_OPERATORS = {
    '=': ast.ComparisonOperator.EQUAL,
    '<>': ast.ComparisonOperator.NOT_EQUAL,
    '!=': ast.ComparisonOperator.NOT_EQUAL,
    '<': ast.ComparisonOperator.LESS_THAN,
    '<=': ast.ComparisonOperator.LESS_THAN_OR_EQUAL,
    '>': ast.ComparisonOperator.GREATER_THAN,
    '>=': ast.ComparisonOperator.GREATER_THAN_OR_EQUAL,
}

_INTERVAL_FIELDS = tuple(f.value for f in ast.IntervalField)

_CURRENT_TIME_FUNCTIONS = {f.value: f for f in ast.CurrentTimeFunction}

_HEX_DIGITS = re.compile(r'^[0-9a-fA-F]*$')
_WHITESPACE = re.compile(r'\s+')


class ExpressionGrammar(GrammarBase):
    """Boolean, predicate, value and primary expressions."""

    # ----- Boolean expressions -----

    @memoized
    def _expression(self) -> ast.Expression:
        return self._boolean_expression()

    def _boolean_expression(self, min_precedence: int = 1) -> ast.Expression:
        left = self._not_expression()
        while True:
            if not self._at('AND', 'OR'):
                return left
            operator = self._token.keyword
            precedence = _LOGICAL_PRECEDENCE[operator]
            if precedence < min_precedence:
                return left
            self._advance()
            right = self._boolean_expression(precedence + 1)
            left = ast.LogicalBinaryExpression(
                ast.LogicalOperator[operator], left, right, location=left.location
            )

    def _not_expression(self) -> ast.Expression:
        negations = []
        while self._at('NOT'):
            negations.append(self._advance())
        result = self._predicated()
        for token in reversed(negations):
            result = ast.NotExpression(result, location=self._location(token))
        return result

    # ----- Predicates -----

    def _predicated(self) -> ast.Expression:
        value = self._value_expression()
        token = self._token

        operator = self._comparison_operator()
        if operator is not None:
            self._advance()
            if self._at('ALL', 'SOME', 'ANY') and self._peek_symbol('('):
                quantified = self._attempt(self._quantified_comparison, operator, value)
                if quantified is not None:
                    return quantified
            right = self._value_expression()
            return ast.ComparisonExpression(operator, value, right, location=value.location)

        if self._at('NOT') and self._peek().keyword in ('BETWEEN', 'IN', 'LIKE'):
            self._advance()
            predicate = self._positive_predicate(value)
            return ast.NotExpression(predicate, location=self._location(token))

        if self._at('BETWEEN', 'IN', 'LIKE'):
            return self._positive_predicate(value)

        if self._accept('IS'):
            negated = self._accept('NOT') is not None
            if self._accept('NULL'):
                if negated:
                    return ast.IsNotNullPredicate(value, location=value.location)
                return ast.IsNullPredicate(value, location=value.location)
            self._expect('DISTINCT')
            self._expect('FROM')
            right = self._value_expression()
            result = ast.ComparisonExpression(
                ast.ComparisonOperator.IS_DISTINCT_FROM, value, right, location=value.location
            )
            if negated:
                result = ast.NotExpression(result, location=value.location)
            return result

        return value

    def _comparison_operator(self) -> Optional[ast.ComparisonOperator]:
        token = self._token
        if token.kind is TokenKind.OPERATOR and token.text in _COMPARISON_OPERATORS:
            return _COMPARISON_OPERATORS[token.text]
        self._note(*(f"'{op}'" for op in _COMPARISON_OPERATORS))
        return None

    def _quantified_comparison(self, operator, value) -> ast.QuantifiedComparisonExpression:
        quantifier = ast.Quantifier[self._advance().keyword]
        start = self._expect_symbol('(')
        query = self._query()
        self._expect_symbol(')')
        subquery = ast.SubqueryExpression(query, location=self._location(start))
        return ast.QuantifiedComparisonExpression(
            operator, quantifier, value, subquery, location=value.location
        )

    def _positive_predicate(self, value: ast.Expression) -> ast.Expression:
        """BETWEEN, IN or LIKE applied to an already parsed value."""
        if self._accept('BETWEEN'):
            lower = self._value_expression()
            self._expect('AND')
            upper = self._value_expression()
            return ast.BetweenPredicate(value, lower, upper, location=value.location)

        if self._accept('IN'):
            start = self._expect_symbol('(')
            values = None
            if not self._starts_query():
                if self._at_symbol('('):
                    values = self._attempt(self._in_list_tail)
                else:
                    values = self._in_list_tail()
            if values is None:
                query = self._query()
                self._expect_symbol(')')
                subquery = ast.SubqueryExpression(query, location=self._location(start))
                return ast.InPredicate(value, subquery, location=value.location)
            in_list = ast.InListExpression(tuple(values), location=self._location(start))
            return ast.InPredicate(value, in_list, location=value.location)

        self._expect('LIKE')
        pattern = self._value_expression()
        escape = None
        if self._accept('ESCAPE'):
            escape = self._value_expression()
        return ast.LikePredicate(value, pattern, escape, location=value.location)

    def _in_list_tail(self) -> List[ast.Expression]:
        values = self._comma_list(self._expression)
        self._expect_symbol(')')
        return values

    # ----- Value expressions -----

    @memoized
    def _value_expression(self, min_precedence: int = 1) -> ast.Expression:
        left = self._unary_expression()
        while True:
            token = self._token
            precedence = None
            if token.kind is TokenKind.OPERATOR:
                precedence = _VALUE_PRECEDENCE.get(token.text)
            if precedence is None:
                self._note(*(f"'{op}'" for op in _VALUE_PRECEDENCE))
                return left
            if precedence < min_precedence:
                return left
            self._advance()
            right = self._value_expression(precedence + 1)
            if token.text == '||':
                left = ast.ConcatenationExpression(left, right, location=left.location)
            else:
                left = ast.ArithmeticBinaryExpression(
                    _ARITHMETIC_OPERATORS[token.text], left, right, location=left.location
                )

    def _unary_expression(self) -> ast.Expression:
        signs = []
        while self._at_symbol('+', '-'):
            signs.append(self._advance())
        result = self._at_time_zone()
        for token in reversed(signs):
            sign = ast.Sign.MINUS if token.text == '-' else ast.Sign.PLUS
            result = ast.ArithmeticUnaryExpression(sign, result, location=self._location(token))
        return result

    def _at_time_zone(self) -> ast.Expression:
        result = self._postfix_expression()
        while self._accept('AT'):
            self._expect('TIME')
            self._expect('ZONE')
            if self._at('INTERVAL'):
                zone = self._interval()
            else:
                token = self._token
                zone = ast.StringLiteral(self._string(), location=self._location(token))
            result = ast.AtTimeZone(result, zone, location=result.location)
        return result

    def _postfix_expression(self) -> ast.Expression:
        result = self._primary_expression()
        while True:
            if self._accept_symbol('['):
                index = self._value_expression()
                self._expect_symbol(']')
                result = ast.SubscriptExpression(result, index, location=result.location)
            elif self._at_symbol('.') and can_be_identifier(self._peek()):
                self._advance()
                field = self._identifier()
                result = ast.DereferenceExpression(result, field, location=result.location)
            else:
                return result

    # ----- Primary expressions -----

    @memoized
    @nested
    def _primary_expression(self) -> ast.Expression:
        token = self._token
        kind = token.kind
        keyword = token.keyword
        location = self._location(token)

        if keyword == 'NULL':
            self._advance()
            return ast.NullLiteral(location=location)
        if keyword == 'INTERVAL' and self._at_interval_value(1):
            return self._interval()
        if can_be_identifier(token) and self._peek().kind is TokenKind.STRING:
            return self._type_constructor()
        if kind is TokenKind.COMPOUND_TYPE and token.keyword == 'DOUBLE PRECISION' \
                and self._peek().kind is TokenKind.STRING:
            self._advance()
            value = self._advance().text
            return ast.GenericLiteral('DOUBLE', value, location=location)
        if kind is TokenKind.INTEGER_VALUE:
            return self._integer_literal()
        if kind is TokenKind.DECIMAL_VALUE:
            return self._decimal_literal()
        if keyword in ('TRUE', 'FALSE'):
            self._advance()
            return ast.BooleanLiteral(keyword == 'TRUE', location=location)
        if kind is TokenKind.STRING:
            self._advance()
            return ast.StringLiteral(token.text, location=location)
        if kind is TokenKind.BINARY_LITERAL:
            return self._binary_literal()
        if kind is TokenKind.PUNCTUATION and token.text == '?':
            self._advance()
            return ast.Parameter(self._parameter_positions[self._index - 1], location=location)
        if keyword == 'POSITION' and self._peek_symbol('('):
            position = self._attempt(self._position)
            if position is not None:
                return position
        if self._peek_symbol('(', 0):
            return self._parenthesized_primary()
        if keyword == 'ROW' and self._peek_symbol('('):
            self._advance()
            items = self._parenthesized_list(self._expression)
            return ast.Row(tuple(items), location=location)
        if keyword == 'SUBSTRING' and self._peek_symbol('('):
            substring = self._attempt(self._substring)
            if substring is not None:
                return substring
        if self._at_qualified_name_followed_by('('):
            return self._function_call()
        if can_be_identifier(token) and self._peek_symbol('->'):
            argument = self._identifier()
            self._advance()
            body = self._expression()
            return ast.LambdaExpression((argument,), body, location=location)
        if keyword == 'EXISTS':
            self._advance()
            self._expect_symbol('(')
            query = self._query()
            self._expect_symbol(')')
            return ast.ExistsPredicate(query, location=location)
        if keyword == 'CASE':
            return self._case()
        if keyword in ('CAST', 'TRY_CAST'):
            return self._cast()
        if keyword == 'ARRAY' and self._peek_symbol('['):
            self._advance()
            self._advance()
            values = []
            if not self._at_symbol(']'):
                values = self._comma_list(self._expression)
            self._expect_symbol(']')
            return ast.ArrayConstructor(tuple(values), location=location)
        if keyword in _CURRENT_TIME_FUNCTIONS:
            return self._current_time()
        if keyword == 'NORMALIZE':
            return self._normalize()
        if keyword == 'EXTRACT':
            return self._extract()
        if can_be_identifier(token):
            return ast.ColumnReference(self._identifier(), location=location)

        self._note("<expression>")
        raise self._syntax_error()

    def _parenthesized_primary(self) -> ast.Expression:
        """
        Everything that starts with '(': lambda, subquery, row constructor or
        a parenthesized expression.

        ``(1)`` is the expression 1, while ``(1, 2)`` is a two-element row.
        """
        start = self._token
        if self._at_lambda_parameters():
            return self._lambda()
        if self._starts_query(1):
            self._advance()
            query = self._query()
            self._expect_symbol(')')
            return ast.SubqueryExpression(query, location=self._location(start))
        if self._peek_symbol('('):
            # ((SELECT 1) UNION (SELECT 2)) only parses as a query
            result = self._attempt(self._row_or_parenthesized)
            if result is not None:
                return result
            self._advance()
            query = self._query()
            self._expect_symbol(')')
            return ast.SubqueryExpression(query, location=self._location(start))
        return self._row_or_parenthesized()

    def _row_or_parenthesized(self) -> ast.Expression:
        start = self._expect_symbol('(')
        first = self._expression()
        if self._accept_symbol(','):
            items = [first] + self._comma_list(self._expression)
            self._expect_symbol(')')
            return ast.Row(tuple(items), location=self._location(start))
        self._expect_symbol(')')
        return first

    def _at_lambda_parameters(self) -> bool:
        """Look ahead for ``'(' identifier (',' identifier)* ')' '->'``."""
        offset = 1
        while True:
            if not can_be_identifier(self._peek(offset)):
                return False
            offset += 1
            if self._peek_symbol(',', offset):
                offset += 1
                continue
            return self._peek_symbol(')', offset) and self._peek_symbol('->', offset + 1)

    def _lambda(self) -> ast.LambdaExpression:
        start = self._token
        arguments = self._parenthesized_list(self._identifier)
        self._expect_symbol('->')
        body = self._expression()
        return ast.LambdaExpression(tuple(arguments), body, location=self._location(start))

    # ----- Literals -----

    def _integer_literal(self) -> ast.LongLiteral:
        token = self._advance()
        value = int(token.text)
        if value > _MAX_LONG:
            raise self._error(f"Invalid numeric literal: {token.text}", token)
        return ast.LongLiteral(value, location=self._location(token))

    def _decimal_literal(self) -> ast.Literal:
        token = self._advance()
        location = self._location(token)
        if 'e' in token.text.lower():
            return ast.DoubleLiteral(float(token.text), location=location)
        treatment = self._options.decimal_literal_treatment
        if treatment is DecimalLiteralTreatment.AS_DECIMAL:
            return ast.DecimalLiteral(token.text, location=location)
        if treatment is DecimalLiteralTreatment.REJECT:
            raise self._error(f"Unexpected decimal literal: {token.text}", token)
        return ast.DoubleLiteral(float(token.text), location=location)

    def _binary_literal(self) -> ast.BinaryLiteral:
        token = self._advance()
        digits = _WHITESPACE.sub('', token.text)
        if not _HEX_DIGITS.match(digits):
            raise self._error("Binary literal can only contain hexadecimal digits", token)
        if len(digits) % 2 != 0:
            raise self._error("Binary literal must contain an even number of digits", token)
        return ast.BinaryLiteral(bytes.fromhex(digits), location=self._location(token))

    def _type_constructor(self) -> ast.Literal:
        start = self._token
        type_name = self._identifier()
        value = self._advance().text
        location = self._location(start)
        lowered = type_name.value.lower()
        if not type_name.delimited and lowered == 'time':
            return ast.TimeLiteral(value, location=location)
        if not type_name.delimited and lowered == 'timestamp':
            return ast.TimestampLiteral(value, location=location)
        return ast.GenericLiteral(type_name.value, value, location=location)

    def _at_interval_value(self, offset: int) -> bool:
        token = self._peek(offset)
        if token.kind is TokenKind.OPERATOR and token.text in ('+', '-'):
            token = self._peek(offset + 1)
        return token.kind is TokenKind.STRING

    def _interval(self) -> ast.IntervalLiteral:
        start = self._expect('INTERVAL')
        sign = ast.IntervalSign.POSITIVE
        sign_token = self._accept_symbol('+', '-')
        if sign_token is not None and sign_token.text == '-':
            sign = ast.IntervalSign.NEGATIVE
        value = self._string()
        start_field = ast.IntervalField(self._expect(*_INTERVAL_FIELDS).keyword)
        end_field = None
        if self._accept('TO'):
            end_field = ast.IntervalField(self._expect(*_INTERVAL_FIELDS).keyword)
        return ast.IntervalLiteral(
            value, sign, start_field, end_field, location=self._location(start)
        )

    # ----- Special forms -----

    def _position(self) -> ast.Position:
        start = self._advance()
        self._expect_symbol('(')
        substring = self._value_expression()
        self._expect('IN')
        string = self._value_expression()
        self._expect_symbol(')')
        return ast.Position(substring, string, location=self._location(start))

    def _substring(self) -> ast.Substring:
        start = self._advance()
        self._expect_symbol('(')
        value = self._value_expression()
        self._expect('FROM')
        from_ = self._value_expression()
        length = None
        if self._accept('FOR'):
            length = self._value_expression()
        self._expect_symbol(')')
        return ast.Substring(value, from_, length, location=self._location(start))

    def _normalize(self) -> ast.Normalize:
        start = self._expect('NORMALIZE')
        self._expect_symbol('(')
        value = self._value_expression()
        form = None
        if self._accept_symbol(','):
            form = ast.NormalForm(self._expect('NFD', 'NFC', 'NFKD', 'NFKC').keyword)
        self._expect_symbol(')')
        return ast.Normalize(value, form, location=self._location(start))

    def _extract(self) -> ast.Extract:
        start = self._expect('EXTRACT')
        self._expect_symbol('(')
        field_token = self._token
        field_name = self._identifier().value
        self._expect('FROM')
        value = self._value_expression()
        self._expect_symbol(')')
        try:
            field = ast.ExtractField[field_name.upper()]
        except KeyError:
            raise self._error(f"Invalid EXTRACT field: {field_name}", field_token) from None
        return ast.Extract(value, field, location=self._location(start))

    def _current_time(self) -> ast.CurrentTime:
        token = self._advance()
        function = _CURRENT_TIME_FUNCTIONS[token.keyword]
        precision = None
        if function is not ast.CurrentTimeFunction.DATE and self._accept_symbol('('):
            precision = self._integer()
            self._expect_symbol(')')
        return ast.CurrentTime(function, precision, location=self._location(token))

    def _cast(self) -> ast.Cast:
        start = self._expect('CAST', 'TRY_CAST')
        self._expect_symbol('(')
        value = self._expression()
        self._expect('AS')
        data_type = self._type()
        self._expect_symbol(')')
        return ast.Cast(value, data_type, start.keyword == 'TRY_CAST', location=self._location(start))

    def _case(self) -> ast.Expression:
        start = self._expect('CASE')
        operand = None
        if not self._at('WHEN'):
            operand = self._value_expression()

        when_clauses = []
        while True:
            when = self._expect('WHEN')
            condition = self._expression()
            self._expect('THEN')
            result = self._expression()
            when_clauses.append(ast.WhenClause(condition, result, location=self._location(when)))
            if not self._at('WHEN'):
                break

        default = None
        if self._accept('ELSE'):
            default = self._expression()
        self._expect('END')

        location = self._location(start)
        if operand is None:
            return ast.SearchedCaseExpression(tuple(when_clauses), default, location=location)
        return ast.SimpleCaseExpression(operand, tuple(when_clauses), default, location=location)

    # ----- Function calls -----

    def _function_call(self) -> ast.Expression:
        start = self._token
        name = self._qualified_name()
        self._expect_symbol('(')

        distinct = False
        arguments: List[ast.Expression] = []
        if self._accept_symbol('*'):
            pass
        elif not self._at_symbol(')'):
            distinct, arguments = self._quantified(self._call_arguments)
        self._expect_symbol(')')

        filter_ = None
        if self._at('FILTER') and self._peek_symbol('('):
            self._advance()
            self._advance()
            self._expect('WHERE')
            filter_ = self._expression()
            self._expect_symbol(')')

        window = None
        if self._at('OVER') and self._peek_symbol('('):
            window = self._window()

        call = ast.FunctionCall(
            name, tuple(arguments), distinct, filter_, window, location=self._location(start)
        )
        return self._special_function(call, start)

    def _call_arguments(self) -> List[ast.Expression]:
        arguments = self._comma_list(self._expression)
        if not self._at_symbol(')'):
            raise self._syntax_error()
        return arguments

    def _special_function(self, call: ast.FunctionCall, start: Token) -> ast.Expression:
        """Rewrite calls to if, nullif, coalesce and try into their dedicated nodes."""
        if len(call.name.parts) != 1 or call.name.parts[0].delimited:
            return call
        name = call.name.parts[0].value.lower()
        if name not in ('if', 'nullif', 'coalesce', 'try'):
            return call

        if call.window is not None:
            raise self._error(f"OVER clause not valid for '{name}' function", start)
        if call.distinct:
            raise self._error(f"DISTINCT not valid for '{name}' function", start)
        if call.filter is not None:
            raise self._error(f"FILTER not valid for '{name}' function", start)

        args = call.arguments
        location = call.location
        if name == 'if':
            if len(args) not in (2, 3):
                raise self._error("Invalid number of arguments for 'if' function", start)
            false_value = args[2] if len(args) == 3 else None
            return ast.IfExpression(args[0], args[1], false_value, location=location)
        if name == 'nullif':
            if len(args) != 2:
                raise self._error("Invalid number of arguments for 'nullif' function", start)
            return ast.NullIfExpression(args[0], args[1], location=location)
        if name == 'coalesce':
            if len(args) < 2:
                raise self._error("The 'coalesce' function must have at least two arguments", start)
            return ast.CoalesceExpression(args, location=location)
        if len(args) != 1:
            raise self._error("The 'try' function must have exactly one argument", start)
        return ast.TryExpression(args[0], location=location)

    # ----- Windows and ordering -----

    def _window(self) -> ast.Window:
        start = self._expect('OVER')
        self._expect_symbol('(')

        partition_by = ()
        if self._accept('PARTITION'):
            self._expect('BY')
            partition_by = tuple(self._comma_list(self._expression))

        order_by = None
        if self._at('ORDER'):
            order_by = self._order_by()

        frame = None
        if self._at('RANGE', 'ROWS'):
            frame = self._window_frame()

        self._expect_symbol(')')
        return ast.Window(partition_by, order_by, frame, location=self._location(start))

    def _window_frame(self) -> ast.WindowFrame:
        start = self._advance()
        frame_type = ast.FrameType[start.keyword]
        if self._accept('BETWEEN'):
            lower = self._frame_bound()
            self._expect('AND')
            upper = self._frame_bound()
            return ast.WindowFrame(frame_type, lower, upper, location=self._location(start))
        return ast.WindowFrame(frame_type, self._frame_bound(), location=self._location(start))

    def _frame_bound(self) -> ast.FrameBound:
        start = self._token
        location = self._location(start)
        if self._accept('UNBOUNDED'):
            if self._expect('PRECEDING', 'FOLLOWING').keyword == 'PRECEDING':
                return ast.FrameBound(ast.FrameBoundType.UNBOUNDED_PRECEDING, location=location)
            return ast.FrameBound(ast.FrameBoundType.UNBOUNDED_FOLLOWING, location=location)
        if self._at('CURRENT') and self._peek().keyword == 'ROW':
            self._advance()
            self._advance()
            return ast.FrameBound(ast.FrameBoundType.CURRENT_ROW, location=location)
        value = self._expression()
        bound_type = ast.FrameBoundType[self._expect('PRECEDING', 'FOLLOWING').keyword]
        return ast.FrameBound(bound_type, value, location=location)

    def _order_by(self) -> ast.OrderBy:
        start = self._expect('ORDER')
        self._expect('BY')
        items = self._comma_list(self._sort_item)
        return ast.OrderBy(tuple(items), location=self._location(start))

    def _sort_item(self) -> ast.SortItem:
        key = self._expression()
        ordering = ast.Ordering.ASCENDING
        direction = self._accept('ASC', 'DESC')
        if direction is not None and direction.keyword == 'DESC':
            ordering = ast.Ordering.DESCENDING
        null_ordering = ast.NullOrdering.UNDEFINED
        if self._accept('NULLS'):
            null_ordering = ast.NullOrdering[self._expect('FIRST', 'LAST').keyword]
        return ast.SortItem(key, ordering, null_ordering, location=key.location)
