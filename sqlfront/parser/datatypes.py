"""
Type grammar: ARRAY<t>, MAP<k, v>, ROW(name t, ...), named types with
parameters, and the postfix ARRAY suffix.
"""

from . import ast
from .base import GrammarBase, nested
from .tokens import TokenKind


class TypeGrammar(GrammarBase):
    """Parses type expressions used by CAST, column definitions and ROW types."""

    @nested
    def _type(self) -> ast.DataType:
        start = self._token
        if self._at('ARRAY') and self._peek_symbol('<'):
            self._advance()
            self._advance()
            element = self._type()
            self._expect_symbol('>')
            result = ast.ArrayType(element, location=self._location(start))
        elif self._at('MAP') and self._peek_symbol('<'):
            self._advance()
            self._advance()
            key = self._type()
            self._expect_symbol(',')
            value = self._type()
            self._expect_symbol('>')
            result = ast.MapType(key, value, location=self._location(start))
        elif self._at('ROW') and self._peek_symbol('('):
            self._advance()
            fields = self._parenthesized_list(self._row_field)
            result = ast.RowType(tuple(fields), location=self._location(start))
        else:
            result = self._base_type()

        # INT ARRAY ARRAY -> array(array(int))
        while self._accept('ARRAY'):
            result = ast.ArrayType(result, location=self._location(start))
        return result

    def _row_field(self) -> ast.RowField:
        name = self._identifier()
        return ast.RowField(name, self._type(), location=name.location)

    def _base_type(self) -> ast.BaseType:
        start = self._token
        if start.kind is TokenKind.COMPOUND_TYPE:
            self._advance()
            name = start.text
        elif self._at_identifier():
            name = self._identifier().value.lower()
        else:
            self._note("<type>")
            raise self._syntax_error()

        parameters = ()
        if self._at_symbol('('):
            parameters = tuple(self._parenthesized_list(self._type_parameter))
        return ast.BaseType(name, parameters, location=self._location(start))

    def _type_parameter(self):
        if self._at_kind(TokenKind.INTEGER_VALUE, "<integer>"):
            return int(self._advance().text)
        return self._type()
