"""
Statement grammar.

Statements are dispatched on their leading keyword. Where several forms share
a prefix (CREATE TABLE ... AS query and CREATE TABLE (...), DESCRIBE INPUT
and DESCRIBE name, the ALTER TABLE family), the candidates are tried in order
and the first one that matches completely wins.
"""

from typing import Optional, Tuple

from . import ast
from .base import GrammarBase, nested
from .tokens import TokenKind

_QUERY_START_KEYWORDS = ('SELECT', 'WITH', 'VALUES', 'TABLE')

_ISOLATION_LEVELS = {
    ('READ', 'UNCOMMITTED'): ast.IsolationLevel.READ_UNCOMMITTED,
    ('READ', 'COMMITTED'): ast.IsolationLevel.READ_COMMITTED,
    ('REPEATABLE', 'READ'): ast.IsolationLevel.REPEATABLE_READ,
    ('SERIALIZABLE',): ast.IsolationLevel.SERIALIZABLE,
}


class StatementGrammar(GrammarBase):
    """Top-level statements: queries, DDL, DML, session control and introspection."""

    # Candidates per leading keyword, in the order they are tried
    _STATEMENTS = {
        'USE': ('_use',),
        'CREATE': ('_create_schema', '_create_table_as_select', '_create_table', '_create_view'),
        'DROP': ('_drop_schema', '_drop_table', '_drop_view'),
        'ALTER': ('_rename_schema', '_rename_table', '_rename_column', '_add_column'),
        'INSERT': ('_insert_into',),
        'DELETE': ('_delete',),
        'CALL': ('_call',),
        'GRANT': ('_grant',),
        'REVOKE': ('_revoke',),
        'EXPLAIN': ('_explain',),
        'SHOW': (
            '_show_create', '_show_tables', '_show_schemas', '_show_catalogs',
            '_show_columns', '_show_functions', '_show_session', '_show_partitions',
        ),
        'DESCRIBE': ('_describe_input', '_describe_output', '_describe'),
        'DESC': ('_describe',),
        'SET': ('_set_session',),
        'RESET': ('_reset_session',),
        'START': ('_start_transaction',),
        'COMMIT': ('_commit',),
        'ROLLBACK': ('_rollback',),
        'PREPARE': ('_prepare',),
        'DEALLOCATE': ('_deallocate',),
        'EXECUTE': ('_execute',),
    }

    @nested
    def _statement(self) -> ast.Statement:
        if self._at(*_QUERY_START_KEYWORDS) or self._at_symbol('('):
            return self._query()

        candidates = self._STATEMENTS.get(self._token.keyword)
        if candidates is None:
            self._note(*(f"'{kw}'" for kw in self._STATEMENTS))
            raise self._syntax_error()
        if len(candidates) == 1:
            return getattr(self, candidates[0])()
        return self._first_alternative(*(getattr(self, name) for name in candidates))

    # ----- Shared clauses -----

    def _if_not_exists(self) -> bool:
        if self._at_sequence('IF', 'NOT', 'EXISTS'):
            for _ in range(3):
                self._advance()
            return True
        return False

    def _if_exists(self) -> bool:
        if self._at_sequence('IF', 'EXISTS'):
            self._advance()
            self._advance()
            return True
        return False

    def _properties(self) -> Tuple[ast.Property, ...]:
        """``WITH '(' identifier '=' expression (',' ...)* ')'``, or nothing."""
        if not self._accept('WITH'):
            return ()
        return tuple(self._parenthesized_list(self._property))

    def _property(self) -> ast.Property:
        name = self._identifier()
        self._expect_symbol('=')
        return ast.Property(name, self._expression(), location=name.location)

    def _like_pattern(self) -> Optional[str]:
        if self._accept('LIKE'):
            return self._string()
        return None

    def _from_or_in(self):
        return self._expect('FROM', 'IN')

    def _limit(self) -> Optional[str]:
        if not self._accept('LIMIT'):
            return None
        if self._at('ALL'):
            return self._advance().keyword
        return self._expect_kind(TokenKind.INTEGER_VALUE, "<integer>").text

    # ----- Schemas -----

    def _use(self) -> ast.Use:
        start = self._expect('USE')
        first = self._identifier()
        if self._accept_symbol('.'):
            schema = self._identifier()
            return ast.Use(schema, first, location=self._location(start))
        return ast.Use(first, location=self._location(start))

    def _create_schema(self) -> ast.CreateSchema:
        start = self._expect('CREATE')
        self._expect('SCHEMA')
        not_exists = self._if_not_exists()
        name = self._qualified_name()
        properties = self._properties()
        return ast.CreateSchema(name, not_exists, properties, location=self._location(start))

    def _drop_schema(self) -> ast.DropSchema:
        start = self._expect('DROP')
        self._expect('SCHEMA')
        exists = self._if_exists()
        name = self._qualified_name()
        behavior = self._accept('CASCADE', 'RESTRICT')
        cascade = behavior is not None and behavior.keyword == 'CASCADE'
        return ast.DropSchema(name, exists, cascade, location=self._location(start))

    def _rename_schema(self) -> ast.RenameSchema:
        start = self._expect('ALTER')
        self._expect('SCHEMA')
        source = self._qualified_name()
        self._expect('RENAME')
        self._expect('TO')
        target = self._identifier()
        return ast.RenameSchema(source, target, location=self._location(start))

    # ----- Tables -----

    def _create_table_as_select(self) -> ast.CreateTableAsSelect:
        start = self._expect('CREATE')
        self._expect('TABLE')
        not_exists = self._if_not_exists()
        name = self._qualified_name()
        properties = self._properties()
        self._expect('AS')
        query = self._query()
        with_data = True
        if self._accept('WITH'):
            with_data = self._accept('NO') is None
            self._expect('DATA')
        return ast.CreateTableAsSelect(
            name, query, not_exists, properties, with_data, location=self._location(start)
        )

    def _create_table(self) -> ast.CreateTable:
        start = self._expect('CREATE')
        self._expect('TABLE')
        not_exists = self._if_not_exists()
        name = self._qualified_name()
        elements = self._parenthesized_list(self._table_element)
        properties = self._properties()
        return ast.CreateTable(
            name, tuple(elements), not_exists, properties, location=self._location(start)
        )

    def _table_element(self) -> ast.TableElement:
        start = self._token
        if self._accept('LIKE'):
            table_name = self._qualified_name()
            option = None
            token = self._accept('INCLUDING', 'EXCLUDING')
            if token is not None:
                self._expect('PROPERTIES')
                option = ast.LikeClauseOption(token.keyword)
            return ast.LikeClause(table_name, option, location=self._location(start))
        return self._column_definition()

    def _column_definition(self) -> ast.ColumnDefinition:
        name = self._identifier()
        data_type = self._type()
        comment = None
        if self._accept('COMMENT'):
            comment = self._string()
        return ast.ColumnDefinition(name, data_type, comment, location=name.location)

    def _drop_table(self) -> ast.DropTable:
        start = self._expect('DROP')
        self._expect('TABLE')
        exists = self._if_exists()
        return ast.DropTable(self._qualified_name(), exists, location=self._location(start))

    def _rename_table(self) -> ast.RenameTable:
        start = self._expect('ALTER')
        self._expect('TABLE')
        source = self._qualified_name()
        self._expect('RENAME')
        self._expect('TO')
        target = self._qualified_name()
        return ast.RenameTable(source, target, location=self._location(start))

    def _rename_column(self) -> ast.RenameColumn:
        start = self._expect('ALTER')
        self._expect('TABLE')
        table = self._qualified_name()
        self._expect('RENAME')
        self._expect('COLUMN')
        source = self._identifier()
        self._expect('TO')
        target = self._identifier()
        return ast.RenameColumn(table, source, target, location=self._location(start))

    def _add_column(self) -> ast.AddColumn:
        start = self._expect('ALTER')
        self._expect('TABLE')
        name = self._qualified_name()
        self._expect('ADD')
        self._expect('COLUMN')
        column = self._column_definition()
        return ast.AddColumn(name, column, location=self._location(start))

    # ----- Views -----

    def _create_view(self) -> ast.CreateView:
        start = self._expect('CREATE')
        replace = False
        if self._accept('OR'):
            self._expect('REPLACE')
            replace = True
        self._expect('VIEW')
        name = self._qualified_name()
        self._expect('AS')
        query = self._query()
        return ast.CreateView(name, query, replace, location=self._location(start))

    def _drop_view(self) -> ast.DropView:
        start = self._expect('DROP')
        self._expect('VIEW')
        exists = self._if_exists()
        return ast.DropView(self._qualified_name(), exists, location=self._location(start))

    # ----- Data modification -----

    def _insert_into(self) -> ast.Insert:
        start = self._expect('INSERT')
        self._expect('INTO')
        target = self._qualified_name()
        columns = None
        if self._at_symbol('(') and not self._starts_query(1):
            # INSERT INTO t (a, b) SELECT ... versus INSERT INTO t (SELECT ...)
            columns = self._attempt(self._column_aliases)
        query = self._query()
        return ast.Insert(target, query, columns, location=self._location(start))

    def _column_aliases(self) -> Tuple[ast.Identifier, ...]:
        names = tuple(self._parenthesized_list(self._identifier))
        if not (self._at(*_QUERY_START_KEYWORDS) or self._at_symbol('(')):
            raise self._syntax_error()
        return names

    def _delete(self) -> ast.Delete:
        start = self._expect('DELETE')
        self._expect('FROM')
        name_start = self._token
        table = ast.Table(self._qualified_name(), location=self._location(name_start))
        where = None
        if self._accept('WHERE'):
            where = self._expression()
        return ast.Delete(table, where, location=self._location(start))

    # ----- Procedures and access control -----

    def _call(self) -> ast.Call:
        start = self._expect('CALL')
        name = self._qualified_name()
        self._expect_symbol('(')
        arguments = []
        if not self._at_symbol(')'):
            arguments = self._comma_list(self._call_argument)
        self._expect_symbol(')')
        return ast.Call(name, tuple(arguments), location=self._location(start))

    def _call_argument(self) -> ast.CallArgument:
        start = self._token
        if self._at_identifier() and self._peek_symbol('=>'):
            name = self._identifier()
            self._advance()
            return ast.CallArgument(self._expression(), name, location=self._location(start))
        return ast.CallArgument(self._expression(), location=self._location(start))

    def _privileges(self) -> Optional[Tuple[ast.Identifier, ...]]:
        """Privilege list; None stands for ALL PRIVILEGES."""
        if self._at_sequence('ALL', 'PRIVILEGES'):
            self._advance()
            self._advance()
            return None
        return tuple(self._comma_list(self._privilege))

    def _privilege(self) -> ast.Identifier:
        token = self._accept('SELECT', 'DELETE', 'INSERT')
        if token is not None:
            return ast.Identifier(token.keyword, location=self._location(token))
        return self._identifier()

    def _grant(self) -> ast.Grant:
        start = self._expect('GRANT')
        privileges = self._privileges()
        self._expect('ON')
        table = self._accept('TABLE') is not None
        table_name = self._qualified_name()
        self._expect('TO')
        grantee = self._identifier()
        with_grant_option = False
        if self._accept('WITH'):
            self._expect('GRANT')
            self._expect('OPTION')
            with_grant_option = True
        return ast.Grant(
            privileges, table_name, grantee, table, with_grant_option,
            location=self._location(start)
        )

    def _revoke(self) -> ast.Revoke:
        start = self._expect('REVOKE')
        grant_option_for = False
        if self._at_sequence('GRANT', 'OPTION', 'FOR'):
            for _ in range(3):
                self._advance()
            grant_option_for = True
        privileges = self._privileges()
        self._expect('ON')
        table = self._accept('TABLE') is not None
        table_name = self._qualified_name()
        self._expect('FROM')
        grantee = self._identifier()
        return ast.Revoke(
            privileges, table_name, grantee, table, grant_option_for,
            location=self._location(start)
        )

    # ----- EXPLAIN -----

    def _explain(self) -> ast.Explain:
        start = self._expect('EXPLAIN')
        analyze = self._accept('ANALYZE') is not None
        options = ()
        if self._at_symbol('('):
            # EXPLAIN (FORMAT TEXT) ... versus EXPLAIN (SELECT ...)
            options = self._attempt(self._explain_options) or ()
        statement = self._statement()
        return ast.Explain(statement, analyze, options, location=self._location(start))

    def _explain_options(self) -> Tuple[ast.ExplainOption, ...]:
        return tuple(self._parenthesized_list(self._explain_option))

    def _explain_option(self) -> ast.ExplainOption:
        start = self._token
        if self._accept('FORMAT'):
            value = self._expect('TEXT', 'GRAPHVIZ').keyword
            return ast.ExplainFormat(ast.ExplainOutputFormat[value], location=self._location(start))
        self._expect('TYPE')
        value = self._expect('LOGICAL', 'DISTRIBUTED', 'VALIDATE').keyword
        return ast.ExplainType(ast.ExplainPlanType[value], location=self._location(start))

    # ----- SHOW and DESCRIBE -----

    def _show_create(self) -> ast.ShowCreate:
        start = self._expect('SHOW')
        self._expect('CREATE')
        show_type = ast.ShowCreateType[self._expect('TABLE', 'VIEW').keyword]
        return ast.ShowCreate(show_type, self._qualified_name(), location=self._location(start))

    def _show_tables(self) -> ast.ShowTables:
        start = self._expect('SHOW')
        self._expect('TABLES')
        schema = None
        if self._at('FROM', 'IN'):
            self._advance()
            schema = self._qualified_name()
        return ast.ShowTables(schema, self._like_pattern(), location=self._location(start))

    def _show_schemas(self) -> ast.ShowSchemas:
        start = self._expect('SHOW')
        self._expect('SCHEMAS')
        catalog = None
        if self._at('FROM', 'IN'):
            self._advance()
            catalog = self._identifier()
        return ast.ShowSchemas(catalog, self._like_pattern(), location=self._location(start))

    def _show_catalogs(self) -> ast.ShowCatalogs:
        start = self._expect('SHOW')
        self._expect('CATALOGS')
        return ast.ShowCatalogs(self._like_pattern(), location=self._location(start))

    def _show_columns(self) -> ast.ShowColumns:
        start = self._expect('SHOW')
        self._expect('COLUMNS')
        self._from_or_in()
        return ast.ShowColumns(self._qualified_name(), location=self._location(start))

    def _describe(self) -> ast.ShowColumns:
        start = self._expect('DESCRIBE', 'DESC')
        return ast.ShowColumns(self._qualified_name(), location=self._location(start))

    def _show_functions(self) -> ast.ShowFunctions:
        start = self._expect('SHOW')
        self._expect('FUNCTIONS')
        return ast.ShowFunctions(location=self._location(start))

    def _show_session(self) -> ast.ShowSession:
        start = self._expect('SHOW')
        self._expect('SESSION')
        return ast.ShowSession(location=self._location(start))

    def _show_partitions(self) -> ast.ShowPartitions:
        start = self._expect('SHOW')
        self._expect('PARTITIONS')
        self._from_or_in()
        table = self._qualified_name()
        where = None
        if self._accept('WHERE'):
            where = self._expression()
        order_by = None
        if self._at('ORDER'):
            order_by = self._order_by()
        limit = self._limit()
        return ast.ShowPartitions(table, where, order_by, limit, location=self._location(start))

    # ----- Session -----

    def _set_session(self) -> ast.SetSession:
        start = self._expect('SET')
        self._expect('SESSION')
        name = self._qualified_name()
        self._expect_symbol('=')
        value = self._expression()
        return ast.SetSession(name, value, location=self._location(start))

    def _reset_session(self) -> ast.ResetSession:
        start = self._expect('RESET')
        self._expect('SESSION')
        return ast.ResetSession(self._qualified_name(), location=self._location(start))

    # ----- Transactions -----

    def _start_transaction(self) -> ast.StartTransaction:
        start = self._expect('START')
        self._expect('TRANSACTION')
        modes = []
        if self._at('ISOLATION', 'READ'):
            modes = self._comma_list(self._transaction_mode)
        return ast.StartTransaction(tuple(modes), location=self._location(start))

    def _transaction_mode(self) -> ast.TransactionMode:
        start = self._token
        if self._accept('ISOLATION'):
            self._expect('LEVEL')
            return ast.Isolation(self._isolation_level(), location=self._location(start))
        self._expect('READ')
        access = self._expect('ONLY', 'WRITE').keyword
        return ast.TransactionAccessMode(access == 'ONLY', location=self._location(start))

    def _isolation_level(self) -> ast.IsolationLevel:
        for words, level in _ISOLATION_LEVELS.items():
            if self._at_sequence(*words):
                for _ in words:
                    self._advance()
                return level
        raise self._syntax_error()

    def _commit(self) -> ast.Commit:
        start = self._expect('COMMIT')
        self._accept('WORK')
        return ast.Commit(location=self._location(start))

    def _rollback(self) -> ast.Rollback:
        start = self._expect('ROLLBACK')
        self._accept('WORK')
        return ast.Rollback(location=self._location(start))

    # ----- Prepared statements -----

    def _prepare(self) -> ast.Prepare:
        start = self._expect('PREPARE')
        name = self._identifier()
        self._expect('FROM')
        statement = self._statement()
        return ast.Prepare(name, statement, location=self._location(start))

    def _deallocate(self) -> ast.Deallocate:
        start = self._expect('DEALLOCATE')
        self._expect('PREPARE')
        return ast.Deallocate(self._identifier(), location=self._location(start))

    def _execute(self) -> ast.Execute:
        start = self._expect('EXECUTE')
        name = self._identifier()
        parameters = []
        if self._accept('USING'):
            parameters = self._comma_list(self._expression)
        return ast.Execute(name, tuple(parameters), location=self._location(start))

    def _describe_input(self) -> ast.DescribeInput:
        start = self._expect('DESCRIBE')
        self._expect('INPUT')
        return ast.DescribeInput(self._identifier(), location=self._location(start))

    def _describe_output(self) -> ast.DescribeOutput:
        start = self._expect('DESCRIBE')
        self._expect('OUTPUT')
        return ast.DescribeOutput(self._identifier(), location=self._location(start))
