import sqlparse

from errors import SchemaError
from services.interfaces import ILogger


def count_statements(sql: str) -> int:
    """Number of non-empty statements sqlparse finds in sql."""
    return len([s for s in sqlparse.split(sql) if s.strip()])


class StatementExecutor:
    """Executes a single DDL/DML statement on an open connection."""

    def __init__(self, logger: ILogger):
        self._logger = logger

    def execute_update(self, connection, sql: str) -> int:
        if count_statements(sql) != 1:
            raise SchemaError(f"Expected exactly one statement: {sql}", sql=sql)

        with connection.cursor() as cur:
            self._logger.info(f"Executing statement: {sql}")
            affected = cur.execute(sql)
        connection.commit()
        self._logger.info(f"Statement executed, {affected} rows affected")
        return affected
