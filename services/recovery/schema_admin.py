import pymysql
from pymysql import err

from config import RecoveryConfig
from errors import SchemaError
from services.execution.executor import StatementExecutor
from services.interfaces import IConnectionFactory, ILogger

CREATE_DATABASE = "CREATE DATABASE {schema} CHARACTER SET utf8 COLLATE utf8_general_ci;"
DROP_DATABASE = "DROP DATABASE {schema};"


class PyMySQLConnectionFactory(IConnectionFactory):
    """Opens fresh PyMySQL connections for a config, root or schema level."""

    def __init__(self, config: RecoveryConfig):
        self._config = config

    def connect(self, schema_scoped: bool):
        return pymysql.connect(**self._config.connection_params(schema_scoped=schema_scoped))


class SchemaAdministrator:
    """
    Creates and drops the managed schema.

    Each call opens its own connection right before the statement and closes
    it on every exit path. CREATE runs on a root-level connection, DROP on a
    connection scoped to the schema itself.
    """

    def __init__(self, config: RecoveryConfig, logger: ILogger,
                 connection_factory: IConnectionFactory = None,
                 statement_executor: StatementExecutor = None):
        self._logger = logger
        self._connection_factory = connection_factory or PyMySQLConnectionFactory(config)
        self._statement_executor = statement_executor or StatementExecutor(logger)
        self._root_url = config.root_url
        self._schema_url = config.schema_url

        self.create_database_sql = CREATE_DATABASE.format(schema=config.schema)
        self.drop_database_sql = DROP_DATABASE.format(schema=config.schema)

    def create_database(self) -> None:
        self._logger.info(f"Creating database on {self._root_url}")
        self._execute(False, self.create_database_sql, "Failed to create database")

    def drop_database(self) -> None:
        self._logger.info(f"Dropping database on {self._schema_url}")
        self._execute(True, self.drop_database_sql, "Failed to drop database")

    def _execute(self, schema_scoped: bool, sql: str, failure: str) -> None:
        try:
            connection = self._connection_factory.connect(schema_scoped)
        except err.MySQLError as e:
            self._logger.error(f"{failure}: {sql} ({e})")
            raise SchemaError(f"{failure}: {sql}", sql=sql) from e

        try:
            self._statement_executor.execute_update(connection, sql)
        except err.MySQLError as e:
            self._logger.error(f"{failure}: {sql} ({e})")
            raise SchemaError(f"{failure}: {sql}", sql=sql) from e
        finally:
            connection.close()
