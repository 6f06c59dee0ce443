from typing import Any, Dict, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, model_validator

from datasource_sdk.dto.data_source import DataSourceType


class BaseCredentials(BaseModel):
    """Connection parameters shared by the network engines.

    Either a full connection ``url`` or the individual parts must be given.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    url: Optional[str] = None
    host: Optional[str] = None
    port: Optional[int] = None
    user: Optional[str] = None
    password: Optional[str] = None
    database: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def accept_username(cls, data: Any) -> Any:
        if isinstance(data, dict) and "user" not in data and "username" in data:
            data = {**data, "user": data["username"]}
        return data

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class PostgresqlCredentials(BaseCredentials):
    port: Optional[int] = 5432
    use_ssl: bool = False

    @model_validator(mode="after")
    def check_target(self) -> "PostgresqlCredentials":
        if not self.url and not self.host:
            raise ValueError("either url or host is required")
        return self


class MysqlCredentials(BaseCredentials):
    port: Optional[int] = 3306

    @model_validator(mode="after")
    def check_target(self) -> "MysqlCredentials":
        if not self.url and not self.host:
            raise ValueError("either url or host is required")
        return self


class SqliteCredentials(BaseCredentials):
    @model_validator(mode="after")
    def check_target(self) -> "SqliteCredentials":
        if not self.url and not self.database:
            raise ValueError("either url or database is required")
        return self


DataSourceCredentials = Union[PostgresqlCredentials, MysqlCredentials, SqliteCredentials]

CREDENTIALS_BY_TYPE: Dict[DataSourceType, Type[BaseCredentials]] = {
    DataSourceType.POSTGRESQL: PostgresqlCredentials,
    DataSourceType.MYSQL: MysqlCredentials,
    DataSourceType.SQLITE: SqliteCredentials,
}
