import os

from dotenv import load_dotenv

load_dotenv(dotenv_path=".env")

# SQL Client Constants
SQL_CONNECT_TIMEOUT = int(os.getenv("DATASOURCE_SDK_SQL_CONNECT_TIMEOUT", "10"))
SQL_POOL_PRE_PING = os.getenv("DATASOURCE_SDK_SQL_POOL_PRE_PING", "true").lower() == "true"

# Credential Constants
SECRET_KEY = os.getenv("DATASOURCE_SDK_SECRET_KEY", "")

# Field Constants
ID_COLUMNS = ("id", "_id")
ID_COLUMN_SUFFIX = "_id"

# Logger Constants
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
