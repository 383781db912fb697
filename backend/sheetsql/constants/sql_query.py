TABLE_NAME = "user_data"

SQL_CREATE_TABLE = 'CREATE TABLE "{table}" ({columns})'

SQL_INSERT_ROW = 'INSERT INTO "{table}" VALUES ({placeholders})'

SQL_PREVIEW = "SELECT * FROM {table} LIMIT {limit}"
