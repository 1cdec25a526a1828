import duckdb
import os
import logging
import pandas as pd
from typing import List, Optional, Sequence
from quakeinsight.constants import (
    ALL_SCHEMAS_PATH,
    BATCH_SIZE,
    DEFAULT_DB_PATH,
    EARTHQUAKES_TABLE,
)
from quakeinsight.configs.schemas import SchemaConfig, TableSchema
from quakeinsight.configs.earthquake import Earthquake


logging.basicConfig(level=logging.INFO)


def get_schema(table_name: str) -> TableSchema:
    return SchemaConfig.from_yaml(ALL_SCHEMAS_PATH).schemas[table_name]


def execute(conn: duckdb.DuckDBPyConnection, query: str, params: Sequence = None):
    logging.info("-----------query-start-----------")
    logging.info(query)
    if params:
        logging.info(f"params: {list(params)}")
    logging.info("------------query-end------------")
    if params:
        return conn.execute(query, list(params))
    return conn.execute(query)


def initialize(db_path: str = DEFAULT_DB_PATH, rebuild_tables: bool = False):
    """Connects to the DuckDB file (or ":memory:") and creates missing tables."""
    if db_path != ":memory:":
        db_dir = os.path.dirname(db_path)
        if db_dir and not os.path.exists(db_dir):
            os.makedirs(db_dir)
    conn = duckdb.connect(db_path)
    create_tables(conn, rebuild_tables)
    return conn


def create_tables(conn: duckdb.DuckDBPyConnection, replace: bool = False):
    if replace:
        create_statement = "CREATE OR REPLACE TABLE"
    else:
        create_statement = "CREATE TABLE IF NOT EXISTS"

    schemas = SchemaConfig.from_yaml(ALL_SCHEMAS_PATH).schemas

    # Secondary indexes are left out: DuckDB refuses ON CONFLICT DO UPDATE
    # on columns referenced by an index.
    for table_name, schema in schemas.items():
        execute(
            conn,
            f"{create_statement} {table_name} ({schema.duckdb_schema}, PRIMARY KEY ({schema.duckdb_pk}));",
        )


def upsert_dataframe(
    conn: duckdb.DuckDBPyConnection,
    df: pd.DataFrame,
    table_name: str,
    schema: TableSchema,
):
    """Upserts a dataframe into an existing DuckDB table.

    Rows whose primary key already exists have every non-key column
    overwritten; columns with a DEFAULT (created_at) keep their stored value."""
    columns = schema.writable_columns()
    update_cols = [col for col in columns if col not in schema.primary_key]

    # register the df as a DuckDB view
    conn.register("new_rows", df)

    list_cols = ", ".join(columns)
    select_cols = ", ".join(
        [f"CAST({col} AS {schema.column_type(col)}) AS {col}" for col in columns]
    )
    set_cols = ", ".join([f"{col} = EXCLUDED.{col}" for col in update_cols])
    query = f"""INSERT INTO {table_name} ({list_cols})
                SELECT {select_cols} FROM new_rows
                ON CONFLICT ({schema.duckdb_pk}) DO UPDATE SET {set_cols};"""

    try:
        execute(conn, query)
    finally:
        conn.unregister("new_rows")


def upsert_earthquakes(
    conn: duckdb.DuckDBPyConnection,
    earthquakes: List[Earthquake],
    batch_size: int = BATCH_SIZE,
) -> int:
    """Inserts or updates earthquake rows keyed by id, one batch at a time.

    A batch that fails is logged and skipped; earlier batches stay written.

    Args:
        conn (duckdb.DuckDBPyConnection): duckdb connection
        earthquakes (List[Earthquake]): records to write
        batch_size (int): rows per INSERT statement

    Returns:
        written (int): number of rows inserted or updated
    """
    schema = get_schema(EARTHQUAKES_TABLE)
    columns = schema.writable_columns()

    # one statement can't touch the same key twice, keep the last occurrence
    unique = {eq.id: eq for eq in earthquakes}
    rows = [eq.to_row() for eq in unique.values()]

    written = 0
    for start in range(0, len(rows), batch_size):
        batch = rows[start : start + batch_size]
        df = pd.DataFrame(batch, columns=columns)
        try:
            upsert_dataframe(conn, df, EARTHQUAKES_TABLE, schema)
        except duckdb.Error as e:
            logging.error(f"Batch {start} error: {e}")
            continue
        written += len(batch)

    logging.info(f"Inserted/updated {written} earthquakes")
    return written


def query_earthquakes(
    conn: duckdb.DuckDBPyConnection,
    start_year: Optional[int] = None,
    end_year: Optional[int] = None,
    min_magnitude: Optional[float] = None,
    state: Optional[str] = None,
    region: Optional[str] = None,
    is_historical: Optional[bool] = None,
    limit: Optional[int] = None,
) -> List[Earthquake]:
    """Reads earthquakes matching every given filter, most recent first."""
    conditions = []
    params = []
    if start_year is not None:
        conditions.append("year(occurred_at) >= ?")
        params.append(start_year)
    if end_year is not None:
        conditions.append("year(occurred_at) <= ?")
        params.append(end_year)
    if min_magnitude is not None:
        conditions.append("magnitude >= ?")
        params.append(min_magnitude)
    if state:
        conditions.append("state = ?")
        params.append(state)
    if region:
        conditions.append("region = ?")
        params.append(region)
    if is_historical is not None:
        conditions.append("is_historical = ?")
        params.append(is_historical)

    query = f"SELECT * FROM {EARTHQUAKES_TABLE}"
    if conditions:
        query += " WHERE " + " AND ".join(conditions)
    query += " ORDER BY occurred_at DESC, id"
    if limit is not None:
        query += f" LIMIT {int(limit)}"

    result = execute(conn, query, params)
    names = [col[0] for col in result.description]
    return [Earthquake.from_row(dict(zip(names, row))) for row in result.fetchall()]


def count_earthquakes(conn: duckdb.DuckDBPyConnection) -> int:
    return execute(conn, f"SELECT count(*) FROM {EARTHQUAKES_TABLE};").fetchone()[0]
