"""
Database Connection and Operations

Handles connection to the Redshift lane store and data operations.
Shared by the rating engine (reads) and the lane maintenance loader (writes).
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional, Sequence

import polars as pl
import redshift_connector


logger = logging.getLogger(__name__)


# Database connection parameters
HOST = "lane-store.us-east-1.redshift.amazonaws.com"
PORT = 5439
DBNAME = "rating"
USER = "rating_svc"


# Global connection object
_connection: Optional[redshift_connector.Connection] = None


# ============================================================================
# CONNECTION MANAGEMENT
# ============================================================================

def _read_password() -> str:
    """
    Read password from pass.txt file in the database directory.

    Returns:
        str: The database password

    Raises:
        RuntimeError: If password file is not found or is empty
    """
    path = Path(__file__).parent / "pass.txt"

    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                val = line.strip()
                if val:
                    return val

    raise RuntimeError(
        f"Password not found. Please create 'pass.txt' in {path.parent}"
    )


def _connect() -> redshift_connector.Connection:
    """Open a new, unshared connection."""
    try:
        return redshift_connector.connect(
            host=HOST,
            database=DBNAME,
            port=PORT,
            user=USER,
            password=_read_password()
        )
    except Exception as e:
        raise RuntimeError(f"Failed to create database connection: {e}")


def get_connection(force_new: bool = False) -> redshift_connector.Connection:
    """
    Get or create a database connection.

    By default, returns the existing connection if one exists.
    Use force_new=True to create a fresh connection.

    Args:
        force_new: If True, closes existing connection and creates a new one

    Returns:
        redshift_connector.Connection: Active database connection

    Raises:
        RuntimeError: If connection cannot be established
    """
    global _connection

    if force_new:
        close_connection()

    if _connection is None:
        _connection = _connect()

    return _connection


def close_connection() -> None:
    """Close the active database connection if one exists."""
    global _connection

    if _connection is not None:
        try:
            _connection.close()
        except Exception as e:
            logger.debug("Ignoring error while closing connection: %s", e)
        finally:
            _connection = None


# ============================================================================
# DATA OPERATIONS
# ============================================================================

def pull_data(query: str, params: Optional[Sequence] = None) -> pl.DataFrame:
    """
    Execute a SQL query and return results as a Polars DataFrame.

    Args:
        query: SQL query string, with %s placeholders for params
        params: Values bound to the placeholders, optional

    Returns:
        pl.DataFrame: Query results (column names lower-cased)

    Raises:
        RuntimeError: If query execution fails

    Example:
        df = pull_data("SELECT * FROM rating.std_lanes WHERE racode = %s", ["ABCD"])
    """
    conn = get_connection()

    try:
        cursor = conn.cursor()
        if params:
            cursor.execute(query, params)
        else:
            cursor.execute(query)

        columns = [desc[0].lower() for desc in cursor.description]
        rows = cursor.fetchall()
        cursor.close()

        return pl.DataFrame(rows, schema=columns, orient="row")
    except Exception as e:
        raise RuntimeError(f"Error executing query: {e}")


def execute_query(query: str, params: Optional[Sequence] = None, commit: bool = True) -> None:
    """
    Execute a SQL statement without returning results (INSERT, UPDATE, DELETE).

    Args:
        query: SQL statement, with %s placeholders for params
        params: Values bound to the placeholders, optional
        commit: If True, commit the transaction; if False, you must commit manually

    Raises:
        RuntimeError: If execution fails

    Example:
        execute_query("DELETE FROM rating.std_lanes WHERE record_number = %s", [42])
    """
    conn = get_connection()

    try:
        cursor = conn.cursor()
        if params:
            cursor.execute(query, params)
        else:
            cursor.execute(query)
        if commit:
            conn.commit()
        cursor.close()
    except Exception as e:
        conn.rollback()
        raise RuntimeError(f"Error executing query: {e}")


def _execute_isolated(statement: tuple[str, Sequence]) -> Optional[Exception]:
    """Run one statement on its own connection, returning the error instead of raising."""
    query, params = statement
    try:
        conn = _connect()
    except RuntimeError as e:
        return e

    try:
        cursor = conn.cursor()
        cursor.execute(query, params)
        conn.commit()
        cursor.close()
        return None
    except Exception as e:
        try:
            conn.rollback()
        except Exception as rollback_error:
            logger.debug("Ignoring error while rolling back: %s", rollback_error)
        return RuntimeError(f"Error executing statement: {e}")
    finally:
        try:
            conn.close()
        except Exception as e:
            logger.debug("Ignoring error while closing connection: %s", e)


def execute_inserts(
    statements: list[tuple[str, Sequence]],
    max_workers: int = 8,
    verbose: bool = True
) -> list[Optional[Exception]]:
    """
    Execute many independent statements concurrently.

    Each statement runs on its own connection and commits on its own, so one
    failure never aborts the rest of the batch.

    Args:
        statements: List of (query, params) tuples
        max_workers: Maximum number of concurrent connections
        verbose: If True, print a summary when done

    Returns:
        list: One entry per statement, in input order - None on success,
              the exception on failure
    """
    if not statements:
        return []

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        results = list(executor.map(_execute_isolated, statements))

    failed = sum(1 for r in results if r is not None)
    for idx, result in enumerate(results):
        if result is not None:
            logger.warning("Statement %d failed: %s", idx, result)

    if verbose:
        print(f"Executed {len(statements):,} statement(s): {len(statements) - failed:,} ok, {failed:,} failed")

    return results
