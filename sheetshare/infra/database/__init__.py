from .connection import AsyncSessionLocal, create_db_and_tables, dispose_engine, get_engine, get_session

__all__ = ["AsyncSessionLocal", "create_db_and_tables", "dispose_engine", "get_engine", "get_session"]
