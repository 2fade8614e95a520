from .session import Base, create_scoped_session, create_tables, get_engine

__all__ = ["Base", "create_scoped_session", "create_tables", "get_engine"]
