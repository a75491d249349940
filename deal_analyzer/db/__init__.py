"""
Deal persistence.
"""

from deal_analyzer.db.database import engine, SessionLocal, get_db, get_db_context, init_db
from deal_analyzer.db.models import Base, Deal

__all__ = ["engine", "SessionLocal", "get_db", "get_db_context", "init_db", "Base", "Deal"]
