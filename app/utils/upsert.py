"""
Dialect-aware INSERT ... ON CONFLICT support

Progress records, awards and friendships are written with a single
conflict-aware insert.
"""
from sqlalchemy.orm import Session
from sqlalchemy.dialects import postgresql, sqlite


def insert_for(db: Session, model):
    """Return an insert() construct supporting on_conflict_* for the bound dialect"""
    dialect = db.get_bind().dialect.name

    if dialect == "postgresql":
        return postgresql.insert(model)
    if dialect == "sqlite":
        return sqlite.insert(model)

    raise NotImplementedError(f"Upsert is not supported on dialect '{dialect}'")
