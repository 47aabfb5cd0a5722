"""
Database initialization script.

Run this script to create the users and chirps tables.
"""
from chirpy_database.db import get_engine
from chirpy_database.models import Base


# PUBLIC_INTERFACE
def init_db(engine=None):
    """Creates all tables if they do not exist."""
    Base.metadata.create_all(bind=engine or get_engine())


if __name__ == "__main__":
    init_db()
    print("Database tables created successfully.")
