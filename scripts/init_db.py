"""Initialize the database - creates all tables."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from foxclub.database import engine, Base
import foxclub.models  # noqa: F401 - registers all models


def init_db():
    print(f"Creating all database tables on {engine.url.render_as_string(hide_password=True)}...")
    Base.metadata.create_all(bind=engine)
    print("Database initialized successfully.")


if __name__ == "__main__":
    init_db()
