# File: pakli/db/session.py

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from pakli.core.config import settings

if settings.database_url.startswith("sqlite"):
    # local runs and tests; the request handlers hop threads
    engine = create_engine(
        settings.database_url,
        pool_pre_ping=True,
        connect_args={"check_same_thread": False},
    )
else:
    engine = create_engine(
        settings.database_url,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
        pool_recycle=3600,
        pool_timeout=30
    )
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
