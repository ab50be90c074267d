from .session import Base, engine, AsyncSessionLocal, get_db, init_db, seed_default_status

__all__ = [
    "Base",
    "engine",
    "AsyncSessionLocal",
    "get_db",
    "init_db",
    "seed_default_status"
]
