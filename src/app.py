"""
Application wiring: the single entry point that turns settings into a ready-to-use service.

An API layer (or a script) opens one service per request / session:

    with open_service() as service:
        service.create_match(CreateMatchRequest(player_name="eleni"))
"""

from contextlib import contextmanager
from typing import Iterator, Optional

from src.core.config import Settings, configure_logging
from src.db.database import create_session_factory, get_db
from src.db.sql_repository import SQLMatchRepository
from src.services.tavli_service import TavliService


@contextmanager
def open_service(settings: Optional[Settings] = None) -> Iterator[TavliService]:
    """Configure logging, connect to the database (creating the tables) and hand out a service. The session is closed on exit."""
    settings = settings or Settings.from_env()
    configure_logging(settings)
    sessions = get_db(create_session_factory(settings))
    db = next(sessions)
    try:
        yield TavliService(SQLMatchRepository(db), settings)
    finally:
        sessions.close()
