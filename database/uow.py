import contextlib
import logging

from database.database import SessionFactory
from database.repository import CareRepository

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def care_uow(session_factory: SessionFactory):
    """Per-unit-of-work transaction scope.

    Yields a CareRepository bound to a fresh Session. Commits on success,
    rolls back on exception, always closes.

    Usage:
        with care_uow(ctx.session_factory) as repo:
            request = repo.requests.get_by_id(request_id)
            # perform operations...
        # commit happens automatically on successful exit
    """
    session = session_factory()
    try:
        repo = CareRepository(session)
        yield repo
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
