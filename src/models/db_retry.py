import time

from sqlalchemy.exc import IntegrityError, OperationalError


def _is_locked_message(message: str) -> bool:
    lowered = message.lower()
    return "database is locked" in lowered or "database is busy" in lowered


def is_lock_error(exc: OperationalError) -> bool:
    return _is_locked_message(str(getattr(exc, "orig", exc)))


def is_unique_violation(exc: IntegrityError) -> bool:
    message = str(getattr(exc, "orig", exc)).lower()
    return "unique" in message or "duplicate key" in message


def _should_retry(exc: OperationalError, attempt: int, retries: int) -> bool:
    return is_lock_error(exc) and attempt < retries - 1


def commit_with_retry(session, retries: int = 3, delay: float = 0.1) -> None:
    for attempt in range(retries):
        try:
            session.commit()
            return
        except OperationalError as exc:
            if not _should_retry(exc, attempt, retries):
                session.rollback()
                raise
            time.sleep(delay * (attempt + 1))
