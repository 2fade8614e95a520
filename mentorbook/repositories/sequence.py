"""
Insertion-order numbering for SQL rows.

``users.seq`` and ``bookings.seq`` record creation order and carry a UNIQUE
constraint. Two concurrent inserts can read the same ``max(seq)``; the
second one then violates the constraint, rolls back and tries again with a
fresh number.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)

SEQ_INSERT_ATTEMPTS = 5


def next_seq(db, model) -> int:
    """One past the highest ``seq`` currently stored for ``model``."""
    return db.scalar(select(func.coalesce(func.max(model.seq), 0))) + 1


def insert_with_seq(db, row, model) -> None:
    """Add and commit ``row`` with the next free ``seq``.

    Raises:
        IntegrityError: If every attempt collides, or the row violates
            another constraint (e.g. a duplicate id)
    """
    for attempt in range(1, SEQ_INSERT_ATTEMPTS + 1):
        row.seq = next_seq(db, model)
        db.add(row)
        try:
            db.commit()
            return
        except IntegrityError as integrity_error:
            db.rollback()
            if attempt == SEQ_INSERT_ATTEMPTS:
                raise
            logger.warning(
                "seq collision on insert, retrying",
                extra={
                    "context": {
                        "table": model.__tablename__,
                        "seq": row.seq,
                        "attempt": attempt,
                        "error": str(integrity_error.orig),
                    }
                },
            )
        except Exception:
            db.rollback()
            raise
