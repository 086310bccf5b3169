"""
Program like queries and mutations.
"""

import logging

from sqlalchemy import func

from app.exceptions import InvalidLikeTypeError
from app.models import db, ProgramLike

logger = logging.getLogger(__name__)


class ProgramLikeRepository:
    """Reads and writes program_like rows."""

    @staticmethod
    def add_like(program, user, like_type):
        """Add a reaction; adding an existing one is a no-op."""
        if not ProgramLike.is_valid_type(like_type):
            raise InvalidLikeTypeError(like_type)
        existing = db.session.get(ProgramLike, (program.id, user.id, like_type))
        if existing:
            return existing
        like = ProgramLike(program, user, like_type)
        db.session.add(like)
        db.session.commit()
        logger.info("User %s reacted %s to program %s", user.id, like.type_as_string, program.id)
        return like

    @staticmethod
    def remove_like(program, user, like_type):
        """Remove a reaction. Returns True when a row was deleted."""
        deleted = ProgramLike.query.filter_by(
            program_id=program.id, user_id=user.id, type=like_type
        ).delete(synchronize_session='fetch')
        db.session.commit()
        return deleted > 0

    @staticmethod
    def total_like_count(program_id, like_types=None):
        query = ProgramLike.query.filter_by(program_id=program_id)
        if like_types:
            query = query.filter(ProgramLike.type.in_(list(like_types)))
        return query.count()

    @staticmethod
    def like_type_counts(program_id):
        """Count reactions per type name; every known type is present."""
        rows = (
            db.session.query(ProgramLike.type, func.count())
            .filter(ProgramLike.program_id == program_id)
            .group_by(ProgramLike.type)
            .all()
        )
        counts = {name: 0 for name in ProgramLike.TYPE_NAMES.values()}
        for like_type, count in rows:
            name = ProgramLike.TYPE_NAMES.get(like_type)
            if name:
                counts[name] = count
        return counts

    @staticmethod
    def active_like_types(program_id, user_id):
        """Names of the reactions user_id currently has on program_id."""
        rows = (
            ProgramLike.query
            .filter_by(program_id=program_id, user_id=user_id)
            .order_by(ProgramLike.type.asc())
            .all()
        )
        return [like.type_as_string for like in rows]
