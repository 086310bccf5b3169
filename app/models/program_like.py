"""
Program Like model - a typed reaction of a user to a program.
"""

from datetime import datetime

from sqlalchemy import event
from sqlalchemy.orm import validates

from app.exceptions import InvalidLikeTypeError
from .database import db


class ProgramLike(db.Model):
    """One reaction of one user to one program.

    The primary key is (program_id, user_id, type), so a user may leave
    several different reactions on the same program but never the same one
    twice.
    """

    __tablename__ = 'program_like'

    TYPE_NONE = 0
    TYPE_THUMBS_UP = 1
    TYPE_SMILE = 2
    TYPE_LOVE = 3
    TYPE_WOW = 4

    ACTION_ADD = 'add'
    ACTION_REMOVE = 'remove'

    VALID_TYPES = (TYPE_THUMBS_UP, TYPE_SMILE, TYPE_LOVE, TYPE_WOW)

    TYPE_NAMES = {
        TYPE_THUMBS_UP: 'thumbs_up',
        TYPE_SMILE: 'smile',
        TYPE_LOVE: 'love',
        TYPE_WOW: 'wow',
    }

    program_id = db.Column(
        db.String(36),
        db.ForeignKey('programs.id', ondelete='CASCADE'),
        primary_key=True,
    )
    user_id = db.Column(
        db.String(36),
        db.ForeignKey('users.id', ondelete='CASCADE'),
        primary_key=True,
    )
    type = db.Column(db.Integer, primary_key=True, default=TYPE_THUMBS_UP)
    created_at = db.Column(db.DateTime, nullable=False)

    program = db.relationship('Program', back_populates='likes')
    user = db.relationship('User', backref=db.backref('likes', lazy='dynamic', cascade='all, delete-orphan'))

    def __init__(self, program, user, like_type):
        if not self.is_valid_type(like_type):
            raise InvalidLikeTypeError(like_type)
        super().__init__(program=program, user=user, program_id=program.id, user_id=user.id, type=like_type)

    def __str__(self):
        return str(self.program)

    @classmethod
    def is_valid_type(cls, like_type):
        # bool is an int subclass; True must not pass as TYPE_THUMBS_UP
        return type(like_type) is int and like_type in cls.VALID_TYPES

    @classmethod
    def type_from_name(cls, name):
        """Map a reaction name (or its numeric value) to the type constant."""
        if isinstance(name, int) and not isinstance(name, bool):
            return name if cls.is_valid_type(name) else None
        for value, type_name in cls.TYPE_NAMES.items():
            if type_name == name:
                return value
        return None

    @property
    def type_as_string(self):
        return self.TYPE_NAMES.get(self.type)

    @validates('created_at')
    def _validate_created_at(self, key, value):
        if self.created_at is not None and value != self.created_at:
            raise ValueError('created_at of a like cannot be changed once set')
        return value

    def to_dict(self):
        return {
            'program_id': self.program_id,
            'user_id': self.user_id,
            'type': self.type_as_string,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }


@event.listens_for(ProgramLike, 'before_insert')
def _set_created_at(mapper, connection, target):
    if target.created_at is None:
        target.created_at = datetime.utcnow()
