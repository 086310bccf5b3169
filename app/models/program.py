"""
Program model - a user-submitted Pocket Code project.
"""

from datetime import datetime

from .database import db, new_guid


class Program(db.Model):
    """Uploaded project owned by a user."""

    __tablename__ = 'programs'

    id = db.Column(db.String(36), primary_key=True, default=new_guid)
    name = db.Column(db.String(300), nullable=False, index=True)
    description = db.Column(db.Text, default='', nullable=False)
    user_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False, index=True)
    filesize = db.Column(db.Integer, default=0, nullable=False)
    uploaded_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    user = db.relationship('User', back_populates='programs')
    likes = db.relationship(
        'ProgramLike',
        back_populates='program',
        cascade='all, delete-orphan',
        lazy='dynamic',
    )
    scratch_remix_parent_relations = db.relationship(
        'ScratchProgramRemixRelation',
        back_populates='catrobat_child',
        cascade='all, delete-orphan',
        lazy='dynamic',
    )

    def __str__(self):
        return self.name

    def to_dict(self):
        """Serialize program for API responses."""
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'author': self.user.username if self.user else None,
            'filesize': self.filesize,
            'uploaded_at': self.uploaded_at.isoformat() if self.uploaded_at else None,
        }
