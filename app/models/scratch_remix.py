"""
Scratch remix relation - records that a local program was derived from a
program on the Scratch website.
"""

from .database import db


class ScratchProgramRemixRelation(db.Model):
    """Directed edge scratch_parent_id -> catrobat_child_id."""

    __tablename__ = 'scratch_program_remix_relation'

    scratch_parent_id = db.Column(db.Integer, primary_key=True)
    catrobat_child_id = db.Column(
        db.String(36),
        db.ForeignKey('programs.id', ondelete='CASCADE'),
        primary_key=True,
        index=True,
    )

    catrobat_child = db.relationship('Program', back_populates='scratch_remix_parent_relations')

    def __init__(self, scratch_parent_id, catrobat_child):
        super().__init__(
            scratch_parent_id=scratch_parent_id,
            catrobat_child=catrobat_child,
            catrobat_child_id=catrobat_child.id,
        )

    def __str__(self):
        return f'(#{self.scratch_parent_id}, #{self.catrobat_child_id})'

    def to_dict(self):
        return {
            'scratch_parent_id': self.scratch_parent_id,
            'catrobat_child_id': self.catrobat_child_id,
        }
