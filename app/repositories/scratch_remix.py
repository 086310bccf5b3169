"""
Scratch remix relation queries.
"""

import logging

from app.models import db, ScratchProgramRemixRelation

logger = logging.getLogger(__name__)


class ScratchProgramRemixRepository:
    """Set-membership queries over the scratch_program_remix_relation table."""

    @staticmethod
    def get_direct_edge_relations_of_program_ids(program_ids):
        """Return the distinct relations whose child is one of program_ids."""
        program_ids = list(program_ids)
        if not program_ids:
            return []
        return (
            ScratchProgramRemixRelation.query
            .filter(ScratchProgramRemixRelation.catrobat_child_id.in_(program_ids))
            .distinct()
            .all()
        )

    @staticmethod
    def remove_parent_relations(program_id, scratch_parent_program_ids):
        """Delete the edges from the given Scratch parents to program_id.

        Returns the number of deleted rows.
        """
        scratch_parent_program_ids = list(scratch_parent_program_ids)
        if not scratch_parent_program_ids:
            return 0
        deleted = (
            ScratchProgramRemixRelation.query
            .filter(ScratchProgramRemixRelation.scratch_parent_id.in_(scratch_parent_program_ids))
            .filter(ScratchProgramRemixRelation.catrobat_child_id == program_id)
            .delete(synchronize_session='fetch')
        )
        db.session.commit()
        return deleted

    @staticmethod
    def remove_all_relations():
        """Delete every remix relation. Returns the number of deleted rows."""
        deleted = ScratchProgramRemixRelation.query.delete(synchronize_session='fetch')
        db.session.commit()
        logger.info("Removed all %d scratch remix relations", deleted)
        return deleted

    @staticmethod
    def add_relation(scratch_parent_id, program):
        """Record that program was remixed from a Scratch project (idempotent)."""
        existing = db.session.get(ScratchProgramRemixRelation, (scratch_parent_id, program.id))
        if existing:
            return existing
        relation = ScratchProgramRemixRelation(scratch_parent_id, program)
        db.session.add(relation)
        db.session.commit()
        return relation
