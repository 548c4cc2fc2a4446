"""
Concept Models - key terms extracted from interactions
"""

from sqlalchemy import Column, String, Integer, ForeignKey, DateTime, Index

from synapse_reader.database import Base
from synapse_reader.utils.clock import new_id, utcnow


class Concept(Base):
    """
    Concept model - a named key term (unique by name)

    Attributes:
        id: Concept UUID
        name: Term as first seen (lookups are case-insensitive)
        created_at: First extraction timestamp
    """

    __tablename__ = "concepts"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False, unique=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    def __repr__(self):
        return f"<Concept(id={self.id}, name={self.name})>"


class InteractionConcept(Base):
    """Junction: concepts mentioned in an interaction"""

    __tablename__ = "interaction_concepts"
    __table_args__ = (
        Index("idx_interaction_concepts_concept", "concept_id"),
    )

    interaction_id = Column(String(36), ForeignKey("interactions.id"), primary_key=True)
    concept_id = Column(String(36), ForeignKey("concepts.id"), primary_key=True)


class DocumentConcept(Base):
    """Junction: concepts seen in a document, with how often they came up"""

    __tablename__ = "document_concepts"
    __table_args__ = (
        Index("idx_document_concepts_concept", "concept_id"),
    )

    document_id = Column(String(36), ForeignKey("documents.id"), primary_key=True)
    concept_id = Column(String(36), ForeignKey("concepts.id"), primary_key=True)
    occurrence_count = Column(Integer, default=1)
