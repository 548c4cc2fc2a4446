"""
Concept Service - key terms extracted from interactions and the concept graph
"""

import json
import logging
import re
from itertools import combinations
from typing import Any, Dict, Iterable, List, Optional

import httpx
from sqlalchemy import func
from sqlalchemy.orm import Session

from synapse_reader.core.exceptions import ProviderError
from synapse_reader.models.concept import Concept, DocumentConcept, InteractionConcept
from synapse_reader.models.document import Document
from synapse_reader.providers.base import AIProvider, CompletionRequest

logger = logging.getLogger(__name__)

# First JSON array in a free-form model reply
JSON_ARRAY_PATTERN = re.compile(r"\[[\s\S]*?\]")


def normalize_concept_names(names: Iterable[str]) -> List[str]:
    """Trim, drop blanks and dedupe case-insensitively, keeping first spelling"""
    seen = set()
    result = []
    for name in names:
        if not isinstance(name, str):
            continue
        cleaned = name.strip()
        if not cleaned or cleaned.lower() in seen:
            continue
        seen.add(cleaned.lower())
        result.append(cleaned)
    return result


def parse_concept_reply(reply: str) -> List[str]:
    """Concept names from a model reply; [] when it holds no JSON array of strings"""
    match = JSON_ARRAY_PATTERN.search(reply)
    if not match:
        return []
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError:
        logger.warning(f"Concept reply is not valid JSON: {match.group(0)[:80]}")
        return []
    return [c for c in parsed if isinstance(c, str) and c]


class ConceptService:
    """Persist concepts and build the cross-document concept graph"""

    def __init__(self, db: Session):
        self.db = db

    def _get_or_create(self, name: str) -> Concept:
        concept = (
            self.db.query(Concept)
            .filter(func.lower(Concept.name) == name.lower())
            .first()
        )
        if concept is None:
            concept = Concept(name=name)
            self.db.add(concept)
            self.db.flush()
        return concept

    def save_for_interaction(self, names: Iterable[str], interaction_id: str, document_id: str) -> List[Concept]:
        """
        Link concepts to an interaction and its document

        Interaction links are idempotent; each call bumps the document's
        occurrence_count for every concept.

        Args:
            names: Concept names (trimmed, blanks dropped, deduplicated)
            interaction_id: Interaction the concepts came from
            document_id: Document of that interaction

        Returns:
            List[Concept]: Concepts linked by this call
        """
        concepts = []
        for name in normalize_concept_names(names):
            concept = self._get_or_create(name)

            link = self.db.get(InteractionConcept, (interaction_id, concept.id))
            if link is None:
                self.db.add(InteractionConcept(interaction_id=interaction_id, concept_id=concept.id))

            doc_link = self.db.get(DocumentConcept, (document_id, concept.id))
            if doc_link is None:
                self.db.add(DocumentConcept(document_id=document_id, concept_id=concept.id, occurrence_count=1))
            else:
                doc_link.occurrence_count += 1

            concepts.append(concept)

        self.db.commit()
        return concepts

    def graph(self) -> Dict[str, List[Dict[str, Any]]]:
        """
        Concept graph

        Returns:
            {"nodes": [{id, name, total_occurrences, document_count}],
             "links": [{source, target, weight}]} where a link joins two
            concepts that appear in the same interaction
        """
        node_rows = (
            self.db.query(
                Concept.id,
                Concept.name,
                func.coalesce(func.sum(DocumentConcept.occurrence_count), 0).label("total_occurrences"),
                func.count(DocumentConcept.document_id).label("document_count"),
            )
            .outerjoin(DocumentConcept, DocumentConcept.concept_id == Concept.id)
            .group_by(Concept.id, Concept.name)
            .order_by(Concept.name)
            .all()
        )
        nodes = [
            {
                "id": row.id,
                "name": row.name,
                "total_occurrences": row.total_occurrences,
                "document_count": row.document_count,
            }
            for row in node_rows
        ]

        by_interaction: Dict[str, List[str]] = {}
        for interaction_id, concept_id in self.db.query(
            InteractionConcept.interaction_id, InteractionConcept.concept_id
        ):
            by_interaction.setdefault(interaction_id, []).append(concept_id)

        weights: Dict[tuple, int] = {}
        for concept_ids in by_interaction.values():
            for pair in combinations(sorted(concept_ids), 2):
                weights[pair] = weights.get(pair, 0) + 1

        links = [
            {"source": source, "target": target, "weight": weight}
            for (source, target), weight in sorted(weights.items())
        ]
        return {"nodes": nodes, "links": links}

    def for_document(self, document_id: str) -> List[Dict[str, Any]]:
        """Concepts seen in a document, most frequent first"""
        rows = (
            self.db.query(Concept, DocumentConcept.occurrence_count)
            .join(DocumentConcept, DocumentConcept.concept_id == Concept.id)
            .filter(DocumentConcept.document_id == document_id)
            .order_by(DocumentConcept.occurrence_count.desc(), Concept.name)
            .all()
        )
        return [
            {
                "id": concept.id,
                "name": concept.name,
                "created_at": concept.created_at,
                "occurrence_count": count,
            }
            for concept, count in rows
        ]

    def documents_for_concept(self, concept_id: str) -> List[Dict[str, Any]]:
        """Documents a concept appears in, most frequent first"""
        rows = (
            self.db.query(Document.id, Document.filename, DocumentConcept.occurrence_count)
            .join(DocumentConcept, DocumentConcept.document_id == Document.id)
            .filter(DocumentConcept.concept_id == concept_id)
            .order_by(DocumentConcept.occurrence_count.desc())
            .all()
        )
        return [
            {"id": row.id, "filename": row.filename, "occurrence_count": row.occurrence_count}
            for row in rows
        ]

    @staticmethod
    async def extract(provider: Optional[AIProvider], text: str, response: str) -> List[str]:
        """
        Ask a provider for 3-5 key concepts of a selection and its AI answer

        Returns:
            List[str]: Concept names; [] when the provider is missing,
            unavailable, failing, or replies without a JSON array
        """
        if provider is None or not await provider.is_available():
            return []

        prompt = provider.prompt_builder.build_concept_extraction(text, response)
        try:
            reply = await provider.collect(CompletionRequest(text=prompt, raw_prompt=True))
        except (ProviderError, httpx.HTTPError) as e:
            logger.error(f"Error extracting concepts: {e}")
            return []

        return parse_concept_reply(reply)
