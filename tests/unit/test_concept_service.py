"""
Unit tests for ConceptService

Tests:
- Name normalization and case-insensitive uniqueness
- Idempotent interaction links, counted document links
- Concept graph nodes and co-occurrence links
- Extraction through a provider
"""

import pytest

from synapse_reader.core.exceptions import ProviderError
from synapse_reader.models.concept import Concept, InteractionConcept, DocumentConcept
from synapse_reader.models.interaction import Interaction
from synapse_reader.services.concept_service import (
    ConceptService,
    normalize_concept_names,
    parse_concept_reply,
)


@pytest.mark.unit
class TestConceptHelpers:

    def test_normalize_trims_drops_blanks_and_dedupes(self):
        names = ["  Entropy ", "", "entropy", "Heat", "   ", "HEAT", "Work"]
        assert normalize_concept_names(names) == ["Entropy", "Heat", "Work"]

    def test_parse_reply_with_surrounding_text(self):
        reply = 'Sure! Here are the concepts: ["gradient", "loss", ""] hope this helps'
        assert parse_concept_reply(reply) == ["gradient", "loss"]

    def test_parse_reply_without_array(self):
        assert parse_concept_reply("I could not find any concepts.") == []

    def test_parse_reply_invalid_json(self):
        assert parse_concept_reply("[gradient, loss]") == []


@pytest.mark.unit
class TestConceptService:
    """Test ConceptService persistence and graph"""

    def test_save_creates_concepts_and_links(self, db_session, test_document, test_interaction):
        concepts = ConceptService(db_session).save_for_interaction(
            ["Backpropagation", "Chain Rule"], test_interaction.id, test_document.id
        )

        assert [c.name for c in concepts] == ["Backpropagation", "Chain Rule"]
        assert db_session.query(InteractionConcept).count() == 2
        assert db_session.query(DocumentConcept).count() == 2

    def test_concepts_unique_case_insensitively(self, db_session, test_document, test_interaction):
        service = ConceptService(db_session)
        service.save_for_interaction(["Gradient"], test_interaction.id, test_document.id)
        service.save_for_interaction(["gradient"], test_interaction.id, test_document.id)

        assert db_session.query(Concept).count() == 1
        assert db_session.query(Concept).one().name == "Gradient"

    def test_interaction_link_idempotent_and_occurrences_counted(self, db_session, test_document, test_interaction):
        service = ConceptService(db_session)
        service.save_for_interaction(["Gradient"], test_interaction.id, test_document.id)
        service.save_for_interaction(["Gradient"], test_interaction.id, test_document.id)

        assert db_session.query(InteractionConcept).count() == 1
        assert db_session.query(DocumentConcept).one().occurrence_count == 2

    def test_graph(self, db_session, test_document, second_document, test_interaction):
        other = Interaction(
            document_id=second_document.id,
            action_type="define",
            selected_text="gradient",
            response="slope",
        )
        db_session.add(other)
        db_session.commit()

        service = ConceptService(db_session)
        service.save_for_interaction(["Gradient", "Loss", "Chain Rule"], test_interaction.id, test_document.id)
        service.save_for_interaction(["Gradient", "Loss"], other.id, second_document.id)

        graph = service.graph()

        nodes = {n["name"]: n for n in graph["nodes"]}
        assert nodes["Gradient"]["total_occurrences"] == 2
        assert nodes["Gradient"]["document_count"] == 2
        assert nodes["Chain Rule"]["document_count"] == 1

        ids = {n["name"]: n["id"] for n in graph["nodes"]}
        weights = {
            frozenset((link["source"], link["target"])): link["weight"]
            for link in graph["links"]
        }
        assert weights[frozenset((ids["Gradient"], ids["Loss"]))] == 2
        assert weights[frozenset((ids["Gradient"], ids["Chain Rule"]))] == 1
        assert len(graph["links"]) == 3

    def test_graph_empty(self, db_session):
        assert ConceptService(db_session).graph() == {"nodes": [], "links": []}

    def test_for_document_and_documents_for_concept(self, db_session, test_document, test_interaction):
        service = ConceptService(db_session)
        service.save_for_interaction(["Gradient", "Loss"], test_interaction.id, test_document.id)
        service.save_for_interaction(["Gradient"], test_interaction.id, test_document.id)

        concepts = service.for_document(test_document.id)
        assert [c["name"] for c in concepts] == ["Gradient", "Loss"]
        assert concepts[0]["occurrence_count"] == 2

        documents = service.documents_for_concept(concepts[0]["id"])
        assert documents == [{"id": test_document.id, "filename": "neural_networks.pdf", "occurrence_count": 2}]


@pytest.mark.unit
class TestConceptExtraction:
    """Test ConceptService.extract"""

    @pytest.mark.asyncio
    async def test_extract(self, make_provider):
        provider = make_provider(chunks=['["Entropy", ', '"Heat"]'])

        result = await ConceptService.extract(provider, "entropy", "Entropy measures disorder.")

        assert result == ["Entropy", "Heat"]
        request = provider.requests[0]
        assert request.raw_prompt is True
        assert "Extract 3-5 key concepts" in request.text
        assert "Entropy measures disorder." in request.text

    @pytest.mark.asyncio
    async def test_extract_truncates_response(self, make_provider):
        provider = make_provider(chunks=["[]"])

        await ConceptService.extract(provider, "t", "x" * 600 + "TAIL")

        assert "TAIL" not in provider.requests[0].text

    @pytest.mark.asyncio
    async def test_extract_without_provider(self, make_provider):
        assert await ConceptService.extract(None, "t", "r") == []

    @pytest.mark.asyncio
    async def test_extract_unavailable_provider(self, make_provider):
        provider = make_provider(available=False)

        assert await ConceptService.extract(provider, "t", "r") == []
        assert provider.requests == []

    @pytest.mark.asyncio
    async def test_extract_provider_failure(self, make_provider):
        provider = make_provider(chunks=[], error=ProviderError("boom", provider_id="fake", status_code=400))
        assert await ConceptService.extract(provider, "t", "r") == []
