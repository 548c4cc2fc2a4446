"""
Unit tests for ConversationService
"""

import pytest

from synapse_reader.core.exceptions import NotFoundError
from synapse_reader.models.conversation import ConversationMessage
from synapse_reader.services.conversation_service import ConversationService


@pytest.fixture
def conversation(db_session, test_document):
    return ConversationService(db_session).create(
        document_id=test_document.id,
        selected_text="gradient descent",
        page_context="Gradient descent minimizes the loss.",
        page_number=2,
    )


@pytest.mark.unit
class TestConversationService:
    """Test ConversationService"""

    def test_create_blank_optional_fields(self, db_session, test_document):
        created = ConversationService(db_session).create(
            document_id=test_document.id,
            selected_text="entropy",
            highlight_id="",
            title="",
        )

        assert created.highlight_id is None
        assert created.title is None
        assert created.workspace_id is None
        assert created.created_at == created.updated_at

    def test_messages_keep_insertion_order(self, db_session, conversation):
        service = ConversationService(db_session)
        for i in range(5):
            service.add_message(conversation.id, "user" if i % 2 == 0 else "assistant", f"message {i}")

        assert [m.content for m in service.messages(conversation.id)] == [f"message {i}" for i in range(5)]

    def test_add_message_bumps_updated_at(self, db_session, conversation):
        before = conversation.updated_at

        message = ConversationService(db_session).add_message(conversation.id, "user", "why?", action_type="explain")

        db_session.refresh(conversation)
        assert message.action_type == "explain"
        assert conversation.updated_at >= before

    def test_add_message_unknown_conversation(self, db_session):
        with pytest.raises(NotFoundError):
            ConversationService(db_session).add_message("missing", "user", "hi")

    def test_get_with_messages(self, db_session, conversation):
        service = ConversationService(db_session)
        service.add_message(conversation.id, "user", "question")
        service.add_message(conversation.id, "assistant", "answer")

        result = service.get_with_messages(conversation.id)

        assert result["selected_text"] == "gradient descent"
        assert [m.role for m in result["messages"]] == ["user", "assistant"]
        assert service.get_with_messages("missing") is None

    def test_summaries(self, db_session, test_document, conversation):
        service = ConversationService(db_session)
        empty = service.create(document_id=test_document.id, selected_text="loss")
        service.add_message(conversation.id, "user", "first")
        service.add_message(conversation.id, "assistant", "latest reply")

        summaries = service.by_document(test_document.id)

        assert [s["id"] for s in summaries] == [conversation.id, empty.id]
        assert summaries[0]["message_count"] == 2
        assert summaries[0]["last_message_preview"] == "latest reply"
        assert summaries[1]["message_count"] == 0
        assert summaries[1]["last_message_preview"] is None

    def test_recent_limit(self, db_session, test_document, second_document):
        service = ConversationService(db_session)
        service.create(document_id=test_document.id, selected_text="a")
        service.create(document_id=second_document.id, selected_text="b")

        assert len(service.recent(limit=1)) == 1
        assert len(service.recent()) == 2

    def test_update_title(self, db_session, conversation):
        service = ConversationService(db_session)

        assert service.update_title(conversation.id, "Optimization") is True
        db_session.refresh(conversation)
        assert conversation.title == "Optimization"
        assert service.update_title("missing", "x") is False

    def test_delete_cascades_messages(self, db_session, conversation):
        service = ConversationService(db_session)
        service.add_message(conversation.id, "user", "question")

        assert service.delete(conversation.id) is True

        assert db_session.query(ConversationMessage).count() == 0
        assert service.get_by_id(conversation.id) is None
        assert service.delete(conversation.id) is False
