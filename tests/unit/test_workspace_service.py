"""
Unit tests for WorkspaceService
"""

import pytest

from synapse_reader.services.conversation_service import ConversationService
from synapse_reader.services.workspace_service import WorkspaceService


@pytest.fixture
def workspace(db_session):
    return WorkspaceService(db_session).create("Thesis", "Background reading")


@pytest.mark.unit
class TestWorkspaceDocuments:
    """Test workspace membership"""

    def test_positions_append(self, db_session, workspace, test_document, second_document):
        service = WorkspaceService(db_session)

        assert service.add_document(workspace.id, test_document.id) is True
        assert service.add_document(workspace.id, second_document.id) is True

        assert [d.id for d in service.documents(workspace.id)] == [test_document.id, second_document.id]

    def test_duplicate_add(self, db_session, workspace, test_document):
        service = WorkspaceService(db_session)
        service.add_document(workspace.id, test_document.id)

        assert service.add_document(workspace.id, test_document.id) is False
        assert len(service.documents(workspace.id)) == 1

    def test_membership_bumps_updated_at(self, db_session, workspace, test_document):
        service = WorkspaceService(db_session)
        before = workspace.updated_at

        service.add_document(workspace.id, test_document.id)

        db_session.refresh(workspace)
        assert workspace.updated_at >= before

    def test_reorder(self, db_session, workspace, test_document, second_document):
        service = WorkspaceService(db_session)
        service.add_document(workspace.id, test_document.id)
        service.add_document(workspace.id, second_document.id)

        assert service.reorder_document(workspace.id, test_document.id, 5) is True

        assert [d.id for d in service.documents(workspace.id)] == [second_document.id, test_document.id]
        assert service.reorder_document(workspace.id, "missing", 0) is False

    def test_remove_document(self, db_session, workspace, test_document):
        service = WorkspaceService(db_session)
        service.add_document(workspace.id, test_document.id)

        assert service.remove_document(workspace.id, test_document.id) is True
        assert service.is_document_in_workspace(workspace.id, test_document.id) is False
        assert service.remove_document(workspace.id, test_document.id) is False

    def test_list_counts_and_for_document(self, db_session, workspace, test_document, second_document):
        service = WorkspaceService(db_session)
        other = service.create("Empty")
        service.add_document(workspace.id, test_document.id)
        service.add_document(workspace.id, second_document.id)

        counts = {w["id"]: w["document_count"] for w in service.list()}

        assert counts == {workspace.id: 2, other.id: 0}
        assert [w.id for w in service.for_document(test_document.id)] == [workspace.id]

    def test_update(self, db_session, workspace):
        service = WorkspaceService(db_session)

        updated = service.update(workspace.id, name="Dissertation")

        assert updated.name == "Dissertation"
        assert updated.description == "Background reading"
        assert service.update("missing", name="x") is None


@pytest.mark.unit
class TestWorkspaceConversations:
    """Test conversation sources and workspace assignment"""

    @pytest.fixture
    def conversation(self, db_session, test_document):
        return ConversationService(db_session).create(document_id=test_document.id, selected_text="entropy")

    def test_sources(self, db_session, conversation, second_document):
        service = WorkspaceService(db_session)
        source = service.add_source(conversation.id, second_document.id, "Entropy never decreases.", 7)

        sources = service.sources(conversation.id)

        assert len(sources) == 1
        assert sources[0]["id"] == source.id
        assert sources[0]["filename"] == "thermodynamics.pdf"
        assert sources[0]["page_number"] == 7

    def test_remove_sources(self, db_session, conversation, test_document, second_document):
        service = WorkspaceService(db_session)
        first = service.add_source(conversation.id, second_document.id, "a")
        service.add_source(conversation.id, second_document.id, "b")
        service.add_source(conversation.id, test_document.id, "c")

        assert service.remove_source(first.id) is True
        assert service.remove_source(first.id) is False
        assert service.remove_sources_by_document(conversation.id, second_document.id) is True

        assert [s["quoted_text"] for s in service.sources(conversation.id)] == ["c"]

    def test_delete_detaches_conversations(self, db_session, workspace, conversation, test_document):
        service = WorkspaceService(db_session)
        service.add_document(workspace.id, test_document.id)
        assert service.set_conversation_workspace(conversation.id, workspace.id) is True
        assert [c.id for c in service.conversations(workspace.id)] == [conversation.id]

        assert service.delete(workspace.id) is True

        db_session.refresh(conversation)
        assert conversation.workspace_id is None
        assert service.get(workspace.id) is None
        assert service.is_document_in_workspace(workspace.id, test_document.id) is False
        assert service.delete(workspace.id) is False
