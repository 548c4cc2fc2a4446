"""
Integration tests for the library endpoints

Tests:
- Documents and their PDF file
- Interactions, activity and stats
- Highlights and bookmarks
- Conversations and sources
- Workspaces
- Reviews
- Concepts and search
- Term detection
"""

import pytest

API = "/api/v1"


@pytest.mark.integration
class TestDocumentsAPI:
    """Integration tests for /documents"""

    def test_open_document_get_or_create(self, client):
        payload = {"filename": "paper.pdf", "filepath": "/tmp/paper.pdf", "total_pages": 8}

        first = client.post(f"{API}/documents", json=payload)
        second = client.post(f"{API}/documents", json=payload)

        assert first.status_code == 200
        assert first.json()["id"] == second.json()["id"]
        assert first.json()["total_pages"] == 8

    def test_get_update_and_recent(self, client, test_document):
        response = client.patch(f"{API}/documents/{test_document.id}", json={"scroll_position": 0.42})

        assert response.status_code == 200
        assert response.json()["scroll_position"] == pytest.approx(0.42)
        assert client.get(f"{API}/documents/{test_document.id}").json()["filename"] == "neural_networks.pdf"
        assert [d["id"] for d in client.get(f"{API}/documents/recent").json()] == [test_document.id]

    def test_unknown_document(self, client):
        assert client.get(f"{API}/documents/missing").status_code == 404
        assert client.patch(f"{API}/documents/missing", json={"total_pages": 3}).status_code == 404

    def test_read_file(self, client, tmp_path):
        pdf = tmp_path / "notes.pdf"
        pdf.write_bytes(b"%PDF-1.4 test")
        document = client.post(f"{API}/documents", json={"filename": "notes.pdf", "filepath": str(pdf)}).json()

        response = client.get(f"{API}/documents/{document['id']}/file")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.content == b"%PDF-1.4 test"

    def test_read_missing_file(self, client, test_document):
        response = client.get(f"{API}/documents/{test_document.id}/file")

        assert response.status_code == 404


@pytest.mark.integration
class TestInteractionsAPI:
    """Integration tests for /interactions"""

    def test_save_and_list(self, client, test_document):
        response = client.post(f"{API}/interactions", json={
            "document_id": test_document.id,
            "action_type": "summarize",
            "selected_text": "The abstract",
            "response": "It is about neural networks.",
            "page_number": 1,
        })

        assert response.status_code == 201
        listed = client.get(f"{API}/interactions/document/{test_document.id}").json()
        assert [i["id"] for i in listed] == [response.json()["id"]]
        recent = client.get(f"{API}/interactions/recent").json()
        assert recent[0]["filename"] == "neural_networks.pdf"

    def test_rejects_non_history_action(self, client, test_document):
        response = client.post(f"{API}/interactions", json={
            "document_id": test_document.id,
            "action_type": "parse_equation",
            "selected_text": "E = mc^2",
            "response": "{}",
        })

        assert response.status_code == 422

    def test_activity_and_stats(self, client, test_interaction):
        activity = client.get(f"{API}/interactions/activity").json()
        stats = client.get(f"{API}/interactions/stats").json()

        assert activity[0]["count"] == 1
        assert activity[0]["explain_count"] == 1
        assert stats[0]["document_id"] == test_interaction.document_id
        assert stats[0]["interaction_count"] == 1


@pytest.mark.integration
class TestAnnotationsAPI:
    """Integration tests for /highlights and /bookmarks"""

    def _highlight(self, client, document, **overrides):
        payload = {
            "document_id": document.id,
            "page_number": 2,
            "start_offset": 10,
            "end_offset": 30,
            "selected_text": "gradient descent",
        }
        payload.update(overrides)
        return client.post(f"{API}/highlights", json=payload)

    def test_highlight_lifecycle(self, client, test_document):
        created = self._highlight(client, test_document)
        assert created.status_code == 201
        highlight_id = created.json()["id"]

        updated = client.patch(f"{API}/highlights/{highlight_id}", json={"color": "pink", "note": "key idea"})
        assert updated.json()["color"] == "pink"

        notes = client.get(f"{API}/highlights/document/{test_document.id}/notes").json()
        assert [h["id"] for h in notes] == [highlight_id]
        page = client.get(f"{API}/highlights/document/{test_document.id}/page/2").json()
        assert len(page) == 1

        assert client.delete(f"{API}/highlights/{highlight_id}").status_code == 204
        assert client.delete(f"{API}/highlights/{highlight_id}").status_code == 404

    def test_highlight_validation(self, client, test_document):
        assert self._highlight(client, test_document, color="orange").status_code == 422
        assert self._highlight(client, test_document, page_number=0).status_code == 422

    def test_update_unknown_highlight(self, client):
        assert client.patch(f"{API}/highlights/missing", json={"note": "x"}).status_code == 404

    def test_bookmark_toggle(self, client, test_document):
        payload = {"document_id": test_document.id, "page_number": 5, "label": "Methods"}

        added = client.post(f"{API}/bookmarks/toggle", json=payload).json()
        assert added["bookmarked"] is True
        assert added["bookmark"]["label"] == "Methods"
        assert client.get(f"{API}/bookmarks/document/{test_document.id}/page/5").json() == {"bookmarked": True}

        removed = client.post(f"{API}/bookmarks/toggle", json=payload).json()
        assert removed == {"bookmarked": False, "bookmark": None}
        assert client.get(f"{API}/bookmarks/document/{test_document.id}").json() == []

    def test_bookmark_label_and_delete(self, client, test_document):
        bookmark = client.post(
            f"{API}/bookmarks/toggle", json={"document_id": test_document.id, "page_number": 1}
        ).json()["bookmark"]

        assert client.patch(f"{API}/bookmarks/{bookmark['id']}", json={"label": "Intro"}).status_code == 204
        assert client.get(f"{API}/bookmarks/document/{test_document.id}").json()[0]["label"] == "Intro"
        assert client.delete(f"{API}/bookmarks/{bookmark['id']}").status_code == 204
        assert client.delete(f"{API}/bookmarks/{bookmark['id']}").status_code == 404


@pytest.mark.integration
class TestConversationsAPI:
    """Integration tests for /conversations"""

    def _create(self, client, document):
        response = client.post(f"{API}/conversations", json={
            "document_id": document.id,
            "selected_text": "overfitting",
            "page_number": 4,
        })
        assert response.status_code == 201
        return response.json()

    def test_messages_and_summary(self, client, test_document):
        conversation = self._create(client, test_document)
        url = f"{API}/conversations/{conversation['id']}"

        client.post(f"{url}/messages", json={"role": "user", "content": "What is overfitting?"})
        client.post(f"{url}/messages", json={"role": "assistant", "content": "Memorizing noise."})

        detail = client.get(url).json()
        assert [m["role"] for m in detail["messages"]] == ["user", "assistant"]
        summaries = client.get(f"{API}/conversations/document/{test_document.id}").json()
        assert summaries[0]["message_count"] == 2
        assert summaries[0]["last_message_preview"] == "Memorizing noise."

    def test_message_to_unknown_conversation(self, client):
        response = client.post(f"{API}/conversations/missing/messages", json={"role": "user", "content": "hi"})

        assert response.status_code == 404

    def test_title_and_delete(self, client, test_document):
        conversation = self._create(client, test_document)
        url = f"{API}/conversations/{conversation['id']}"

        assert client.patch(f"{url}/title", json={"title": "Regularization"}).status_code == 204
        assert client.get(url).json()["title"] == "Regularization"
        assert client.delete(url).status_code == 204
        assert client.get(url).status_code == 404

    def test_sources(self, client, test_document, second_document):
        conversation = self._create(client, test_document)
        url = f"{API}/conversations/{conversation['id']}/sources"

        source = client.post(url, json={"document_id": second_document.id, "quoted_text": "Heat flows.", "page_number": 2})
        assert source.status_code == 201
        assert client.get(url).json()[0]["filename"] == "thermodynamics.pdf"

        removed = client.delete(f"{url}/document/{second_document.id}").json()
        assert removed == {"success": True}
        assert client.get(url).json() == []


@pytest.mark.integration
class TestWorkspacesAPI:
    """Integration tests for /workspaces"""

    def test_workspace_documents(self, client, test_document, second_document):
        workspace = client.post(f"{API}/workspaces", json={"name": "Thesis"}).json()
        url = f"{API}/workspaces/{workspace['id']}"

        assert client.post(f"{url}/documents", json={"document_id": test_document.id}).json() == {"success": True}
        assert client.post(f"{url}/documents", json={"document_id": second_document.id}).json() == {"success": True}
        assert client.post(f"{url}/documents", json={"document_id": test_document.id}).json() == {"success": False}

        client.put(f"{url}/documents/{test_document.id}/position", json={"position": 9})
        assert [d["id"] for d in client.get(f"{url}/documents").json()] == [second_document.id, test_document.id]
        assert client.get(f"{API}/workspaces").json()[0]["document_count"] == 2
        assert client.get(f"{url}/documents/{test_document.id}").json() == {"success": True}

    def test_workspace_delete_keeps_conversations(self, client, test_document):
        workspace = client.post(f"{API}/workspaces", json={"name": "Reading group"}).json()
        conversation = client.post(f"{API}/conversations", json={
            "document_id": test_document.id, "selected_text": "dropout",
        }).json()

        assigned = client.put(
            f"{API}/conversations/{conversation['id']}/workspace", json={"workspace_id": workspace["id"]}
        )
        assert assigned.status_code == 204
        assert len(client.get(f"{API}/workspaces/{workspace['id']}/conversations").json()) == 1

        assert client.delete(f"{API}/workspaces/{workspace['id']}").status_code == 204
        assert client.get(f"{API}/workspaces/{workspace['id']}").status_code == 404
        assert client.get(f"{API}/conversations/{conversation['id']}").json()["workspace_id"] is None

    def test_update_unknown_workspace(self, client):
        assert client.patch(f"{API}/workspaces/missing", json={"name": "x"}).status_code == 404


@pytest.mark.integration
class TestReviewsAPI:
    """Integration tests for /reviews"""

    def test_from_interaction_and_review(self, client, test_interaction):
        card = client.post(f"{API}/reviews/from-interaction", json={"interaction_id": test_interaction.id})
        assert card.status_code == 201
        card_id = card.json()["id"]

        assert client.get(f"{API}/reviews/next").json() == {"card": None}
        assert client.get(f"{API}/reviews/due-count").json() == {"count": 0}

        reviewed = client.post(f"{API}/reviews/{card_id}/review", json={"quality": 5}).json()
        assert reviewed["review_count"] == 1
        assert reviewed["ease_factor"] == pytest.approx(2.6)

    def test_invalid_quality(self, client, test_interaction):
        card = client.post(f"{API}/reviews", json={
            "interaction_id": test_interaction.id, "question": "Q?", "answer": "A.",
        }).json()

        response = client.post(f"{API}/reviews/{card['id']}/review", json={"quality": 7})

        assert response.status_code == 400

    def test_unknown_card_and_interaction(self, client):
        assert client.post(f"{API}/reviews/missing/review", json={"quality": 3}).status_code == 404
        assert client.post(f"{API}/reviews/from-interaction", json={"interaction_id": "missing"}).status_code == 404


@pytest.mark.integration
class TestConceptsAndSearchAPI:
    """Integration tests for /concepts and /search"""

    def test_save_concepts_and_graph(self, client, test_interaction):
        saved = client.post(f"{API}/concepts", json={
            "concept_names": ["Gradient", "Chain Rule", "gradient"],
            "interaction_id": test_interaction.id,
            "document_id": test_interaction.document_id,
        })

        assert sorted(c["name"] for c in saved.json()) == ["Chain Rule", "Gradient"]
        graph = client.get(f"{API}/concepts/graph").json()
        assert len(graph["nodes"]) == 2
        assert graph["links"][0]["weight"] == 1

        concept_id = saved.json()[0]["id"]
        documents = client.get(f"{API}/concepts/{concept_id}/documents").json()
        assert documents[0]["filename"] == "neural_networks.pdf"

    def test_extract_uses_current_provider(self, client, fake_provider):
        fake_provider.chunks = ['Concepts: ["Entropy", "Heat"]']

        response = client.post(f"{API}/concepts/extract", json={"text": "entropy", "response": "Disorder."})

        assert response.json() == ["Entropy", "Heat"]

    def test_search_all(self, client, test_interaction):
        results = client.get(f"{API}/search", params={"q": "backprop"}).json()

        assert results["documents"] == []
        assert results["interactions"][0]["id"] == test_interaction.id
        assert "<mark>" in results["interactions"][0]["snippet"]

    def test_search_documents(self, client, test_document):
        results = client.get(f"{API}/search/documents", params={"q": "neural"}).json()

        assert [r["id"] for r in results] == [test_document.id]


@pytest.mark.integration
class TestTermsAPI:
    """Integration tests for /terms"""

    def test_detect(self, client):
        result = client.post(f"{API}/terms/detect", json={"text": "NaCl"}).json()

        assert result["is_technical"] is True
        assert result["reason"] == "pattern_match"

    def test_deep_dive(self, client):
        assert client.post(f"{API}/terms/deep-dive", json={"text": "the"}).json() == {"show_deep_dive": False}
        assert client.post(f"{API}/terms/deep-dive", json={"text": "photosynthesis"}).json() == {"show_deep_dive": True}

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("$E = mc^2$", "equation"),
            ("```python\nprint(1)\n```", "code"),
            ("eigenvalue", "term"),
            ("once upon a time", "general"),
        ],
    )
    def test_content_type(self, client, text, expected):
        response = client.post(f"{API}/terms/content-type", json={"text": text})

        assert response.status_code == 200
        assert response.json() == {"content_type": expected}

    def test_content(self, client):
        text = "The gradient $\\nabla f$ in code:\n```python\ngrad(f)\n```"
        result = client.post(f"{API}/terms/content", json={"text": text}).json()

        assert result["equations"] == [{"latex": "\\nabla f", "display_mode": False, "start": 13, "end": 23}]
        assert result["code_blocks"][0]["language"] == "python"
        assert result["code_blocks"][0]["code"] == "grad(f)"
        assert [t["term"] for t in result["technical_terms"]] == ["gradient"]
