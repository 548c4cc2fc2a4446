"""
Interaction Service - history of AI queries and reading activity
"""

from datetime import timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from synapse_reader.config import settings
from synapse_reader.models.document import Document
from synapse_reader.models.interaction import Interaction
from synapse_reader.utils.clock import utcnow


class InteractionService:
    """Save and query interactions"""

    def __init__(self, db: Session):
        self.db = db

    def save(
        self,
        document_id: str,
        action_type: str,
        selected_text: str,
        response: str,
        page_context: Optional[str] = None,
        page_number: Optional[int] = None,
        scroll_position: Optional[float] = None,
    ) -> Interaction:
        interaction = Interaction(
            document_id=document_id,
            action_type=action_type,
            selected_text=selected_text,
            page_context=page_context,
            response=response,
            page_number=page_number,
            scroll_position=scroll_position,
        )
        self.db.add(interaction)
        self.db.commit()
        self.db.refresh(interaction)
        return interaction

    def get_by_id(self, interaction_id: str) -> Optional[Interaction]:
        return self.db.query(Interaction).filter(Interaction.id == interaction_id).first()

    def by_document(self, document_id: str) -> List[Interaction]:
        """Interactions of a document, newest first"""
        return (
            self.db.query(Interaction)
            .filter(Interaction.document_id == document_id)
            .order_by(Interaction.created_at.desc())
            .all()
        )

    def recent(self, limit: int = None) -> List[Dict[str, Any]]:
        """Latest interactions across all documents, with the document filename"""
        limit = limit or settings.RECENT_INTERACTIONS_LIMIT
        rows = (
            self.db.query(Interaction, Document.filename)
            .join(Document, Interaction.document_id == Document.id)
            .order_by(Interaction.created_at.desc())
            .limit(limit)
            .all()
        )
        return [_with_filename(interaction, filename) for interaction, filename in rows]

    def activity_by_day(self, days: int = None) -> List[Dict[str, Any]]:
        """
        Per-day interaction counts over the last `days` days

        Returns:
            List of {date: "YYYY-MM-DD", count, explain_count, summarize_count,
            define_count}, oldest day first; days without activity are omitted
        """
        days = days or settings.ACTIVITY_DAYS
        since = utcnow() - timedelta(days=days)
        day = func.date(Interaction.created_at)

        rows = (
            self.db.query(day.label("date"), Interaction.action_type, func.count(Interaction.id))
            .filter(Interaction.created_at >= since)
            .group_by(day, Interaction.action_type)
            .order_by(day)
            .all()
        )

        activity: Dict[str, Dict[str, Any]] = {}
        for date, action_type, count in rows:
            entry = activity.setdefault(date, {
                "date": date,
                "count": 0,
                "explain_count": 0,
                "summarize_count": 0,
                "define_count": 0,
            })
            entry["count"] += count
            key = f"{action_type}_count"
            if key in entry:
                entry[key] += count
        return list(activity.values())

    def document_stats(self) -> List[Dict[str, Any]]:
        """Per-document interaction totals, most active first"""
        rows = (
            self.db.query(
                Document.id,
                Document.filename,
                func.count(Interaction.id).label("interaction_count"),
                func.max(Interaction.created_at).label("last_interaction"),
            )
            .join(Interaction, Interaction.document_id == Document.id)
            .group_by(Document.id, Document.filename)
            .order_by(func.count(Interaction.id).desc())
            .all()
        )
        return [
            {
                "document_id": row.id,
                "filename": row.filename,
                "interaction_count": row.interaction_count,
                "last_interaction": row.last_interaction,
            }
            for row in rows
        ]


def _with_filename(interaction: Interaction, filename: str) -> Dict[str, Any]:
    return {
        "id": interaction.id,
        "document_id": interaction.document_id,
        "action_type": interaction.action_type,
        "selected_text": interaction.selected_text,
        "page_context": interaction.page_context,
        "response": interaction.response,
        "page_number": interaction.page_number,
        "scroll_position": interaction.scroll_position,
        "created_at": interaction.created_at,
        "filename": filename,
    }
