"""
Workspace API endpoints
Named groups of documents and conversations
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from synapse_reader.api.deps import get_db
from synapse_reader.schemas.document import DocumentResponse
from synapse_reader.schemas.workspace import (
    WorkspaceCreate,
    WorkspaceUpdate,
    WorkspaceResponse,
    WorkspaceWithCount,
    WorkspaceDocumentAdd,
    WorkspaceDocumentReorder,
    MembershipResult,
    WorkspaceConversation,
)
from synapse_reader.services.workspace_service import WorkspaceService
from synapse_reader.core.exceptions import http_404_not_found

router = APIRouter(prefix="/workspaces", tags=["workspaces"])


@router.post("", response_model=WorkspaceResponse, status_code=status.HTTP_201_CREATED)
async def create_workspace(
    workspace: WorkspaceCreate,
    db: Session = Depends(get_db)
):
    return WorkspaceService(db).create(workspace.name, workspace.description)


@router.get("", response_model=List[WorkspaceWithCount])
async def list_workspaces(db: Session = Depends(get_db)):
    """All workspaces with document counts, most recently updated first"""
    return WorkspaceService(db).list()


@router.get("/document/{document_id}", response_model=List[WorkspaceResponse])
async def workspaces_for_document(
    document_id: str,
    db: Session = Depends(get_db)
):
    return WorkspaceService(db).for_document(document_id)


@router.get("/{workspace_id}", response_model=WorkspaceResponse)
async def get_workspace(
    workspace_id: str,
    db: Session = Depends(get_db)
):
    workspace = WorkspaceService(db).get(workspace_id)
    if not workspace:
        raise http_404_not_found(f"Workspace {workspace_id} not found")
    return workspace


@router.patch("/{workspace_id}", response_model=WorkspaceResponse)
async def update_workspace(
    workspace_id: str,
    update: WorkspaceUpdate,
    db: Session = Depends(get_db)
):
    workspace = WorkspaceService(db).update(workspace_id, name=update.name, description=update.description)
    if not workspace:
        raise http_404_not_found(f"Workspace {workspace_id} not found")
    return workspace


@router.delete("/{workspace_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_workspace(
    workspace_id: str,
    db: Session = Depends(get_db)
):
    """
    Delete a workspace

    Document links go with it; its conversations are kept and detached.
    """
    if not WorkspaceService(db).delete(workspace_id):
        raise http_404_not_found(f"Workspace {workspace_id} not found")
    return None


@router.get("/{workspace_id}/documents", response_model=List[DocumentResponse])
async def workspace_documents(
    workspace_id: str,
    db: Session = Depends(get_db)
):
    """Documents of a workspace in position order"""
    return WorkspaceService(db).documents(workspace_id)


@router.post("/{workspace_id}/documents", response_model=MembershipResult)
async def add_document(
    workspace_id: str,
    payload: WorkspaceDocumentAdd,
    db: Session = Depends(get_db)
):
    """
    Append a document to a workspace

    Returns:
        MembershipResult: success=False when the document is already a member
    """
    return {"success": WorkspaceService(db).add_document(workspace_id, payload.document_id)}


@router.get("/{workspace_id}/documents/{document_id}", response_model=MembershipResult)
async def is_document_in_workspace(
    workspace_id: str,
    document_id: str,
    db: Session = Depends(get_db)
):
    return {"success": WorkspaceService(db).is_document_in_workspace(workspace_id, document_id)}


@router.put("/{workspace_id}/documents/{document_id}/position", response_model=MembershipResult)
async def reorder_document(
    workspace_id: str,
    document_id: str,
    payload: WorkspaceDocumentReorder,
    db: Session = Depends(get_db)
):
    return {"success": WorkspaceService(db).reorder_document(workspace_id, document_id, payload.position)}


@router.delete("/{workspace_id}/documents/{document_id}", response_model=MembershipResult)
async def remove_document(
    workspace_id: str,
    document_id: str,
    db: Session = Depends(get_db)
):
    return {"success": WorkspaceService(db).remove_document(workspace_id, document_id)}


@router.get("/{workspace_id}/conversations", response_model=List[WorkspaceConversation])
async def workspace_conversations(
    workspace_id: str,
    db: Session = Depends(get_db)
):
    return WorkspaceService(db).conversations(workspace_id)
