"""
Schema versioning and repair

The schema grows in three steps:
    1. documents, interactions, concepts (+ junctions), review cards
    2. highlights, bookmarks, conversations (+ messages), FTS5 indexes and sync triggers
    3. workspaces (+ documents), conversation sources, conversations.workspace_id

ORM tables are created from Base.metadata; FTS5 virtual tables, triggers and
expression indexes have no ORM counterpart and are created with raw DDL.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine

from synapse_reader.database import Base

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 3

REQUIRED_TABLES_V1 = (
    "documents",
    "interactions",
    "concepts",
    "interaction_concepts",
    "document_concepts",
    "review_cards",
)
V2_ORM_TABLES = (
    "highlights",
    "bookmarks",
    "conversations",
    "conversation_messages",
)
V2_FTS_TABLES = (
    "documents_fts",
    "interactions_fts",
    "concepts_fts",
)
V2_TABLES = V2_ORM_TABLES + V2_FTS_TABLES
V3_TABLES = (
    "workspaces",
    "workspace_documents",
    "conversation_sources",
)
REQUIRED_TABLES_V2 = REQUIRED_TABLES_V1 + V2_TABLES
REQUIRED_TABLES_V3 = REQUIRED_TABLES_V2 + V3_TABLES


FTS_DDL = [
    """CREATE VIRTUAL TABLE IF NOT EXISTS documents_fts USING fts5(
        filename, content='documents', content_rowid='rowid'
    )""",
    """CREATE VIRTUAL TABLE IF NOT EXISTS interactions_fts USING fts5(
        selected_text, response, content='interactions', content_rowid='rowid'
    )""",
    """CREATE VIRTUAL TABLE IF NOT EXISTS concepts_fts USING fts5(
        name, content='concepts', content_rowid='rowid'
    )""",
    # documents
    """CREATE TRIGGER IF NOT EXISTS documents_ai AFTER INSERT ON documents BEGIN
        INSERT INTO documents_fts(rowid, filename) VALUES (NEW.rowid, NEW.filename);
    END""",
    """CREATE TRIGGER IF NOT EXISTS documents_ad AFTER DELETE ON documents BEGIN
        INSERT INTO documents_fts(documents_fts, rowid, filename) VALUES ('delete', OLD.rowid, OLD.filename);
    END""",
    """CREATE TRIGGER IF NOT EXISTS documents_au AFTER UPDATE ON documents BEGIN
        INSERT INTO documents_fts(documents_fts, rowid, filename) VALUES ('delete', OLD.rowid, OLD.filename);
        INSERT INTO documents_fts(rowid, filename) VALUES (NEW.rowid, NEW.filename);
    END""",
    # interactions
    """CREATE TRIGGER IF NOT EXISTS interactions_ai AFTER INSERT ON interactions BEGIN
        INSERT INTO interactions_fts(rowid, selected_text, response)
        VALUES (NEW.rowid, NEW.selected_text, NEW.response);
    END""",
    """CREATE TRIGGER IF NOT EXISTS interactions_ad AFTER DELETE ON interactions BEGIN
        INSERT INTO interactions_fts(interactions_fts, rowid, selected_text, response)
        VALUES ('delete', OLD.rowid, OLD.selected_text, OLD.response);
    END""",
    """CREATE TRIGGER IF NOT EXISTS interactions_au AFTER UPDATE ON interactions BEGIN
        INSERT INTO interactions_fts(interactions_fts, rowid, selected_text, response)
        VALUES ('delete', OLD.rowid, OLD.selected_text, OLD.response);
        INSERT INTO interactions_fts(rowid, selected_text, response)
        VALUES (NEW.rowid, NEW.selected_text, NEW.response);
    END""",
    # concepts
    """CREATE TRIGGER IF NOT EXISTS concepts_ai AFTER INSERT ON concepts BEGIN
        INSERT INTO concepts_fts(rowid, name) VALUES (NEW.rowid, NEW.name);
    END""",
    """CREATE TRIGGER IF NOT EXISTS concepts_ad AFTER DELETE ON concepts BEGIN
        INSERT INTO concepts_fts(concepts_fts, rowid, name) VALUES ('delete', OLD.rowid, OLD.name);
    END""",
    """CREATE TRIGGER IF NOT EXISTS concepts_au AFTER UPDATE ON concepts BEGIN
        INSERT INTO concepts_fts(concepts_fts, rowid, name) VALUES ('delete', OLD.rowid, OLD.name);
        INSERT INTO concepts_fts(rowid, name) VALUES (NEW.rowid, NEW.name);
    END""",
]

FTS_SEED = {
    "documents": "INSERT INTO documents_fts(rowid, filename) SELECT rowid, filename FROM documents",
    "interactions": (
        "INSERT INTO interactions_fts(rowid, selected_text, response) "
        "SELECT rowid, selected_text, response FROM interactions"
    ),
    "concepts": "INSERT INTO concepts_fts(rowid, name) SELECT rowid, name FROM concepts",
}


@dataclass
class FtsSeedPlan:
    """Which FTS indexes must be (re)filled from their content tables"""
    documents: bool = True
    interactions: bool = True
    concepts: bool = True


@dataclass
class SchemaRepairResult:
    repaired: bool
    missing_tables: List[str] = field(default_factory=list)


# ==============================================================================
# Introspection helpers
# ==============================================================================

def _ensure_schema_version_table(conn: Connection) -> None:
    conn.execute(text("CREATE TABLE IF NOT EXISTS schema_version (version INTEGER PRIMARY KEY)"))


def get_schema_version(conn: Connection) -> int:
    row = conn.execute(text("SELECT version FROM schema_version")).first()
    return row[0] if row else 0


def _set_schema_version(conn: Connection, version: int = SCHEMA_VERSION) -> None:
    conn.execute(text("DELETE FROM schema_version"))
    conn.execute(text("INSERT INTO schema_version (version) VALUES (:version)"), {"version": version})


def table_exists(conn: Connection, name: str) -> bool:
    row = conn.execute(
        text("SELECT name FROM sqlite_master WHERE type IN ('table', 'view') AND name = :name"),
        {"name": name},
    ).first()
    return row is not None


def _table_count(conn: Connection, name: str) -> int:
    # name always comes from the constant table lists above
    return conn.execute(text(f"SELECT COUNT(*) FROM {name}")).scalar() or 0


def get_missing_tables(conn: Connection, tables: Sequence[str]) -> List[str]:
    return [name for name in tables if not table_exists(conn, name)]


def _plan_fts_seed(conn: Connection) -> FtsSeedPlan:
    """
    Seed an FTS index when it does not exist yet, or when it is empty while
    its content table has rows (an index dropped and recreated by a repair)
    """
    plan = FtsSeedPlan(documents=False, interactions=False, concepts=False)

    for source in ("documents", "interactions", "concepts"):
        fts = f"{source}_fts"
        if not table_exists(conn, fts):
            needs_seed = True
        elif table_exists(conn, source) and _table_count(conn, fts) == 0:
            needs_seed = _table_count(conn, source) > 0
        else:
            needs_seed = False
        setattr(plan, source, needs_seed)

    return plan


def _create_orm_tables(conn: Connection, names: Sequence[str]) -> None:
    tables = [Base.metadata.tables[name] for name in names]
    Base.metadata.create_all(bind=conn, tables=tables)


# ==============================================================================
# Migrations
# ==============================================================================

def migration1(conn: Connection) -> None:
    _create_orm_tables(conn, REQUIRED_TABLES_V1)
    conn.execute(text(
        "CREATE INDEX IF NOT EXISTS idx_concepts_name_lower ON concepts(name COLLATE NOCASE)"
    ))


def migration2(conn: Connection, seed_fts: Optional[FtsSeedPlan] = None) -> None:
    seed_fts = seed_fts or FtsSeedPlan()

    _create_orm_tables(conn, V2_ORM_TABLES)
    for statement in FTS_DDL:
        conn.execute(text(statement))

    for source, statement in FTS_SEED.items():
        if getattr(seed_fts, source):
            conn.execute(text(statement))


def migration3(conn: Connection) -> None:
    _create_orm_tables(conn, V3_TABLES)

    # Databases created before workspaces existed lack this column
    columns = conn.execute(text("PRAGMA table_info(conversations)")).fetchall()
    if not any(col[1] == "workspace_id" for col in columns):
        conn.execute(text("ALTER TABLE conversations ADD COLUMN workspace_id TEXT REFERENCES workspaces(id)"))
        conn.execute(text(
            "CREATE INDEX IF NOT EXISTS idx_conversations_workspace ON conversations(workspace_id)"
        ))


MIGRATIONS = (
    migration1,
    migration2,
    migration3,
)


def run_migrations(engine: Engine) -> int:
    """
    Apply pending migrations in order, in a single transaction

    Args:
        engine: Database engine

    Returns:
        int: Schema version after migrating
    """
    with engine.begin() as conn:
        _ensure_schema_version_table(conn)
        current = get_schema_version(conn)

        if current < SCHEMA_VERSION:
            logger.info(f"Migrating schema from version {current} to {SCHEMA_VERSION}")
            for migration in MIGRATIONS[current:]:
                migration(conn)
            _set_schema_version(conn)

        return max(current, SCHEMA_VERSION)


def verify_and_repair_schema(engine: Engine) -> SchemaRepairResult:
    """
    Make sure every required table exists, whatever the recorded version says

    Missing tables of a migration group cause that group and all later ones to
    be re-run (every statement is idempotent). FTS indexes are re-seeded only
    when they are new or empty while their content table is not.

    Args:
        engine: Database engine

    Returns:
        SchemaRepairResult: Whether anything was repaired and which tables were missing
    """
    with engine.begin() as conn:
        _ensure_schema_version_table(conn)

        missing_v1 = get_missing_tables(conn, REQUIRED_TABLES_V1)
        missing_v2 = [t for t in get_missing_tables(conn, REQUIRED_TABLES_V2) if t not in missing_v1]
        missing_v3 = [
            t for t in get_missing_tables(conn, REQUIRED_TABLES_V3)
            if t not in missing_v1 and t not in missing_v2
        ]

        if missing_v1:
            missing_all = get_missing_tables(conn, REQUIRED_TABLES_V3)
            migration1(conn)
            migration2(conn, seed_fts=_plan_fts_seed(conn))
            migration3(conn)
            _set_schema_version(conn)
            logger.warning(f"Schema repaired from scratch, missing tables: {missing_all}")
            return SchemaRepairResult(repaired=True, missing_tables=missing_all)

        if missing_v2:
            migration2(conn, seed_fts=_plan_fts_seed(conn))
            migration3(conn)
            _set_schema_version(conn)
            logger.warning(f"Schema repaired, missing tables: {missing_v2 + missing_v3}")
            return SchemaRepairResult(repaired=True, missing_tables=missing_v2 + missing_v3)

        if missing_v3:
            migration3(conn)
            _set_schema_version(conn)
            logger.warning(f"Schema repaired, missing tables: {missing_v3}")
            return SchemaRepairResult(repaired=True, missing_tables=missing_v3)

        if get_schema_version(conn) < SCHEMA_VERSION:
            _set_schema_version(conn)

        return SchemaRepairResult(repaired=False, missing_tables=[])
