from sqlalchemy import JSON, Column, DateTime, Integer, MetaData, String, Table, UniqueConstraint, func

metadata = MetaData()

# Each row is one document of a logical collection; fields live in ``data``.
documents = Table(
    "documents",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("collection", String(64), nullable=False, index=True),
    Column("doc_id", String(128), nullable=False),
    Column("data", JSON, nullable=False),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
    UniqueConstraint("collection", "doc_id", name="uq_documents_collection_doc_id"),
)
