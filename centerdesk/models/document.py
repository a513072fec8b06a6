from sqlalchemy import Column, String, DateTime, JSON, Index

from .base import Base


class Document(Base):
    """
    One record of a collection. Collections are addressed by their
    namespaced path (artifacts/<installation>/<visibility>/<collection>).
    """
    __tablename__ = "documents"

    path = Column(String(255), primary_key=True)
    id = Column(String(255), primary_key=True)
    data = Column(JSON, nullable=False, default=dict)

    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("ix_documents_path_created_at", "path", "created_at"),
    )

    def to_record(self) -> dict:
        """Flatten into the record shape handed to callers"""
        record = {"id": self.id}
        record.update(self.data or {})
        record["createdAt"] = self.created_at.isoformat() if self.created_at else None
        record["updatedAt"] = self.updated_at.isoformat() if self.updated_at else None
        return record

    def __repr__(self):
        return f"<Document({self.path}/{self.id})>"
