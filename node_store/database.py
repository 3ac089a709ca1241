# database.py
from sqlalchemy import create_engine, func, Column, String, Text, DateTime, Integer
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import sessionmaker, Session
from datetime import datetime, timezone
from typing import Optional, List

Base = declarative_base()

class DocumentVersion(Base):
    """Store each version of a JSON document"""
    __tablename__ = "document_versions"

    id = Column(Integer, primary_key=True)
    document_id = Column(String(100), index=True)
    version = Column(Integer)
    data = Column(Text)  # raw document text, not necessarily valid JSON
    node_path = Column(String(1000), nullable=True)  # formatted path of the edited node
    modification_summary = Column(Text)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    def to_dict(self, include_data: bool = True) -> dict:
        entry = {
            "id": self.id,
            "document_id": self.document_id,
            "version": self.version,
            "node_path": self.node_path,
            "summary": self.modification_summary,
            "timestamp": self.created_at.isoformat() if self.created_at else None,
        }
        if include_data:
            entry["data"] = self.data
        return entry

class DocumentDB:
    """Database manager for document versioning"""

    def __init__(self, db_path: str = "documents.db"):
        self.engine = create_engine(f"sqlite:///{db_path}")
        Base.metadata.create_all(self.engine)
        self.SessionLocal = sessionmaker(bind=self.engine, expire_on_commit=False)

    def get_session(self) -> Session:
        return self.SessionLocal()

    def save_version(
            self,
            document_id: str,
            data: str,
            modification_summary: str,
            node_path: Optional[str] = None,
            ) -> DocumentVersion:
        """Save a new version, numbered after the latest one for this document"""
        session = self.get_session()
        try:
            last_version = session.query(DocumentVersion)\
                .filter(DocumentVersion.document_id == document_id)\
                .order_by(DocumentVersion.version.desc())\
                .first()

            next_version = (last_version.version + 1) if last_version else 1

            version = DocumentVersion(
                document_id=document_id,
                version=next_version,
                data=data,
                node_path=node_path,
                modification_summary=modification_summary,
            )

            session.add(version)
            session.commit()
            session.refresh(version)
            return version
        finally:
            session.close()

    def get_current_version(self, document_id: str) -> Optional[DocumentVersion]:
        """Get latest version"""
        session = self.get_session()
        try:
            return session.query(DocumentVersion)\
                .filter(DocumentVersion.document_id == document_id)\
                .order_by(DocumentVersion.version.desc())\
                .first()
        finally:
            session.close()

    def get_version(self, document_id: str, version: int) -> Optional[DocumentVersion]:
        session = self.get_session()
        try:
            return session.query(DocumentVersion)\
                .filter(DocumentVersion.document_id == document_id)\
                .filter(DocumentVersion.version == version)\
                .first()
        finally:
            session.close()

    def get_modification_history(self, document_id: str) -> List[dict]:
        """Get all modification summaries, oldest first, without document bodies"""
        session = self.get_session()
        try:
            versions = session.query(DocumentVersion)\
                .filter(DocumentVersion.document_id == document_id)\
                .order_by(DocumentVersion.version.asc())\
                .all()
            return [v.to_dict(include_data=False) for v in versions]
        finally:
            session.close()

    def list_documents(self) -> List[dict]:
        """List all document IDs with version counts, most recently edited first"""
        session = self.get_session()
        try:
            rows = session.query(
                    DocumentVersion.document_id,
                    func.count(DocumentVersion.id),
                    func.max(DocumentVersion.version),
                    func.max(DocumentVersion.created_at),
                )\
                .group_by(DocumentVersion.document_id)\
                .order_by(func.max(DocumentVersion.created_at).desc())\
                .all()
            return [
                {
                    "document_id": document_id,
                    "version_count": count,
                    "current_version": current_version,
                    "last_edit": last_edit.isoformat() if last_edit else None,
                }
                for document_id, count, current_version, last_edit in rows
            ]
        finally:
            session.close()
