import datetime

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Index,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class GlobalSetting(Base):
    __tablename__ = "global_settings"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=True)
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())


class TemplateRow(Base):
    __tablename__ = "templates"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    keywords = Column(JSON, nullable=False, default=list)
    normal_befund_text = Column(Text, nullable=False, default="")
    # Milliseconds since epoch, as stored by the editor
    updated_at = Column(Integer, nullable=False, default=0)


class CorrectionRow(Base):
    __tablename__ = "corrections"

    id = Column(String, primary_key=True)
    # Application order matters: later entries see earlier rewrites
    position = Column(Integer, nullable=False, default=0)
    wrong = Column(String, nullable=False)
    correct = Column(String, nullable=False, default="")
    case_insensitive = Column(Boolean, nullable=False, default=True)
    whole_word = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        Index("ix_corrections_position", "position"),
    )


class Report(Base):
    __tablename__ = "reports"

    id = Column(Integer, primary_key=True, autoincrement=True)
    status = Column(String, nullable=False, default="draft")  # "draft" or "final"
    label = Column(String, nullable=False, default="")

    # Template selection
    template_id = Column(String, nullable=True)
    manual_template_override = Column(Boolean, nullable=False, default=False)

    # Dictation
    transcript_text = Column(Text, nullable=False, default="")
    last_inserted_text = Column(Text, nullable=False, default="")
    clinical_data = Column(JSON, nullable=False, default=dict)

    # Generated output
    final_report_html = Column(Text, nullable=False, default="")
    impression_text = Column(Text, nullable=True)
    icd10 = Column(String, nullable=True)
    did_you_know = Column(JSON, nullable=True)
    used_fallback = Column(Boolean, nullable=False, default=False)
    is_stale = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, nullable=False, default=datetime.datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)

    __table_args__ = (
        Index("ix_reports_status", "status"),
        Index("ix_reports_updated_at", "updated_at"),
    )
