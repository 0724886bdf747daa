"""Template and correction-dictionary persistence.

Usage:
    from befundtool.store import get_template_store

    templates = get_template_store().load()
"""

import logging
import time
import uuid

from befundtool.models import CorrectionRow, TemplateRow
from befundtool.report.types import CorrectionEntry, Template
from befundtool.seed import DEFAULT_CORRECTIONS, DEFAULT_TEMPLATES

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class TemplateStore:
    def __init__(self, session_factory):
        self._session_factory = session_factory

    def load(self) -> list[Template]:
        with self._session_factory() as session:
            rows = session.query(TemplateRow).order_by(TemplateRow.name).all()
            return [self._row_to_template(r) for r in rows]

    def get(self, template_id: str) -> Template | None:
        with self._session_factory() as session:
            row = session.query(TemplateRow).filter_by(id=template_id).first()
            return self._row_to_template(row) if row else None

    def save(self, template: Template) -> Template:
        """Insert or update *template*; returns the stored version."""
        template_id = template.id or f"tpl-{uuid.uuid4().hex[:12]}"
        # Keywords stay unique, first spelling wins
        keywords = []
        seen = set()
        for kw in template.keywords:
            key = kw.strip().lower()
            if key and key not in seen:
                seen.add(key)
                keywords.append(kw.strip())
        updated_at = _now_ms()

        with self._session_factory() as session:
            row = session.query(TemplateRow).filter_by(id=template_id).first()
            if row:
                row.name = template.name
                row.keywords = keywords
                row.normal_befund_text = template.normal_befund_text
                row.updated_at = updated_at
            else:
                session.add(TemplateRow(
                    id=template_id,
                    name=template.name,
                    keywords=keywords,
                    normal_befund_text=template.normal_befund_text,
                    updated_at=updated_at,
                ))
            session.commit()

        return Template(
            id=template_id,
            name=template.name,
            keywords=tuple(keywords),
            normal_befund_text=template.normal_befund_text,
            updated_at=updated_at,
        )

    def delete(self, template_id: str) -> bool:
        with self._session_factory() as session:
            row = session.query(TemplateRow).filter_by(id=template_id).first()
            if not row:
                return False
            session.delete(row)
            session.commit()
        logger.info("Deleted template '%s'", template_id)
        return True

    def append_missing_seed_templates(self) -> int:
        """Add default templates whose ids are not stored yet."""
        with self._session_factory() as session:
            existing = {r[0] for r in session.query(TemplateRow.id).all()}
        missing = [t for t in DEFAULT_TEMPLATES if t.id not in existing]
        for template in missing:
            self.save(template)
        return len(missing)

    def seed_if_empty(self) -> int:
        with self._session_factory() as session:
            if session.query(TemplateRow).count() > 0:
                return 0
        return self.append_missing_seed_templates()

    @staticmethod
    def _row_to_template(row: TemplateRow) -> Template:
        return Template(
            id=row.id,
            name=row.name,
            keywords=tuple(row.keywords or ()),
            normal_befund_text=row.normal_befund_text or "",
            updated_at=row.updated_at or 0,
        )


class CorrectionStore:
    def __init__(self, session_factory):
        self._session_factory = session_factory

    def load(self) -> list[CorrectionEntry]:
        """All entries in application order."""
        with self._session_factory() as session:
            rows = (
                session.query(CorrectionRow)
                .order_by(CorrectionRow.position, CorrectionRow.id)
                .all()
            )
            return [self._row_to_entry(r) for r in rows]

    def save_all(self, entries: list[CorrectionEntry]):
        """Replace the dictionary; list order becomes application order."""
        with self._session_factory() as session:
            session.query(CorrectionRow).delete()
            for position, entry in enumerate(entries):
                session.add(CorrectionRow(
                    id=entry.id or f"c-{uuid.uuid4().hex[:12]}",
                    position=position,
                    wrong=entry.wrong,
                    correct=entry.correct,
                    case_insensitive=entry.case_insensitive,
                    whole_word=entry.whole_word,
                ))
            session.commit()

    def add(
        self,
        wrong: str,
        correct: str,
        case_insensitive: bool = True,
        whole_word: bool = True,
    ) -> CorrectionEntry:
        """Append an entry at the end of the dictionary."""
        entry = CorrectionEntry(
            id=f"c-{uuid.uuid4().hex[:12]}",
            wrong=wrong,
            correct=correct,
            case_insensitive=case_insensitive,
            whole_word=whole_word,
        )
        with self._session_factory() as session:
            last = session.query(CorrectionRow).order_by(CorrectionRow.position.desc()).first()
            session.add(CorrectionRow(
                id=entry.id,
                position=(last.position + 1) if last else 0,
                wrong=entry.wrong,
                correct=entry.correct,
                case_insensitive=entry.case_insensitive,
                whole_word=entry.whole_word,
            ))
            session.commit()
        return entry

    def delete(self, entry_id: str) -> bool:
        with self._session_factory() as session:
            row = session.query(CorrectionRow).filter_by(id=entry_id).first()
            if not row:
                return False
            session.delete(row)
            session.commit()
        return True

    def seed_if_empty(self) -> int:
        with self._session_factory() as session:
            if session.query(CorrectionRow).count() > 0:
                return 0
        self.save_all(DEFAULT_CORRECTIONS)
        return len(DEFAULT_CORRECTIONS)

    @staticmethod
    def _row_to_entry(row: CorrectionRow) -> CorrectionEntry:
        return CorrectionEntry(
            id=row.id,
            wrong=row.wrong,
            correct=row.correct,
            case_insensitive=row.case_insensitive,
            whole_word=row.whole_word,
        )


# Module-level singletons, initialized lazily after database.py sets up SessionLocal
_template_store: TemplateStore | None = None
_correction_store: CorrectionStore | None = None


def get_template_store() -> TemplateStore:
    global _template_store
    if _template_store is None:
        from befundtool.database import SessionLocal
        _template_store = TemplateStore(SessionLocal)
    return _template_store


def get_correction_store() -> CorrectionStore:
    global _correction_store
    if _correction_store is None:
        from befundtool.database import SessionLocal
        _correction_store = CorrectionStore(SessionLocal)
    return _correction_store
