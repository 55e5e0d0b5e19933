"""Shape raw note records into API views"""
from datetime import datetime
from typing import List, Optional, Tuple

from app.models.label import LabelSummary
from app.models.note import DateType, NoteDetail, NoteRecord, NoteSummary, PublicNote


def resolve_display_date(record: NoteRecord) -> Tuple[Optional[datetime], DateType]:
    """Edited notes show updated_at, untouched ones created_at"""
    if record.is_updated:
        return record.updated_at, DateType.UPDATED
    return record.created_at, DateType.CREATED


def flatten_labels(record: NoteRecord) -> List[LabelSummary]:
    return [link.label for link in record.post_labels or [] if link.label is not None]


def _common_fields(record: NoteRecord) -> dict:
    display_date, date_type = resolve_display_date(record)
    fields = record.model_dump(exclude={"post_labels", "encrypted_content"})
    fields.update(
        labels=flatten_labels(record),
        display_date=display_date,
        date_type=date_type,
    )
    return fields


def to_list_item(record: NoteRecord) -> NoteSummary:
    # encrypted content never leaves the server in list views
    return NoteSummary(**_common_fields(record))


def to_detail(record: NoteRecord) -> NoteDetail:
    return NoteDetail(**_common_fields(record), encrypted_content=record.encrypted_content)


def to_public(record: NoteRecord) -> PublicNote:
    display_date, date_type = resolve_display_date(record)
    return PublicNote(
        id=record.id,
        title=record.title,
        content=record.content,
        encrypted_content=record.encrypted_content,
        is_encrypted=record.is_encrypted,
        is_updated=record.is_updated,
        created_at=record.created_at,
        updated_at=record.updated_at,
        category=record.category,
        labels=flatten_labels(record),
        display_date=display_date,
        date_type=date_type,
    )
