"""Filtering, search and paging shared by the assessment stores."""
from datetime import datetime
from typing import Iterable, List, Optional

from grahmeen_health.application.schemas import ListQuery, Page
from grahmeen_health.domain.models import AssessmentRecord, RiskLevel


def filter_records(
    records: Iterable[AssessmentRecord],
    user_id: Optional[str] = None,
    risk_level: Optional[RiskLevel] = None,
    severity: Optional[str] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> List[AssessmentRecord]:
    matches = []
    for record in records:
        if user_id is not None and record.user_id != user_id:
            continue
        if risk_level is not None and record.risk_level != risk_level:
            continue
        if severity is not None and record.severity != severity:
            continue
        if start is not None and record.created_at < start:
            continue
        if end is not None and record.created_at > end:
            continue
        matches.append(record)
    matches.sort(key=lambda r: r.created_at, reverse=True)
    return matches


def matches_search(record: AssessmentRecord, search: str) -> bool:
    needle = search.strip().lower()
    if not needle:
        return True
    haystack = [s.name.lower() for s in record.symptoms]
    haystack.append(record.severity.lower())
    if record.risk_level is not None:
        haystack.append(record.risk_level.value)
    return any(needle in field for field in haystack)


def _sort_key(sort_by: str):
    def key(record: AssessmentRecord):
        value = getattr(record, sort_by)
        if hasattr(value, "value"):
            value = value.value
        # None sorts first regardless of the value type
        return (value is not None, value if value is not None else "")
    return key


def paginate(records: Iterable[AssessmentRecord], query: ListQuery) -> Page:
    matching = [r for r in records if matches_search(r, query.search)]
    matching.sort(key=_sort_key(query.sort_by), reverse=query.sort_order == "desc")
    items = matching[query.offset:query.offset + query.limit]
    return Page.build(items, len(matching), query)
