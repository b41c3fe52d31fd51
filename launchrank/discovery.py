"""
Discovery adapter - Turn raw application records into Entries.

Records come from whatever enumerates installed applications: AppInfo
instances, plain mappings, or Ignis Application objects (via
info_from_application). The first record wins for a duplicated id.
"""

import re
from typing import Any, Iterable, List, Mapping, Optional

from loguru import logger

from .entry import AppInfo, Entry
from .search.ranking import history_weight


def split_keywords(value: Any) -> tuple:
    """
    Normalize keywords to a tuple of non-empty strings.

    Desktop files store keywords as one ";"-separated string
    (e.g., "editor;code;"); lists are taken as they are.
    """
    if not value:
        return ()
    if isinstance(value, str):
        value = value.split(";")
    return tuple(str(k).strip() for k in value if k and str(k).strip())


def info_from_application(app) -> AppInfo:
    """
    Adapt an Ignis Application object to AppInfo.

    Args:
        app: Application from ApplicationsService
    """
    return AppInfo(
        id=app.id,
        name=app.name or app.id,
        command=getattr(app, "exec_string", "") or "",
        description=getattr(app, "description", "") or "",
        keywords=split_keywords(getattr(app, "keywords", None)),
        working_dir=getattr(app, "working_dir", None) or None,
        terminal=bool(getattr(app, "is_terminal", False)),
        icon=getattr(app, "icon", None) or "application-x-executable",
        app=app,
    )


def info_from_record(record: Any) -> Optional[AppInfo]:
    """Coerce a record to AppInfo, or None if it has no usable id."""
    if isinstance(record, AppInfo):
        return record if record.id else None
    if not isinstance(record, Mapping):
        return info_from_application(record) if getattr(record, "id", None) else None

    app_id = record.get("id")
    if not app_id:
        return None
    return AppInfo(
        id=app_id,
        name=record.get("name") or app_id,
        command=record.get("command") or record.get("exec") or "",
        description=record.get("description") or "",
        keywords=split_keywords(record.get("keywords")),
        working_dir=record.get("working_dir") or None,
        terminal=bool(record.get("terminal", False)),
        icon=record.get("icon") or "application-x-executable",
    )


def build_entries(records: Iterable[Any], config, history=None, now: Optional[float] = None) -> List[Entry]:
    """
    Build the fixed entry set from discovery records.

    Args:
        records: Raw application records
        config: Config providing exclude patterns, name overrides and
            the history order
        history: HistoryMap used to seed each entry's weight
        now: Reference time for history weighting

    Returns:
        Entries in discovery order, unique by id
    """
    history = history or {}
    excludes = _compile_excludes(config.exclude)
    seen = set()
    entries = []

    for record in records:
        info = info_from_record(record)
        if info is None:
            logger.warning(f"Skipping application record without an id: {record!r}")
            continue
        if info.id in seen:
            logger.debug(f"Ignoring duplicate entry {info.id}")
            continue
        seen.add(info.id)

        if any(pattern.search(info.id) for pattern in excludes):
            logger.debug(f"Excluding {info.id}")
            continue

        entries.append(Entry(
            info,
            display_name=config.name_overrides.get(info.id, info.name),
            history_weight=history_weight(history.get(info.id), config.history_order, now),
        ))

    return entries


def _compile_excludes(patterns: Iterable[str]) -> list:
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            logger.warning(f"Ignoring invalid exclude pattern {pattern!r}: {e}")
    return compiled
