from datetime import datetime, timezone


def utcnow() -> datetime:
    """Текущее время UTC без tzinfo, в том виде, в каком его хранят колонки DateTime"""
    return datetime.now(timezone.utc).replace(tzinfo=None)
