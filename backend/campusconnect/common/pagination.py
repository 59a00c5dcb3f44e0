# campusconnect/common/pagination.py


def _int_param(query_params, name: str, default: int) -> int:
    try:
        return int(query_params.get(name, default))
    except (TypeError, ValueError):
        return default


def parse_offset_limit(query_params, *, default_limit: int, max_limit: int):
    """?offset=0&limit=N, clamped to [0, ..) and (0, max_limit]."""
    offset = _int_param(query_params, "offset", 0)
    limit = _int_param(query_params, "limit", default_limit)

    if offset < 0:
        offset = 0
    if limit <= 0:
        limit = default_limit
    if limit > max_limit:
        limit = max_limit
    return offset, limit


def next_offset(total: int, offset: int, limit: int):
    return offset + limit if (offset + limit) < total else None
