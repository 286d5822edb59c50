"""
WHERE-clause builder for the search/filter parameters of list endpoints.

The clause is plain SQL with named bind parameters so the same text can be
used for both the page query and its COUNT query.
"""
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..exceptions import ValidationError
from .sanitizer import sanitize_string

MATCH_ALL = "1 = 1"
OPERATORS = ("AND", "OR")

FACILITY_SEARCH_FIELDS: Dict[str, str] = {
    "facility_name": "facilities.name",
    "city": "locations.city",
    "tag": "tags.name",
}

EMPLOYEE_SEARCH_FIELDS: Dict[str, str] = {
    "employee_name": "employees.name",
    "email": "employees.email",
    "phone": "employees.phone",
    "address": "employees.address",
    "facility_name": "facilities.name",
    "city": "locations.city",
}
EMPLOYEE_DEFAULT_FIELDS = ("employee_name", "email", "address")


def parse_filters(raw: Optional[str], allowed: Iterable[str]) -> List[str]:
    """Split a comma-separated ``filter`` parameter and reject unknown fields."""
    if not raw:
        return []
    allowed = list(allowed)
    filters = []
    for token in raw.split(","):
        token = token.strip()
        if not token:
            continue
        if token not in allowed:
            raise ValidationError({
                "filter": f"Invalid filter provided: '{token}'. Valid filters are: {', '.join(allowed)}"
            })
        if token not in filters:
            filters.append(token)
    return filters


def validate_operator(operator: Optional[str], default: str = "OR") -> str:
    if operator is None:
        return default
    if operator not in OPERATORS:
        raise ValidationError({"operator": "Invalid operator. Only 'AND' or 'OR' are allowed."})
    return operator


def _search_term(value: Optional[str]) -> str:
    # Stored values are HTML-encoded by the sanitizer, so terms are encoded the same way
    return sanitize_string(value) if value else ""


def _like_condition(column: str, param: str) -> str:
    return f"LOWER({column}) LIKE :{param} ESCAPE '\\'"


def _like_pattern(term: str) -> str:
    escaped = term.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def build_filter_clause(
    query: Optional[str],
    filters: Sequence[str],
    operator: Optional[str] = "OR",
    fields: Mapping[str, str] = FACILITY_SEARCH_FIELDS,
) -> Tuple[str, Dict[str, str]]:
    """
    Build a WHERE clause matching ``query`` against the selected fields.

    Without a query the clause matches every row. Without filters the query is
    matched against all of ``fields`` joined with OR; with filters only those
    fields are matched, joined with ``operator``. Matching is a case-insensitive substring test.

    Returns:
        Tuple of (where clause SQL, bind parameters)
    """
    operator = validate_operator(operator)
    for name in filters:
        if name not in fields:
            raise ValidationError({
                "filter": f"Invalid filter provided: '{name}'. Valid filters are: {', '.join(fields)}"
            })

    term = _search_term(query)
    if not term:
        return MATCH_ALL, {}

    if filters:
        selected, joiner = list(filters), operator
    else:
        selected, joiner = list(fields), "OR"

    conditions = [_like_condition(fields[name], "query") for name in selected]
    clause = "(" + f" {joiner} ".join(conditions) + ")"
    return clause, {"query": _like_pattern(term)}


def build_employee_clause(
    query: Optional[str],
    filters: Sequence[str],
    operator: Optional[str] = None,
    field_terms: Optional[Mapping[str, Optional[str]]] = None,
) -> Tuple[str, Dict[str, str]]:
    """
    Build the WHERE clause for the employee listing.

    Every non-empty entry of ``field_terms`` (``employee_name``, ``email``,
    ``phone``, ``address``, ``facility_name``, ``city``) adds its own
    substring condition. ``query`` adds one grouped condition matched against
    the ``filters`` fields, or ``EMPLOYEE_DEFAULT_FIELDS`` without filters,
    joined with OR. All conditions are then joined with ``operator``, which
    defaults to AND.
    """
    operator = validate_operator(operator, default="AND")
    for name in filters:
        if name not in EMPLOYEE_SEARCH_FIELDS:
            raise ValidationError({
                "filter": f"Invalid filter provided: '{name}'. "
                          f"Valid filters are: {', '.join(EMPLOYEE_SEARCH_FIELDS)}"
            })

    conditions: List[str] = []
    params: Dict[str, str] = {}
    for name, column in EMPLOYEE_SEARCH_FIELDS.items():
        term = _search_term((field_terms or {}).get(name))
        if term:
            conditions.append(_like_condition(column, name))
            params[name] = _like_pattern(term)

    term = _search_term(query)
    if term:
        selected = list(filters) or list(EMPLOYEE_DEFAULT_FIELDS)
        grouped = [_like_condition(EMPLOYEE_SEARCH_FIELDS[name], "query") for name in selected]
        conditions.append("(" + " OR ".join(grouped) + ")")
        params["query"] = _like_pattern(term)

    if not conditions:
        return MATCH_ALL, {}
    return "(" + f" {operator} ".join(conditions) + ")", params
