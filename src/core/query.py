"""Query-string parsing helpers for list endpoints."""

from rest_framework.exceptions import ValidationError

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}


def query_flag(request, name: str) -> bool | None:
    """Read an optional boolean query parameter; absent means None."""

    raw = request.query_params.get(name)
    if raw is None or raw == "":
        return None
    value = raw.strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ValidationError({name: [f"Expected a boolean, got '{raw}'."]})


def query_choice(request, name: str, choices) -> str | None:
    """Read an optional query parameter restricted to ``choices``."""

    value = request.query_params.get(name)
    if not value:
        return None
    allowed = {str(choice) for choice in choices}
    if value not in allowed:
        raise ValidationError({name: [f"'{value}' is not a valid choice."]})
    return value


__all__ = ["query_choice", "query_flag"]
