"""Boundary validation for incoming product payloads.

``validate_product`` returns every violation as ``(field, message)`` pairs
keyed by wire field name; ``parse_product`` returns the validated
``ProductInputDTO`` or an ``Err(VALIDATION_FAILED)`` carrying the same
violations.  Both leave the payload untouched.
"""

from __future__ import annotations

from typing import Any, List, Mapping, NamedTuple, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError

from modules.core.result import Err, ErrorKind, Ok, Result
from modules.products.dtos import ProductInputDTO

BODY_FIELD = "body"


class Violation(NamedTuple):
    field: str
    message: str


def _wire_name(part: Any) -> str:
    # A failed default is reported under the attribute name, not the alias.
    info = ProductInputDTO.model_fields.get(part) if isinstance(part, str) else None
    if info is not None and info.alias:
        return info.alias
    return str(part)


def _parse(payload: Any) -> Tuple[Optional[ProductInputDTO], List[Violation]]:
    if not isinstance(payload, Mapping):
        return None, [Violation(BODY_FIELD, "Request body must be a JSON object")]
    try:
        return ProductInputDTO.model_validate(dict(payload)), []
    except PydanticValidationError as exc:
        violations = []
        seen = set()
        for error in exc.errors(include_url=False):
            field = ".".join(_wire_name(part) for part in error["loc"]) or BODY_FIELD
            if field in seen:
                continue
            seen.add(field)
            violations.append(Violation(field, error["msg"]))
        return None, violations


def validate_product(payload: Any) -> List[Violation]:
    """Return all constraint violations for ``payload`` (empty when valid)."""
    _, violations = _parse(payload)
    return violations


def parse_product(payload: Any) -> Result[ProductInputDTO]:
    dto, violations = _parse(payload)
    if dto is None:
        return Err(
            ErrorKind.VALIDATION_FAILED,
            "One or more fields failed validation",
            {v.field: v.message for v in violations},
        )
    return Ok(dto)
