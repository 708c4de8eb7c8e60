r"""Schema validation of successful response bodies.

A validator is one of:

- a pydantic ``BaseModel`` subclass, validated with ``model_validate``
- a ``pydantic.TypeAdapter``, validated with ``validate_python``
- any callable taking the parsed body and returning the validated value,
  raising on mismatch (any exception it raises is reported as a mismatch)

Example:
    ```pycon
    >>> from pydantic import BaseModel
    >>> from farmclient.validators import validate_response
    >>> class Farm(BaseModel):
    ...     id: str
    ...     area: float
    ...
    >>> validate_response(Farm, {"id": "farm-1", "area": 2.5})
    Farm(id='farm-1', area=2.5)
    >>> validate_response(Farm, {"id": "farm-1"})
    Traceback (most recent call last):
    ...
    farmclient.exceptions.ResponseValidationError: Response validation failed: area: Field required

    ```
"""

from __future__ import annotations

__all__ = ["Validator", "format_issues", "validate_response"]

from collections.abc import Callable
from typing import Any, Union

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from farmclient.exceptions import ResponseValidationError

Validator = Union[type[BaseModel], TypeAdapter[Any], Callable[[Any], Any]]


def format_issues(issues: list[dict[str, Any]]) -> str:
    """Format validation issues as ``loc: msg`` pairs joined by commas.

    Example:
        ```pycon
        >>> from farmclient.validators import format_issues
        >>> format_issues([{"loc": ("data", 0, "id"), "msg": "Field required", "type": "missing"}])
        'data.0.id: Field required'

        ```
    """
    return ", ".join(
        f"{'.'.join(str(part) for part in issue['loc'])}: {issue['msg']}" for issue in issues
    )


def validate_response(validator: Validator, data: Any) -> Any:
    """Validate a parsed response body.

    Args:
        validator: The schema the body must match.
        data: The parsed response body.

    Returns:
        The validated value: a model instance for ``BaseModel``
        validators, the adapter's output for ``TypeAdapter`` validators,
        or the callable's return value.

    Raises:
        ResponseValidationError: If the body does not match. Its
            ``issues`` list one ``{"loc", "msg", "type"}`` mapping per
            problem.
    """
    try:
        if isinstance(validator, type) and issubclass(validator, BaseModel):
            return validator.model_validate(data)
        if isinstance(validator, TypeAdapter):
            return validator.validate_python(data)
        return validator(data)
    except PydanticValidationError as exc:
        issues = [
            {"loc": tuple(error["loc"]), "msg": error["msg"], "type": error["type"]}
            for error in exc.errors()
        ]
        msg = f"Response validation failed: {format_issues(issues)}"
        raise ResponseValidationError(msg, issues=issues) from exc
    except Exception as exc:
        # Any failure of a hand-written check counts as a schema mismatch.
        issues = [{"loc": (), "msg": str(exc), "type": type(exc).__name__}]
        msg = f"Response validation failed: {exc}"
        raise ResponseValidationError(msg, issues=issues) from exc
