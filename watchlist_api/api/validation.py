"""Request validation decorator.

@validate_request parses the request body into the Pydantic schema named by
the endpoint's ``data`` parameter annotation and passes it in as ``data``.
Path parameters are passed through untouched.

    @watchlists_bp.put("/<watchlist_id>/invite")
    @validate_request
    def invite_user(watchlist_id: str, data: UsernameRequest):
        ...
"""

import inspect
from functools import wraps

from flask import request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError


def _field_label(loc: tuple) -> str:
    """Human label for an error location: ('username',) -> 'Username'."""
    name = str(loc[-1])
    return name[:1].upper() + name[1:]


def format_validation_message(errors: list[dict]) -> str:
    """Plain-text message for the first Pydantic error.

    Missing fields read "<Field> is required"; custom errors keep their own
    message (e.g. "Username is too short, minimum 2 characters").
    """
    first = errors[0]
    if first["type"] == "missing" and first["loc"]:
        return f"{_field_label(first['loc'])} is required"
    if first["loc"] and first["type"] in {"string_type", "int_type", "int_parsing"}:
        return f"{_field_label(first['loc'])}: {first['msg']}"
    return first["msg"]


def _request_payload():
    """JSON body, else form data, else an empty object."""
    payload = request.get_json(silent=True)
    if payload is None and request.form:
        payload = request.form.to_dict()
    return {} if payload is None else payload


def validate_request(f):
    """
    Validate the request body against the endpoint's ``data`` schema.

    Raises:
        ValidationError: If the body does not match the schema
    """
    parameter = inspect.signature(f).parameters.get("data")
    schema = parameter.annotation if parameter is not None else None
    if not (inspect.isclass(schema) and issubclass(schema, BaseModel)):
        schema = None

    @wraps(f)
    def wrapper(*args, **kwargs):
        if schema is None:
            return f(*args, **kwargs)

        try:
            data = schema.model_validate(_request_payload())
        except PydanticValidationError as e:
            errors = e.errors(include_url=False, include_context=False, include_input=False)
            raise ValidationError(format_validation_message(errors), {"errors": errors})

        return f(*args, data=data, **kwargs)

    return wrapper
