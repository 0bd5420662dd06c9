"""
Shape-tolerant decoding of backend response bodies.

The backend answers list endpoints as a bare array, as an object wrapping the
array under "data", or as a single object, depending on the environment. The
list decoder tries those shapes in that order.
"""
import json
import logging
from functools import lru_cache
from typing import List, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from voyatek.integrations.errors import DecodingError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

ENVELOPE_KEY = "data"


@lru_cache(maxsize=None)
def _list_adapter(model: Type[BaseModel]) -> TypeAdapter:
    return TypeAdapter(List[model])


def _is_empty(body: bytes) -> bool:
    return not body or not body.strip()


def _error_detail(error: Exception) -> str:
    if isinstance(error, ValidationError):
        return f"{error.error_count()} validation error(s): {error.errors(include_url=False)[0]['msg']}"
    return str(error)


def decode_list(body: bytes, model: Type[ModelT]) -> List[ModelT]:
    """
    Decode a collection body into a list of records.

    1. empty body -> []
    2. bare JSON array of records
    3. {"data": [...]} envelope, decoded exactly like step 2
    4. single JSON object -> one-element list
    Anything else raises DecodingError carrying the step 2 failure.
    """
    if _is_empty(body):
        return []

    adapter = _list_adapter(model)
    try:
        return adapter.validate_json(body)
    except ValidationError as array_error:
        first_error = array_error

    try:
        payload = json.loads(body)
    except ValueError:
        payload = None

    if isinstance(payload, dict) and isinstance(payload.get(ENVELOPE_KEY), list):
        try:
            records = adapter.validate_json(json.dumps(payload[ENVELOPE_KEY]))
            logger.debug("Decoded %d %s record(s) from '%s' envelope", len(records), model.__name__, ENVELOPE_KEY)
            return records
        except ValidationError:
            pass

    try:
        record = model.model_validate_json(body)
        logger.debug("Decoded single %s object as a one-element list", model.__name__)
        return [record]
    except ValidationError:
        pass

    logger.warning("Could not decode %s list: %s", model.__name__, _error_detail(first_error))
    raise DecodingError(_error_detail(first_error))


def decode_one(body: bytes, model: Type[ModelT]) -> ModelT:
    """Decode a body holding exactly one record."""
    try:
        return model.model_validate_json(body)
    except ValidationError as e:
        logger.warning("Could not decode %s: %s", model.__name__, _error_detail(e))
        raise DecodingError(_error_detail(e)) from e


def decode_created(body: bytes, model: Type[ModelT], submitted: ModelT) -> ModelT:
    """Decode a create response; an empty body means the submitted record was accepted as-is."""
    if _is_empty(body):
        return submitted
    return decode_one(body, model)
