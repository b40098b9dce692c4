"""Request body parsing that accepts both JSON and urlencoded forms."""
import json
from typing import Type, TypeVar

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from app.config import MAX_BODY_BYTES

ModelT = TypeVar("ModelT", bound=BaseModel)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


async def read_payload(request: Request) -> dict:
    """Return the request body as a plain dict, whatever the encoding."""
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type == FORM_CONTENT_TYPE:
        # Starlette caps each form field at 1 MB by default; the body limit applies instead
        form = await request.form(max_part_size=MAX_BODY_BYTES)
        return dict(form)

    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Malformed JSON body")
    if not isinstance(data, dict):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="JSON body must be an object")
    return data


def parsed_body(model: Type[ModelT]):
    """
    Build a FastAPI dependency that validates the body against `model`.

        @router.post("/")
        def create(payload: SweetCreate = Depends(parsed_body(SweetCreate))): ...
    """

    async def dependency(request: Request) -> ModelT:
        data = await read_payload(request)
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise RequestValidationError(exc.errors(include_url=False))

    return dependency
