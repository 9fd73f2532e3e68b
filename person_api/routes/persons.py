"""
Person API — Person Route Handlers
===================================

What:  POST /api, GET/PATCH/DELETE /api/{id_or_name}.
How:   Extracts path and body values, delegates to the PersonService held on
       `app.state`, and returns JSON. Not-found and store failures are raised
       by the service and turned into responses by the global handlers.

`id_or_name` is either a 24-character hex identifier or an exact person name.
It is declared as a path parameter so names containing "/" (sent as %2F)
still reach the handlers.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request

from person_api.schemas.person import (
    ErrorResponse,
    MessageResponse,
    PersonPayload,
    PersonResponse,
)
from person_api.services.person_service import PersonService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Persons"])

ID_OR_NAME_DESCRIPTION = "The person id or name"


def get_person_service(request: Request) -> PersonService:
    """FastAPI dependency returning the app's PersonService."""
    return request.app.state.person_service


@router.post(
    "",
    status_code=201,
    response_model=PersonResponse,
    responses={
        201: {"description": "The created person response", "model": PersonResponse},
        500: {"description": "Error message", "model": ErrorResponse},
    },
    summary="Add a new person",
)
@router.post("/", status_code=201, response_model=PersonResponse, include_in_schema=False)
async def create_person(
    payload: Optional[PersonPayload] = None,
    service: PersonService = Depends(get_person_service),
) -> dict:
    """
    Create a person.

    The body is optional; a missing body stores a person with null fields.
    """
    if payload is None:
        return await service.create_person()
    return await service.create_person(name=payload.name, age=payload.age)


@router.get(
    "/{id_or_name:path}",
    response_model=PersonResponse,
    responses={
        200: {"description": "The person response by id or name", "model": PersonResponse},
        404: {"description": "The person was not found", "model": ErrorResponse},
        500: {"description": "Error message", "model": ErrorResponse},
    },
    summary="Get the person by id or name",
    description=ID_OR_NAME_DESCRIPTION,
)
async def get_person(
    id_or_name: str,
    service: PersonService = Depends(get_person_service),
) -> dict:
    return await service.get_person(id_or_name)


@router.patch(
    "/{id_or_name:path}",
    response_model=PersonResponse,
    responses={
        200: {"description": "The updated person response", "model": PersonResponse},
        404: {"description": "The person was not found", "model": ErrorResponse},
        500: {"description": "Error message", "model": ErrorResponse},
    },
    summary="Update a person",
    description=(
        "Updates the person matched by id or name. Only the fields present in "
        "the body are changed; omitted fields keep their current values."
    ),
)
async def update_person(
    id_or_name: str,
    payload: Optional[PersonPayload] = None,
    service: PersonService = Depends(get_person_service),
) -> dict:
    """
    Partially update a person.

    The body is optional; an empty or missing body changes nothing and
    returns the current record.
    """
    changes = payload.supplied_fields() if payload is not None else {}
    return await service.update_person(id_or_name, changes)


@router.delete(
    "/{id_or_name:path}",
    response_model=MessageResponse,
    responses={
        200: {"description": "The deleted person response", "model": MessageResponse},
        404: {"description": "The person was not found", "model": ErrorResponse},
        500: {"description": "Error message", "model": ErrorResponse},
    },
    summary="Delete a person",
    description=ID_OR_NAME_DESCRIPTION,
)
async def delete_person(
    id_or_name: str,
    service: PersonService = Depends(get_person_service),
) -> MessageResponse:
    message = await service.delete_person(id_or_name)
    return MessageResponse(message=message)
