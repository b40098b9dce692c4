"""CRUD endpoints for the sweets catalogue, mounted under /api/sweets."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.core.body import parsed_body
from app.db.database import INTEGRITY_ERRORS, get_db_conn
from app.db.sweet_repository import (
    delete_sweet,
    get_sweet,
    insert_sweet,
    list_sweets,
    update_sweet,
)
from app.models.schemas import SweetCreate, SweetList, SweetOut, SweetUpdate

router = APIRouter(tags=["sweets"])


def _not_found(sweet_id: int) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Sweet {sweet_id} not found")


def _duplicate_name(name: Optional[str]) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=f"A sweet named '{name}' already exists")


@router.get("", response_model=SweetList)
@router.get("/", response_model=SweetList, include_in_schema=False)
def get_sweets(
    category: Optional[str] = Query(default=None),
    q: Optional[str] = Query(default=None, description="Substring match on the name"),
    db=Depends(get_db_conn),
):
    """List sweets ordered by name, optionally filtered by category and/or name."""
    return {"sweets": list_sweets(db, category=category, query=q)}


@router.get("/{sweet_id}", response_model=SweetOut)
def get_sweet_by_id(sweet_id: int, db=Depends(get_db_conn)):
    sweet = get_sweet(db, sweet_id)
    if not sweet:
        raise _not_found(sweet_id)
    return sweet


@router.post("", response_model=SweetOut, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=SweetOut, status_code=status.HTTP_201_CREATED, include_in_schema=False)
def create_sweet(
    payload: SweetCreate = Depends(parsed_body(SweetCreate)),
    db=Depends(get_db_conn),
):
    try:
        return insert_sweet(db, payload.name, payload.category, payload.price, payload.quantity)
    except INTEGRITY_ERRORS:
        db.rollback()
        raise _duplicate_name(payload.name)


@router.put("/{sweet_id}", response_model=SweetOut)
def replace_sweet(
    sweet_id: int,
    payload: SweetCreate = Depends(parsed_body(SweetCreate)),
    db=Depends(get_db_conn),
):
    """Replace every field of an existing sweet."""
    try:
        sweet = update_sweet(db, sweet_id, payload.model_dump())
    except INTEGRITY_ERRORS:
        db.rollback()
        raise _duplicate_name(payload.name)
    if not sweet:
        raise _not_found(sweet_id)
    return sweet


@router.patch("/{sweet_id}", response_model=SweetOut)
def patch_sweet(
    sweet_id: int,
    payload: SweetUpdate = Depends(parsed_body(SweetUpdate)),
    db=Depends(get_db_conn),
):
    """Change only the fields present in the body."""
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    if not changes:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update")
    try:
        sweet = update_sweet(db, sweet_id, changes)
    except INTEGRITY_ERRORS:
        db.rollback()
        raise _duplicate_name(changes.get("name"))
    if not sweet:
        raise _not_found(sweet_id)
    return sweet


@router.delete("/{sweet_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_sweet(sweet_id: int, db=Depends(get_db_conn)):
    if not delete_sweet(db, sweet_id):
        raise _not_found(sweet_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
