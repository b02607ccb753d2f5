"""
Room API Routes.

Room listing, creation and availability search.
"""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status

from roombook.api.deps import get_booking_system, get_room_repo
from roombook.api.schemas import RoomCreateRequest, RoomResponse, as_utc
from roombook.components.booking import (
    BookingSystem,
    ConcurrentUpdateError,
    InvalidArgumentError,
    RoomRepoPort,
)
from roombook.domain.entities import Room

router = APIRouter()


@router.get("", response_model=list[RoomResponse])
def list_rooms(repo: RoomRepoPort = Depends(get_room_repo)) -> list[RoomResponse]:
    return [RoomResponse.from_room(room) for room in repo.list_all()]


@router.post("", response_model=RoomResponse, status_code=status.HTTP_201_CREATED)
def create_room(
    request: RoomCreateRequest,
    repo: RoomRepoPort = Depends(get_room_repo),
) -> RoomResponse:
    if repo.get_by_id(request.id) is not None:
        raise HTTPException(status_code=409, detail=f"Room {request.id} already exists")

    room = Room(id=request.id, name=request.name)
    try:
        repo.save(room)
    except ConcurrentUpdateError as e:
        # Created by another request since the check above
        raise HTTPException(status_code=409, detail=f"Room {request.id} already exists") from e
    return RoomResponse.from_room(room)


@router.get("/available", response_model=list[RoomResponse])
def available_rooms(
    start: datetime | None = Query(None, description="Interval start (inclusive)"),
    end: datetime | None = Query(None, description="Interval end (exclusive)"),
    booking_system: BookingSystem = Depends(get_booking_system),
) -> list[RoomResponse]:
    """Rooms with no booking overlapping [start, end)."""
    try:
        rooms = booking_system.get_available_rooms(as_utc(start), as_utc(end))
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    return [RoomResponse.from_room(room) for room in rooms]


@router.get("/{room_id}", response_model=RoomResponse)
def get_room(room_id: str, repo: RoomRepoPort = Depends(get_room_repo)) -> RoomResponse:
    room = repo.get_by_id(room_id)
    if room is None:
        raise HTTPException(status_code=404, detail="Room not found")
    return RoomResponse.from_room(room)
