"""Playlist endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.auth import CurrentUser
from vidtube.db import crud, get_db
from vidtube.db.views import get_playlist_detail, get_user_playlists
from vidtube.errors import parse_id
from vidtube.models.schemas import (
    ApiResponse,
    Empty,
    PlaylistCreate,
    PlaylistDetail,
    PlaylistRead,
    PlaylistUpdate,
    UserPlaylistItem,
    ok,
)

router = APIRouter()


@router.post("", response_model=ApiResponse[PlaylistRead], status_code=201)
async def create_playlist(
    data: PlaylistCreate,
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[PlaylistRead]:
    playlist = await crud.create_playlist(db, user.id, data.name, data.description)
    return ok(await crud.playlist_read(db, playlist), "Playlist created successfully", status_code=201)


@router.get("/user/{user_id}", response_model=ApiResponse[list[UserPlaylistItem]])
async def user_playlists(
    user_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[list[UserPlaylistItem]]:
    playlists = await get_user_playlists(db, parse_id(user_id, "userId"))
    return ok(playlists, "Playlists fetched successfully")


@router.get("/{playlist_id}", response_model=ApiResponse[PlaylistDetail])
async def get_playlist(
    playlist_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[PlaylistDetail]:
    playlist = await get_playlist_detail(db, parse_id(playlist_id, "playlistId"))
    return ok(playlist, "Playlist fetched successfully")


@router.patch("/{playlist_id}", response_model=ApiResponse[PlaylistRead])
async def update_playlist(
    playlist_id: str,
    data: PlaylistUpdate,
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[PlaylistRead]:
    playlist = await crud.update_playlist(db, parse_id(playlist_id, "playlistId"), user.id, data.name, data.description)
    return ok(await crud.playlist_read(db, playlist), "Playlist updated successfully")


@router.delete("/{playlist_id}", response_model=ApiResponse[Empty])
async def delete_playlist(
    playlist_id: str,
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[Empty]:
    await crud.delete_playlist(db, parse_id(playlist_id, "playlistId"), user.id)
    return ok(Empty(), "Playlist deleted successfully")


@router.patch("/add/{video_id}/{playlist_id}", response_model=ApiResponse[PlaylistRead])
async def add_video(
    video_id: str,
    playlist_id: str,
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[PlaylistRead]:
    playlist = await crud.add_video_to_playlist(
        db, parse_id(playlist_id, "playlistId"), parse_id(video_id, "videoId"), user.id
    )
    return ok(await crud.playlist_read(db, playlist), "Video added to playlist")


@router.patch("/remove/{video_id}/{playlist_id}", response_model=ApiResponse[PlaylistRead])
async def remove_video(
    video_id: str,
    playlist_id: str,
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[PlaylistRead]:
    playlist = await crud.remove_video_from_playlist(
        db, parse_id(playlist_id, "playlistId"), parse_id(video_id, "videoId"), user.id
    )
    return ok(await crud.playlist_read(db, playlist), "Video removed from playlist")
