"""
Profile endpoints
"""
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from cgest.api.deps import get_storage
from cgest.application.profile import ProfileService
from cgest.infrastructure.storage.repository import Storage

router = APIRouter(prefix="/api/v1/profile", tags=["profile"])


class ProfileResponse(BaseModel):
    id: str
    email: str
    name: Optional[str]
    avatar: Optional[str]


class UpdateProfileRequest(BaseModel):
    name: Optional[str] = None
    avatar: Optional[str] = None
    email: Optional[str] = None


@router.get("/", response_model=ProfileResponse)
def get_profile(storage: Storage = Depends(get_storage)):
    p = ProfileService(storage).get_profile()
    return ProfileResponse(id=p.id, email=p.email, name=p.name, avatar=p.avatar)


@router.put("/", response_model=ProfileResponse)
def update_profile(req: UpdateProfileRequest, storage: Storage = Depends(get_storage)):
    p = ProfileService(storage).update_profile(**req.model_dump(exclude_unset=True))
    return ProfileResponse(id=p.id, email=p.email, name=p.name, avatar=p.avatar)
