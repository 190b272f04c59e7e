"""
Goal API endpoints
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, field_validator

from cgest.api.deps import get_storage
from cgest.api.v1.schemas import GoalResponse, normalize_amount
from cgest.application.goals import (
    CreateGoalUseCase, DeleteGoalUseCase, GoalValidationError, UpdateGoalUseCase,
)
from cgest.infrastructure.storage.repository import Storage

router = APIRouter(prefix="/api/v1/goals", tags=["goals"])


class CreateGoalRequest(BaseModel):
    description: str
    target_value: str
    current_value: str = "0"
    deadline: Optional[date] = None

    @field_validator("target_value", "current_value")
    @classmethod
    def validate_amounts(cls, v: str) -> str:
        return normalize_amount(v)


class UpdateGoalRequest(BaseModel):
    description: Optional[str] = None
    target_value: Optional[str] = None
    current_value: Optional[str] = None
    deadline: Optional[date] = None

    @field_validator("target_value", "current_value")
    @classmethod
    def validate_amounts(cls, v: Optional[str]) -> Optional[str]:
        return normalize_amount(v)


@router.post("/", response_model=GoalResponse)
def create_goal(req: CreateGoalRequest, storage: Storage = Depends(get_storage)):
    try:
        goal = CreateGoalUseCase(storage).execute(**req.model_dump())
    except GoalValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return GoalResponse.from_record(goal)


@router.get("/", response_model=list[GoalResponse])
def list_goals(storage: Storage = Depends(get_storage)):
    return [GoalResponse.from_record(g) for g in storage.goals.list()]


@router.patch("/{goal_id}", response_model=GoalResponse)
def update_goal(goal_id: str, req: UpdateGoalRequest, storage: Storage = Depends(get_storage)):
    try:
        goal = UpdateGoalUseCase(storage).execute(goal_id, **req.model_dump(exclude_unset=True))
    except GoalValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return GoalResponse.from_record(goal)


@router.delete("/{goal_id}", status_code=204)
def delete_goal(goal_id: str, storage: Storage = Depends(get_storage)):
    try:
        DeleteGoalUseCase(storage).execute(goal_id)
    except GoalValidationError as e:
        raise HTTPException(status_code=404, detail=str(e))
