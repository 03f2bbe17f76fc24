from __future__ import annotations
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from app.api.deps import order_repo_dep, user_repo_dep
from app.api.v1.schemas.shop import OrderOut, ProfileIn, ProfileOut
from app.domain.repositories.order_repo import OrderRepo
from app.domain.repositories.user_repo import UserRepo

import logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users/{user_id}", tags=["users"])


@router.get("/profile", response_model=ProfileOut)
async def get_profile(user_id: str, user_repo: UserRepo = Depends(user_repo_dep)):
    profile = await user_repo.get_profile(user_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return ProfileOut.model_validate(profile.model_dump())


@router.put("/profile", response_model=ProfileOut)
async def update_profile(user_id: str, body: ProfileIn, user_repo: UserRepo = Depends(user_repo_dep)):
    fields = body.model_dump(exclude_unset=True)
    logger.info(f"Request: update_profile user_id={user_id} fields={sorted(fields)}")
    profile = await user_repo.upsert_profile(user_id, fields)
    return ProfileOut.model_validate(profile.model_dump())


@router.get("/orders", response_model=List[OrderOut])
async def list_orders(user_id: str, order_repo: OrderRepo = Depends(order_repo_dep)):
    """Orders of this user, newest first."""
    orders = await order_repo.list_by_user(user_id)
    logger.info(f"Response: list_orders user_id={user_id} returned {len(orders)} orders")
    return [OrderOut.model_validate(o.model_dump()) for o in orders]
