from fastapi import APIRouter

router_users = APIRouter(
    prefix="/api/v1/users",
    tags=["Users"])
