"""API v1 汇总路由：统一挂载所有版本化的子路由。"""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    auth,
    notifications,
    options,
    organizations,
    requests,
    tasks,
    users,
    vehicles,
)

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(organizations.router)
api_router.include_router(vehicles.router)
api_router.include_router(requests.router)
api_router.include_router(tasks.router)
api_router.include_router(notifications.router)
api_router.include_router(options.router)
