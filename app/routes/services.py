# app/routes/services.py
from typing import List

from fastapi import APIRouter, Depends, status

from app.core.error_messages import ErrorResponses
from app.database import get_db
from app.middleware.rbac import get_current_admin
from app.models import services as catalog
from app.schemas.services import ServiceCreate, ServiceOut, ServiceUpdate

service_router = APIRouter(tags=["Services"])


# Customer-facing: active services only
@service_router.get("", response_model=List[ServiceOut])
async def list_services(db=Depends(get_db)):
    return await catalog.list_services(db)


# Admin: every service, active or not
@service_router.get("/all", response_model=List[ServiceOut])
async def list_all_services(db=Depends(get_db), admin=Depends(get_current_admin)):
    return await catalog.list_services(db, include_inactive=True)


@service_router.get("/{service_id}", response_model=ServiceOut)
async def get_service(service_id: str, db=Depends(get_db)):
    service = await catalog.get_service(db, service_id)
    if not service:
        raise ErrorResponses.SERVICE_NOT_FOUND
    return service


@service_router.post("", response_model=ServiceOut, status_code=status.HTTP_201_CREATED)
async def create_service(data: ServiceCreate, db=Depends(get_db), admin=Depends(get_current_admin)):
    return await catalog.create_service(db, data.model_dump())


@service_router.put("/{service_id}", response_model=ServiceOut)
async def update_service(
    service_id: str, data: ServiceUpdate, db=Depends(get_db), admin=Depends(get_current_admin)
):
    service = await catalog.update_service(db, service_id, data.changes())
    if not service:
        raise ErrorResponses.SERVICE_NOT_FOUND
    return service


@service_router.delete("/{service_id}")
async def delete_service(service_id: str, db=Depends(get_db), admin=Depends(get_current_admin)):
    if not await catalog.delete_service(db, service_id):
        raise ErrorResponses.SERVICE_NOT_FOUND
    return {"message": "Service removed"}
