from typing import Optional
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from storefront.utils.security import require_admin
from storefront.categories import service

router = APIRouter(prefix="/api/v1/category", tags=["Category API"])

class CategoryRequest(BaseModel):
    name: Optional[str] = None

def _respond(result) -> JSONResponse:
    status_code, body = result
    return JSONResponse(body, status_code=status_code)

@router.post("/create-category")
def create_category(req: CategoryRequest, _: dict = Depends(require_admin)):
    return _respond(service.create_category(req.name))

@router.put("/update-category/{category_id}")
def update_category(category_id: str, req: CategoryRequest, _: dict = Depends(require_admin)):
    return _respond(service.update_category(category_id, req.name))

@router.get("/get-category")
def get_categories():
    return _respond(service.list_categories())

@router.get("/single-category/{slug}")
def single_category(slug: str):
    return _respond(service.get_category(slug))

@router.delete("/delete-category/{category_id}")
def delete_category(category_id: str, _: dict = Depends(require_admin)):
    return _respond(service.delete_category(category_id))
