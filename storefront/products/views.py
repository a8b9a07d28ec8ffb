from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from storefront.utils.security import require_admin
from storefront.products import service
from storefront.products.service import ProductForm, ProductPhoto

router = APIRouter(prefix="/api/v1/product", tags=["Product API"])

class ProductFiltersRequest(BaseModel):
    checked: List[str] = []
    radio: List[float] = []

def _respond(result) -> JSONResponse:
    status_code, body = result
    return JSONResponse(body, status_code=status_code)

async def _read_photo(photo: Optional[UploadFile]) -> Optional[ProductPhoto]:
    if photo is None:
        return None
    return ProductPhoto(await photo.read(), photo.content_type)

def product_form(
    name: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    quantity: Optional[str] = Form(None),
    shipping: Optional[str] = Form(None),
) -> ProductForm:
    return ProductForm(name, description, price, category, quantity, shipping)

@router.post("/create-product")
async def create_product(
    form: ProductForm = Depends(product_form),
    photo: Optional[UploadFile] = File(None),
    _: dict = Depends(require_admin),
):
    return _respond(service.create_product(form, await _read_photo(photo)))

@router.put("/update-product/{pid}")
async def update_product(
    pid: str,
    form: ProductForm = Depends(product_form),
    photo: Optional[UploadFile] = File(None),
    _: dict = Depends(require_admin),
):
    return _respond(service.update_product(pid, form, await _read_photo(photo)))

@router.get("/get-product")
def get_products():
    return _respond(service.list_products())

@router.get("/get-product/{slug}")
def get_product(slug: str):
    return _respond(service.get_product(slug))

@router.get("/product-photo/{pid}")
def product_photo(pid: str):
    try:
        photo = service.get_product_photo(pid)
    except Exception as e:
        return JSONResponse({"success": False, "message": "Error while getting photo", "error": str(e)}, status_code=500)
    if photo is None:
        return JSONResponse({"success": False, "message": "Photo not found"}, status_code=404)
    return Response(content=photo.data, media_type=photo.content_type)

@router.delete("/delete-product/{pid}")
def delete_product(pid: str, _: dict = Depends(require_admin)):
    return _respond(service.delete_product(pid))

@router.post("/product-filters")
def product_filters(req: ProductFiltersRequest):
    return _respond(service.filter_products(req.checked, req.radio))

@router.get("/product-count")
def product_count():
    return _respond(service.count_products())

@router.get("/product-list/{page}")
def product_list(page: int):
    return _respond(service.list_products_page(page))

@router.get("/search/{keyword}")
def search_products(keyword: str):
    return _respond(service.search_products(keyword))

@router.get("/related-product/{pid}/{cid}")
def related_products(pid: str, cid: str):
    return _respond(service.related_products(pid, cid))

@router.get("/product-category/{slug}")
def product_category(slug: str):
    return _respond(service.products_by_category(slug))
