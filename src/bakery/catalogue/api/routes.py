"""FastAPI endpoints for the product catalog."""

from fastapi import APIRouter, Depends, File, Form, UploadFile
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from starlette.concurrency import run_in_threadpool

from bakery.catalogue.api.schemas import ProductListResponse, ProductResponse, ProductView
from bakery.catalogue.images.port import ImageUploadError
from bakery.catalogue.management import AddProduct, RemoveProduct, validate_product_form
from bakery.catalogue.product import Product
from bakery.errors import InvalidInput, NotFound, UpstreamFailure
from bakery.shared.dependencies import get_services, require_admin
from bakery.shared.schemas import StatusResponse

router = APIRouter(prefix="/products", tags=["products"])


@router.post(
    "/add",
    status_code=201,
    response_model=ProductResponse,
    dependencies=[Depends(require_admin)],
)
async def add_product(
    name: str | None = Form(None),
    description: str | None = Form(None),
    price: str | None = Form(None),
    category: str | None = Form(None),
    popular: str | None = Form(None),
    image1: UploadFile | None = File(None),
    image: UploadFile | None = File(None),
    services=Depends(get_services),
) -> ProductResponse:
    # The storefront admin form posts the file as ``image1``
    image = image1 if image1 is not None and image1.filename else image
    if image is None or not image.filename:
        raise InvalidInput("Product image is required")

    form = validate_product_form(name, description, price, category, popular)

    content = await image.read()
    try:
        image_url = await run_in_threadpool(services.images.upload, image.filename, content, image.content_type)
    except ImageUploadError as exc:
        raise UpstreamFailure("Failed to upload image", details=str(exc)) from exc

    command = AddProduct(image=image_url, **form)
    product = current_domain.process(command, asynchronous=False)
    return ProductResponse(message="Product added successfully", product=ProductView(**product))


@router.get("/list", response_model=ProductListResponse)
async def list_products() -> ProductListResponse:
    products = current_domain.repository_for(Product).list_newest()
    return ProductListResponse(products=[ProductView(**p.to_dict()) for p in products])


@router.get("/single/{product_id}", response_model=ProductResponse, response_model_exclude_none=True)
async def single_product(product_id: str) -> ProductResponse:
    try:
        product = current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        raise NotFound("Product not found") from None
    return ProductResponse(product=ProductView(**product.to_dict()))


@router.delete("/remove/{product_id}", response_model=StatusResponse, dependencies=[Depends(require_admin)])
async def remove_product(product_id: str) -> StatusResponse:
    current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)
    return StatusResponse(message="Product removed successfully")
