from fastapi import APIRouter, Depends, Request, status
from uuid import UUID
import structlog

from app.core.responses import problem_response, result_response
from app.core.security import admin_access, read_access
from app.schemas.product_schemas import (
    ProblemDetails,
    ProductCreateRequest,
    ProductEnvelope,
    ProductListEnvelope,
)
from app.services.product_service import ProductService, get_product_service

logger = structlog.get_logger()

router = APIRouter(prefix="/products", tags=["Products"])

_problem_responses = {
    404: {"model": ProblemDetails},
    500: {"model": ProblemDetails},
}


@router.get("", response_model=ProductListEnvelope, responses=_problem_responses)
async def get_all_products(
    request: Request,
    product_service: ProductService = Depends(get_product_service),
    current_user: dict = Depends(read_access),
):
    """Get all products"""
    logger.info("Getting all products")

    result = await product_service.get_all_products()

    if result.succeeded:
        logger.info("Successfully retrieved products", count=len(result.value or []))
    else:
        logger.warning("Failed to get products", error=result.error_message, status_code=result.status_code)
    return result_response(result, instance=request.url.path)


@router.get("/{product_id}", response_model=ProductEnvelope, responses=_problem_responses)
async def get_product_by_id(
    product_id: UUID,
    request: Request,
    product_service: ProductService = Depends(get_product_service),
    current_user: dict = Depends(read_access),
):
    """Get a specific product by ID"""
    logger.info("Getting product", product_id=str(product_id))

    result = await product_service.get_product_by_id(product_id)

    if result.succeeded:
        logger.info("Successfully retrieved product", product_id=str(product_id))
    elif result.status_code == status.HTTP_404_NOT_FOUND:
        logger.warning("Product not found", product_id=str(product_id))
        return problem_response(404, "Product not found", instance=request.url.path)
    else:
        logger.warning("Failed to get product", product_id=str(product_id), error=result.error_message)
    return result_response(result, instance=request.url.path)


@router.post(
    "",
    response_model=ProductEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ProblemDetails}, **_problem_responses},
)
async def create_product(
    product: ProductCreateRequest,
    request: Request,
    product_service: ProductService = Depends(get_product_service),
    current_user: dict = Depends(admin_access),
):
    """Create a new product"""
    user_id = current_user.get("user_id", "unknown")
    logger.info("Creating product", user_id=user_id, product_name=product.name)

    result = await product_service.create_product(product)

    if not result.succeeded:
        logger.warning("Failed to create product", user_id=user_id, error=result.error_message)
        return result_response(result, instance=request.url.path)

    product_id = result.value.id
    logger.info("Successfully created product", product_id=str(product_id), user_id=user_id)
    location = str(request.url_for("get_product_by_id", product_id=str(product_id)))
    return result_response(result, success_status=status.HTTP_201_CREATED, location=location)
