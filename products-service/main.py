import sys
import time
import uuid
from typing import Any, Optional
from fastapi import Body, Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse
from loguru import logger
from pydantic import ValidationError
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from config import SERVICE_NAME, Settings
from models import Product, find_product_index, is_in_stock, next_product_id, parse_product_id
from pages import render_landing_page
from schemas import ErrorResponse, MessageResponse, ProductCreate, ProductUpdate
from storage import ProductStorage

# Prometheus metrics
REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["service", "method", "endpoint", "status"]
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["service", "method", "endpoint"]
)
ERROR_COUNT = Counter(
    "http_errors_total",
    "Total HTTP errors",
    ["service", "endpoint", "error_type"]
)


class ProductNotFoundError(Exception):
    def __init__(self, raw_id: str):
        super().__init__(f"Product {raw_id} not found")
        self.raw_id = raw_id


def configure_logging(settings: Settings):
    # Config logging JSON (niveaux INFO, WARNING, ERROR) + console
    logger.remove()
    logger.add(sys.stderr, level=settings.log_level)
    logger.add(
        sink=settings.log_file,
        format="{time:YYYY-MM-DDTHH:mm:ss.SSSZ} | {level} | {message} | {extra}",
        level=settings.log_level,
        serialize=True,
        rotation="1 day",
    )


def get_storage(request: Request) -> ProductStorage:
    return request.app.state.storage


def _locate(products, raw_id: str, endpoint: str) -> int:
    index = find_product_index(products, parse_product_id(raw_id))
    if index == -1:
        logger.warning(f"Product {raw_id} not found")
        ERROR_COUNT.labels(service=SERVICE_NAME, endpoint=endpoint, error_type="not_found").inc()
        raise ProductNotFoundError(raw_id)
    return index


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings)

    app = FastAPI(title="Product API")
    app.state.settings = settings
    app.state.storage = ProductStorage(settings.products_file)

    # Middleware pour logger les requests avec correlation ID
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        trace_id = request.headers.get("X-Trace-ID", str(uuid.uuid4()))
        start_time = time.time()

        with logger.contextualize(trace_id=trace_id, service=SERVICE_NAME):
            logger.bind(method=request.method, url=str(request.url)).info(
                f"Request: {request.method} {request.url.path}"
            )

            response = await call_next(request)
            latency = time.time() - start_time

            REQUEST_COUNT.labels(
                service=SERVICE_NAME,
                method=request.method,
                endpoint=request.url.path,
                status=response.status_code
            ).inc()
            REQUEST_LATENCY.labels(
                service=SERVICE_NAME,
                method=request.method,
                endpoint=request.url.path
            ).observe(latency)

            logger.bind(status=response.status_code, latency=latency).info(
                f"Response status: {response.status_code}"
            )

            response.headers["X-Trace-ID"] = trace_id
            return response

    @app.exception_handler(RequestValidationError)
    async def invalid_product_data(request: Request, exc: RequestValidationError):
        logger.bind(errors=len(exc.errors())).warning(f"Invalid product data on {request.method} {request.url.path}")
        ERROR_COUNT.labels(service=SERVICE_NAME, endpoint=request.url.path, error_type="invalid_data").inc()
        return JSONResponse(status_code=400, content={"error": "Invalid product data"})

    @app.exception_handler(ProductNotFoundError)
    async def product_not_found(request: Request, exc: ProductNotFoundError):
        return JSONResponse(status_code=404, content={"error": "Product not found"})

    @app.get("/", response_class=HTMLResponse)
    async def landing_page():
        """Page d'accueil HTML avec la liste des endpoints"""
        return render_landing_page(settings.port)

    @app.get("/metrics")
    async def metrics():
        """Endpoint /metrics compatible Prometheus"""
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.get("/health")
    async def health():
        """Health check endpoint"""
        return {"status": "healthy", "service": SERVICE_NAME}

    @app.get("/products")
    def get_products(storage: ProductStorage = Depends(get_storage)):
        logger.info("Fetching all products")
        return storage.load()

    @app.get("/products/instock")
    def get_products_in_stock(storage: ProductStorage = Depends(get_storage)):
        logger.info("Fetching in-stock products")
        return [p for p in storage.load() if is_in_stock(p)]

    @app.post("/products", status_code=201, responses={400: {"model": ErrorResponse}})
    def create_product(product: ProductCreate, storage: ProductStorage = Depends(get_storage)):
        logger.info(f"Creating product: {product.name}")
        products = storage.load()

        new_id = next_product_id(products)
        new_product = Product(id=new_id, name=product.name, price=product.price, in_stock=product.in_stock).to_record()
        products.append(new_product)
        storage.save(products)
        logger.info(f"Product created with ID {new_id}")
        return new_product

    @app.put("/products/{product_id}", responses={404: {"model": ErrorResponse}})
    def update_product(
        product_id: str,
        body: Any = Body(None),
        storage: ProductStorage = Depends(get_storage),
    ):
        logger.info(f"Updating product {product_id}")
        products = storage.load()
        index = _locate(products, product_id, "/products/{product_id}")

        # Le 404 passe avant la validation du body
        if body is not None:
            try:
                changes = ProductUpdate.model_validate(body).changes()
            except ValidationError as exc:
                raise RequestValidationError(exc.errors(include_url=False, include_context=False))
            products[index].update(changes)
        storage.save(products)
        return products[index]

    @app.delete(
        "/products/{product_id}",
        response_model=MessageResponse,
        responses={404: {"model": ErrorResponse}},
    )
    def delete_product(product_id: str, storage: ProductStorage = Depends(get_storage)):
        logger.info(f"Deleting product {product_id}")
        products = storage.load()
        index = _locate(products, product_id, "/products/{product_id}")

        del products[index]
        storage.save(products)
        return {"message": "Product deleted successfully"}

    return app


def main(settings: Optional[Settings] = None):
    settings = settings or Settings.from_env()
    application = create_app(settings)
    logger.info(f"Starting Products Service on port {settings.port}")
    import uvicorn

    try:
        uvicorn.run(application, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    except SystemExit as exc:
        if exc.code:
            logger.error(
                f"Server failed to start on port {settings.port}. "
                f"If the port is already in use, start with a different PORT, e.g. PORT={settings.port + 1} python main.py"
            )
        raise
    except Exception:
        logger.exception("Server error")
        sys.exit(1)


app = create_app()

if __name__ == "__main__":
    main()
