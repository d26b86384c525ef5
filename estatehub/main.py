import logging
from pathlib import Path

from fastapi import FastAPI, Request, Depends
from fastapi.templating import Jinja2Templates
from fastapi.responses import HTMLResponse, JSONResponse
from sqlalchemy.orm import Session, selectinload

from estatehub.config import get_settings
from estatehub.database import engine, Base, get_db
from estatehub.exceptions import NotFoundError, StoreError, ValidationError
from estatehub.models import Agency, Property
from estatehub.models.enums import AgencyStatus
from estatehub.routers import properties_router, enquiries_router, agencies_router, dashboard_router, users_router
from estatehub.services.search import PropertySearchService, SearchCriteria, SqlAlchemyPropertyStore

settings = get_settings()

log_level = logging.DEBUG if settings.debug else logging.INFO
logging.basicConfig(
    level=log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logging.getLogger("passlib").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)

Base.metadata.create_all(bind=engine)

app = FastAPI(
    title=settings.app_name,
    description="Платформа объявлений агентств недвижимости: поиск, объекты, заявки",
    version="1.0.0"
)

app.include_router(properties_router)
app.include_router(enquiries_router)
app.include_router(agencies_router)
app.include_router(dashboard_router)
app.include_router(users_router)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

FEATURED_LIMIT = 6


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"error": exc.message, "field": exc.field})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"error": str(exc)})


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    logger.error(f"Store error on {request.method} {request.url.path}: {exc.__cause__}")
    return JSONResponse(status_code=500, content={"error": str(exc)})


def _get_active_agency_or_404(db: Session, slug: str) -> Agency:
    agency = db.query(Agency).filter(Agency.slug == slug).first()
    if not agency or not agency.is_active:
        raise NotFoundError("Агентство не найдено")
    return agency


@app.get("/", response_class=HTMLResponse)
def index(request: Request, db: Session = Depends(get_db)):
    """Главная страница - список активных агентств"""
    agencies = db.query(Agency)\
        .filter(Agency.status == AgencyStatus.ACTIVE.value)\
        .order_by(Agency.name)\
        .all()

    return templates.TemplateResponse(request, "index.html", {"agencies": agencies})


@app.get("/agency/{slug}", response_class=HTMLResponse)
def agency_home(request: Request, slug: str, db: Session = Depends(get_db)):
    """Сайт агентства - избранные объекты"""
    agency = _get_active_agency_or_404(db, slug)
    featured = db.query(Property)\
        .options(selectinload(Property.images))\
        .filter(
            Property.agency_id == agency.id,
            Property.is_published.is_(True),
            Property.is_featured.is_(True)
        )\
        .order_by(Property.created_at.desc(), Property.id.asc())\
        .limit(FEATURED_LIMIT)\
        .all()

    return templates.TemplateResponse(request, "agency.html", {
        "agency": agency,
        "featured": featured
    })


@app.get("/agency/{slug}/search", response_class=HTMLResponse)
def agency_search(request: Request, slug: str, db: Session = Depends(get_db)):
    """Поиск по объектам одного агентства"""
    agency = _get_active_agency_or_404(db, slug)

    params = dict(request.query_params)
    params["agencySlug"] = agency.slug
    criteria = SearchCriteria.from_query_params(params)
    result = PropertySearchService(SqlAlchemyPropertyStore(db)).search(criteria)

    return templates.TemplateResponse(request, "search.html", {
        "agency": agency,
        "criteria": criteria,
        "result": result
    })


@app.get("/health")
async def health_check():
    return {"status": "ok"}
