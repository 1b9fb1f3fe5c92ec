"""
Admin console pages
Server-rendered dashboard, registration form, user listing, and placeholders
"""

from pathlib import Path
from typing import Dict, Optional
from urllib.parse import parse_qs

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates
import structlog

from inventory_admin.admin.listing import ListingErrored, ListingLoaded, UserListing
from inventory_admin.admin.navigation import resolve_route
from inventory_admin.models.user import RegistrationRequest
from inventory_admin.services.registration_service import RegistrationRejected, RegistrationSuccess
from inventory_admin.utils.dependencies import AppConfigDep, ProfileStoreDep, RegistrationServiceDep

logger = structlog.get_logger(__name__)

router = APIRouter()

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATE_DIR))

DASHBOARD_STATS = (
    {"title": "Total Products", "value": "0", "icon": "📦"},
    {"title": "Low Stock Items", "value": "0", "icon": "⚠️"},
    {"title": "Pending Orders", "value": "0", "icon": "📋"},
    {"title": "Total Sales", "value": "RM 0", "icon": "💰"},
)

REGISTRATION_FIELDS = ("email", "password", "confirm_password", "first_name", "last_name", "role")

UNDECODABLE_FORM_MESSAGE = "Form data could not be read; please submit it again"


def _render(request: Request, template: str, context: Dict[str, object], status_code: int = 200) -> HTMLResponse:
    route = resolve_route(request.url.path)
    context = {"route": route, **context}
    return templates.TemplateResponse(request, template, context, status_code=status_code)


async def _parse_registration_form(request: Request) -> Optional[RegistrationRequest]:
    """Registration fields from an urlencoded body, None when the body cannot be decoded"""
    body_bytes = await request.body()
    content_type = request.headers.get("content-type", "")
    charset = "utf-8"
    if "charset=" in content_type:
        charset = content_type.split("charset=", 1)[1].split(";", 1)[0].strip() or "utf-8"
    try:
        decoded = body_bytes.decode(charset)
    except (LookupError, UnicodeDecodeError) as e:
        logger.warning("Undecodable registration form", charset=charset, error=str(e))
        return None
    data = parse_qs(decoded, keep_blank_values=True)
    return RegistrationRequest(**{name: data[name][0] for name in REGISTRATION_FIELDS if name in data})


@router.get("/", response_class=HTMLResponse)
async def dashboard(request: Request):
    """Admin dashboard"""
    return _render(request, "dashboard.html", {"stats": DASHBOARD_STATS})


@router.get("/register", response_class=HTMLResponse)
async def registration_form(request: Request, app_config: AppConfigDep):
    """User registration form"""
    return _render(request, "register.html", {
        "form": RegistrationRequest(),
        "roles": app_config.registrable_roles,
    })


@router.post("/register", response_class=HTMLResponse)
async def submit_registration(
    request: Request,
    registration_service: RegistrationServiceDep,
    app_config: AppConfigDep
):
    """Handle the registration form"""
    roles = app_config.registrable_roles
    form = await _parse_registration_form(request)
    if form is None:
        return _render(request, "register.html", {
            "form": RegistrationRequest(),
            "roles": roles,
            "errors": [UNDECODABLE_FORM_MESSAGE],
        }, status_code=400)

    outcome = await registration_service.register(form)

    if isinstance(outcome, RegistrationSuccess):
        return _render(request, "register.html", {
            "form": RegistrationRequest(),
            "roles": roles,
            "success": outcome.message,
        })

    errors = outcome.errors if isinstance(outcome, RegistrationRejected) and outcome.errors else [outcome.message]
    status_code = 400 if isinstance(outcome, RegistrationRejected) else 503
    # Passwords are never echoed back into the form
    form = form.model_copy(update={"password": "", "confirm_password": ""})
    return _render(request, "register.html", {
        "form": form,
        "roles": roles,
        "errors": errors,
    }, status_code=status_code)


@router.get("/users", response_class=HTMLResponse)
async def user_management(request: Request, profile_store: ProfileStoreDep):
    """All registered users, refreshed on every request"""
    listing = UserListing(profile_store)
    state = await listing.refresh()

    return _render(request, "users.html", {
        "records": state.records if isinstance(state, ListingLoaded) else [],
        "error": state.message if isinstance(state, ListingErrored) else None,
    })


@router.get("/{path:path}", response_class=HTMLResponse)
async def placeholder(request: Request, path: str):
    """Sections not built yet, and the fallback for unknown paths"""
    # Keep API paths out of console routing
    if path.startswith("api/") or path == "api":
        return JSONResponse(status_code=404, content={"error": True, "message": "Not found", "status_code": 404})

    route = resolve_route(request.url.path)
    if route.is_fallback:
        logger.info("Unknown console path", path=request.url.path)
    return _render(request, "placeholder.html", {"page": route.placeholder})
