"""
FastAPI Application Entry Point

Kiosk Admin Console - store owner back office for the kiosk platform.
Mock AI services in development, OpenAI in staging/production.

Endpoints:
    - POST /api/translate-menu: Korean menu name -> English menu name
    - POST /api/generate-menu-image: Menu name -> picture (URL or data URL)
    - /console/...: JSON views and actions of the console screens
    - /console/confirmation: Pending confirmation prompt (confirm / cancel)
    - GET /health: System health check

Every /console response carries the toasts queued while handling it.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

import httpx
from fastapi import Depends, FastAPI, File, Form, Request, Response, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from kiosk_admin.console import Console, build_console
from kiosk_admin.core.config import get_settings, setup_logging
from kiosk_admin.schemas import (
    AdminNameBody,
    CategoryForm,
    CredentialsBody,
    EmailCodeBody,
    GenerateImageRequest,
    GenerateImageResponse,
    ImageFile,
    MenuUpdateForm,
    MessageResponse,
    PasswordBody,
    PasswordChangeBody,
    SignUpBody,
    StoreNameBody,
    TableCountBody,
    TranslateRequest,
    TranslateResponse,
)
from kiosk_admin.screens import BaseScreen
from kiosk_admin.services.imaging import get_image_service
from kiosk_admin.services.translation import get_translation_service

# Initialize configuration and logging
settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.

    The console reaches the AI endpoints through an in-process ASGI
    transport, so the auto-fill pipeline talks to them over real HTTP
    semantics without a network hop.
    """
    logger.info("=" * 60)
    logger.info(f"Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Backend: {settings.backend_api_url}")
    logger.info("=" * 60)

    translation_service = get_translation_service()
    image_service = get_image_service()
    logger.info(f"Translation Service: {translation_service.provider_name}")
    logger.info(f"Image Service: {image_service.provider_name}")

    if settings.use_real_services:
        missing = settings.validate_production_config()
        if missing:
            logger.warning(f"Missing production config: {missing}")

    owned: list[httpx.AsyncClient] = []
    if getattr(app.state, "console", None) is None:
        collaborators = httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app),
            base_url="http://console",
            timeout=settings.http_timeout_seconds,
        )
        fetcher = httpx.AsyncClient(timeout=settings.http_timeout_seconds)
        owned = [collaborators, fetcher]
        app.state.console = build_console(collaborators, fetcher=fetcher)

    logger.info("Application ready")

    yield

    logger.info("Shutting down...")
    if owned:
        await app.state.console.aclose()
        for client in owned:
            await client.aclose()
        app.state.console = None
    logger.info("Cleanup complete")


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description=(
        "Back office for kiosk store owners: store settings, categories, "
        "menus with AI auto-fill, and live table orders."
    ),
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def get_console(request: Request) -> Console:
    """Current console, with the session restored from cookies if needed."""
    console: Console = request.app.state.console
    console.session.get(request)
    return console


def console_view(console: Console, screen: Optional[BaseScreen] = None, ok: bool = True) -> dict[str, Any]:
    """Standard /console response body."""
    pending = console.gate.pending
    return {
        "ok": ok,
        "screen": screen.snapshot() if screen is not None else None,
        "confirmation": pending.to_dict() if pending else None,
        "toasts": [toast.to_dict() for toast in console.toasts.drain()],
    }


async def read_upload(upload: Optional[UploadFile]) -> Optional[ImageFile]:
    if upload is None or not upload.filename:
        return None
    return ImageFile(
        filename=upload.filename,
        content=await upload.read(),
        content_type=upload.content_type or "application/octet-stream",
    )


# =============================================================================
# ROOT & HEALTH ENDPOINTS
# =============================================================================

@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """API root with navigation links."""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "environment": settings.env_mode.value,
        "documentation": "/docs",
        "health": "/health",
    }


@app.get("/health", tags=["Health"], summary="System Health Check")
async def health_check() -> dict[str, Any]:
    """Report whether the AI providers are usable."""
    translation_ok = await get_translation_service().health_check()
    image_ok = await get_image_service().health_check()
    return {
        "status": "operational" if translation_ok and image_ok else "degraded",
        "translation": "healthy" if translation_ok else "unhealthy",
        "image": "healthy" if image_ok else "unhealthy",
        "environment": settings.env_mode.value,
    }


# =============================================================================
# AI COLLABORATOR ENDPOINTS
# =============================================================================

@app.post(
    "/api/translate-menu",
    response_model=TranslateResponse,
    responses={400: {"model": MessageResponse}, 500: {"model": MessageResponse}},
    tags=["AI"],
    summary="Translate a Korean menu name",
)
async def translate_menu(body: Optional[TranslateRequest] = None):
    text = body.text if body else None
    if not text:
        return JSONResponse(status_code=400, content={"message": "text is required"})

    result = await get_translation_service().translate_menu_name(text)
    if not result.success:
        return JSONResponse(
            status_code=500,
            content={"message": result.error_message or "Translation API error"},
        )

    return TranslateResponse(translatedText=result.translated_text)


@app.post(
    "/api/generate-menu-image",
    response_model=GenerateImageResponse,
    responses={400: {"model": MessageResponse}, 500: {"model": MessageResponse}},
    tags=["AI"],
    summary="Generate a menu picture",
)
async def generate_menu_image(body: Optional[GenerateImageRequest] = None):
    prompt = body.prompt if body else None
    if not prompt:
        return JSONResponse(status_code=400, content={"message": "prompt is required"})

    result = await get_image_service().generate_menu_image(prompt)
    if not result.success:
        content = {"message": result.error_message or "Image generation failed"}
        if result.detail:
            content["detail"] = result.detail
        return JSONResponse(status_code=500, content=content)

    return GenerateImageResponse(imageUrl=result.image_url)


# =============================================================================
# CONSOLE: AUTH & ACCOUNT
# =============================================================================

@app.post("/console/login", tags=["Console"])
async def console_login(body: CredentialsBody, response: Response, console: Console = Depends(get_console)):
    ok = await console.auth.login(body.email, body.password, response)
    return console_view(console, console.auth, ok)


@app.post("/console/logout", tags=["Console"])
async def console_logout(response: Response, console: Console = Depends(get_console)):
    console.account.logout(response)
    return console_view(console, console.auth)


@app.post("/console/signup/send-code", tags=["Console"])
async def console_send_code(body: CredentialsBody, console: Console = Depends(get_console)):
    ok = await console.auth.send_verification_code(body.email)
    return console_view(console, console.auth, ok)


@app.post("/console/signup/verify-code", tags=["Console"])
async def console_verify_code(body: EmailCodeBody, console: Console = Depends(get_console)):
    ok = await console.auth.verify_code(body.email, body.code)
    return console_view(console, console.auth, ok)


@app.post("/console/signup/check-store-name", tags=["Console"])
async def console_check_store_name(body: StoreNameBody, console: Console = Depends(get_console)):
    ok = await console.auth.check_store_name(body.store_name, body.store_name_en)
    return console_view(console, console.auth, ok)


@app.post("/console/signup", tags=["Console"])
async def console_sign_up(body: SignUpBody, console: Console = Depends(get_console)):
    ok = await console.auth.sign_up(
        name=body.admin_name,
        store_name=body.store_name,
        store_name_en=body.store_name_en,
        email=body.email,
        password=body.password,
    )
    return console_view(console, console.auth, ok)


@app.get("/console/account", tags=["Console"])
async def console_account(console: Console = Depends(get_console)):
    await console.account.load()
    return console_view(console, console.account)


@app.post("/console/account/delete", tags=["Console"])
async def console_delete_account(body: PasswordBody, console: Console = Depends(get_console)):
    ok = console.account.request_delete_account(body.password)
    return console_view(console, console.account, ok)


# =============================================================================
# CONSOLE: DASHBOARD
# =============================================================================

@app.get("/console/dashboard", tags=["Console"])
async def console_dashboard(console: Console = Depends(get_console)):
    await console.dashboard.load()
    return console_view(console, console.dashboard)


@app.patch("/console/dashboard/store-name", tags=["Console"])
async def console_change_store_name(body: StoreNameBody, console: Console = Depends(get_console)):
    console.dashboard.set_form(store_name=body.store_name, store_name_en=body.store_name_en)
    ok = await console.dashboard.change_store_name()
    return console_view(console, console.dashboard, ok)


@app.patch("/console/dashboard/admin-name", tags=["Console"])
async def console_change_admin_name(body: AdminNameBody, console: Console = Depends(get_console)):
    console.dashboard.set_form(admin_name=body.admin_name)
    ok = await console.dashboard.change_admin_name()
    return console_view(console, console.dashboard, ok)


@app.patch("/console/dashboard/password", tags=["Console"])
async def console_change_password(body: PasswordChangeBody, console: Console = Depends(get_console)):
    console.dashboard.set_form(old_password=body.old_password, new_password=body.new_password)
    ok = await console.dashboard.change_password()
    return console_view(console, console.dashboard, ok)


@app.post("/console/dashboard/table-count", tags=["Console"])
async def console_set_table_count(body: TableCountBody, console: Console = Depends(get_console)):
    console.dashboard.set_form(table_count=body.count)
    ok = await console.dashboard.set_table_count()
    return console_view(console, console.dashboard, ok)


# =============================================================================
# CONSOLE: CATEGORIES
# =============================================================================

@app.get("/console/categories", tags=["Console"])
async def console_categories(console: Console = Depends(get_console)):
    await console.categories.load()
    return console_view(console, console.categories)


@app.post("/console/categories", tags=["Console"])
async def console_add_category(body: CategoryForm, console: Console = Depends(get_console)):
    ok = await console.categories.add(body)
    return console_view(console, console.categories, ok)


@app.put("/console/categories/{category_id}", tags=["Console"])
async def console_update_category(category_id: int, body: CategoryForm, console: Console = Depends(get_console)):
    if not console.categories.categories:
        await console.categories.load()
    ok = await console.categories.update(category_id, body)
    return console_view(console, console.categories, ok)


@app.delete("/console/categories/{category_id}", tags=["Console"])
async def console_delete_category(category_id: int, console: Console = Depends(get_console)):
    if not console.categories.categories:
        await console.categories.load()
    ok = console.categories.request_delete(category_id)
    return console_view(console, console.categories, ok)


# =============================================================================
# CONSOLE: MENUS
# =============================================================================

@app.get("/console/menus", tags=["Console"])
async def console_menus(category: int = 0, console: Console = Depends(get_console)):
    await console.menus.load()
    console.menus.select_category(category)
    return console_view(console, console.menus)


@app.post("/console/menus", tags=["Console"])
async def console_add_menu(
    name: str = Form("", alias="menuName"),
    name_en: str = Form("", alias="menuNameEn"),
    price: str = Form("", alias="menuPrice"),
    count: str = Form("", alias="menuCount"),
    category_id: str = Form("", alias="categoryId"),
    image: Optional[UploadFile] = File(None),
    console: Console = Depends(get_console),
):
    menus = console.menus
    if not menus.categories:
        await menus.load_categories()
    values = {"name": name, "name_en": name_en, "price": price, "count": count}
    if category_id:
        values["category_id"] = category_id
    menus.set_form(**values)
    menus.choose_image(await read_upload(image))

    ok = await menus.add()
    return console_view(console, menus, ok)


@app.put("/console/menus/{menu_id}", tags=["Console"])
async def console_update_menu(
    menu_id: int,
    name: str = Form(..., alias="menuName"),
    price: int = Form(..., alias="menuPrice"),
    name_en: str = Form("", alias="menuNameEn"),
    count: Optional[str] = Form(None, alias="menuCount"),
    image: Optional[UploadFile] = File(None),
    console: Console = Depends(get_console),
):
    if not console.menus.menus:
        await console.menus.load_menus()
    form = MenuUpdateForm(name=name, name_en=name_en, price=price, count=count or None)
    ok = await console.menus.update(menu_id, form, await read_upload(image))
    return console_view(console, console.menus, ok)


@app.delete("/console/menus/{menu_id}", tags=["Console"])
async def console_delete_menu(menu_id: int, console: Console = Depends(get_console)):
    if not console.menus.menus:
        await console.menus.load_menus()
    ok = console.menus.request_delete(menu_id)
    return console_view(console, console.menus, ok)


# =============================================================================
# CONSOLE: ORDERS
# =============================================================================

@app.get("/console/orders", tags=["Console"])
async def console_orders(console: Console = Depends(get_console)):
    await console.orders.load()
    return console_view(console, console.orders)


@app.post("/console/orders/{kiosk_number}/clear", tags=["Console"])
async def console_clear_orders(kiosk_number: int, console: Console = Depends(get_console)):
    console.orders.request_clear_orders(kiosk_number)
    return console_view(console, console.orders)


@app.post("/console/kiosks/{kiosk_id}/deactivate", tags=["Console"])
async def console_deactivate_kiosk(kiosk_id: int, console: Console = Depends(get_console)):
    console.orders.request_deactivate(kiosk_id)
    return console_view(console, console.orders)


# =============================================================================
# CONSOLE: CONFIRMATION
# =============================================================================

@app.get("/console/confirmation", tags=["Console"])
async def console_confirmation(console: Console = Depends(get_console)):
    return console_view(console)


@app.post("/console/confirmation/confirm", tags=["Console"])
async def console_confirm(response: Response, console: Console = Depends(get_console)):
    ran = await console.gate.confirm()
    # Account deletion empties the store; drop the cookies with it.
    if ran and console.session.get() is None:
        console.session.clear(response)
    return console_view(console, ok=ran)


@app.post("/console/confirmation/cancel", tags=["Console"])
async def console_cancel(console: Console = Depends(get_console)):
    closed = console.gate.cancel()
    return console_view(console, ok=closed)


# =============================================================================
# ERROR HANDLERS
# =============================================================================

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler."""
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=500,
        content={
            "message": "Internal Server Error",
            "detail": str(exc) if settings.debug else "An unexpected error occurred",
        },
    )


# =============================================================================
# DEVELOPMENT SERVER
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "kiosk_admin.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
        log_level="debug" if settings.debug else "info",
    )
