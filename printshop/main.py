from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, FastAPI, File, Request, UploadFile, status
from fastapi.staticfiles import StaticFiles
from sqlalchemy.engine import Engine
from sqlmodel import Session
from starlette.middleware.sessions import SessionMiddleware

from . import orders
from .auth import check_credentials, require_admin
from .config import Settings, configure_logging
from .db import build_engine, get_session, init_db
from .errors import AdminRequired, PrintShopError, setup_error_handlers
from .models import AdminLogin, OrderCreate, PaymentCreate, StatusUpdate
from .storage import UPLOAD_URL_PREFIX, save_upload
from .tracking import build_tracker

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None, tracker=None) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI(title=settings.site_name)
    app.state.settings = settings
    app.state.engine = engine if engine is not None else build_engine(settings.database_url)
    app.state.tracker = tracker if tracker is not None else build_tracker(settings.status_progression)

    # Sessions
    app.add_middleware(SessionMiddleware, secret_key=settings.session_secret, same_site="lax", https_only=False)
    setup_error_handlers(app)

    # Uploaded files, served by generated name
    app.mount(UPLOAD_URL_PREFIX, StaticFiles(directory=settings.upload_dir, check_dir=False), name="uploads")

    @app.on_event("startup")
    def on_startup():
        settings.upload_dir.mkdir(parents=True, exist_ok=True)
        try:
            init_db(app.state.engine)
        except Exception:
            logger.exception("Error creating table")
            raise

    register_routes(app)
    return app


def register_routes(app: FastAPI) -> None:

    @app.post("/api/upload")
    async def upload_file(request: Request, file: Optional[UploadFile] = File(None)):
        settings = request.app.state.settings
        return await save_upload(file, settings.upload_dir, settings.max_upload_mb)

    @app.post("/api/orders", status_code=status.HTTP_201_CREATED)
    def create_order(data: OrderCreate, session: Session = Depends(get_session)):
        order = orders.create_order(session, data)
        return {
            "success": True,
            "orderId": order.order_id,
            "message": "Order created successfully",
            "orderDetails": orders.order_record(order),
        }

    @app.get("/api/status/{order_id}")
    def order_status(request: Request, order_id: str, session: Session = Depends(get_session)):
        return request.app.state.tracker.poll(session, order_id)

    @app.post("/api/payment")
    def create_payment(data: PaymentCreate, session: Session = Depends(get_session)):
        if not data.orderId or not data.paymentMethod:
            raise PrintShopError("Missing payment details.")
        return orders.record_payment(session, data.orderId, data.paymentMethod)

    # ---------------- Admin ----------------

    @app.post("/api/admin/login")
    def admin_login(request: Request, data: AdminLogin):
        if not check_credentials(request, data.username, data.password):
            raise AdminRequired("Login failed.")
        request.session["is_admin"] = True
        return {"success": True}

    @app.post("/api/admin/logout")
    def admin_logout(request: Request):
        request.session.clear()
        return {"success": True}

    @app.get("/api/jobs", dependencies=[Depends(require_admin)])
    def list_jobs(session: Session = Depends(get_session)):
        return [orders.order_record(o) for o in orders.list_orders(session)]

    @app.put("/api/jobs/{order_id}/status", dependencies=[Depends(require_admin)])
    def update_job_status(order_id: str, data: StatusUpdate, session: Session = Depends(get_session)):
        order = orders.update_status(session, order_id, data.status)
        return {"success": True, "order": orders.order_record(order)}

    @app.get("/api/earnings", dependencies=[Depends(require_admin)])
    def get_earnings(session: Session = Depends(get_session)):
        return orders.earnings(session)


def _default_app() -> FastAPI:
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    return create_app(settings)


app = _default_app()
