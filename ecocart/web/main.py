from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ecocart.config import settings, setup_logging
from ecocart.constants import MILESTONE_HEADER, MILESTONE_POINTS
from ecocart.errors import EcoCartError, MalformedUpstreamRecord, UpstreamUnavailable
from ecocart.models import cart_to_dict
from ecocart.services.cart import CartService, build_service
from ecocart.services.rewards import crossed_milestone, summarize, total_eco_points
from ecocart.web.schemas import (
    CartAddRequest,
    CartRemoveRequest,
    CartUpdateRequest,
    CheckoutRequest,
)

logger = logging.getLogger(__name__)


def get_service(request: Request) -> CartService:
    return request.app.state.cart_service


def create_app(service: Optional[CartService] = None) -> FastAPI:
    app = FastAPI(title="EcoCart")
    app.state.cart_service = service or build_service()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[MILESTONE_HEADER],
    )

    @app.on_event("startup")
    def _startup() -> None:
        setup_logging()

    @app.exception_handler(EcoCartError)
    async def _ecocart_error(request: Request, exc: EcoCartError) -> JSONResponse:
        if isinstance(exc, (UpstreamUnavailable, MalformedUpstreamRecord)):
            logger.error("%s %s failed: %s (cause: %r)", request.method, request.url.path, exc.message, exc.__cause__)
        else:
            logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    app.include_router(_routes())
    return app


def _routes() -> APIRouter:
    router = APIRouter()

    # ---------------- catalog ----------------

    @router.get("/products")
    def products(
        search: Optional[str] = None,
        category: Optional[str] = None,
        svc: CartService = Depends(get_service),
    ) -> list[dict[str, Any]]:
        return [i.to_dict() for i in svc.catalog.list_items(search=search, category=category)]

    @router.get("/products/{product_id}")
    def product(product_id: int, svc: CartService = Depends(get_service)) -> dict[str, Any]:
        return svc.catalog.get_item(product_id).to_dict()

    # ---------------- cart ----------------

    @router.get("/cart")
    def cart(svc: CartService = Depends(get_service)) -> dict[str, Any]:
        return cart_to_dict(svc.snapshot())

    @router.get("/cart/summary")
    def cart_summary(svc: CartService = Depends(get_service)) -> dict[str, Any]:
        return summarize(svc.snapshot())

    @router.post("/cart/add")
    def cart_add(
        body: CartAddRequest,
        response: Response,
        svc: CartService = Depends(get_service),
    ) -> dict[str, Any]:
        before = total_eco_points(svc.snapshot())
        snap = svc.add(body.product_id, body.quantity)
        after = total_eco_points(snap)
        if crossed_milestone(before, after):
            logger.info("eco milestone crossed: %s -> %s points", before, after)
            response.headers[MILESTONE_HEADER] = str(MILESTONE_POINTS)
        return cart_to_dict(snap)

    @router.put("/cart/update")
    def cart_update(body: CartUpdateRequest, svc: CartService = Depends(get_service)) -> dict[str, Any]:
        return cart_to_dict(svc.update_quantity(body.product_id, body.quantity))

    @router.delete("/cart/remove")
    def cart_remove(body: CartRemoveRequest, svc: CartService = Depends(get_service)) -> dict[str, Any]:
        return cart_to_dict(svc.remove(body.product_id))

    # ---------------- orders ----------------

    @router.post("/orders/create")
    def orders_create(
        body: Optional[CheckoutRequest] = None,
        svc: CartService = Depends(get_service),
    ) -> dict[str, Any]:
        body = body or CheckoutRequest()
        order = svc.checkout(
            claimed_total=body.total_amount,
            claimed_eco_points=body.eco_points,
            claimed_items=body.claimed_items(),
        )
        return order.to_dict()

    @router.get("/orders")
    def orders(svc: CartService = Depends(get_service)) -> list[dict[str, Any]]:
        return [o.to_dict() for o in svc.orders()]

    @router.get("/orders/{order_id}")
    def order(order_id: int, svc: CartService = Depends(get_service)) -> dict[str, Any]:
        return svc.get_order(order_id).to_dict()

    return router


app = create_app()
