"""FastAPI application factory."""

import base64
import binascii
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import FastAPI, HTTPException, Request, status

from pawfuel.api.models import (
    Credentials,
    DogUpdate,
    InventoryEventRequest,
    OnboardingRequest,
    OrderItemPayload,
    OrderRequest,
    PreferencesUpdate,
    ProductCreate,
    ScheduleRequest,
    StoolPhotoRequest,
)
from pawfuel.app_logging import configure_logging
from pawfuel.containers import AppContainer
from pawfuel.domain.orders import OrderDraft, OrderItem
from pawfuel.domain.products import MacroSplit
from pawfuel.services.coaching import render_message
from pawfuel.services.feeding import compute_feeding_target

_UNPROCESSABLE = 422


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app_container: AppContainer = app.state.container
        await app_container.catalog_service.load_listings()
        if app_container.account_service.founder_period_ended():
            logger.info("Founder Pro period has ended")
        yield
        await app_container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/dog")
    async def get_dog(request: Request) -> dict[str, object]:
        """Return the active dog with its feeding target."""
        state_container: AppContainer = request.app.state.container
        dog = state_container.dog_service.active_dog()
        if dog is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"dog": asdict(dog), "target": asdict(compute_feeding_target(dog))}

    @app.put("/dog")
    async def update_dog(payload: DogUpdate, request: Request) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        if state_container.dog_service.active_dog() is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        dog = state_container.dog_service.update_profile(
            **payload.model_dump(exclude_none=True)
        )
        if dog is None:
            raise HTTPException(
                status_code=_UNPROCESSABLE,
                detail="Invalid profile values",
            )
        return {"dog": asdict(dog)}

    @app.post("/onboarding")
    async def onboarding(
        payload: OnboardingRequest, request: Request
    ) -> dict[str, object]:
        """Save onboarding answers and return the regenerated rotation."""
        state_container: AppContainer = request.app.state.container
        rotation = state_container.dog_service.complete_onboarding(
            weight_kg=payload.weight_kg,
            age_years=payload.age_years,
            energy=payload.energy,
            allergies=payload.allergies,
            consent=payload.consent,
        )
        if rotation is None:
            raise HTTPException(
                status_code=_UNPROCESSABLE,
                detail="Consent and valid answers are required",
            )
        return {"rotation": [asdict(day) for day in rotation]}

    @app.put("/preferences")
    async def update_preferences(
        payload: PreferencesUpdate, request: Request
    ) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        preferences = state_container.state_service.update_preferences(
            preferred_branch=payload.preferred_branch, language=payload.language
        )
        return {"preferences": asdict(preferences)}

    @app.get("/products")
    async def list_products(request: Request) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        return {
            "products": [
                asdict(p) for p in state_container.catalog_service.products()
            ]
        }

    @app.post("/products", status_code=status.HTTP_201_CREATED)
    async def create_product(
        payload: ProductCreate, request: Request
    ) -> dict[str, object]:
        """Add a custom product; macros are guessed when omitted."""
        state_container: AppContainer = request.app.state.container
        macros = MacroSplit(**payload.macros.model_dump()) if payload.macros else None
        product = state_container.catalog_service.add_custom_product(
            payload.name,
            payload.grams_per_pack,
            payload.category,
            payload.protein,
            brand=payload.brand,
            macros=macros,
        )
        if product is None:
            raise HTTPException(
                status_code=_UNPROCESSABLE,
                detail="Invalid product",
            )
        return {"product": asdict(product)}

    @app.get("/catalog")
    async def list_catalog(request: Request) -> dict[str, object]:
        """Return orderable shop listings loaded at startup."""
        state_container: AppContainer = request.app.state.container
        listings = state_container.catalog_service.listings.values()
        return {"listings": [asdict(listing) for listing in listings]}

    @app.get("/inventory")
    async def inventory(request: Request) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        return {"stock": state_container.inventory_service.stock_levels()}

    @app.post("/inventory/events", status_code=status.HTTP_201_CREATED)
    async def add_inventory_event(
        payload: InventoryEventRequest, request: Request
    ) -> dict[str, object]:
        """Record received or consumed packs."""
        state_container: AppContainer = request.app.state.container
        event_id = state_container.inventory_service.add_event(
            payload.product_id, payload.type, payload.packs
        )
        if event_id is None:
            raise HTTPException(
                status_code=_UNPROCESSABLE,
                detail="Invalid inventory event",
            )
        return {
            "id": event_id,
            "stock": state_container.inventory_service.current_stock(
                payload.product_id
            ),
        }

    @app.get("/meals/plan")
    async def meal_plan(request: Request) -> dict[str, object]:
        """Suggest today's meal with coaching advice."""
        state_container: AppContainer = request.app.state.container
        plan = state_container.meal_service.plan()
        if plan is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        messages = state_container.meal_service.coach(plan)
        return {
            "plan": asdict(plan),
            "coach": [render_message(message) for message in messages],
        }

    @app.post("/meals/confirm", status_code=status.HTTP_201_CREATED)
    async def confirm_meal(request: Request) -> dict[str, object]:
        """Plan today's meal again and consume it from stock."""
        state_container: AppContainer = request.app.state.container
        plan = state_container.meal_service.plan()
        if plan is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        entry = state_container.meal_service.confirm_meal(plan)
        if entry is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"meal": asdict(entry)}

    @app.get("/meals/insights")
    async def insights(request: Request) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        return asdict(state_container.meal_service.insights())

    @app.get("/rotation")
    async def rotation(request: Request) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        return {
            "rotation": [asdict(day) for day in state_container.dog_service.rotation()]
        }

    @app.get("/treats")
    async def treats(request: Request) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        return {
            "treats": [
                asdict(treat) for treat in state_container.dog_service.daily_treats()
            ]
        }

    @app.post("/stool", status_code=status.HTTP_201_CREATED)
    async def log_stool(
        payload: StoolPhotoRequest, request: Request
    ) -> dict[str, object]:
        """Classify a stool photo and log the result."""
        state_container: AppContainer = request.app.state.container
        try:
            image_bytes = base64.b64decode(payload.image_base64, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise HTTPException(
                status_code=_UNPROCESSABLE,
                detail="Image must be base64 encoded",
            ) from exc
        entry = state_container.stool_service.log_photo(
            image_bytes, keep_image=payload.keep_image
        )
        if entry is None:
            raise HTTPException(
                status_code=_UNPROCESSABLE,
                detail="Could not analyse the photo",
            )
        return {"entry": asdict(entry)}

    @app.get("/stool")
    async def stool_history(request: Request, limit: int = 10) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        return {
            "entries": [
                asdict(entry)
                for entry in state_container.stool_service.history(limit)
            ]
        }

    @app.post("/orders/preview")
    async def preview_order(
        payload: OrderRequest, request: Request
    ) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        draft = state_container.order_service.compose(_order_items(payload.items))
        return _draft_response(draft)

    @app.post("/orders", status_code=status.HTTP_201_CREATED)
    async def send_order(payload: OrderRequest, request: Request) -> dict[str, object]:
        """Compose an order link and record it in history."""
        state_container: AppContainer = request.app.state.container
        draft = state_container.order_service.send(_order_items(payload.items))
        return _draft_response(draft)

    @app.get("/orders/history")
    async def order_history(request: Request, limit: int = 10) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        return {
            "history": [
                asdict(entry)
                for entry in state_container.order_service.history(limit)
            ]
        }

    @app.get("/orders/schedules")
    async def list_schedules(request: Request) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        schedules = state_container.state_service.state.recurring_orders
        return {"schedules": [asdict(schedule) for schedule in schedules]}

    @app.post("/orders/schedules", status_code=status.HTTP_201_CREATED)
    async def add_schedule(
        payload: ScheduleRequest, request: Request
    ) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        schedule = state_container.order_service.add_schedule(
            payload.day, payload.time, _order_items(payload.items)
        )
        if schedule is None:
            raise HTTPException(
                status_code=_UNPROCESSABLE,
                detail="A weekday and at least one item are required",
            )
        return {"schedule": asdict(schedule)}

    @app.delete("/orders/schedules/{schedule_id}")
    async def delete_schedule(schedule_id: str, request: Request) -> dict[str, str]:
        state_container: AppContainer = request.app.state.container
        if not state_container.order_service.delete_schedule(schedule_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"status": "ok"}

    @app.post("/orders/schedules/{schedule_id}/send")
    async def send_schedule(schedule_id: str, request: Request) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        draft = state_container.order_service.send_schedule(schedule_id)
        if draft is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"order": asdict(draft)}

    @app.get("/account")
    async def account_status(request: Request) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        return asdict(state_container.account_service.status())

    @app.post("/account", status_code=status.HTTP_201_CREATED)
    async def create_account(
        payload: Credentials, request: Request
    ) -> dict[str, object]:
        """Create the local account and start the trial."""
        state_container: AppContainer = request.app.state.container
        account = state_container.account_service.create_account(
            payload.email, payload.password
        )
        if account is None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Account exists or credentials are empty",
            )
        return asdict(state_container.account_service.status())

    @app.post("/account/sign-in")
    async def sign_in(payload: Credentials, request: Request) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        result = state_container.account_service.sign_in(
            payload.email, payload.password
        )
        if result == "not_found":
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        if result == "bad_credentials":
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
        return asdict(state_container.account_service.status())

    @app.post("/account/sign-out")
    async def sign_out(request: Request) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        state_container.account_service.sign_out()
        return asdict(state_container.account_service.status())

    @app.post("/reset")
    async def reset(request: Request) -> dict[str, str]:
        """Delete all local data and restore the defaults."""
        state_container: AppContainer = request.app.state.container
        state_container.state_service.reset()
        return {"status": "ok"}

    return app


def _order_items(items: list[OrderItemPayload]) -> list[OrderItem]:
    return [OrderItem(product_id=i.product_id, quantity=i.quantity) for i in items]


def _draft_response(draft: OrderDraft | None) -> dict[str, object]:
    if draft is None:
        raise HTTPException(
            status_code=_UNPROCESSABLE,
            detail="Add at least one item to the order",
        )
    return {"order": asdict(draft)}
