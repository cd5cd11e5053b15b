"""FastAPI application exposing the currency conversion form."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Annotated, Final

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from ..converter.controller import ConversionController
from ..converter.models import CurrencyOption
from ..rates_client.service import ExchangeRateClient
from .models import ErrorResponse, FormUpdate, FormView
from .settings import api_settings

ERROR_INTERNAL_ERROR: Final[str] = "internal_error"
ERROR_NOT_FOUND: Final[str] = "not_found"

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create the form controller and load the currency catalog."""
    controller = ConversionController(ExchangeRateClient())
    if api_settings.load_catalog_on_startup:
        await controller.load_catalog()
    app.state.controller = controller
    try:
        yield
    finally:
        await controller.wait_pending()


def get_controller(request: Request) -> ConversionController:
    """
    Dependency function to provide the form controller.

    Returns:
        ConversionController: The controller created at startup
    """
    return request.app.state.controller


ControllerDep = Annotated[ConversionController, Depends(get_controller)]


def form_view(controller: ConversionController) -> FormView:
    return FormView(
        from_currency=controller.from_currency,
        to_currency=controller.to_currency,
        amount=controller.amount_text,
        can_submit=controller.can_submit,
        loading=controller.loading,
        display=controller.display,
    )


app = FastAPI(
    title="Currency Converter API",
    description="Form-style API converting amounts between fiat currencies",
    version="1.0.0",
    lifespan=lifespan,
)


@app.get("/", response_model=dict[str, str])
async def root() -> dict[str, str]:
    """Health check endpoint.

    Returns:
        dict[str, str]: Health status information
    """
    return {"message": "Currency Converter API is running", "status": "healthy"}


@app.get("/currencies", response_model=list[CurrencyOption])
async def list_currencies(controller: ControllerDep) -> list[CurrencyOption]:
    """Currency selector options, placeholder first."""
    return controller.from_selector.options


@app.get("/form", response_model=FormView)
async def get_form(controller: ControllerDep) -> FormView:
    return form_view(controller)


@app.patch("/form", response_model=FormView)
async def update_form(update: FormUpdate, controller: ControllerDep) -> FormView:
    """
    Edit form fields.

    Each provided field is applied in turn and the form re-validated, the
    same way a change to a selector or the amount input would be.
    """
    if update.from_currency is not None:
        controller.select_from_currency(update.from_currency)
    if update.to_currency is not None:
        controller.select_to_currency(update.to_currency)
    if update.amount is not None:
        controller.set_amount(update.amount)
    return form_view(controller)


@app.post("/convert", response_model=FormView)
async def convert(controller: ControllerDep) -> FormView:
    """
    Submit the form.

    Failures are reported in the display region of the returned form view,
    not as HTTP errors.
    """
    await controller.submit()
    return form_view(controller)


@app.post("/swap", response_model=FormView)
async def swap(controller: ControllerDep) -> FormView:
    """Swap currencies; responds once any triggered re-conversion settles."""
    if (task := controller.swap()) is not None:
        await task
    return form_view(controller)


@app.post("/catalog/reload", response_model=list[CurrencyOption])
async def reload_catalog(controller: ControllerDep) -> list[CurrencyOption]:
    await controller.load_catalog()
    return controller.from_selector.options


@app.exception_handler(404)
async def not_found_handler(_: Request, __: Exception) -> JSONResponse:
    """Handle 404 errors.

    Returns:
        JSONResponse: Error response in JSON format
    """
    return JSONResponse(
        status_code=404,
        content=ErrorResponse(
            error=ERROR_NOT_FOUND, message="Endpoint not found"
        ).model_dump(),
    )


@app.exception_handler(500)
async def internal_error_handler(_: Request, exc: Exception) -> JSONResponse:
    """Handle internal server errors.

    Args:
        exc: The exception that was raised

    Returns:
        JSONResponse: Error response in JSON format
    """
    logger.error(f"Internal server error: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error=ERROR_INTERNAL_ERROR, message="An internal server error occurred"
        ).model_dump(),
    )


async def main() -> None:
    """Main entry point for the API server."""
    config = uvicorn.Config(
        app,
        host=api_settings.api_host,
        port=api_settings.api_port,
        log_level=api_settings.log_level.lower(),
    )
    server = uvicorn.Server(config)
    await server.serve()


if __name__ == "__main__":
    import asyncio

    asyncio.run(main())
