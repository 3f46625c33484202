"""Credit API endpoints."""

from typing import Annotated, Literal, Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import JSONResponse

from src.application.dto import PassThroughResult
from src.application.services import CreditsService
from src.core.dependencies import get_credits_service
from src.presentation.schemas import (
    BalanceViewSchema,
    CheckoutRequestSchema,
    CheckoutResponseSchema,
    DebitRequestSchema,
    EarningsViewSchema,
    ErrorResponseSchema,
    IdentityFieldsSchema,
    TransactionListResponseSchema,
    request_body_docs,
)
from .context import caller_context, read_json_object

NO_STORE = {"Cache-Control": "no-store"}

credits_router = APIRouter(
    prefix="/credits",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Missing or invalid input"},
        502: {"model": ErrorResponseSchema, "description": "Parent service unreachable"},
        504: {"model": ErrorResponseSchema, "description": "Parent service timed out"},
    },
)

payments_router = APIRouter()

BALANCE_RESPONSE_DOCS = {
    200: {
        "description": "Parent balance payload, forwarded verbatim",
        "content": {
            "application/json": {
                "schema": {
                    "oneOf": [
                        BalanceViewSchema.model_json_schema(),
                        EarningsViewSchema.model_json_schema(),
                    ]
                }
            }
        },
    },
}


def pass_through(result: PassThroughResult) -> Response:
    """Return an upstream body unchanged, with its status and content type."""
    headers = dict(NO_STORE)
    if result.shape is not None:
        headers["X-Balance-Shape"] = result.shape.value
    return Response(
        content=result.content,
        status_code=result.status_code,
        media_type=result.content_type,
        headers=headers,
    )


@credits_router.head(
    "/balance",
    status_code=204,
    summary="Balance Endpoint Check",
    description="Existence check for clients; returns no body.",
)
async def head_balance() -> Response:
    return Response(status_code=204)


@credits_router.get(
    "/balance",
    summary="Get Balance",
    description="""
    Read a project's credit balance, or the caller's earnings when the
    parent recognizes them as the project creator. The parent payload is
    forwarded unchanged; its shape is reported in the X-Balance-Shape header.
    """,
    responses=BALANCE_RESPONSE_DOCS,
)
async def get_balance(
    request: Request,
    credits_service: Annotated[CreditsService, Depends(get_credits_service)],
    view: Annotated[
        Optional[Literal["creator"]],
        Query(description="Set to 'creator' to require the user identifier"),
    ] = None,
) -> Response:
    result = await credits_service.read_balance(
        query=dict(request.query_params),
        caller=caller_context(request),
        require_user=view == "creator",
    )
    return pass_through(result)


@credits_router.post(
    "/balance",
    summary="Get Balance (JSON body)",
    description="Same as GET /balance with identifiers in a JSON body; both are required.",
    responses=BALANCE_RESPONSE_DOCS,
    openapi_extra=request_body_docs(IdentityFieldsSchema),
)
async def post_balance(
    request: Request,
    credits_service: Annotated[CreditsService, Depends(get_credits_service)],
) -> Response:
    body = await read_json_object(request)
    result = await credits_service.read_balance(
        query=dict(request.query_params),
        body=body,
        caller=caller_context(request),
        require_user=True,
    )
    return pass_through(result)


@credits_router.post(
    "/check-and-debit",
    summary="Check and Debit Credits",
    description="""
    Debit credits for a feature use. The cost must be a positive integer and
    is validated before the parent is contacted. The parent's response is
    forwarded unchanged and is never retried.
    """,
    openapi_extra=request_body_docs(DebitRequestSchema),
)
async def check_and_debit(
    request: Request,
    credits_service: Annotated[CreditsService, Depends(get_credits_service)],
) -> Response:
    body = await read_json_object(request)
    result = await credits_service.check_and_debit(
        body=body,
        query=dict(request.query_params),
        caller=caller_context(request),
    )
    return pass_through(result)


@credits_router.get(
    "/transactions",
    response_model=TransactionListResponseSchema,
    summary="List Transactions",
    description="""
    Full transaction history for a project. The parent enforces
    creator-only access.
    """,
)
async def list_transactions(
    request: Request,
    credits_service: Annotated[CreditsService, Depends(get_credits_service)],
) -> Response:
    listing = await credits_service.list_transactions(
        query=dict(request.query_params),
        caller=caller_context(request),
    )
    return JSONResponse(content=listing.to_dict(), headers=NO_STORE)


@payments_router.post(
    "/create-payment",
    response_model=CheckoutResponseSchema,
    summary="Create Checkout Session (legacy path)",
    openapi_extra=request_body_docs(CheckoutRequestSchema),
    responses={
        400: {"model": ErrorResponseSchema, "description": "Missing or invalid input"},
    },
)
@credits_router.post(
    "/checkout",
    response_model=CheckoutResponseSchema,
    summary="Create Checkout Session",
    description="""
    Create a parent checkout session for a one-time purchase or a
    subscription and return the redirect URL.
    """,
    openapi_extra=request_body_docs(CheckoutRequestSchema),
)
async def create_checkout(
    request: Request,
    credits_service: Annotated[CreditsService, Depends(get_credits_service)],
) -> CheckoutResponseSchema:
    body = await read_json_object(request)
    session = await credits_service.create_checkout(
        body=body,
        query=dict(request.query_params),
        caller=caller_context(request),
    )
    return CheckoutResponseSchema(**session.to_dict())
