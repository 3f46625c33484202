"""Credits service - the gateway's operation handlers."""

import json
from contextlib import contextmanager
from typing import Any, Generator, Mapping, Optional

import structlog

from src.application.dto import (
    CallerContext,
    CheckoutSession,
    PassThroughResult,
    TransactionListing,
)
from src.core.config import GatewayConfig
from src.core.metrics import record_upstream_protocol_error, record_validation_failure
from src.domain.exceptions import (
    GatewayException,
    InternalGatewayException,
    UpstreamProtocolException,
    UpstreamRejectedException,
    ValidationException,
)
from src.domain.interfaces import RawResponse, UpstreamClient
from src.infrastructure.clients import UpstreamAdapter, UpstreamOperation
from src.service.credits import (
    build_product_descriptor,
    calculate_total_earned_cents,
    detect_balance_shape_from_bytes,
    normalize,
    parse_checkout_request,
    parse_debit_request,
    parse_transactions,
    resolve_project_id,
    resolve_user_id,
    upstream_total_earned_cents,
)

logger = structlog.get_logger(__name__)

# Upstream bodies are logged for operators, truncated
LOGGED_BODY_LIMIT = 500


class CreditsService:
    """
    Application service for credit operations.

    Each operation moves through Received -> Validated -> Dispatched ->
    Succeeded | Failed. Validation happens before any upstream call, and no
    operation is retried: re-issuing a debit or checkout could charge the
    user twice.
    """

    def __init__(
        self,
        upstream_client: UpstreamClient,
        config: GatewayConfig,
        adapter: Optional[UpstreamAdapter] = None,
    ):
        self._client = upstream_client
        self._config = config
        self._adapter = adapter or UpstreamAdapter(config.path_overrides)

    async def read_balance(
        self,
        query: Optional[Mapping[str, Any]],
        body: Optional[Mapping[str, Any]] = None,
        caller: Optional[CallerContext] = None,
        require_user: bool = False,
    ) -> PassThroughResult:
        """
        Read a project's balance or a creator's earnings.

        The project alone suffices for display contexts; ``require_user``
        is set when the read gates a creator-only view.

        Returns:
            The upstream body verbatim, tagged with the detected shape

        Raises:
            ValidationException: If required identifiers are missing
            UpstreamException: If the parent call fails
        """
        operation = UpstreamOperation.BALANCE
        caller = caller or CallerContext()

        with self._operation(operation):
            if require_user:
                identity = normalize(body, query)
                user_id, project_id = identity.user_id, identity.project_id
            else:
                project_id = resolve_project_id(body, query)
                user_id = resolve_user_id(body, query)

            request = self._adapter.build(
                operation,
                user_id=user_id,
                project_id=project_id,
                inbound_headers=caller.headers,
                diagnostics=caller.diagnostics,
            )
            response = await self._client.call(request)

            if not response.ok:
                raise self._rejected(operation, response, "Failed to load balance")

            tagged = detect_balance_shape_from_bytes(response.content)
            logger.info(
                "balance_read",
                project_id=project_id,
                shape=tagged.shape.value,
            )

            return PassThroughResult(
                status_code=response.status_code,
                content=response.content,
                content_type=response.content_type,
                shape=tagged.shape,
            )

    async def create_checkout(
        self,
        body: Mapping[str, Any],
        query: Optional[Mapping[str, Any]] = None,
        caller: Optional[CallerContext] = None,
    ) -> CheckoutSession:
        """
        Create a checkout session on the parent service.

        The derived product descriptor is sent together with the original
        cadence fields so the parent can set up recurring billing.

        Raises:
            ValidationException: If identifiers or checkout fields are invalid
            UpstreamRejectedException: With a generic message on non-2xx
            UpstreamProtocolException: If the parent returns no URL
        """
        operation = UpstreamOperation.CHECKOUT
        caller = caller or CallerContext()

        with self._operation(operation):
            identity = normalize(body, query)
            checkout = parse_checkout_request(body)
            product = build_product_descriptor(checkout)

            payload = {
                "productName": product.name,
                "description": product.description,
                "priceCents": product.price_cents,
                "type": checkout.kind.value,
                "kind": checkout.kind.value,
                "interval": checkout.interval.value,
                "intervalCount": checkout.interval_count,
            }
            if checkout.tier:
                payload["tier"] = checkout.tier

            log = logger.bind(
                user_id=identity.user_id,
                project_id=identity.project_id,
                kind=checkout.kind.value,
                price_cents=product.price_cents,
            )
            log.info("checkout_requested")

            request = self._adapter.build(
                operation,
                user_id=identity.user_id,
                project_id=identity.project_id,
                payload=payload,
                inbound_headers=caller.headers,
                diagnostics=caller.diagnostics,
            )
            response = await self._client.call(request)

            if not response.ok:
                raise self._rejected(
                    operation, response, "Failed to create checkout session"
                )

            data = self._decode_json(operation, response)
            url = None
            if isinstance(data, dict):
                url = data.get("url") or data.get("checkoutUrl")
            if not isinstance(url, str) or not url:
                raise UpstreamProtocolException(operation.value, "checkout response has no url")

            log.info("checkout_created")
            return CheckoutSession(url=url)

    async def check_and_debit(
        self,
        body: Mapping[str, Any],
        query: Optional[Mapping[str, Any]] = None,
        caller: Optional[CallerContext] = None,
    ) -> PassThroughResult:
        """
        Debit credits if the balance allows it.

        The parent's answer is authoritative and forwarded verbatim,
        refusals included: a 402 with the remaining balance reaches the
        caller unchanged. The gateway keeps no local accounting.

        Raises:
            ValidationException: If identifiers or cost are invalid; no
                upstream call is made in that case
            UpstreamRejectedException: Only for 1xx/3xx answers
            UpstreamException: If the parent call fails
        """
        operation = UpstreamOperation.CHECK_AND_DEBIT
        caller = caller or CallerContext()

        with self._operation(operation):
            identity = normalize(body, query)
            debit = parse_debit_request(identity, body)

            request = self._adapter.build(
                operation,
                user_id=identity.user_id,
                project_id=identity.project_id,
                payload={"cost": debit.cost, "metadata": debit.metadata},
                inbound_headers=caller.headers,
                diagnostics=caller.diagnostics,
            )
            response = await self._client.call(request)

            if not response.ok:
                if not response.is_error:
                    raise self._rejected(operation, response, "Debit failed")
                # The parent's refusal (e.g. insufficient credits) is authoritative
                self._log_rejection(operation, response)
                return PassThroughResult(
                    status_code=response.status_code,
                    content=response.content,
                    content_type=response.content_type,
                )

            logger.info(
                "credits_debited",
                user_id=identity.user_id,
                project_id=identity.project_id,
                cost=debit.cost,
            )
            return PassThroughResult(
                status_code=response.status_code,
                content=response.content,
                content_type="application/json",
            )

    async def list_transactions(
        self,
        query: Mapping[str, Any],
        caller: Optional[CallerContext] = None,
    ) -> TransactionListing:
        """
        List a project's full transaction history.

        When the parent omits ``totalEarnedCents`` it is derived from the
        completed transactions.

        Raises:
            ValidationException: If identifiers are missing
            UpstreamException: If the parent call fails
        """
        operation = UpstreamOperation.TRANSACTIONS
        caller = caller or CallerContext()

        with self._operation(operation):
            identity = normalize(query)

            request = self._adapter.build(
                operation,
                user_id=identity.user_id,
                project_id=identity.project_id,
                inbound_headers=caller.headers,
                diagnostics=caller.diagnostics,
            )
            response = await self._client.call(request)

            if not response.ok:
                raise self._rejected(operation, response, "Failed to load transactions")

            data = self._decode_json(operation, response)
            if isinstance(data, list):
                transactions, extras = data, {}
            elif isinstance(data, dict) and isinstance(data.get("transactions"), list):
                transactions = data["transactions"]
                extras = {k: v for k, v in data.items() if k != "transactions"}
            else:
                raise UpstreamProtocolException(
                    operation.value, "transactions response has no transaction list"
                )

            total = upstream_total_earned_cents(data)
            computed = total is None
            if computed:
                total = calculate_total_earned_cents(parse_transactions(transactions))

            logger.info(
                "transactions_listed",
                project_id=identity.project_id,
                count=len(transactions),
                total_earned_computed=computed,
            )
            return TransactionListing(
                transactions=transactions,
                total_earned_cents=total,
                total_earned_computed=computed,
                extras=extras,
            )

    @contextmanager
    def _operation(self, operation: UpstreamOperation) -> Generator[None, None, None]:
        """
        Handler boundary.

        Gateway exceptions pass through to the error translator; anything
        else is logged with its traceback and replaced by an internal error.
        """
        try:
            yield
        except ValidationException as e:
            record_validation_failure(operation.value)
            logger.info(
                "request_rejected",
                operation=operation.value,
                field=e.field,
                message=e.message,
            )
            raise
        except UpstreamProtocolException as e:
            record_upstream_protocol_error(operation.value)
            logger.warning(
                "upstream_protocol_error",
                operation=operation.value,
                reason=e.reason,
            )
            raise
        except GatewayException:
            raise
        except Exception as e:
            logger.exception(
                "operation_failed",
                operation=operation.value,
                error_type=type(e).__name__,
            )
            raise InternalGatewayException(operation.value) from e

    def _log_rejection(self, operation: UpstreamOperation, response: RawResponse) -> str:
        body = response.text[:LOGGED_BODY_LIMIT]
        logger.warning(
            "upstream_rejected",
            operation=operation.value,
            upstream_status=response.status_code,
            upstream_body=body,
        )
        return body

    def _rejected(
        self,
        operation: UpstreamOperation,
        response: RawResponse,
        message: str,
    ) -> UpstreamRejectedException:
        return UpstreamRejectedException(
            operation=operation.value,
            status_code=response.status_code,
            body=self._log_rejection(operation, response),
            message=message,
            expose_details=self._config.expose_upstream_errors,
        )

    @staticmethod
    def _decode_json(operation: UpstreamOperation, response: RawResponse) -> Any:
        try:
            return json.loads(response.content)
        except ValueError:
            raise UpstreamProtocolException(operation.value, "response body is not JSON")
