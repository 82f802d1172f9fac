# backend/carwash/routes/v1/payment_methods.py
"""Payment method routes - API v1."""

from typing import List, Optional

from fastapi import APIRouter, Depends, status

from ...api.dependencies import get_current_active_user, get_payment_method_service
from ...core.exceptions import DomainException
from ...errors import handle_domain_exception
from ...models.user import User
from ...schemas.base import StatusResponse
from ...schemas.payment_method import PaymentMethodCreate, PaymentMethodResponse
from ...services.payment_method_service import PaymentMethodService

router = APIRouter(tags=["payment-methods-v1"])


@router.get("", response_model=List[PaymentMethodResponse])
def list_payment_methods(
    current_user: User = Depends(get_current_active_user),
    payment_service: PaymentMethodService = Depends(get_payment_method_service),
) -> List[PaymentMethodResponse]:
    return [
        PaymentMethodResponse.model_validate(m)
        for m in payment_service.list_payment_methods(current_user.id)
    ]


@router.post("", response_model=PaymentMethodResponse, status_code=status.HTTP_201_CREATED)
def create_payment_method(
    payload: PaymentMethodCreate,
    current_user: User = Depends(get_current_active_user),
    payment_service: PaymentMethodService = Depends(get_payment_method_service),
) -> PaymentMethodResponse:
    """Add a method; cards are format-checked only. At most three active methods."""
    try:
        method = payment_service.create_payment_method(current_user.id, payload)
        return PaymentMethodResponse.model_validate(method)
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/principal", response_model=Optional[PaymentMethodResponse])
def get_principal_payment_method(
    current_user: User = Depends(get_current_active_user),
    payment_service: PaymentMethodService = Depends(get_payment_method_service),
) -> Optional[PaymentMethodResponse]:
    method = payment_service.get_principal(current_user.id)
    return PaymentMethodResponse.model_validate(method) if method else None


@router.get("/{method_id}", response_model=PaymentMethodResponse)
def get_payment_method(
    method_id: str,
    current_user: User = Depends(get_current_active_user),
    payment_service: PaymentMethodService = Depends(get_payment_method_service),
) -> PaymentMethodResponse:
    try:
        method = payment_service.get_payment_method(method_id, current_user.id)
        return PaymentMethodResponse.model_validate(method)
    except DomainException as e:
        handle_domain_exception(e)


@router.post("/{method_id}/principal", response_model=PaymentMethodResponse)
def set_principal_payment_method(
    method_id: str,
    current_user: User = Depends(get_current_active_user),
    payment_service: PaymentMethodService = Depends(get_payment_method_service),
) -> PaymentMethodResponse:
    try:
        method = payment_service.set_principal(method_id, current_user.id)
        return PaymentMethodResponse.model_validate(method)
    except DomainException as e:
        handle_domain_exception(e)


@router.delete("/{method_id}", response_model=StatusResponse)
def delete_payment_method(
    method_id: str,
    current_user: User = Depends(get_current_active_user),
    payment_service: PaymentMethodService = Depends(get_payment_method_service),
) -> StatusResponse:
    try:
        payment_service.deactivate_payment_method(method_id, current_user.id)
    except DomainException as e:
        handle_domain_exception(e)
    return StatusResponse(success=True, message="Payment method removed")
