"""
Payment API endpoints (per client)
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, field_validator

from cgest.api.deps import get_storage, get_today
from cgest.api.v1.schemas import PaymentResponse, normalize_amount
from cgest.application.clients import ClientNotFoundError, ClientReadService, get_client_or_raise
from cgest.application.payments import PaymentLedger, PaymentValidationError
from cgest.infrastructure.storage.repository import Storage

router = APIRouter(prefix="/api/v1/clients/{client_id}/payments", tags=["payments"])


class ManualPaymentRequest(BaseModel):
    year: int
    month: int = Field(ge=1, le=12)
    value: str
    description: Optional[str] = None
    receipt_url: Optional[str] = None

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: str) -> str:
        return normalize_amount(v)


class UpsertPaymentRequest(BaseModel):
    """Atualização parcial: só os campos enviados são aplicados."""
    due_date: date
    payment_id: Optional[str] = None
    value: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    paid_at: Optional[date] = None
    receipt_url: Optional[str] = None

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: Optional[str]) -> Optional[str]:
        return normalize_amount(v)

    @field_validator("description", "status")
    @classmethod
    def validate_not_null(cls, v: Optional[str]) -> str:
        """Omitir o campo mantém o valor atual; null não é aceito"""
        if v is None:
            raise ValueError("Campo não pode ser nulo")
        return v


class PaymentGridCell(BaseModel):
    month: int
    label: str
    payment: Optional[PaymentResponse]


def _ledger(storage: Storage, today: date) -> PaymentLedger:
    return PaymentLedger(storage, today=lambda: today)


@router.get("/", response_model=list[PaymentGridCell])
def payment_grid(client_id: str, year: int, storage: Storage = Depends(get_storage)):
    """Pagamentos do cliente mês a mês no ano"""
    try:
        cells = ClientReadService(storage).payment_grid(client_id, year)
    except ClientNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return [
        PaymentGridCell(
            month=c["month"],
            label=c["label"],
            payment=PaymentResponse.from_record(c["payment"]) if c["payment"] else None,
        )
        for c in cells
    ]


@router.post("/", response_model=PaymentResponse)
def record_payment(
    client_id: str,
    req: ManualPaymentRequest,
    storage: Storage = Depends(get_storage),
    today=Depends(get_today),
):
    """Lançamento manual: o pagamento do mês fica como pago"""
    try:
        client = get_client_or_raise(storage, client_id)
        payment = _ledger(storage, today).record_manual_payment(
            client,
            year=req.year,
            month=req.month,
            value=req.value,
            description=req.description,
            receipt_url=req.receipt_url,
        )
    except ClientNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PaymentValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return PaymentResponse.from_record(payment)


@router.put("/", response_model=PaymentResponse)
def upsert_payment(
    client_id: str,
    req: UpsertPaymentRequest,
    storage: Storage = Depends(get_storage),
    today=Depends(get_today),
):
    try:
        get_client_or_raise(storage, client_id)
        changes = req.model_dump(exclude_unset=True, exclude={"due_date", "payment_id"})
        payment = _ledger(storage, today).upsert(
            client_id, req.due_date, changes, payment_id=req.payment_id,
        )
    except ClientNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PaymentValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return PaymentResponse.from_record(payment)


@router.post("/{year}/{month}/toggle", response_model=PaymentResponse)
def toggle_payment(
    client_id: str,
    year: int,
    month: int,
    storage: Storage = Depends(get_storage),
    today=Depends(get_today),
):
    """Alternar pago/pendente do mês (cria como pago se não existir)"""
    if not 1 <= month <= 12:
        raise HTTPException(status_code=400, detail=f"Mês inválido: {month}")
    try:
        client = get_client_or_raise(storage, client_id)
        payment = _ledger(storage, today).toggle(client, year, month)
    except ClientNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return PaymentResponse.from_record(payment)
