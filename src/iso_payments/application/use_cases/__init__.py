"""Use cases - Application workflows over the payment aggregate."""

from iso_payments.application.use_cases.apply_status_report import (
    ApplyStatusReportUseCase,
    StatusReportRequest,
    StatusReportResponse,
)
from iso_payments.application.use_cases.initiate_payment import (
    InitiatePaymentResponse,
    InitiatePaymentUseCase,
)

__all__ = [
    "ApplyStatusReportUseCase",
    "InitiatePaymentResponse",
    "InitiatePaymentUseCase",
    "StatusReportRequest",
    "StatusReportResponse",
]
