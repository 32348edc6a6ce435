"""Domain layer - ISO 20022 payment initiation model.

This layer contains:
- Entities: Payment (aggregate root) and CreditTransfer
- Value Objects: Money, Iban, Bic, EndToEndId, Party, Uuid
- Domain Events: records of payment lifecycle transitions
- Domain Exceptions: validation and invalid-transition errors

The domain layer has NO dependencies on external frameworks or infrastructure.
It does not log and performs no I/O.
"""
