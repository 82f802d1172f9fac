# backend/carwash/models/payment_method.py
"""
Stored client payment methods.

Only display data is kept for cards (last four digits, holder, expiry,
brand); nothing here is ever sent to a processor. Deactivation is a
soft delete.
"""

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, ForeignKey, Index, String, text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..core.enums import PaymentMethodType
from ..database import Base

_PRINCIPAL_SQL = "is_principal AND is_active"


class PaymentMethod(Base):
    __tablename__ = "payment_methods"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    user_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(20), nullable=False)

    last_four = Column(String(4), nullable=True)
    holder_name = Column(String(100), nullable=True)
    expiry = Column(String(5), nullable=True)  # MM/YY
    brand = Column(String(30), nullable=True)

    is_principal = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("User", back_populates="payment_methods")

    __table_args__ = (
        CheckConstraint(
            "type IN ('credit_card', 'debit_card', 'pse', 'cash')",
            name="ck_payment_methods_type",
        ),
        # At most one active principal method per client
        Index(
            "uq_payment_methods_user_principal",
            "user_id",
            unique=True,
            sqlite_where=text(_PRINCIPAL_SQL),
            postgresql_where=text(_PRINCIPAL_SQL),
        ),
    )

    @property
    def type_enum(self) -> PaymentMethodType:
        return PaymentMethodType(self.type)

    def __repr__(self) -> str:
        return f"<PaymentMethod {self.type} user={self.user_id} principal={self.is_principal}>"
