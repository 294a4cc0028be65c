import uuid
from sqlalchemy import Column, String, Text, Numeric, TIMESTAMP, ForeignKey, Enum as SAEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.models.base import Base
from app.models.enums import ApplicationStatus


class Application(Base):
    __tablename__ = "applications"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    customer_id = Column(Text, nullable=False, index=True)
    name = Column(Text, nullable=False)
    mobile_number = Column(Text, nullable=False, index=True)
    address = Column(Text, nullable=False)
    ward = Column(Text, nullable=False)
    agent_pro = Column(Text)
    preference = Column(Text)
    category_id = Column(String(36), ForeignKey("categories.id", ondelete="RESTRICT"), nullable=False)
    panchayath_id = Column(String(36), ForeignKey("panchayaths.id", ondelete="SET NULL"))
    status = Column(
        SAEnum(
            ApplicationStatus,
            name="application_status_enum",
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
        default=ApplicationStatus.PENDING,
        server_default=ApplicationStatus.PENDING.value,
    )
    fee_paid = Column(Numeric(10, 2, asdecimal=False), nullable=False, server_default="0")
    approved_date = Column(TIMESTAMP(timezone=True))
    approved_by = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    category = relationship("Category", lazy="joined")
    panchayath = relationship("Panchayath", lazy="joined")
