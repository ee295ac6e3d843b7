"""Job offer entity."""

from sqlalchemy import Column, ForeignKey, Integer, String, event
from sqlalchemy.orm import relationship

from ats_api.core.db import Base, TimestampMixin
from ats_api.models.enums import Contract
from ats_api.utils.slugs import slugify


class Offer(TimestampMixin, Base):
    __tablename__ = "offers"

    id = Column(Integer, primary_key=True, index=True)
    job = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    annual_salary = Column(Integer, nullable=False)
    contract_type = Column(String(20), default=Contract.PERMANENT.value, nullable=False)
    referrer_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    owner_id = Column(Integer, ForeignKey("clients.id"), nullable=True, index=True)

    referrer = relationship("User", back_populates="offers")
    owner = relationship("Client", back_populates="offers")
    processes = relationship("Process", back_populates="offer")


@event.listens_for(Offer, "before_insert")
def generate_offer_slug(mapper, connection, target: Offer) -> None:
    if target.slug:
        return
    prefix = f"{target.owner.name}-" if target.owner is not None else ""
    target.slug = slugify(f"{prefix}{target.job}")
