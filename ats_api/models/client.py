"""Client (hiring company) entity."""

from sqlalchemy import Column, ForeignKey, Integer, String, event
from sqlalchemy.orm import relationship

from ats_api.core.db import Base, TimestampMixin
from ats_api.utils.slugs import slugify


class Client(TimestampMixin, Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)
    phone = Column(String(50), nullable=False)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    account_manager_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)

    account_manager = relationship("User", back_populates="clients")
    offers = relationship("Offer", back_populates="owner")


@event.listens_for(Client, "before_insert")
def generate_client_slug(mapper, connection, target: Client) -> None:
    if not target.slug:
        target.slug = slugify(target.name)
