"""User (recruiter) account entity."""

from sqlalchemy import Column, Integer, String, event
from sqlalchemy.orm import relationship

from ats_api.core.db import Base, TimestampMixin
from ats_api.utils.slugs import short_id, slugify


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    # bcrypt hash; response schemas never expose it
    password = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False, index=True)

    offers = relationship("Offer", back_populates="referrer")
    clients = relationship("Client", back_populates="account_manager")
    candidates = relationship("Candidate", back_populates="referrer")
    interviews = relationship("Interview", back_populates="recruiter")


@event.listens_for(User, "before_insert")
def generate_user_slug(mapper, connection, target: User) -> None:
    if not target.slug:
        target.slug = slugify(f"{target.first_name}-{target.last_name}-{short_id()}")
