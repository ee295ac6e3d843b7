"""Candidate entity and the records hanging off it.

A ``Process`` links a candidate to an offer with a ``ProcessStatus``; every
status it went through is kept as a ``ProcessArchive`` row.
"""

from sqlalchemy import Column, ForeignKey, Integer, String, Text, event
from sqlalchemy.orm import relationship

from ats_api.core.db import Base, TimestampMixin
from ats_api.models.enums import ProcessStatus
from ats_api.utils.slugs import slugify


class Qualification(TimestampMixin, Base):
    __tablename__ = "qualifications"

    id = Column(Integer, primary_key=True)
    rank = Column(Integer, nullable=False)


class Candidate(TimestampMixin, Base):
    __tablename__ = "candidates"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    email = Column(String(255), nullable=False)
    resume = Column(Text, nullable=False, default="")
    referrer_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    qualification_id = Column(Integer, ForeignKey("qualifications.id"), nullable=True)

    referrer = relationship("User", back_populates="candidates")
    qualification = relationship("Qualification")
    processes = relationship("Process", back_populates="candidate")
    interviews = relationship("Interview", back_populates="candidate")


class Interview(TimestampMixin, Base):
    __tablename__ = "interviews"

    id = Column(Integer, primary_key=True)
    comments = Column(Text, nullable=False, default="")
    candidate_id = Column(Integer, ForeignKey("candidates.id"), nullable=False, index=True)
    recruiter_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)

    candidate = relationship("Candidate", back_populates="interviews")
    recruiter = relationship("User", back_populates="interviews")


class Process(TimestampMixin, Base):
    __tablename__ = "processes"

    id = Column(Integer, primary_key=True)
    candidate_id = Column(Integer, ForeignKey("candidates.id"), nullable=False, index=True)
    offer_id = Column(Integer, ForeignKey("offers.id"), nullable=False, index=True)
    status = Column(String(50), default=ProcessStatus.WAITING.value, nullable=False)

    candidate = relationship("Candidate", back_populates="processes")
    offer = relationship("Offer", back_populates="processes")
    archives = relationship("ProcessArchive", back_populates="process")


class ProcessArchive(TimestampMixin, Base):
    __tablename__ = "process_archives"

    id = Column(Integer, primary_key=True)
    process_id = Column(Integer, ForeignKey("processes.id"), nullable=False, index=True)
    status = Column(String(50), nullable=False)

    process = relationship("Process", back_populates="archives")


@event.listens_for(Candidate, "before_insert")
def generate_candidate_slug(mapper, connection, target: Candidate) -> None:
    if not target.slug:
        target.slug = slugify(target.name)
