# SQLAlchemy models

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)


class Event(TimestampMixin, Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    type = Column(String(32), nullable=False)
    description = Column(Text, nullable=False, default="")

    __table_args__ = (
        UniqueConstraint("name", "type", name="uq_events_name_type"),
    )


class Property(TimestampMixin, Base):
    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    type = Column(String(32), nullable=False)
    description = Column(Text, nullable=False, default="")

    __table_args__ = (
        UniqueConstraint("name", "type", name="uq_properties_name_type"),
    )


class TrackingPlan(TimestampMixin, Base):
    __tablename__ = "tracking_plans"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)
    description = Column(Text, nullable=False, default="")

    events = relationship(
        "TrackingPlanEvent",
        back_populates="tracking_plan",
        order_by="TrackingPlanEvent.position",
        cascade="all, delete-orphan",
        passive_deletes=True
    )


class TrackingPlanEvent(Base):
    __tablename__ = "tracking_plan_events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tracking_plan_id = Column(
        Integer,
        ForeignKey("tracking_plans.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    additional_properties = Column(Boolean, nullable=False, default=False)
    position = Column(Integer, nullable=False, default=0)

    tracking_plan = relationship("TrackingPlan", back_populates="events")
    event = relationship("Event")
    properties = relationship(
        "TrackingPlanEventProperty",
        back_populates="tracking_plan_event",
        order_by="TrackingPlanEventProperty.position",
        cascade="all, delete-orphan",
        passive_deletes=True
    )


class TrackingPlanEventProperty(Base):
    __tablename__ = "tracking_plan_event_properties"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tracking_plan_event_id = Column(
        Integer,
        ForeignKey("tracking_plan_events.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    property_id = Column(Integer, ForeignKey("properties.id"), nullable=False, index=True)
    required = Column(Boolean, nullable=False, default=False)
    position = Column(Integer, nullable=False, default=0)

    tracking_plan_event = relationship("TrackingPlanEvent", back_populates="properties")
    property = relationship("Property")
