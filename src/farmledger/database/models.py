"""SQLAlchemy models for the farmledger database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Transaction(Base):
    """Ledger entry model.

    ``flock_id`` is a weak reference with no foreign key: deleting a flock
    leaves its transactions in place.
    """

    __tablename__ = "transactions"

    id = Column(String, primary_key=True)
    position = Column(Integer, nullable=False, default=0)
    date = Column(Date, nullable=False)
    type = Column(String, nullable=False)
    category = Column(String, nullable=False)
    amount = Column(Numeric(18, 6), nullable=False)
    description = Column(String, nullable=False, default="")
    flock_id = Column(String, nullable=True)
    recorded_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Flock(Base):
    """Flock (batch) model."""

    __tablename__ = "flocks"

    id = Column(String, primary_key=True)
    position = Column(Integer, nullable=False, default=0)
    batch_name = Column(String, nullable=False)
    breed = Column(String, nullable=False, default="")
    start_date = Column(Date, nullable=False)
    initial_count = Column(Integer, nullable=False, default=0)
    current_count = Column(Integer, nullable=False, default=0)

    # Relationships
    weight_logs = relationship(
        "WeightLog", back_populates="flock", cascade="all, delete-orphan", order_by="WeightLog.position"
    )
    mortality_logs = relationship(
        "MortalityLog", back_populates="flock", cascade="all, delete-orphan", order_by="MortalityLog.position"
    )
    feed_logs = relationship(
        "FeedLog", back_populates="flock", cascade="all, delete-orphan", order_by="FeedLog.position"
    )


class WeightLog(Base):
    """Weight sample model."""

    __tablename__ = "weight_logs"

    id = Column(String, primary_key=True)
    flock_id = Column(String, ForeignKey("flocks.id"), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    date = Column(Date, nullable=False)
    average_weight = Column(Numeric(18, 6), nullable=False)
    sample_size = Column(Integer, nullable=False, default=0)

    flock = relationship("Flock", back_populates="weight_logs")


class MortalityLog(Base):
    """Mortality model."""

    __tablename__ = "mortality_logs"

    id = Column(String, primary_key=True)
    flock_id = Column(String, ForeignKey("flocks.id"), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    date = Column(Date, nullable=False)
    count = Column(Integer, nullable=False, default=0)
    reason = Column(String, nullable=True)

    flock = relationship("Flock", back_populates="mortality_logs")


class FeedLog(Base):
    """Feed consumption model."""

    __tablename__ = "feed_logs"

    id = Column(String, primary_key=True)
    flock_id = Column(String, ForeignKey("flocks.id"), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    date = Column(Date, nullable=False)
    amount = Column(Numeric(18, 6), nullable=False)
    unit = Column(String, nullable=False)

    flock = relationship("Flock", back_populates="feed_logs")


class InventoryItem(Base):
    """Inventory line model."""

    __tablename__ = "inventory"

    id = Column(String, primary_key=True)
    position = Column(Integer, nullable=False, default=0)
    name = Column(String, nullable=False)
    category = Column(String, nullable=False)
    current_quantity = Column(Numeric(18, 6), nullable=False, default=0)
    unit = Column(String, nullable=False)
    min_threshold = Column(Numeric(18, 6), nullable=False, default=0)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
