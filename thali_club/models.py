from sqlalchemy import (
    Column,
    Integer,
    String,
    JSON,
    DateTime,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class WizardSnapshot(Base):
    """
    Key-value record holding one browsing client's in-progress catering order.

    Each client owns exactly one record per key (the configurator only uses the
    "in-progress" key). The payload is the serialized wizard session with the
    package referenced by name.
    """
    __tablename__ = "wizard_snapshots"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(String, nullable=False, index=True)  # cookie value
    key = Column(String, nullable=False)

    payload = Column(JSON, nullable=False, default=dict)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("client_id", "key", name="uix_snapshot_client_key"),
    )
