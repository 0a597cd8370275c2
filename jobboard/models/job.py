from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from jobboard.core.database import Base


class Job(Base):
    """
    Job posted by a company.

    Jobs are addressed by their company's handle; id is a storage-only
    surrogate key and never leaves the database layer.
    """
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String, nullable=False)
    salary = Column(Integer, CheckConstraint("salary >= 0"), nullable=True)

    # NUMERIC so values like "0.020" keep their scale on Postgres.
    # SQLite stores NUMERIC as REAL, so there the scale and long decimals are lost.
    equity = Column(Numeric, CheckConstraint("equity <= 1.0"), nullable=True)

    company_handle = Column(
        String(25),
        ForeignKey("companies.handle", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    company = relationship("Company", back_populates="jobs")

    def __repr__(self):
        return f"<Job(id={self.id}, title='{self.title}', company_handle='{self.company_handle}')>"
