from sqlalchemy import Column, Integer, String, CheckConstraint
from sqlalchemy.orm import relationship
from jobboard.core.database import Base


class Company(Base):
    """
    Company (organization) that posts jobs.

    Only used to create the schema; all reads and writes go through the
    raw SQL in jobboard.crud.company.
    """
    __tablename__ = "companies"

    handle = Column(String(25), primary_key=True)
    name = Column(String, unique=True, nullable=False)
    num_employees = Column(Integer, CheckConstraint("num_employees >= 0"), nullable=True)
    description = Column(String, nullable=False)
    logo_url = Column(String, nullable=True)

    # Relationships
    jobs = relationship("Job", back_populates="company", cascade="all, delete-orphan", passive_deletes=True)

    def __repr__(self):
        return f"<Company(handle='{self.handle}', name='{self.name}')>"
