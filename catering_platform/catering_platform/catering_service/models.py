from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Text, Table
from datetime import datetime
from .db import Base
from sqlalchemy.orm import relationship


facility_tags = Table(
    "facility_tags",
    Base.metadata,
    Column("facility_id", Integer, ForeignKey("facilities.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)

employee_facilities = Table(
    "employee_facilities",
    Base.metadata,
    Column("employee_id", Integer, ForeignKey("employees.id", ondelete="CASCADE"), primary_key=True),
    Column("facility_id", Integer, ForeignKey("facilities.id", ondelete="CASCADE"), primary_key=True),
)


class Location(Base):
    __tablename__ = "locations"
    id = Column(Integer, primary_key=True, index=True)
    city = Column(String(255), nullable=True)
    address = Column(Text, nullable=True)
    zip_code = Column(String(20), nullable=True)
    country_code = Column(String(10), nullable=True)
    phone_number = Column(String(20), nullable=True)

    facilities = relationship("Facility", back_populates="location")

    def __repr__(self):
        return f"<Location(id={self.id}, city={self.city})>"


class Tag(Base):
    __tablename__ = "tags"
    id = Column(Integer, primary_key=True, index=True)
    # Exact-match unique; "Wedding" and "wedding" are distinct tags
    name = Column(String(255), unique=True, index=True, nullable=False)

    facilities = relationship("Facility", secondary=facility_tags, back_populates="tags")

    def __repr__(self):
        return f"<Tag(id={self.id}, name={self.name})>"


class Facility(Base):
    __tablename__ = "facilities"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=False, index=True)
    creation_date = Column(DateTime, default=datetime.utcnow, nullable=False)

    location = relationship("Location", back_populates="facilities")
    tags = relationship("Tag", secondary=facility_tags, back_populates="facilities", order_by="Tag.id")
    employees = relationship("Employee", secondary=employee_facilities, back_populates="facilities")

    def __repr__(self):
        return f"<Facility(id={self.id}, name={self.name}, location_id={self.location_id})>"


class Employee(Base):
    __tablename__ = "employees"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    address = Column(Text, nullable=True)
    phone = Column(String(20), nullable=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    facilities = relationship(
        "Facility", secondary=employee_facilities, back_populates="employees", order_by="Facility.id"
    )

    def __repr__(self):
        return f"<Employee(id={self.id}, email={self.email})>"
