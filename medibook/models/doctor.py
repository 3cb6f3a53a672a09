from sqlalchemy import Column, Integer, String, Float, Text, JSON
from sqlalchemy.orm import relationship

from ..core.database import Base

class Doctor(Base):
    __tablename__ = "doctors"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    specialty = Column(String(100), nullable=False, index=True)
    bio = Column(Text, nullable=False)
    image_url = Column(String(500), nullable=False)

    # Location
    location = Column(String(255), nullable=False)
    city = Column(String(100), nullable=False)
    state = Column(String(100), nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)

    # Time-of-day slots as "HH:mm" strings
    available_hours = Column(JSON, nullable=False, default=list)
    experience = Column(Integer, nullable=False)
    rating = Column(Float, nullable=False, default=4.5)

    appointments = relationship("Appointment", back_populates="doctor")

    def __repr__(self):
        return f"<Doctor(id={self.id}, name='{self.name}', specialty='{self.specialty}')>"
