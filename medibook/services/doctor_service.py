from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from typing import List, Optional, Tuple
import logging

from ..core.geo import calculate_distance, parse_coordinates
from ..models.doctor import Doctor
from ..seed_data import SEED_DOCTORS

logger = logging.getLogger(__name__)

class DoctorService:
    def __init__(self, db: Session):
        self.db = db

    def get_doctors(self) -> List[Doctor]:
        return self.db.query(Doctor).order_by(Doctor.id).all()

    def get_doctors_by_specialty(self, specialty: str) -> List[Doctor]:
        """Doctors whose specialty equals ``specialty`` exactly."""
        return self.db.query(Doctor).filter(
            Doctor.specialty == specialty
        ).order_by(Doctor.id).all()

    def get_doctor(self, doctor_id: int) -> Doctor:
        doctor = self.db.query(Doctor).filter(Doctor.id == doctor_id).first()
        if not doctor:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Doctor not found"
            )
        return doctor

    def list_doctors(
        self,
        specialty: Optional[str] = None,
        lat: Optional[str] = None,
        lng: Optional[str] = None,
    ) -> List[Tuple[Doctor, Optional[float]]]:
        """Directory query.

        Returns ``(doctor, distance_km)`` pairs. When ``lat``/``lng`` parse to
        a valid coordinate every doctor gets a distance and the list is sorted
        nearest first; otherwise distances are ``None`` and the default order
        is kept.
        """
        doctors = self.get_doctors_by_specialty(specialty) if specialty else self.get_doctors()

        origin = parse_coordinates(lat, lng)
        if origin is None:
            if lat is not None or lng is not None:
                logger.info(f"Ignoring invalid coordinates lat={lat!r} lng={lng!r}")
            return [(doctor, None) for doctor in doctors]

        user_lat, user_lng = origin
        with_distance = [
            (doctor, calculate_distance(user_lat, user_lng, doctor.latitude, doctor.longitude))
            for doctor in doctors
        ]
        with_distance.sort(key=lambda pair: pair[1])
        return with_distance

    def seed_doctors(self) -> int:
        """Insert the built-in directory when no doctors exist."""
        if self.db.query(Doctor).first() is not None:
            return 0

        self.db.add_all([Doctor(**data) for data in SEED_DOCTORS])
        self.db.commit()
        logger.info(f"Seeded database with {len(SEED_DOCTORS)} doctors")
        return len(SEED_DOCTORS)
