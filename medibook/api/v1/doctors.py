from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from ...core.database import get_db
from ...schemas.doctor import DoctorResponse
from ...services.doctor_service import DoctorService

router = APIRouter(prefix="/doctors", tags=["Doctors"])

@router.get("", response_model=List[DoctorResponse], response_model_exclude_none=True)
def list_doctors(
    lat: Optional[str] = Query(None),
    lng: Optional[str] = Query(None),
    specialty: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    """List doctors, nearest first when a location is given."""
    doctor_service = DoctorService(db)
    results = doctor_service.list_doctors(specialty=specialty, lat=lat, lng=lng)

    response = []
    for doctor, distance in results:
        item = DoctorResponse.model_validate(doctor)
        item.distance = distance
        response.append(item)
    return response

@router.get("/specialty/{specialty}", response_model=List[DoctorResponse], response_model_exclude_none=True)
def list_doctors_by_specialty(
    specialty: str,
    db: Session = Depends(get_db)
):
    """List doctors with exactly this specialty."""
    doctor_service = DoctorService(db)
    return [
        DoctorResponse.model_validate(doctor)
        for doctor in doctor_service.get_doctors_by_specialty(specialty)
    ]

@router.get("/{doctor_id}", response_model=DoctorResponse, response_model_exclude_none=True)
def get_doctor(
    doctor_id: int,
    db: Session = Depends(get_db)
):
    """Get a single doctor."""
    doctor_service = DoctorService(db)
    return DoctorResponse.model_validate(doctor_service.get_doctor(doctor_id))
