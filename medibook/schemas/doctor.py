from typing import List, Optional

from .auth import CamelModel

class DoctorResponse(CamelModel):
    id: int
    name: str
    specialty: str
    bio: str
    image_url: str
    location: str
    city: str
    state: str
    latitude: float
    longitude: float
    available_hours: List[str]
    experience: int
    rating: float
    # Kilometers from the requester; only present when coordinates were given
    distance: Optional[float] = None

class DoctorSummary(CamelModel):
    name: str
    specialty: str
    location: str
