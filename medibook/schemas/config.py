from .auth import CamelModel

class ClientConfigResponse(CamelModel):
    google_maps_api_key: str
