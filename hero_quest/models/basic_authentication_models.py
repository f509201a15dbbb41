from pydantic import BaseModel


class IdentityModel(BaseModel):
    """Stored credentials of a caller identity."""
    address: str
    hash_password: str
    salt: str
