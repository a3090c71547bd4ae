from typing import Optional
from pydantic import BaseModel


# Users live in the external identity service; this is only the shape it returns
class AuthUser(BaseModel):
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    picture: Optional[str] = None

    class Config:
        extra = "allow"  # pass through whatever else the provider sends
