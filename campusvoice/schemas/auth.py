from typing import Optional
from pydantic import BaseModel


# OAuth code handed back by the identity provider after sign-in
class SessionCreate(BaseModel):
    code: Optional[str] = None
