"""User schemas"""

from pydantic import BaseModel


class UserProfile(BaseModel):
    """Profile fields exposed through the userinfo endpoint"""

    id: str
    first_name: str
    last_name: str
    email: str

    model_config = {"from_attributes": True}

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class UserInfoResponse(BaseModel):
    """Userinfo endpoint response"""

    sub: str
    name: str
    email: str
