from pydantic import BaseModel

class Token(BaseModel):
    message: str
    access_token: str
    token_type: str = "bearer"
