# app/schemas/account.py
from pydantic import BaseModel, Field

class AccountCreate(BaseModel):
    identity: str
    password: str = Field(min_length=8, max_length=128)

class AccountOut(BaseModel):
    identity: str

    model_config = {"from_attributes": True}

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    identity: str
