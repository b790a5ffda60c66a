from typing import Optional
from pydantic import BaseModel


class Credentials(BaseModel):
    # champs optionnels : l'absence est traitée par la route (400 explicite)
    email: Optional[str] = None
    password: Optional[str] = None


class RegisterIn(Credentials):
    pass


class LoginIn(Credentials):
    pass


class MessageOut(BaseModel):
    success: bool = True
    message: str


class TokenOut(BaseModel):
    success: bool = True
    token: str


class MeOut(BaseModel):
    id: str
    email: str
