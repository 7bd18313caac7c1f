from typing import Optional

from fastapi import APIRouter, Depends, Header

from todo_api.dependencies import extract_bearer_token, get_auth_service
from todo_api.errors import AuthenticationError
from todo_api.schemas.user import LoginResponse, RegisterResponse, UserCredentials, UserOut, VerifyResponse
from todo_api.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
def register(body: UserCredentials, auth: AuthService = Depends(get_auth_service)):
    user = auth.register(body.email, body.password)
    return {"message": "User registered successfully", "user": UserOut.model_validate(user)}


@router.post("/login", response_model=LoginResponse)
def login(body: UserCredentials, auth: AuthService = Depends(get_auth_service)):
    result = auth.login(body.email, body.password)
    return {
        "message": "Login successful",
        "accessToken": result.access_token,
        "user": UserOut.model_validate(result.user),
    }


@router.get("/verify", response_model=VerifyResponse)
def verify(authorization: Optional[str] = Header(None), auth: AuthService = Depends(get_auth_service)):
    token = extract_bearer_token(authorization)
    if token is None:
        raise AuthenticationError("No token provided")
    identity = auth.verify_token(token)
    return {"message": "Token is valid", "user": {"id": identity.user_id, "email": identity.email}}
