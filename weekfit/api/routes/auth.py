from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Header, HTTPException

from weekfit.api.dependencies import Backend, bearer_token, get_backend, get_current_user
from weekfit.infra.Auth_Service import AuthError
from weekfit.utilities.validators import SignUpInput, LoginInput

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup")
def signup(payload: SignUpInput, backend: Backend = Depends(get_backend)):
    try:
        return backend.auth.sign_up(payload.email, payload.password, payload.full_name)
    except AuthError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/login")
def login(payload: LoginInput, backend: Backend = Depends(get_backend)):
    try:
        return backend.auth.sign_in(payload.email.strip().lower(), payload.password)
    except AuthError as e:
        raise HTTPException(status_code=401, detail=str(e))


@router.post("/logout")
def logout(authorization: Optional[str] = Header(default=None), backend: Backend = Depends(get_backend)):
    backend.auth.sign_out(bearer_token(authorization))
    return {"ok": True}


@router.get("/me")
def me(user: Optional[Dict[str, Any]] = Depends(get_current_user)):
    return {"user": user}
