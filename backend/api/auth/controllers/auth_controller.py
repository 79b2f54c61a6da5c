"""Auth controller — login, logout, current user and login history."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from auth import get_identity, require_admin
from config import COOKIE_NAME, SECURE_COOKIES
from api.auth.dto.auth import Identity, LoginLogsResponse, LoginRequest, LoginResponse, MeResponse
from api.auth.services.auth_service import AuthService
from api.deps import get_auth_service

router = APIRouter(prefix="/api/auth", tags=["Auth"])
logs_router = APIRouter(prefix="/api/login-logs", tags=["Auth"])


def client_ip(request: Request) -> str | None:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip
    return request.client.host if request.client else None


@router.post("/login", response_model=LoginResponse)
def login(
    request: Request,
    data: LoginRequest,
    service: AuthService = Depends(get_auth_service),
):
    session, identity = service.login(
        data.username,
        data.password,
        ip_address=client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )

    body = LoginResponse(user=identity).model_dump(mode="json", by_alias=True)
    response = JSONResponse(body)
    response.set_cookie(
        COOKIE_NAME,
        session.id,
        httponly=True,
        secure=SECURE_COOKIES,
        samesite="lax",
        max_age=int(service.session_duration.total_seconds()),
        path="/",
    )
    return response


@router.post("/logout")
def logout(request: Request, service: AuthService = Depends(get_auth_service)):
    session_id = request.cookies.get(COOKIE_NAME)
    if session_id:
        service.logout(session_id)
    response = JSONResponse({"success": True})
    response.delete_cookie(COOKIE_NAME, path="/")
    return response


@router.get("/me", response_model=MeResponse)
def me(request: Request):
    identity = get_identity(request)
    if identity is None and request.cookies.get(COOKIE_NAME):
        response = JSONResponse({"user": None})
        response.delete_cookie(COOKIE_NAME, path="/")
        return response
    return MeResponse(user=identity)


@logs_router.get("", response_model=LoginLogsResponse)
def login_logs(
    _: Identity = Depends(require_admin),
    service: AuthService = Depends(get_auth_service),
):
    return LoginLogsResponse(logs=service.recent_logins(100))
