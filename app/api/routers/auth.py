from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from app.api.cookies import clear_session_cookie, set_session_cookie
from app.api.deps import get_app_settings, get_login_use_case, get_provision_account_use_case
from app.api.errors import to_http_exception
from app.api.schemas.auth import CreateAccountRequest, LoginRequest, OkResponse
from app.application.dto.auth import LoginInput, ProvisionAccountInput
from app.application.use_cases.login import LoginUseCase
from app.application.use_cases.provision_account import ProvisionAccountUseCase
from app.domain.exceptions import DomainError
from app.shared.config import Settings


router = APIRouter()


@router.post("/api/create-account", response_model=OkResponse, status_code=201)
def create_account(
    req: CreateAccountRequest,
    response: Response,
    settings: Settings = Depends(get_app_settings),
    use_case: ProvisionAccountUseCase = Depends(get_provision_account_use_case),
):
    try:
        output = use_case.execute(
            ProvisionAccountInput(
                reference=req.session_id,
                password=req.password,
            )
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc

    set_session_cookie(response, output.session.token, secure=settings.is_production)
    return OkResponse(ok=True)


@router.post("/api/login", response_model=OkResponse)
def login(
    req: LoginRequest,
    response: Response,
    settings: Settings = Depends(get_app_settings),
    use_case: LoginUseCase = Depends(get_login_use_case),
):
    try:
        output = use_case.execute(LoginInput(email=req.email, password=req.password))
    except DomainError as exc:
        raise to_http_exception(exc) from exc

    set_session_cookie(response, output.session.token, secure=settings.is_production)
    return OkResponse(ok=True)


@router.post("/api/logout", response_model=OkResponse)
def logout(
    response: Response,
    settings: Settings = Depends(get_app_settings),
):
    clear_session_cookie(response, secure=settings.is_production)
    return OkResponse(ok=True)
