"""Authentication routes: password accounts, external identity, sessions."""

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from protean.utils.globals import current_domain

from storefront import config
from storefront.api.presenters import user_response
from storefront.api.schemas import (
    ExternalLoginRequest,
    LoginRequest,
    RegisterRequest,
    StatusResponse,
    UserResponse,
)
from storefront.api.security import Principal, close_session, current_principal, open_session
from storefront.identity.provider import get_identity_provider
from storefront.identity.registration import (
    InvalidCredentialsError,
    RegisterUser,
    UpsertExternalUser,
    authenticate,
)
from storefront.identity.user import User

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", status_code=201, response_model=UserResponse)
async def register(body: RegisterRequest, request: Request, response: Response) -> UserResponse:
    """Create an account and sign it in."""
    user_id = current_domain.process(
        RegisterUser(
            email=body.email,
            password=body.password,
            first_name=body.first_name,
            last_name=body.last_name,
        ),
        asynchronous=False,
    )
    open_session(response, user_id, request.headers.get("user-agent"))
    return user_response(current_domain.repository_for(User).get(user_id))


@router.post("/login", response_model=UserResponse)
async def login(body: LoginRequest, request: Request, response: Response) -> UserResponse:
    try:
        user = authenticate(body.email, body.password)
    except InvalidCredentialsError:
        raise HTTPException(status_code=401, detail="Invalid email or password") from None
    open_session(response, str(user.id), request.headers.get("user-agent"))
    return user_response(user)


@router.post("/external", response_model=UserResponse)
async def external_login(body: ExternalLoginRequest, request: Request, response: Response) -> UserResponse:
    """Sign in with a token issued by the external identity provider."""
    profile = get_identity_provider().verify_token(body.token)
    if profile is None:
        raise HTTPException(status_code=401, detail="Invalid identity token")

    user_id = current_domain.process(
        UpsertExternalUser(
            external_id=profile.subject,
            email=profile.email,
            first_name=profile.first_name,
            last_name=profile.last_name,
            profile_image_url=profile.profile_image_url,
        ),
        asynchronous=False,
    )
    open_session(response, user_id, request.headers.get("user-agent"))
    return user_response(current_domain.repository_for(User).get(user_id))


@router.post("/logout", response_model=StatusResponse)
async def logout(request: Request, response: Response) -> StatusResponse:
    # Logging out without a session still clears the cookie
    close_session(response, request.cookies.get(config.session_cookie_name()))
    return StatusResponse(status="logged_out")


@router.get("/user", response_model=UserResponse)
async def get_current_user(principal: Principal = Depends(current_principal)) -> UserResponse:
    return user_response(current_domain.repository_for(User).get(principal.user_id))
