from fastapi import APIRouter, Depends

from app.contracts import api
from app.controllers.auth_controller import get_me, login, register
from app.core.dependencies import get_current_user, get_storage
from app.models.user import User
from app.schemas.auth import AuthResponse, LoginRequest, LogoutResponse, RegisterRequest, UserOut
from app.services.storage import DatabaseStorage

router = APIRouter(tags=["Auth"])


@router.post(
    api.auth.register.route_path,
    response_model=api.auth.register.response_model,
    status_code=api.auth.register.success_status,
    summary="Register",
    description="Creates an account and returns it with a 7-day Bearer token.",
)
async def register_user(
    payload: RegisterRequest,
    storage: DatabaseStorage = Depends(get_storage),
) -> AuthResponse:
    return await register(payload, storage)


@router.post(
    api.auth.login.route_path,
    response_model=api.auth.login.response_model,
    summary="Login",
    description="""
Authenticate with email + password.
Returns a JWT Bearer token to use in all protected requests.

**How to use the token:**
Add to request headers: `Authorization: Bearer <your_token>`
    """,
)
async def login_user(
    payload: LoginRequest,
    storage: DatabaseStorage = Depends(get_storage),
) -> AuthResponse:
    return await login(payload, storage)


@router.get(
    api.auth.me.route_path,
    response_model=api.auth.me.response_model,
    summary="Get Current User",
    description="Returns the authenticated user's profile. Requires Bearer token in header.",
)
async def me(current_user: User = Depends(get_current_user)) -> UserOut:
    return await get_me(current_user)


@router.post(
    api.auth.logout.route_path,
    response_model=api.auth.logout.response_model,
    summary="Logout",
    description="""
JWT tokens are stateless; the server has no session to destroy.
To logout: delete the token from your frontend storage.
    """,
)
async def logout() -> LogoutResponse:
    return LogoutResponse(message="Logged out. Delete your token on the client side.")
