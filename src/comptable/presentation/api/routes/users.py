"""
User API routes.

Provides endpoints for account access:
- POST /user/register - Create account and log in
- POST /user/login - Log in with login/password
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from comptable.application.use_cases.authenticate_user import AuthenticateUser
from comptable.application.use_cases.register_user import RegisterUser
from comptable.di.dependencies import (
    get_authenticate_user,
    get_db_session,
    get_register_user,
    get_session_store,
)
from comptable.domain.exceptions import (
    DuplicateEntityError,
    InvalidCredentialsError,
    ValidationError,
)
from comptable.infrastructure.auth.session_store import SessionStore
from comptable.infrastructure.monitoring import get_logger
from comptable.presentation.api.middleware.auth import open_session
from comptable.presentation.schemas.user_schemas import (
    CredentialsRequest,
    UserResponse,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/user", tags=["Users"])


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Register new user",
    description="Create account and start an authenticated session",
)
async def register(
    request: CredentialsRequest,
    response: Response,
    use_case: RegisterUser = Depends(get_register_user),
    session_store: SessionStore = Depends(get_session_store),
    session: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    """
    Register a new account.

    Raises:
        HTTPException: 400 if login or password is empty
        HTTPException: 409 if login is taken
        HTTPException: 500 on storage failure
    """
    try:
        account = await use_case.execute(
            login=request.login,
            password=request.password,
        )
        await session.commit()
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    except Exception:
        logger.exception("Registration failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to register user",
        )

    await open_session(response, account.login, session_store)
    logger.info(f"User {account.login} registered")

    return UserResponse(login=account.login)


@router.post(
    "/login",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Log in",
    description="Check credentials and start an authenticated session",
)
async def login(
    request: CredentialsRequest,
    response: Response,
    use_case: AuthenticateUser = Depends(get_authenticate_user),
    session_store: SessionStore = Depends(get_session_store),
) -> UserResponse:
    """
    Log in with login and password.

    Raises:
        HTTPException: 401 if credentials are wrong
        HTTPException: 500 on storage failure
    """
    try:
        account = await use_case.execute(
            login=request.login,
            password=request.password,
        )
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.message)
    except Exception:
        logger.exception("Login failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to log in",
        )

    await open_session(response, account.login, session_store)

    return UserResponse(login=account.login)
