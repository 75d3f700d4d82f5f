"""HTTP Basic authentication for the alert control API"""
import secrets
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from airalert.core.config import get_settings

security = HTTPBasic()


def _matches(given: str, expected: str) -> bool:
    return secrets.compare_digest(given.encode("utf8"), expected.encode("utf8"))


def verify_credentials(credentials: HTTPBasicCredentials = Depends(security)) -> str:
    """
    Check the control API credentials

    Returns:
        Username if authentication successful

    Raises:
        HTTPException: 401 if credentials are invalid
    """
    settings = get_settings()

    # Compare both parts so timing doesn't reveal which one was wrong
    username_ok = _matches(credentials.username, settings.ADMIN_USERNAME)
    password_ok = _matches(credentials.password, settings.ADMIN_PASSWORD)

    if not (username_ok and password_ok):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )

    return credentials.username
