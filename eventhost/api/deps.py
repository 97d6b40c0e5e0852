# eventhost/api/deps.py
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from eventhost.core.config import settings
from eventhost.crud import crud_host_settings
from eventhost.db.session import get_db
from eventhost.schemas.token import TokenPayload
from eventhost.services.email import EmailProviderConfig

# Tokens are issued by the external identity provider; tokenUrl only feeds
# the OpenAPI docs.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token")


def get_current_user(token: str = Depends(oauth2_scheme)) -> TokenPayload:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(
            token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM]
        )
        token_data = TokenPayload(**payload)
    except (JWTError, ValueError):
        # Catches any error from jose or Pydantic validation
        raise credentials_exception

    return token_data


def get_email_provider_config(
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(get_current_user),
) -> EmailProviderConfig:
    """The current host's email provider, resolved once per request."""
    row = crud_host_settings.host_settings.get_by_host(db, host_id=current_user.sub)
    return EmailProviderConfig.from_host_settings(row)
