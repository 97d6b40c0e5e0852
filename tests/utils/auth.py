from jose import jwt

from eventhost.core.config import settings
from eventhost.schemas.token import TokenPayload

# Identity the client fixture authenticates as
HOST_ID = "host_123"
HOST_EMAIL = "host@example.com"


def get_user_authentication_headers(
    user_id: str = "host_test", email: str = "host_test@example.com"
) -> dict[str, str]:
    """
    Generates a valid JWT token and authentication headers for a test host.
    """
    payload = TokenPayload(
        sub=user_id, email=email, exp=9999999999
    )  # High expiration for tests
    token = jwt.encode(
        payload.model_dump(), settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM
    )
    return {"Authorization": f"Bearer {token}"}
