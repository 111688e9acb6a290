"""Actor identification from request headers."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyHeader

from assignflow.models import Actor, Role

ACTOR_NAME_HEADER = APIKeyHeader(name="X-Actor-Name", auto_error=False)
ACTOR_ROLE_HEADER = APIKeyHeader(name="X-Actor-Role", auto_error=False)


def get_actor(
    name: str | None = Depends(ACTOR_NAME_HEADER),
    role: str | None = Depends(ACTOR_ROLE_HEADER),
) -> Actor:
    """Build the calling persona from X-Actor-Name / X-Actor-Role."""
    if not name or not name.strip() or not role or not role.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-Actor-Name or X-Actor-Role header",
        )
    try:
        actor_role = Role(role.strip())
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Unknown role: {role}",
        )
    return Actor(name=name.strip(), role=actor_role)


# Type alias for dependency injection
ActorDep = Annotated[Actor, Depends(get_actor)]
