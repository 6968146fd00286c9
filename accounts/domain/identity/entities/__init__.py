from accounts.domain.identity.entities.credential import Credential, RoleBasedAuthority
from accounts.domain.identity.entities.user import User

__all__ = ["Credential", "RoleBasedAuthority", "User"]
