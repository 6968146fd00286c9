"""accounts: user account service."""
