"""Session providers refreshing OAuth2 sessions with authlib."""
