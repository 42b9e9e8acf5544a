"""
Profile Directory Backend.

Core components:
- api: FastAPI app, routes for auth, profiles, comments, touch points
- db: SQLAlchemy tables and session management
- tools: Google OAuth client, profile image storage
- utils: avatars, mentors, directory filtering and sorting
"""
