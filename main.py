"""
Profile Directory - Server Entry Point.

Runs the FastAPI app with uvicorn.
"""

from dotenv import load_dotenv

load_dotenv()

import uvicorn

from backend.config import settings


def main():
    """Run the Profile Directory API server."""
    print("Profile Directory")
    print("=" * 40)
    print(f"Serving on http://{settings.host}:{settings.port}")

    if not settings.database_url:
        print("Warning: DATABASE_URL not set, database features will fail")
    if not (settings.google_client_id and settings.google_client_secret):
        print("Warning: Google OAuth not configured, sign-in disabled (mentors only)")

    uvicorn.run(
        "backend.api.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
