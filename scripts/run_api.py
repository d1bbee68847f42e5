"""
Start the catalog API server for local development.

Responsibility: Developer entry point
"""

import sys
import os

# Add project root to Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import uvicorn

from catalog.config import settings


if __name__ == "__main__":
    base_url = f"http://localhost:{settings.app.api_port}"
    print("🚀 Starting Book Catalog API Server...")
    print(f"📍 GraphQL endpoint: {base_url}/graphql")
    if settings.app.debug:
        print(f"🔍 GraphiQL at: {base_url}/graphql")
    print("\nPress CTRL+C to stop\n")

    uvicorn.run(
        "api.main:app",
        host=settings.app.api_host,
        port=settings.app.api_port,
        reload=True,
        log_level=settings.app.log_level.lower()
    )
