#!/usr/bin/env python3
"""
Startup script for the Veg Thali Club site API.

Usage:
    # Run on the default port
    python run_site.py

    # Run with custom port
    python run_site.py --port 8001

    # Run with reload for development
    python run_site.py --reload
"""

import argparse
import os


def main():
    parser = argparse.ArgumentParser(
        description="Run the Veg Thali Club catering site API"
    )
    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="Host to bind to (default: 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        default=int(os.getenv("PORT", "8000")),
        help="Port to run on (default: $PORT or 8000)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )

    args = parser.parse_args()

    print(f"\n{'=' * 50}")
    print("Starting: Veg Thali Club")
    print(f"Port:     {args.port}")
    print(f"Database: {os.getenv('DATABASE_URL', 'sqlite:///./thali_club.db')}")
    print(f"{'=' * 50}\n")

    import uvicorn

    uvicorn.run(
        "thali_club.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
