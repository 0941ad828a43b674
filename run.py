#!/usr/bin/env python3
"""
Places Relay - Run Script
This script starts the FastAPI relay server
"""

import os
import sys
import subprocess
from pathlib import Path

def print_colored(message, color="blue"):
    """Print colored output"""
    colors = {
        "red": "\033[91m",
        "green": "\033[92m",
        "yellow": "\033[93m",
        "blue": "\033[94m",
        "reset": "\033[0m"
    }
    print(f"{colors.get(color, '')}{message}{colors['reset']}")

def check_file_exists(filepath, error_message):
    """Check if a file exists"""
    if not Path(filepath).exists():
        print_colored(f"❌ Error: {error_message}", "red")
        sys.exit(1)

def main():
    print_colored("🚀 Starting Places Relay...", "blue")

    check_file_exists("places_relay/main.py", "places_relay/main.py not found. Please run this script from the project root.")

    # The key can also be supplied per request, so a missing one is only a warning
    if not os.environ.get("GOOGLE_API_KEY") and not Path(".env").exists():
        print_colored("⚠️  Warning: GOOGLE_API_KEY is not set and no .env file was found.", "yellow")
        print("Requests will need to pass ?key=YOUR_KEY, or create a .env file with:")
        print("  GOOGLE_API_KEY=your_api_key_here")
        print()

    print_colored("🔍 Checking dependencies...", "blue")
    try:
        import fastapi
        import uvicorn
    except ImportError:
        print_colored("❌ Dependencies not installed.", "red")
        print("Installing dependencies...")
        subprocess.run([sys.executable, "-m", "pip", "install", "-e", "."], check=True)

    from places_relay.core.config import settings

    print_colored("✅ All checks passed!", "green")
    print_colored("🌐 Starting Uvicorn server...", "blue")
    print(f"📍 Relay will be available at: http://localhost:{settings.PORT}")
    print(f"📍 Health check: http://localhost:{settings.PORT}/health")
    print(f"📍 API Documentation: http://localhost:{settings.PORT}/docs")
    print()
    print("Press Ctrl+C to stop the server")
    print()

    try:
        subprocess.run([
            sys.executable, "-m", "uvicorn",
            "places_relay.main:app",
            "--reload",
            "--host", settings.HOST,
            "--port", str(settings.PORT)
        ], check=True)
    except KeyboardInterrupt:
        print_colored("\n👋 Relay server stopped.", "yellow")
    except subprocess.CalledProcessError as e:
        print_colored(f"\n❌ Error starting server: {e}", "red")
        sys.exit(1)

if __name__ == "__main__":
    main()
