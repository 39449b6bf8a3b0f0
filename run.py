#!/usr/bin/env python3
"""
Ledger API Entry Point

Starts the FastAPI server around a fresh in-memory ledger.
"""

import sys

from minibank.api import run_server
from minibank.config import get_config


if __name__ == "__main__":
    config = get_config()
    print("🏦 Starting Mini Bank Ledger API...")
    print("🔒 No-overdraft policy enforced")
    print("↩️  Single-step undo available at POST /transactions/undo")
    print(f"🌐 API available at: http://{config.api_host}:{config.api_port}")
    print(f"📚 Documentation at: http://{config.api_host}:{config.api_port}/docs")
    print()
    
    try:
        run_server(config)
    except KeyboardInterrupt:
        print("\n👋 Shutting down Mini Bank Ledger API...")
    except Exception as e:
        print(f"❌ Error starting server: {e}")
        sys.exit(1)
