"""
Ledger API Application Factory
"""

from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI
import uvicorn

from .accounts import router as accounts_router
from .transactions import router as transactions_router
from ..config import MiniBankConfig, get_config
from ..ledger import Ledger
from ..logging_config import setup_logging


def create_app(ledger: Optional[Ledger] = None) -> FastAPI:
    """Create and configure the FastAPI application around one ledger"""
    app = FastAPI(
        title="Mini Bank Ledger API",
        description="In-memory ledger simulator with no-overdraft accounts and undo",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.ledger = ledger if ledger is not None else Ledger()

    # Include routers
    app.include_router(accounts_router, prefix="/accounts", tags=["Accounts"])
    app.include_router(transactions_router, prefix="/transactions", tags=["Transactions"])

    # Health check endpoint
    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "accounts": len(app.state.ledger),
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

    return app


def run_server(config: Optional[MiniBankConfig] = None) -> None:
    """Serve a fresh ledger with uvicorn"""
    config = config or get_config()
    setup_logging(config.log_level, "minibank", config.log_format, config.log_file)
    app = create_app(Ledger(config))
    uvicorn.run(app, host=config.api_host, port=config.api_port, access_log=False)
