#!/usr/bin/env python3
"""
Run the storefront back-office API with uvicorn.
"""
import os

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "storefront.fastapi.main:app",
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", "8000")),
        reload=os.environ.get("ENV_MODE", "dev") == "dev",
        log_level="info"
    )
