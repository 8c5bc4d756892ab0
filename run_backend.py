#!/usr/bin/env python
"""Script to run the Fifteen Minutes backend server."""
import os
from pathlib import Path

import uvicorn

# Run from the repo root so the default sqlite path lands next to this script
os.chdir(Path(__file__).resolve().parent)

if __name__ == "__main__":
    uvicorn.run(
        "fifteen_minutes.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=True
    )
