"""Run the API with uvicorn: ``python -m metal_sentiment``."""

import os

import uvicorn

if __name__ == "__main__":
    port = int(os.getenv("PORT", "3001"))
    uvicorn.run("metal_sentiment.main:app", host="0.0.0.0", port=port, reload=False)
