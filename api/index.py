"""
Local function endpoint
Serves the same contract as the deployed counter function: GET -> {"count": N}.

Run with:
    python -m api.index
"""
import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pymongo import ReturnDocument

from api.db import get_counter_collection

logger = logging.getLogger(__name__)

COUNTER_ID = "resume"

app = FastAPI(title="Resume Counter Function")

# The page host calls this from another origin during local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.get("/api/GetResumeCounter")
async def get_resume_counter():
    """Increment and return site visit count"""
    counters = get_counter_collection()
    try:
        # Atomic increment
        result = counters.find_one_and_update(
            {"_id": COUNTER_ID},
            {"$inc": {"count": 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER
        )
    except Exception as e:
        logger.error(f"Visit count error: {e}")
        raise HTTPException(status_code=500, detail="Counter unavailable")

    return {"count": int(result["count"])}


@app.get("/health")
async def health_check():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    port = 7071
    print(f"🚀 Starting counter function on port {port}...")
    uvicorn.run(app, host="0.0.0.0", port=port)
