"""
Page host
Loads index.html, lets the visit counter widget fill in the count, and serves the result.

Run with:
    python -m web.main
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from urllib.parse import urlparse

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, Response

from src.widget.config import get_settings
from src.widget.visit_counter import VisitCounterWidget, render_with_counter

logger = logging.getLogger(__name__)

project_root_path = Path(__file__).parent.parent
index_file = project_root_path / "index.html"


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    # Query string may carry the function key
    endpoint = urlparse(settings.endpoint_url)
    logger.info(f"Visit counter endpoint ({settings.environment}): {endpoint.netloc}{endpoint.path}")
    yield


app = FastAPI(title="Resume", lifespan=lifespan)

# Enable CORS for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def build_widget() -> VisitCounterWidget:
    settings = get_settings()
    return VisitCounterWidget(settings.endpoint_url, element_id=settings.element_id)


@app.get("/", response_class=HTMLResponse)
async def read_index():
    if not index_file.exists():
        return "<h1>Index.html not found at root</h1>"
    return await render_with_counter(
        index_file.read_text(encoding="utf-8"),
        build_widget(),
        wait=get_settings().render_wait,
    )


@app.get("/favicon.ico")
async def favicon():
    """Return 204 No Content for favicon to prevent 404 errors"""
    return Response(status_code=204)


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    port = 8123
    print(f"🚀 Starting page host on port {port}...")
    uvicorn.run(app, host="0.0.0.0", port=port)
