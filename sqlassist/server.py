import logging
from typing import Any, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from sqlassist.config import get_settings
from sqlassist.diagram import RelationalModel
from sqlassist.diagram_html import schema_to_interactive_html
from sqlassist.log import setup_logging
from sqlassist.mermaid import schema_to_mermaid

logger = logging.getLogger(__name__)

settings = get_settings()

app = FastAPI(title="SQL Assist Diagram API")

# CORS for the Streamlit front-end
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Tables and relationships are kept loose; bad entries render empty or are skipped
class DiagramRequest(BaseModel):
    tables: list[Any] = []
    relationships: list[Any] = []
    title: Optional[str] = None


class DiagramResponse(BaseModel):
    html: str
    mermaid_code: str
    edge_count: int


class MermaidResponse(BaseModel):
    mermaid_code: str


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/diagram", response_model=DiagramResponse)
async def render_diagram(request: DiagramRequest):
    model = RelationalModel(request.tables, request.relationships)
    edges = model.edges()
    logger.info("rendered diagram: %d tables, %d edges", len(model.tables), len(edges))
    return DiagramResponse(
        html=schema_to_interactive_html(model, request.title or ""),
        mermaid_code=schema_to_mermaid(model.tables, model.relationships),
        edge_count=len(edges),
    )


@app.post("/diagram/mermaid", response_model=MermaidResponse)
async def render_mermaid(request: DiagramRequest):
    return MermaidResponse(mermaid_code=schema_to_mermaid(request.tables, request.relationships))


if __name__ == "__main__":
    import uvicorn
    setup_logging()
    uvicorn.run(app, host="0.0.0.0", port=8001)
