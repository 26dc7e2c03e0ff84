"""
MindLoom FastAPI Application

A REST API server for collaborative mind maps.
Provides endpoints for analyzing text, generating text, and reading or
editing the shared mind map of a session.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from src.config import Config
from src.core.analyzer import analyze_content
from src.core.factory import LLMFactory
from src.core.tree_store import TreeStore, create_tree_store
from src.models import ContentAnalysis, Cursor, DocumentSnapshot, Participant, PositionedGraph
from src.services.content_generator import ContentGenerator
from src.services.session import SessionManager
from src.utils.exceptions import ConfigurationError, LLMAuthError, LLMError, ValidationError
from src.utils.logger import get_logger, setup_logging

# Global service instances
store: TreeStore | None = None
sessions: SessionManager | None = None
generator: ContentGenerator | None = None
logger = get_logger(__name__)


# Pydantic models for API
class ContentRequest(BaseModel):
    """Request model for text content."""

    content: str = Field(..., description="Text content")


class NodeTextRequest(BaseModel):
    """Request model for renaming a node or adding a child."""

    text: str = Field(default="", description="Node label")


class CursorRequest(BaseModel):
    """Request model for moving a participant's cursor."""

    cursor: Cursor | None = None


class GenerateContentRequest(BaseModel):
    """Request model for text generation."""

    prompt: str = Field(default="", description="Prompt for the text generator")


class GenerateContentResponse(BaseModel):
    """Response model for text generation."""

    text: str
    model: str
    success: bool = True


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    store_initialized: bool
    generator_available: bool


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown."""
    global store, sessions, generator

    # Load configuration from environment or use defaults
    config = Config.from_env()

    # Initialize logging with config
    setup_logging(config.logging)

    logger.info("Starting MindLoom server")
    logger.info(
        f"Configuration: Store={config.store.backend}, "
        f"LLM={config.llm.provider}/{','.join(config.llm.models)}"
    )

    logger.info("Creating tree store")
    store = create_tree_store(config.store)
    await store.initialize()
    sessions = SessionManager(store, config)

    logger.info("Creating content generator")
    try:
        generator = ContentGenerator(
            LLMFactory.create_all(config.llm),
            system_prompt=config.llm.system_prompt,
            temperature=config.llm.temperature,
            max_tokens=config.llm.max_tokens,
        )
    except ConfigurationError as e:
        logger.warning(f"Content generation disabled: {e}")
        generator = None

    yield

    # Cleanup
    logger.info("Shutting down MindLoom server")
    await sessions.close()
    if generator is not None:
        await generator.close()
    await store.close()
    logger.info("Cleanup complete")


# Create FastAPI app
app = FastAPI(
    title="MindLoom API",
    description="Collaborative mind maps synthesized from free text",
    version="1.0.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _sessions() -> SessionManager:
    if not sessions:
        raise HTTPException(status_code=503, detail="Store not initialized")
    return sessions


# Health check endpoint
@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy" if store else "initializing",
        store_initialized=store is not None,
        generator_available=generator is not None,
    )


# Analysis endpoints
@app.post("/analyze", response_model=ContentAnalysis)
async def analyze(request: ContentRequest):
    """
    Analyze text without touching any session.

    Returns the main topic, subtopics, per-subtopic details and keywords the
    synthesizer would build a mind map from.
    """
    return analyze_content(request.content)


@app.post("/generate-content", response_model=GenerateContentResponse)
async def generate_content(request: GenerateContentRequest):
    """
    Generate text with the configured models, falling back model by model.

    The result is plain text; put it into a session with PUT /sessions/{id}/content.
    """
    if not request.prompt.strip():
        raise HTTPException(status_code=400, detail="Prompt is required")
    if not generator:
        raise HTTPException(status_code=503, detail="Content generation is not configured")

    try:
        result = await generator.generate(request.prompt)
        return GenerateContentResponse(text=result.text, model=result.model)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message) from e
    except LLMAuthError as e:
        raise HTTPException(status_code=401, detail="Invalid or unauthorized API key") from e
    except LLMError as e:
        logger.error(f"Content generation failed: {e}", extra=e.context)
        raise HTTPException(status_code=503, detail=e.message) from e


# Session endpoints
@app.get("/sessions/{session_id}/mindmap", response_model=DocumentSnapshot)
async def get_mindmap(session_id: str):
    """
    Current tree and text of a session.

    The session (and its default tree) is created on first access.
    """
    session = await _sessions().get(session_id)
    return session.snapshot


@app.get("/sessions/{session_id}/graph", response_model=PositionedGraph)
async def get_graph(session_id: str):
    """Positioned node/edge graph of the current tree, ready for rendering."""
    session = await _sessions().get(session_id)
    return session.graph


@app.put("/sessions/{session_id}/content", response_model=DocumentSnapshot)
async def update_content(session_id: str, request: ContentRequest):
    """
    Replace the text of a session.

    Substantial changes regenerate the mind map after a quiet period.
    """
    session = await _sessions().get(session_id)
    await session.update_content(request.content)
    return session.snapshot


@app.post("/sessions/{session_id}/regenerate", response_model=DocumentSnapshot)
async def regenerate(session_id: str):
    """Rebuild the mind map from the session's current text right away."""
    session = await _sessions().get(session_id)
    await session.regenerate()
    return session.snapshot


@app.put("/sessions/{session_id}/nodes/{node_id}", response_model=DocumentSnapshot)
async def rename_node(session_id: str, node_id: str, request: NodeTextRequest):
    """
    Rename a node.

    An unknown node id leaves the tree unchanged.
    """
    session = await _sessions().get(session_id)
    await session.rename_node(node_id, request.text)
    return session.snapshot


@app.post("/sessions/{session_id}/nodes/{node_id}/children", response_model=DocumentSnapshot)
async def add_child(session_id: str, node_id: str, request: NodeTextRequest):
    """
    Add a child node.

    An unknown parent id leaves the tree unchanged.
    """
    session = await _sessions().get(session_id)
    await session.add_child(node_id, request.text)
    return session.snapshot


@app.delete("/sessions/{session_id}")
async def delete_session(session_id: str):
    """Close a session and destroy its shared document."""
    await _sessions().close_session(session_id, destroy=True)
    return {"session_id": session_id, "deleted": True}


# Presence endpoints
@app.get("/sessions/{session_id}/participants", response_model=list[Participant])
async def list_participants(session_id: str):
    """Participants connected to a session."""
    session = await _sessions().get(session_id)
    return await session.participants()


@app.post("/sessions/{session_id}/participants", response_model=list[Participant])
async def join_session(session_id: str, participant: Participant):
    """Register a participant (or refresh its name and color)."""
    session = await _sessions().get(session_id)
    await session.join(participant)
    return await session.participants()


@app.put(
    "/sessions/{session_id}/participants/{participant_id}/cursor",
    response_model=list[Participant],
)
async def move_cursor(session_id: str, participant_id: str, request: CursorRequest):
    """Move or clear a participant's cursor."""
    session = await _sessions().get(session_id)
    await session.move_cursor(participant_id, request.cursor)
    return await session.participants()


@app.delete("/sessions/{session_id}/participants/{participant_id}")
async def leave_session(session_id: str, participant_id: str):
    """Remove a participant."""
    session = await _sessions().get(session_id)
    await session.leave(participant_id)
    return {"session_id": session_id, "participant_id": participant_id, "left": True}


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "MindLoom API",
        "version": "1.0.0",
        "description": "Collaborative mind maps synthesized from free text",
        "docs": "/docs",
        "health": "/health",
    }

