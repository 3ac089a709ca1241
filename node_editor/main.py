"""
FastAPI application entrypoint
"""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from node_editor import __version__
from node_editor.api.routes_node import router as node_router
from node_editor.config import LOG_LEVEL

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="JSON Node Editor API",
    description="API for viewing and patching nodes of JSON documents",
    version=__version__
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(node_router)

@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": "JSON Node Editor API is running",
        "version": __version__,
        "docs": "/docs"
    }

@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "json-node-editor"
    }
