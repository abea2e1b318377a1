from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from quicknote.api.endpoints import get_endpoints_router
from quicknote.engine import KnowledgeEngine


def create_app(*, engine: KnowledgeEngine) -> FastAPI:
    """Create FastAPI app."""
    app = FastAPI(title="QuickNote")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router=get_endpoints_router(engine=engine))

    return app
