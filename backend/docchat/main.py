from __future__ import annotations
import logging
import time
from contextlib import asynccontextmanager
from concurrent.futures import ThreadPoolExecutor
from threading import Lock
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# ============================================================
# 🪵 Logging Setup
# ============================================================
logging.basicConfig(
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(filename)s:%(lineno)d | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    level=logging.INFO,
)
logger = logging.getLogger("docchat.app")

# ============================================================
# 📦 Core Imports (Config + Dependency Injection)
# ============================================================
from docchat.config import settings
from docchat.container import build_container

# ============================================================
# 🌐 Routers
# ============================================================
from docchat.router import chat as chat_router_module
from docchat.router import health as health_router_module

APP_VERSION = "1.0.0"


# ============================================================
# ⚙️ Global State & Application Status
# ============================================================
class AppState:
    def __init__(self):
        self.container = None
        self.warmup_task = None
        self.executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="docchat_corpus")
        self.startup_time = time.time()
        self.startup_complete = False
        self.error = None
        self.lock = Lock()

    def set_error(self, error: str):
        with self.lock:
            self.error = error
            self.startup_complete = True

    def get_status(self):
        with self.lock:
            corpus = self.container.document_loader.status() if self.container else None
            return {
                "startup_complete": self.startup_complete,
                "error": self.error,
                "corpus": corpus,
                "sessions": len(self.container.memory) if self.container else 0,
                "uptime_seconds": time.time() - self.startup_time,
            }


app_state = AppState()


def _warm_corpus():
    try:
        app_state.container.document_loader.load()
    except Exception as e:
        logger.error(f"❌ Corpus warm-up failed: {e}", exc_info=True)


# ============================================================
# 🚀 Startup / Shutdown Lifecycle
# ============================================================
@asynccontextmanager
async def lifespan(_: FastAPI):
    logger.info("🚀 Initializing document chat backend...")

    try:
        app_state.container = build_container(settings)
    except Exception as e:
        logger.error(f"❌ Container init failed: {e}", exc_info=True)
        app_state.set_error(f"Startup failed: {e}")
        raise

    chat_router_module.chat_service = app_state.container.chat_service
    chat_router_module.memory = app_state.container.memory
    chat_router_module.default_session_id = settings.default_session_id
    health_router_module.document_loader = app_state.container.document_loader

    # Load the corpus off the event loop; requests arriving first wait on the loader lock
    app_state.warmup_task = app_state.executor.submit(_warm_corpus)

    with app_state.lock:
        app_state.startup_complete = True
    health_router_module.startup_complete = True
    logger.info("🎯 API is ready and accepting requests")

    try:
        yield
    finally:
        if app_state.warmup_task and not app_state.warmup_task.done():
            app_state.warmup_task.cancel()
        app_state.executor.shutdown(wait=False)
        health_router_module.startup_complete = False
        logger.info("🧹 Server shutting down gracefully")


# ============================================================
# 🌍 FastAPI App Definition
# ============================================================
app = FastAPI(
    title="Document Chat API",
    description="Chat backend with optional grounding in a single document",
    version=APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router_module.router)
app.include_router(chat_router_module.router)


@app.get("/status")
async def get_app_status():
    status = app_state.get_status()
    if status["error"]:
        system_status = "degraded"
    elif status["corpus"] and not status["corpus"]["loaded"]:
        system_status = "initializing"
    else:
        system_status = "healthy"
    return {"system_status": system_status, "timestamp": time.time(), **status}


@app.get("/")
def root():
    status = app_state.get_status()
    return {
        "app": "Document Chat API (Azure OpenAI)",
        "version": APP_VERSION,
        "corpus": status["corpus"],
        "endpoints": {
            "docs": "/docs",
            "health": "/health",
            "readiness": "/health/ready",
            "status": "/status",
            "chat": "/chat",
            "history": "/sessions/{session_id}/history",
        },
        "examples": {
            "chat": {
                "method": "POST",
                "path": "/chat",
                "body": {"message": "What is the vacation policy?", "session_id": "default", "rag": True},
            },
        },
    }


# ============================================================
# 🏁 Entrypoint
# ============================================================
if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting document chat backend on port {settings.port}...")
    uvicorn.run(
        "docchat.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=False,
        log_config=None,
    )
