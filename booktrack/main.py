from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from booktrack.core.config import settings
from booktrack.core.middleware_correlation import CorrelationIdMiddleware
from booktrack.core.logging import setup_logging
from booktrack.core.errors import register_exception_handlers


# Routers
from booktrack.api.routes.books import router as books_router


setup_logging(settings.LOG_LEVEL)

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="BookTrack API - list, search, add and update books with cover images.",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Middlewares
app.add_middleware(CorrelationIdMiddleware)

# Root endpoint
@app.get("/")
async def root():
    """API root endpoint with basic information."""
    return {
        "message": "Welcome to BookTrack API",
        "version": "1.0.0",
        "docs_url": "/docs",
        "redoc_url": "/redoc",
        "endpoints": {
            "books": "/books",
            "book": "/books/{id}",
            "search": "/search?query=",
            "add_book": "/addBook",
            "update_book": "/updateBook/{id}",
        },
    }

register_exception_handlers(app)

# Mount routers
app.include_router(books_router)
