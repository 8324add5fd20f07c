import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, FastAPI, Request
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import Response
from pydantic import BaseModel, Field

from book import Book
from config import settings
from library import Library, BookNotFoundError, SEED_BOOKS

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

COLLECTION_PATH = "/books"
SCRIPT_BODY = 'console.log("Hello from code on demand!")'
SCRIPT_MEDIA_TYPE = "application/javascript"

# Applied to every response
SECURITY_HEADERS = {
    "Content-Security-Policy": (
        "default-src 'self';base-uri 'self';font-src 'self' https: data:;"
        "form-action 'self';frame-ancestors 'self';img-src 'self' data:;"
        "object-src 'none';script-src 'self';script-src-attr 'none';"
        "style-src 'self' https: 'unsafe-inline';upgrade-insecure-requests"
    ),
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}


# --- Models ---
class BookInputModel(BaseModel):
    """Body of POST/PUT /books.

    Fields are taken as-is: missing ones become null, empty strings are kept
    and unknown keys (an ``id`` included) are dropped. No validation runs here.
    """
    title: Any = Field(default=None, description="Book title, stored verbatim")
    author: Any = Field(default=None, description="Book author, stored verbatim")

    @classmethod
    def from_body(cls, body: Any) -> "BookInputModel":
        # Any JSON value is accepted; only an object contributes fields
        if not isinstance(body, dict):
            return cls()
        return cls(title=body.get("title"), author=body.get("author"))


# --- Envelope helpers ---
def book_links(book: Book) -> Dict[str, str]:
    return {"self": f"{COLLECTION_PATH}/{book.id}"}

def book_envelope(book: Book, *, with_collection: bool = False) -> Dict[str, Any]:
    links = book_links(book)
    if with_collection:
        links["collection"] = COLLECTION_PATH
    return {"data": book.to_dict(), "links": links}

def collection_envelope(books: List[Book]) -> Dict[str, Any]:
    data = [{**b.to_dict(), "links": book_links(b)} for b in books]
    return {"data": data, "links": {"self": COLLECTION_PATH}}


# --- Dependencies ---
def get_library(request: Request) -> Library:
    """The store instance owned by the running application."""
    return request.app.state.library


# --- API Endpoints ---
router = APIRouter()

@router.get("/books")
def list_books(response: Response, library: Library = Depends(get_library)):
    """List every book, each with its own link. Cacheable for a short while."""
    response.headers["Cache-Control"] = f"public, max-age={settings.books_cache_max_age}"
    return collection_envelope(library.list_books())

@router.get("/books/{book_id}")
def get_book(book_id: str, library: Library = Depends(get_library)):
    book = library.find_book(book_id)
    return book_envelope(book, with_collection=True)

@router.post("/books", status_code=201)
def create_book(body: Any = Body(default=None), library: Library = Depends(get_library)):
    """Create a book; the server assigns its id."""
    payload = BookInputModel.from_body(body)
    book = library.add_book(title=payload.title, author=payload.author)
    return book_envelope(book)

@router.put("/books/{book_id}")
def update_book(book_id: str, body: Any = Body(default=None),
                library: Library = Depends(get_library)):
    """Replace title and author of a book. The id always comes from the path."""
    payload = BookInputModel.from_body(body)
    book = library.update_book(book_id, title=payload.title, author=payload.author)
    return book_envelope(book)

@router.delete("/books/{book_id}", status_code=204)
def delete_book(book_id: str, library: Library = Depends(get_library)):
    library.remove_book(book_id)
    return Response(status_code=204)

@router.get("/script")
def get_script():
    """Code on demand: a snippet the client can execute."""
    return Response(content=SCRIPT_BODY, media_type=SCRIPT_MEDIA_TYPE)

@router.get("/health")
def health_check(library: Library = Depends(get_library)):
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "total_books": library.count(),
    }


# --- Application ---
async def book_not_found_handler(request: Request, exc: BookNotFoundError) -> Response:
    # Absence is signalled by status alone
    return Response(status_code=404)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Server running on http://{settings.api_host}:{settings.api_port}")
    yield
    logger.info("Server shutting down")

def create_app(library: Optional[Library] = None) -> FastAPI:
    """Build the API around a store. Without one, a fresh store is created (seeded per settings)."""
    if library is None:
        library = Library(SEED_BOOKS if settings.seed_books else None)

    app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)
    app.state.library = library

    # Compress responses above the configured size for clients that accept gzip
    app.add_middleware(GZipMiddleware, minimum_size=settings.gzip_minimum_size)

    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    app.add_exception_handler(BookNotFoundError, book_not_found_handler)
    app.include_router(router)
    return app


app = create_app()
