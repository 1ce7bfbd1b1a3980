"""jsmessages sample server.

Run with:
    poetry run uvicorn jsmessages.main:app --host 0.0.0.0 --port 8070 --reload
"""

from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from jsmessages.config import PROJ_ROOT
from jsmessages.generator import InvalidNamespace
from jsmessages.i18n import source
from jsmessages.middleware import LanguageMiddleware
from jsmessages.routes import router
from jsmessages.schemas import InvalidNamespaceResponse

STATIC_DIR = PROJ_ROOT / "static"


# --- App setup ---

@asynccontextmanager
async def lifespan(_: FastAPI):
    load_dotenv()
    # The source was built at import, before .env was read
    source.configure()
    yield


app = FastAPI(title="jsmessages", lifespan=lifespan)


@app.exception_handler(InvalidNamespace)
async def invalid_namespace_handler(_request: Request, exc: InvalidNamespace) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content=InvalidNamespaceResponse(detail=str(exc), namespace=exc.namespace).model_dump(),
    )

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
    expose_headers=["Content-Language"],
)
app.add_middleware(LanguageMiddleware, source=source)

app.include_router(router)
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
