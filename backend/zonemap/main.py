import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from zonemap import __version__
from zonemap.api.routers import polygons
from zonemap.config import settings
from zonemap.core import build_oracle
from zonemap.db import SessionLocal, init_db
from zonemap.services.hierarchy.controller import HierarchyController

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


# 起動時にDBスキーマを作成し、保存済みの階層を読み込む
@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    oracle = build_oracle(settings.geometry_mode, settings.allow_shared_edges)
    app.state.controller = HierarchyController(oracle, SessionLocal)
    yield


app = FastAPI(title="Zonemap API", version=__version__, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health():
    return {"ok": True}


app.include_router(polygons.router, prefix="/polygons", tags=["polygons"])
