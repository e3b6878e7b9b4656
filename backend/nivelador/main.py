import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .db import Base, engine
from .settings import settings
from .routers import health
from .routers import catalog
from .routers import calcular
from .routers import evaluacion

logging.basicConfig(level=settings.log_level.upper())
logging.getLogger("httpx").setLevel(logging.WARNING)

app = FastAPI(title="Nivelador de Desempeños API")
app.add_middleware(
	CORSMiddleware,
	allow_origins=settings.cors_origin_list,
	allow_methods=["*"],
	allow_headers=["*"],
	expose_headers=["Content-Disposition"],
)
app.include_router(health.router)
app.include_router(catalog.router)
app.include_router(calcular.router)
app.include_router(evaluacion.router)

@app.get("/info")
def root():
	return {"status": "ok", "catalog_upstream": bool(settings.catalog_base_url)}

@app.on_event("startup")
async def startup_event():
	# Initialize DB schema (the loader normally created it already)
	Base.metadata.create_all(bind=engine)
