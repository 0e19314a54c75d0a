from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
import os
from dotenv import load_dotenv

from db import init_db
from eligibility.catalog import CatalogProvider, default_source
from eligibility.routes import router as eligibility_router
from application_routes import router as application_router
from admin_routes import router as admin_router

load_dotenv()

logging.basicConfig(level=logging.INFO)
logging.info("App starting")

app = FastAPI(title="Exchange Course Mapping")

app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "*").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

init_db()

app.state.catalog_provider = CatalogProvider(default_source())

app.include_router(eligibility_router)
app.include_router(application_router)
app.include_router(admin_router)


@app.exception_handler(RequestValidationError)
async def invalid_payload(request: Request, exc: RequestValidationError):
    logging.warning("Invalid payload on %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid payload", "details": jsonable_encoder(exc.errors())},
    )


@app.get("/health", tags=["meta"], summary="Health check")
def health():
    return {"status": "ok"}
