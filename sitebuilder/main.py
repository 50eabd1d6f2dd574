import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from sitebuilder.config import APP_HOST, APP_PORT, CORS_ORIGINS, DEBUG, LOG_LEVEL
from sitebuilder.database.init import Base, engine
from sitebuilder.exceptions.handlers import register_exception_handlers
from sitebuilder.routes import (
    auth_routes,
    booking_routes,
    hotel_routes,
    site_routes,
    vendor_routes,
    website_routes,
)

logging.basicConfig(
    level=LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

Base.metadata.create_all(bind=engine)

app = FastAPI(title="Site Builder API", debug=DEBUG)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth_routes.router)
app.include_router(website_routes.router)
app.include_router(site_routes.router)
app.include_router(vendor_routes.router)
app.include_router(hotel_routes.router)
app.include_router(booking_routes.router)


@app.get("/")
def read_root():
    return {"name": "Site Builder API", "version": "1.0.0"}


@app.get("/health")
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    uvicorn.run("sitebuilder.main:app", host=APP_HOST, port=APP_PORT, reload=DEBUG)
