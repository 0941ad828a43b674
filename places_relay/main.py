import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from places_relay.core.config import settings
from places_relay.core.exceptions import RelayError
from places_relay.core.logger import logs
from places_relay.routes.places_route import router as places_router

app = FastAPI(title="Places Relay")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET"],
    allow_headers=["*"],
)
app.include_router(places_router)

@app.exception_handler(RelayError)
async def relay_error_handler(request: Request, exc: RelayError):
    level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
    logs.log(level, f"{exc.status_code} {exc.error_code.value}: {exc.message}", path=request.url.path)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "code": exc.error_code.value, "details": exc.details},
    )

# --- Root Endpoint ---
@app.get("/")
async def root():
    return {
        "message": "Places Relay API",
        "status": "running",
        "endpoints": {
            "health": "/health",
            "search": "/search?query=your_search",
            "all_categories": "/search?query=your_location&type=all",
            "place_details": "/place-details?place_id=PLACE_ID",
            "docs": "/docs"
        },
        "version": "1.0.0"
    }

# --- Health Check ---
@app.get("/health")
async def health_check():
    return {"status": "ok", "service": "Places Relay"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("places_relay.main:app", host=settings.HOST, port=settings.PORT, reload=True)
