"""
Frequency Tracker Analytics Service
FastAPI application that scores how due each recurring activity is

Run with: uvicorn main:app --reload --port 8000
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import get_settings
from logger import configure_logging, get_logger

settings = get_settings()
configure_logging(settings.log_level, settings.log_format)

# Import routers
from routers import recommendations_router, analytics_router  # noqa: E402

logger = get_logger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Frequency Tracker Analytics",
    description="""
    ## Recurring Activity Scoring

    ### Recommendations
    - **Status**: How far each activity type is from its desired frequency
    - **Rolling Averages**: Mean spacing over the last 3 and last 10 activities
    - **Trend**: Whether recent spacing is tightening or slipping
    - **Daily Digest**: Notification text for what is due today and tomorrow

    ### Analytics
    - **Lifetime Average**: Mean spacing over the whole history
    - **Longest Streak**: Longest window that met the desired frequency

    Desired frequencies can vary by season, and off-time periods
    (vacations, injuries) are excluded from analytics.
    """,
    version="1.0.0",
    docs_url="/docs",  # Swagger UI
    redoc_url="/redoc"  # ReDoc alternative
)

# Configure CORS for the web frontend and the Node API
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Health check endpoint
@app.get("/health", tags=["Health"])
async def health_check():
    """Check if the analytics service is running"""
    return {
        "status": "healthy",
        "service": "frequency-tracker-analytics",
        "version": "1.0.0"
    }


# Include routers
app.include_router(recommendations_router)
app.include_router(analytics_router)


# Root endpoint with service info
@app.get("/", tags=["Info"])
async def root():
    """Service information and available endpoints"""
    return {
        "service": "Frequency Tracker Analytics",
        "version": "1.0.0",
        "documentation": "/docs",
        "endpoints": {
            "recommendations": {
                "ranked": "GET /recommendations?user_id={user_id}",
                "digest": "GET /recommendations/digest?user_id={user_id}"
            },
            "analytics": {
                "summary": "GET /analytics?user_id={user_id}"
            }
        }
    }


logger.info("app.configured", default_timezone=settings.default_timezone)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=settings.port, reload=True)
