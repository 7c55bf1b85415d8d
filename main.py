from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from auth.routes import auth
from common.config import HOST, PORT
from common.database import init_db
from common.logging_config import configure_logging
from event.routes import event
from organizer.routes import organizer
from tickets.routes import ticket
from tiers.routes import event_tiers, tier

log = configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    log.info("EventChain API started")
    yield


app = FastAPI(title="EventChain API", lifespan=lifespan)
app.include_router(auth, prefix="/auth", tags=["auth"])
app.include_router(event, prefix="/events", tags=["events"])
app.include_router(event_tiers, prefix="/events", tags=["tiers"])
app.include_router(tier, prefix="/tiers", tags=["tiers"])
app.include_router(ticket, prefix="/tickets", tags=["tickets"])
app.include_router(organizer, prefix="/organizer", tags=["organizer"])


@app.get("/")
async def root():
    return {"message": "EventChain API"}


if __name__ == "__main__":
    uvicorn.run("main:app", host=HOST, port=PORT, reload=True)
