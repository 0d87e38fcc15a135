# app/main.py
#run it with uvicorn app.main:app --reload, or the contact-relay script
from fastapi import FastAPI, Request
import logging
import uvicorn

from app.core.mailer import MailConfig, MailDispatcher
from app.core.settings import settings
from app.routers.contact import router as contact_router
from app.routers.health import router as health_router

log = logging.getLogger("uvicorn.error")

app = FastAPI(title=settings.api_title)

# Mail transport is configured once per process
mail_config = MailConfig.from_settings(settings)
app.state.dispatcher = MailDispatcher(mail_config)

log.info(f"[main] relaying contact form to {len(mail_config.recipients)} recipient(s) via {mail_config.host}:{mail_config.port}")

@app.middleware("http")
async def cross_origin(request: Request, call_next):
    response = await call_next(request)
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Headers"] = "X-Requested-With"
    return response

# Routers
app.include_router(contact_router)
app.include_router(health_router)

def run():
    uvicorn.run(app, host=settings.host, port=settings.port)

if __name__ == "__main__":
    run()
