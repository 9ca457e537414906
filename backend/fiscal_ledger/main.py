import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fiscal_ledger.core.config import settings
from fiscal_ledger.api.routes.auth import router as auth_router
from fiscal_ledger.api.routes.users import router as users_router
from fiscal_ledger.api.routes.members import router as members_router
from fiscal_ledger.api.routes.calendar import router as calendar_router
from fiscal_ledger.api.routes.fiscal_years import router as fiscal_years_router
from fiscal_ledger.api.routes.savings import router as savings_router
from fiscal_ledger.api.routes.loans import router as loans_router
from fiscal_ledger.api.routes.group import router as group_router
from fiscal_ledger.api.routes.settings import router as settings_router
from fiscal_ledger.api.routes.dashboard import router as dashboard_router
from fiscal_ledger.api.routes.audit import router as audit_router

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

app = FastAPI(title="Fiscal Ledger API")

origins = [o.strip() for o in (settings.cors_origins or "").split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/health")
@app.get("/api/health")
def health():
    return {"status": "ok"}

app.include_router(auth_router)
app.include_router(users_router)
app.include_router(members_router)
app.include_router(calendar_router)
app.include_router(fiscal_years_router)
app.include_router(savings_router)
app.include_router(loans_router)
app.include_router(group_router)
app.include_router(settings_router)
app.include_router(dashboard_router)
app.include_router(audit_router)
