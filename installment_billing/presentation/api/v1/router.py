from fastapi import APIRouter

from .plans import plan_router
from .payments import payment_router
from .reminders import reminder_router
from .reports import report_router
from .currency import currency_router

router = APIRouter()

router.include_router(plan_router, tags=["Plans"])
router.include_router(payment_router, tags=["Payments"])
router.include_router(reminder_router, tags=["Reminders"])
router.include_router(report_router, tags=["Reports"])
router.include_router(currency_router, tags=["Currency"])
