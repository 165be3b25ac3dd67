# -*- coding: utf-8 -*-
from fastapi import APIRouter

from .config import router as config_router
from .models import router as models_router

router = APIRouter(prefix="/api")
router.include_router(config_router)
router.include_router(models_router)

__all__ = ["router"]
