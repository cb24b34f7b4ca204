from fastapi import APIRouter

from .channels import router as channels_router


router = APIRouter()
router.include_router(channels_router)
