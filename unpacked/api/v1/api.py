from fastapi import APIRouter

from unpacked.api.v1.routes_auth import router as auth_router
from unpacked.api.v1.routes_outfits import router as outfits_router
from unpacked.api.v1.routes_share import router as share_router
from unpacked.api.v1.routes_upload import router as upload_router


api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(outfits_router, tags=["outfits"])
api_router.include_router(share_router, prefix="/share", tags=["share"])
api_router.include_router(upload_router)
