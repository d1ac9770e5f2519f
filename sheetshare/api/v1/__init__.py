from fastapi import APIRouter

from .agent import router as agent_sheets_router
from .api_keys import router as api_keys_router
from .cells import admin_router as admin_cells_router
from .cells import agent_router as agent_cells_router
from .external import router as external_router
from .fields import router as fields_router
from .preferences import router as preferences_router
from .profile import router as profile_router
from .profile import username_router as check_username_router
from .shares import router as shares_router
from .sheets import router as sheets_router
from .users import router as users_router

v1_router = APIRouter(prefix="/v1")

v1_router.include_router(sheets_router, prefix="/admin/sheets")
v1_router.include_router(fields_router, prefix="/admin/fields")
v1_router.include_router(admin_cells_router, prefix="/admin/cells")
v1_router.include_router(shares_router, prefix="/admin/shares")
v1_router.include_router(users_router, prefix="/admin/users")
v1_router.include_router(api_keys_router, prefix="/admin/apikey")
v1_router.include_router(preferences_router, prefix="/admin/view-preference")
v1_router.include_router(agent_sheets_router, prefix="/agent/sheets")
v1_router.include_router(agent_cells_router, prefix="/agent/cells")
v1_router.include_router(profile_router, prefix="/agent/profile")
v1_router.include_router(check_username_router, prefix="/check-username")
v1_router.include_router(external_router, prefix="/sharecells")
